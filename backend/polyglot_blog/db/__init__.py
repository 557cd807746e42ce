from __future__ import annotations

from .engine import Database, build_engine
from .errors import DbConflict, DbError, DbNotFound, DbUnavailable, DbValidation

__all__ = [
    "Database",
    "DbConflict",
    "DbError",
    "DbNotFound",
    "DbUnavailable",
    "DbValidation",
    "build_engine",
]
