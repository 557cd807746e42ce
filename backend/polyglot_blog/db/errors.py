from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class DbError(Exception):
    """Base error for relational storage operations.

    These are intended to be caught by a FastAPI exception handler and rendered
    into failure envelopes.
    """

    message: str
    operation: str | None = None
    entity: str | None = None
    key: dict[str, Any] | None = None
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class DbNotFound(DbError):
    pass


@dataclass(slots=True)
class DbConflict(DbError):
    pass


@dataclass(slots=True)
class DbValidation(DbError):
    pass


@dataclass(slots=True)
class DbUnavailable(DbError):
    pass
