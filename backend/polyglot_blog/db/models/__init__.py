from __future__ import annotations

from types import ModuleType

from sqlalchemy import MetaData

from . import pattern1, pattern2, pattern3

_MODULES: dict[str, ModuleType] = {
    "pattern1": pattern1,
    "pattern2": pattern2,
    "pattern3": pattern3,
}


def models_for(pattern: str) -> ModuleType:
    mod = _MODULES.get(pattern)
    if mod is None:
        raise ValueError(f"Unknown translation pattern: {pattern}")
    return mod


def metadata_for(pattern: str) -> MetaData:
    return models_for(pattern).Base.metadata
