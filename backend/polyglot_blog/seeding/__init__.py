from __future__ import annotations

from .factories import ArticleFactory, CategoryFactory
from .generator import MassDataConfig, MassDataGenerator
from .presets import PRESET_NAMES, preset_config

__all__ = [
    "ArticleFactory",
    "CategoryFactory",
    "MassDataConfig",
    "MassDataGenerator",
    "PRESET_NAMES",
    "preset_config",
]
