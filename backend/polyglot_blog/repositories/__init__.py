from __future__ import annotations

from .base_repository import ArticleRepository, CategoryRepository, Repository
from .factory import (
    PATTERN_DESCRIPTIONS,
    create_article_repository,
    create_category_repository,
    describe_pattern,
)
from .views import ArticleData, CategoryData

__all__ = [
    "ArticleData",
    "ArticleRepository",
    "CategoryData",
    "CategoryRepository",
    "PATTERN_DESCRIPTIONS",
    "Repository",
    "create_article_repository",
    "create_category_repository",
    "describe_pattern",
]
