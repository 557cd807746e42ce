from __future__ import annotations

from sqlalchemy.orm import Session

from .base_repository import ArticleRepository, CategoryRepository
from .pattern1 import Pattern1ArticleRepository, Pattern1CategoryRepository
from .pattern2 import Pattern2ArticleRepository, Pattern2CategoryRepository
from .pattern3 import Pattern3ArticleRepository, Pattern3CategoryRepository

PATTERN_DESCRIPTIONS: dict[str, str] = {
    "pattern1": "Main + Dedicated Translation Tables",
    "pattern2": "Unified Translation Table",
    "pattern3": "JSON Column Management",
}

_ARTICLE_REPOS: dict[str, type[ArticleRepository]] = {
    "pattern1": Pattern1ArticleRepository,
    "pattern2": Pattern2ArticleRepository,
    "pattern3": Pattern3ArticleRepository,
}

_CATEGORY_REPOS: dict[str, type[CategoryRepository]] = {
    "pattern1": Pattern1CategoryRepository,
    "pattern2": Pattern2CategoryRepository,
    "pattern3": Pattern3CategoryRepository,
}


def describe_pattern(pattern: str) -> str:
    return PATTERN_DESCRIPTIONS.get(pattern, "Unknown Pattern")


def create_article_repository(pattern: str, session: Session) -> ArticleRepository:
    cls = _ARTICLE_REPOS.get(pattern)
    if cls is None:
        raise ValueError(f"Unknown translation pattern: {pattern}")
    return cls(session)


def create_category_repository(pattern: str, session: Session) -> CategoryRepository:
    cls = _CATEGORY_REPOS.get(pattern)
    if cls is None:
        raise ValueError(f"Unknown translation pattern: {pattern}")
    return cls(session)
