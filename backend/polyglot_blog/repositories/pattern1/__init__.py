from __future__ import annotations

from .article_repo import Pattern1ArticleRepository
from .category_repo import Pattern1CategoryRepository

__all__ = ["Pattern1ArticleRepository", "Pattern1CategoryRepository"]
