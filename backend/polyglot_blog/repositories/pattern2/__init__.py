from __future__ import annotations

from .article_repo import Pattern2ArticleRepository
from .category_repo import Pattern2CategoryRepository

__all__ = ["Pattern2ArticleRepository", "Pattern2CategoryRepository"]
