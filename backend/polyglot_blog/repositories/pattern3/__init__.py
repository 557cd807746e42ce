from __future__ import annotations

from .article_repo import Pattern3ArticleRepository
from .category_repo import Pattern3CategoryRepository

__all__ = ["Pattern3ArticleRepository", "Pattern3CategoryRepository"]
