from __future__ import annotations

from .article_service import ArticleService
from .category_service import CategoryService
from .slugs import generate_slug

__all__ = ["ArticleService", "CategoryService", "generate_slug"]
