from __future__ import annotations

from ...db.models.pattern3 import Article
from ..base_repository import ArticleRepository
from .storage import JsonColumnTranslations


class Pattern3ArticleRepository(JsonColumnTranslations, ArticleRepository):
    model = Article
