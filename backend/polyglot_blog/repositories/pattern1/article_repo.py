from __future__ import annotations

from ...db.models.pattern1 import Article, ArticleTranslation
from ..base_repository import ArticleRepository
from .storage import DedicatedTableTranslations


class Pattern1ArticleRepository(DedicatedTableTranslations, ArticleRepository):
    model = Article
    translation_model = ArticleTranslation
    owner_key = "article_id"
    required_translation_fields = ("title", "content")
