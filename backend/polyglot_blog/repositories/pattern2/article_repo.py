from __future__ import annotations

from ...db.models.pattern2 import ENTITY_ARTICLE, Article
from ..base_repository import ArticleRepository
from .storage import UnifiedTableTranslations


class Pattern2ArticleRepository(UnifiedTableTranslations, ArticleRepository):
    model = Article
    entity_type = ENTITY_ARTICLE
