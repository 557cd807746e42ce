from __future__ import annotations

from ...db.models.pattern2 import ENTITY_CATEGORY, Category
from ..base_repository import CategoryRepository
from .storage import UnifiedTableTranslations


class Pattern2CategoryRepository(UnifiedTableTranslations, CategoryRepository):
    model = Category
    entity_type = ENTITY_CATEGORY
