from __future__ import annotations

from ...db.models.pattern1 import Category, CategoryTranslation
from ..base_repository import CategoryRepository
from .storage import DedicatedTableTranslations


class Pattern1CategoryRepository(DedicatedTableTranslations, CategoryRepository):
    model = Category
    translation_model = CategoryTranslation
    owner_key = "category_id"
    required_translation_fields = ("name",)
