from __future__ import annotations

from ...db.models.pattern3 import Category
from ..base_repository import CategoryRepository
from .storage import JsonColumnTranslations


class Pattern3CategoryRepository(JsonColumnTranslations, CategoryRepository):
    model = Category
