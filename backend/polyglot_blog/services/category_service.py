from __future__ import annotations

from typing import Any

from ..db.errors import DbConflict, DbNotFound, DbValidation
from ..db.pagination import PaginationParams, PaginationResult
from ..i18n import BASE_LOCALE
from ..observability.logging import get_logger
from ..repositories import CategoryData, CategoryRepository
from .slugs import generate_slug, with_timestamp_suffix

log = get_logger("category_service")

_UNSET = object()


def _not_found(id: int) -> DbNotFound:
    return DbNotFound(message="Category not found", operation="get", entity="category", key={"id": id})


class CategoryService:
    def __init__(self, repo: CategoryRepository):
        self.repo = repo

    def get_categories(
        self, locale: str, params: PaginationParams | None = None, *, parent_id: Any = _UNSET
    ) -> PaginationResult[CategoryData]:
        # parent_id=None lists root categories; leaving it unset lists all.
        filters = None if parent_id is _UNSET else {"parent_id": parent_id}
        return self.repo.find_many(locale, params, filters=filters)

    def get_category_by_id(self, id: int, locale: str) -> CategoryData | None:
        return self.repo.find_by_id(id, locale)

    def get_category_by_slug(self, slug: str, locale: str) -> CategoryData | None:
        return self.repo.find_by_slug(slug, locale)

    def _check_parent(self, parent_id: Any, *, self_id: int | None, operation: str) -> None:
        if parent_id is None:
            return
        if self_id is not None and int(parent_id) == self_id:
            raise DbValidation(
                message="A category cannot be its own parent", operation=operation, entity="category"
            )
        parent = self.repo.find_by_id(int(parent_id), BASE_LOCALE)
        if parent is None:
            raise DbValidation(
                message="Parent category does not exist",
                operation=operation,
                entity="category",
                key={"parentId": parent_id},
            )
        if self_id is None:
            return
        # The new parent must not sit below this category.
        seen: set[int] = set()
        node = parent
        while node.parent_id is not None and node.parent_id not in seen:
            if node.parent_id == self_id:
                raise DbValidation(
                    message="A category cannot be moved under its own descendant",
                    operation=operation,
                    entity="category",
                    key={"parentId": parent_id},
                )
            seen.add(node.parent_id)
            node = self.repo.find_by_id(node.parent_id, BASE_LOCALE)
            if node is None:
                break

    def create_category(self, data: dict[str, Any], locale: str = BASE_LOCALE) -> CategoryData:
        name = str(data.get("name") or "").strip()
        if not name:
            raise DbValidation(message="Name is required", operation="create", entity="category")
        self._check_parent(data.get("parent_id"), self_id=None, operation="create")

        doc = dict(data)
        slug = str(doc.get("slug") or "").strip() or generate_slug(name, fallback="category")
        if self.repo.find_by_slug(slug, BASE_LOCALE) is not None:
            slug = with_timestamp_suffix(slug)
        doc["slug"] = slug

        category = self.repo.create(doc, locale)
        log.info("category_created", category_id=category.id, slug=category.slug)
        return category

    def update_category(self, id: int, data: dict[str, Any], locale: str = BASE_LOCALE) -> CategoryData:
        existing = self.repo.find_by_id(id, BASE_LOCALE)
        if existing is None:
            raise _not_found(id)
        if "parent_id" in data:
            self._check_parent(data.get("parent_id"), self_id=id, operation="update")

        new_slug = str(data.get("slug") or "").strip()
        if new_slug and new_slug != existing.slug:
            other = self.repo.find_by_slug(new_slug, BASE_LOCALE)
            if other is not None and other.id != id:
                raise DbConflict(
                    message="Slug already exists", operation="update", entity="category", key={"slug": new_slug}
                )

        return self.repo.update(id, dict(data), locale)

    def delete_category(self, id: int) -> None:
        if self.repo.find_by_id(id, BASE_LOCALE) is None:
            raise _not_found(id)
        self.repo.delete(id)
        log.info("category_deleted", category_id=id)

    def save_translation(self, id: int, locale: str, fields: dict[str, Any]) -> CategoryData:
        return self.repo.save_translation(id, locale, fields)

    def remove_translation(self, id: int, locale: str) -> int:
        removed = self.repo.delete_translation(id, locale)
        log.info("category_translation_removed", category_id=id, target_locale=locale, removed=removed)
        return removed

    def get_available_locales(self, id: int) -> list[str]:
        return self.repo.available_locales(id)
