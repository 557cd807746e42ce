"""
Base repository interfaces.

Every translation pattern implements the same contract; only the storage
hooks (`_load_translations`, `_upsert_translation`, `_remove_translations`,
`_stored_locales`) differ between patterns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db.errors import DbConflict, DbNotFound, DbValidation
from ..db.pagination import PaginationParams, PaginationResult
from ..i18n import BASE_LOCALE, SUPPORTED_LOCALES, is_base_locale, parse_locale
from .views import ArticleData, CategoryData

V = TypeVar("V")

# translations for one entity in one locale: field name -> value
FieldMap = dict[str, str]


def _clean_text(v: Any) -> str | None:
    if v is None:
        return None
    s = str(v)
    return s if s.strip() else None


class Repository(ABC, Generic[V]):
    """Base repository interface."""

    @abstractmethod
    def find_many(self, locale: str, params: PaginationParams | None = None) -> PaginationResult[V]:
        """List entities in a locale, paginated."""

    @abstractmethod
    def find_by_id(self, id: int, locale: str) -> V | None:
        """Get an entity by ID."""

    @abstractmethod
    def find_by_slug(self, slug: str, locale: str) -> V | None:
        """Get an entity by its unique slug."""

    @abstractmethod
    def create(self, data: dict[str, Any], locale: str = BASE_LOCALE) -> V:
        """Create a new entity."""

    @abstractmethod
    def update(self, id: int, data: dict[str, Any], locale: str = BASE_LOCALE) -> V:
        """Update an existing entity (or its translation)."""

    @abstractmethod
    def delete(self, id: int) -> None:
        """Delete an entity and its translations."""


class TranslatableRepository(Repository[V]):
    model: ClassVar[type]
    entity_name: ClassVar[str]
    translatable_fields: ClassVar[tuple[str, ...]]
    main_fields: ClassVar[tuple[str, ...]]
    # API sort key -> column attribute name
    sortable: ClassVar[dict[str, str]]
    default_sort: ClassVar[tuple[str, str]]

    def __init__(self, session: Session):
        self.session = session

    # ---- storage hooks (one implementation per pattern) ----

    @abstractmethod
    def _load_translations(self, rows: Sequence[Any], locale: str) -> dict[int, FieldMap]:
        """Translated field values for `rows` in `locale`, keyed by row id."""

    @abstractmethod
    def _upsert_translation(self, row: Any, locale: str, fields: FieldMap) -> None:
        """Insert or update the given translated fields of one row."""

    @abstractmethod
    def _remove_translations(self, row: Any, locale: str | None) -> int:
        """Drop one locale (or every locale when None); returns fields/rows removed."""

    @abstractmethod
    def _stored_locales(self, row: Any) -> list[str]:
        """Public locale codes that have at least one stored translation."""

    @abstractmethod
    def _to_view(self, row: Any, locale: str, values: dict[str, Any]) -> V:
        """Build the localized view from a row and its resolved translatable values."""

    # ---- shared behaviour ----

    def _base_query(self) -> Select:
        return select(self.model)

    def _count_query(self) -> Select:
        return select(func.count()).select_from(self.model)

    def _order_by(self, stmt: Select, params: PaginationParams) -> Select:
        key, default_order = self.default_sort
        if params.sort_by:
            attr = self.sortable.get(params.sort_by)
            if attr is None and params.sort_by in self.sortable.values():
                attr = params.sort_by
            if attr is None:
                raise DbValidation(
                    message=f"Cannot sort {self.entity_name}s by '{params.sort_by}'",
                    operation="find_many",
                    entity=self.entity_name,
                )
            order = params.sort_order
        else:
            attr, order = key, default_order
        col = getattr(self.model, attr)
        tiebreak = self.model.id
        if order == "asc":
            return stmt.order_by(col.asc(), tiebreak.asc())
        return stmt.order_by(col.desc(), tiebreak.desc())

    def _localize(self, row: Any, locale: str, translations: dict[int, FieldMap]) -> V:
        values = {f: getattr(row, f) for f in self.translatable_fields}
        if not is_base_locale(locale):
            translated = translations.get(row.id) or {}
            for f in self.translatable_fields:
                # Empty translations fall back to the base-language value.
                t = translated.get(f)
                if t:
                    values[f] = t
        return self._to_view(row, locale, values)

    def _localize_rows(self, rows: Sequence[Any], locale: str) -> list[V]:
        locale = self._coerce_locale(locale or BASE_LOCALE, "localize")
        translations = {} if is_base_locale(locale) else self._load_translations(rows, locale)
        return [self._localize(r, locale, translations) for r in rows]

    def _flush(self, operation: str, key: dict[str, Any] | None = None) -> None:
        try:
            self.session.flush()
        except IntegrityError as e:
            raise DbConflict(
                message=f"{self.entity_name.capitalize()} violates a uniqueness or reference constraint",
                operation=operation,
                entity=self.entity_name,
                key=key,
                cause=e,
            ) from e

    def _get_row(self, id: int) -> Any | None:
        return self.session.get(self.model, id)

    def _require_row(self, id: int, operation: str) -> Any:
        row = self._get_row(id)
        if row is None:
            raise DbNotFound(
                message=f"{self.entity_name.capitalize()} not found",
                operation=operation,
                entity=self.entity_name,
                key={"id": id},
            )
        return row

    def _coerce_locale(self, raw: Any, operation: str) -> str:
        try:
            return parse_locale(raw)
        except ValueError as e:
            raise DbValidation(
                message=str(e), operation=operation, entity=self.entity_name, cause=e
            ) from e

    def _filters(self, filters: dict[str, Any] | None) -> list[Any]:
        return []

    def find_many(
        self,
        locale: str,
        params: PaginationParams | None = None,
        filters: dict[str, Any] | None = None,
    ) -> PaginationResult[V]:
        params = params or PaginationParams()
        conds = self._filters(filters)

        stmt = self._order_by(self._base_query().where(*conds), params)
        stmt = stmt.offset(params.offset).limit(params.limit)
        rows = self.session.scalars(stmt).all()
        total = int(self.session.scalar(self._count_query().where(*conds)) or 0)

        return PaginationResult(
            data=self._localize_rows(rows, locale),
            total=total,
            page=params.page,
            limit=params.limit,
        )

    def find_by_id(self, id: int, locale: str) -> V | None:
        row = self._get_row(id)
        if row is None:
            return None
        return self._localize_rows([row], locale)[0]

    def find_by_slug(self, slug: str, locale: str) -> V | None:
        row = self.session.scalars(select(self.model).where(self.model.slug == slug)).first()
        if row is None:
            return None
        return self._localize_rows([row], locale)[0]

    def _split_fields(self, data: dict[str, Any]) -> tuple[dict[str, Any], FieldMap]:
        main = {k: data[k] for k in self.main_fields if k in data and k not in self.translatable_fields}
        translated: FieldMap = {}
        for f in self.translatable_fields:
            v = _clean_text(data.get(f))
            if v is not None:
                translated[f] = v
        return main, translated

    def create(self, data: dict[str, Any], locale: str = BASE_LOCALE) -> V:
        values = {k: data[k] for k in self.main_fields if k in data and data[k] is not None}
        row = self.model(**values)
        self.session.add(row)
        self._flush("create", key={"slug": data.get("slug")})

        for raw_locale, fields in (data.get("translations") or {}).items():
            loc = self._coerce_locale(raw_locale, "create")
            if is_base_locale(loc):
                continue
            _, cleaned = self._split_fields(dict(fields or {}))
            if cleaned:
                self._upsert_translation(row, loc, cleaned)
        self._flush("create_translations", key={"id": row.id})

        return self._localize_rows([row], locale or BASE_LOCALE)[0]

    def update(self, id: int, data: dict[str, Any], locale: str = BASE_LOCALE) -> V:
        locale = self._coerce_locale(locale or BASE_LOCALE, "update")
        row = self._require_row(id, "update")
        main, translated = self._split_fields(data)

        if is_base_locale(locale):
            for f in self.translatable_fields:
                if f in data and (data[f] is not None or f not in self.required_fields()):
                    setattr(row, f, data[f])
        elif translated:
            self._upsert_translation(row, locale, translated)

        for k, v in main.items():
            if v is None and k in self.required_fields():
                continue
            setattr(row, k, v)

        self._flush("update", key={"id": id})
        return self._localize_rows([row], locale)[0]

    def delete(self, id: int) -> None:
        row = self._require_row(id, "delete")
        self._remove_translations(row, None)
        self.session.delete(row)
        self._flush("delete", key={"id": id})

    def save_translation(self, id: int, locale: str, fields: dict[str, Any]) -> V:
        loc = self._coerce_locale(locale, "save_translation")
        if is_base_locale(loc):
            raise DbValidation(
                message="The base locale is stored on the main row; update it instead",
                operation="save_translation",
                entity=self.entity_name,
            )
        row = self._require_row(id, "save_translation")
        _, cleaned = self._split_fields(fields)
        if cleaned:
            self._upsert_translation(row, loc, cleaned)
            self._flush("save_translation", key={"id": id, "locale": loc})
        return self._localize_rows([row], loc)[0]

    def delete_translation(self, id: int, locale: str) -> int:
        loc = self._coerce_locale(locale, "delete_translation")
        if is_base_locale(loc):
            raise DbValidation(
                message="The base locale cannot be removed",
                operation="delete_translation",
                entity=self.entity_name,
            )
        row = self._require_row(id, "delete_translation")
        removed = self._remove_translations(row, loc)
        self._flush("delete_translation", key={"id": id, "locale": loc})
        return removed

    def available_locales(self, id: int) -> list[str]:
        row = self._require_row(id, "available_locales")
        stored = set(self._stored_locales(row))
        return [loc for loc in SUPPORTED_LOCALES if loc == BASE_LOCALE or loc in stored]

    @classmethod
    def required_fields(cls) -> tuple[str, ...]:
        return ()


class ArticleRepository(TranslatableRepository[ArticleData]):
    entity_name = "article"
    translatable_fields = ("title", "content", "summary")
    main_fields = (
        "title",
        "content",
        "summary",
        "slug",
        "category_id",
        "published",
        "published_at",
        "view_count",
    )
    sortable = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "publishedAt": "published_at",
        "viewCount": "view_count",
        "title": "title",
        "id": "id",
    }
    default_sort = ("created_at", "desc")

    @classmethod
    def required_fields(cls) -> tuple[str, ...]:
        return ("title", "content", "slug", "category_id", "published", "view_count")

    def _filters(self, filters: dict[str, Any] | None) -> list[Any]:
        conds: list[Any] = [self.model.published.is_(True)]
        category_id = (filters or {}).get("category_id")
        if category_id is not None:
            conds.append(self.model.category_id == int(category_id))
        return conds

    def increment_view_count(self, id: int) -> None:
        self.session.execute(
            update(self.model).where(self.model.id == id).values(view_count=self.model.view_count + 1)
        )

    def _to_view(self, row: Any, locale: str, values: dict[str, Any]) -> ArticleData:
        return ArticleData(
            id=row.id,
            title=values["title"],
            content=values["content"],
            summary=values["summary"],
            slug=row.slug,
            category_id=row.category_id,
            published=bool(row.published),
            published_at=row.published_at,
            view_count=int(row.view_count or 0),
            locale=locale,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class CategoryRepository(TranslatableRepository[CategoryData]):
    entity_name = "category"
    translatable_fields = ("name", "description")
    main_fields = ("name", "description", "slug", "parent_id", "display_order")
    sortable = {
        "displayOrder": "display_order",
        "name": "name",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "id": "id",
    }
    default_sort = ("display_order", "asc")

    @classmethod
    def required_fields(cls) -> tuple[str, ...]:
        return ("name", "slug", "display_order")

    def _filters(self, filters: dict[str, Any] | None) -> list[Any]:
        f = filters or {}
        if "parent_id" not in f:
            return []
        parent_id = f.get("parent_id")
        if parent_id is None:
            return [self.model.parent_id.is_(None)]
        return [self.model.parent_id == int(parent_id)]

    def _to_view(self, row: Any, locale: str, values: dict[str, Any]) -> CategoryData:
        return CategoryData(
            id=row.id,
            name=values["name"],
            description=values["description"],
            slug=row.slug,
            parent_id=row.parent_id,
            display_order=int(row.display_order or 0),
            locale=locale,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
