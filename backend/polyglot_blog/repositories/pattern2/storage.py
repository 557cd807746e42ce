from __future__ import annotations

from typing import Any, ClassVar, Sequence

from sqlalchemy import delete, select

from ...db.models.pattern2 import Translation
from ...i18n import from_storage_locale, to_storage_locale

FieldMap = dict[str, str]


class UnifiedTableTranslations:
    """
    Storage hooks for pattern 2: every translated field of every entity is a
    row in the shared `translations` table, addressed by
    (entity_type, entity_id, locale, field_name).
    """

    entity_type: ClassVar[str]

    translatable_fields: ClassVar[tuple[str, ...]]
    session: Any

    def _entity_filter(self, entity_ids: Sequence[int]) -> list[Any]:
        return [Translation.entity_type == self.entity_type, Translation.entity_id.in_(list(entity_ids))]

    def _load_translations(self, rows: Sequence[Any], locale: str) -> dict[int, FieldMap]:
        ids = [r.id for r in rows]
        if not ids:
            return {}
        stmt = select(Translation).where(
            *self._entity_filter(ids),
            Translation.locale == to_storage_locale(locale),
            Translation.field_name.in_(self.translatable_fields),
        )
        out: dict[int, FieldMap] = {}
        for t in self.session.scalars(stmt).all():
            if t.field_value:
                out.setdefault(t.entity_id, {})[t.field_name] = t.field_value
        return out

    def _upsert_translation(self, row: Any, locale: str, fields: FieldMap) -> None:
        code = to_storage_locale(locale)
        existing = {
            t.field_name: t
            for t in self.session.scalars(
                select(Translation).where(
                    *self._entity_filter([row.id]),
                    Translation.locale == code,
                    Translation.field_name.in_(list(fields)),
                )
            ).all()
        }
        for name, value in fields.items():
            t = existing.get(name)
            if t is None:
                self.session.add(
                    Translation(
                        entity_type=self.entity_type,
                        entity_id=row.id,
                        locale=code,
                        field_name=name,
                        field_value=value,
                    )
                )
            else:
                t.field_value = value

    def _remove_translations(self, row: Any, locale: str | None) -> int:
        # No FK from translations to the owner, so removal is always explicit.
        stmt = delete(Translation).where(*self._entity_filter([row.id]))
        if locale is not None:
            stmt = stmt.where(Translation.locale == to_storage_locale(locale))
        res = self.session.execute(stmt)
        return int(res.rowcount or 0)

    def _stored_locales(self, row: Any) -> list[str]:
        codes = self.session.scalars(
            select(Translation.locale).where(*self._entity_filter([row.id])).distinct()
        ).all()
        return [from_storage_locale(c) for c in codes]
