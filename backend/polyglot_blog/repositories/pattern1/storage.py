from __future__ import annotations

from typing import Any, ClassVar, Sequence

from sqlalchemy import delete, select

from ...i18n import from_storage_locale, to_storage_locale

FieldMap = dict[str, str]


class DedicatedTableTranslations:
    """
    Storage hooks for pattern 1: one translation row per (entity, locale) in a
    table dedicated to that entity, with one column per translatable field.
    """

    translation_model: ClassVar[type]
    # FK column on the translation model pointing at the main row
    owner_key: ClassVar[str]
    # columns that are NOT NULL on the translation table
    required_translation_fields: ClassVar[tuple[str, ...]] = ()

    translatable_fields: ClassVar[tuple[str, ...]]
    session: Any

    def _owner_col(self):  # type: ignore[no-untyped-def]
        return getattr(self.translation_model, self.owner_key)

    def _load_translations(self, rows: Sequence[Any], locale: str) -> dict[int, FieldMap]:
        ids = [r.id for r in rows]
        if not ids:
            return {}
        stmt = select(self.translation_model).where(
            self._owner_col().in_(ids),
            self.translation_model.locale == to_storage_locale(locale),
        )
        out: dict[int, FieldMap] = {}
        for t in self.session.scalars(stmt).all():
            out[getattr(t, self.owner_key)] = {
                f: getattr(t, f) for f in self.translatable_fields if getattr(t, f)
            }
        return out

    def _upsert_translation(self, row: Any, locale: str, fields: FieldMap) -> None:
        code = to_storage_locale(locale)
        existing = self.session.scalars(
            select(self.translation_model).where(
                self._owner_col() == row.id,
                self.translation_model.locale == code,
            )
        ).first()
        if existing is None:
            values: dict[str, Any] = {f: "" for f in self.required_translation_fields}
            values.update(fields)
            self.session.add(self.translation_model(**{self.owner_key: row.id, "locale": code, **values}))
            return
        for f, v in fields.items():
            setattr(existing, f, v)

    def _remove_translations(self, row: Any, locale: str | None) -> int:
        stmt = delete(self.translation_model).where(self._owner_col() == row.id)
        if locale is not None:
            stmt = stmt.where(self.translation_model.locale == to_storage_locale(locale))
        res = self.session.execute(stmt)
        return int(res.rowcount or 0)

    def _stored_locales(self, row: Any) -> list[str]:
        codes = self.session.scalars(
            select(self.translation_model.locale).where(self._owner_col() == row.id)
        ).all()
        return [from_storage_locale(c) for c in codes]
