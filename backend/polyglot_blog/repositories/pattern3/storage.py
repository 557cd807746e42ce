from __future__ import annotations

from typing import Any, ClassVar, Sequence

FieldMap = dict[str, str]


def _translation_column(field: str) -> str:
    return f"{field}_translations"


class JsonColumnTranslations:
    """
    Storage hooks for pattern 3: each translatable field has a sibling JSON
    column on the main row mapping public locale codes to text,
    e.g. `title_translations = {"en": "...", "zh-CN": "..."}`.
    """

    translatable_fields: ClassVar[tuple[str, ...]]

    def _translation_map(self, row: Any, field: str) -> dict[str, str]:
        raw = getattr(row, _translation_column(field), None)
        return dict(raw) if isinstance(raw, dict) else {}

    def _load_translations(self, rows: Sequence[Any], locale: str) -> dict[int, FieldMap]:
        out: dict[int, FieldMap] = {}
        for r in rows:
            fields: FieldMap = {}
            for f in self.translatable_fields:
                v = self._translation_map(r, f).get(locale)
                if v:
                    fields[f] = v
            if fields:
                out[r.id] = fields
        return out

    def _upsert_translation(self, row: Any, locale: str, fields: FieldMap) -> None:
        for f, v in fields.items():
            m = self._translation_map(row, f)
            m[locale] = v
            # Assign a new dict so the ORM sees the JSON column as changed.
            setattr(row, _translation_column(f), m)

    def _remove_translations(self, row: Any, locale: str | None) -> int:
        # Translations live on the row itself; deleting the row removes them.
        if locale is None:
            return 0
        removed = 0
        for f in self.translatable_fields:
            m = self._translation_map(row, f)
            if locale in m:
                m.pop(locale)
                removed += 1
                setattr(row, _translation_column(f), m)
        return removed

    def _stored_locales(self, row: Any) -> list[str]:
        seen: list[str] = []
        for f in self.translatable_fields:
            for loc, v in self._translation_map(row, f).items():
                if v and loc not in seen:
                    seen.append(loc)
        return seen
