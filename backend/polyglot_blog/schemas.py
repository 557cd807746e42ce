"""Request bodies. Clients send camelCase; snake_case is accepted too."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Referenced rows are positive 64-bit integers.
RowId = Annotated[int, Field(ge=1, le=2**63 - 1)]


class _Body(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_fields(self) -> dict[str, Any]:
        # Only what the client actually sent, so PUT stays a partial update.
        return self.model_dump(exclude_unset=True, by_alias=False)


class ArticleTranslationFields(_Body):
    title: str | None = None
    content: str | None = None
    summary: str | None = None


class CategoryTranslationFields(_Body):
    name: str | None = None
    description: str | None = None


class ArticleCreate(_Body):
    title: str | None = None
    content: str | None = None
    summary: str | None = None
    slug: str | None = None
    category_id: RowId | None = None
    published: bool = False
    published_at: datetime | None = None
    view_count: int = Field(default=0, ge=0)
    # locale -> translated fields, written alongside the base row
    translations: dict[str, ArticleTranslationFields] | None = None

    def to_fields(self) -> dict[str, Any]:
        out = self.model_dump(by_alias=False, exclude={"translations"})
        if self.translations:
            out["translations"] = {k: v.to_fields() for k, v in self.translations.items()}
        return out


class ArticleUpdate(_Body):
    title: str | None = None
    content: str | None = None
    summary: str | None = None
    slug: str | None = None
    category_id: RowId | None = None
    published: bool | None = None
    published_at: datetime | None = None
    view_count: int | None = Field(default=None, ge=0)


class CategoryCreate(_Body):
    name: str | None = None
    description: str | None = None
    slug: str | None = None
    parent_id: RowId | None = None
    display_order: int = 0
    translations: dict[str, CategoryTranslationFields] | None = None

    def to_fields(self) -> dict[str, Any]:
        out = self.model_dump(by_alias=False, exclude={"translations"})
        if self.translations:
            out["translations"] = {k: v.to_fields() for k, v in self.translations.items()}
        return out


class CategoryUpdate(_Body):
    name: str | None = None
    description: str | None = None
    slug: str | None = None
    parent_id: RowId | None = None
    display_order: int | None = None
