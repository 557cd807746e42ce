from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class ArticleData:
    """An article as seen in one locale (translated fields already resolved)."""

    id: int
    title: str
    content: str
    summary: str | None
    slug: str
    category_id: int
    published: bool
    published_at: datetime | None
    view_count: int
    locale: str
    created_at: datetime | None
    updated_at: datetime | None

    def to_api(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "summary": self.summary,
            "slug": self.slug,
            "categoryId": self.category_id,
            "published": self.published,
            "publishedAt": self.published_at,
            "viewCount": self.view_count,
            "locale": self.locale,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(slots=True)
class CategoryData:
    id: int
    name: str
    description: str | None
    slug: str
    parent_id: int | None
    display_order: int
    locale: str
    created_at: datetime | None
    updated_at: datetime | None

    def to_api(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "slug": self.slug,
            "parentId": self.parent_id,
            "displayOrder": self.display_order,
            "locale": self.locale,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
