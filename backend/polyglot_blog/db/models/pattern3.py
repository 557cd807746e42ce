"""Pattern 3: locale-keyed JSON maps stored on the main rows."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .common import TimestampMixin


class Base(DeclarativeBase):
    pass


class Category(TimestampMixin, Base):
    __tablename__ = "categories"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True)
    parent_id: Mapped[Optional[int]] = mapped_column(ForeignKey("categories.id"), nullable=True, index=True)
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    name_translations: Mapped[dict] = mapped_column(JSON, default=dict)
    description_translations: Mapped[dict] = mapped_column(JSON, default=dict)


class Article(TimestampMixin, Base):
    __tablename__ = "articles"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500))
    content: Mapped[str] = mapped_column(Text)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), index=True)
    published: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
    view_count: Mapped[int] = mapped_column(Integer, default=0, index=True)
    title_translations: Mapped[dict] = mapped_column(JSON, default=dict)
    content_translations: Mapped[dict] = mapped_column(JSON, default=dict)
    summary_translations: Mapped[dict] = mapped_column(JSON, default=dict)
