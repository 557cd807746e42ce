from __future__ import annotations

from typing import Any

from ..db.errors import DbConflict, DbNotFound, DbValidation
from ..db.models.common import utcnow
from ..db.pagination import PaginationParams, PaginationResult, paginate_list
from ..i18n import BASE_LOCALE
from ..observability.logging import get_logger
from ..repositories import ArticleData, ArticleRepository
from .slugs import generate_slug, with_timestamp_suffix

log = get_logger("article_service")

# Upper bound on the articles scanned by the in-memory search.
SEARCH_SCAN_LIMIT = 1000


def _not_found(id: int) -> DbNotFound:
    return DbNotFound(message="Article not found", operation="get", entity="article", key={"id": id})


class ArticleService:
    def __init__(self, repo: ArticleRepository):
        self.repo = repo

    def get_articles(self, locale: str, params: PaginationParams | None = None) -> PaginationResult[ArticleData]:
        return self.repo.find_many(locale, params)

    def get_articles_by_category(
        self, category_id: int, locale: str, params: PaginationParams | None = None
    ) -> PaginationResult[ArticleData]:
        return self.repo.find_many(locale, params, filters={"category_id": category_id})

    def get_article_by_id(self, id: int, locale: str) -> ArticleData | None:
        """
        Fetch one article and count the view. The returned payload still
        carries the count as it was before this request.
        """
        article = self.repo.find_by_id(id, locale)
        if article is not None:
            self.repo.increment_view_count(id)
        return article

    def get_article_by_slug(self, slug: str, locale: str) -> ArticleData | None:
        return self.repo.find_by_slug(slug, locale)

    def create_article(self, data: dict[str, Any], locale: str = BASE_LOCALE) -> ArticleData:
        title = str(data.get("title") or "").strip()
        content = str(data.get("content") or "").strip()
        if not title or not content:
            raise DbValidation(message="Title and content are required", operation="create", entity="article")
        if data.get("category_id") is None:
            raise DbValidation(message="categoryId is required", operation="create", entity="article")

        doc = dict(data)
        slug = str(doc.get("slug") or "").strip() or generate_slug(title, fallback="article")
        if self.repo.find_by_slug(slug, BASE_LOCALE) is not None:
            slug = with_timestamp_suffix(slug)
        doc["slug"] = slug

        if doc.get("published") and not doc.get("published_at"):
            doc["published_at"] = utcnow()

        article = self.repo.create(doc, locale)
        log.info("article_created", article_id=article.id, slug=article.slug)
        return article

    def update_article(self, id: int, data: dict[str, Any], locale: str = BASE_LOCALE) -> ArticleData:
        existing = self.repo.find_by_id(id, BASE_LOCALE)
        if existing is None:
            raise _not_found(id)

        doc = dict(data)
        new_slug = str(doc.get("slug") or "").strip()
        if new_slug and new_slug != existing.slug:
            other = self.repo.find_by_slug(new_slug, BASE_LOCALE)
            if other is not None and other.id != id:
                raise DbConflict(
                    message="Slug already exists", operation="update", entity="article", key={"slug": new_slug}
                )
        if doc.get("published") and not existing.published_at and not doc.get("published_at"):
            doc["published_at"] = utcnow()

        return self.repo.update(id, doc, locale)

    def delete_article(self, id: int) -> None:
        if self.repo.find_by_id(id, BASE_LOCALE) is None:
            raise _not_found(id)
        self.repo.delete(id)
        log.info("article_deleted", article_id=id)

    def get_popular_articles(self, locale: str, limit: int = 10) -> list[ArticleData]:
        params = PaginationParams(page=1, limit=limit, sort_by="viewCount", sort_order="desc")
        return self.repo.find_many(locale, params).data

    def search_articles(
        self, query: str, locale: str, params: PaginationParams | None = None
    ) -> PaginationResult[ArticleData]:
        """
        Case-insensitive substring search over the localized title, content
        and summary. Matching happens in memory, so only the first
        SEARCH_SCAN_LIMIT published articles are considered.
        """
        params = params or PaginationParams()
        needle = str(query or "").strip().lower()
        if not needle:
            raise DbValidation(message="Search query is required", operation="search", entity="article")

        scan = PaginationParams(page=1, limit=SEARCH_SCAN_LIMIT, sort_by=params.sort_by, sort_order=params.sort_order)
        candidates = self.repo.find_many(locale, scan).data
        hits = [
            a
            for a in candidates
            if needle in a.title.lower()
            or needle in a.content.lower()
            or (a.summary and needle in a.summary.lower())
        ]
        return paginate_list(hits, params)

    def save_translation(self, id: int, locale: str, fields: dict[str, Any]) -> ArticleData:
        return self.repo.save_translation(id, locale, fields)

    def remove_translation(self, id: int, locale: str) -> int:
        removed = self.repo.delete_translation(id, locale)
        log.info("article_translation_removed", article_id=id, target_locale=locale, removed=removed)
        return removed

    def get_available_locales(self, id: int) -> list[str]:
        return self.repo.available_locales(id)
