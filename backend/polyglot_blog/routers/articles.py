from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from ..db.pagination import parse_pagination
from ..deps import article_service, failures_as, get_locale, parse_id
from ..envelopes import page_payload, success_payload
from ..schemas import ArticleCreate, ArticleTranslationFields, ArticleUpdate

router = APIRouter(tags=["articles"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail={"error": "Article not found"})


@router.get("/popular")
def popular_articles(request: Request, limit: str | None = None, locale: str = Depends(get_locale)):
    params = parse_pagination(limit=limit, default_limit=5)
    with failures_as("Failed to fetch popular articles"), article_service(request) as svc:
        articles = svc.get_popular_articles(locale, params.limit)
    return success_payload(locale=locale, data=articles)


@router.get("/search")
def search_articles(
    request: Request,
    q: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    sortBy: str | None = None,
    sortOrder: str | None = None,
    locale: str = Depends(get_locale),
):
    query = str(q or "").strip()
    if not query:
        raise HTTPException(status_code=400, detail={"error": "Search query is required"})

    params = parse_pagination(page=page, limit=limit, sort_by=sortBy, sort_order=sortOrder)
    with failures_as("Failed to search articles"), article_service(request) as svc:
        result = svc.search_articles(query, locale, params)
    return page_payload(locale=locale, result=result, query=query)


@router.get("/slug/{slug}")
def get_article_by_slug(slug: str, request: Request, locale: str = Depends(get_locale)):
    with failures_as("Failed to fetch article"), article_service(request) as svc:
        article = svc.get_article_by_slug(slug, locale)
    if article is None:
        raise _not_found()
    return success_payload(locale=locale, data=article)


@router.get("/{articleId}/locales")
def get_article_locales(articleId: str, request: Request, locale: str = Depends(get_locale)):
    id = parse_id(articleId, entity="article")
    with failures_as("Failed to fetch article locales"), article_service(request) as svc:
        locales = svc.get_available_locales(id)
    return success_payload(locale=locale, data=locales)


@router.put("/{articleId}/translations/{targetLocale}")
def save_article_translation(
    articleId: str,
    targetLocale: str,
    body: ArticleTranslationFields,
    request: Request,
    locale: str = Depends(get_locale),
):
    id = parse_id(articleId, entity="article")
    with failures_as("Failed to save translation"), article_service(request) as svc:
        article = svc.save_translation(id, targetLocale, body.to_fields())
    return success_payload(locale=locale, data=article)


@router.delete("/{articleId}/translations/{targetLocale}")
def delete_article_translation(
    articleId: str, targetLocale: str, request: Request, locale: str = Depends(get_locale)
):
    id = parse_id(articleId, entity="article")
    with failures_as("Failed to delete translation"), article_service(request) as svc:
        removed = svc.remove_translation(id, targetLocale)
    return success_payload(locale=locale, message="Translation deleted successfully", removed=removed)


@router.get("/{articleId}")
def get_article(articleId: str, request: Request, locale: str = Depends(get_locale)):
    id = parse_id(articleId, entity="article")
    with failures_as("Failed to fetch article"), article_service(request) as svc:
        article = svc.get_article_by_id(id, locale)
    if article is None:
        raise _not_found()
    return success_payload(locale=locale, data=article)


@router.get("")
def list_articles(
    request: Request,
    page: str | None = None,
    limit: str | None = None,
    sortBy: str | None = None,
    sortOrder: str | None = None,
    categoryId: str | None = None,
    locale: str = Depends(get_locale),
):
    params = parse_pagination(page=page, limit=limit, sort_by=sortBy or "createdAt", sort_order=sortOrder)
    category_id = parse_id(categoryId, entity="category") if categoryId else None
    with failures_as("Failed to fetch articles"), article_service(request) as svc:
        if category_id is None:
            result = svc.get_articles(locale, params)
        else:
            result = svc.get_articles_by_category(category_id, locale, params)
    return page_payload(locale=locale, result=result)


@router.post("", status_code=201)
def create_article(body: ArticleCreate, request: Request, locale: str = Depends(get_locale)):
    if not (body.title or "").strip() or not (body.content or "").strip():
        raise HTTPException(status_code=400, detail={"error": "Title and content are required"})

    with failures_as("Failed to create article"), article_service(request) as svc:
        article = svc.create_article(body.to_fields(), locale)
    return success_payload(locale=locale, data=article)


@router.put("/{articleId}")
def update_article(articleId: str, body: ArticleUpdate, request: Request, locale: str = Depends(get_locale)):
    id = parse_id(articleId, entity="article")
    with failures_as("Failed to update article"), article_service(request) as svc:
        article = svc.update_article(id, body.to_fields(), locale)
    return success_payload(locale=locale, data=article)


@router.delete("/{articleId}")
def delete_article(articleId: str, request: Request, locale: str = Depends(get_locale)):
    id = parse_id(articleId, entity="article")
    with failures_as("Failed to delete article"), article_service(request) as svc:
        svc.delete_article(id)
    return success_payload(locale=locale, message="Article deleted successfully")
