from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from ..db.pagination import parse_pagination
from ..deps import category_service, failures_as, get_locale, parse_id
from ..envelopes import page_payload, success_payload
from ..schemas import CategoryCreate, CategoryTranslationFields, CategoryUpdate

router = APIRouter(tags=["categories"])

_ROOT_MARKERS = {"", "null", "none", "root"}


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail={"error": "Category not found"})


@router.get("/slug/{slug}")
def get_category_by_slug(slug: str, request: Request, locale: str = Depends(get_locale)):
    with failures_as("Failed to fetch category"), category_service(request) as svc:
        category = svc.get_category_by_slug(slug, locale)
    if category is None:
        raise _not_found()
    return success_payload(locale=locale, data=category)


@router.get("/{categoryId}/locales")
def get_category_locales(categoryId: str, request: Request, locale: str = Depends(get_locale)):
    id = parse_id(categoryId, entity="category")
    with failures_as("Failed to fetch category locales"), category_service(request) as svc:
        locales = svc.get_available_locales(id)
    return success_payload(locale=locale, data=locales)


@router.put("/{categoryId}/translations/{targetLocale}")
def save_category_translation(
    categoryId: str,
    targetLocale: str,
    body: CategoryTranslationFields,
    request: Request,
    locale: str = Depends(get_locale),
):
    id = parse_id(categoryId, entity="category")
    with failures_as("Failed to save translation"), category_service(request) as svc:
        category = svc.save_translation(id, targetLocale, body.to_fields())
    return success_payload(locale=locale, data=category)


@router.delete("/{categoryId}/translations/{targetLocale}")
def delete_category_translation(
    categoryId: str, targetLocale: str, request: Request, locale: str = Depends(get_locale)
):
    id = parse_id(categoryId, entity="category")
    with failures_as("Failed to delete translation"), category_service(request) as svc:
        removed = svc.remove_translation(id, targetLocale)
    return success_payload(locale=locale, message="Translation deleted successfully", removed=removed)


@router.get("/{categoryId}")
def get_category(categoryId: str, request: Request, locale: str = Depends(get_locale)):
    id = parse_id(categoryId, entity="category")
    with failures_as("Failed to fetch category"), category_service(request) as svc:
        category = svc.get_category_by_id(id, locale)
    if category is None:
        raise _not_found()
    return success_payload(locale=locale, data=category)


@router.get("")
def list_categories(
    request: Request,
    page: str | None = None,
    limit: str | None = None,
    sortBy: str | None = None,
    sortOrder: str | None = None,
    parentId: str | None = None,
    locale: str = Depends(get_locale),
):
    params = parse_pagination(
        page=page, limit=limit, sort_by=sortBy or "displayOrder", sort_order=sortOrder or "asc"
    )
    with failures_as("Failed to fetch categories"), category_service(request) as svc:
        if parentId is None:
            result = svc.get_categories(locale, params)
        elif parentId.strip().lower() in _ROOT_MARKERS:
            result = svc.get_categories(locale, params, parent_id=None)
        else:
            result = svc.get_categories(locale, params, parent_id=parse_id(parentId, entity="category"))
    return page_payload(locale=locale, result=result)


@router.post("", status_code=201)
def create_category(body: CategoryCreate, request: Request, locale: str = Depends(get_locale)):
    if not (body.name or "").strip():
        raise HTTPException(status_code=400, detail={"error": "Name is required"})

    with failures_as("Failed to create category"), category_service(request) as svc:
        category = svc.create_category(body.to_fields(), locale)
    return success_payload(locale=locale, data=category)


@router.put("/{categoryId}")
def update_category(categoryId: str, body: CategoryUpdate, request: Request, locale: str = Depends(get_locale)):
    id = parse_id(categoryId, entity="category")
    with failures_as("Failed to update category"), category_service(request) as svc:
        category = svc.update_category(id, body.to_fields(), locale)
    return success_payload(locale=locale, data=category)


@router.delete("/{categoryId}")
def delete_category(categoryId: str, request: Request, locale: str = Depends(get_locale)):
    id = parse_id(categoryId, entity="category")
    with failures_as("Failed to delete category"), category_service(request) as svc:
        svc.delete_category(id)
    return success_payload(locale=locale, message="Category deleted successfully")
