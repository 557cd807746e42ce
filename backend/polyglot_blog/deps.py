"""Per-request plumbing shared by the routers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, Request

from .db.engine import Database
from .db.errors import DbError
from .envelopes import request_locale
from .observability.logging import get_logger
from .repositories import create_article_repository, create_category_repository
from .services import ArticleService, CategoryService

log = get_logger("routes")

MAX_ROW_ID = 2**63 - 1


def get_locale(request: Request) -> str:
    return request_locale(request)


def get_database(request: Request) -> Database:
    return request.app.state.db


@contextmanager
def article_service(request: Request) -> Iterator[ArticleService]:
    """One unit of work: committed when the block exits cleanly."""
    db = get_database(request)
    with db.session() as s:
        yield ArticleService(create_article_repository(db.pattern, s))


@contextmanager
def category_service(request: Request) -> Iterator[CategoryService]:
    db = get_database(request)
    with db.session() as s:
        yield CategoryService(create_category_repository(db.pattern, s))


def parse_id(raw: str, *, entity: str) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        value = 0
    # Row ids are positive 64-bit integers.
    if not 1 <= value <= MAX_ROW_ID:
        raise HTTPException(status_code=400, detail={"error": f"Invalid {entity} ID"})
    return value


@contextmanager
def failures_as(error: str) -> Iterator[None]:
    """
    Route boundary: storage errors and HTTP errors keep their own mapping,
    anything else is logged and reported as a 500 named after the action.
    """
    try:
        yield
    except (DbError, HTTPException):
        raise
    except Exception as e:
        log.exception("route_failed", error=error)
        raise HTTPException(status_code=500, detail={"error": error, "message": str(e)}) from e
