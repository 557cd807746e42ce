from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from ..deps import get_locale
from ..i18n import LOCALE_NAMES, SUPPORTED_LOCALES
from ..repositories import describe_pattern
from ..settings import mask_database_url

router = APIRouter(tags=["health"])


def database_info(request: Request) -> dict[str, str]:
    db = request.app.state.db
    return {
        "pattern": db.pattern,
        "description": describe_pattern(db.pattern),
        "databaseUrl": mask_database_url(db.url),
    }


@router.get("/health")
def health(request: Request, locale: str = Depends(get_locale)):
    return {
        "status": "ok",
        "locale": locale,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database_info(request),
    }


@router.get("/api/system")
def system_info(request: Request, locale: str = Depends(get_locale)):
    info = database_info(request)
    return {
        "success": True,
        "data": {
            "pattern": info["pattern"],
            "description": info["description"],
            "supportedLocales": list(SUPPORTED_LOCALES),
            "localeNames": dict(LOCALE_NAMES),
            "currentLocale": locale,
        },
        "locale": locale,
    }
