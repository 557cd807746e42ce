"""
Response envelopes shared by every route:

    success: {"success": true, "data": ..., "pagination"?: {...}, "locale": "ja"}
    failure: {"success": false, "error": "...", "message"?: "...", "locale": "ja", "requestId": "..."}
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse

from .db.pagination import PaginationResult
from .i18n import DEFAULT_LOCALE
from .settings import get_settings


def _default_error(status_code: int) -> str:
    if status_code == 400:
        return "Bad Request"
    if status_code == 404:
        return "Not Found"
    if status_code == 405:
        return "Method Not Allowed"
    if status_code == 409:
        return "Conflict"
    if status_code == 503:
        return "Service Unavailable"
    if status_code >= 500:
        return "Internal Server Error"
    return "Error"


def request_id(request: Request) -> str | None:
    rid = getattr(getattr(request, "state", None), "request_id", None)
    if rid:
        return str(rid)
    hdr = request.headers.get("x-request-id")
    return str(hdr) if hdr else None


def request_locale(request: Request) -> str:
    loc = getattr(getattr(request, "state", None), "locale", None)
    return str(loc) if loc else DEFAULT_LOCALE


def _to_api(item: Any) -> Any:
    to_api = getattr(item, "to_api", None)
    return to_api() if callable(to_api) else item


def success_payload(
    *,
    locale: str,
    data: Any = None,
    pagination: dict[str, int] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": True}
    if data is not None:
        payload["data"] = [_to_api(x) for x in data] if isinstance(data, list) else _to_api(data)
    if pagination is not None:
        payload["pagination"] = pagination
    payload.update(extra)
    payload["locale"] = locale
    return payload


def page_payload(*, locale: str, result: PaginationResult[Any], **extra: Any) -> dict[str, Any]:
    return success_payload(locale=locale, data=list(result.data), pagination=result.meta(), **extra)


def error_payload(
    *,
    request: Request,
    status_code: int,
    error: str | None = None,
    message: str | None = None,
    errors: list[dict[str, Any]] | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "success": False,
        "error": error or _default_error(int(status_code)),
    }
    if message:
        payload["message"] = str(message)
    if errors:
        payload["errors"] = errors
    if extra:
        for k, v in extra.items():
            payload.setdefault(k, v)
    payload["locale"] = request_locale(request)
    rid = request_id(request)
    if rid:
        payload["requestId"] = rid
    return payload


def error_response(
    *,
    request: Request,
    status_code: int,
    error: str | None = None,
    message: str | None = None,
    errors: list[dict[str, Any]] | None = None,
    extra: dict[str, Any] | None = None,
) -> ORJSONResponse:
    app = request.scope.get("app")
    settings = getattr(getattr(app, "state", None), "settings", None) or get_settings()

    # Never leak internal details in production for server errors.
    safe_message = message
    if int(status_code) >= 500 and settings.is_production:
        safe_message = None

    return ORJSONResponse(
        status_code=int(status_code),
        content=error_payload(
            request=request,
            status_code=int(status_code),
            error=error,
            message=safe_message,
            errors=errors,
            extra=extra,
        ),
    )
