from __future__ import annotations

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..i18n import resolve_locale
from ..observability.context import locale_var


class LocaleMiddleware(BaseHTTPMiddleware):
    """
    Resolves the request locale from `?locale=` or Accept-Language and makes
    it available as request.state.locale (and to logging). The resolved
    locale is echoed in Content-Language.
    """

    async def dispatch(self, request: Request, call_next):
        locale = resolve_locale(
            request.query_params.get("locale"),
            request.headers.get("accept-language"),
        )
        request.state.locale = locale
        token = locale_var.set(locale)
        try:
            response = await call_next(request)
            response.headers["Content-Language"] = locale
            return response
        finally:
            locale_var.reset(token)
