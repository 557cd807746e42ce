from __future__ import annotations

import re
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..observability.context import request_id_var

# Inbound ids end up in logs and response headers; keep them short and printable.
_SAFE_ID = re.compile(r"^[A-Za-z0-9._:\-]{1,128}$")


def _inbound_request_id(request: Request) -> str | None:
    raw = (request.headers.get("x-request-id") or "").strip()
    return raw if _SAFE_ID.match(raw) else None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Every request gets an id: the caller's X-Request-Id when it looks sane,
    otherwise a fresh UUIDv4. It is exposed as request.state.request_id, to
    logging through a contextvar, and echoed on the response.
    """

    header_name = "X-Request-Id"

    async def dispatch(self, request: Request, call_next):
        request_id = _inbound_request_id(request) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[self.header_name] = request_id
        return response
