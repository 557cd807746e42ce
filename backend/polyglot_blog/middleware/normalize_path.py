from __future__ import annotations

from typing import Any, Awaitable, Callable


class NormalizePathMiddleware:
    """
    Strip trailing slashes from /api/ paths so `/api/articles/` routes like
    `/api/articles`. The app runs with `redirect_slashes=False`, so the ASGI
    scope is rewritten in place instead of redirecting.
    """

    def __init__(self, app: Callable[..., Awaitable[Any]]):
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable):
        if scope.get("type") == "http":
            path = str(scope.get("path") or "")
            if path.startswith("/api/") and path.endswith("/"):
                new_path = path.rstrip("/")
                scope["path"] = new_path
                if isinstance(scope.get("raw_path"), (bytes, bytearray)):
                    scope["raw_path"] = new_path.encode("utf-8")
        return await self.app(scope, receive, send)
