from __future__ import annotations

from contextvars import ContextVar

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
locale_var: ContextVar[str | None] = ContextVar("locale", default=None)


def get_request_id() -> str | None:
    return request_id_var.get()


def get_locale() -> str | None:
    return locale_var.get()
