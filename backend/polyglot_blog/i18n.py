"""
Locale handling shared by the HTTP layer, repositories and seeding.

Japanese is the base language: it lives in the main entity row, every other
locale is stored by the active translation pattern.
"""

from __future__ import annotations

SUPPORTED_LOCALES: tuple[str, ...] = ("ja", "en", "zh-CN", "zh-TW", "ko")
DEFAULT_LOCALE = "ja"
BASE_LOCALE = DEFAULT_LOCALE

LOCALE_NAMES: dict[str, str] = {
    "ja": "日本語",
    "en": "English",
    "zh-CN": "简体中文",
    "zh-TW": "繁體中文",
    "ko": "한국어",
}

_BY_LOWER = {loc.lower(): loc for loc in SUPPORTED_LOCALES}


def is_base_locale(locale: str | None) -> bool:
    return (locale or BASE_LOCALE) == BASE_LOCALE


def parse_locale(value: str | None) -> str:
    """
    Strict parse of a locale code in either public (`zh-CN`) or storage
    (`zh_cn`) form, case-insensitive. Unknown codes raise ValueError.
    """
    raw = str(value or "").strip().replace("_", "-").lower()
    loc = _BY_LOWER.get(raw)
    if not loc:
        raise ValueError(f"Unsupported locale: {value}")
    return loc


def to_storage_locale(locale: str) -> str:
    # zh-CN -> zh_cn, zh-TW -> zh_tw, others unchanged
    if locale == "zh-CN":
        return "zh_cn"
    if locale == "zh-TW":
        return "zh_tw"
    return locale


def from_storage_locale(code: str) -> str:
    if code == "zh_cn":
        return "zh-CN"
    if code == "zh_tw":
        return "zh-TW"
    return code


def _accept_language_candidates(header: str) -> list[str]:
    # Header order is preference order; q-values are ignored.
    out: list[str] = []
    for part in header.split(","):
        tag = part.strip().split(";", 1)[0].strip().lower()
        if tag:
            out.append(tag)
    return out


def locale_from_accept_language(header: str | None) -> str | None:
    if not header:
        return None
    for tag in _accept_language_candidates(header):
        exact = _BY_LOWER.get(tag)
        if exact:
            return exact
        primary = tag.split("-", 1)[0]
        if primary == "zh":
            # Bare or unknown-region Chinese defaults to simplified.
            return "zh-CN"
        if primary in SUPPORTED_LOCALES:
            return primary
    return None


def resolve_locale(query_locale: str | None, accept_language: str | None) -> str:
    """
    Pick the request locale: an exact `?locale=` wins, then the first usable
    Accept-Language entry, then the base locale.
    """
    if query_locale and query_locale in SUPPORTED_LOCALES:
        return query_locale
    if not query_locale:
        from_header = locale_from_accept_language(accept_language)
        if from_header:
            return from_header
    return DEFAULT_LOCALE
