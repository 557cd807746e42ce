from __future__ import annotations

import re
import time

_STRIP = re.compile(r"[^\w\s-]", re.ASCII)
_SPACES = re.compile(r"\s+")
_DASHES = re.compile(r"-+")


def generate_slug(text: str | None, *, fallback: str = "article") -> str:
    """
    URL slug from free text: lowercase ASCII word characters joined by `-`.
    Text with no usable characters (e.g. pure Japanese titles) yields `fallback`.
    """
    s = str(text or "").lower()
    s = _STRIP.sub("", s)
    # \w under re.ASCII still keeps "_"; only whitespace becomes "-".
    s = _SPACES.sub("-", s.strip())
    s = _DASHES.sub("-", s).strip("-")
    return s or fallback


def with_timestamp_suffix(slug: str) -> str:
    return f"{slug}-{int(time.time() * 1000)}"
