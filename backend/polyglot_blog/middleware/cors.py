from __future__ import annotations

# Vite dev server ports plus the usual CRA/Next port.
DEFAULT_ORIGINS = (
    "http://localhost:5180",
    "http://localhost:5173",
    "http://localhost:3000",
)


def build_allowed_origins(*, frontend_urls: str | None) -> list[str]:
    allowed: set[str] = set(DEFAULT_ORIGINS)
    if frontend_urls:
        for origin in [s.strip() for s in str(frontend_urls).split(",") if s.strip()]:
            allowed.add(origin.rstrip("/"))
    return sorted(allowed)
