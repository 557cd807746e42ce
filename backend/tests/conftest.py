from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure `backend/` is on sys.path so `import polyglot_blog.*` works in tests.
BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))

from polyglot_blog.db.engine import Database  # noqa: E402
from polyglot_blog.main import create_app  # noqa: E402
from polyglot_blog.settings import TRANSLATION_PATTERNS, Settings  # noqa: E402


@pytest.fixture(params=TRANSLATION_PATTERNS)
def pattern(request) -> str:
    return request.param


@pytest.fixture
def settings(pattern: str, tmp_path: Path) -> Settings:
    return Settings(
        APP_ENV="test",
        TRANSLATION_PATTERN=pattern,
        DATABASE_URL=f"sqlite:///{tmp_path / (pattern + '.db')}",
    )


@pytest.fixture
def db(settings: Settings):
    database = Database.from_settings(settings)
    database.create_schema()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def category_id(client: TestClient) -> int:
    r = client.post(
        "/api/categories",
        json={"name": "テクノロジー", "slug": "technology", "translations": {"en": {"name": "Technology"}}},
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]["id"]
