from __future__ import annotations

from fastapi.testclient import TestClient

from polyglot_blog.main import create_app
from polyglot_blog.settings import Settings


def test_request_id_is_generated_and_returned(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.headers["X-Request-Id"]


def test_request_id_is_propagated_from_client(client):
    r = client.get("/health", headers={"X-Request-Id": "abc-123"})
    assert r.headers.get("X-Request-Id") == "abc-123"


def test_unsafe_inbound_request_id_is_replaced(client):
    r = client.get("/health", headers={"X-Request-Id": "x" * 500})
    rid = r.headers["X-Request-Id"]
    assert rid != "x" * 500
    assert len(rid) == 36


def test_health_reports_pattern(client, pattern):
    body = client.get("/health?locale=ko").json()
    assert body["status"] == "ok"
    assert body["locale"] == "ko"
    assert body["database"]["pattern"] == pattern
    assert body["database"]["databaseUrl"].startswith("sqlite:///")
    assert body["timestamp"]


def test_system_info(client, pattern):
    r = client.get("/api/system", headers={"Accept-Language": "zh-TW,zh;q=0.8"})
    body = r.json()
    assert body["success"] is True
    assert body["locale"] == "zh-TW"
    assert body["data"]["pattern"] == pattern
    assert body["data"]["supportedLocales"] == ["ja", "en", "zh-CN", "zh-TW", "ko"]
    assert body["data"]["currentLocale"] == "zh-TW"
    assert r.headers["Content-Language"] == "zh-TW"


def test_unknown_route_is_404_envelope(client):
    r = client.get("/no/such/route?locale=en")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Not Found"
    assert body["path"] == "/no/such/route"
    assert body["locale"] == "en"
    assert body["requestId"]


def test_validation_errors_are_400_envelopes(client):
    r = client.post("/api/articles", json={"title": "t", "content": "c", "categoryId": "not-an-int"})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Validation Failed"
    assert isinstance(body["errors"], list) and body["errors"]
    assert body["requestId"]


def test_bad_sort_order_is_400(client):
    r = client.get("/api/articles?sortOrder=sideways")
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_cors_allows_vite_dev_origin(client):
    r = client.options(
        "/api/articles",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "GET"},
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_server_error_message_hidden_in_production(tmp_path):
    settings = Settings(
        APP_ENV="production",
        TRANSLATION_PATTERN="pattern1",
        DATABASE_URL=f"sqlite:///{tmp_path / 'prod.db'}",
    )
    app = create_app(settings)

    @app.get("/boom")
    def boom():
        raise RuntimeError("secret detail")

    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/boom")
    assert r.status_code == 500
    body = r.json()
    assert body["success"] is False
    assert "message" not in body
    assert "secret" not in r.text
