from __future__ import annotations

from fastapi.testclient import TestClient


def _create(client: TestClient, **body) -> dict:
    r = client.post("/api/categories", json=body)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_create_and_get_localized(client):
    cat = _create(
        client,
        name="テクノロジー",
        description="技術の記事",
        translations={"en": {"name": "Technology", "description": "Tech articles"}},
    )
    assert cat["slug"] == "category"
    assert cat["parentId"] is None
    assert cat["displayOrder"] == 0

    en = client.get(f"/api/categories/{cat['id']}", headers={"Accept-Language": "en"}).json()
    assert en["locale"] == "en"
    assert en["data"]["name"] == "Technology"

    ko = client.get(f"/api/categories/slug/{cat['slug']}?locale=ko").json()
    assert ko["data"]["name"] == "テクノロジー"


def test_name_is_required(client):
    r = client.post("/api/categories", json={"description": "no name"})
    assert r.status_code == 400
    assert r.json()["error"] == "Name is required"


def test_parent_must_exist_and_not_be_self(client):
    r = client.post("/api/categories", json={"name": "Child", "parentId": 999})
    assert r.status_code == 400
    assert r.json()["message"] == "Parent category does not exist"

    parent = _create(client, name="Parent", slug="parent")
    r = client.put(f"/api/categories/{parent['id']}", json={"parentId": parent["id"]})
    assert r.status_code == 400
    assert r.json()["message"] == "A category cannot be its own parent"


def test_parent_cannot_be_a_descendant(client):
    a = _create(client, name="A", slug="a")
    b = _create(client, name="B", slug="b", parentId=a["id"])
    c = _create(client, name="C", slug="c", parentId=b["id"])

    for target in (b, c):
        r = client.put(f"/api/categories/{a['id']}", json={"parentId": target["id"]})
        assert r.status_code == 400
        assert r.json()["message"] == "A category cannot be moved under its own descendant"

    # Moving sideways within the tree is fine.
    r = client.put(f"/api/categories/{c['id']}", json={"parentId": a["id"]})
    assert r.status_code == 200
    assert r.json()["data"]["parentId"] == a["id"]


def test_list_sorted_by_display_order_with_parent_filter(client):
    root = _create(client, name="Root", slug="root", displayOrder=2)
    _create(client, name="First", slug="first", displayOrder=1)
    child = _create(client, name="Child", slug="child", parentId=root["id"], displayOrder=0)

    body = client.get("/api/categories").json()
    assert [c["slug"] for c in body["data"]] == ["child", "first", "root"]
    assert body["pagination"]["total"] == 3

    roots = client.get("/api/categories?parentId=null").json()
    assert [c["slug"] for c in roots["data"]] == ["first", "root"]

    children = client.get(f"/api/categories?parentId={root['id']}").json()
    assert [c["id"] for c in children["data"]] == [child["id"]]

    assert client.get("/api/categories?parentId=abc").status_code == 400


def test_update_translation_and_locales(client):
    cat = _create(client, name="ビジネス", slug="business")

    r = client.put(f"/api/categories/{cat['id']}?locale=zh-CN", json={"name": "商业"})
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "商业"

    assert client.get(f"/api/categories/{cat['id']}/locales").json()["data"] == ["ja", "zh-CN"]

    r = client.delete(f"/api/categories/{cat['id']}/translations/zh-CN")
    assert r.status_code == 200
    zh = client.get(f"/api/categories/{cat['id']}?locale=zh-CN").json()
    assert zh["data"]["name"] == "ビジネス"


def test_delete(client):
    cat = _create(client, name="Temp", slug="temp")
    r = client.delete(f"/api/categories/{cat['id']}")
    assert r.status_code == 200
    assert r.json()["message"] == "Category deleted successfully"
    assert client.get(f"/api/categories/{cat['id']}").status_code == 404
    assert client.delete(f"/api/categories/{cat['id']}").status_code == 404
    assert client.get("/api/categories/abc").status_code == 400


def test_category_in_use_cannot_be_deleted(client, category_id):
    r = client.post(
        "/api/articles",
        json={"title": "t", "content": "c", "categoryId": category_id, "published": True},
    )
    assert r.status_code == 201

    r = client.delete(f"/api/categories/{category_id}")
    assert r.status_code == 409
    assert r.json()["success"] is False
