from __future__ import annotations

import pytest

from polyglot_blog.db.errors import DbConflict, DbNotFound, DbValidation
from polyglot_blog.db.pagination import PaginationParams
from polyglot_blog.repositories import create_article_repository, create_category_repository, describe_pattern


def _category(db, **extra) -> int:
    with db.session() as s:
        repo = create_category_repository(db.pattern, s)
        data = {"name": "テクノロジー", "description": "技術の記事", "slug": "tech", "display_order": 0}
        data.update(extra)
        return repo.create(data).id


def _article(db, category_id: int, **extra) -> int:
    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        data = {
            "title": "こんにちは",
            "content": "本文",
            "summary": "要約",
            "slug": "hello",
            "category_id": category_id,
            "published": True,
            "view_count": 0,
        }
        data.update(extra)
        return repo.create(data).id


def test_factory_rejects_unknown_pattern(db):
    with db.session() as s:
        with pytest.raises(ValueError):
            create_article_repository("pattern9", s)
        with pytest.raises(ValueError):
            create_category_repository("", s)


def test_describe_pattern():
    assert describe_pattern("pattern1") == "Main + Dedicated Translation Tables"
    assert describe_pattern("pattern2") == "Unified Translation Table"
    assert describe_pattern("pattern3") == "JSON Column Management"


def test_missing_translation_falls_back_to_japanese(db):
    cid = _category(db)
    aid = _article(db, cid)

    with db.session() as s:
        a = create_article_repository(db.pattern, s).find_by_id(aid, "en")

    assert a is not None
    assert a.title == "こんにちは"
    assert a.content == "本文"
    assert a.locale == "en"


def test_create_with_translations_and_read_back(db):
    cid = _category(db)
    aid = _article(
        db,
        cid,
        translations={
            "en": {"title": "Hello", "content": "Body"},
            "zh-CN": {"title": "你好", "content": "正文", "summary": "摘要"},
        },
    )

    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        en = repo.find_by_id(aid, "en")
        zh = repo.find_by_id(aid, "zh-CN")
        ko = repo.find_by_id(aid, "ko")
        ja = repo.find_by_id(aid, "ja")

    assert (en.title, en.content, en.summary) == ("Hello", "Body", "要約")
    assert (zh.title, zh.content, zh.summary) == ("你好", "正文", "摘要")
    assert ko.title == "こんにちは"
    assert ja.title == "こんにちは"


def test_update_in_base_locale_changes_main_row(db):
    cid = _category(db)
    aid = _article(db, cid, translations={"en": {"title": "Hello", "content": "Body"}})

    with db.session() as s:
        updated = create_article_repository(db.pattern, s).update(aid, {"title": "改題"}, "ja")
    assert updated.title == "改題"

    with db.session() as s:
        en = create_article_repository(db.pattern, s).find_by_id(aid, "en")
    assert en.title == "Hello"


def test_update_in_other_locale_writes_translation_only(db):
    cid = _category(db)
    aid = _article(db, cid)

    with db.session() as s:
        ko = create_article_repository(db.pattern, s).update(
            aid, {"title": "안녕하세요", "content": "본문", "published": False}, "ko"
        )
    assert ko.title == "안녕하세요"
    assert ko.locale == "ko"

    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        ja = repo.find_by_id(aid, "ja")
        assert ja.title == "こんにちは"
        # Non-translatable fields still land on the main row.
        assert ja.published is False
        assert repo.find_by_id(aid, "ko").content == "본문"


def test_partial_translation_falls_back_per_field(db):
    cid = _category(db)
    aid = _article(db, cid)

    with db.session() as s:
        create_article_repository(db.pattern, s).save_translation(aid, "zh-TW", {"title": "標題"})

    with db.session() as s:
        zh = create_article_repository(db.pattern, s).find_by_id(aid, "zh-TW")
    assert zh.title == "標題"
    assert zh.content == "本文"
    assert zh.summary == "要約"


def test_empty_translation_values_are_ignored(db):
    cid = _category(db)
    aid = _article(db, cid, translations={"en": {"title": "", "content": "   "}})

    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        en = repo.find_by_id(aid, "en")
        assert en.title == "こんにちは"
        assert repo.available_locales(aid) == ["ja"]


def test_available_locales_and_delete_translation(db):
    cid = _category(db)
    aid = _article(
        db,
        cid,
        translations={"en": {"title": "Hello", "content": "Body"}, "ko": {"title": "안녕", "content": "본문"}},
    )

    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        assert repo.available_locales(aid) == ["ja", "en", "ko"]
        assert repo.delete_translation(aid, "en") > 0

    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        assert repo.available_locales(aid) == ["ja", "ko"]
        assert repo.find_by_id(aid, "en").title == "こんにちは"
        assert repo.find_by_id(aid, "ko").title == "안녕"


def test_base_locale_cannot_be_saved_or_removed_as_translation(db):
    cid = _category(db)
    aid = _article(db, cid)
    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        with pytest.raises(DbValidation):
            repo.save_translation(aid, "ja", {"title": "x"})
        with pytest.raises(DbValidation):
            repo.delete_translation(aid, "ja")
        with pytest.raises(DbValidation):
            repo.delete_translation(aid, "fr")


def test_delete_removes_article_and_translations(db):
    cid = _category(db)
    aid = _article(db, cid, translations={"en": {"title": "Hello", "content": "Body"}})

    with db.session() as s:
        create_article_repository(db.pattern, s).delete(aid)

    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        assert repo.find_by_id(aid, "en") is None
        with pytest.raises(DbNotFound):
            repo.delete(aid)

    # The slug is free again and no orphaned translation resurfaces.
    new_id = _article(db, cid)
    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        assert repo.available_locales(new_id) == ["ja"]


def test_duplicate_slug_is_a_conflict(db):
    cid = _category(db)
    _article(db, cid, slug="same")
    with pytest.raises(DbConflict):
        _article(db, cid, slug="same")


def test_unknown_category_is_a_conflict(db):
    with pytest.raises(DbConflict):
        _article(db, 999)


def test_find_many_lists_published_only_and_paginates(db):
    cid = _category(db)
    for i in range(5):
        _article(db, cid, slug=f"a-{i}", view_count=i)
    _article(db, cid, slug="draft", published=False)

    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        page = repo.find_many("ja", PaginationParams(page=2, limit=2, sort_by="viewCount", sort_order="desc"))

    assert page.total == 5
    assert page.total_pages == 3
    assert [a.view_count for a in page.data] == [2, 1]


def test_find_many_by_category(db):
    c1 = _category(db)
    c2 = _category(db, slug="other")
    _article(db, c1, slug="in-1")
    _article(db, c2, slug="in-2")

    with db.session() as s:
        page = create_article_repository(db.pattern, s).find_many("ja", filters={"category_id": c2})
    assert [a.slug for a in page.data] == ["in-2"]


def test_find_many_rejects_unknown_sort_key(db):
    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        with pytest.raises(DbValidation):
            repo.find_many("ja", PaginationParams(sort_by="password"))


def test_find_many_localizes_every_row(db):
    cid = _category(db)
    _article(db, cid, slug="t1", translations={"en": {"title": "One", "content": "c"}})
    _article(db, cid, slug="t2")

    with db.session() as s:
        page = create_article_repository(db.pattern, s).find_many(
            "en", PaginationParams(sort_by="id", sort_order="asc")
        )
    assert [a.title for a in page.data] == ["One", "こんにちは"]
    assert {a.locale for a in page.data} == {"en"}


def test_find_by_slug(db):
    cid = _category(db)
    _article(db, cid, slug="by-slug", translations={"en": {"title": "Slugged", "content": "c"}})
    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        assert repo.find_by_slug("by-slug", "en").title == "Slugged"
        assert repo.find_by_slug("missing", "en") is None


def test_increment_view_count(db):
    cid = _category(db)
    aid = _article(db, cid, view_count=7)
    with db.session() as s:
        create_article_repository(db.pattern, s).increment_view_count(aid)
    with db.session() as s:
        assert create_article_repository(db.pattern, s).find_by_id(aid, "ja").view_count == 8


def test_category_translations_and_parent_filter(db):
    root = _category(db, translations={"zh-CN": {"name": "技术"}})
    child = _category(db, slug="web", name="ウェブ", parent_id=root, display_order=1)

    with db.session() as s:
        repo = create_category_repository(db.pattern, s)
        zh = repo.find_by_id(root, "zh-CN")
        assert zh.name == "技术"
        assert zh.description == "技術の記事"

        roots = repo.find_many("ja", filters={"parent_id": None})
        children = repo.find_many("ja", filters={"parent_id": root})
        everything = repo.find_many("ja")

    assert [c.id for c in roots.data] == [root]
    assert [c.id for c in children.data] == [child]
    assert everything.total == 2


def test_category_with_articles_cannot_be_deleted(db):
    cid = _category(db)
    _article(db, cid)
    with pytest.raises(DbConflict):
        with db.session() as s:
            create_category_repository(db.pattern, s).delete(cid)


def test_storage_form_locale_codes_behave_the_same_in_every_pattern(db):
    cid = _category(db)
    aid = _article(db, cid)

    with db.session() as s:
        updated = create_article_repository(db.pattern, s).update(aid, {"title": "中文标题"}, "zh_cn")
    assert updated.locale == "zh-CN"

    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        assert repo.find_by_id(aid, "zh-CN").title == "中文标题"
        assert repo.find_by_id(aid, "ZH_CN").title == "中文标题"
        assert repo.available_locales(aid) == ["ja", "zh-CN"]


def test_unsupported_locale_is_rejected_on_read_and_update(db):
    cid = _category(db)
    aid = _article(db, cid)
    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        with pytest.raises(DbValidation):
            repo.find_by_id(aid, "fr")
        with pytest.raises(DbValidation):
            repo.update(aid, {"title": "Bonjour"}, "fr")
