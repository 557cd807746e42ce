from __future__ import annotations

import random
from datetime import datetime, timezone

import pytest

from polyglot_blog.repositories import create_article_repository
from polyglot_blog.seeding import (
    ArticleFactory,
    CategoryFactory,
    MassDataConfig,
    MassDataGenerator,
    PRESET_NAMES,
    preset_config,
)


def test_presets():
    assert set(PRESET_NAMES) == {"default", "small", "medium", "large", "benchmark", "test"}
    small = preset_config("small")
    assert (small.categories, small.articles, small.translation_rate, small.locales) == (10, 50, 0.8, ["en"])
    assert preset_config("medium").locales == ["en", "zh-CN", "zh-TW"]
    with pytest.raises(ValueError):
        preset_config("huge")


def test_config_normalizes_locales():
    assert MassDataConfig(locales=["zh-cn", "zh_tw", "EN"]).locales == ["zh-CN", "zh-TW", "en"]


def test_category_hierarchy_shape():
    tree = CategoryFactory(random.Random(1)).hierarchy(3)
    assert len(tree) == 3
    for top in tree:
        assert 2 <= len(top["children"]) <= 5
        for child in top["children"]:
            assert len(child["children"]) <= 3

    slugs = [top["slug"] for top in tree]
    assert len(set(slugs)) == len(slugs)


def test_article_fixtures_are_deterministic_shapes():
    factory = ArticleFactory([7, 8], random.Random(2))
    perf = factory.performance_fixtures(3)
    assert [a["slug"] for a in perf] == ["perf-test-article-1", "perf-test-article-2", "perf-test-article-3"]
    assert [a["view_count"] for a in perf] == [0, 10, 20]
    assert [a["category_id"] for a in perf] == [7, 8, 7]

    index = factory.index_fixtures(high_views=2, days=3)
    assert [a["slug"] for a in index] == ["high-views-1", "high-views-2", "daily-1", "daily-2", "daily-3"]
    assert index[0]["view_count"] == 10000


def test_article_factory_needs_categories():
    with pytest.raises(ValueError):
        ArticleFactory([])


def test_generator_fills_every_pattern(db):
    config = MassDataConfig(
        categories=5,
        articles=12,
        translation_rate=1.0,
        locales=["en", "zh-CN"],
        batch_size=4,
        performance_articles=3,
        index_fixtures=False,
        seed=42,
    )
    summary = MassDataGenerator(db, config).generate()

    assert summary["articles"] == 12 + 3
    assert summary["categories"] >= 3
    if db.pattern == "pattern1":
        assert summary["article_translations"] > 0
    elif db.pattern == "pattern2":
        assert summary["translations"] > 0

    with db.session() as s:
        repo = create_article_repository(db.pattern, s)
        perf = repo.find_by_slug("perf-test-article-3", "en")
        assert perf is not None
        assert perf.view_count == 20
        assert perf.title == "Performance Test Article 3"

    # Re-running starts from a clean slate.
    again = MassDataGenerator(db, config).generate()
    assert again["articles"] == 15


def test_same_seed_gives_same_fixtures():
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)

    def build(seed: int) -> tuple[dict, dict]:
        rng = random.Random(seed)
        category = CategoryFactory(rng).build()
        article = ArticleFactory([1, 2, 3], rng).build(0, now=now)
        return category, article

    assert build(7) == build(7)
    assert build(7)[1]["title"] != build(8)[1]["title"]
