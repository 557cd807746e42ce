"""
Randomized fixtures for seeding and benchmarks.

Filler text comes from Faker's lorem provider. The Faker instance is seeded
from the `random.Random` passed in, so a seeded generator gives reproducible
data end to end.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from typing import Any

from faker import Faker

from ..services.slugs import generate_slug

MAIN_CATEGORIES = (
    "Technology", "Business", "Science", "Health", "Education",
    "Entertainment", "Sports", "Travel", "Food", "Fashion",
    "Art", "Music", "Politics", "Environment", "Finance",
)

SUB_CATEGORIES = (
    "Web Development", "Mobile Apps", "AI & ML", "Cybersecurity",
    "Marketing", "Management", "Startups", "E-commerce",
    "Physics", "Chemistry", "Biology", "Medicine",
    "Fitness", "Nutrition", "Mental Health", "Research",
)

CATEGORY_NAME_TRANSLATIONS: dict[str, dict[str, str]] = {
    "Technology": {"en": "Technology", "zh-CN": "技术", "zh-TW": "技術", "ko": "기술"},
    "Business": {"en": "Business", "zh-CN": "商业", "zh-TW": "商業", "ko": "비즈니스"},
    "Science": {"en": "Science", "zh-CN": "科学", "zh-TW": "科學", "ko": "과학"},
    "Health": {"en": "Health", "zh-CN": "健康", "zh-TW": "健康", "ko": "건강"},
}

TITLE_PREFIXES = {"en": "EN: ", "zh-CN": "中文：", "zh-TW": "繁體：", "ko": "한국어: "}


class Lorem:
    def __init__(self, rng: random.Random):
        self.rng = rng
        self.fake = Faker()
        self.fake.seed_instance(rng.getrandbits(32))

    def sentence(self, n_words: int | None = None) -> str:
        if n_words:
            return self.fake.sentence(nb_words=n_words, variable_nb_words=False)
        return self.fake.sentence()

    def sentences(self, n: int) -> str:
        return " ".join(self.fake.sentences(nb=n))

    def paragraph(self, n_sentences: int | None = None) -> str:
        n = n_sentences or self.rng.randint(3, 6)
        return self.fake.paragraph(nb_sentences=n, variable_nb_sentences=False)


def _tag(locale: str) -> str:
    return f"[{locale.upper()}]"


def _pick_locales(rng: random.Random, locales: list[str], keep: float) -> list[str]:
    return [loc for loc in locales if rng.random() < keep]


class CategoryFactory:
    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self.lorem = Lorem(self.rng)
        self._seq = 0

    def build(self, *, sub: bool = False, display_order: int = 0) -> dict[str, Any]:
        self._seq += 1
        name = self.rng.choice(SUB_CATEGORIES if sub else MAIN_CATEGORIES)
        return {
            "name": name,
            "description": self.lorem.sentence(self.rng.randint(5, 15)),
            "slug": f"{generate_slug(name, fallback='category')}-{self._seq}",
            "display_order": display_order,
        }

    def translation(self, category: dict[str, Any], locale: str) -> dict[str, str]:
        name = category["name"]
        out = {"name": CATEGORY_NAME_TRANSLATIONS.get(name, {}).get(locale) or f"{_tag(locale)} {name}"}
        if category.get("description"):
            out["description"] = f"{_tag(locale)} {self.lorem.sentence()}"
        return out

    def with_translations(
        self, category: dict[str, Any], *, translation_rate: float, locales: list[str]
    ) -> dict[str, Any]:
        if self.rng.random() < translation_rate:
            chosen = _pick_locales(self.rng, locales, 0.7)
            if chosen:
                category["translations"] = {loc: self.translation(category, loc) for loc in chosen}
        return category

    def hierarchy(self, top_level: int, *, max_depth: int = 3) -> list[dict[str, Any]]:
        """
        Nested category specs: each top-level entry gets 2-5 children and,
        when max_depth > 2, each child 0-3 grandchildren. Children are listed
        under a `children` key so callers can insert parents first.
        """
        order = 0
        tree: list[dict[str, Any]] = []
        for _ in range(top_level):
            top = self.build(display_order=order)
            order += 1
            top["children"] = []
            for _ in range(self.rng.randint(2, 5) if max_depth > 1 else 0):
                child = self.build(sub=True, display_order=order)
                order += 1
                child["children"] = [
                    self.build(sub=True, display_order=order + k)
                    for k in range(self.rng.randint(0, 3) if max_depth > 2 else 0)
                ]
                order += len(child["children"])
                top["children"].append(child)
            tree.append(top)
        return tree


class ArticleFactory:
    def __init__(self, category_ids: list[int], rng: random.Random | None = None):
        if not category_ids:
            raise ValueError("ArticleFactory needs at least one category id")
        self.category_ids = list(category_ids)
        self.rng = rng or random.Random()
        self.lorem = Lorem(self.rng)

    def _content(self, paragraphs: tuple[int, int], prefix: str = "") -> str:
        n = self.rng.randint(*paragraphs)
        return "\n\n".join(f"{prefix}{self.lorem.paragraph()}" for _ in range(n))

    def build(self, index: int, *, now: datetime | None = None) -> dict[str, Any]:
        now = now or datetime.now(timezone.utc)
        start = datetime(2023, 1, 1, tzinfo=timezone.utc)
        span = max(int((now - start).total_seconds()), 1)
        title = self.lorem.sentence(self.rng.randint(3, 8))
        return {
            "title": title,
            "content": self._content((3, 12)),
            "summary": self.lorem.sentences(2),
            "slug": f"{generate_slug(title)}-{index + 1}",
            "category_id": self.rng.choice(self.category_ids),
            "published": self.rng.random() > 0.2,
            "published_at": start + timedelta(seconds=self.rng.randrange(span)),
            "view_count": self.rng.randint(0, 10000),
        }

    def translation(self, locale: str) -> dict[str, str]:
        return {
            "title": TITLE_PREFIXES.get(locale, f"{_tag(locale)} ") + self.lorem.sentence(self.rng.randint(3, 8)),
            "content": self._content((2, 6), prefix=f"{_tag(locale)} "),
            "summary": f"{_tag(locale)} {self.lorem.sentences(2)}",
        }

    def with_translations(
        self, article: dict[str, Any], *, translation_rate: float, locales: list[str]
    ) -> dict[str, Any]:
        if self.rng.random() < translation_rate:
            chosen = _pick_locales(self.rng, locales, 0.6)
            if chosen:
                article["translations"] = {loc: self.translation(loc) for loc in chosen}
        return article

    def performance_fixtures(self, count: int, *, now: datetime | None = None) -> list[dict[str, Any]]:
        # Large bodies and predictable view counts for sort benchmarks.
        now = now or datetime.now(timezone.utc)
        return [
            {
                "title": f"Performance Test Article {i + 1}",
                "content": f"This is performance test content for article {i + 1}. " * 100,
                "summary": f"Performance test summary {i + 1}",
                "slug": f"perf-test-article-{i + 1}",
                "category_id": self.category_ids[i % len(self.category_ids)],
                "published": True,
                "published_at": now,
                "view_count": i * 10,
            }
            for i in range(count)
        ]

    def index_fixtures(self, *, high_views: int = 100, days: int = 365, now: datetime | None = None) -> list[dict[str, Any]]:
        """High view counts for the view_count index, one article per day for date-range queries."""
        now = now or datetime.now(timezone.utc)
        out: list[dict[str, Any]] = []
        for i in range(high_views):
            out.append(
                {
                    "title": f"High Views Article {i + 1}",
                    "content": f"High view count content {i + 1}",
                    "summary": f"High view summary {i + 1}",
                    "slug": f"high-views-{i + 1}",
                    "category_id": self.category_ids[0],
                    "published": True,
                    "published_at": now,
                    "view_count": 10000 + i,
                }
            )
        start = datetime(2023, 1, 1, tzinfo=timezone.utc)
        for i in range(days):
            day = start + timedelta(days=i)
            out.append(
                {
                    "title": f"Daily Article {i + 1}",
                    "content": f"Daily content for {day:%a %b %d %Y}",
                    "summary": f"Daily summary {i + 1}",
                    "slug": f"daily-{i + 1}",
                    "category_id": self.category_ids[i % len(self.category_ids)],
                    "published": True,
                    "published_at": day,
                    "view_count": i,
                }
            )
        return out
