from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from sqlalchemy import delete, func, insert, select

from ..db.engine import Database
from ..db.models import metadata_for, models_for
from ..i18n import parse_locale
from ..observability.logging import get_logger
from ..repositories import create_article_repository, create_category_repository
from .factories import ArticleFactory, CategoryFactory

log = get_logger("seeding")


@dataclass(slots=True)
class MassDataConfig:
    categories: int = 500
    articles: int = 10000
    translation_rate: float = 0.7
    locales: list[str] = field(default_factory=lambda: ["en", "zh-CN", "zh-TW", "ko"])
    batch_size: int = 100
    # Deterministic fixtures appended after the random articles.
    performance_articles: int = 1000
    index_fixtures: bool = True
    seed: int | None = None

    def __post_init__(self) -> None:
        # Accept storage-style codes such as "zh-cn" / "zh_cn".
        self.locales = [parse_locale(loc) for loc in self.locales]
        if self.batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        if not 0.0 <= self.translation_rate <= 1.0:
            raise ValueError("translation_rate must be between 0 and 1")


def _batches(items: list[Any], size: int) -> Iterator[list[Any]]:
    for i in range(0, len(items), size):
        yield items[i : i + size]


class MassDataGenerator:
    """
    Fills one pattern's database with categories, articles and their
    translations. Each batch is its own transaction; translations are written
    through the pattern's repositories so every pattern stores them its own way.
    """

    def __init__(self, db: Database, config: MassDataConfig | None = None):
        self.db = db
        self.config = config or MassDataConfig()
        self.models = models_for(db.pattern)
        self.rng = random.Random(self.config.seed)

    def generate(self) -> dict[str, int]:
        log.info("seed_started", pattern=self.db.pattern, config=self._config_for_log())
        self.clear_data()
        category_ids = self.generate_categories()
        self.generate_articles(category_ids)
        self.generate_performance_fixtures(category_ids)
        summary = self.summary()
        log.info("seed_completed", pattern=self.db.pattern, **summary)
        return summary

    def _config_for_log(self) -> dict[str, Any]:
        c = self.config
        return {
            "categories": c.categories,
            "articles": c.articles,
            "translation_rate": c.translation_rate,
            "locales": c.locales,
            "batch_size": c.batch_size,
        }

    def clear_data(self) -> None:
        # Children before parents: translation rows, then articles, then categories.
        with self.db.session() as s:
            for table in reversed(metadata_for(self.db.pattern).sorted_tables):
                s.execute(delete(table))
        log.info("seed_cleared", pattern=self.db.pattern)

    def generate_categories(self) -> list[int]:
        factory = CategoryFactory(self.rng)
        tree = factory.hierarchy(max(1, self.config.categories // 5))

        ids: list[int] = []
        level: list[tuple[dict[str, Any], int | None]] = [(node, None) for node in tree]
        while level:
            next_level: list[tuple[dict[str, Any], int | None]] = []
            for batch in _batches(level, self.config.batch_size):
                with self.db.session() as s:
                    repo = create_category_repository(self.db.pattern, s)
                    for node, parent_id in batch:
                        children = node.pop("children", [])
                        data = factory.with_translations(
                            dict(node, parent_id=parent_id),
                            translation_rate=self.config.translation_rate,
                            locales=self.config.locales,
                        )
                        created = repo.create(data)
                        ids.append(created.id)
                        next_level.extend((child, created.id) for child in children)
                log.info("seed_progress", entity="category", created=len(ids))
            level = next_level
        return ids

    def generate_articles(self, category_ids: list[int]) -> int:
        factory = ArticleFactory(category_ids, self.rng)
        created = 0
        for batch in _batches(list(range(self.config.articles)), self.config.batch_size):
            with self.db.session() as s:
                repo = create_article_repository(self.db.pattern, s)
                for index in batch:
                    data = factory.with_translations(
                        factory.build(index),
                        translation_rate=self.config.translation_rate,
                        locales=self.config.locales,
                    )
                    repo.create(data)
                    created += 1
            log.info("seed_progress", entity="article", created=created, total=self.config.articles)
        return created

    def generate_performance_fixtures(self, category_ids: list[int]) -> int:
        if not category_ids:
            log.warning("seed_skipped_fixtures", reason="no categories")
            return 0
        factory = ArticleFactory(category_ids, self.rng)
        rows = factory.performance_fixtures(self.config.performance_articles)
        if self.config.index_fixtures:
            rows.extend(factory.index_fixtures())
        return self._bulk_insert_articles(rows)

    def _bulk_insert_articles(self, rows: Iterable[dict[str, Any]]) -> int:
        # Base-language rows only, so a plain multi-row INSERT works for every pattern.
        created = 0
        for batch in _batches(list(rows), self.config.batch_size):
            with self.db.session() as s:
                s.execute(insert(self.models.Article), batch)
            created += len(batch)
            log.info("seed_progress", entity="fixture_article", created=created)
        return created

    def summary(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        with self.db.session() as s:
            for table in metadata_for(self.db.pattern).sorted_tables:
                counts[table.name] = int(s.scalar(select(func.count()).select_from(table)) or 0)
        return counts
