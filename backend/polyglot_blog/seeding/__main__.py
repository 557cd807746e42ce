"""
Seed one pattern's database.

Usage:
    python -m polyglot_blog.seeding [preset] [--pattern pattern1|pattern2|pattern3] [--seed N]
"""

from __future__ import annotations

import argparse

from ..db.engine import Database
from ..observability.logging import configure_logging, get_logger
from ..repositories import describe_pattern
from ..settings import TRANSLATION_PATTERNS, get_settings
from .generator import MassDataGenerator
from .presets import PRESET_NAMES, preset_config

log = get_logger("seeding")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate blog fixtures for one translation pattern")
    parser.add_argument("preset", nargs="?", default="default", choices=PRESET_NAMES)
    parser.add_argument("--pattern", choices=TRANSLATION_PATTERNS, default=None)
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible data")
    parser.add_argument(
        "--no-fixtures",
        action="store_true",
        help="skip the deterministic performance/index articles",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(level=settings.log_level)

    db = Database.from_settings(settings, pattern=args.pattern)
    overrides: dict[str, object] = {"seed": args.seed}
    if args.no_fixtures:
        overrides.update(performance_articles=0, index_fixtures=False)
    config = preset_config(args.preset, **overrides)

    log.info("seed_preset", preset=args.preset, pattern=db.pattern, description=describe_pattern(db.pattern))
    try:
        db.create_schema()
        summary = MassDataGenerator(db, config).generate()
    finally:
        db.dispose()

    print(f"\nData summary ({db.pattern}: {describe_pattern(db.pattern)})")
    for table, count in summary.items():
        print(f"  {table}: {count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
