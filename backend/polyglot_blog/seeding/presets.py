from __future__ import annotations

from .generator import MassDataConfig

# name -> (categories, articles, translation_rate, locales, batch_size)
_PRESETS: dict[str, tuple[int, int, float, list[str], int]] = {
    "default": (50, 500, 0.6, ["en", "zh-CN"], 50),
    "small": (10, 50, 0.8, ["en"], 20),
    "medium": (100, 1000, 0.7, ["en", "zh-CN", "zh-TW"], 100),
    "large": (500, 5000, 0.7, ["en", "zh-CN", "zh-TW", "ko"], 100),
    "benchmark": (500, 10000, 0.7, ["en", "zh-CN", "zh-TW", "ko"], 200),
    "test": (5, 20, 1.0, ["en", "zh-CN"], 10),
}

PRESET_NAMES = tuple(_PRESETS)


def preset_config(name: str, **overrides) -> MassDataConfig:  # type: ignore[no-untyped-def]
    try:
        categories, articles, rate, locales, batch = _PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown seed preset: {name} (expected one of {', '.join(PRESET_NAMES)})") from None
    values = {
        "categories": categories,
        "articles": articles,
        "translation_rate": rate,
        "locales": list(locales),
        "batch_size": batch,
    }
    values.update(overrides)
    return MassDataConfig(**values)
