from __future__ import annotations

import re

from polyglot_blog.services.slugs import generate_slug, with_timestamp_suffix


def test_basic_slug():
    assert generate_slug("Hello World") == "hello-world"


def test_special_characters_are_removed_and_dashes_collapsed():
    assert generate_slug("  AI & ML -- the  Future!  ") == "ai-ml-the-future"


def test_non_ascii_titles_use_fallback():
    assert generate_slug("日本語のタイトル") == "article"
    assert generate_slug("テクノロジー", fallback="category") == "category"


def test_mixed_script_keeps_ascii_part():
    assert generate_slug("Python 入門 Guide") == "python-guide"


def test_timestamp_suffix():
    assert re.fullmatch(r"hello-\d{13,}", with_timestamp_suffix("hello"))
