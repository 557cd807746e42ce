from __future__ import annotations

import pytest

from polyglot_blog.db.errors import DbValidation
from polyglot_blog.db.pagination import PaginationParams, PaginationResult, paginate_list, parse_pagination


def test_defaults():
    p = parse_pagination()
    assert (p.page, p.limit, p.sort_by, p.sort_order) == (1, 10, None, "desc")
    assert p.offset == 0


def test_junk_and_non_positive_values_fall_back():
    p = parse_pagination(page="abc", limit="0")
    assert p.page == 1
    assert p.limit == 10
    p = parse_pagination(page="-3", limit="", default_limit=5)
    assert p.page == 1
    assert p.limit == 5


def test_limit_is_capped():
    assert parse_pagination(limit="5000").limit == 100


def test_offset():
    assert PaginationParams(page=3, limit=20).offset == 40


def test_sort_order_is_validated():
    assert parse_pagination(sort_order="ASC").sort_order == "asc"
    with pytest.raises(DbValidation):
        parse_pagination(sort_order="sideways")


def test_total_pages_rounds_up():
    assert PaginationResult(data=[], total=21, page=1, limit=10).total_pages == 3
    assert PaginationResult(data=[], total=0, page=1, limit=10).total_pages == 0


def test_meta_uses_camel_case():
    meta = PaginationResult(data=[1], total=11, page=2, limit=5).meta()
    assert meta == {"total": 11, "page": 2, "limit": 5, "totalPages": 3}


def test_paginate_list_slices_and_counts():
    result = paginate_list(list(range(25)), PaginationParams(page=3, limit=10))
    assert result.data == [20, 21, 22, 23, 24]
    assert result.total == 25
    assert result.total_pages == 3

    past_end = paginate_list(list(range(5)), PaginationParams(page=4, limit=10))
    assert past_end.data == []
    assert past_end.total == 5
