"""Unit tests for pagination arithmetic."""

import pytest

from restcollection.core.exceptions import PaginationError
from restcollection.domain.services.pagination import (
    Direction,
    compute_offset,
    current_offset,
    paginate,
    preview,
)


class TestComputeOffset:
    """Test suite for compute_offset."""

    @pytest.mark.parametrize("offset,limit", [(0, 10), (30, 10), (5, 25)])
    def test_next_adds_limit(self, offset, limit):
        assert compute_offset(Direction.NEXT, offset, limit) == offset + limit

    def test_prev_is_not_clamped(self):
        assert compute_offset(Direction.PREV, 0, 10) == -10

    @pytest.mark.parametrize("page,expected", [(1, 0), (2, 20), (5, 80)])
    def test_page_is_one_indexed(self, page, expected):
        assert compute_offset(Direction.PAGE, 999, 20, page) == expected

    def test_page_requires_page_number(self):
        with pytest.raises(ValueError):
            compute_offset(Direction.PAGE, 0, 20)


def test_current_offset_defaults_and_coerces():
    assert current_offset({}) == 0
    assert current_offset({"offset": None}) == 0
    assert current_offset({"offset": "40"}) == 40


class TestPaginate:
    """Test suite for paginate."""

    def test_requires_limit(self):
        with pytest.raises(PaginationError, match="No limit defined in parameters"):
            paginate({"offset": 10}, Direction.NEXT)

    def test_none_limit_counts_as_missing(self):
        with pytest.raises(PaginationError):
            paginate({"limit": None}, Direction.NEXT, count=10)

    def test_returns_copy(self):
        params = {"limit": 10, "offset": 10, "q": "x"}
        paged = paginate(params, Direction.NEXT)

        assert paged == {"limit": 10, "offset": 20, "q": "x"}
        assert params == {"limit": 10, "offset": 10, "q": "x"}

    def test_count_overrides_limit(self):
        paged = paginate({"limit": 10, "offset": 10}, Direction.NEXT, count="25")
        assert paged["limit"] == 25
        assert paged["offset"] == 35

    def test_missing_offset_defaults_to_zero(self):
        assert paginate({"limit": 10}, Direction.PREV)["offset"] == -10

    @pytest.mark.parametrize("params,count,page", [
        ({"limit": "ten"}, None, None),
        ({"limit": 10, "offset": "start"}, None, None),
        ({"limit": 10}, "many", None),
        ({"limit": 10}, None, "last"),
    ])
    def test_non_numeric_values_raise_pagination_error(self, params, count, page):
        with pytest.raises(PaginationError, match="is not an integer"):
            paginate(params, Direction.PAGE, count, page)


class TestPreview:
    """Test suite for preview."""

    def test_count_alone_resolves_limit(self):
        assert preview({"offset": 5}, Direction.NEXT, count=10) == {"offset": 15, "limit": 10}

    def test_no_limit_returns_none(self):
        assert preview({"offset": 5}, Direction.NEXT) is None
        assert preview({"limit": 0}, Direction.NEXT) is None

    def test_non_numeric_limit_raises(self):
        with pytest.raises(PaginationError, match="'limit'"):
            preview({"limit": "ten"}, Direction.NEXT)

    @pytest.mark.parametrize("direction,page", [
        (Direction.NEXT, None),
        (Direction.PREV, None),
        (Direction.PAGE, 3),
    ])
    def test_agrees_with_paginate(self, direction, page):
        params = {"limit": 15, "offset": 30}
        assert preview(params, direction, page=page) == paginate(params, direction, page=page)
