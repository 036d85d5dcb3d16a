"""Unit tests for local record matching."""

import pytest

from restcollection.core.exceptions import InvalidQueryError
from restcollection.domain.entities.record import Record
from restcollection.domain.services.local_query import (
    find_by_id,
    get_where,
    like,
    loose_equals,
    to_number,
)


@pytest.fixture
def records():
    return [
        Record({"id": "5", "name": "John", "role": "admin", "a": 1, "b": 2}),
        Record({"id": 6, "name": "Joanna", "role": "editor", "a": 1, "b": 3}),
        Record({"id": "7", "name": "Mary", "role": "admin", "a": "1", "b": "2"}),
        Record({"id": "c0ffee-uuid", "name": None, "active": True}),
    ]


class TestLooseEquals:
    """Test suite for loose_equals."""

    @pytest.mark.parametrize("left,right", [
        (5, "5"),
        ("5", 5),
        (5.0, "5"),
        (" 5 ", 5),
        (True, 1),
        (True, "1"),
        ("x", "x"),
        (None, None),
    ])
    def test_equal(self, left, right):
        assert loose_equals(left, right) is True

    @pytest.mark.parametrize("left,right", [
        ("5", "5.0"),
        ("abc", 5),
        ("", 0),
        (None, 0),
        (0, None),
        ("nan", float("nan")),
        ([1], 1),
    ])
    def test_not_equal(self, left, right):
        assert loose_equals(left, right) is False


def test_to_number():
    assert to_number("12.5") == 12.5
    assert to_number(False) == 0.0
    assert to_number("twelve") is None
    assert to_number("nan") is None
    assert to_number([1]) is None


class TestFindById:
    """Test suite for find_by_id."""

    def test_string_id_matches_number(self, records):
        assert find_by_id(records, 5) is records[0]

    def test_number_id_matches_string(self, records):
        assert find_by_id(records, "6") is records[1]

    def test_non_numeric_id_matches_text(self, records):
        assert find_by_id(records, "c0ffee-uuid") is records[3]

    def test_not_found(self, records):
        assert find_by_id(records, 99) is None
        assert find_by_id([], 5) is None

    def test_first_match_wins(self):
        first, second = Record({"id": 1, "n": "a"}), Record({"id": "1", "n": "b"})
        assert find_by_id([first, second], 1) is first


class TestGetWhere:
    """Test suite for get_where."""

    def test_limit_one_returns_single_record(self, records):
        result = get_where(records, {"id": 5}, 1)
        assert result is records[0]

    def test_limit_one_without_match_returns_none(self, records):
        assert get_where(records, {"id": 42}, 1) is None

    def test_all_clauses_must_match(self, records):
        result = get_where(records, {"a": 1, "b": 2})
        assert result == [records[0], records[2]]
        assert records[1] not in result

    def test_absent_attribute_never_matches(self, records):
        assert get_where(records, {"active": True, "role": "admin"}) == []

    def test_limit_stops_scan(self, records):
        assert get_where(records, {"a": 1}, 2) == [records[0], records[1]]

    def test_empty_where_matches_all(self, records):
        assert get_where(records, {}) == records

    def test_non_mapping_returns_empty_list(self, records):
        assert get_where(records, "id=5") == []
        assert get_where(records, None, 1) == []


class TestLike:
    """Test suite for like."""

    def test_case_insensitive_substring(self, records):
        assert like(records, {"name": "jo"}) == [records[0], records[1]]

    def test_all_clauses_must_match(self, records):
        assert like(records, {"name": "jo", "role": "admin"}) == [records[0]]

    def test_regular_expressions(self, records):
        assert like(records, {"name": "^ma"}) == [records[2]]

    def test_none_attribute_never_matches(self, records):
        assert records[3] not in like(records, {"name": ".*"})

    def test_booleans_match_json_text(self, records):
        assert like(records, {"active": "TRUE"}) == [records[3]]

    def test_non_mapping_returns_empty_list(self, records):
        assert like(records, ["name"]) == []

    def test_invalid_pattern(self, records):
        with pytest.raises(InvalidQueryError, match="name"):
            like(records, {"name": "(unclosed"})
