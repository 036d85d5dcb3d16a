"""Matching of already-loaded records.

Provides exact (``get_where``) and fuzzy (``like``) predicate matching over
records held in memory. Nothing here performs network activity.

Comparison is loose: a number and a numeric-looking string are equal when
their numeric values are, so ``{"id": 5}`` matches a record whose id
arrived as ``"5"``.
"""

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from restcollection.core.exceptions import InvalidQueryError
from restcollection.domain.entities.record import Record

_MISSING = object()


def to_number(value: Any) -> float | None:
    """Coerce a value to a float, or None if it is not numeric.

    Args:
        value: Number, bool or string.

    Returns:
        The numeric value, or None for non-numeric strings, NaN and other types.
    """
    if isinstance(value, (bool, int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def loose_equals(left: Any, right: Any) -> bool:
    """Compare two values with numeric coercion.

    Args:
        left: First value.
        right: Second value.

    Returns:
        True if the values are equal, or if either side is a number and
        both coerce to the same numeric value.
    """
    if left is None or right is None:
        return left is right
    if left == right:
        return True
    if isinstance(left, str) and isinstance(right, str):
        return False
    if isinstance(left, (bool, int, float)) or isinstance(right, (bool, int, float)):
        left_number = to_number(left)
        right_number = to_number(right)
        return left_number is not None and left_number == right_number
    return False


def ids_match(record_id: Any, wanted: Any) -> bool:
    """Compare record ids numerically, falling back to text for non-numeric ids."""
    if record_id is None or wanted is None:
        return False
    record_number = to_number(record_id)
    wanted_number = to_number(wanted)
    if record_number is not None and wanted_number is not None:
        return record_number == wanted_number
    return str(record_id) == str(wanted)


def find_by_id(records: Iterable[Record], wanted: Any) -> Record | None:
    """Return the first record whose id loosely equals ``wanted``."""
    for record in records:
        if ids_match(record.get("id"), wanted):
            return record
    return None


def matches_where(record: Record, where: Mapping[str, Any]) -> bool:
    """Check that every clause in ``where`` matches the record.

    A clause whose attribute is absent from the record does not match.
    """
    for clause, expected in where.items():
        actual = record.get(clause, _MISSING)
        if actual is _MISSING or not loose_equals(actual, expected):
            return False
    return True


def get_where(
    records: Iterable[Record],
    where: Any,
    limit: int | None = None,
) -> list[Record] | Record | None:
    """Return records matching all clauses of ``where``.

    Args:
        records: Records to scan, in store order.
        where: Mapping of attribute name to expected value.
        limit: Stop once this many matches are collected.

    Returns:
        A list of matches. When ``limit`` is 1 the single match (or None)
        is returned instead of a list. A non-mapping ``where`` yields [].
    """
    if not isinstance(where, Mapping):
        return []

    matched: list[Record] = []
    for record in records:
        if limit is not None and len(matched) >= limit:
            break
        if matches_where(record, where):
            matched.append(record)

    if limit == 1:
        return matched[0] if matched else None
    return matched


def compile_like(like: Mapping[str, Any]) -> dict[str, re.Pattern[str]]:
    """Compile each clause value into a case-insensitive pattern.

    Raises:
        InvalidQueryError: If a clause is not a valid regular expression.
    """
    patterns: dict[str, re.Pattern[str]] = {}
    for clause, pattern in like.items():
        try:
            patterns[clause] = re.compile(str(pattern), re.IGNORECASE)
        except re.error as e:
            raise InvalidQueryError(f"Invalid pattern for '{clause}': {e}") from e
    return patterns


def _attribute_text(value: Any) -> str:
    # Booleans render the way JSON clients expect
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def like(records: Iterable[Record], like: Any) -> list[Record]:
    """Return records where every clause pattern matches the attribute text.

    Args:
        records: Records to scan, in store order.
        like: Mapping of attribute name to a regular expression (a plain
            substring works as-is).

    Returns:
        Matching records. A non-mapping ``like`` yields [].
    """
    if not isinstance(like, Mapping):
        return []

    patterns = compile_like(like)
    matched: list[Record] = []
    for record in records:
        match = 0
        for clause, pattern in patterns.items():
            value = record.get(clause)
            if value is not None and pattern.search(_attribute_text(value)):
                match += 1
        if match == len(patterns):
            matched.append(record)
    return matched
