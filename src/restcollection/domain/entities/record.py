"""Record entity for a single item fetched from a remote collection.

A record is an open, ordered attribute map. Its ``length`` is derived from
the number of attributes and is never stored.
"""

import json
from collections.abc import Iterator, Mapping
from typing import Any


class Record:
    """Ordered key-value map holding one decoded item of a resource.

    Attributes are kept in insertion order, which for fetched records is
    the order of the keys in the response payload.
    """

    def __init__(self, attributes: Mapping[str, Any] | None = None) -> None:
        """Initialize the record.

        Args:
            attributes: Initial attributes, copied in their iteration order.
        """
        self._attributes: dict[str, Any] = {}
        if attributes is not None:
            if not isinstance(attributes, Mapping):
                raise ValueError(
                    f"Record attributes must be a mapping, got {type(attributes).__name__}"
                )
            for key, value in attributes.items():
                self._attributes[key] = value

    @property
    def id(self) -> Any:
        """The record's identity attribute, or None if absent."""
        return self._attributes.get("id")

    @property
    def length(self) -> int:
        """Number of attributes on the record."""
        return len(self._attributes)

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def has(self, key: str) -> bool:
        return key in self._attributes

    def keys(self) -> list[str]:
        return list(self._attributes.keys())

    def values(self) -> list[Any]:
        return list(self._attributes.values())

    def items(self) -> list[tuple[str, Any]]:
        return list(self._attributes.items())

    def count(self) -> int:
        return len(self._attributes)

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the attributes as a plain dict."""
        return dict(self._attributes)

    def __getitem__(self, key: str) -> Any:
        return self._attributes[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._attributes == other._attributes

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return json.dumps(self._attributes, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"
