"""Ordered store of records backing a collection.

The store is only ever repopulated wholesale: every successful fetch
replaces its contents with exactly the records of the response, in
response order.
"""

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

from restcollection.core.exceptions import ResponseFormatError
from restcollection.domain.entities.record import Record

RecordFactory = Callable[[Mapping[str, Any]], Record]


def iter_payloads(payloads: Any) -> list[Any]:
    """Return record payloads in enumeration order.

    Args:
        payloads: A mapping whose values are payloads, or a sequence of payloads.

    Raises:
        ResponseFormatError: If ``payloads`` is neither.
    """
    if isinstance(payloads, Mapping):
        return list(payloads.values())
    if isinstance(payloads, Sequence) and not isinstance(payloads, (str, bytes)):
        return list(payloads)
    raise ResponseFormatError(
        f"Expected an object or array of records, got {type(payloads).__name__}"
    )


class RecordStore:
    """Ordered sequence of records."""

    def __init__(self, record_factory: RecordFactory = Record) -> None:
        """Initialize an empty store.

        Args:
            record_factory: Callable wrapping one payload mapping into a record.
        """
        self.record_factory = record_factory
        self._records: list[Record] = []

    def build(self, payloads: Any) -> list[Record]:
        """Wrap payloads into records without touching the store.

        Raises:
            ResponseFormatError: If any payload is not a mapping.
        """
        records = []
        for position, payload in enumerate(iter_payloads(payloads)):
            if not isinstance(payload, Mapping):
                raise ResponseFormatError(
                    f"Record payload at position {position} is not an object"
                )
            records.append(self.record_factory(payload))
        return records

    def extend(self, payloads: Any) -> None:
        """Append payloads as records, in enumeration order."""
        self._records.extend(self.build(payloads))

    def replace(self, payloads: Any) -> None:
        """Replace every record with the given payloads.

        Payloads are validated before the store is touched, so a malformed
        batch leaves the current records in place.
        """
        records = self.build(payloads)
        self._records = records

    def empty(self) -> None:
        """Remove every record."""
        self._records.clear()

    @property
    def records(self) -> list[Record]:
        """Snapshot of the current records."""
        return list(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> Record:
        return self._records[index]
