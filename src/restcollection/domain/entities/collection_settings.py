"""Per-collection settings.

Each collection instance owns exactly one settings object. Filtering,
sorting, searching and pagination mutate ``params`` in place; only an
explicit replace swaps the whole map.
"""

from dataclasses import dataclass, field
from typing import Any

from restcollection.core.config import get_settings


def _default_result_attribute() -> str:
    return get_settings().default_result_attribute


@dataclass
class CollectionSettings:
    """Static configuration for one remote collection.

    Attributes:
        endpoint: Base resource URL. Trailing slashes are stripped when
            building request URLs.
        params: Query parameters. None values are kept as unset filters
            and never serialized.
        result_attribute: Field of a response that holds the record payloads.
        autoload: Fetch at construction time when no seed records are given.
        headers: Extra headers sent with every request.
    """

    endpoint: str = ""
    params: dict[str, Any] = field(default_factory=dict)
    result_attribute: str = field(default_factory=_default_result_attribute)
    autoload: bool = False
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not isinstance(self.params, dict):
            raise ValueError("params must be a dictionary")
        if not self.result_attribute:
            raise ValueError("result_attribute is required")
        # Own copies; the caller's dicts are not aliased
        self.params = dict(self.params)
        self.headers = dict(self.headers)
