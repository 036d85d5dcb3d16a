"""Query string and URL building for collection requests.

Parameters are serialized as ``?k=v&k2=v2`` with keys and values
percent-encoded individually, using the same safe set as JavaScript's
``encodeURIComponent`` so that URLs match what browser clients produce.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

# Characters encodeURIComponent leaves untouched besides alphanumerics
URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(value: Any) -> str:
    """Percent-encode a single key or value.

    Args:
        value: Scalar to encode. Booleans serialize as true/false.

    Returns:
        The encoded string.
    """
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe=URI_COMPONENT_SAFE)


def build_query_string(params: Mapping[str, Any] | str | None) -> str:
    """Build the query string part of a request URL.

    Args:
        params: A mapping of parameters, or a pre-built string used verbatim.

    Returns:
        ``?k=v&...`` for a mapping with at least one non-None value, the
        string itself for a string, otherwise an empty string.
    """
    if isinstance(params, Mapping):
        pairs = [
            f"{encode_component(key)}={encode_component(value)}"
            for key, value in params.items()
            if value is not None
        ]
        return "?" + "&".join(pairs) if pairs else ""
    if params:
        return str(params)
    return ""


def build_path(params: Mapping[str, Any] | str | None = None, segment: str | None = None) -> str:
    """Build the part of a URL that follows the endpoint.

    Args:
        params: Query parameters (see ``build_query_string``).
        segment: Optional path segment placed before the query string.

    Returns:
        ``segment/?query`` when a segment is given, otherwise ``?query``.
    """
    query_string = build_query_string(params)
    if segment:
        return f"{segment}/{query_string}"
    return query_string


def join_url(endpoint: str, path: str | None = None) -> str:
    """Join an endpoint and a path, stripping trailing endpoint slashes."""
    return endpoint.rstrip("/") + "/" + (path or "")


def build_url(
    endpoint: str,
    params: Mapping[str, Any] | str | None = None,
    segment: str | None = None,
) -> str:
    """Build the full URL for an endpoint, parameters and segment.

    Example:
        >>> build_url("https://api.example.com/articles/", {"limit": 10, "q": None})
        'https://api.example.com/articles/?limit=10'
    """
    return join_url(endpoint, build_path(params, segment))
