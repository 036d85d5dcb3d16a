"""Domain services for restcollection.

Pure functions for URL building, pagination arithmetic and local record
matching.
"""

from restcollection.domain.services.local_query import (
    find_by_id,
    get_where,
    like,
    loose_equals,
)
from restcollection.domain.services.pagination import (
    Direction,
    compute_offset,
    paginate,
    preview,
)
from restcollection.domain.services.query_string import (
    build_path,
    build_query_string,
    build_url,
    join_url,
)

__all__ = [
    "Direction",
    "build_path",
    "build_query_string",
    "build_url",
    "compute_offset",
    "find_by_id",
    "get_where",
    "join_url",
    "like",
    "loose_equals",
    "paginate",
    "preview",
]
