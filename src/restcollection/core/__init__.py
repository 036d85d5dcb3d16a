"""Core restcollection utilities.

This module exports configuration, logging and the error taxonomy for use
throughout the package.
"""

from restcollection.core.config import Settings, get_settings
from restcollection.core.exceptions import (
    CollectionError,
    ConfigurationError,
    HTTPStatusError,
    InvalidQueryError,
    PaginationError,
    RequestAbortedError,
    RequestError,
    RequestTimeoutError,
    ResponseFormatError,
    TransportError,
)
from restcollection.core.logging import (
    LoggingContext,
    bind_request_id,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggingContext",
    "bind_request_id",
    "CollectionError",
    "ConfigurationError",
    "HTTPStatusError",
    "InvalidQueryError",
    "PaginationError",
    "RequestAbortedError",
    "RequestError",
    "RequestTimeoutError",
    "ResponseFormatError",
    "TransportError",
]
