"""Exceptions raised by collections and their request lifecycle."""


class CollectionError(Exception):
    """Base class for all collection-related errors."""
    pass


class ConfigurationError(CollectionError):
    """Raised synchronously when a collection cannot issue a request.

    The endpoint is unset, or no event loop is running.
    """
    pass


class PaginationError(CollectionError):
    """Raised when a pagination call has no resolvable limit."""
    pass


class InvalidQueryError(CollectionError):
    """Raised when a local query clause cannot be compiled."""
    pass


class ResponseFormatError(CollectionError):
    """Raised when a response does not carry a usable record envelope."""
    pass


class RequestError(CollectionError):
    """Base class for failures of an issued request.

    Attributes:
        reason: Short machine-readable failure reason.
        url: The URL the request targeted, when known.
    """

    reason = "error"

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)


class RequestTimeoutError(RequestError):
    """Raised when a request does not settle within the fixed timeout."""

    reason = "timeout"


class TransportError(RequestError):
    """Raised when the network layer fails before a response arrives."""

    reason = "transport_error"


class HTTPStatusError(RequestError):
    """Raised when the server answers with a non-2xx status."""

    reason = "http_error"

    def __init__(self, message: str, status_code: int, url: str | None = None):
        self.status_code = status_code
        super().__init__(message, url=url)


class RequestAbortedError(RequestError):
    """Raised by a request that was superseded by a newer one."""

    reason = "abort"
