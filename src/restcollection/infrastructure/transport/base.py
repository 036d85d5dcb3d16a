"""Base abstractions for transports."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class RequestDescriptor:
    """Everything a transport needs to perform one request."""

    method: str
    url: str
    timeout_ms: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


class Transport(ABC):
    """Abstract base class for request transports.

    Cancellation is asyncio task cancellation: a transport must release its
    connection when the awaiting task is cancelled.
    """

    @abstractmethod
    async def send(self, request: RequestDescriptor) -> Any:
        """Perform a request and return the decoded JSON body.

        Args:
            request: The request to perform.

        Returns:
            The decoded response body.

        Raises:
            RequestTimeoutError: If the request exceeds its timeout.
            HTTPStatusError: If the server answers with a non-2xx status.
            TransportError: If the request fails before a response arrives.
        """
        ...
