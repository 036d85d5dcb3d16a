"""Infrastructure layer - External dependencies and implementations.

This layer contains everything that talks to the network:
- Transports (abstract base and the httpx implementation)
- The per-collection request controller

The infrastructure layer implements interfaces the application layer
depends on.
"""

from restcollection.infrastructure.request_controller import (
    REQUEST_TIMEOUT_MS,
    RequestController,
)
from restcollection.infrastructure.transport import (
    HttpxTransport,
    RequestDescriptor,
    Transport,
)

__all__ = [
    "REQUEST_TIMEOUT_MS",
    "HttpxTransport",
    "RequestController",
    "RequestDescriptor",
    "Transport",
]
