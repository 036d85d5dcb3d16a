"""Transports performing collection requests."""

from restcollection.infrastructure.transport.base import RequestDescriptor, Transport
from restcollection.infrastructure.transport.httpx_transport import HttpxTransport

__all__ = [
    "HttpxTransport",
    "RequestDescriptor",
    "Transport",
]
