"""Pytest configuration for unit tests."""

import asyncio
from typing import Any

import pytest

from restcollection.core.config import get_settings
from restcollection.infrastructure.transport.base import RequestDescriptor, Transport

ENDPOINT = "https://api.example.com/articles"


class FakeTransport(Transport):
    """In-memory transport recording requests.

    Responses are looked up by URL; an exception instance is raised instead
    of returned. ``hold(url)`` makes requests to that URL wait until the
    returned event is set.
    """

    def __init__(self, responses: dict[str, Any] | None = None, default: Any = None) -> None:
        self.responses = responses or {}
        self.default = default if default is not None else {"data": {}}
        self.requests: list[RequestDescriptor] = []
        self.cancelled: list[str] = []
        self.gates: dict[str, asyncio.Event] = {}

    def hold(self, url: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[url] = gate
        return gate

    @property
    def urls(self) -> list[str]:
        return [request.url for request in self.requests]

    async def send(self, request: RequestDescriptor) -> Any:
        self.requests.append(request)
        gate = self.gates.get(request.url)
        if gate is not None:
            try:
                await gate.wait()
            except asyncio.CancelledError:
                self.cancelled.append(request.url)
                raise
        response = self.responses.get(request.url, self.default)
        if isinstance(response, Exception):
            raise response
        return response


def envelope(*records: dict[str, Any], attribute: str = "data") -> dict[str, Any]:
    """Build a response whose records are keyed by position, like the API does."""
    return {attribute: {str(index): record for index, record in enumerate(records)}}


async def settle(rounds: int = 5) -> None:
    """Let pending callbacks and cancellations run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Reload settings for every test so env patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
