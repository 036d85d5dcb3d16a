"""httpx-backed transport implementation."""

from typing import Any

import httpx

from restcollection.core.config import get_settings
from restcollection.core.exceptions import (
    HTTPStatusError,
    RequestTimeoutError,
    TransportError,
)
from restcollection.core.logging import get_logger
from restcollection.infrastructure.transport.base import RequestDescriptor, Transport

logger = get_logger(__name__)


class HttpxTransport(Transport):
    """Transport performing requests with ``httpx.AsyncClient``.

    A fresh client is opened per request unless one is injected, in which
    case the caller owns its lifecycle. Redirects are followed
    transparently.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """Initialize the transport.

        Args:
            client: Optional shared client.
        """
        self._client = client

    def _default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": get_settings().user_agent,
        }

    async def send(self, request: RequestDescriptor) -> Any:
        """Perform a request and return the decoded JSON body."""
        headers = {**self._default_headers(), **request.headers}
        kwargs: dict[str, Any] = {
            "headers": headers,
            "timeout": request.timeout_seconds,
            "follow_redirects": True,
        }
        if request.body is not None:
            kwargs["json"] = request.body

        try:
            if self._client is not None:
                response = await self._client.request(request.method, request.url, **kwargs)
            else:
                async with httpx.AsyncClient(verify=get_settings().verify_ssl) as client:
                    response = await client.request(request.method, request.url, **kwargs)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"Request timed out after {request.timeout_ms}ms", url=request.url
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}", url=request.url) from e

        if not response.is_success:
            raise HTTPStatusError(
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                url=request.url,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.warning(
                "Response body is not valid JSON",
                url=request.url,
                status_code=response.status_code,
            )
            raise TransportError("Response body is not valid JSON", url=request.url) from e
