"""Single-flight request controller for a collection.

Every collection owns one controller. The controller keeps a handle on the
most recently issued request and, whenever a new request is issued, aborts
that handle first if it is still pending. At most one request per
collection is therefore live at any time, and only the latest request can
ever deliver a response to the collection.

Supersession happens when the verb is called, not when the request is
later dispatched: the last call wins even if several calls are issued
before the event loop gets to run any of them.
"""

import asyncio
import uuid
from collections.abc import Callable, Mapping
from functools import partial
from typing import Any

from restcollection.core.exceptions import (
    ConfigurationError,
    RequestAbortedError,
    RequestError,
    RequestTimeoutError,
)
from restcollection.core.logging import LoggingContext, bind_request_id, get_logger
from restcollection.domain.entities.collection_settings import CollectionSettings
from restcollection.domain.services.query_string import build_path, join_url
from restcollection.infrastructure.transport.base import RequestDescriptor, Transport

logger = get_logger(__name__)

# Fixed per-request timeout in milliseconds
REQUEST_TIMEOUT_MS = 5000

ResponseHandler = Callable[[Any], None]


class PendingRequest:
    """Handle on one issued request.

    Attributes:
        request_id: Identifier bound to log entries for this request.
        descriptor: The request being performed.
        future: Future handed to the caller; settles with the response.
        task: Task driving the transport call.
    """

    def __init__(self, request_id: str, descriptor: RequestDescriptor, future: asyncio.Future):
        self.request_id = request_id
        self.descriptor = descriptor
        self.future = future
        self.task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return not self.future.done()

    def abort(self) -> None:
        """Fail the caller's future with an abort and cancel the transport call."""
        if self.future.done():
            return
        self.future.set_exception(
            RequestAbortedError("Request superseded by a newer request", url=self.descriptor.url)
        )
        # Mark retrieved so an unawaited abort is not reported
        self.future.exception()
        if self.task is not None:
            self.task.cancel()


class RequestController:
    """Issues requests for one collection, one live request at a time."""

    def __init__(self, settings: CollectionSettings, transport: Transport) -> None:
        """Initialize the controller.

        Args:
            settings: Settings of the owning collection (endpoint, headers).
            transport: Transport performing the actual calls.
        """
        self.settings = settings
        self.transport = transport
        self._last_request: PendingRequest | None = None

    @property
    def last_request(self) -> PendingRequest | None:
        """The most recently issued request, settled or not."""
        return self._last_request

    def get(
        self,
        params: Mapping[str, Any] | str | None = None,
        segment: str | None = None,
        *,
        on_success: ResponseHandler | None = None,
    ) -> asyncio.Future:
        """Issue a GET for ``endpoint/segment/?params``."""
        return self._make_request("GET", build_path(params, segment), on_success=on_success)

    def put(
        self,
        data: Any,
        path: str | None = None,
        *,
        on_success: ResponseHandler | None = None,
    ) -> asyncio.Future:
        """Issue a PUT of ``data`` to ``endpoint/path``."""
        return self._make_request("PUT", path, data, on_success=on_success)

    def post(
        self,
        data: Any,
        path: str | None = None,
        *,
        on_success: ResponseHandler | None = None,
    ) -> asyncio.Future:
        """Issue a POST of ``data`` to ``endpoint/path``."""
        return self._make_request("POST", path, data, on_success=on_success)

    def delete(
        self,
        data: Any = None,
        params: Mapping[str, Any] | str | None = None,
        *,
        on_success: ResponseHandler | None = None,
    ) -> asyncio.Future:
        """Issue a DELETE for ``endpoint/params``.

        ``params`` is used as the path when it is a string and as the query
        string when it is a mapping.
        """
        return self._make_request("DELETE", build_path(params), data, on_success=on_success)

    def _make_request(
        self,
        method: str,
        path: str | None,
        data: Any = None,
        on_success: ResponseHandler | None = None,
    ) -> asyncio.Future:
        """Build, supersede and dispatch a request.

        Raises:
            ConfigurationError: If no endpoint is configured or no event loop
                is running. Raised before anything reaches the transport.
        """
        if not self.settings.endpoint:
            raise ConfigurationError("The API toolset has not been set up: no endpoint configured")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise ConfigurationError("Requests must be issued from a running event loop") from e

        descriptor = RequestDescriptor(
            method=method,
            url=join_url(self.settings.endpoint, path),
            timeout_ms=REQUEST_TIMEOUT_MS,
            body=data if method != "GET" and data else None,
            headers=dict(self.settings.headers),
        )
        request = PendingRequest(f"req_{uuid.uuid4().hex[:12]}", descriptor, loop.create_future())

        self._supersede()

        request.task = loop.create_task(self._run(request))
        request.task.add_done_callback(partial(self._settle, request, on_success))
        request.future.add_done_callback(partial(self._on_future_done, request))
        self._last_request = request

        logger.debug(
            "Request issued",
            method=method,
            url=descriptor.url,
            request_id=request.request_id,
        )
        return request.future

    def _supersede(self) -> None:
        previous = self._last_request
        if previous is not None and previous.pending:
            logger.debug(
                "Aborting superseded request",
                method=previous.descriptor.method,
                url=previous.descriptor.url,
                request_id=previous.request_id,
            )
            previous.abort()

    async def _run(self, request: PendingRequest) -> Any:
        bind_request_id(request.request_id)
        descriptor = request.descriptor
        try:
            return await asyncio.wait_for(
                self.transport.send(descriptor),
                timeout=descriptor.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(
                f"Request timed out after {descriptor.timeout_ms}ms", url=descriptor.url
            ) from e

    def _settle(
        self,
        request: PendingRequest,
        on_success: ResponseHandler | None,
        task: asyncio.Task,
    ) -> None:
        """Deliver the transport outcome to the caller's future.

        Aborted requests stop here: their future is already settled, so the
        response handler never runs.

        The handler runs with the request ID bound, so anything it logs is
        tied to the request it applies.
        """
        error = None if task.cancelled() else task.exception()

        if request.future.done():
            return

        if task.cancelled():
            request.future.cancel()
            return

        log = logger.bind(
            method=request.descriptor.method,
            url=request.descriptor.url,
            request_id=request.request_id,
        )

        if error is not None:
            if isinstance(error, RequestError):
                log.warning("Request failed", reason=error.reason, error=str(error))
            else:
                log.error("Request failed", error=str(error))
            request.future.set_exception(error)
            return

        response = task.result()
        try:
            if on_success is not None:
                with LoggingContext(request_id=request.request_id):
                    on_success(response)
        except Exception as e:
            log.warning("Response could not be applied", error=str(e))
            request.future.set_exception(e)
            return

        log.debug("Request completed")
        request.future.set_result(response)

    def _on_future_done(self, request: PendingRequest, future: asyncio.Future) -> None:
        # A caller cancelling its future cancels the transport call too
        if future.cancelled() and request.task is not None and not request.task.done():
            request.task.cancel()
