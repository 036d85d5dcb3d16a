"""Remote collection facade.

A ``RemoteCollection`` represents a paginated, filterable remote resource
as one ordered, in-memory set of records. Filtering, sorting, searching
and pagination rewrite the collection's query parameters and refetch;
every successful fetch replaces the records wholesale.

Collection "kinds" are declared by configuration rather than subclassing:
pass ``CollectionSettings`` for the resource, a ``record_factory`` to wrap
each payload (a ``Record`` subclass works) and an optional
``on_construct`` hook.

Example:
    articles = RemoteCollection(
        CollectionSettings(endpoint="https://api.example.com/articles", params={"limit": 20})
    )
    await articles.init()
    await articles.filter("status", "published")
    await articles.next()
    draft = articles.get_where({"status": "draft"}, 1)
"""

import asyncio
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from restcollection.core.exceptions import CollectionError, ResponseFormatError
from restcollection.core.logging import LoggingContext, get_logger
from restcollection.domain.entities.collection_settings import CollectionSettings
from restcollection.domain.entities.record import Record
from restcollection.domain.entities.record_store import RecordFactory, RecordStore
from restcollection.domain.services import local_query
from restcollection.domain.services.pagination import Direction, paginate, preview
from restcollection.domain.services.query_string import build_url
from restcollection.infrastructure.request_controller import RequestController
from restcollection.infrastructure.transport.base import Transport
from restcollection.infrastructure.transport.httpx_transport import HttpxTransport

logger = get_logger(__name__)


def _failed_future(error: CollectionError) -> asyncio.Future:
    """Return a future already failed with ``error``.

    Outside a running event loop there is nothing to hand back, so the
    error is raised directly.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        raise error from None
    future = loop.create_future()
    future.set_exception(error)
    # Mark retrieved so a caller that never awaits it is not warned
    future.exception()
    return future


class RemoteCollection:
    """An ordered set of records synchronized with a remote resource."""

    def __init__(
        self,
        settings: CollectionSettings | None = None,
        records: Any = None,
        *,
        transport: Transport | None = None,
        record_factory: RecordFactory = Record,
        on_construct: Callable[["RemoteCollection"], None] | None = None,
    ) -> None:
        """Initialize the collection.

        Args:
            settings: Collection settings. Defaults to an empty endpoint.
                With autoload enabled, construction must happen inside a
                running event loop.
            records: Optional seed payloads (a mapping whose values are
                payloads, or a sequence of payloads). Seeding disables autoload.
            transport: Transport for requests. Defaults to ``HttpxTransport``.
            record_factory: Wraps each payload mapping into a record.
            on_construct: Hook called with the collection once it is built.
        """
        self.settings = settings if settings is not None else CollectionSettings()
        self.store = RecordStore(record_factory)
        self.api = RequestController(self.settings, transport or HttpxTransport())
        self._init_future: asyncio.Future | None = None

        if records is None and self.settings.autoload and self.settings.endpoint:
            self.init()
        elif records is not None:
            self.store.extend(records)

        if on_construct is not None:
            on_construct(self)

    # Sequence protocol

    @property
    def records(self) -> list[Record]:
        """Snapshot of the records currently held."""
        return self.store.records

    def __len__(self) -> int:
        return len(self.store)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.store)

    def __getitem__(self, index: int) -> Record:
        return self.store[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self.settings.endpoint!r}, records={len(self)})"

    # Fetching

    def init(self, params: Mapping[str, Any] | None = None) -> asyncio.Future:
        """Perform the initial fetch, once.

        The first call merges ``params`` into the settings and fetches.
        Later calls return that same future without another request, and
        their ``params`` are ignored.
        """
        if self._init_future is None:
            if isinstance(params, Mapping):
                self.settings.params = {**self.settings.params, **params}
            self._init_future = self.refresh()
        return self._init_future

    def refresh(self) -> asyncio.Future:
        """Fetch with the current params and replace the records on success.

        The request is issued with the endpoint bound to the logging context,
        so every line logged for it carries the endpoint.
        """
        with LoggingContext(endpoint=self.settings.endpoint):
            return self.api.get(self.settings.params, on_success=self._populate)

    def _populate(self, response: Any) -> None:
        attribute = self.settings.result_attribute
        if not isinstance(response, Mapping) or attribute not in response:
            raise ResponseFormatError(f"Response has no '{attribute}' field")
        self.store.replace(response[attribute])
        logger.debug("Collection repopulated", records=len(self.store))

    def replace(self, params: Mapping[str, Any] | None = None) -> asyncio.Future:
        """Empty the collection and refetch, optionally with new params.

        Args:
            params: When given, replaces the params wholesale (not merged).
        """
        if params is not None:
            self.settings.params = dict(params)
        self.empty()
        return self.refresh()

    def empty(self) -> "RemoteCollection":
        """Remove every record, keeping this collection instance."""
        self.store.empty()
        return self

    # Query parameters

    def param(self, key: str, value: Any = None) -> None:
        """Set a query parameter without fetching.

        A falsy ``value`` removes the parameter entirely.
        """
        if value:
            self.settings.params[key] = value
        else:
            self.settings.params.pop(key, None)

    def filter(self, field: str, value: Any = None) -> asyncio.Future:
        """Filter on a field and refetch from the first page.

        A falsy ``value`` removes the filter.
        """
        self.param(field, value)
        self.settings.params["offset"] = 0
        return self.refresh()

    def sort(self, value: Any = None) -> asyncio.Future:
        """Sort by ``value`` (or drop sorting) and refetch from the first page."""
        return self.filter("sort", value)

    def search(self, value: Any = None) -> asyncio.Future:
        """Search for ``value`` (or drop the search) and refetch from the first page."""
        return self.filter("q", value)

    # Pagination

    def _paginate(
        self,
        direction: Direction,
        count: int | None = None,
        page: int | None = None,
    ) -> asyncio.Future:
        try:
            params = paginate(self.settings.params, direction, count, page)
        except CollectionError as e:
            return _failed_future(e)
        self.settings.params.update(limit=params["limit"], offset=params["offset"])
        return self.refresh()

    def next(self, count: int | None = None) -> asyncio.Future:
        """Fetch the next page. ``count`` overrides the limit."""
        return self._paginate(Direction.NEXT, count)

    def prev(self, count: int | None = None) -> asyncio.Future:
        """Fetch the previous page. The offset is not clamped at zero."""
        return self._paginate(Direction.PREV, count)

    def page(self, page: int, count: int | None = None) -> asyncio.Future:
        """Fetch a 1-indexed page."""
        return self._paginate(Direction.PAGE, count, page)

    # URLs

    def url(self, params: Mapping[str, Any] | str | None = None, segment: str | None = None) -> str:
        """Return the URL a request with ``params`` would be made to.

        Defaults to the current params.
        """
        if params is None:
            params = dict(self.settings.params)
        return build_url(self.settings.endpoint, params, segment)

    def _preview_url(
        self,
        direction: Direction,
        count: int | None = None,
        page: int | None = None,
    ) -> str:
        params = preview(dict(self.settings.params), direction, count, page)
        if params is None:
            return self.url()
        return self.url(params)

    def url_next(self, count: int | None = None) -> str:
        """URL of the next page, without fetching or changing params."""
        return self._preview_url(Direction.NEXT, count)

    def url_prev(self, count: int | None = None) -> str:
        """URL of the previous page, without fetching or changing params."""
        return self._preview_url(Direction.PREV, count)

    def url_page(self, page: int, count: int | None = None) -> str:
        """URL of a 1-indexed page, without fetching or changing params."""
        return self._preview_url(Direction.PAGE, count, page)

    # Local queries

    def get(self, id: Any) -> Record | None:
        """Return the first loaded record whose id loosely equals ``id``."""
        return local_query.find_by_id(self.store, id)

    def get_where(self, where: Any, limit: int | None = None) -> list[Record] | Record | None:
        """Return loaded records matching every clause of ``where``.

        With ``limit == 1`` the single match (or None) is returned, not a list.
        """
        return local_query.get_where(self.store, where, limit)

    def like(self, like: Any) -> list[Record]:
        """Return loaded records whose attributes match every pattern in ``like``."""
        return local_query.like(self.store, like)
