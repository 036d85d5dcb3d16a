"""restcollection - remote, paginated collections as in-memory objects.

Represents a filterable, paginated REST resource as one ordered set of
records, with single-flight request handling and local record queries.
"""

__version__ = "0.1.0"

from restcollection.application.remote_collection import RemoteCollection
from restcollection.domain.entities.collection_settings import CollectionSettings
from restcollection.domain.entities.record import Record

__all__ = ["CollectionSettings", "Record", "RemoteCollection", "__version__"]
