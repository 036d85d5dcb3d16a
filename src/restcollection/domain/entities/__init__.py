"""Domain entities for restcollection.

Entities are plain Python classes that represent core concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from restcollection.domain.entities.collection_settings import CollectionSettings
from restcollection.domain.entities.record import Record
from restcollection.domain.entities.record_store import RecordFactory, RecordStore

__all__ = [
    "CollectionSettings",
    "Record",
    "RecordFactory",
    "RecordStore",
]
