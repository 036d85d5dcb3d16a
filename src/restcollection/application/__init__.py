"""Application layer - the collection facade used by client code."""

from restcollection.application.remote_collection import RemoteCollection

__all__ = ["RemoteCollection"]
