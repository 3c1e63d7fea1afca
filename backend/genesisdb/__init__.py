"""Async Python client for the GenesisDB event store."""

from genesisdb.client import Client
from genesisdb.config import ClientConfig
from genesisdb.errors import (
    ConfigurationError,
    GenesisDBError,
    MaterializationError,
    RecordDecodeError,
    ResourceError,
    TransportError,
)
from genesisdb.models import CommitEvent, CommitEventOptions, Event, Precondition, StreamOptions

__all__ = [
    "Client",
    "ClientConfig",
    "CommitEvent",
    "CommitEventOptions",
    "ConfigurationError",
    "Event",
    "GenesisDBError",
    "MaterializationError",
    "Precondition",
    "RecordDecodeError",
    "ResourceError",
    "StreamOptions",
    "TransportError",
]
