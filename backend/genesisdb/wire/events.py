"""Mapping of decoded JSON records onto Event models."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Literal

from pydantic import ValidationError

from genesisdb.errors import MaterializationError
from genesisdb.models import Event

logger = logging.getLogger(__name__)

# "strict": every record must become an event.
# "tolerant": keep-alive frames from a live tail are dropped first.
DecodeMode = Literal["strict", "tolerant"]


def is_keep_alive(record: Any) -> bool:
    """True for a one-key object whose only value is an empty string.

    The live tail sends e.g. ``{"payload": ""}`` to keep the connection open.
    """
    return isinstance(record, dict) and len(record) == 1 and next(iter(record.values())) == ""


def materialize_event(record: Any, mode: DecodeMode = "strict") -> Event | None:
    """Build an Event from a decoded record.

    Returns None for a keep-alive in tolerant mode. Raises
    MaterializationError if the record is not an object or lacks the
    required envelope fields.
    """
    if mode == "tolerant" and is_keep_alive(record):
        return None
    if not isinstance(record, dict):
        raise MaterializationError(record, f"expected an object, got {type(record).__name__}")
    try:
        return Event.model_validate(record)
    except ValidationError as exc:
        raise MaterializationError(record, str(exc)) from exc


def iter_events(records: Iterable[Any], mode: DecodeMode = "strict") -> Iterator[Event]:
    """Yield an Event per record, skipping keep-alives and invalid records."""
    for record in records:
        try:
            event = materialize_event(record, mode)
        except MaterializationError as exc:
            logger.warning("Skipping record: %s; record: %r", exc, exc.record)
            continue
        if event is None:
            logger.debug("Dropped keep-alive record")
            continue
        logger.debug("Created event: %r", event)
        yield event
