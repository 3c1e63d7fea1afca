"""Wire decoding: NDJSON lines to JSON records to Event models."""

from genesisdb.wire.events import DecodeMode, is_keep_alive, iter_events, materialize_event
from genesisdb.wire.lines import LineSplitter
from genesisdb.wire.pipeline import (
    EventDecoder,
    RecordDecoder,
    aiter_events,
    decode_events,
    decode_records,
)
from genesisdb.wire.records import SkipRecord, iter_records, normalize_record

__all__ = [
    "DecodeMode",
    "EventDecoder",
    "LineSplitter",
    "RecordDecoder",
    "SkipRecord",
    "aiter_events",
    "decode_events",
    "decode_records",
    "is_keep_alive",
    "iter_events",
    "iter_records",
    "materialize_event",
    "normalize_record",
]
