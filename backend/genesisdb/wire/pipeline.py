"""Decoding pipeline: LineSplitter -> normalize_record -> materialize_event.

The same decoder serves both the bulk read paths, which feed it one whole
response body, and the live tail, which feeds it chunk by chunk as they
arrive. Per-record failures are logged and skipped inside the stages; only
errors from the chunk source itself propagate.
"""

from collections.abc import AsyncIterable, AsyncIterator
from typing import Any

from genesisdb.models import Event
from genesisdb.wire.events import DecodeMode, iter_events
from genesisdb.wire.lines import LineSplitter
from genesisdb.wire.records import iter_records


class RecordDecoder:
    """Incremental NDJSON decoder producing raw JSON values."""

    def __init__(self) -> None:
        self._splitter = LineSplitter()

    def feed(self, fragment: str | bytes) -> list[Any]:
        return list(iter_records(self._splitter.feed(fragment)))

    def finish(self) -> list[Any]:
        return list(iter_records(self._splitter.finish()))


class EventDecoder:
    """Incremental NDJSON decoder producing Event models."""

    def __init__(self, mode: DecodeMode = "strict") -> None:
        self.mode = mode
        self._splitter = LineSplitter()

    def feed(self, fragment: str | bytes) -> list[Event]:
        return list(iter_events(iter_records(self._splitter.feed(fragment)), self.mode))

    def finish(self) -> list[Event]:
        return list(iter_events(iter_records(self._splitter.finish()), self.mode))


def decode_records(body: str | bytes) -> list[Any]:
    """Decode a complete NDJSON body into raw JSON values."""
    decoder = RecordDecoder()
    return decoder.feed(body) + decoder.finish()


def decode_events(body: str | bytes, mode: DecodeMode = "strict") -> list[Event]:
    """Decode a complete NDJSON body into events, in arrival order."""
    decoder = EventDecoder(mode)
    return decoder.feed(body) + decoder.finish()


async def aiter_events(
    chunks: AsyncIterable[str | bytes], mode: DecodeMode = "tolerant"
) -> AsyncIterator[Event]:
    """Lazily decode events from an async chunk source.

    Events completed by a chunk are yielded before the next chunk is
    requested, so a slow consumer holds back the transport read.
    """
    decoder = EventDecoder(mode)
    async for chunk in chunks:
        for event in decoder.feed(chunk):
            yield event
    for event in decoder.finish():
        yield event
