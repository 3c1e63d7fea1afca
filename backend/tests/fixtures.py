"""Shared test helpers: event payloads, NDJSON bodies, controllable streams."""

import json
from collections.abc import Iterable
from typing import Any
from uuid import uuid4

import httpx


def make_event_record(
    event_id: str | None = None,
    subject: str = "/customer/123",
    type: str = "io.genesisdb.app.customer-added",
    source: str = "tenant-1",
    data: Any = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build an event as the server would send it on the wire."""
    record = {
        "id": event_id or str(uuid4()),
        "source": source,
        "subject": subject,
        "type": type,
        "time": "2025-01-01T00:00:00Z",
        "datacontenttype": "application/json",
        "specversion": "1.0",
        "data": data if data is not None else {"firstName": "Bruce"},
    }
    record.update(extra)
    return record


def ndjson(*records: Any) -> str:
    """Join records into a newline-terminated NDJSON body."""
    return "".join(json.dumps(r) + "\n" for r in records)


def split_every(text: str, size: int) -> list[str]:
    """Cut text into fragments of ``size`` characters (the last may be shorter)."""
    return [text[i:i + size] for i in range(0, len(text), size)]


class ChunkedStream(httpx.AsyncByteStream):
    """Response body delivered one chunk per read, recording what happened.

    ``sent`` counts chunks handed to httpx, ``closed`` flips when the
    response is released.
    """

    def __init__(self, chunks: Iterable[bytes | str], error: Exception | None = None) -> None:
        self.chunks = [c.encode() if isinstance(c, str) else c for c in chunks]
        self.error = error
        self.sent = 0
        self.closed = False

    async def __aiter__(self):
        for chunk in self.chunks:
            self.sent += 1
            yield chunk
        if self.error is not None:
            raise self.error

    async def aclose(self) -> None:
        self.closed = True


class RecordingHandler:
    """MockTransport handler that returns a fixed response and keeps requests."""

    def __init__(
        self,
        status_code: int = 200,
        text: str = "",
        stream: httpx.AsyncByteStream | None = None,
        error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.text = text
        self.stream = stream
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.stream is not None:
            return httpx.Response(self.status_code, stream=self.stream)
        return httpx.Response(self.status_code, text=self.text)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> Any:
        return json.loads(self.last_request.content)
