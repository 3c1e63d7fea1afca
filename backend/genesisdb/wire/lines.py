"""Newline splitting over arbitrarily fragmented input."""

import codecs


class LineSplitter:
    """Turn a sequence of text or byte fragments into complete lines.

    Fragment boundaries never matter: feeding ``'{"a":1}\\n{"a"'`` and then
    ``':2}\\n'`` produces the same two lines as feeding the joined string.
    Bytes are decoded as UTF-8 incrementally, so a multi-byte character cut
    in half by the transport is reassembled before splitting.

    A splitter belongs to exactly one read. It is not thread-safe and keeps
    no bound on the buffered tail.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def feed(self, fragment: str | bytes) -> list[str]:
        """Append a fragment and return every line it completes.

        Lines are returned without their ``\\n``. The unterminated remainder
        stays buffered until a later fragment completes it.
        """
        if isinstance(fragment, bytes):
            fragment = self._decoder.decode(fragment)
        self._buffer += fragment

        lines: list[str] = []
        start = 0
        while (newline := self._buffer.find("\n", start)) >= 0:
            lines.append(self._buffer[start:newline])
            start = newline + 1
        self._buffer = self._buffer[start:]
        return lines

    def finish(self) -> list[str]:
        """Signal end of input and flush the unterminated remainder.

        A body whose last record lacks a trailing newline still yields that
        record. The splitter is empty afterwards and may be reused.
        """
        tail = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        self._decoder.reset()
        return [tail] if tail else []

    @property
    def pending(self) -> str:
        """The buffered, not yet newline-terminated text."""
        return self._buffer
