"""Line-to-JSON normalization for NDJSON and SSE-framed responses."""

import json
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from genesisdb.errors import RecordDecodeError

logger = logging.getLogger(__name__)

SSE_DATA_PREFIX = "data: "


class SkipRecord(Exception):
    """Raised for lines that carry no record at all (blank lines)."""


def normalize_record(line: str) -> Any:
    """Parse one line into a JSON value.

    Surrounding whitespace is trimmed and one leading ``data: `` frame prefix
    is removed. Raises SkipRecord for blank lines and RecordDecodeError when
    the remainder is not valid JSON.
    """
    text = line.strip()
    if not text:
        raise SkipRecord
    if text.startswith(SSE_DATA_PREFIX):
        text = text[len(SSE_DATA_PREFIX):]
    try:
        return json.loads(text)
    except ValueError as exc:
        raise RecordDecodeError(line, str(exc)) from exc


def iter_records(lines: Iterable[str]) -> Iterator[Any]:
    """Yield the JSON value of every usable line.

    Blank lines are skipped silently; malformed lines are logged and skipped
    so the rest of the stream still comes through.
    """
    for line in lines:
        try:
            record = normalize_record(line)
        except SkipRecord:
            continue
        except RecordDecodeError as exc:
            logger.warning("Skipping record: %s; line: %r", exc, exc.line)
            continue
        logger.debug("Parsed record: %r", record)
        yield record
