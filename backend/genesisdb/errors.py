"""Exception hierarchy for the GenesisDB client.

Only TransportError, ResourceError and ConfigurationError ever reach callers.
RecordDecodeError and MaterializationError are raised by the wire stages and
caught by the pipeline, which logs and skips the offending record.
"""

from typing import Any


class GenesisDBError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(GenesisDBError):
    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            f"Missing required environment variables: {', '.join(missing)}"
        )


class TransportError(GenesisDBError):
    """The server answered with a non-success status, or could not be reached.

    ``status_code`` is None when no response was received at all; the
    underlying httpx error is then chained as ``__cause__``.
    """

    def __init__(self, status_code: int | None, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            super().__init__(f"API Error: {reason}")
        else:
            super().__init__(f"API Error: {status_code} {reason}".rstrip())


class ResourceError(GenesisDBError):
    """The response body could not be read incrementally."""


class RecordDecodeError(GenesisDBError):
    def __init__(self, line: str, detail: str) -> None:
        self.line = line
        super().__init__(f"Malformed record: {detail}")


class MaterializationError(GenesisDBError):
    def __init__(self, record: Any, detail: str) -> None:
        self.record = record
        super().__init__(f"Record is not a valid event: {detail}")
