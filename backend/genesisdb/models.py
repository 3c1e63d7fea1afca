"""Canonical data structures for the GenesisDB client.

Read side: Event is what every read path hands back. Write side: CommitEvent
and Precondition are what commit_events sends. StreamOptions modifies the
stream and observe requests. Field names are snake_case in Python and
camelCase on the wire; serialize with ``model_dump(by_alias=True)``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------


class Event(BaseModel):
    """A CloudEvents-shaped event as returned by the server.

    Extension attributes the server adds are kept on the model and show up
    in ``model_dump()``.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    source: str
    subject: str
    type: str
    time: str | None = None  # opaque server timestamp, not parsed
    data: Any = None
    specversion: str = "1.0"
    datacontenttype: str | None = None


class StreamOptions(BaseModel):
    """Optional constraints for stream_events and observe_events.

    Unset fields are left out of the request entirely.
    """

    model_config = ConfigDict(populate_by_name=True)

    lower_bound: str | None = Field(default=None, alias="lowerBound")
    include_lower_bound_event: bool | None = Field(
        default=None, alias="includeLowerBoundEvent"
    )
    latest_by_event_type: str | None = Field(default=None, alias="latestByEventType")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Write side
# ---------------------------------------------------------------------------


class CommitEventOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    store_data_as_reference: bool | None = Field(
        default=None, alias="storeDataAsReference"
    )


class CommitEvent(BaseModel):
    """An event to be committed. The server assigns id and time."""

    source: str
    subject: str
    type: str
    data: Any = None
    options: CommitEventOptions | None = None

    def to_wire(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "source": self.source,
            "subject": self.subject,
            "type": self.type,
            "data": self.data,
        }
        if self.options is not None:
            body["options"] = self.options.model_dump(by_alias=True, exclude_none=True)
        return body


class Precondition(BaseModel):
    """A server-side check that gates a commit.

    The payload is forwarded verbatim; the client never interprets it.
    """

    type: str
    payload: Any

    @classmethod
    def is_subject_new(cls, subject: str) -> "Precondition":
        """Commit only if no event exists yet for ``subject``."""
        return cls(type="isSubjectNew", payload={"subject": subject})
