"""Async client for the GenesisDB HTTP API.

Bulk reads (stream_events, q) buffer the whole response and decode it in
one pass. observe_events keeps the connection open and decodes chunk by
chunk, yielding events as they complete.
"""

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import aclosing
from typing import Any

import httpx

from genesisdb.config import ClientConfig
from genesisdb.errors import ResourceError, TransportError
from genesisdb.models import CommitEvent, Event, Precondition, StreamOptions
from genesisdb.wire import aiter_events, decode_events, decode_records

logger = logging.getLogger(__name__)

USER_AGENT = "genesisdb-sdk"
NDJSON = "application/x-ndjson"


class Client:
    """GenesisDB client. One instance may serve concurrent calls.

    Pass ``http_client`` to share an existing httpx.AsyncClient; it is then
    left open by aclose(). Otherwise the client creates and owns one.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        api_url: str | None = None,
        api_version: str | None = None,
        auth_token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or ClientConfig.resolve(api_url, api_version, auth_token)
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # ---------- Read paths ----------

    async def stream_events(
        self, subject: str, options: StreamOptions | dict | None = None
    ) -> list[Event]:
        """Return every stored event for ``subject``, oldest first."""
        response = await self._request(
            "POST",
            "stream",
            action="streaming events",
            json=self._subject_body(subject, options),
            accept=NDJSON,
        )
        body = response.text
        if not body.strip():
            logger.info("No events found for subject: %s", subject)
            return []
        return decode_events(body, "strict")

    async def observe_events(
        self, subject: str, options: StreamOptions | dict | None = None
    ) -> AsyncIterator[Event]:
        """Yield events for ``subject`` as the server pushes them.

        The generator is single use and normally never ends on its own. Close
        it (``aclose()``, or iterate inside ``contextlib.aclosing``) to stop
        early; that releases the HTTP connection.
        """
        action = "observing events"
        logger.debug("POST observe subject=%s", subject)
        try:
            async with self._http.stream(
                "POST",
                self._url("observe"),
                json=self._subject_body(subject, options),
                headers=self._headers(accept=NDJSON),
                timeout=None,
            ) as response:
                self._raise_for_status(response, action)
                async with aclosing(aiter_events(response.aiter_bytes(), "tolerant")) as events:
                    async for event in events:
                        yield event
        except httpx.HTTPError as exc:
            logger.error("Error while %s: %s", action, exc)
            raise TransportError(None, str(exc)) from exc
        except httpx.StreamError as exc:
            logger.error("Response body unavailable while %s: %s", action, exc)
            raise ResourceError(str(exc)) from exc

    async def q(self, query: str) -> list[Any]:
        """Run a query and return its result rows as plain JSON values."""
        response = await self._request(
            "POST",
            "q",
            action="querying",
            json={"query": query},
            accept=NDJSON,
        )
        body = response.text
        if not body.strip():
            return []
        return decode_records(body)

    # ---------- Writes ----------

    async def commit_events(
        self,
        events: Iterable[CommitEvent | dict],
        preconditions: Iterable[Precondition | dict] | None = None,
    ) -> None:
        """Commit events atomically, optionally guarded by preconditions.

        Example::

            await client.commit_events(
                [CommitEvent(source="io.genesisdb.app", subject="/foo/21",
                             type="io.genesisdb.app.foo-added", data={"value": "Foo"})],
                [Precondition.is_subject_new("/foo/21")],
            )
        """
        body: dict[str, Any] = {
            "events": [CommitEvent.model_validate(e).to_wire() for e in events],
        }
        checks = [Precondition.model_validate(p).model_dump() for p in preconditions or ()]
        if checks:
            body["preconditions"] = checks
        await self._request("POST", "commit", action="committing events", json=body)

    async def erase_data(self, subject: str) -> None:
        """Erase the data of every event under ``subject`` (GDPR)."""
        await self._request("POST", "erase", action="erasing data", json={"subject": subject})

    # ---------- Status ----------

    async def audit(self) -> str:
        response = await self._request(
            "GET", "status/audit", action="running audit", content_type="text/plain"
        )
        return response.text

    async def ping(self) -> str:
        response = await self._request(
            "GET", "status/ping", action="pinging", content_type="text/plain"
        )
        return response.text

    # ---------- Internals ----------

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}/{path}"

    def _headers(
        self, *, accept: str | None = None, content_type: str = "application/json"
    ) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.config.auth_token}",
            "Content-Type": content_type,
            "User-Agent": USER_AGENT,
        }
        if accept:
            headers["Accept"] = accept
        return headers

    @staticmethod
    def _subject_body(subject: str, options: StreamOptions | dict | None) -> dict[str, Any]:
        body: dict[str, Any] = {"subject": subject}
        if options is not None:
            wire = StreamOptions.model_validate(options).to_wire()
            if wire:
                body["options"] = wire
        return body

    async def _request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        json: Any = None,
        accept: str | None = None,
        content_type: str = "application/json",
    ) -> httpx.Response:
        """Send a buffered request; raise TransportError unless it succeeds."""
        logger.debug("%s %s", method, path)
        try:
            response = await self._http.request(
                method,
                self._url(path),
                json=json,
                headers=self._headers(accept=accept, content_type=content_type),
            )
        except httpx.HTTPError as exc:
            logger.error("Error while %s: %s", action, exc)
            raise TransportError(None, str(exc)) from exc
        self._raise_for_status(response, action)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        logger.error(
            "API Error while %s: status=%s reason=%s headers=%s",
            action,
            response.status_code,
            response.reason_phrase,
            dict(response.headers),
        )
        raise TransportError(response.status_code, response.reason_phrase)
