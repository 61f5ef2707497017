"""Server-sent event reader with fixed-interval reconnects."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import AsyncGenerator, AsyncIterator, Protocol

import httpx

from flowdock.errors import EventSourceClosed, EventSourceError
from flowdock.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class Frame:
    """One dispatched SSE event."""

    data: str
    event: str = "message"
    id: str | None = None


class FrameSource(Protocol):
    async def read(self) -> Frame: ...

    async def aclose(self) -> None: ...


class EventSource:
    """Long-lived GET on an event-stream endpoint.

    Dropped connections and transport errors are retried after
    ``retry_interval`` seconds (or the server's ``retry:`` hint), resending
    the last event id. More than ``max_retries`` consecutive failed attempts,
    or any non-2xx status, make ``read()`` raise EventSourceError. HTTP 204 is the
    server asking us to stop and raises EventSourceClosed.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        retry_interval: float = 3.0,
        max_retries: int | None = 5,
    ) -> None:
        self._client = client
        self._url = url
        self._params = params or {}
        self._headers = {
            "Accept": "text/event-stream",
            "Cache-Control": "no-cache",
            **(headers or {}),
        }
        self.retry_interval = retry_interval
        self.max_retries = max_retries
        self.last_event_id: str | None = None
        self._closed = False
        self._frames: AsyncGenerator[Frame, None] | None = self._iter_frames()

    @property
    def closed(self) -> bool:
        return self._closed

    async def read(self) -> Frame:
        """Return the next frame, reconnecting as needed."""
        if self._closed or self._frames is None:
            raise EventSourceClosed("event source is closed")
        try:
            return await self._frames.__anext__()
        except StopAsyncIteration:
            self._closed = True
            raise EventSourceClosed("event source is closed") from None

    async def aclose(self) -> None:
        self._closed = True
        frames, self._frames = self._frames, None
        if frames is not None:
            await frames.aclose()

    # ------------------------------------------------------------------

    async def _iter_frames(self) -> AsyncGenerator[Frame, None]:
        failures = 0

        while not self._closed:
            headers = dict(self._headers)
            if self.last_event_id:
                headers["Last-Event-ID"] = self.last_event_id

            try:
                async with self._client.stream(
                    "GET", self._url, params=self._params, headers=headers
                ) as resp:
                    if resp.status_code == 204:
                        log.info("eventsource_closed_by_server", url=self._url)
                        self._closed = True
                        return

                    if not resp.is_success:
                        body = (await resp.aread()).decode(errors="replace")
                        self._closed = True
                        raise EventSourceError(
                            f"event stream refused with HTTP {resp.status_code}",
                            status_code=resp.status_code,
                            body=body,
                        )

                    log.debug("eventsource_connected", url=self._url)
                    failures = 0
                    async for frame in self._parse(resp):
                        if frame.id:
                            self.last_event_id = frame.id
                        yield frame

                log.info("eventsource_dropped", url=self._url)
            except httpx.TransportError as exc:
                log.warning(
                    "eventsource_transport_error",
                    url=self._url,
                    attempt=failures + 1,
                    error=str(exc) or type(exc).__name__,
                )
            failures += 1

            if self.max_retries is not None and failures > self.max_retries:
                self._closed = True
                raise EventSourceError(
                    f"event stream unavailable after {failures} attempts"
                )

            log.debug("eventsource_reconnecting", url=self._url, delay=self.retry_interval)
            await asyncio.sleep(self.retry_interval)

    async def _parse(self, resp: httpx.Response) -> AsyncIterator[Frame]:
        """Split one response body into frames."""
        data_lines: list[str] = []
        event_name = ""
        event_id: str | None = None

        async for raw_line in resp.aiter_lines():
            line = raw_line.lstrip("\ufeff")

            # Blank line dispatches
            if not line:
                if data_lines:
                    yield Frame(
                        data="\n".join(data_lines),
                        event=event_name or "message",
                        id=event_id or self.last_event_id,
                    )
                data_lines = []
                event_name = ""
                event_id = None
                continue

            if line.startswith(":"):
                continue

            field, _, value = line.partition(":")
            if value.startswith(" "):
                value = value[1:]

            if field == "data":
                data_lines.append(value)
            elif field == "event":
                event_name = value
            elif field == "id":
                event_id = value
            elif field == "retry" and value.isdigit():
                self.retry_interval = int(value) / 1000
