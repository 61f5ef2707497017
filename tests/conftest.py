"""Shared fixtures: fake frame sources and SSE bodies."""

import asyncio
import json

import pytest

from flowdock.errors import EventSourceClosed, EventSourceError
from flowdock.eventsource import Frame


def sse_body(*payloads, ids=False) -> bytes:
    """Encode payloads (dicts or raw strings) as an event-stream body."""
    chunks = []
    for i, payload in enumerate(payloads, start=1):
        data = payload if isinstance(payload, str) else json.dumps(payload)
        lines = [f"id: {i}"] if ids else []
        lines.extend(f"data: {line}" for line in data.split("\n"))
        chunks.append("\n".join(lines) + "\n\n")
    return "".join(chunks).encode("utf-8")


class ScriptedSource:
    """In-memory frame source.

    Yields the scripted items in order; an exception instance is raised
    instead of returned. When the script runs out, ``read()`` blocks until
    closed, like an idle connection.
    """

    def __init__(self, items):
        self._items = list(items)
        self.reads = 0
        self.close_calls = 0
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    async def read(self) -> Frame:
        if self.closed:
            raise EventSourceClosed("closed")
        self.reads += 1
        if not self._items:
            await self._closed.wait()
            raise EventSourceClosed("closed")
        item = self._items.pop(0)
        if isinstance(item, BaseException):
            raise item
        data = item if isinstance(item, str) else json.dumps(item)
        return Frame(data=data)

    async def aclose(self) -> None:
        self.close_calls += 1
        self._closed.set()


@pytest.fixture
def read_error():
    return EventSourceError("event stream unavailable after 6 attempts")
