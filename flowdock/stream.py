"""Live message stream: one background task feeding one consumer."""

from __future__ import annotations

import asyncio
from typing import Literal

from flowdock.decoder import decode_message
from flowdock.errors import (
    DecodeError,
    EventSourceClosed,
    EventSourceError,
    FlowdockError,
    StreamError,
)
from flowdock.eventsource import FrameSource
from flowdock.models import Message
from flowdock.utils.logging import get_logger

log = get_logger(__name__)

DecodeErrorPolicy = Literal["terminate", "skip"]

# Marks the end of the stream in the queue
_END = object()


class MessageStream:
    """Handle for a live subscription.

    A single task reads frames from ``source``, decodes each into a Message
    and hands it over through a one-slot queue, so it never runs more than
    one message ahead of the consumer. A read failure ends the stream; a
    decode failure ends it too unless ``on_decode_error="skip"``. Messages
    delivered before a failure are still handed out, after which ``get()``
    and iteration raise StreamError.

        async with client.messages.stream(token, "acme", "main") as stream:
            async for message in stream:
                ...
    """

    def __init__(
        self,
        source: FrameSource,
        *,
        on_decode_error: DecodeErrorPolicy = "terminate",
        name: str = "flowdock-stream",
    ) -> None:
        self._source = source
        self._on_decode_error = on_decode_error
        self._name = name
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=1)
        self._task: asyncio.Task[None] | None = None
        self._error: FlowdockError | None = None
        self._closed = False

    def start(self) -> MessageStream:
        if self._task is not None:
            raise RuntimeError("stream already started")
        self._task = asyncio.create_task(self._run(), name=self._name)
        return self

    @property
    def error(self) -> FlowdockError | None:
        """The failure that ended the stream, if any."""
        return self._error

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Producer
    # ------------------------------------------------------------------

    async def _run(self) -> None:
        # Cancellation (aclose) is the only way out without the end marker
        try:
            try:
                self._error = await self._pump()
            finally:
                await self._source.aclose()
        except Exception as exc:
            log.exception("stream_task_crashed", stream=self._name)
            if self._error is None:
                self._error = FlowdockError(f"message stream crashed: {exc!r}")
                self._error.__cause__ = exc
        await self._queue.put(_END)

    async def _pump(self) -> FlowdockError | None:
        while True:
            try:
                frame = await self._source.read()
            except EventSourceClosed:
                log.info("stream_source_closed", stream=self._name)
                return None
            except FlowdockError as exc:
                log.warning("stream_read_failed", stream=self._name, error=str(exc))
                return exc
            except Exception as exc:
                log.exception("stream_read_crashed", stream=self._name)
                error = EventSourceError(f"unexpected read failure: {exc!r}")
                error.__cause__ = exc
                return error

            try:
                message = decode_message(frame.data)
            except DecodeError as exc:
                if self._on_decode_error == "skip":
                    log.warning(
                        "stream_event_skipped",
                        stream=self._name,
                        event_id=frame.id,
                        error=str(exc),
                    )
                    continue
                log.warning("stream_decode_failed", stream=self._name, error=str(exc))
                return exc

            await self._queue.put(message)

    # ------------------------------------------------------------------
    # Consumer
    # ------------------------------------------------------------------

    async def get(self) -> Message | None:
        """Wait for the next message; ``None`` once the stream has ended.

        Raises StreamError when the stream ended because of a failure.
        """
        item = await self._queue.get()
        if item is _END:
            # Leave the marker for later callers
            self._queue.put_nowait(_END)
            if self._error is not None:
                raise StreamError(f"message stream failed: {self._error}") from self._error
            return None
        return item  # type: ignore[return-value]

    def __aiter__(self) -> MessageStream:
        return self

    async def __anext__(self) -> Message:
        message = await self.get()
        if message is None:
            raise StopAsyncIteration
        return message

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Stop the task and release the connection. Safe to call twice."""
        if self._closed:
            return
        self._closed = True

        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        await self._source.aclose()

        # Undelivered messages are dropped; wake any waiting consumer
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_END)
        log.debug("stream_closed", stream=self._name)

    async def __aenter__(self) -> MessageStream:
        if self._task is None:
            self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
