"""Messages API: list, get, create, comment, edit, delete and stream."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import quote

from flowdock.decoder import message_from_data, messages_from_data
from flowdock.errors import InvalidRequestError
from flowdock.eventsource import EventSource
from flowdock.models import Message
from flowdock.options import CreateOptions, EditOptions, ListOptions
from flowdock.stream import DecodeErrorPolicy, MessageStream
from flowdock.utils.logging import get_logger

if TYPE_CHECKING:
    from flowdock.client import FlowdockClient

log = get_logger(__name__)

_SEGMENT_RE = re.compile(r"^[^/?#\s]+$")


def path_segment(name: str, value: str) -> str:
    """Validate one path component and percent-encode it."""
    if not isinstance(value, str) or not _SEGMENT_RE.match(value):
        raise InvalidRequestError(f"invalid {name}: {value!r}")
    return quote(value, safe="")


def _message_id(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidRequestError(f"invalid message id: {value!r}")
    return value


def _flow_path(org: str, flow: str) -> str:
    return f"flows/{path_segment('organization', org)}/{path_segment('flow', flow)}"


class MessagesService:
    def __init__(self, client: FlowdockClient) -> None:
        self._client = client

    def stream(
        self,
        token: str,
        org: str,
        flow: str,
        *,
        on_decode_error: DecodeErrorPolicy | None = None,
    ) -> MessageStream:
        """Subscribe to the live messages of one flow.

        Must be called from a running event loop; the returned stream is
        already started. Close it (or use ``async with``) to drop the
        connection.
        """
        if not isinstance(token, str) or not token:
            raise InvalidRequestError("an access token is required to stream")
        path = _flow_path(org, flow)
        cfg = self._client.settings.stream

        source = EventSource(
            self._client.stream_http,
            path,
            params={"access_token": token},
            retry_interval=cfg.retry_interval,
            max_retries=cfg.max_retries,
        )
        log.info("stream_subscribing", org=org, flow=flow)
        stream = MessageStream(
            source,
            on_decode_error=on_decode_error or cfg.on_decode_error,
            name=f"flowdock-stream-{org}-{flow}",
        )
        return stream.start()

    async def list(self, org: str, flow: str, options: ListOptions | None = None) -> list[Message]:
        path = f"{_flow_path(org, flow)}/messages"
        params = options.to_params() if options else None
        resp = await self._client.request("GET", path, params=params)
        return messages_from_data(self._client.json(resp, default=[]))

    async def get(self, org: str, flow: str, id: int) -> Message:
        path = f"{_flow_path(org, flow)}/messages/{_message_id(id)}"
        resp = await self._client.request("GET", path)
        return message_from_data(self._client.json(resp, default={}))

    async def create(self, options: CreateOptions) -> Message:
        resp = await self._client.request("POST", "messages", data=options.to_params())
        return message_from_data(self._client.json(resp, default={}))

    async def create_comment(self, options: CreateOptions) -> Message:
        """Post a comment; ``options.message`` is the id being commented on."""
        resp = await self._client.request("POST", "comments", data=options.to_params())
        return message_from_data(self._client.json(resp, default={}))

    async def edit(self, org: str, flow: str, id: int, options: EditOptions) -> None:
        path = f"{_flow_path(org, flow)}/messages/{_message_id(id)}"
        await self._client.request("PUT", path, data=options.to_params())

    async def delete(self, org: str, flow: str, id: int) -> None:
        path = f"{_flow_path(org, flow)}/messages/{_message_id(id)}"
        await self._client.request("DELETE", path)
