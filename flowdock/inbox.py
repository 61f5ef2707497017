"""Team inbox push API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flowdock.decoder import message_from_data
from flowdock.messages import path_segment
from flowdock.models import Message
from flowdock.options import InboxCreateOptions

if TYPE_CHECKING:
    from flowdock.client import FlowdockClient


class InboxService:
    def __init__(self, client: FlowdockClient) -> None:
        self._client = client

    async def create(self, flow_token: str, options: InboxCreateOptions) -> Message:
        """Push an item to the team inbox of the flow owning ``flow_token``."""
        path = f"v1/messages/team_inbox/{path_segment('flow token', flow_token)}"
        resp = await self._client.request("POST", path, data=options.to_params())
        return message_from_data(self._client.json(resp, default={}))
