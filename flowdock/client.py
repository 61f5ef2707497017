"""HTTP plumbing shared by the API services."""

from __future__ import annotations

from typing import Any

import httpx

from flowdock.config import Settings
from flowdock.errors import APIError, DecodeError, TransportError
from flowdock.inbox import InboxService
from flowdock.messages import MessagesService
from flowdock.utils.logging import get_logger

log = get_logger(__name__)


class FlowdockClient:
    """Entry point for the REST and streaming APIs.

    REST calls authenticate with HTTP basic auth using the API token as the
    user name. The streaming host gets its own connection pool without a
    read timeout, since event streams sit idle between messages.

    Args:
        api_token: personal API token; falls back to ``settings.api_token``
        settings: client settings, ``Settings()`` when omitted
        transport: custom httpx transport for both hosts (used by tests)
    """

    def __init__(
        self,
        api_token: str | None = None,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or Settings()
        token = api_token if api_token is not None else self.settings.api_token
        headers = {"User-Agent": self.settings.user_agent}

        self._http = httpx.AsyncClient(
            base_url=self.settings.api_url,
            auth=httpx.BasicAuth(token, "") if token else None,
            headers={**headers, "Accept": "application/json"},
            timeout=self.settings.timeout,
            transport=transport,
        )
        self._stream_http = httpx.AsyncClient(
            base_url=self.settings.stream_url,
            headers=headers,
            timeout=httpx.Timeout(self.settings.timeout, read=None),
            follow_redirects=True,
            transport=transport,
        )

        self.messages = MessagesService(self)
        self.inbox = InboxService(self)

    @property
    def stream_http(self) -> httpx.AsyncClient:
        return self._stream_http

    async def close(self) -> None:
        """Close both HTTP clients."""
        await self._http.aclose()
        await self._stream_http.aclose()

    async def __aenter__(self) -> FlowdockClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send one REST request; non-2xx answers raise APIError."""
        try:
            resp = await self._http.request(method, path, params=params, data=data)
        except httpx.TransportError as exc:
            log.warning("api_request_failed", method=method, path=path, error=str(exc))
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        log.debug("api_request", method=method, path=path, status=resp.status_code)
        if not resp.is_success:
            raise APIError(resp.status_code, resp.text, method=method, url=path)
        return resp

    @staticmethod
    def json(resp: httpx.Response, *, default: Any = None) -> Any:
        """Parse a response body, returning ``default`` for an empty one."""
        if not resp.content.strip():
            return default
        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"invalid JSON in response body: {exc}") from exc
        except RecursionError as exc:
            raise DecodeError("response body nested too deeply") from exc
