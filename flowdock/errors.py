"""Exception hierarchy for the Flowdock client.

Construction errors are raised before any I/O, transport and API errors
come from the HTTP layer, decode errors from mapping payloads onto models.
``ContentMissingError`` signals a caller bug rather than bad server data.
"""

from __future__ import annotations


class FlowdockError(Exception):
    """Base class for every error raised by this package."""


class InvalidRequestError(FlowdockError, ValueError):
    """Request parameters or a resource locator are malformed."""


class TransportError(FlowdockError):
    """The HTTP request could not be completed (connect, timeout, drop)."""


class APIError(FlowdockError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str, *, method: str = "", url: str = "") -> None:
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
        prefix = f"{method} {url} -> " if method else ""
        super().__init__(f"{prefix}HTTP {status_code}: {body[:200]}")


class DecodeError(FlowdockError, ValueError):
    """A payload is not valid JSON or does not fit the expected shape."""


class ContentDecodeError(DecodeError):
    """A message's content does not fit the variant its event selects."""


class ContentMissingError(FlowdockError):
    """Content resolution was requested for a message that has no content."""


class EventSourceError(FlowdockError):
    """The event stream failed permanently."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EventSourceClosed(EventSourceError):
    """The event stream was closed, locally or by the server."""


class StreamError(FlowdockError):
    """A message stream ended because of a read or decode failure."""
