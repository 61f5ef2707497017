"""flowdock - async client for the Flowdock REST and streaming APIs."""

from flowdock.client import FlowdockClient
from flowdock.config import Settings, StreamConfig, load_settings
from flowdock.content import (
    CommentContent,
    Content,
    ContentKind,
    JsonContent,
    MessageContent,
    VcsContent,
    resolve_content,
)
from flowdock.decoder import decode_message, decode_messages
from flowdock.errors import (
    APIError,
    ContentDecodeError,
    ContentMissingError,
    DecodeError,
    EventSourceClosed,
    EventSourceError,
    FlowdockError,
    InvalidRequestError,
    StreamError,
    TransportError,
)
from flowdock.models import Message
from flowdock.options import CreateOptions, EditOptions, InboxCreateOptions, ListOptions
from flowdock.stream import MessageStream
from flowdock.utils.logging import setup_logging

__version__ = "0.1.0"

__all__ = [
    "FlowdockClient",
    "Message",
    "MessageStream",
    "decode_message",
    "decode_messages",
    "resolve_content",
    "Content",
    "ContentKind",
    "MessageContent",
    "CommentContent",
    "VcsContent",
    "JsonContent",
    "ListOptions",
    "EditOptions",
    "CreateOptions",
    "InboxCreateOptions",
    "FlowdockError",
    "InvalidRequestError",
    "TransportError",
    "APIError",
    "DecodeError",
    "ContentDecodeError",
    "ContentMissingError",
    "EventSourceError",
    "EventSourceClosed",
    "StreamError",
    "Settings",
    "StreamConfig",
    "load_settings",
    "setup_logging",
]
