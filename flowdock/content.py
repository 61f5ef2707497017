"""Content variants carried inside a message and the resolver that picks one."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from flowdock.errors import ContentDecodeError, ContentMissingError


class ContentKind(str, Enum):
    MESSAGE = "message"
    COMMENT = "comment"
    VCS = "vcs"


class _Variant(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class MessageContent(_Variant):
    text: str

    def __str__(self) -> str:
        return self.text


class CommentContent(_Variant):
    """Comment on a file, inbox item or other message; ``title`` names the target."""

    text: str
    title: str = ""

    def __str__(self) -> str:
        return self.text


class VcsAuthor(_Variant):
    name: str = ""
    email: str = ""
    username: str = ""


class VcsCommit(_Variant):
    id: str = ""
    message: str = ""
    url: str = ""
    author: VcsAuthor = Field(default_factory=VcsAuthor)


class VcsRepository(_Variant):
    name: str = ""
    url: str = ""


class VcsPayload(_Variant):
    ref: str = ""
    ref_name: str = ""
    before: str = ""
    after: str = ""
    compare: str = ""
    created: bool = False
    deleted: bool = False
    forced: bool = False
    commits: tuple[VcsCommit, ...] = ()
    pusher: VcsAuthor = Field(default_factory=VcsAuthor)
    repository: VcsRepository = Field(default_factory=VcsRepository)


class VcsContent(_Variant):
    event: str = ""
    payload: VcsPayload = Field(default_factory=VcsPayload)

    def __str__(self) -> str:
        p = self.payload
        ref = p.ref_name or p.ref
        head = f"[{p.repository.name}:{ref}]" if ref else f"[{p.repository.name}]"
        lines = [f"{head} {self.event}".strip()]
        lines.extend(f"  {c.message.splitlines()[0] if c.message else c.id}" for c in p.commits)
        return "\n".join(lines)


class JsonContent(_Variant):
    """Fallback for event kinds without a dedicated variant."""

    data: Any = None

    def __str__(self) -> str:
        return json.dumps(self.data, sort_keys=True)


Content = MessageContent | CommentContent | VcsContent | JsonContent

_TEXT = TypeAdapter(str)


def _message(raw: Any) -> MessageContent:
    return MessageContent(text=_TEXT.validate_python(raw, strict=True))


_RESOLVERS = {
    ContentKind.MESSAGE: _message,
    ContentKind.COMMENT: CommentContent.model_validate,
    ContentKind.VCS: VcsContent.model_validate,
}


def resolve_content(event: str | None, raw: Any) -> Content:
    """Decode ``raw`` into the variant selected by the ``event`` tag.

    Unknown or missing tags give JsonContent. ``raw`` must be present.
    """
    if raw is None:
        raise ContentMissingError(f"message (event={event!r}) has no content to resolve")

    try:
        kind = ContentKind(event)
    except ValueError:
        return JsonContent(data=raw)

    try:
        return _RESOLVERS[kind](raw)
    except ValidationError as exc:
        raise ContentDecodeError(f"{kind.value} content does not match its shape: {exc}") from exc
