"""Typed wire model for Flowdock messages."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from flowdock.content import Content, resolve_content

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


def from_epoch_millis(value: int | float) -> datetime:
    """Convert whole epoch milliseconds to an aware UTC datetime.

    Fractional and out-of-range values raise ValueError.
    """
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"epoch milliseconds must be a whole number, got {value}")
        value = int(value)
    try:
        return _EPOCH + timedelta(milliseconds=value)
    except OverflowError as exc:
        raise ValueError(f"epoch milliseconds out of range: {value}") from exc


def to_epoch_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // _MILLISECOND


class Message(BaseModel):
    """A chat message as sent by the Flowdock API.

    Each event kind fills a different subset of fields and the API leaves
    absent keys out entirely, so every field defaults to ``None`` and the keys
    actually received are tracked in ``model_fields_set``. ``content`` is the
    raw JSON value; ``decoded_content()`` resolves it using ``event``.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    flow: str | None = None
    sent: datetime | None = None
    user: str | None = None
    event: str | None = None
    content: Any = None
    message: int | None = None  # id of the message a comment refers to
    tags: list[str] | None = None
    uuid: str | None = None
    external_user_name: str | None = None
    app: str | None = None  # deprecated

    @field_validator("sent", mode="before")
    @classmethod
    def _parse_sent(cls, value: Any) -> Any:
        # bool is an int subclass; let pydantic reject it
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return from_epoch_millis(value)
        return value

    @field_serializer("sent")
    def _dump_sent(self, value: datetime | None) -> int | None:
        if value is None:
            return None
        return to_epoch_millis(value)

    def is_set(self, field: str) -> bool:
        """Whether ``field`` was present in the source payload or constructor."""
        return field in self.model_fields_set

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_unset=True)

    def decoded_content(self) -> Content:
        """Resolve ``content`` into the variant selected by ``event``.

        Raises ContentMissingError when the message carries no content and
        ContentDecodeError when the content does not fit the variant.
        """
        return resolve_content(self.event, self.content)
