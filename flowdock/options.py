"""Immutable option bundles serialized into query/form parameters."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_params(self) -> dict[str, str]:
        """Encode set fields in declaration order, leaving out zero values.

        Omission is decided by value, so an explicit ``limit=0`` is dropped
        just like an unset one. Tag lists are comma-joined.
        """
        params: dict[str, str] = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if not value:
                continue
            if isinstance(value, tuple):
                params[name] = ",".join(value)
            else:
                params[name] = str(value)
        return params


class ListOptions(_Options):
    event: str = ""
    since_id: int = 0
    until_id: int = 0
    limit: int = 0
    tags: tuple[str, ...] = ()
    tag_mode: str = ""  # "and" / "or"
    search: str = ""


class EditOptions(_Options):
    content: str = ""
    tags: tuple[str, ...] = ()


class CreateOptions(_Options):
    flow: str = ""
    message: int = 0  # comment target
    event: str = ""
    content: str = ""
    tags: tuple[str, ...] = ()
    uuid: str = ""
    external_user_name: str = ""
    subject: str = ""
    from_address: str = ""
    source: str = ""


class InboxCreateOptions(_Options):
    source: str = ""
    from_address: str = ""
    subject: str = ""
    content: str = ""
    from_name: str = ""
    reply_to: str = ""
    project: str = ""
    format: str = ""
    link: str = ""
    tags: tuple[str, ...] = ()
