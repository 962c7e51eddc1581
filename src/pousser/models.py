"""Pydantic models for channel lookups and batch events."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChannelEntry(BaseModel):
    """One channel from a channel listing.

    The service returns whatever attributes were requested through the
    ``info`` parameter; known ones are typed, the rest are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    user_count: int | None = None
    subscription_count: int | None = None


class ChannelList(BaseModel):
    """Flattened result of ``GET /channels``."""

    model_config = ConfigDict(extra="allow")

    channels: list[ChannelEntry] = Field(default_factory=list)

    @classmethod
    def from_response(cls, decoded: dict[str, Any]) -> ChannelList:
        """Flatten ``{"channels": {"name": {...}}}`` into a list of entries."""
        data = dict(decoded)
        nested = data.pop("channels", None) or {}
        channels = [ChannelEntry(**{**(info or {}), "name": name}) for name, info in nested.items()]
        return cls(channels=channels, **data)

    def names(self) -> list[str]:
        return [channel.name for channel in self.channels]

    def __len__(self) -> int:
        return len(self.channels)


class BatchEvent(BaseModel):
    """One entry of a ``trigger_batch`` call.

    ``name`` is sent as ``event`` on the wire. ``data`` may be any
    JSON-serializable value or an already-encoded string.
    """

    model_config = ConfigDict(populate_by_name=True)

    channel: str
    name: str | None = Field(default=None, alias="event")
    data: Any = None
    socket_id: str | None = None

    def to_wire(self) -> dict[str, Any]:
        wire = self.model_dump(by_alias=True)
        for key in ("event", "socket_id"):
            if wire[key] is None:
                del wire[key]
        return wire
