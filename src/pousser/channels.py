"""Channel and socket id validation.

Every publish and lookup runs its channel names through these checks before
anything is signed or sent, so an invalid request never reaches the wire.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from pousser.exceptions import (
    InvalidChannelName,
    InvalidSocketId,
    TooManyChannels,
    ValidationError,
)

# Maximum number of channels a single trigger() call may target
MAX_CHANNELS = 100

CHANNEL_NAME_PATTERN = re.compile(r"[-a-zA-Z0-9_=@,.;]+")
SOCKET_ID_PATTERN = re.compile(r"\d+\.\d+")


def validate_channel(channel: str) -> None:
    """Ensure a channel name only uses the allowed character class.

    Args:
        channel: The channel name to validate.

    Raises:
        InvalidChannelName: If the name is empty, not a string, or contains
            any character outside ``[-a-zA-Z0-9_=@,.;]``.
    """
    if not isinstance(channel, str) or not CHANNEL_NAME_PATTERN.fullmatch(channel):
        raise InvalidChannelName(channel)


def validate_channels(channels: Sequence[str]) -> None:
    """Validate the number of channels and each channel name.

    The size check runs first; names are then checked in order and the
    first invalid one is reported.

    Args:
        channels: Channel names targeted by a single event.

    Raises:
        TooManyChannels: If more than ``MAX_CHANNELS`` channels are given.
        ValidationError: If no channels are given.
        InvalidChannelName: If any channel name is invalid.
    """
    if len(channels) > MAX_CHANNELS:
        raise TooManyChannels(len(channels), MAX_CHANNELS)
    if not channels:
        raise ValidationError("An event must be triggered on at least one channel.")
    for channel in channels:
        validate_channel(channel)


def validate_socket_id(socket_id: str) -> None:
    """Ensure a socket id looks like one the service issues (``123.456``).

    Raises:
        InvalidSocketId: If the value does not match ``<digits>.<digits>``.
    """
    if not isinstance(socket_id, str) or not SOCKET_ID_PATTERN.fullmatch(socket_id):
        raise InvalidSocketId(socket_id)
