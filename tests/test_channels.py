"""Tests for channel and socket id validation."""

from __future__ import annotations

import pytest

from pousser.channels import (
    MAX_CHANNELS,
    validate_channel,
    validate_channels,
    validate_socket_id,
)
from pousser.exceptions import (
    InvalidChannelName,
    InvalidSocketId,
    TooManyChannels,
    ValidationError,
)

# =============================================================================
# Test: validate_channel
# =============================================================================


class TestValidateChannel:
    """Tests for single channel name validation."""

    @pytest.mark.parametrize(
        "name",
        [
            "room1",
            "private-chat",
            "presence-lobby",
            "a_b=c@d,e.f;g",
            "-",
            "UPPER.lower.123",
        ],
    )
    def test_valid_names_pass(self, name: str) -> None:
        """Test names built from the allowed character class."""
        validate_channel(name)

    @pytest.mark.parametrize(
        "name",
        ["", "has space", "slash/name", "colon:name", "emoji-☃", "tab\tname", "room1\n"],
    )
    def test_invalid_names_raise(self, name: str) -> None:
        """Test any character outside the class is rejected."""
        with pytest.raises(InvalidChannelName) as exc_info:
            validate_channel(name)

        assert exc_info.value.channel == name

    def test_non_string_raises(self) -> None:
        """Test non-string channel names are rejected."""
        with pytest.raises(InvalidChannelName):
            validate_channel(None)  # type: ignore[arg-type]

    def test_error_message_names_channel(self) -> None:
        """Test the error message includes the offending name."""
        with pytest.raises(InvalidChannelName, match="Invalid channel name bad name"):
            validate_channel("bad name")

    def test_is_a_validation_error(self) -> None:
        """Test callers can catch the shared base class."""
        with pytest.raises(ValidationError):
            validate_channel("bad name")


# =============================================================================
# Test: validate_channels
# =============================================================================


class TestValidateChannels:
    """Tests for channel list validation."""

    def test_limit_is_100(self) -> None:
        assert MAX_CHANNELS == 100

    def test_exactly_100_channels_pass(self) -> None:
        """Test the limit itself is allowed."""
        validate_channels([f"ch{i}" for i in range(100)])

    @pytest.mark.parametrize("count", [101, 150, 1000])
    def test_more_than_100_channels_raise(self, count: int) -> None:
        """Test lists over the limit are rejected."""
        with pytest.raises(TooManyChannels) as exc_info:
            validate_channels([f"ch{i}" for i in range(count)])

        assert exc_info.value.count == count
        assert exc_info.value.limit == 100

    def test_size_checked_before_names(self) -> None:
        """Test an oversized list of invalid names reports the size first."""
        with pytest.raises(TooManyChannels):
            validate_channels(["bad name"] * 101)

    def test_first_invalid_name_reported(self) -> None:
        """Test validation stops at the first invalid name."""
        with pytest.raises(InvalidChannelName) as exc_info:
            validate_channels(["ok", "first bad", "second bad"])

        assert exc_info.value.channel == "first bad"

    def test_empty_list_raises(self) -> None:
        """Test an event needs at least one channel."""
        with pytest.raises(ValidationError, match="at least one channel"):
            validate_channels([])


# =============================================================================
# Test: validate_socket_id
# =============================================================================


class TestValidateSocketId:
    """Tests for socket id validation."""

    @pytest.mark.parametrize("socket_id", ["1.1", "123.456", "9876543210.0123"])
    def test_valid_socket_ids(self, socket_id: str) -> None:
        validate_socket_id(socket_id)

    @pytest.mark.parametrize(
        "socket_id", ["", "1", "1.", ".1", "a.1", "1.1.1", "1.1\n", "1.1:evil", " 1.1"]
    )
    def test_invalid_socket_ids(self, socket_id: str) -> None:
        with pytest.raises(InvalidSocketId) as exc_info:
            validate_socket_id(socket_id)

        assert exc_info.value.socket_id == socket_id
