"""Pousser Exception Classes - All client-related exceptions."""


class PousserError(Exception):
    """Base exception for Pousser client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PousserError):
    """Raised when the client cannot be constructed.

    Missing credentials, invalid settings, or an unusable transport are
    fatal: the caller has to fix the configuration before retrying.
    """

    pass


class ValidationError(PousserError):
    """Raised at call time when a request fails validation before dispatch."""

    pass


class InvalidChannelName(ValidationError):
    """Raised when a channel name contains characters outside the allowed set."""

    def __init__(self, channel: object):
        super().__init__(f"Invalid channel name {channel}")
        self.channel = channel


class TooManyChannels(ValidationError):
    """Raised when an event targets more channels than a single call allows."""

    def __init__(self, count: int, limit: int):
        super().__init__(
            f"An event can be triggered on a maximum of {limit} channels in a single call."
        )
        self.count = count
        self.limit = limit


class InvalidSocketId(ValidationError):
    """Raised when a socket id is not of the form ``<digits>.<digits>``."""

    def __init__(self, socket_id: object):
        super().__init__(f"Invalid socket ID {socket_id}")
        self.socket_id = socket_id
