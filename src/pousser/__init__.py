"""Pousser - server-side client for the Pousser real-time messaging service.

This package publishes events to Pousser channels and queries channel and
presence information over the signed REST API. It includes:

- Pousser: the client (trigger, trigger_batch, get, channel lookups)
- PousserSettings / Credentials: validated configuration
- Signing helpers: canonical query strings and HMAC-SHA256 signatures
- Result types: Success, DebugResult, Failure

Usage:
    from pousser import Pousser

    client = Pousser("key", "secret", 1, {"useTLS": True})
    if client.trigger(["room1", "room2"], "message", {"text": "hi"}):
        ...
"""

from pousser._version import __version__
from pousser.channels import (
    MAX_CHANNELS,
    validate_channel,
    validate_channels,
    validate_socket_id,
)
from pousser.client import Pousser
from pousser.config import Credentials, PousserSettings
from pousser.exceptions import (
    ConfigurationError,
    InvalidChannelName,
    InvalidSocketId,
    PousserError,
    TooManyChannels,
    ValidationError,
)
from pousser.log import LoggingSink, LogSink, NullSink
from pousser.models import BatchEvent, ChannelEntry, ChannelList
from pousser.response import DebugResult, Failure, Response, Success
from pousser.signing import (
    body_md5,
    build_auth_header,
    build_query_string,
    verify_auth_header,
)
from pousser.transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    "__version__",
    # Client
    "Pousser",
    # Config
    "Credentials",
    "PousserSettings",
    # Validation
    "MAX_CHANNELS",
    "validate_channel",
    "validate_channels",
    "validate_socket_id",
    # Signing
    "body_md5",
    "build_auth_header",
    "build_query_string",
    "verify_auth_header",
    # Results
    "Response",
    "Success",
    "DebugResult",
    "Failure",
    "ChannelEntry",
    "ChannelList",
    "BatchEvent",
    # Transport
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    # Logging
    "LogSink",
    "LoggingSink",
    "NullSink",
    # Errors
    "PousserError",
    "ConfigurationError",
    "ValidationError",
    "InvalidChannelName",
    "TooManyChannels",
    "InvalidSocketId",
]
