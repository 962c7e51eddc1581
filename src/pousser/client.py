"""Pousser REST client for publishing events and querying channels.

This module provides the Pousser class, the entry point for server-side
applications. Each call runs the same one-way pipeline:

    validate channels -> sign parameters -> build request -> transport
    -> interpret response

Publishing never raises for HTTP failures; it returns ``Success`` (or
``DebugResult`` in debug mode). Invalid channel names, too many channels,
or malformed socket ids raise before anything is sent.

Example:
    >>> client = Pousser("app-key", "app-secret", 1, {"useTLS": True})
    >>> client.trigger("room1", "msg", {"text": "hi"})
    Success(ok=True)
    >>> client.get_channels({"filter_by_prefix": "presence-"}).names()
    ['presence-room1']
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pousser.channels import validate_channel, validate_channels, validate_socket_id
from pousser.config import Credentials, PousserSettings
from pousser.exceptions import ConfigurationError
from pousser.log import Log, LogSink
from pousser.models import BatchEvent, ChannelList
from pousser.request import PreparedRequest, RequestBuilder
from pousser.response import (
    Failure,
    PublishResult,
    Response,
    interpret,
    publish_result,
)
from pousser.transport import HttpxTransport, Transport


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), allow_nan=False)


class Pousser:
    """Server-side client for the Pousser REST API.

    Attributes:
        credentials: Immutable key / secret / app_id.
        settings: Validated endpoint and behaviour settings.
        transport: Executes HTTP requests; owned by this instance.

    Not safe for concurrent use: the transport keeps one reusable HTTP
    client. Use one instance per thread or serialize calls externally.
    """

    def __init__(
        self,
        key: str,
        secret: str,
        app_id: str | int,
        options: Mapping[str, Any] | PousserSettings | None = None,
        transport: Transport | None = None,
        logger: LogSink | logging.Logger | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            key: App key.
            secret: App secret, used to sign requests.
            app_id: App id.
            options: Settings overrides (see ``PousserSettings``), either as a
                mapping or a settings instance.
            transport: Custom transport; defaults to ``HttpxTransport``
                configured with ``transport_options``.
            logger: Log sink or ``logging.Logger`` for internal messages.

        Raises:
            ConfigurationError: If credentials are missing, settings are
                invalid, or the transport cannot execute requests.
        """
        self.credentials = Credentials(key=key, secret=secret, app_id=str(app_id))
        if isinstance(options, PousserSettings):
            self.settings = options
        else:
            self.settings = PousserSettings.from_options(options)

        self.transport: Transport = transport or HttpxTransport(self.settings.transport_options)
        self._check_compatibility()

        self.log = Log(logger)
        self.builder = RequestBuilder(self.credentials, self.settings)

    def _check_compatibility(self) -> None:
        if not callable(getattr(self.transport, "execute", None)):
            raise ConfigurationError(
                "The Pousser client requires a transport with an execute() method"
            )

    # =========================================================================
    # Settings and logging
    # =========================================================================

    def get_settings(self) -> dict[str, Any]:
        """Return the effective settings plus key and app_id (never the secret)."""
        settings = self.settings.model_dump()
        settings["key"] = self.credentials.key
        settings["app_id"] = self.credentials.app_id
        return settings

    def set_logger(self, logger: LogSink | logging.Logger) -> None:
        """Set a logger to be informed of internal log messages."""
        self.log.set_logger(logger)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _dispatch(self, request: PreparedRequest) -> Response:
        self.log.log("create_request( {{full_url}} )", {"full_url": request.url})
        raw = self.transport.execute(
            request.method,
            request.url,
            request.headers,
            request.body,
            request.timeout,
        )
        return interpret(raw, self.log)

    def _post(self, sub_path: str, payload: Mapping[str, Any]) -> Response:
        try:
            post_value = _dumps(payload)
        except (TypeError, ValueError) as e:
            self.log.log(
                "Failed to JSON encode the request body: {{error}}",
                {"error": str(e), "path": sub_path},
                logging.ERROR,
            )
            return Response(status=0, error=f"Could not encode request body: {e}")
        request = self.builder.build("POST", sub_path, body=post_value)
        self.log.log("trigger POST: {{post_value}}", {"post_value": post_value})
        return self._dispatch(request)

    def _encode_data(self, data: Any) -> str | None:
        try:
            return _dumps(data)
        except (TypeError, ValueError) as e:
            self.log.log(
                "Failed to JSON encode the provided data: {{error}}",
                {"error": str(e), "data": repr(data)},
                logging.ERROR,
            )
            return None

    def _publish_path(self) -> str:
        if self.settings.is_production:
            return f"/app/{self.credentials.app_id}/publish"
        return (
            f"/app/{self.credentials.app_id}/environment/{self.settings.environment}/publish"
        )

    # =========================================================================
    # Publishing
    # =========================================================================

    def trigger(
        self,
        channels: str | Sequence[str],
        event: str,
        data: Any,
        debug: bool = False,
        already_encoded: bool = False,
        socket_id: str | None = None,
    ) -> PublishResult:
        """Trigger an event on one or more channels.

        Args:
            channels: A channel name or a list of up to 100 channel names.
            event: Event name.
            data: Event payload; JSON-encoded unless ``already_encoded``.
            debug: Return the raw response instead of a boolean outcome.
            already_encoded: ``data`` is already a JSON string.
            socket_id: Socket id of a connection to exclude (usually the
                sender).

        Returns:
            ``Success`` (True only for status 200) or, in debug mode,
            ``DebugResult`` wrapping the raw response.

        Raises:
            TooManyChannels: If more than 100 channels are given.
            ValidationError: If no channels are given.
            InvalidChannelName: If any channel name is invalid.
            InvalidSocketId: If ``socket_id`` is malformed.
        """
        if isinstance(channels, str):
            channels = [channels]
        channels = list(channels)
        validate_channels(channels)
        if socket_id is not None:
            validate_socket_id(socket_id)

        if already_encoded:
            data_encoded = data
            if not data_encoded:
                self.log.log(
                    "Publishing {{event}} with empty data", {"event": event}, logging.ERROR
                )
        else:
            data_encoded = self._encode_data(data)

        post_params: dict[str, Any] = {
            "eventName": event,
            "data": data_encoded,
            "channels": channels,
        }
        if socket_id is not None:
            post_params["socket_id"] = socket_id

        response = self._post(self._publish_path(), post_params)
        return publish_result(response, debug or self.settings.debug)

    def trigger_batch(
        self,
        batch: Sequence[Mapping[str, Any] | BatchEvent] = (),
        debug: bool = False,
        already_encoded: bool = False,
    ) -> PublishResult:
        """Trigger multiple events in a single request.

        Each entry needs a ``channel`` and ``data`` and may carry ``event``
        and ``socket_id``. There is no limit on the number of entries.

        Args:
            batch: Entries as mappings or ``BatchEvent`` instances.
            debug: Return the raw response instead of a boolean outcome.
            already_encoded: Non-string ``data`` values are sent as-is.

        Returns:
            Same as ``trigger``.

        Raises:
            InvalidChannelName: If any entry's channel is invalid.
            InvalidSocketId: If any entry's socket id is malformed.
        """
        events = [self._prepare_batch_entry(entry, already_encoded) for entry in batch]
        response = self._post("/batch_events", {"batch": events})
        return publish_result(response, debug or self.settings.debug)

    def _prepare_batch_entry(
        self, entry: Mapping[str, Any] | BatchEvent, already_encoded: bool
    ) -> dict[str, Any]:
        event = entry.to_wire() if isinstance(entry, BatchEvent) else dict(entry)
        validate_channel(event.get("channel"))  # type: ignore[arg-type]
        if event.get("socket_id") is not None:
            validate_socket_id(event["socket_id"])

        data = event.get("data")
        if not isinstance(data, str) and not already_encoded:
            data = self._encode_data(data)
        event["data"] = data
        return event

    # =========================================================================
    # Channel queries
    # =========================================================================

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Response | Failure:
        """GET an arbitrary REST resource below ``base_path``.

        Request signing is handled automatically.

        Args:
            path: Resource path, e.g. ``/channels``.
            params: Query parameters.

        Returns:
            The Response with ``result`` set to the decoded body on status
            200; otherwise ``Failure``.
        """
        request = self.builder.build("GET", path, params)
        response = self._dispatch(request)
        if not response.ok:
            return Failure(response)
        try:
            response.result = response.decode()
        except ValueError as e:
            self.log.log(
                "Could not decode response from {{path}}: {{error}}",
                {"path": path, "error": str(e)},
                logging.ERROR,
            )
            return Failure(response, reason=str(e))
        return response

    def get_channel_info(
        self, channel: str, params: Mapping[str, Any] | None = None
    ) -> Any | Failure:
        """Fetch information for a single channel.

        Args:
            channel: Channel name.
            params: Extra query parameters, e.g. ``{"info": "user_count"}``.

        Returns:
            The decoded JSON body, or ``Failure``.

        Raises:
            InvalidChannelName: If the channel name is invalid.
        """
        validate_channel(channel)
        response = self.get(f"/channels/{channel}", params)
        if isinstance(response, Failure):
            return response
        return response.result

    def get_channels(self, params: Mapping[str, Any] | None = None) -> ChannelList | Failure:
        """Fetch the list of occupied channels.

        Args:
            params: Extra query parameters, e.g. ``{"filter_by_prefix": "presence-"}``.

        Returns:
            A ``ChannelList`` with one entry per channel, or ``Failure``.
        """
        response = self.get("/channels", params)
        if isinstance(response, Failure):
            return response
        try:
            return ChannelList.from_response(response.result or {})
        except (AttributeError, TypeError, ValueError) as e:
            self.log.log(
                "Unexpected channel listing from {{path}}: {{error}}",
                {"path": "/channels", "error": str(e)},
                logging.ERROR,
            )
            return Failure(response, reason=str(e))

    def get_users_info(self, channel: str) -> Any | Failure:
        """Fetch the users currently subscribed to a presence channel.

        Raises:
            InvalidChannelName: If the channel name is invalid.
        """
        validate_channel(channel)
        response = self.get(f"/channels/{channel}/users")
        if isinstance(response, Failure):
            return response
        return response.result

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Release the transport's HTTP resources."""
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> Pousser:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Pousser(key={self.credentials.key!r}, app_id={self.credentials.app_id!r}, "
            f"host={self.settings.host!r}, environment={self.settings.environment!r})"
        )
