"""Response and result types returned by the client.

Publishing never raises for HTTP-level failures. The outcome is carried by
one of three explicit result types instead:

- Success: normal mode, ``ok`` is True only for status 200
- DebugResult: debug mode, wraps the raw Response whatever its status
- Failure: a lookup that did not return 200 (always falsy)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from pousser.log import Log
from pousser.transport import TransportResponse


@dataclass
class Response:
    """Status and body of one API call.

    Attributes:
        status: HTTP status code (0 if the transport failed).
        body: Response body text.
        result: Decoded JSON body, set by successful lookups.
        error: Transport error description, if any.
    """

    status: int
    body: str | None = None
    result: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == 200

    def decode(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ValueError: If the body is missing or not valid JSON.
        """
        if self.body is None:
            raise ValueError("Response has no body")
        return json.loads(self.body)

    def to_dict(self) -> dict[str, Any]:
        """Convert response to dictionary for logging/serialization."""
        return {
            "status": self.status,
            "body": self.body,
            "error": self.error,
        }


@dataclass(frozen=True)
class Success:
    """Outcome of a publish call in normal mode."""

    ok: bool

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class DebugResult:
    """Outcome of a publish call in debug mode: the raw response."""

    response: Response

    @property
    def ok(self) -> bool:
        return self.response.ok

    @property
    def status(self) -> int:
        return self.response.status

    @property
    def body(self) -> str | None:
        return self.response.body

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class Failure:
    """A lookup that did not succeed; always falsy."""

    response: Response
    reason: str | None = None

    @property
    def status(self) -> int:
        return self.response.status

    def __bool__(self) -> bool:
        return False


PublishResult = Success | DebugResult


def interpret(raw: TransportResponse, log: Log) -> Response:
    """Turn a transport response into a Response, logging the outcome.

    Transport errors and statuses outside 2xx/3xx are logged at ERROR level;
    everything else at DEBUG.
    """
    response = Response(status=raw.status or 0, body=raw.body, error=raw.error)
    if raw.error is not None or raw.body is None:
        log.log(
            "exec_request error: {error}",
            {"error": raw.error or "no response body", "status": response.status},
            logging.ERROR,
        )
    elif response.status < 200 or response.status >= 400:
        log.log(
            "exec_request {{status}} error from server: {{body}}",
            response.to_dict(),
            logging.ERROR,
        )
    else:
        log.log("exec_request {{status}} response: {{body}}", response.to_dict())
    return response


def publish_result(response: Response, debug: bool) -> PublishResult:
    """Select the publish outcome for the requested mode."""
    if debug:
        return DebugResult(response)
    return Success(response.ok)
