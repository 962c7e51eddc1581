"""HTTP transport used to execute signed requests.

The client talks to the network through the ``Transport`` protocol so tests
and applications can substitute their own implementation. The default
``HttpxTransport`` wraps a single ``httpx.Client`` that is:

- created lazily on first use,
- reset (cookies cleared) before every request rather than recreated,
- owned by one Pousser client and not safe for concurrent use.

Transport failures never raise: they come back as a response with status 0
and the error message set, and the caller decides how to report them.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from pousser.exceptions import ConfigurationError


@dataclass
class TransportResponse:
    """Raw outcome of one HTTP exchange.

    Attributes:
        status: HTTP status code, or 0 if no response was received.
        body: Decoded response body, or None on transport failure.
        error: Transport error description, if any.
    """

    status: int
    body: str | None = None
    error: str | None = None


@runtime_checkable
class Transport(Protocol):
    """Executes a fully built HTTP request."""

    def execute(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: str | None,
        timeout: float,
    ) -> TransportResponse: ...


class HttpxTransport:
    """Transport backed by a reusable ``httpx.Client``.

    Args:
        options: Keyword arguments for ``httpx.Client`` (e.g. ``verify``,
            ``proxy``, ``headers``), taken from ``transport_options``.
    """

    def __init__(self, options: Mapping[str, Any] | None = None):
        self.options = dict(options or {})
        self._check_options()
        self._client: httpx.Client | None = None

    def _check_options(self) -> None:
        accepted = inspect.signature(httpx.Client.__init__).parameters
        unknown = sorted(name for name in self.options if name not in accepted or name == "self")
        if unknown:
            raise ConfigurationError(f"Unknown transport options: {', '.join(unknown)}")

    @property
    def client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(**self.options)
        return self._client

    def reset(self) -> None:
        """Clear per-request state left on the shared client."""
        if self._client is not None:
            self._client.cookies.clear()

    def execute(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: str | None,
        timeout: float,
    ) -> TransportResponse:
        try:
            client = self.client
        except (TypeError, ValueError) as e:
            return TransportResponse(status=0, error=f"Could not create HTTP client: {e}")
        self.reset()
        try:
            response = client.request(
                method,
                url,
                headers=dict(headers),
                content=body.encode("utf-8") if body is not None else None,
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            return TransportResponse(status=0, error=f"Request timed out after {timeout}s: {e}")
        except httpx.RequestError as e:
            return TransportResponse(status=0, error=f"Request failed: {e}")
        return TransportResponse(status=response.status_code, body=response.text)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __repr__(self) -> str:
        return f"HttpxTransport(open={self._client is not None})"
