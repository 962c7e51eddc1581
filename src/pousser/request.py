"""Assemble signed requests: URL, headers and body.

The body handed to ``RequestBuilder.build`` is sent byte-for-byte as given;
it is the same string whose MD5 goes into ``body_md5``, which keeps the
signature and the body consistent.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pousser._version import __version__
from pousser.config import Credentials, PousserSettings
from pousser.signing import body_md5, build_auth_header, build_query_string

# Header names
HEADER_KEY = "key"
HEADER_SECRET = "secret"
HEADER_HASH = "hash"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_LIBRARY = "X-Pousser-Library"

LIBRARY_NAME = "pousser-python"


@dataclass
class PreparedRequest:
    """A request ready to hand to a transport."""

    method: str
    url: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    timeout: float = 30.0
    params: dict[str, Any] = field(default_factory=dict)


class RequestBuilder:
    """Builds signed requests for one set of credentials and settings."""

    def __init__(self, credentials: Credentials, settings: PousserSettings):
        self.credentials = credentials
        self.settings = settings

    @property
    def domain(self) -> str:
        return self.settings.domain

    def request_path(self, sub_path: str) -> str:
        """Return ``base_path + sub_path`` as appended to the domain."""
        return self.settings.base_path + sub_path

    def headers(self, signature: str) -> dict[str, str]:
        return {
            HEADER_KEY: self.credentials.key,
            HEADER_SECRET: self.credentials.secret,
            HEADER_HASH: signature,
            HEADER_CONTENT_TYPE: "application/json",
            HEADER_LIBRARY: f"{LIBRARY_NAME} {__version__}",
        }

    def build(
        self,
        method: str,
        sub_path: str,
        params: Mapping[str, Any] | None = None,
        body: str | None = None,
    ) -> PreparedRequest:
        """Sign and assemble a request.

        Args:
            method: ``GET`` or ``POST``.
            sub_path: Path below ``base_path``, starting with ``/``.
            params: Caller query parameters.
            body: Serialized JSON body for POSTs. When given, its MD5 is
                added as ``body_md5`` unless the caller already set one.

        Returns:
            The prepared request.
        """
        method = method.upper()
        query_params = dict(params or {})
        if method == "POST" and body is not None:
            query_params.setdefault("body_md5", body_md5(body))

        request_path = self.request_path(sub_path)
        signed_path = "/" + request_path
        signature = build_auth_header(self.credentials.secret, method, signed_path, query_params)

        query = build_query_string(query_params)
        url = f"{self.domain}{request_path}?{query}"

        return PreparedRequest(
            method=method,
            url=url,
            path=signed_path,
            headers=self.headers(signature),
            body=body,
            timeout=self.settings.timeout,
            params=query_params,
        )
