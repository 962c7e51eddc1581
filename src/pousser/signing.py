"""Canonical query strings and HMAC-SHA256 request signatures.

Every REST call carries an ``auth_timestamp`` query parameter plus the
caller's parameters, always sorted by key. The ``hash`` header is an
HMAC-SHA256 over ``METHOD + path + canonical params`` keyed by the app
secret. Request bodies are not signed directly: their MD5 travels as the
``body_md5`` query parameter, which is part of the signed parameter set.

Example:
    >>> build_auth_header("secret", "POST", "/api/app/1/publish", {"b": 2, "a": 1})
    '...'  # hex HMAC-SHA256 of "POST/api/app/1/publish" + "a=1&b=2"
"""

from __future__ import annotations

import hashlib
import hmac
import time
from collections.abc import Mapping
from typing import Any


def implode_params(params: Mapping[str, Any], glue: str = "=", separator: str = "&") -> str:
    """Join key/value pairs in the mapping's iteration order.

    List and tuple values are comma-joined before insertion.

    Args:
        params: Parameters to join.
        glue: String placed between a key and its value.
        separator: String placed between pairs.

    Returns:
        The joined string, e.g. ``"a=1&b=x,y"``.
    """
    pairs = []
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            value = ",".join(str(item) for item in value)
        pairs.append(f"{key}{glue}{value}")
    return separator.join(pairs)


def _sorted_params(params: Mapping[str, Any]) -> dict[str, Any]:
    return dict(sorted(params.items()))


def build_query_string(params: Mapping[str, Any] | None = None) -> str:
    """Build the canonical query string sent with every request.

    ``auth_timestamp`` is set to the current Unix time first and the caller's
    parameters are merged over it, so a caller-supplied ``auth_timestamp``
    takes precedence.

    Args:
        params: Additional query parameters.

    Returns:
        Sorted ``key=value`` pairs joined by ``&``.
    """
    query: dict[str, Any] = {"auth_timestamp": int(time.time())}
    query.update(params or {})
    return implode_params(_sorted_params(query))


def build_auth_header(
    secret: str,
    method: str,
    path: str,
    params: Mapping[str, Any] | None = None,
) -> str:
    """Build the HMAC signature carried in the ``hash`` header.

    The parameters are sorted on their own; the timestamped query string is
    not reused.

    Args:
        secret: App secret used as the HMAC key.
        method: HTTP method, e.g. ``"POST"``.
        path: Request path, e.g. ``"/api/app/1/publish"``.
        params: Signed parameters (including ``body_md5`` for POSTs).

    Returns:
        Lowercase hex HMAC-SHA256 digest.
    """
    string_to_sign = method + path + implode_params(_sorted_params(params or {}))
    mac = hmac.new(secret.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha256)
    return mac.hexdigest()


def verify_auth_header(
    signature: str,
    secret: str,
    method: str,
    path: str,
    params: Mapping[str, Any] | None = None,
) -> bool:
    """Check a ``hash`` header value in constant time.

    Returns:
        True if ``signature`` matches the expected digest.
    """
    if not signature:
        return False
    expected = build_auth_header(secret, method, path, params)
    return hmac.compare_digest(signature, expected)


def body_md5(body: str) -> str:
    """Return the hex MD5 of the exact serialized request body."""
    return hashlib.md5(body.encode("utf-8")).hexdigest()
