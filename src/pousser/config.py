"""Client configuration with Pydantic validation.

This module defines the settings a Pousser client is built from:

- Credentials: the immutable key / secret / app_id triple
- PousserSettings: endpoint, environment, timeout and transport options

Caller options are merged over the defaults; unknown option keys are ignored
so callers can pass a broader options mapping unchanged.

Example:
    >>> settings = PousserSettings.from_options({"host": "https://eu.pousser.io"})
    >>> settings.host
    'eu.pousser.io'
    >>> PousserSettings.from_options({"useTLS": True, "port": 8443}).port
    8443
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from pousser.exceptions import ConfigurationError

# =============================================================================
# Default Configuration Values
# =============================================================================

DEFAULT_ENVIRONMENT = "production"
DEFAULT_SCHEME = "https"
DEFAULT_HOST = "api.pousser.io"
DEFAULT_PORT = 443
DEFAULT_TIMEOUT = 30.0  # seconds
DEFAULT_BASE_PATH = "api"

PRODUCTION_ENVIRONMENT = "production"

_SCHEME_PREFIX = re.compile(r"https?://")


# =============================================================================
# Credentials
# =============================================================================


@dataclass(frozen=True)
class Credentials:
    """App credentials, fixed for the lifetime of a client.

    The secret is excluded from ``repr()`` so it never ends up in logs.
    """

    key: str
    secret: str = field(repr=False)
    app_id: str

    def __post_init__(self) -> None:
        for name in ("key", "secret", "app_id"):
            if not getattr(self, name):
                raise ConfigurationError(f"Pousser {name} cannot be empty")
        # app ids are often handed over as ints
        object.__setattr__(self, "app_id", str(self.app_id))


# =============================================================================
# PousserSettings Model
# =============================================================================


class PousserSettings(BaseModel):
    """Endpoint and behaviour settings for a Pousser client.

    Attributes:
        environment: ``production`` publishes to ``/app/{id}/publish``; any
            other value publishes to ``/app/{id}/environment/{env}/publish``.
        scheme: ``http`` or ``https``.
        host: API host without scheme or trailing slash.
        port: API port.
        timeout: Per-request timeout in seconds.
        debug: When True, publish calls return the raw response.
        base_path: Path prefix for every request, without slashes.
        transport_options: Raw keyword arguments handed to the transport's
            HTTP client (e.g. ``verify``, ``proxy``, ``headers``).
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    environment: str = Field(default=DEFAULT_ENVIRONMENT, min_length=1)
    scheme: str = Field(default=DEFAULT_SCHEME)
    host: str = Field(default=DEFAULT_HOST, min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    debug: bool = False
    base_path: str = Field(default=DEFAULT_BASE_PATH)
    transport_options: dict[str, Any] = Field(default_factory=dict)

    # =========================================================================
    # Validators
    # =========================================================================

    @model_validator(mode="before")
    @classmethod
    def apply_use_tls(cls, data: Any) -> Any:
        """Expand the ``useTLS`` shorthand into scheme and port.

        The shorthand only applies when neither ``scheme`` nor ``port`` was
        given explicitly. Null option values count as not given.
        """
        if not isinstance(data, Mapping):
            return data
        data = {k: v for k, v in data.items() if v is not None}
        use_tls = data.pop("useTLS", data.pop("use_tls", False)) is True
        if use_tls and "scheme" not in data and "port" not in data:
            data["scheme"] = "https"
            data["port"] = 443
        return data

    @field_validator("host")
    @classmethod
    def strip_scheme_from_host(cls, v: str) -> str:
        """Drop a leading ``http://`` or ``https://`` from the host."""
        return _SCHEME_PREFIX.sub("", v, count=1).rstrip("/")

    @field_validator("scheme")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        v = v.lower()
        if v not in ("http", "https"):
            raise ValueError(f"scheme must be http or https, got: {v}")
        return v

    @field_validator("base_path")
    @classmethod
    def strip_base_path(cls, v: str) -> str:
        return v.strip("/")

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION_ENVIRONMENT

    @property
    def domain(self) -> str:
        """Base URL of the API, always ending in ``/``."""
        return f"{self.scheme}://{self.host}:{self.port}/"

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> PousserSettings:
        """Build settings from a loose options mapping.

        Args:
            options: Caller overrides merged over the defaults.

        Returns:
            Validated settings.

        Raises:
            ConfigurationError: If any recognised option is invalid.
        """
        try:
            return cls.model_validate(dict(options or {}))
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid Pousser settings: {e}") from e
