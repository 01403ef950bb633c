"""Domain models of the request pipeline.

- `Endpoint` is a strict, frozen pydantic model: validated once, reused by
  every call of a client instance.
- The per-call units (`EncodedRequest`, `RawResponse`, `InboundResponse`) are
  plain frozen dataclasses around a `HeaderSet`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from core.domain.errors import InvalidEndpoint
from core.domain.headers import HeaderSet

HTTPS_SCHEME = "https"
DEFAULT_HTTPS_PORT = 443


class Endpoint(BaseModel):
    """Host/port pair targeted by a client instance."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(
        ...,
        min_length=1,
        description="Hostname or IP literal, without scheme.",
    )
    port: int = Field(
        default=DEFAULT_HTTPS_PORT,
        ge=1,
        le=65535,
        description="TCP port (443 unless stated otherwise).",
    )

    @classmethod
    def from_uri(cls, uri: str, *, default_port: int = DEFAULT_HTTPS_PORT) -> "Endpoint":
        """Build an endpoint from `example.com`, `example.com:8443` or `https://example.com:8443`.

        Raises:
            InvalidEndpoint: scheme other than https, missing host or bad port.
        """

        value = (uri or "").strip()
        if "://" in value:
            parts = urlsplit(value)
            if parts.scheme.lower() != HTTPS_SCHEME:
                raise InvalidEndpoint(f"{uri}: invalid protocol (expected https)")
        else:
            parts = urlsplit(f"//{value}")

        try:
            host = parts.hostname
            port = parts.port
        except ValueError as exc:
            raise InvalidEndpoint(f"{uri}: {exc}") from exc
        if not host:
            raise InvalidEndpoint(f"{uri}: missing host")

        try:
            return cls(host=host, port=port if port is not None else default_port)
        except ValidationError as exc:
            raise InvalidEndpoint(f"{uri}: invalid port") from exc

    @property
    def base_url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        if self.port == DEFAULT_HTTPS_PORT:
            return f"{HTTPS_SCHEME}://{host}"
        return f"{HTTPS_SCHEME}://{host}:{self.port}"


@dataclass(frozen=True)
class EncodedRequest:
    """Fully resolved request handed to the transport."""

    method: str
    path: str
    headers: HeaderSet = field(default_factory=HeaderSet)
    body: bytes | None = None


@dataclass(frozen=True)
class RawResponse:
    """What the transport returns once the whole body has been received."""

    status_code: int
    headers: HeaderSet
    body: bytes = b""
    reason_phrase: str | None = None


@dataclass(frozen=True)
class InboundResponse:
    """Successful, decoded response.

    `data` is `None` (204 or HEAD), a parsed JSON value, a `str` for textual
    types, or the raw `bytes` for anything else.
    """

    status_code: int
    headers: HeaderSet
    logical_type: str | None
    data: Any = None
    reason_phrase: str | None = None
