"""Error taxonomy of the request pipeline.

- `ConstructionError`: bad input detected before anything is sent
  (`InvalidEndpoint`, `InvalidPayload`).
- `ServiceFailure`: the exchange completed but was unsuccessful (status >= 400).
- `DecodeFailure`: a declared JSON body was empty or could not be parsed.

Transport faults (DNS, TLS, reset) are not wrapped: the transport's own
exception reaches the caller unchanged.
"""

from __future__ import annotations

# Status reported by `DecodeFailure` when the server answered with a success code.
DECODE_FAILURE_STATUS = 500


class ConstructionError(ValueError):
    """Invalid endpoint or payload; raised before any I/O."""


class InvalidEndpoint(ConstructionError):
    """The endpoint URI cannot be used (e.g. a scheme other than https)."""


class InvalidPayload(ConstructionError):
    """The payload cannot be sent with the given method/content-type."""


class ServiceFailure(Exception):
    """An unsuccessful HTTP exchange with a best-effort message."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code!r}, message={self.message!r})"


class DecodeFailure(ServiceFailure):
    """Malformed or empty JSON body where JSON was declared."""

    @classmethod
    def for_status(cls, status_code: int, message: str) -> "DecodeFailure":
        """Keep error statuses; map successful ones to the server-fault sentinel."""

        code = status_code if status_code >= 400 else DECODE_FAILURE_STATUS
        return cls(code, message)
