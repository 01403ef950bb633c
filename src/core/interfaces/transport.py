"""Transport contract.

The transport owns everything below the request pipeline: DNS, TCP, TLS and
reading the body to the end. It must not retry, follow redirects or apply
a timeout of its own.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import EncodedRequest, Endpoint, RawResponse


@runtime_checkable
class Transport(Protocol):
    """Minimal contract for sending one encoded request.

    Rules:
    - `send` is async because it performs network I/O.
    - The returned `RawResponse` carries the complete body.
    - Connection-level errors propagate unchanged.
    """

    async def send(self, endpoint: Endpoint, request: EncodedRequest) -> RawResponse:
        """Send `request` to `endpoint` and return the raw response."""

        ...
