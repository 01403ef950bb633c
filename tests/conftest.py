"""Shared fixtures: an in-memory transport that records what it was asked to send."""

from __future__ import annotations

import pytest

from core.domain.headers import HeaderSet
from core.domain.models import EncodedRequest, Endpoint, RawResponse


class RecordingTransport:
    """Transport double returning a canned `RawResponse`."""

    def __init__(self, response: RawResponse | None = None) -> None:
        self.response = response or RawResponse(status_code=200, headers=HeaderSet(), body=b"")
        self.sent: list[tuple[Endpoint, EncodedRequest]] = []

    async def send(self, endpoint: Endpoint, request: EncodedRequest) -> RawResponse:
        self.sent.append((endpoint, request))
        return self.response

    def echo(self, status_code: int = 200) -> None:
        """Answer the next call with the body and content-type of the last request."""

        _, request = self.sent[-1]
        self.response = RawResponse(
            status_code=status_code,
            headers=HeaderSet({"content-type": request.headers.get("content-type")}),
            body=request.body or b"",
        )


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()
