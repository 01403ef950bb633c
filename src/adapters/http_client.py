"""httpx transport.

- `build_async_client` centralizes client defaults (TLS verification,
  no timeout, no redirects) so every request behaves the same.
- `HttpxTransport` implements `core.interfaces.transport.Transport`: one
  request, body accumulated chunk by chunk, no retries.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.headers import HeaderSet
from core.domain.models import EncodedRequest, Endpoint, RawResponse

logger = logging.getLogger("https_service.transport")


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the transport defaults.

    - `timeout=None`: no built-in deadline, callers cancel on their own.
    - `follow_redirects=False`: 3xx responses are returned as-is.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {}
    if settings.user_agent:
        headers["User-Agent"] = settings.user_agent
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(None),
        follow_redirects=False,
        verify=settings.verify_tls,
        headers=headers,
    )


def request_url(endpoint: Endpoint, path: str) -> str:
    if not path.startswith("/"):
        path = "/" + path
    return f"{endpoint.base_url}{path}"


class HttpxTransport:
    """Default transport backed by httpx.

    A fresh client is opened per request unless one is injected; an injected
    client is never closed here.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    async def send(self, endpoint: Endpoint, request: EncodedRequest) -> RawResponse:
        if self._client is not None:
            return await self._send(self._client, endpoint, request)
        async with build_async_client(self._settings) as client:
            return await self._send(client, endpoint, request)

    async def _send(
        self,
        client: httpx.AsyncClient,
        endpoint: Endpoint,
        request: EncodedRequest,
    ) -> RawResponse:
        url = request_url(endpoint, request.path)
        logger.debug("%s %s", request.method, url)

        outgoing = client.build_request(
            request.method,
            url,
            headers=list(request.headers.items()),
            content=request.body,
        )
        response = await client.send(outgoing, stream=True)
        try:
            chunks: list[bytes] = []
            async for chunk in response.aiter_bytes():
                chunks.append(chunk)
        finally:
            await response.aclose()

        body = b"".join(chunks)
        logger.debug(
            "%s %s -> %s (%d bytes)", request.method, url, response.status_code, len(body)
        )
        return RawResponse(
            status_code=response.status_code,
            headers=HeaderSet(response.headers.items()),
            body=body,
            reason_phrase=response.reason_phrase or None,
        )
