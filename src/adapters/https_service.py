"""`HttpsService`: verb-shaped facade over encode -> transport -> decode."""

from __future__ import annotations

from typing import Any

from adapters.http_client import HttpxTransport
from core.config import AppSettings
from core.domain.headers import HeaderSource
from core.domain.media_types import CONTENT_TYPE_HEADER, MediaType
from core.domain.models import Endpoint, InboundResponse
from core.interfaces.transport import Transport
from core.services.request_encoder import QueryValue, append_query, encode
from core.services.response_decoder import decode


class HttpsService:
    """Sends HTTPS requests to a single host.

    Accepts a hostname (`example.com`) or a URI (`https://example.com:443`).
    """

    JSON_MEDIA_TYPE = MediaType.JSON.value
    FORM_MEDIA_TYPE = MediaType.FORM.value
    TEXT_MEDIA_TYPE = MediaType.TEXT.value

    def __init__(
        self,
        uri: str | Endpoint,
        *,
        transport: Transport | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        if isinstance(uri, Endpoint):
            self.endpoint = uri
        else:
            self.endpoint = Endpoint.from_uri(uri, default_port=self._settings.default_port)
        if transport is None:
            transport = HttpxTransport(self._settings)
        self._transport = transport

    @property
    def host(self) -> str:
        return self.endpoint.host

    @property
    def port(self) -> int:
        return self.endpoint.port

    async def get(self, path: str, query: QueryValue = None) -> InboundResponse:
        return await self.request("GET", append_query(path, query))

    async def head(self, path: str, query: QueryValue = None) -> InboundResponse:
        return await self.request("HEAD", append_query(path, query))

    async def post(self, path: str, data: Any, content_type: str | None = None) -> InboundResponse:
        return await self.request("POST", path, _type_header(content_type), data)

    async def put(self, path: str, data: Any, content_type: str | None = None) -> InboundResponse:
        return await self.request("PUT", path, _type_header(content_type), data)

    async def patch(self, path: str, data: Any, content_type: str | None = None) -> InboundResponse:
        return await self.request("PATCH", path, _type_header(content_type), data)

    async def delete(self, path: str) -> InboundResponse:
        return await self.request("DELETE", path)

    async def request(
        self,
        method: str,
        path: str,
        headers: HeaderSource = None,
        data: Any = None,
    ) -> InboundResponse:
        """Encode, send and decode one request.

        Raises:
            InvalidPayload: before anything is sent.
            ServiceFailure: status >= 400 or a broken JSON body.
        """

        encoded = encode(method, path, headers, data)
        raw = await self._transport.send(self.endpoint, encoded)
        return decode(
            raw.status_code,
            raw.headers,
            raw.body,
            encoded.method,
            reason_phrase=raw.reason_phrase,
        )


def _type_header(content_type: str | None) -> dict[str, str] | None:
    if not content_type:
        return None
    return {CONTENT_TYPE_HEADER: content_type}
