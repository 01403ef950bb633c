"""HttpsService facade: encoding, transport hand-off and decoding."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from respx import MockRouter

from adapters.https_service import HttpsService
from core.domain.errors import DecodeFailure, InvalidEndpoint, InvalidPayload, ServiceFailure
from core.domain.headers import HeaderSet
from core.domain.models import RawResponse

DATA = {"a": 1, "b": 2, "c": 3}


def test_constructor_accepts_host_or_https_uri(transport):
    assert HttpsService("httpbin.org", transport=transport).port == 443
    service = HttpsService("https://example.com:8443", transport=transport)
    assert (service.host, service.port) == ("example.com", 8443)


def test_constructor_rejects_http(transport):
    with pytest.raises(InvalidEndpoint):
        HttpsService("http://example.com", transport=transport)


def test_media_type_constants():
    assert HttpsService.JSON_MEDIA_TYPE == "application/json"
    assert HttpsService.FORM_MEDIA_TYPE == "application/x-www-form-urlencoded"


@pytest.mark.asyncio
async def test_post_structured_data_round_trips(transport):
    service = HttpsService("httpbin.org", transport=transport)
    transport.response = RawResponse(
        status_code=200,
        headers=HeaderSet({"content-type": "application/json"}),
        body=b'{"a":1,"b":2,"c":3}',
    )

    response = await service.post("/post", DATA)

    endpoint, request = transport.sent[0]
    assert endpoint.host == "httpbin.org"
    assert request.method == "POST"
    assert request.headers["content-type"] == "application/json"
    assert response.data == DATA


@pytest.mark.asyncio
async def test_post_with_content_type_override(transport):
    service = HttpsService("httpbin.org", transport=transport)
    await service.put("/put", DATA, HttpsService.FORM_MEDIA_TYPE)

    _, request = transport.sent[0]
    assert request.body == b"a=1&b=2&c=3"


@pytest.mark.asyncio
async def test_post_without_data_fails_before_sending(transport):
    service = HttpsService("httpbin.org", transport=transport)
    with pytest.raises(InvalidPayload):
        await service.post("/post", None, "text/plain")
    with pytest.raises(InvalidPayload):
        await service.post("/post", 1, "text/plain")
    assert transport.sent == []


@pytest.mark.asyncio
async def test_get_and_head_append_query(transport):
    service = HttpsService("httpbin.org", transport=transport)
    await service.get("/get", {"q": "a b"})
    await service.head("/get", {})

    assert transport.sent[0][1].path == "/get?q=a+b"
    assert transport.sent[1][1].path == "/get"
    assert transport.sent[1][1].method == "HEAD"


@pytest.mark.asyncio
async def test_delete_sends_no_body(transport):
    service = HttpsService("httpbin.org", transport=transport)
    transport.response = RawResponse(status_code=204, headers=HeaderSet(), body=b"ignored")

    response = await service.delete("/delete")

    assert transport.sent[0][1].body is None
    assert response.data is None


@pytest.mark.asyncio
async def test_text_echo(transport):
    service = HttpsService("httpbin.org", transport=transport)
    await service.post("/post", "hello")
    transport.echo()

    response = await service.post("/post", "hello")
    assert response.logical_type == "text/plain"
    assert response.data == "hello"


@pytest.mark.asyncio
async def test_concurrent_requests_do_not_share_headers(transport):
    service = HttpsService("httpbin.org", transport=transport)
    await asyncio.gather(
        service.post("/a", "text"),
        service.post("/b", {"k": "v"}),
        service.get("/c"),
    )
    by_path = {request.path: request for _, request in transport.sent}
    assert by_path["/a"].headers["content-type"] == "text/plain"
    assert by_path["/b"].headers["content-type"] == "application/json"
    assert "content-type" not in by_path["/c"].headers


@pytest.mark.asyncio
async def test_end_to_end_with_httpx(respx_mock: MockRouter):
    route = respx_mock.post("https://httpbin.org/post").mock(
        return_value=httpx.Response(200, json={"json": DATA})
    )
    service = HttpsService("httpbin.org")

    response = await service.post("/post", DATA)

    sent = route.calls.last.request
    assert sent.headers["content-type"] == "application/json"
    assert sent.content == b'{"a":1,"b":2,"c":3}'
    assert response.data == {"json": DATA}
    assert response.reason_phrase == "OK"


@pytest.mark.asyncio
async def test_end_to_end_service_failure(respx_mock: MockRouter):
    respx_mock.get("https://example.com:8443/missing").mock(
        return_value=httpx.Response(404, json={"error": {"message": "not found"}})
    )
    service = HttpsService("https://example.com:8443")

    with pytest.raises(ServiceFailure) as info:
        await service.get("/missing")
    assert info.value.status_code == 404
    assert info.value.message == "404 (Not Found) not found"


@pytest.mark.asyncio
async def test_end_to_end_empty_json(respx_mock: MockRouter):
    respx_mock.get("https://httpbin.org/empty").mock(
        return_value=httpx.Response(200, headers={"content-type": "application/json"})
    )
    with pytest.raises(DecodeFailure, match="empty response"):
        await HttpsService("httpbin.org").get("/empty")


@pytest.mark.asyncio
async def test_transport_faults_propagate_unchanged(respx_mock: MockRouter):
    respx_mock.get("https://httpbin.org/get").mock(side_effect=httpx.ConnectError)
    with pytest.raises(httpx.ConnectError):
        await HttpsService("httpbin.org").get("/get")
