import pytest

from core.domain.errors import DecodeFailure, ServiceFailure
from core.domain.headers import HeaderSet
from core.services.request_encoder import encode
from core.services.response_decoder import decode, failure_message

JSON_HEADERS = {"content-type": "application/json"}


def test_json_body_is_parsed():
    response = decode(200, {"Content-Type": "application/json; charset=utf-8"}, b'{"ok":true}', "GET")
    assert response.status_code == 200
    assert response.logical_type == "application/json"
    assert response.data == {"ok": True}
    assert isinstance(response.headers, HeaderSet)


def test_empty_json_body_fails_even_on_success_status():
    with pytest.raises(DecodeFailure, match="empty response") as info:
        decode(200, JSON_HEADERS, b"", "GET")
    assert info.value.status_code == 500


def test_malformed_json_fails_with_parser_message():
    with pytest.raises(DecodeFailure, match=r"Cannot parse response \(") as info:
        decode(201, JSON_HEADERS, b"{not json", "POST")
    assert info.value.status_code == 500


def test_deeply_nested_json_is_a_decode_failure():
    body = b"[" * 100_000 + b"]" * 100_000
    with pytest.raises(DecodeFailure, match=r"Cannot parse response \(") as info:
        decode(200, JSON_HEADERS, body, "GET")
    assert info.value.status_code == 500


def test_malformed_json_on_error_status_keeps_status():
    with pytest.raises(DecodeFailure) as info:
        decode(502, JSON_HEADERS, b"<html>bad gateway</html>", "GET")
    assert info.value.status_code == 502


def test_404_with_nested_error_message():
    with pytest.raises(ServiceFailure) as info:
        decode(404, JSON_HEADERS, b'{"error":{"message":"not found"}}', "GET")
    assert info.value.status_code == 404
    assert info.value.message == "404 (Not Found) not found"
    assert str(info.value) == "404 (Not Found) not found"


def test_server_reason_phrase_is_preferred():
    with pytest.raises(ServiceFailure, match=r"^404 \(Nope\) not found$"):
        decode(404, JSON_HEADERS, b'{"message":"not found"}', "GET", reason_phrase="Nope")


def test_error_without_extractable_message():
    with pytest.raises(ServiceFailure) as info:
        decode(500, {"content-type": "text/html"}, b"<h1>boom</h1>", "GET")
    assert info.value.message == "500 (Internal Server Error)"


def test_plain_text_error_body():
    with pytest.raises(ServiceFailure) as info:
        decode(503, {"content-type": "text/plain"}, b"maintenance", "GET")
    assert info.value.message == "503 (Service Unavailable) maintenance"


def test_204_ignores_body_and_content_type():
    response = decode(204, JSON_HEADERS, b"garbage that is not json", "DELETE")
    assert response.status_code == 204
    assert response.logical_type is None
    assert response.data is None


def test_head_never_has_data():
    response = decode(200, JSON_HEADERS, b"", "HEAD")
    assert response.data is None
    assert response.logical_type == "application/json"


def test_head_error_uses_status_only():
    with pytest.raises(ServiceFailure) as info:
        decode(404, JSON_HEADERS, b'{"message":"ignored"}', "head")
    assert info.value.message == "404 (Not Found)"


@pytest.mark.parametrize(
    "content_type",
    ["text/html; charset=utf-8", "text/csv", "application/atom+xml", "image/svg+xml"],
)
def test_textual_types_decode_to_str(content_type):
    response = decode(200, {"content-type": content_type}, "héllo".encode("utf-8"), "GET")
    assert response.data == "héllo"


def test_other_types_stay_bytes():
    response = decode(200, {"content-type": "image/png"}, b"\x89PNG", "GET")
    assert response.data == b"\x89PNG"


def test_missing_content_type_stays_bytes():
    response = decode(200, {}, b"abc", "GET")
    assert response.logical_type is None
    assert response.data == b"abc"


def test_received_content_type_is_not_case_normalized():
    response = decode(200, {"content-type": "Application/JSON"}, b"{}", "GET")
    assert response.logical_type == "Application/JSON"
    assert response.data == b"{}"


def test_redirect_status_is_a_success():
    response = decode(302, {"location": "/elsewhere"}, b"", "GET")
    assert response.status_code == 302


def test_failure_message_for_unknown_status():
    assert failure_message(599, None, None) == "599 ()"
    assert failure_message(418, None, "short") == "418 (I'm a Teapot) short"


@pytest.mark.parametrize("value", [{"a": 1, "b": [1, 2, {"c": None}]}, [], ["x", 1.5, False]])
def test_json_round_trip_through_echo(value):
    request = encode("POST", "/post", None, value)
    response = decode(200, request.headers, request.body, request.method)
    assert response.data == value
