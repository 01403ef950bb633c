from adapters.json_exporter import response_to_dict
from core.domain.headers import HeaderSet
from core.domain.models import InboundResponse


def test_bytes_are_base64_encoded():
    response = InboundResponse(200, HeaderSet({"Content-Type": "image/png"}), "image/png", b"\x89PNG")
    payload = response_to_dict(response)
    assert payload["data_base64"] == "iVBORw=="
    assert payload["headers"] == {"content-type": "image/png"}
    assert "data" not in payload


def test_structured_data_is_kept():
    response = InboundResponse(201, HeaderSet(), "application/json", {"id": 7}, "Created")
    payload = response_to_dict(response)
    assert payload["data"] == {"id": 7}
    assert payload["reason_phrase"] == "Created"
