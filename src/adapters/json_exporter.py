"""JSON export of decoded responses (CLI `--raw` / `--output`)."""

from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Any

from core.domain.models import InboundResponse


def response_to_dict(response: InboundResponse) -> dict[str, Any]:
    """Plain-JSON view of a response; raw bytes are base64-encoded."""

    payload: dict[str, Any] = {
        "status_code": response.status_code,
        "reason_phrase": response.reason_phrase,
        "headers": response.headers.normalized(),
        "logical_type": response.logical_type,
    }
    if isinstance(response.data, bytes):
        payload["data_base64"] = base64.b64encode(response.data).decode("ascii")
    else:
        payload["data"] = response.data
    return payload


def dump_response_json(response: InboundResponse) -> str:
    return json.dumps(response_to_dict(response), ensure_ascii=False, indent=2, sort_keys=True)


def export_response_json(*, response: InboundResponse, output_path: Path) -> Path:
    """Write `response` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_response_json(response) + "\n", encoding="utf-8")
    return output_path
