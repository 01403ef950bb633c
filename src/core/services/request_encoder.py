"""Request encoding: payload variant + headers -> `EncodedRequest`.

Rules (in order):
- Absent: POST/PUT/PATCH require a body; otherwise framing headers are dropped.
- Raw: content-type is mandatory; content-length is the byte length.
- Text: content-type defaults to text/plain; content-length is always recomputed.
- Structured: JSON or form encoding, chosen by content-type (JSON by default).
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel

from core.domain.errors import InvalidPayload
from core.domain.headers import HeaderSet, HeaderSource
from core.domain.media_types import (
    BODY_REQUIRED_METHODS,
    CONTENT_LENGTH_HEADER,
    CONTENT_TYPE_HEADER,
    MediaType,
    strip_params,
)
from core.domain.models import EncodedRequest
from core.domain.payload import Absent, OutboundPayload, Raw, Structured, Text, to_payload

QueryValue = Mapping[str, Any] | str | None


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_json(value: Any) -> str:
    """Compact JSON text (`{"a":1,"b":2}`)."""

    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_json_default)


def serialize_form(value: Any) -> str:
    """`application/x-www-form-urlencoded` text for a flat mapping."""

    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    if not isinstance(value, Mapping):
        raise InvalidPayload("Form encoding requires a mapping of key/value pairs.")
    return urlencode(value, doseq=True)


def append_query(path: str, query: QueryValue) -> str:
    """Append a mapping or pre-encoded query string to `path`.

    Empty queries (`None`, `{}`, `""`) leave the path untouched: `{}` gives
    `/get`, never `/get?` with a dangling separator.
    """

    if not query:
        return path
    encoded = query if isinstance(query, str) else serialize_form(query)
    if not encoded:
        return path
    sep = "?" if "?" not in path else "&"
    return f"{path}{sep}{encoded}"


def _encode_structured(value: Any, headers: HeaderSet) -> bytes:
    content_type = strip_params(headers.get(CONTENT_TYPE_HEADER) or None)
    if content_type is None:
        headers[CONTENT_TYPE_HEADER] = MediaType.JSON.value
        text = serialize_json(value)
    elif MediaType.JSON.matches(content_type):
        text = serialize_json(value)
    elif MediaType.FORM.matches(content_type):
        text = serialize_form(value)
    else:
        raise InvalidPayload(
            f"Unsupported content-type ({content_type}) - cannot serialize object for this content-type."
        )
    return text.encode("utf-8")


def encode(
    method: str,
    path: str,
    headers: HeaderSource = None,
    payload: OutboundPayload | Any = None,
    *,
    query: QueryValue = None,
) -> EncodedRequest:
    """Resolve method, path, headers and body for the transport.

    `payload` may be a payload variant or any application value; plain values
    go through `to_payload` first.

    Raises:
        InvalidPayload: missing body for POST/PUT/PATCH, bytes without a
            content-type, an unsupported content-type for structured data, or
            an unsupported value type.
    """

    method = method.upper()
    resolved = HeaderSet(headers)
    payload = to_payload(payload)
    path = append_query(path, query)

    body: bytes | None
    if isinstance(payload, Absent):
        if method in BODY_REQUIRED_METHODS:
            raise InvalidPayload(f"The {method} method requires that data be specified.")
        resolved.remove(CONTENT_TYPE_HEADER)
        resolved.remove(CONTENT_LENGTH_HEADER)
        body = None
    elif isinstance(payload, Raw):
        if not resolved.get(CONTENT_TYPE_HEADER):
            raise InvalidPayload("The content-type must be specified for binary data.")
        body = payload.data
    elif isinstance(payload, Text):
        if not resolved.get(CONTENT_TYPE_HEADER):
            resolved[CONTENT_TYPE_HEADER] = MediaType.TEXT.value
        body = payload.data.encode("utf-8")
    elif isinstance(payload, Structured):
        body = _encode_structured(payload.value, resolved)
    else:
        raise InvalidPayload(f"Don't know how to handle payload {payload!r}.")

    if body is not None:
        resolved[CONTENT_LENGTH_HEADER] = len(body)

    return EncodedRequest(method=method, path=path, headers=resolved, body=body)
