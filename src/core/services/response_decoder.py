"""Response decoding: status + headers + body bytes -> `InboundResponse`.

The decoder only runs once the full body is available. Failures are raised:
`DecodeFailure` for an empty/unparsable JSON body (even on 2xx) and
`ServiceFailure` for any status >= 400.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.domain.errors import DecodeFailure, ServiceFailure
from core.domain.headers import HeaderSet, HeaderSource
from core.domain.media_types import CONTENT_TYPE_HEADER, MediaType, is_textual, strip_params
from core.domain.models import InboundResponse
from core.services.error_extractors import extract_error_message

NO_CONTENT = 204
FIRST_ERROR_STATUS = 400

EMPTY_RESPONSE_MESSAGE = "Server returned an empty response."


def default_reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def failure_message(status_code: int, reason_phrase: str | None, detail: str | None) -> str:
    """`"404 (Not Found)"` or `"404 (Not Found) <detail>"`."""

    reason = reason_phrase if reason_phrase else default_reason_phrase(status_code)
    prefix = f"{status_code} ({reason})"
    if detail is None:
        return prefix
    return f"{prefix} {detail}"


def decode_body(status_code: int, logical_type: str | None, body: bytes) -> Any:
    if MediaType.JSON.matches(logical_type):
        if not body:
            raise DecodeFailure.for_status(status_code, EMPTY_RESPONSE_MESSAGE)
        try:
            return json.loads(body.decode("utf-8"))
        except (ValueError, RecursionError) as exc:
            raise DecodeFailure.for_status(status_code, f"Cannot parse response ({exc}).") from exc
    if is_textual(logical_type):
        return body.decode("utf-8", errors="replace")
    return body


def decode(
    status_code: int,
    headers: HeaderSource,
    body: bytes,
    request_method: str,
    *,
    reason_phrase: str | None = None,
) -> InboundResponse:
    """Decode a complete response.

    Raises:
        DecodeFailure: declared JSON body empty or malformed.
        ServiceFailure: status >= 400, message enriched from the error body.
    """

    resolved = headers if isinstance(headers, HeaderSet) else HeaderSet(headers)

    if status_code == NO_CONTENT:
        return InboundResponse(
            status_code=status_code,
            headers=resolved,
            logical_type=None,
            data=None,
            reason_phrase=reason_phrase,
        )

    logical_type = strip_params(resolved.get(CONTENT_TYPE_HEADER))

    data: Any = None
    if request_method.upper() != "HEAD":
        data = decode_body(status_code, logical_type, body)

    if status_code >= FIRST_ERROR_STATUS:
        detail = extract_error_message(logical_type, data)
        raise ServiceFailure(status_code, failure_message(status_code, reason_phrase, detail))

    return InboundResponse(
        status_code=status_code,
        headers=resolved,
        logical_type=logical_type,
        data=data,
        reason_phrase=reason_phrase,
    )
