"""Error-message extraction from heterogeneous error bodies.

Upstream APIs disagree on where the human-readable message lives. Each
strategy below looks at one known shape and returns a message or `None`;
`extract_error_message` walks them in order and stops at the first hit.

Order (first match wins):
1. `{"error_description": "..."}` (first line only)
2. `{"error": {"message": "..."}}`
3. `{"odata.error": {"message": {"value": "..."}}}`
4. `{"message": "..."}`
5. a `text/plain` body, verbatim
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Callable, Optional

from core.domain.media_types import MediaType

ErrorExtractor = Callable[[Optional[str], Any], Optional[str]]

_LINE_BREAK = re.compile(r"\r?\n")


def _string_at(data: Any, *path: str) -> str | None:
    node = data
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node if isinstance(node, str) else None


def error_description(logical_type: str | None, data: Any) -> str | None:
    value = _string_at(data, "error_description")
    if value is None:
        return None
    return _LINE_BREAK.split(value, 1)[0]


def nested_error_message(logical_type: str | None, data: Any) -> str | None:
    return _string_at(data, "error", "message")


def odata_error_message(logical_type: str | None, data: Any) -> str | None:
    return _string_at(data, "odata.error", "message", "value")


def top_level_message(logical_type: str | None, data: Any) -> str | None:
    return _string_at(data, "message")


def plain_text_body(logical_type: str | None, data: Any) -> str | None:
    if MediaType.TEXT.matches(logical_type) and isinstance(data, str):
        return data
    return None


DEFAULT_EXTRACTORS: tuple[ErrorExtractor, ...] = (
    error_description,
    nested_error_message,
    odata_error_message,
    top_level_message,
    plain_text_body,
)


def extract_error_message(
    logical_type: str | None,
    data: Any,
    extractors: tuple[ErrorExtractor, ...] = DEFAULT_EXTRACTORS,
) -> str | None:
    """Best-effort message for an error response, or `None`."""

    if data is None:
        return None
    for extractor in extractors:
        message = extractor(logical_type, data)
        if message is not None:
            return message
    return None
