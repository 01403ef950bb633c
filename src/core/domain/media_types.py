"""Media types and header names shared by the encoder and the decoder.

Comparisons are always made against these lower-case literals; received
header values are never case-normalized.
"""

from __future__ import annotations

from enum import Enum


class MediaType(str, Enum):
    """Media types with dedicated handling in the pipeline."""

    JSON = "application/json"
    FORM = "application/x-www-form-urlencoded"
    TEXT = "text/plain"

    def matches(self, logical_type: str | None) -> bool:
        """True when `logical_type` is exactly this media type."""

        return logical_type == self.value


CONTENT_TYPE_HEADER = "content-type"
CONTENT_LENGTH_HEADER = "content-length"

TEXT_PREFIX = "text/"
XML_SUFFIX = "+xml"

BODY_REQUIRED_METHODS = frozenset({"POST", "PUT", "PATCH"})


def strip_params(value: str | None) -> str | None:
    """Drop any `;`-delimited parameter suffix from a content-type value.

    `"application/json; charset=utf-8"` -> `"application/json"`.
    The remainder is returned as received (no trimming, no lower-casing).
    """

    if value is None:
        return None
    return value.split(";", 1)[0]


def is_textual(logical_type: str | None) -> bool:
    """`text/*` and `*+xml` bodies are decoded to strings."""

    if not logical_type:
        return False
    return logical_type.startswith(TEXT_PREFIX) or logical_type.endswith(XML_SUFFIX)
