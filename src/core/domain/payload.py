"""Outbound payload variants.

The shape of the payload is decided once, by `to_payload`, when a value
enters the API. The encoder dispatches on the variant, never on the type of
the wrapped value.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel

from core.domain.errors import InvalidPayload


@dataclass(frozen=True)
class Absent:
    """No body."""


@dataclass(frozen=True)
class Raw:
    """Opaque bytes; the caller must say what they are (content-type)."""

    data: bytes


@dataclass(frozen=True)
class Text:
    data: str


@dataclass(frozen=True)
class Structured:
    """JSON-like data (mapping, list, pydantic model) to be serialized."""

    value: Any


OutboundPayload = Union[Absent, Raw, Text, Structured]

ABSENT = Absent()


def to_payload(value: Any) -> OutboundPayload:
    """Classify an application value into a payload variant.

    Raises:
        InvalidPayload: numbers, booleans and other scalar/opaque objects.
    """

    if isinstance(value, (Absent, Raw, Text, Structured)):
        return value
    if value is None:
        return ABSENT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Raw(bytes(value))
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, (Mapping, list, tuple, BaseModel)):
        return Structured(value)
    raise InvalidPayload(
        f"Don't know how to handle data of type {type(value).__name__}."
    )
