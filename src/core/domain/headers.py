"""Case-insensitive header mapping."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any, Union

HeaderSource = Union[Mapping[str, Any], Iterable[tuple[str, Any]], None]


class HeaderSet(MutableMapping[str, str]):
    """Header names compared case-insensitively, one value per name.

    - Keys are normalized with `str.lower()` on insert, lookup and delete.
    - Assigning a name that already exists (in any casing) replaces the value
      and the displayed spelling.
    - Values are stored as strings (`content-length` may be given as an int).
    - Iteration order is not part of the contract.
    """

    __slots__ = ("_items",)

    def __init__(self, source: HeaderSource = None) -> None:
        self._items: dict[str, tuple[str, str]] = {}
        if source is None:
            return
        pairs = source.items() if isinstance(source, Mapping) else source
        for name, value in pairs:
            if value is None:
                continue
            self[name] = value

    def __getitem__(self, name: str) -> str:
        return self._items[name.lower()][1]

    def __setitem__(self, name: str, value: Any) -> None:
        self._items[name.lower()] = (name, str(value))

    def __delitem__(self, name: str) -> None:
        del self._items[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderSet):
            return self.normalized() == other.normalized()
        if isinstance(other, Mapping):
            return self.normalized() == HeaderSet(other).normalized()
        return NotImplemented

    def __repr__(self) -> str:
        return f"HeaderSet({dict(self.items())!r})"

    def remove(self, name: str) -> None:
        """Delete `name` if present (no error when missing)."""

        self._items.pop(name.lower(), None)

    def copy(self) -> "HeaderSet":
        return HeaderSet(self.items())

    def normalized(self) -> dict[str, str]:
        """Lower-cased name -> value, e.g. for comparisons and JSON output."""

        return {key: value for key, (_, value) in self._items.items()}
