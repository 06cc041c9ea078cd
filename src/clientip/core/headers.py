"""Inbound header normalization.

Turns whatever shape the HTTP layer hands us (a plain mapping, a
multimap of lists, or raw ASGI ``(bytes, bytes)`` pairs) into one
case-insensitive ``name -> value`` view.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Union

EXCLUDED_HEADERS = frozenset({"cookie"})

_HEADER_SEPARATOR = ","
_ASGI_ENCODING = "latin-1"

RawHeaderName = Union[str, bytes]
RawHeaderValue = Union[str, bytes]
RawHeaders = Union[
    Mapping[str, Union[str, Iterable[str]]],
    Iterable[tuple[RawHeaderName, RawHeaderValue]],
]


def _text(value: RawHeaderName | RawHeaderValue) -> str:
    if isinstance(value, bytes):
        return value.decode(_ASGI_ENCODING)
    return value


class HeaderSet(Mapping[str, str]):
    """Read-only, case-insensitive header mapping.

    Iteration yields lowercased names in the order they were first seen.
    Excluded headers are dropped and names differing only in case are
    joined, however the set is built.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str]) -> None:
        merged: dict[str, str] = {}
        for name, value in values.items():
            key = name.lower()
            if key in EXCLUDED_HEADERS:
                continue
            if key in merged:
                merged[key] = f"{merged[key]}{_HEADER_SEPARATOR}{value}"
            else:
                merged[key] = value
        self._values = merged

    def __getitem__(self, name: str) -> str:
        return self._values[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"HeaderSet({self._values!r})"


def _iter_occurrences(raw: RawHeaders) -> Iterator[tuple[str, str]]:
    if isinstance(raw, Mapping):
        for name, values in raw.items():
            if isinstance(values, (str, bytes)):
                yield _text(name), _text(values)
            else:
                for value in values:
                    yield _text(name), _text(value)
        return

    for name, value in raw:
        yield _text(name), _text(value)


def normalize_headers(raw: RawHeaders | HeaderSet | None) -> HeaderSet | None:
    """Merge repeated headers and drop excluded ones.

    Returns ``None`` when nothing is left, so an input holding only a
    ``cookie`` header is indistinguishable from no headers at all.
    """
    if raw is None:
        return None
    if isinstance(raw, HeaderSet):
        return raw or None

    merged: dict[str, list[str]] = {}
    for name, value in _iter_occurrences(raw):
        key = name.lower()
        if key in EXCLUDED_HEADERS:
            continue
        merged.setdefault(key, []).append(value)

    if not merged:
        return None
    return HeaderSet(
        {name: _HEADER_SEPARATOR.join(values) for name, values in merged.items()}
    )
