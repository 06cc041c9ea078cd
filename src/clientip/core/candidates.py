"""Split a normalized header value into literal address candidates."""

from __future__ import annotations

import re

_CANDIDATE_SEPARATOR = ","
_PORT_RE = re.compile(r"[0-9]{1,5}")


def _is_port(text: str) -> bool:
    return _PORT_RE.fullmatch(text) is not None


def strip_port(token: str) -> str:
    """Remove an optional ``:port`` suffix from an address literal.

    ``1.2.3.4:80`` and ``[2001:db8::1]:443`` lose their port, a bare
    bracketed ``[2001:db8::1]`` loses its brackets, and an unbracketed
    IPv6 literal is left alone since its last group cannot be told apart
    from a port.  Malformed bracket literals come back unchanged.
    """
    if token.startswith("["):
        end = token.find("]")
        if end == -1:
            return token
        rest = token[end + 1 :]
        if rest and not (rest.startswith(":") and _is_port(rest[1:])):
            return token
        return token[1:end]

    if token.count(":") == 1:
        host, _, port = token.partition(":")
        if _is_port(port):
            return host
    return token


def split_candidates(value: str, limit: int | None = None) -> list[str]:
    """Return the ordered candidates of a header value, at most *limit*."""
    candidates: list[str] = []
    for piece in value.split(_CANDIDATE_SEPARATOR):
        if limit is not None and len(candidates) >= limit:
            break
        token = piece.strip()
        if token:
            candidates.append(strip_port(token))
    return candidates
