"""Write a resolution outcome onto a taggable target (usually a span)."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .headers import HeaderSet, RawHeaders
from .resolver import Ambiguous, ClientIPResolver, Resolved, ResolutionOutcome

HTTP_CLIENT_IP_TAG = "http.client_ip"
MULTIPLE_IP_HEADERS_TAG = "http.multiple_ip_headers"
HTTP_REQUEST_HEADERS_TAG_PREFIX = "http.request.headers"


@runtime_checkable
class Taggable(Protocol):
    def set_tag(self, key: str, value: Any) -> None: ...

    def get_tag(self, key: str) -> Any: ...


class DictTagTarget:
    """In-memory ``Taggable``."""

    def __init__(self) -> None:
        self.tags: dict[str, Any] = {}

    def set_tag(self, key: str, value: Any) -> None:
        self.tags[key] = value

    def get_tag(self, key: str) -> Any:
        return self.tags.get(key)


def request_header_tag(name: str) -> str:
    return f"{HTTP_REQUEST_HEADERS_TAG_PREFIX}.{name.lower()}"


def apply_outcome(target: Taggable, outcome: ResolutionOutcome) -> None:
    """Set the client IP tag, or the ambiguity tags, or nothing."""
    if isinstance(outcome, Resolved):
        target.set_tag(HTTP_CLIENT_IP_TAG, str(outcome.ip))
    elif isinstance(outcome, Ambiguous):
        target.set_tag(MULTIPLE_IP_HEADERS_TAG, outcome.header_list)
        for name, value in outcome.values:
            target.set_tag(request_header_tag(name), value)


def set_ip_tags(
    target: Taggable,
    headers: RawHeaders | HeaderSet | None,
    remote_addr: str | None = None,
    resolver: ClientIPResolver | None = None,
) -> ResolutionOutcome:
    """Normalize, resolve and tag in one go; returns the outcome."""
    if resolver is None:
        resolver = ClientIPResolver()
    outcome = resolver.resolve(headers, remote_addr)
    apply_outcome(target, outcome)
    return outcome
