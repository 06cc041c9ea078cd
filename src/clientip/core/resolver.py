"""Client IP resolution from proxy-injected headers.

For each header of the active list (the configured priority list, or the
single override header) the *best candidate* is the leftmost entry that
parses and is globally routable.  Exactly one contributing header gives a
``Resolved`` outcome; several give ``Ambiguous`` and no IP at all, since
picking one of two disagreeing attacker-controllable headers would mean
guessing.  Nothing contributing gives ``Unresolved``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from clientip.configs.system import ClientIPConfig

from .address import IPAddress, is_global, parse_ip
from .candidates import split_candidates, strip_port
from .headers import HeaderSet, RawHeaders, normalize_headers

logger = logging.getLogger(__name__)

REMOTE_ADDR_SOURCE = "remote_addr"

# Log record attribute carrying raw header text; only kept on DEBUG records.
RAW_HEADERS_LOG_FIELD = "raw_headers"

_HEADER_LIST_SEPARATOR = ","


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Resolved:
    """Exactly one trustworthy global address was found."""

    ip: IPAddress
    source: str


@dataclass(frozen=True)
class Ambiguous:
    """More than one header yielded a global address.

    ``headers`` lists the contributing header names in priority order;
    ``values`` holds the raw value of every IP header present in the
    request, contributing or not, as ``(name, value)`` pairs.
    """

    headers: tuple[str, ...]
    values: tuple[tuple[str, str], ...] = ()

    @property
    def header_list(self) -> str:
        return _HEADER_LIST_SEPARATOR.join(self.headers)


@dataclass(frozen=True)
class Unresolved:
    """No confident answer."""


ResolutionOutcome = Union[Resolved, Ambiguous, Unresolved]


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def best_candidate(value: str, limit: int | None = None) -> IPAddress | None:
    """Return the first valid, global candidate of a header value."""
    for candidate in split_candidates(value, limit):
        addr = parse_ip(candidate)
        if isinstance(addr, IPAddress):
            if is_global(addr):
                return addr
            logger.debug("Skipping non-global candidate %s", addr)
        else:
            logger.debug("Skipping invalid candidate: %s", addr.reason)
    return None


class ClientIPResolver:
    """Resolve the client IP of one request at a time.

    The configuration is copied in at construction and never mutated, so
    one resolver can be shared by every request of the process.
    """

    def __init__(self, config: ClientIPConfig | None = None) -> None:
        self._config = config if config is not None else ClientIPConfig()
        self._active_headers = tuple(self._config.active_headers)

    @property
    def config(self) -> ClientIPConfig:
        return self._config

    @property
    def active_headers(self) -> tuple[str, ...]:
        return self._active_headers

    def resolve(
        self,
        headers: RawHeaders | HeaderSet | None,
        remote_addr: str | None = None,
    ) -> ResolutionOutcome:
        """Resolve *headers* (raw or normalized) to an outcome.

        *remote_addr* is only consulted when the transport-peer fallback
        is enabled and no override header is configured.
        """
        header_set = normalize_headers(headers)
        outcome = self._resolve_headers(header_set)

        if isinstance(outcome, Unresolved) and self._fallback_enabled:
            return self._resolve_remote_addr(remote_addr)
        return outcome

    @property
    def _fallback_enabled(self) -> bool:
        return (
            self._config.fallback_to_remote_addr
            and self._config.override_header is None
        )

    def _resolve_headers(self, header_set: HeaderSet | None) -> ResolutionOutcome:
        if header_set is None:
            return Unresolved()

        limit = self._config.max_candidates_per_header
        present: list[tuple[str, str]] = []
        found: dict[str, IPAddress] = {}
        for name in self._active_headers:
            value = header_set.get(name)
            if value is None:
                continue
            present.append((name, value))
            addr = best_candidate(value, limit)
            if addr is not None:
                found[name] = addr

        if not found:
            return Unresolved()

        if len(found) == 1:
            ((name, addr),) = found.items()
            return Resolved(ip=addr, source=name)

        ambiguous = Ambiguous(headers=tuple(found), values=tuple(present))
        logger.debug(
            "Multiple client IP headers: %s",
            ambiguous.header_list,
            extra={RAW_HEADERS_LOG_FIELD: dict(present)},
        )
        return ambiguous

    def _resolve_remote_addr(self, remote_addr: str | None) -> ResolutionOutcome:
        if not remote_addr:
            return Unresolved()
        addr = parse_ip(strip_port(remote_addr.strip()))
        if isinstance(addr, IPAddress) and is_global(addr):
            return Resolved(ip=addr, source=REMOTE_ADDR_SOURCE)
        return Unresolved()
