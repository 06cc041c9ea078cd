"""IP address model and global-routability classification.

Header values are attacker-controlled, so parsing never raises: a failed
parse is an ``InvalidAddress`` value the caller can filter out and move on
to the next candidate.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import ClassVar, Union

_IPV4_NON_GLOBAL = tuple(
    ipaddress.IPv4Network(net)
    for net in (
        "0.0.0.0/8",
        "10.0.0.0/8",
        "100.64.0.0/10",
        "127.0.0.0/8",
        "169.254.0.0/16",
        "172.16.0.0/12",
        "192.0.0.0/24",
        "192.0.2.0/24",
        "192.88.99.0/24",
        "192.168.0.0/16",
        "198.18.0.0/15",
        "198.51.100.0/24",
        "203.0.113.0/24",
        "224.0.0.0/4",
        "240.0.0.0/4",
    )
)

_IPV6_NON_GLOBAL = tuple(
    ipaddress.IPv6Network(net)
    for net in (
        "::1/128",
        "::/128",
        "fc00::/7",
        "fe80::/10",
        "ff00::/8",
        "2001:db8::/32",
    )
)


@dataclass(frozen=True)
class IPAddress:
    """A successfully parsed IPv4 or IPv6 address."""

    value: ipaddress.IPv4Address | ipaddress.IPv6Address

    is_valid: ClassVar[bool] = True

    @property
    def family(self) -> int:
        return self.value.version

    @property
    def packed(self) -> bytes:
        return self.value.packed

    @property
    def is_global(self) -> bool:
        return is_global(self)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class InvalidAddress:
    """The failure side of :func:`parse_ip`."""

    text: str
    reason: str

    is_valid: ClassVar[bool] = False

    @property
    def is_global(self) -> bool:
        return False


ParseResult = Union[IPAddress, InvalidAddress]


def parse_ip(text: str) -> ParseResult:
    """Parse a literal IPv4 or IPv6 address.

    Accepts dotted-quad IPv4 and IPv6 in any RFC 4291 textual form
    (compressed, embedded IPv4).  Zone ids and prefix lengths are rejected.
    """
    if not text:
        return InvalidAddress(text, "empty")
    if "%" in text:
        return InvalidAddress(text, "zone id not allowed")
    try:
        value = ipaddress.ip_address(text)
    except ValueError as exc:
        return InvalidAddress(text, str(exc))
    return IPAddress(value)


def is_global(addr: ParseResult) -> bool:
    """True iff *addr* is a unicast address routable on the public Internet."""
    if not isinstance(addr, IPAddress):
        return False

    value = addr.value
    if isinstance(value, ipaddress.IPv6Address):
        mapped = value.ipv4_mapped
        if mapped is None:
            return not any(value in net for net in _IPV6_NON_GLOBAL)
        value = mapped

    return not any(value in net for net in _IPV4_NON_GLOBAL)
