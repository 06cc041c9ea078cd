"""Shared fixtures: well-known addresses for each class."""

import pytest

IPV4_GLOBAL = "93.184.216.34"
IPV4_GLOBAL_2 = "1.1.1.1"
IPV6_GLOBAL = "2606:4700:4700::1111"
IPV4_PRIVATE = "192.168.1.10"
IPV6_PRIVATE = "fd12:3456:789a::1"


@pytest.fixture
def raw_headers() -> dict[str, list[str]]:
    return {
        "Cookie": ["session=not-collected"],
        "User-Agent": ["curl/8.0"],
        "X-Forwarded-For": [f"{IPV4_PRIVATE}, {IPV4_GLOBAL}"],
    }
