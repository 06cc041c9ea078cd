"""Resolve the real client IP of an HTTP request behind proxies and CDNs."""

from clientip.configs.system import DEFAULT_IP_HEADERS, ClientIPConfig
from clientip.core import (
    HTTP_CLIENT_IP_TAG,
    HTTP_REQUEST_HEADERS_TAG_PREFIX,
    MULTIPLE_IP_HEADERS_TAG,
    Ambiguous,
    ClientIPResolver,
    DictTagTarget,
    HeaderSet,
    InvalidAddress,
    IPAddress,
    Resolved,
    ResolutionOutcome,
    Taggable,
    Unresolved,
    apply_outcome,
    is_global,
    normalize_headers,
    parse_ip,
    set_ip_tags,
)

__all__ = [
    "DEFAULT_IP_HEADERS",
    "HTTP_CLIENT_IP_TAG",
    "HTTP_REQUEST_HEADERS_TAG_PREFIX",
    "MULTIPLE_IP_HEADERS_TAG",
    "Ambiguous",
    "ClientIPConfig",
    "ClientIPResolver",
    "DictTagTarget",
    "HeaderSet",
    "IPAddress",
    "InvalidAddress",
    "Resolved",
    "ResolutionOutcome",
    "Taggable",
    "Unresolved",
    "apply_outcome",
    "is_global",
    "normalize_headers",
    "parse_ip",
    "set_ip_tags",
]
