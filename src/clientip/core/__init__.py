"""Client IP resolution core: pure functions of one request's headers."""

from .address import InvalidAddress, IPAddress, ParseResult, is_global, parse_ip
from .candidates import split_candidates, strip_port
from .headers import EXCLUDED_HEADERS, HeaderSet, normalize_headers
from .resolver import (
    RAW_HEADERS_LOG_FIELD,
    REMOTE_ADDR_SOURCE,
    Ambiguous,
    ClientIPResolver,
    Resolved,
    ResolutionOutcome,
    Unresolved,
    best_candidate,
)
from .tags import (
    HTTP_CLIENT_IP_TAG,
    HTTP_REQUEST_HEADERS_TAG_PREFIX,
    MULTIPLE_IP_HEADERS_TAG,
    DictTagTarget,
    Taggable,
    apply_outcome,
    request_header_tag,
    set_ip_tags,
)

__all__ = [
    "EXCLUDED_HEADERS",
    "HTTP_CLIENT_IP_TAG",
    "HTTP_REQUEST_HEADERS_TAG_PREFIX",
    "MULTIPLE_IP_HEADERS_TAG",
    "RAW_HEADERS_LOG_FIELD",
    "REMOTE_ADDR_SOURCE",
    "Ambiguous",
    "ClientIPResolver",
    "DictTagTarget",
    "HeaderSet",
    "IPAddress",
    "InvalidAddress",
    "ParseResult",
    "Resolved",
    "ResolutionOutcome",
    "Taggable",
    "Unresolved",
    "apply_outcome",
    "best_candidate",
    "is_global",
    "normalize_headers",
    "parse_ip",
    "request_header_tag",
    "set_ip_tags",
    "split_candidates",
    "strip_port",
]
