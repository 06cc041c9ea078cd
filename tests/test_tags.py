"""Tests for writing resolution outcomes as tags."""

from clientip.configs.system import ClientIPConfig
from clientip.core.address import parse_ip
from clientip.core.headers import HeaderSet
from clientip.core.resolver import Ambiguous, ClientIPResolver, Resolved, Unresolved
from clientip.core.tags import (
    HTTP_CLIENT_IP_TAG,
    MULTIPLE_IP_HEADERS_TAG,
    DictTagTarget,
    Taggable,
    apply_outcome,
    request_header_tag,
    set_ip_tags,
)

from .conftest import IPV4_GLOBAL, IPV4_GLOBAL_2, IPV4_PRIVATE, IPV6_GLOBAL


class _MockSpan:
    """Records every ``set_tag`` call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def set_tag(self, key, value):
        self.calls.append((key, value))

    def get_tag(self, key):
        return dict(self.calls).get(key)


class TestApplyOutcome:
    def test_resolved_sets_client_ip_only(self):
        span = _MockSpan()
        apply_outcome(span, Resolved(ip=parse_ip(IPV4_GLOBAL), source="x-real-ip"))
        assert span.calls == [(HTTP_CLIENT_IP_TAG, IPV4_GLOBAL)]

    def test_resolved_ipv6_is_unbracketed(self):
        span = _MockSpan()
        apply_outcome(
            span, Resolved(ip=parse_ip(f"{IPV6_GLOBAL}"), source="x-forwarded-for")
        )
        assert span.get_tag(HTTP_CLIENT_IP_TAG) == IPV6_GLOBAL

    def test_ambiguous(self):
        span = _MockSpan()
        apply_outcome(
            span,
            Ambiguous(
                headers=("x-forwarded-for", "forwarded-for"),
                values=(
                    ("x-forwarded-for", IPV4_GLOBAL),
                    ("forwarded-for", IPV4_GLOBAL_2),
                ),
            ),
        )
        assert span.get_tag(HTTP_CLIENT_IP_TAG) is None
        assert span.get_tag(MULTIPLE_IP_HEADERS_TAG) == "x-forwarded-for,forwarded-for"
        assert span.get_tag("http.request.headers.x-forwarded-for") == IPV4_GLOBAL
        assert span.get_tag("http.request.headers.forwarded-for") == IPV4_GLOBAL_2

    def test_unresolved_writes_nothing(self):
        span = _MockSpan()
        apply_outcome(span, Unresolved())
        assert span.calls == []

    def test_request_header_tag_is_lowercased(self):
        assert request_header_tag("X-Real-IP") == "http.request.headers.x-real-ip"


class TestSetIPTags:
    def test_resolved(self, raw_headers):
        target = DictTagTarget()
        outcome = set_ip_tags(target, raw_headers)
        assert isinstance(outcome, Resolved)
        assert target.tags == {HTTP_CLIENT_IP_TAG: IPV4_GLOBAL}

    def test_ambiguous_tags_only_ip_headers(self, raw_headers):
        raw_headers["X-Real-IP"] = [IPV6_GLOBAL]
        raw_headers["X-Client-IP"] = [IPV4_PRIVATE]
        raw_headers["Authorization"] = ["Bearer s3cr3t"]
        target = DictTagTarget()
        outcome = set_ip_tags(target, raw_headers)
        assert isinstance(outcome, Ambiguous)
        assert target.tags == {
            MULTIPLE_IP_HEADERS_TAG: "x-forwarded-for,x-real-ip",
            "http.request.headers.x-forwarded-for": f"{IPV4_PRIVATE}, {IPV4_GLOBAL}",
            "http.request.headers.x-real-ip": IPV6_GLOBAL,
            "http.request.headers.x-client-ip": IPV4_PRIVATE,
        }

    def test_direct_header_set_never_tags_cookie(self):
        headers = HeaderSet(
            {
                "Cookie": "session=secret",
                "x-forwarded-for": IPV4_GLOBAL,
                "x-real-ip": IPV4_GLOBAL_2,
            }
        )
        target = DictTagTarget()
        assert isinstance(set_ip_tags(target, headers), Ambiguous)
        assert "http.request.headers.cookie" not in target.tags

    def test_no_headers(self):
        target = DictTagTarget()
        assert set_ip_tags(target, None) == Unresolved()
        assert target.tags == {}

    def test_override_resolver(self, raw_headers):
        resolver = ClientIPResolver(ClientIPConfig(override_header="x-real-ip"))
        target = DictTagTarget()
        assert set_ip_tags(target, raw_headers, resolver=resolver) == Unresolved()
        assert target.tags == {}

    def test_remote_addr_fallback(self):
        resolver = ClientIPResolver(ClientIPConfig(fallback_to_remote_addr=True))
        target = DictTagTarget()
        set_ip_tags(target, {"cookie": "a=b"}, f"{IPV4_GLOBAL}:1234", resolver)
        assert target.get_tag(HTTP_CLIENT_IP_TAG) == IPV4_GLOBAL


class TestTaggable:
    def test_protocol(self):
        assert isinstance(DictTagTarget(), Taggable)
        assert isinstance(_MockSpan(), Taggable)
        assert not isinstance(object(), Taggable)
