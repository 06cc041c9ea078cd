"""Tests for the resolve CLI."""

import io
import json

import pytest

from cli.__main__ import parse_args
from cli.resolve_cli import (
    EXIT_NOT_RESOLVED,
    EXIT_RESOLVED,
    EXIT_USAGE,
    main,
    parse_header_arg,
)

from .conftest import IPV4_GLOBAL, IPV4_GLOBAL_2, IPV4_PRIVATE


def _run(*headers, **kwargs) -> tuple[int, str]:
    out = io.StringIO()
    code = main(list(headers), output_stream=out, **kwargs)
    return code, out.getvalue()


class TestParseHeaderArg:
    def test_curl_style(self):
        assert parse_header_arg("X-Forwarded-For:  1.2.3.4, 5.6.7.8 ") == (
            "X-Forwarded-For",
            "1.2.3.4, 5.6.7.8",
        )

    def test_ipv6_value_keeps_colons(self):
        assert parse_header_arg("X-Real-IP: 2001:db8::1") == ("X-Real-IP", "2001:db8::1")

    @pytest.mark.parametrize("arg", ["no-colon", ": 1.2.3.4"])
    def test_malformed(self, arg):
        with pytest.raises(ValueError):
            parse_header_arg(arg)


class TestResolveCLI:
    def test_resolved_text(self):
        code, out = _run(f"X-Forwarded-For: {IPV4_PRIVATE}, {IPV4_GLOBAL}")
        assert code == EXIT_RESOLVED
        assert f"{IPV4_GLOBAL} (from x-forwarded-for)" in out
        assert f"http.client_ip = {IPV4_GLOBAL}" in out

    def test_ambiguous_json(self):
        code, out = _run(
            f"X-Forwarded-For: {IPV4_GLOBAL}",
            f"X-Real-IP: {IPV4_GLOBAL_2}",
            as_json=True,
        )
        assert code == EXIT_NOT_RESOLVED
        data = json.loads(out)
        assert data["status"] == "ambiguous"
        assert data["headers"] == ["x-forwarded-for", "x-real-ip"]
        assert data["tags"]["http.multiple_ip_headers"] == "x-forwarded-for,x-real-ip"
        assert data["tags"]["http.request.headers.x-real-ip"] == IPV4_GLOBAL_2

    def test_unresolved(self):
        code, out = _run(f"X-Forwarded-For: {IPV4_PRIVATE}")
        assert code == EXIT_NOT_RESOLVED
        assert "Unresolved" in out

    def test_fallback(self):
        code, out = _run(remote_addr=f"{IPV4_GLOBAL}:443", fallback=True, as_json=True)
        assert code == EXIT_RESOLVED
        assert json.loads(out)["source"] == "remote_addr"

    def test_override_and_priority(self):
        code, out = _run(
            f"X-Forwarded-For: {IPV4_GLOBAL}",
            f"X-Edge-IP: {IPV4_GLOBAL_2}",
            override_header="x-edge-ip",
            as_json=True,
        )
        assert code == EXIT_RESOLVED
        assert json.loads(out)["ip"] == IPV4_GLOBAL_2

        code, out = _run(
            f"X-Forwarded-For: {IPV4_GLOBAL}",
            f"X-Edge-IP: {IPV4_GLOBAL_2}",
            header_priority="x-edge-ip",
            as_json=True,
        )
        assert json.loads(out)["source"] == "x-edge-ip"

    def test_usage_errors(self):
        assert _run("not a header")[0] == EXIT_USAGE
        assert _run(header_priority=" , ")[0] == EXIT_USAGE


class TestParseArgs:
    def test_repeatable_headers(self):
        args = parse_args(["-H", "X-Real-IP: 1.2.3.4", "--header", "Via: x", "--json"])
        assert args.headers == ["X-Real-IP: 1.2.3.4", "Via: x"]
        assert args.json is True
        assert args.fallback is False
