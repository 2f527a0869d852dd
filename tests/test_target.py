# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for target URL parsing and request assembly."""

import pytest

from aws4cli.signing import InvalidInputError
from aws4cli.target import (
    Target,
    build_signing_request,
    parse_header,
    parse_target,
)
from tests.vectors import TIMESTAMP


class TestParseTarget:
    """Tests for parse_target."""

    def test_basic(self) -> None:
        """Scheme, host, path and query are split out."""
        target = parse_target(
            "https://my-bucket.s3.us-west-2.amazonaws.com/a/b.txt?x=1&y="
        )
        assert target == Target(
            scheme="https",
            host="my-bucket.s3.us-west-2.amazonaws.com",
            path="/a/b.txt",
            query=(("x", "1"), ("y", "")),
        )

    def test_host_lowercased(self) -> None:
        """The host is lowercased."""
        assert parse_target("https://SQS.us-east-1.AMAZONAWS.com").host == (
            "sqs.us-east-1.amazonaws.com"
        )

    def test_empty_path_is_root(self) -> None:
        """A bare host gets path /."""
        assert parse_target("https://sts.amazonaws.com").path == "/"

    def test_default_port_dropped(self) -> None:
        """Default ports are not part of the host."""
        assert parse_target("https://example.com:443/").host == "example.com"
        assert parse_target("http://example.com:80/").host == "example.com"

    def test_custom_port_kept(self) -> None:
        """Non-default ports are part of the signed host."""
        target = parse_target("http://localhost:4566/queue")
        assert target.scheme == "http"
        assert target.host == "localhost:4566"

    def test_ipv6(self) -> None:
        """IPv6 literals are bracketed."""
        assert parse_target("http://[::1]:9000/").host == "[::1]:9000"

    def test_encoded_path_kept(self) -> None:
        """Percent-encoding in the path is left for canonicalization."""
        target = parse_target("https://h.example/model/a%3A0/invoke")
        assert target.path == "/model/a%3A0/invoke"

    def test_duplicate_query_names(self) -> None:
        """Repeated parameters are all kept in order."""
        target = parse_target("https://h.example/?a=2&b=1&a=1")
        assert target.query == (("a", "2"), ("b", "1"), ("a", "1"))

    def test_whitespace_trimmed(self) -> None:
        """Surrounding whitespace is ignored."""
        assert parse_target("  https://example.com/  ").path == "/"

    @pytest.mark.parametrize(
        "url",
        [
            "ftp://example.com/file",
            "example.com/path",
            "https://",
            "https://example.com:notaport/",
        ],
    )
    def test_invalid(self, url: str) -> None:
        """Non-HTTP or malformed URLs are rejected."""
        with pytest.raises(InvalidInputError, match="Invalid URL"):
            parse_target(url)


class TestParseHeader:
    """Tests for parse_header."""

    def test_basic(self) -> None:
        """Name and value are split on the first colon."""
        assert parse_header("Content-Type: application/json") == (
            "Content-Type",
            "application/json",
        )

    def test_value_with_colon(self) -> None:
        """Only the first colon separates."""
        assert parse_header("X-Time: 12:30:00") == ("X-Time", "12:30:00")

    def test_empty_value(self) -> None:
        """Empty values are allowed."""
        assert parse_header("X-Empty:") == ("X-Empty", "")

    @pytest.mark.parametrize("text", ["NoColon", ": value", "  :x"])
    def test_invalid(self, text: str) -> None:
        """Missing colon or name raises ValueError."""
        with pytest.raises(ValueError, match="Expected format: 'Name: Value'"):
            parse_header(text)


class TestBuildSigningRequest:
    """Tests for build_signing_request."""

    target = Target("https", "sqs.us-east-1.amazonaws.com", "/", (("a", "1"),))

    def _build(self, **kwargs: object):
        return build_signing_request(
            self.target,
            service="sqs",
            region="us-east-1",
            timestamp=TIMESTAMP,
            **kwargs,  # type: ignore[arg-type]
        )

    def test_defaults(self) -> None:
        """GET with no body or headers."""
        request = self._build()
        assert request.method == "GET"
        assert request.host == "sqs.us-east-1.amazonaws.com"
        assert request.path == "/"
        assert request.query == (("a", "1"),)
        assert request.headers == {}
        assert request.body is None
        assert request.timestamp == TIMESTAMP

    def test_body_implies_post(self) -> None:
        """A body without an explicit method means POST."""
        assert self._build(body="x=1").method == "POST"

    def test_empty_body_implies_post(self) -> None:
        """An empty body still counts as a body."""
        assert self._build(body="").method == "POST"

    def test_explicit_method_wins(self) -> None:
        """An explicit method is kept even with a body."""
        assert self._build(method="put", body="x").method == "PUT"

    def test_later_header_replaces_earlier(self) -> None:
        """Header names are matched case-insensitively."""
        request = self._build(
            headers=[
                ("Content-Type", "text/plain"),
                ("X-One", "1"),
                ("content-type", "application/json"),
            ]
        )
        assert request.headers == {
            "X-One": "1",
            "content-type": "application/json",
        }
