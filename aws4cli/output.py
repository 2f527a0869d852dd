# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Render a signed request as a URL, a curl command or a header dump."""

from __future__ import annotations

import shlex
from enum import Enum

from aws4cli.signing import SignedResult


class OutputFormat(Enum):
    """Supported renderings of a signed request."""

    URL = "url"
    CURL = "curl"
    HEADERS = "headers"


_LINE_JOIN = " \\\n  "


def _double_quote(text: str) -> str:
    """Quote for a POSIX shell, keeping the ``"Name: Value"`` look."""
    for ch in ("\\", '"', "$", "`"):
        text = text.replace(ch, "\\" + ch)
    return f'"{text}"'


def format_url(result: SignedResult, scheme: str = "https") -> str:
    """Full URL including the final query string."""
    return result.url(scheme)


def format_headers(result: SignedResult) -> str:
    """One ``Name: Value`` line per header."""
    return "\n".join(f"{k}: {v}" for k, v in result.headers.items())


def format_curl(result: SignedResult, scheme: str = "https") -> str:
    """A multi-line curl invocation that sends the signed request."""
    parts = [f"curl -X {result.method}"]
    for name, value in result.headers.items():
        parts.append(f"-H {_double_quote(f'{name}: {value}')}")
    if result.body:
        body = result.body.decode("utf-8", errors="replace")
        parts.append(f"-d {shlex.quote(body)}")
    parts.append(_double_quote(result.url(scheme)))
    return _LINE_JOIN.join(parts)


def render(
    result: SignedResult, output_format: OutputFormat, scheme: str = "https"
) -> str:
    """Render a signed request in the requested format."""
    if output_format is OutputFormat.CURL:
        return format_curl(result, scheme)
    if output_format is OutputFormat.HEADERS:
        return format_headers(result)
    return format_url(result, scheme)
