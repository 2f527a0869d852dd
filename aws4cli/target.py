# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Turn a target URL and request options into a ``SigningRequest``."""

from __future__ import annotations

import urllib.parse
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from aws4cli.signing import InvalidInputError, SigningRequest, parse_query


_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class Target:
    """Parsed target URL.

    Attributes:
        scheme: ``http`` or ``https``.
        host: Lowercased host, with the port when it is not the default.
        path: Path as it appears in the URL (percent-encoding kept).
        query: Ordered query parameters.
    """

    scheme: str
    host: str
    path: str
    query: tuple[tuple[str, str], ...]


def parse_target(url: str) -> Target:
    """Parse and normalize a target URL.

    Raises:
        InvalidInputError: If the URL is not an absolute http(s) URL.
    """
    try:
        parts = urllib.parse.urlsplit(url.strip())
        port = parts.port
    except ValueError as e:
        raise InvalidInputError(f"Invalid URL: {url} ({e})") from e

    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS or not parts.hostname:
        raise InvalidInputError(f"Invalid URL: {url}")

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        host = f"{host}:{port}"

    return Target(
        scheme=scheme,
        host=host,
        path=parts.path or "/",
        query=tuple(parse_query(parts.query)),
    )


def parse_header(text: str) -> tuple[str, str]:
    """Split a ``Name: Value`` header argument.

    Raises:
        ValueError: If there is no colon or the name is empty.
    """
    name, sep, value = text.partition(":")
    name = name.strip()
    if not sep or not name:
        raise ValueError(
            f"Invalid header format: {text}. Expected format: 'Name: Value'"
        )
    return name, value.strip()


def build_signing_request(
    target: Target,
    *,
    service: str,
    region: str,
    timestamp: datetime,
    method: str | None = None,
    headers: Iterable[tuple[str, str]] = (),
    body: str | bytes | None = None,
) -> SigningRequest:
    """Assemble the request to sign.

    The method defaults to ``GET``, or ``POST`` when a body is given.
    A later header with the same name (case-insensitive) replaces an
    earlier one.
    """
    if method is None:
        method = "POST" if body is not None else "GET"

    merged: dict[str, str] = {}
    for name, value in headers:
        for existing in [k for k in merged if k.lower() == name.lower()]:
            del merged[existing]
        merged[name] = value

    return SigningRequest(
        method=method.upper(),
        host=target.host,
        path=target.path,
        service=service,
        region=region,
        timestamp=timestamp,
        query=target.query,
        headers=merged,
        body=body,
    )
