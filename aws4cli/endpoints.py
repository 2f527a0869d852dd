# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Infer signing service and region from AWS endpoint hostnames.

Inference is an ordered rule table: each rule is a full-match regex over
the lowercased hostname, and the first matching rule wins.  A rule either
fixes the service/region or captures them with ``service`` / ``region``
named groups.  New endpoint shapes are added by inserting a rule, not by
touching the signer.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass


#: Region of global endpoints (IAM, STS global, Route 53, ...).
DEFAULT_REGION = "us-east-1"

#: Region of global endpoints in the China partition.
DEFAULT_CN_REGION = "cn-north-1"

_REGION = r"(?P<region>[a-z]{2}(?:-gov|-iso[a-z]?)?-[a-z]+-\d+)"
_SUFFIX = r"amazonaws\.com(?:\.cn)?"
_LABEL = r"(?P<service>[a-z0-9-]+)"

# Endpoint prefixes whose signing name differs from the hostname label
_SIGNING_NAMES = {
    "bedrock-runtime": "bedrock",
    "bedrock-agent": "bedrock",
    "bedrock-agent-runtime": "bedrock",
    "email": "ses",
    "streams.dynamodb": "dynamodb",
}


@dataclass(frozen=True)
class Endpoint:
    """Signing scope derived from a hostname."""

    service: str
    region: str


@dataclass(frozen=True)
class EndpointRule:
    """One hostname shape.

    Attributes:
        name: Rule name for logging.
        pattern: Regex matched against the whole hostname.
        service: Fixed service; when None the ``service`` group is used.
        region: Fixed region; used when the pattern captures no region.
    """

    name: str
    pattern: re.Pattern[str]
    service: str | None = None
    region: str | None = None

    def match(self, host: str) -> Endpoint | None:
        m = self.pattern.fullmatch(host)
        if not m:
            return None
        groups = m.groupdict()
        service = self.service or _signing_name(groups["service"])
        region = groups.get("region") or self.region or DEFAULT_REGION
        return Endpoint(service=service, region=region)


def _signing_name(label: str) -> str:
    if label.endswith("-fips"):
        label = label[: -len("-fips")]
    return _SIGNING_NAMES.get(label, label)


ENDPOINT_RULES: tuple[EndpointRule, ...] = (
    EndpointRule(
        "s3-access-point",
        re.compile(
            rf"(?:.+\.)?s3-accesspoint(?:\.dualstack)?\.{_REGION}\.{_SUFFIX}"
        ),
        service="s3",
    ),
    EndpointRule(
        "s3-regional",
        re.compile(rf"(?:.+\.)?s3[.-](?:dualstack\.)?{_REGION}\.{_SUFFIX}"),
        service="s3",
    ),
    EndpointRule(
        "s3-global",
        re.compile(rf"(?:.+\.)?s3(?:-external-1)?\.{_SUFFIX}"),
        service="s3",
        region=DEFAULT_REGION,
    ),
    EndpointRule(
        "api-gateway",
        re.compile(rf"[^.]+\.execute-api\.{_REGION}\.{_SUFFIX}"),
        service="execute-api",
    ),
    EndpointRule(
        "lambda-function-url",
        re.compile(rf"[^.]+\.lambda-url\.{_REGION}\.on\.aws"),
        service="lambda",
    ),
    EndpointRule(
        "opensearch-domain",
        re.compile(rf"[^.]+\.{_REGION}\.(?P<service>es|aoss)\.{_SUFFIX}"),
    ),
    EndpointRule(
        "dynamodb-streams",
        re.compile(rf"(?P<service>streams\.dynamodb)\.{_REGION}\.{_SUFFIX}"),
    ),
    EndpointRule(
        "regional",
        re.compile(rf"(?:[^.]+\.)*?{_LABEL}\.{_REGION}\.{_SUFFIX}"),
    ),
    EndpointRule(
        "global-cn",
        re.compile(rf"(?:[^.]+\.)*?{_LABEL}\.amazonaws\.com\.cn"),
        region=DEFAULT_CN_REGION,
    ),
    EndpointRule(
        "global",
        re.compile(rf"(?:[^.]+\.)*?{_LABEL}\.amazonaws\.com"),
        region=DEFAULT_REGION,
    ),
)


def normalize_host(host: str) -> str:
    """Lowercase a host and strip any port and trailing dot."""
    host = host.strip().lower()
    if host.startswith("["):
        # IPv6 literal
        return host.split("]", 1)[0] + "]"
    return host.rsplit(":", 1)[0].rstrip(".")


def infer_endpoint(
    host: str, rules: Sequence[EndpointRule] = ENDPOINT_RULES
) -> Endpoint | None:
    """Infer service and region from an AWS hostname.

    Args:
        host: Hostname, optionally with a port.
        rules: Ordered rules; defaults to ``ENDPOINT_RULES``.

    Returns:
        The first matching Endpoint, or None for non-AWS hosts.
    """
    host = normalize_host(host)
    for rule in rules:
        endpoint = rule.match(host)
        if endpoint is not None:
            return endpoint
    return None
