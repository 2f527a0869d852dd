# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""AWS Signature Version 4 request signing.

Computes ``AWS4-HMAC-SHA256`` signatures over a canonicalized request and
attaches them either as headers (``Authorization``, ``X-Amz-Date`` and
optionally ``X-Amz-Security-Token``) or as query parameters for presigned
URLs.

Signing is a pure function of the request, the credentials and the signer
options: no I/O, no clock reads, no shared mutable state.  The timestamp
is part of the request, so a fixed timestamp always yields the same
signature.

Only stdlib is needed (``hashlib`` + ``hmac``).
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import re
import urllib.parse
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from aws4cli.credentials import Credentials


logger = logging.getLogger(__name__)

ALGORITHM = "AWS4-HMAC-SHA256"

#: Upper bound AWS accepts for ``X-Amz-Expires`` (7 days).
MAX_EXPIRES = 604800

DEFAULT_EXPIRES = 3600

UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"

_SCOPE_TERMINATOR = "aws4_request"

_AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"

_SHA256_EMPTY = hashlib.sha256(b"").hexdigest()

_AWS_UNRESERVED = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_.~"
)

# Headers that proxies and clients rewrite in flight
_UNSIGNABLE_HEADERS = frozenset(
    {
        "authorization",
        "connection",
        "expect",
        "presigned-expires",
        "range",
        "user-agent",
        "x-amzn-trace-id",
    }
)

# Headers the signer owns in header mode
_AUTH_HEADERS = frozenset(
    {"authorization", "x-amz-date", "x-amz-security-token"}
)

# Query parameters the signer owns in query mode
_AUTH_QUERY_PARAMS = frozenset(
    {
        "X-Amz-Algorithm",
        "X-Amz-Credential",
        "X-Amz-Date",
        "X-Amz-SignedHeaders",
        "X-Amz-Security-Token",
        "X-Amz-Signature",
    }
)

_EXPIRES_PARAM = "X-Amz-Expires"

_AUTH_HEADER_RE = re.compile(
    r"(?P<algorithm>AWS4-HMAC-SHA256)\s+"
    r"Credential=(?P<key_id>[^/]+)/(?P<scope>[^,]+),\s*"
    r"SignedHeaders=(?P<signed_headers>[^,]+),\s*"
    r"Signature=(?P<signature>[0-9a-f]+)"
)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class SigningError(Exception):
    """Base exception for signing failures."""


class InvalidInputError(SigningError):
    """Request, credentials or options are unusable for signing."""


class EncodingError(SigningError):
    """The request body cannot be converted to bytes for hashing."""


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class SigningMode(Enum):
    """Where the signature is attached."""

    HEADERS = "headers"
    QUERY = "query"


class ExpiresPolicy(Enum):
    """What to do with an ``X-Amz-Expires`` already present in the URL."""

    OVERWRITE = "overwrite"
    PRESERVE = "preserve"


class TokenPlacement(Enum):
    """Where ``X-Amz-Security-Token`` goes in a presigned URL.

    ``TRAILING`` appends it after ``X-Amz-Signature`` without signing it;
    ``SIGNED`` adds it to the canonical query before hashing.
    """

    TRAILING = "trailing"
    SIGNED = "signed"


@dataclass(frozen=True)
class SigningRequest:
    """A request to be signed.

    Attributes:
        method: HTTP method (uppercased for signing).
        host: Authority component, including a non-default port.
        path: URI path, raw or already percent-encoded.
        service: Signing service name (e.g. ``s3``).
        region: Signing region (e.g. ``us-east-1``).
        timestamp: Signing time.  Naive values are taken as UTC.
        query: Ordered query parameters; duplicate keys are allowed.
        headers: Request headers (names are case-insensitive).
        body: Request payload; None is hashed as empty.
    """

    method: str
    host: str
    path: str
    service: str
    region: str
    timestamp: datetime
    query: tuple[tuple[str, str], ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | str | None = None


@dataclass(frozen=True)
class SignedResult:
    """Outcome of a signing operation.

    ``headers`` and ``query`` are the final values to send; everything
    else is kept for diagnostics and verbose output.
    """

    mode: SigningMode
    method: str
    host: str
    path: str
    query: tuple[tuple[str, str], ...]
    headers: dict[str, str]
    body: bytes | None
    signature: str
    credential_scope: str
    signed_headers: str
    canonical_request: str
    string_to_sign: str

    @property
    def query_string(self) -> str:
        """Query string in final parameter order (without leading ``?``)."""
        return encode_query(self.query)

    def url(self, scheme: str = "https") -> str:
        """Build the full URL of the signed request."""
        path = urllib.parse.quote(self.path or "/", safe="/%:@!$&'()*+,;=~")
        url = f"{scheme}://{self.host}{path}"
        query = self.query_string
        return f"{url}?{query}" if query else url


# ---------------------------------------------------------------------------
# Parsed authorization header
# ---------------------------------------------------------------------------


class ParsedAuth:
    """Parsed SigV4 Authorization header."""

    __slots__ = (
        "algorithm",
        "key_id",
        "scope",
        "signed_headers",
        "signature",
    )

    def __init__(
        self,
        algorithm: str,
        key_id: str,
        scope: str,
        signed_headers: str,
        signature: str,
    ) -> None:
        self.algorithm = algorithm
        self.key_id = key_id
        self.scope = scope
        self.signed_headers = signed_headers
        self.signature = signature

    @property
    def scope_parts(self) -> list[str]:
        """Split scope into date/region/service/aws4_request."""
        return self.scope.split("/")

    @property
    def date(self) -> str:
        """Date from credential scope (YYYYMMDD)."""
        return self.scope_parts[0]

    @property
    def region(self) -> str:
        parts = self.scope_parts
        return parts[1] if len(parts) >= 4 else ""

    @property
    def service(self) -> str:
        parts = self.scope_parts
        return parts[2] if len(parts) >= 4 else ""


def parse_auth_header(auth_value: str) -> ParsedAuth | None:
    """Parse a SigV4 Authorization header.

    Args:
        auth_value: Full Authorization header value.

    Returns:
        ParsedAuth if the value is a SigV4 header, None otherwise.
    """
    m = _AUTH_HEADER_RE.match(auth_value)
    if not m:
        return None
    return ParsedAuth(
        algorithm=m.group("algorithm"),
        key_id=m.group("key_id"),
        scope=m.group("scope"),
        signed_headers=m.group("signed_headers"),
        signature=m.group("signature"),
    )


# ---------------------------------------------------------------------------
# URI encoding (RFC 3986 unreserved set)
# ---------------------------------------------------------------------------


def uri_encode(value: str, *, encode_slash: bool = True) -> str:
    """URI-encode a value using AWS's rules.

    - Unreserved characters are not encoded: A-Z, a-z, 0-9, -, _, ., ~
    - Every other UTF-8 byte is percent-encoded as %XX (uppercase hex);
      lone surrogates from a lenient decode stand for their original byte
    - Forward slashes (/) are optionally preserved

    Args:
        value: String to encode.
        encode_slash: If True, encode '/'; if False, preserve '/'.

    Returns:
        URI-encoded string.
    """
    result: list[str] = []
    for byte in value.encode("utf-8", "surrogateescape"):
        ch = chr(byte)
        if ch in _AWS_UNRESERVED or (ch == "/" and not encode_slash):
            result.append(ch)
        else:
            result.append(f"%{byte:02X}")
    return "".join(result)


def encode_query(params: Iterable[tuple[str, str]]) -> str:
    """Serialize query parameters in the given order."""
    return "&".join(f"{uri_encode(k)}={uri_encode(v)}" for k, v in params)


def parse_query(query: str) -> list[tuple[str, str]]:
    """Parse a raw query string into ordered pairs, keeping blank values.

    Escapes that are not valid UTF-8 decode to lone surrogates, which
    ``uri_encode`` turns back into the original bytes.
    """
    if not query:
        return []
    return urllib.parse.parse_qsl(
        query, keep_blank_values=True, errors="surrogateescape"
    )


# ---------------------------------------------------------------------------
# Canonical request construction
# ---------------------------------------------------------------------------


def canonical_uri(path: str, *, is_s3: bool = False) -> str:
    """Build canonical URI from request path.

    The path may arrive already percent-encoded (taken from a URL).

    SigV4 has a per-service ``doubleURIEncode`` setting:

    * **S3** (``is_s3=True``): single-encode only.  Decode any existing
      percent-encoding first, then URI-encode once.  ``%3A`` → ``%3A``.
      Double slashes and dot segments are kept.
    * **All other services**: normalize dot segments and empty segments,
      then double-encode each segment.  ``%3A`` → ``%253A`` and an
      encoded slash stays in its segment: ``%2F`` → ``%252F``.

    Args:
        path: Request path, possibly already percent-encoded.
        is_s3: If True, use S3 canonicalization.

    Returns:
        URI-encoded canonical path.
    """
    if not path:
        return "/"

    path = path.split("?")[0]

    if is_s3:
        path = urllib.parse.unquote(path, errors="surrogateescape")
        return uri_encode(path, encode_slash=False)

    # Split before decoding so an encoded slash stays inside its segment
    normalized: list[str] = []
    for part in path.split("/"):
        if part == "..":
            if normalized:
                normalized.pop()
        elif part != "." and part != "":
            normalized.append(part)

    single = "/" + "/".join(
        uri_encode(urllib.parse.unquote(part, errors="surrogateescape"))
        for part in normalized
    )
    if normalized and path.endswith("/"):
        single += "/"
    return uri_encode(single, encode_slash=False)


def canonical_query_string(params: Iterable[tuple[str, str]]) -> str:
    """Build canonical query string.

    Names and values are URI-encoded, then sorted by encoded name and
    encoded value.  Duplicate names are all kept.

    Args:
        params: Query parameters as (name, value) pairs.

    Returns:
        Canonical query string.
    """
    encoded = sorted((uri_encode(k), uri_encode(v)) for k, v in params)
    return "&".join(f"{k}={v}" for k, v in encoded)


def canonical_header_value(value: str) -> str:
    """Trim a header value and collapse internal whitespace runs."""
    return " ".join(value.split())


def canonical_headers_string(
    headers: Mapping[str, str], signed_headers_list: Sequence[str]
) -> str:
    """Build canonical headers string.

    Header names that differ only in case are merged; their values are
    joined with commas in insertion order.

    Args:
        headers: Request headers (name -> value).
        signed_headers_list: Signed header names (lowercase).

    Returns:
        Canonical headers string (each line: "name:value" + newline).
    """
    lower_headers: dict[str, list[str]] = {}
    for name, value in headers.items():
        lower_headers.setdefault(name.lower(), []).append(
            canonical_header_value(value)
        )

    lines: list[str] = []
    for name in sorted(signed_headers_list):
        value = ",".join(lower_headers.get(name, []))
        lines.append(f"{name}:{value}\n")
    return "".join(lines)


def signed_header_names(headers: Mapping[str, str]) -> list[str]:
    """Return the sorted, lowercased names of headers that get signed."""
    names = {name.lower() for name in headers}
    return sorted(names - _UNSIGNABLE_HEADERS)


def build_canonical_request(
    method: str,
    path: str,
    query: Iterable[tuple[str, str]],
    headers: Mapping[str, str],
    signed_headers: Sequence[str],
    payload_hash: str,
    *,
    is_s3: bool = False,
) -> str:
    """Build the canonical request string.

    Args:
        method: HTTP method.
        path: Request path.
        query: Query parameters as (name, value) pairs.
        headers: Request headers.
        signed_headers: Lowercase names of the signed headers.
        payload_hash: Hex SHA-256 of the body, or ``UNSIGNED-PAYLOAD``.
        is_s3: If True, use S3 path canonicalization.

    Returns:
        Canonical request string.
    """
    signed = sorted(signed_headers)
    return "\n".join(
        [
            method.upper(),
            canonical_uri(path, is_s3=is_s3),
            canonical_query_string(query),
            canonical_headers_string(headers, signed),
            ";".join(signed),
            payload_hash,
        ]
    )


def hash_payload(body: bytes | bytearray | memoryview | str | None) -> str:
    """Hex SHA-256 of a request body.

    Raises:
        EncodingError: If the body is not bytes-like or a UTF-8 encodable
            string.
    """
    if body is None:
        return _SHA256_EMPTY
    if isinstance(body, str):
        try:
            body = body.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodingError(f"Request body is not valid UTF-8: {e}") from e
    if not isinstance(body, (bytes, bytearray, memoryview)):
        raise EncodingError(
            f"Request body must be bytes or str, got {type(body).__name__}"
        )
    return hashlib.sha256(body).hexdigest()


# ---------------------------------------------------------------------------
# SigV4 primitives
# ---------------------------------------------------------------------------


def _hmac_sha256(key: bytes, msg: str | bytes) -> bytes:
    """HMAC-SHA256 helper."""
    if isinstance(msg, str):
        msg = msg.encode("utf-8")
    return hmac.new(key, msg, hashlib.sha256).digest()


def format_amz_date(timestamp: datetime) -> tuple[str, str]:
    """Format a signing time.

    Args:
        timestamp: Signing time.  Naive values are taken as UTC.

    Returns:
        Tuple of (``YYYYMMDDThhmmssZ``, ``YYYYMMDD``).

    Raises:
        InvalidInputError: If timestamp is not a datetime.
    """
    if not isinstance(timestamp, datetime):
        raise InvalidInputError(
            f"Signing timestamp must be a datetime, got {timestamp!r}"
        )
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    timestamp = timestamp.astimezone(UTC)
    amz_date = timestamp.strftime(_AMZ_DATE_FORMAT)
    return amz_date, amz_date[:8]


def credential_scope(date: str, region: str, service: str) -> str:
    """Build ``date/region/service/aws4_request``."""
    return f"{date}/{region}/{service}/{_SCOPE_TERMINATOR}"


def derive_signing_key(
    secret_key: str, date: str, region: str, service: str
) -> bytes:
    """Derive the SigV4 signing key.

    Args:
        secret_key: AWS secret access key.
        date: Date string (YYYYMMDD).
        region: AWS region.
        service: AWS service name.

    Returns:
        Derived signing key bytes.
    """
    k_date = _hmac_sha256(("AWS4" + secret_key).encode("utf-8"), date)
    k_region = _hmac_sha256(k_date, region)
    k_service = _hmac_sha256(k_region, service)
    return _hmac_sha256(k_service, _SCOPE_TERMINATOR)


def build_string_to_sign(
    amz_date: str, scope: str, canonical_request: str
) -> str:
    """Build the SigV4 string to sign.

    Args:
        amz_date: Compact ISO8601 timestamp.
        scope: Credential scope (date/region/service/aws4_request).
        canonical_request: The canonical request string.

    Returns:
        String to sign.
    """
    return "\n".join(
        [
            ALGORITHM,
            amz_date,
            scope,
            hashlib.sha256(canonical_request.encode("utf-8")).hexdigest(),
        ]
    )


def compute_signature(signing_key: bytes, string_to_sign: str) -> str:
    """Hex-encoded HMAC-SHA256 of the string to sign."""
    return hmac.new(
        signing_key, string_to_sign.encode("utf-8"), hashlib.sha256
    ).hexdigest()


# ---------------------------------------------------------------------------
# Request signing
# ---------------------------------------------------------------------------


def _validate(request: SigningRequest, credentials: Credentials) -> None:
    """Reject inputs that cannot produce a valid signature."""
    if credentials is None:
        raise InvalidInputError("No credentials supplied")
    if not credentials.access_key_id:
        raise InvalidInputError("Access key ID is empty")
    if not credentials.secret_access_key:
        raise InvalidInputError("Secret access key is empty")
    if not request.method:
        raise InvalidInputError("HTTP method is empty")
    if not request.host:
        raise InvalidInputError("Host is empty")
    if not request.service:
        raise InvalidInputError(
            "Service could not be determined; pass it explicitly"
        )
    if not request.region:
        raise InvalidInputError(
            "Region could not be determined; pass it explicitly"
        )


def _prepare_headers(
    request: SigningRequest, drop: frozenset[str]
) -> dict[str, str]:
    """Copy request headers without signer-owned ones; ensure ``Host``."""
    headers = {
        name: value
        for name, value in request.headers.items()
        if name.lower() not in drop
    }
    if not any(name.lower() == "host" for name in headers):
        headers = {"Host": request.host.lower(), **headers}
    return headers


def _header_value(headers: Mapping[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def _validate_expires(expires: object, max_expires: int) -> int:
    if isinstance(expires, bool):
        raise InvalidInputError(f"Invalid expiry: {expires!r}")
    try:
        value = int(expires)  # type: ignore[call-overload]
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Invalid expiry: {expires!r}") from e
    if not 1 <= value <= max_expires:
        raise InvalidInputError(
            f"Expiry must be between 1 and {max_expires} seconds, got {value}"
        )
    return value


class RequestSigner:
    """SigV4 signer for header and presigned-URL (query) signing.

    Instances only hold immutable options and may be shared between
    threads.
    """

    def __init__(
        self,
        *,
        max_expires: int = MAX_EXPIRES,
        expires_policy: ExpiresPolicy = ExpiresPolicy.OVERWRITE,
        token_placement: TokenPlacement = TokenPlacement.TRAILING,
    ) -> None:
        """Initialize the signer.

        Args:
            max_expires: Largest accepted presigned expiry in seconds;
                capped at 604800.
            expires_policy: Whether a caller-supplied ``X-Amz-Expires``
                query parameter is overwritten or preserved.
            token_placement: Where the session token goes in query mode.

        Raises:
            InvalidInputError: If max_expires is outside 1..604800.
        """
        self.max_expires = _validate_expires(max_expires, MAX_EXPIRES)
        self.expires_policy = expires_policy
        self.token_placement = token_placement

    def sign(
        self,
        request: SigningRequest,
        credentials: Credentials,
        mode: SigningMode = SigningMode.HEADERS,
        *,
        expires: int = DEFAULT_EXPIRES,
    ) -> SignedResult:
        """Sign a request in the given mode."""
        if mode is SigningMode.QUERY:
            return self.presign(request, credentials, expires=expires)
        return self.sign_headers(request, credentials)

    def sign_headers(
        self, request: SigningRequest, credentials: Credentials
    ) -> SignedResult:
        """Sign a request by adding an ``Authorization`` header.

        Args:
            request: The request to sign.
            credentials: Resolved credentials.

        Returns:
            SignedResult whose headers carry ``Authorization``,
            ``X-Amz-Date`` and, with a session token,
            ``X-Amz-Security-Token``.

        Raises:
            InvalidInputError: On empty credentials, service or region, or
                a malformed timestamp.
            EncodingError: If the body cannot be hashed.
        """
        _validate(request, credentials)
        amz_date, date = format_amz_date(request.timestamp)
        scope = credential_scope(date, request.region, request.service)
        is_s3 = request.service == "s3"

        headers = _prepare_headers(request, _AUTH_HEADERS)
        payload_hash = _header_value(headers, "x-amz-content-sha256")
        if payload_hash is None:
            payload_hash = hash_payload(request.body)
            if is_s3:
                headers["X-Amz-Content-Sha256"] = payload_hash
        headers["X-Amz-Date"] = amz_date
        if credentials.session_token:
            headers["X-Amz-Security-Token"] = credentials.session_token

        signed = signed_header_names(headers)
        query = tuple(request.query)
        creq = build_canonical_request(
            request.method,
            request.path,
            query,
            headers,
            signed,
            payload_hash,
            is_s3=is_s3,
        )
        string_to_sign = build_string_to_sign(amz_date, scope, creq)
        signature = self._signature(credentials, date, request, string_to_sign)

        signed_list = ";".join(signed)
        headers["Authorization"] = (
            f"{ALGORITHM} "
            f"Credential={credentials.access_key_id}/{scope}, "
            f"SignedHeaders={signed_list}, "
            f"Signature={signature}"
        )
        return SignedResult(
            mode=SigningMode.HEADERS,
            method=request.method.upper(),
            host=request.host,
            path=request.path,
            query=query,
            headers=headers,
            body=_body_bytes(request.body),
            signature=signature,
            credential_scope=scope,
            signed_headers=signed_list,
            canonical_request=creq,
            string_to_sign=string_to_sign,
        )

    def presign(
        self,
        request: SigningRequest,
        credentials: Credentials,
        *,
        expires: int = DEFAULT_EXPIRES,
    ) -> SignedResult:
        """Sign a request by adding ``X-Amz-*`` query parameters.

        Args:
            request: The request to sign.
            credentials: Resolved credentials.
            expires: Validity in seconds (1..max_expires).

        Returns:
            SignedResult whose query ends with ``X-Amz-Signature`` (and a
            trailing ``X-Amz-Security-Token`` with ``TRAILING`` placement).

        Raises:
            InvalidInputError: On bad inputs or an out-of-range expiry.
            EncodingError: If the body cannot be hashed.
        """
        _validate(request, credentials)
        expires = self._effective_expires(request.query, expires)
        amz_date, date = format_amz_date(request.timestamp)
        scope = credential_scope(date, request.region, request.service)
        is_s3 = request.service == "s3"

        headers = _prepare_headers(request, _AUTH_HEADERS)
        signed = signed_header_names(headers)
        signed_list = ";".join(signed)

        query = [
            (k, v)
            for k, v in request.query
            if k not in _AUTH_QUERY_PARAMS and k != _EXPIRES_PARAM
        ]
        query += [
            ("X-Amz-Algorithm", ALGORITHM),
            ("X-Amz-Credential", f"{credentials.access_key_id}/{scope}"),
            ("X-Amz-Date", amz_date),
            (_EXPIRES_PARAM, str(expires)),
            ("X-Amz-SignedHeaders", signed_list),
        ]
        token = credentials.session_token
        if token and self.token_placement is TokenPlacement.SIGNED:
            query.append(("X-Amz-Security-Token", token))

        payload_hash = UNSIGNED_PAYLOAD if is_s3 else hash_payload(request.body)
        creq = build_canonical_request(
            request.method,
            request.path,
            query,
            headers,
            signed,
            payload_hash,
            is_s3=is_s3,
        )
        string_to_sign = build_string_to_sign(amz_date, scope, creq)
        signature = self._signature(credentials, date, request, string_to_sign)

        query.append(("X-Amz-Signature", signature))
        if token and self.token_placement is TokenPlacement.TRAILING:
            query.append(("X-Amz-Security-Token", token))

        return SignedResult(
            mode=SigningMode.QUERY,
            method=request.method.upper(),
            host=request.host,
            path=request.path,
            query=tuple(query),
            headers=headers,
            body=_body_bytes(request.body),
            signature=signature,
            credential_scope=scope,
            signed_headers=signed_list,
            canonical_request=creq,
            string_to_sign=string_to_sign,
        )

    def _effective_expires(
        self, query: Iterable[tuple[str, str]], expires: int
    ) -> int:
        """Pick and bound-check the expiry before any hashing happens."""
        if self.expires_policy is ExpiresPolicy.PRESERVE:
            existing = [v for k, v in query if k == _EXPIRES_PARAM]
            if existing:
                logger.debug("Keeping X-Amz-Expires=%s from URL", existing[-1])
                return _validate_expires(existing[-1], self.max_expires)
        return _validate_expires(expires, self.max_expires)

    @staticmethod
    def _signature(
        credentials: Credentials,
        date: str,
        request: SigningRequest,
        string_to_sign: str,
    ) -> str:
        logger.debug("String to sign:\n%s", string_to_sign)
        key = derive_signing_key(
            credentials.secret_access_key,
            date,
            request.region,
            request.service,
        )
        return compute_signature(key, string_to_sign)


def _body_bytes(body: bytes | str | None) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, str):
        return body.encode("utf-8")
    return bytes(body)


def sign_request(
    request: SigningRequest,
    credentials: Credentials,
    mode: SigningMode = SigningMode.HEADERS,
    *,
    expires: int = DEFAULT_EXPIRES,
) -> SignedResult:
    """Sign with default signer options."""
    return RequestSigner().sign(request, credentials, mode, expires=expires)


# ---------------------------------------------------------------------------
# Presigned URL verification
# ---------------------------------------------------------------------------


def verify_presigned_url(
    url: str,
    credentials: Credentials,
    *,
    method: str = "GET",
    headers: Mapping[str, str] | None = None,
    body: bytes | str | None = None,
) -> bool:
    """Check a presigned URL's signature against the given credentials.

    Canonicalization is re-run over the URL's own query parameters up to
    ``X-Amz-Signature``; parameters after it (a trailing session token)
    are not part of the signature.

    Args:
        url: Presigned URL.
        credentials: Credentials expected to have produced it.
        method: HTTP method the URL was signed for.
        headers: Values for signed headers other than ``host``.
        body: Request body, for services other than S3.

    Returns:
        True if the signature matches.

    Raises:
        InvalidInputError: If the URL is not a SigV4 presigned URL.
    """
    parts = urllib.parse.urlsplit(url)
    pairs = parse_query(parts.query)
    names = [k for k, _ in pairs]
    if "X-Amz-Signature" not in names:
        raise InvalidInputError("URL has no X-Amz-Signature parameter")
    index = names.index("X-Amz-Signature")
    signature = pairs[index][1]
    signed_pairs = pairs[:index]
    params = dict(signed_pairs)

    try:
        key_id, scope = params["X-Amz-Credential"].split("/", 1)
        date, region, service, _ = scope.split("/")
        amz_date = params["X-Amz-Date"]
        signed = params["X-Amz-SignedHeaders"].split(";")
    except (KeyError, ValueError) as e:
        raise InvalidInputError(f"Malformed presigned URL: {e}") from e

    if key_id != credentials.access_key_id:
        return False

    all_headers = {"host": parts.netloc.lower()}
    for name, value in (headers or {}).items():
        all_headers[name.lower()] = value

    is_s3 = service == "s3"
    creq = build_canonical_request(
        method,
        parts.path,
        signed_pairs,
        all_headers,
        signed,
        UNSIGNED_PAYLOAD if is_s3 else hash_payload(body),
        is_s3=is_s3,
    )
    string_to_sign = build_string_to_sign(amz_date, scope, creq)
    key = derive_signing_key(
        credentials.secret_access_key, date, region, service
    )
    expected = compute_signature(key, string_to_sign)
    return hmac.compare_digest(expected, signature)
