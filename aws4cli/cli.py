# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""``aws4-cli`` entry point.

Signs a single HTTP request with AWS Signature Version 4 and prints it as
a presigned URL, a ready-to-run curl command or the signed headers::

    aws4-cli https://my-bucket.s3.us-west-2.amazonaws.com/report.csv
    aws4-cli -o curl -X POST -d '{"k": 1}' \\
        https://abc123.execute-api.eu-west-1.amazonaws.com/prod/items

Exit codes: 0 on success, 1 on signing, credential, configuration or
input errors, 2 on invalid arguments.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime, timedelta
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from aws4cli.config import CliConfig, ConfigError
from aws4cli.credentials import CredentialError, default_chain
from aws4cli.endpoints import infer_endpoint
from aws4cli.logging import configure_logging
from aws4cli.output import OutputFormat, render
from aws4cli.signing import (
    InvalidInputError,
    RequestSigner,
    SigningError,
    SigningMode,
    parse_auth_header,
)
from aws4cli.target import build_signing_request, parse_header, parse_target


logger = logging.getLogger(__name__)

_DIST_NAME = "aws4-cli"


def _version() -> str:
    try:
        return version(_DIST_NAME)
    except PackageNotFoundError:
        return "unknown"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aws4-cli",
        description="Sign an HTTP request with AWS Signature Version 4.",
        epilog=(
            "Service and region are inferred from AWS hostnames; pass "
            "--service/--region for anything else."
        ),
    )
    parser.add_argument("url", help="URL of the request to sign")
    parser.add_argument(
        "-X",
        "--method",
        help="HTTP method (default: GET, or POST when --data is given)",
    )
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Header to include in the signature (repeatable)",
    )
    parser.add_argument("-d", "--data", help="Request body")
    parser.add_argument("-s", "--service", help="AWS service name")
    parser.add_argument("-r", "--region", help="AWS region")
    parser.add_argument("--access-key", help="AWS access key ID")
    parser.add_argument("--secret-key", help="AWS secret access key")
    parser.add_argument("--session-token", help="AWS session token")
    parser.add_argument("--profile", help="AWS profile name")
    parser.add_argument(
        "--expires",
        metavar="SECONDS",
        help="Presigned URL validity in seconds (default: 3600)",
    )
    parser.add_argument(
        "--sign-query",
        action="store_true",
        help="Sign with query parameters even for curl/headers output",
    )
    parser.add_argument(
        "-o",
        "--output",
        choices=[f.value for f in OutputFormat],
        help="Output format (default: url)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="Configuration file (default: ~/.config/aws4cli/aws4cli.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for signing details)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {_version()}"
    )
    return parser


def _parse_expires(value: str | None, default: int, max_expires: int) -> int:
    if value is None:
        return default
    try:
        expires = int(value)
    except ValueError:
        expires = 0
    if not 1 <= expires <= max_expires:
        raise InvalidInputError(
            f"--expires must be a number between 1 and {max_expires}"
        )
    return expires


def _parse_headers(values: list[str]) -> list[tuple[str, str]]:
    headers = []
    for value in values:
        try:
            headers.append(parse_header(value))
        except ValueError as e:
            raise InvalidInputError(str(e)) from e
    return headers


def run(args: argparse.Namespace, config: CliConfig) -> str:
    """Sign the request described by ``args`` and render it.

    Returns:
        The complete output text.

    Raises:
        SigningError: On invalid input or a signing failure.
        CredentialError: If no credentials can be resolved.
    """
    output_format = (
        OutputFormat(args.output) if args.output else config.output
    )
    expires = _parse_expires(args.expires, config.expires, config.max_expires)
    headers = _parse_headers(args.header)

    target = parse_target(args.url)
    logger.info("Signing URL: %s", args.url)

    endpoint = infer_endpoint(target.host)
    if endpoint is not None:
        logger.debug(
            "Inferred service=%s region=%s from %s",
            endpoint.service,
            endpoint.region,
            target.host,
        )
    service = args.service or (endpoint.service if endpoint else None)
    region = (
        args.region or (endpoint.region if endpoint else None) or config.region
    )
    if not service:
        raise InvalidInputError(
            f"Cannot infer AWS service from host {target.host!r}; "
            "use --service"
        )
    if not region:
        raise InvalidInputError(
            f"Cannot infer AWS region from host {target.host!r}; "
            "use --region or set AWS_REGION"
        )
    logger.info("Service: %s", service)
    logger.info("Region: %s", region)

    credentials = default_chain(
        access_key_id=args.access_key,
        secret_access_key=args.secret_key,
        session_token=args.session_token,
        profile=args.profile or config.profile,
        region=region,
    ).resolve()

    request = build_signing_request(
        target,
        service=service,
        region=region,
        timestamp=datetime.now(UTC),
        method=args.method,
        headers=headers,
        body=args.data,
    )
    logger.info("Method: %s", request.method)

    if output_format is OutputFormat.URL or args.sign_query:
        mode = SigningMode.QUERY
        expires_at = request.timestamp + timedelta(seconds=expires)
        logger.info(
            "Expires: %d seconds (%s)",
            expires,
            expires_at.isoformat(timespec="seconds"),
        )
    else:
        mode = SigningMode.HEADERS
    logger.info("Output: %s (%s signing)", output_format.value, mode.value)

    signer = RequestSigner(
        max_expires=config.max_expires,
        expires_policy=config.expires_policy,
        token_placement=config.session_token,
    )
    result = signer.sign(request, credentials, mode, expires=expires)
    logger.debug("Canonical request:\n%s", result.canonical_request)
    if mode is SigningMode.QUERY:
        for name, value in result.query:
            if name.startswith("X-Amz-"):
                logger.info("  %s=%s", name, value)
    else:
        auth = parse_auth_header(result.headers["Authorization"])
        if auth is not None:
            logger.info("  Credential=%s/%s", auth.key_id, auth.scope)
            logger.info("  SignedHeaders=%s", auth.signed_headers)
            logger.info("  Signature=%s", auth.signature)

    return render(result, output_format, target.scheme)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, sign the request and print the result.

    Args:
        argv: Command-line arguments without the program name; defaults
            to ``sys.argv[1:]``.

    Returns:
        Exit code.
    """
    args = _build_parser().parse_args(argv)
    configure_logging(verbosity=args.verbose)

    try:
        config = CliConfig.from_yaml(args.config)
        if config.verbose and not args.verbose:
            configure_logging(verbosity=1)
        text = run(args, config)
    except (SigningError, CredentialError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(text)
    return 0


def cli() -> None:
    """Console-script entry point for ``aws4-cli``."""
    sys.exit(main())
