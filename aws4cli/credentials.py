# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""AWS credential resolution.

Credentials come from an ordered chain of resolvers; the first resolver
that produces credentials wins:

1. Explicit values (``--access-key`` / ``--secret-key`` /
   ``--session-token``).
2. Environment variables (``AWS_ACCESS_KEY_ID`` and friends).  Skipped
   when a profile is requested explicitly.
3. The boto3 session provider chain: shared config/credentials files,
   ``credential_process``, SSO, assumed roles, container and instance
   metadata.

A resolver returns None when its source does not apply.  A resolver that
raises ``CredentialError`` ends the chain: a broken profile must be
reported rather than silently replaced by other credentials.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from aws4cli.logging import SecretFilter


logger = logging.getLogger(__name__)


class CredentialError(Exception):
    """Credentials could not be resolved."""


@dataclass(frozen=True)
class Credentials:
    """Resolved AWS credentials.

    Attributes:
        access_key_id: AWS access key ID.
        secret_access_key: AWS secret access key.
        session_token: Session token for temporary credentials.
    """

    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: str | None = field(default=None, repr=False)

    @property
    def is_temporary(self) -> bool:
        """True for STS/SSO credentials that carry a session token."""
        return bool(self.session_token)


class CredentialResolver(Protocol):
    """A single credential source."""

    name: str

    def resolve(self) -> Credentials | None:
        """Return credentials, or None if this source does not apply.

        Raises:
            CredentialError: If the source applies but is unusable.
        """
        ...


class StaticResolver:
    """Credentials given explicitly, e.g. on the command line."""

    name = "command line arguments"

    def __init__(
        self,
        access_key_id: str | None,
        secret_access_key: str | None,
        session_token: str | None = None,
    ) -> None:
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.session_token = session_token

    def resolve(self) -> Credentials | None:
        if not self.access_key_id and not self.secret_access_key:
            return None
        if not self.access_key_id or not self.secret_access_key:
            raise CredentialError(
                "Access key and secret key must be given together"
            )
        return Credentials(
            self.access_key_id,
            self.secret_access_key,
            self.session_token or None,
        )


class EnvironmentResolver:
    """Credentials from ``AWS_ACCESS_KEY_ID``/``AWS_SECRET_ACCESS_KEY``.

    ``AWS_SESSION_TOKEN`` (or the legacy ``AWS_SECURITY_TOKEN``) supplies
    the session token.
    """

    name = "environment variables"

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def resolve(self) -> Credentials | None:
        env = os.environ if self._environ is None else self._environ
        access_key_id = env.get("AWS_ACCESS_KEY_ID", "")
        secret_access_key = env.get("AWS_SECRET_ACCESS_KEY", "")
        if not access_key_id and not secret_access_key:
            return None
        if not access_key_id or not secret_access_key:
            raise CredentialError(
                "Partial credentials in environment: both AWS_ACCESS_KEY_ID "
                "and AWS_SECRET_ACCESS_KEY must be set"
            )
        token = env.get("AWS_SESSION_TOKEN") or env.get("AWS_SECURITY_TOKEN")
        return Credentials(access_key_id, secret_access_key, token or None)


class SessionResolver:
    """Credentials from the boto3 session provider chain.

    Covers named profiles (including ``role_arn``/``source_profile``
    assume-role chains), SSO, ``credential_process``, and ECS/EC2
    metadata.  Any refresh (STS call, SSO token exchange) happens here,
    once, before signing.
    """

    name = "AWS SDK provider chain"

    def __init__(
        self, profile: str | None = None, region: str | None = None
    ) -> None:
        self.profile = profile
        self.region = region

    def resolve(self) -> Credentials | None:
        import boto3
        from botocore.exceptions import BotoCoreError, ClientError

        try:
            session = boto3.session.Session(
                profile_name=self.profile, region_name=self.region
            )
            found = session.get_credentials()
            frozen = found.get_frozen_credentials() if found else None
        except (BotoCoreError, ClientError) as e:
            if self.profile:
                raise CredentialError(
                    f"Profile {self.profile!r} could not provide "
                    f"credentials: {e}"
                ) from e
            raise CredentialError(str(e)) from e

        if frozen is None:
            if self.profile:
                raise CredentialError(
                    f"Profile {self.profile!r} has no credentials"
                )
            return None
        return Credentials(
            frozen.access_key, frozen.secret_key, frozen.token or None
        )


class CredentialChain:
    """Ordered list of resolvers; the first success wins."""

    def __init__(self, resolvers: Sequence[CredentialResolver]) -> None:
        self.resolvers = list(resolvers)

    def resolve(self) -> Credentials:
        """Resolve credentials.

        Resolved secrets are registered for log redaction.

        Returns:
            The first credentials found.

        Raises:
            CredentialError: If a resolver fails or none applies.
        """
        tried: list[str] = []
        for resolver in self.resolvers:
            credentials = resolver.resolve()
            if credentials is None:
                logger.debug("No credentials from %s", resolver.name)
                tried.append(resolver.name)
                continue

            SecretFilter.register_secret(credentials.secret_access_key)
            SecretFilter.register_secret(credentials.session_token)
            logger.info("Using credentials from %s", resolver.name)
            if credentials.is_temporary:
                logger.info(
                    "Using temporary credentials (session token present)"
                )
            return credentials

        raise CredentialError(
            "Failed to resolve AWS credentials (tried: "
            + ", ".join(tried)
            + "). Configure ~/.aws/credentials, set AWS_ACCESS_KEY_ID and "
            "AWS_SECRET_ACCESS_KEY, or pass --access-key and --secret-key."
        )


def default_chain(
    *,
    access_key_id: str | None = None,
    secret_access_key: str | None = None,
    session_token: str | None = None,
    profile: str | None = None,
    region: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> CredentialChain:
    """Build the standard resolver chain.

    Environment credentials are skipped when a profile is given so that
    ``--profile`` always means that profile.
    """
    resolvers: list[CredentialResolver] = [
        StaticResolver(access_key_id, secret_access_key, session_token)
    ]
    if not profile:
        resolvers.append(EnvironmentResolver(environ))
    resolvers.append(SessionResolver(profile=profile, region=region))
    return CredentialChain(resolvers)


def resolve_credentials(
    *,
    access_key_id: str | None = None,
    secret_access_key: str | None = None,
    session_token: str | None = None,
    profile: str | None = None,
    region: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Credentials:
    """Resolve credentials through the standard resolver chain.

    Raises:
        CredentialError: If no source provides credentials or one fails.
    """
    return default_chain(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        profile=profile,
        region=region,
        environ=environ,
    ).resolve()
