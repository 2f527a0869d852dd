# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Configuration for the aws4-cli command.

Configuration is optional.  When present it is loaded from a YAML file
whose default location follows the XDG Base Directory Specification:

    ``$XDG_CONFIG_HOME/aws4cli/aws4cli.yaml``
    (typically ``~/.config/aws4cli/aws4cli.yaml``)

The ``AWS4CLI_CONFIG`` environment variable or ``--config`` select a
different file.  ``!env`` tags resolve values from environment variables.

Example::

    region: !env AWS_REGION
    profile: dev
    output: curl
    expires: 900
    expires_policy: preserve   # keep X-Amz-Expires already in the URL
    session_token: signed      # sign X-Amz-Security-Token in URLs

Settings absent from the file fall back to the standard AWS environment
variables (``AWS_REGION``, ``AWS_DEFAULT_REGION``, ``AWS_PROFILE``) and
then to built-in defaults.  Command-line options override everything.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar, overload

import yaml
from platformdirs import user_config_path

from aws4cli.dotenv_loader import load_dotenv_once
from aws4cli.output import OutputFormat
from aws4cli.signing import (
    DEFAULT_EXPIRES,
    MAX_EXPIRES,
    ExpiresPolicy,
    TokenPlacement,
)


logger = logging.getLogger(__name__)

#: Application name for XDG path resolution.
_APP_NAME = "aws4cli"

#: Environment variable naming an alternative config file.
CONFIG_ENV_VAR = "AWS4CLI_CONFIG"

_BOOL_TRUTHY = frozenset({"true", "1", "yes", "on"})
_BOOL_FALSY = frozenset({"false", "0", "no", "off"})

_KNOWN_KEYS = frozenset(
    {
        "region",
        "profile",
        "output",
        "expires",
        "max_expires",
        "expires_policy",
        "session_token",
        "verbose",
    }
)


def get_config_path() -> Path:
    """Return the default config file path.

    Uses XDG: ``$XDG_CONFIG_HOME/aws4cli/aws4cli.yaml``.

    Returns:
        Path to the config file.
    """
    return user_config_path(_APP_NAME) / "aws4cli.yaml"


def get_dotenv_path() -> Path:
    """Return the ``.env`` file path inside the XDG config directory."""
    return user_config_path(_APP_NAME) / ".env"


class ConfigError(Exception):
    """Base exception for configuration errors."""


# ---------------------------------------------------------------------------
# YAML tag placeholders
# ---------------------------------------------------------------------------


class _EnvVar:
    """Placeholder for an unresolved ``!env VAR_NAME`` tag."""

    def __init__(self, var_name: str) -> None:
        self.var_name = var_name


def _env_constructor(loader: yaml.SafeLoader, node: yaml.Node) -> _EnvVar:
    """Handle ``!env VAR_NAME`` in YAML."""
    value = loader.construct_scalar(node)  # type: ignore[arg-type]
    return _EnvVar(str(value))


def _make_loader() -> type[yaml.SafeLoader]:
    """Create a YAML loader that understands ``!env``."""

    class EnvLoader(yaml.SafeLoader):
        pass

    EnvLoader.add_constructor("!env", _env_constructor)
    return EnvLoader


# ---------------------------------------------------------------------------
# Value resolution
# ---------------------------------------------------------------------------


def _coerce_bool(value: object) -> bool:
    """Coerce a value to bool, handling string representations."""
    if isinstance(value, bool):
        return value
    s = str(value).lower().strip()
    if s in _BOOL_TRUTHY:
        return True
    if s in _BOOL_FALSY:
        return False
    raise ConfigError(f"Cannot convert {value!r} to bool")


def _raw_resolve(value: object) -> str | None:
    """Resolve an ``_EnvVar`` to its string value, or stringify literals.

    Unset and empty environment variables both resolve to None.
    """
    if isinstance(value, _EnvVar):
        return os.environ.get(value.var_name) or None
    if value is None:
        return None
    return str(value)


_MISSING = object()

_T = TypeVar("_T")


@overload
def _resolve(value: object, coerce: type[_T], *, default: _T) -> _T: ...


@overload
def _resolve(value: object, coerce: type[_T]) -> _T | None: ...


def _resolve(
    value: object,
    coerce: type[Any],
    *,
    default: object = _MISSING,
) -> Any:
    """Resolve a YAML value, handling ``!env`` tags and type coercion.

    Args:
        value: Raw value from YAML (may be ``_EnvVar``, None, or a
            literal already parsed by PyYAML).
        coerce: Target type (``str``, ``int``, ``bool`` or an Enum).
        default: Default when the value is absent.

    Returns:
        The resolved, coerced value, or None when absent without default.

    Raises:
        ConfigError: If the value cannot be coerced.
    """
    if not isinstance(value, _EnvVar) and value is not None:
        if coerce is bool:
            return _coerce_bool(value)
        if isinstance(value, coerce) and not isinstance(value, bool):
            return value

    resolved = _raw_resolve(value)
    if resolved is None:
        return None if default is _MISSING else default

    if coerce is bool:
        return _coerce_bool(resolved)
    try:
        if issubclass(coerce, Enum):
            return coerce(resolved.strip().lower())
        return coerce(resolved)
    except ValueError as e:
        raise ConfigError(f"Invalid value {resolved!r}: {e}") from e


def _env_region() -> str | None:
    return os.environ.get("AWS_REGION") or os.environ.get(
        "AWS_DEFAULT_REGION"
    )


# ---------------------------------------------------------------------------
# Config object
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CliConfig:
    """Defaults for a signing run.

    Attributes:
        region: Signing region used when the URL does not reveal one.
        profile: Named AWS profile for credential resolution.
        output: Default output format.
        expires: Default presigned URL validity in seconds.
        max_expires: Largest accepted validity (at most 604800).
        expires_policy: Overwrite or preserve ``X-Amz-Expires`` already in
            the URL.
        session_token: Trailing (unsigned) or signed session token in
            presigned URLs.
        verbose: Log progress to stderr by default.
    """

    region: str | None = None
    profile: str | None = None
    output: OutputFormat = OutputFormat.URL
    expires: int = DEFAULT_EXPIRES
    max_expires: int = MAX_EXPIRES
    expires_policy: ExpiresPolicy = ExpiresPolicy.OVERWRITE
    session_token: TokenPlacement = TokenPlacement.TRAILING
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 1 <= self.max_expires <= MAX_EXPIRES:
            raise ConfigError(
                f"max_expires must be between 1 and {MAX_EXPIRES}, "
                f"got {self.max_expires}"
            )
        if not 1 <= self.expires <= self.max_expires:
            raise ConfigError(
                f"expires must be between 1 and {self.max_expires}, "
                f"got {self.expires}"
            )

    @classmethod
    def from_yaml(cls, config_path: Path | None = None) -> CliConfig:
        """Load configuration.

        ``.env`` files are loaded first so that ``!env`` tags can refer to
        variables defined there.

        Args:
            config_path: Explicit config file; it must exist.  When None,
                ``$AWS4CLI_CONFIG`` or the XDG default is used, and a
                missing file means "no configuration".

        Returns:
            Loaded configuration.

        Raises:
            ConfigError: If the file is unreadable or invalid.
        """
        load_dotenv_once()

        explicit = config_path is not None
        if config_path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            explicit = bool(env_path)
            config_path = Path(env_path) if env_path else get_config_path()
        config_path = config_path.expanduser()

        if not config_path.exists():
            if explicit:
                raise ConfigError(f"Config file not found: {config_path}")
            logger.debug("No config file at %s, using defaults", config_path)
            return cls._from_raw({})

        try:
            with config_path.open(encoding="utf-8") as f:
                raw = yaml.load(f, Loader=_make_loader())
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{config_path}: top level must be a mapping")

        logger.debug("Loaded config from %s", config_path)
        return cls._from_raw(raw)

    @classmethod
    def _from_raw(cls, raw: dict) -> CliConfig:
        """Build a config from the parsed YAML mapping."""
        for key in sorted(set(raw) - _KNOWN_KEYS):
            logger.warning("Ignoring unknown config key %r", key)

        return cls(
            region=_resolve(raw.get("region"), str) or _env_region(),
            profile=(
                _resolve(raw.get("profile"), str)
                or os.environ.get("AWS_PROFILE")
                or None
            ),
            output=_resolve(
                raw.get("output"), OutputFormat, default=OutputFormat.URL
            ),
            expires=_resolve(raw.get("expires"), int, default=DEFAULT_EXPIRES),
            max_expires=_resolve(
                raw.get("max_expires"), int, default=MAX_EXPIRES
            ),
            expires_policy=_resolve(
                raw.get("expires_policy"),
                ExpiresPolicy,
                default=ExpiresPolicy.OVERWRITE,
            ),
            session_token=_resolve(
                raw.get("session_token"),
                TokenPlacement,
                default=TokenPlacement.TRAILING,
            ),
            verbose=_resolve(raw.get("verbose"), bool, default=False),
        )
