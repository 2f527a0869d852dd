# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Shared pytest fixtures."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from aws4cli.credentials import Credentials
from aws4cli.dotenv_loader import reset_dotenv_state
from aws4cli.logging import SecretFilter
from tests.vectors import ACCESS_KEY_ID, SECRET_ACCESS_KEY


@pytest.fixture(autouse=True)
def _isolate_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Keep tests away from the real AWS setup and user config.

    Removes every ``AWS*`` variable, points XDG and the shared AWS files
    at ``tmp_path``, disables instance metadata lookups and runs the test
    from an empty working directory.  Root logger handlers and registered
    secrets are restored afterwards.
    """
    for name in list(os.environ):
        if name.startswith("AWS"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws" / "config"))
    monkeypatch.setenv(
        "AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws" / "credentials")
    )
    monkeypatch.setenv("AWS_EC2_METADATA_DISABLED", "true")
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    reset_dotenv_state()
    SecretFilter.clear_secrets()

    yield

    SecretFilter.clear_secrets()
    reset_dotenv_state()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def credentials() -> Credentials:
    """Long-term test credentials from the AWS SigV4 test suite."""
    return Credentials(ACCESS_KEY_ID, SECRET_ACCESS_KEY)


@pytest.fixture
def temporary_credentials() -> Credentials:
    """Test credentials carrying a session token."""
    return Credentials(ACCESS_KEY_ID, SECRET_ACCESS_KEY, "session-token/+=")
