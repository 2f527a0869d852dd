# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Idempotent .env loading.

Environment variables are read from two locations (in order):

1. ``~/.config/aws4cli/.env`` (XDG config directory)
2. ``.env`` in the current working directory

``python-dotenv`` never overwrites variables that are already set, so the
process environment wins over the XDG file, which wins over the working
directory file.  This lets ``AWS_PROFILE`` or ``AWS_REGION`` live in a
``.env`` without shadowing an explicit ``export``.
"""

import logging
from pathlib import Path


logger = logging.getLogger(__name__)

_dotenv_loaded = False


def load_dotenv_once() -> None:
    """Load .env files once, if not already loaded."""
    global _dotenv_loaded
    if _dotenv_loaded:
        return

    from dotenv import load_dotenv

    from aws4cli.config import get_dotenv_path

    for env_file in (get_dotenv_path(), Path.cwd() / ".env"):
        if env_file.exists():
            load_dotenv(env_file)
            logger.debug("Loaded .env from %s", env_file)

    _dotenv_loaded = True


def reset_dotenv_state() -> None:
    """Reset the dotenv loaded state. For testing only."""
    global _dotenv_loaded
    _dotenv_loaded = False
