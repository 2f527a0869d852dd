#!/usr/bin/env python3
# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""aws4-cli script entry point.

Delegates to :func:`aws4cli.cli.cli`.  Equivalent to ``uv run aws4-cli``.
"""

import sys
from pathlib import Path


# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from aws4cli.cli import cli


if __name__ == "__main__":
    cli()
