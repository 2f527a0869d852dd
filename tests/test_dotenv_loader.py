# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for the dotenv loader."""

import os
from pathlib import Path
from unittest.mock import MagicMock, call, patch

from aws4cli.config import get_dotenv_path
from aws4cli.dotenv_loader import load_dotenv_once, reset_dotenv_state


class TestLoadDotenvOnce:
    """Tests for load_dotenv_once."""

    def test_idempotent(self) -> None:
        """Second call is a no-op."""
        (Path.cwd() / ".env").touch()
        mock_ld = MagicMock()
        with patch("dotenv.load_dotenv", mock_ld):
            load_dotenv_once()
            load_dotenv_once()
        assert mock_ld.call_count == 1

    def test_loads_xdg_then_cwd(self) -> None:
        """XDG file is loaded before the working directory file."""
        xdg_env = get_dotenv_path()
        xdg_env.parent.mkdir(parents=True)
        xdg_env.touch()
        cwd_env = Path.cwd() / ".env"
        cwd_env.touch()
        mock_ld = MagicMock()
        with patch("dotenv.load_dotenv", mock_ld):
            load_dotenv_once()
        assert mock_ld.call_args_list == [call(xdg_env), call(cwd_env)]

    def test_no_env_files(self) -> None:
        """No-op when neither .env file exists."""
        mock_ld = MagicMock()
        with patch("dotenv.load_dotenv", mock_ld):
            load_dotenv_once()
        mock_ld.assert_not_called()

    def test_reset_allows_reload(self) -> None:
        """reset_dotenv_state allows re-loading."""
        (Path.cwd() / ".env").touch()
        mock_ld = MagicMock()
        with patch("dotenv.load_dotenv", mock_ld):
            load_dotenv_once()
            reset_dotenv_state()
            load_dotenv_once()
        assert mock_ld.call_count == 2

    def test_precedence(self) -> None:
        """Existing variables beat XDG, which beats the working dir."""
        xdg_env = get_dotenv_path()
        xdg_env.parent.mkdir(parents=True)
        xdg_env.write_text("AWS_REGION=from-xdg\nAWS_PROFILE=from-xdg\n")
        (Path.cwd() / ".env").write_text(
            "AWS_REGION=from-cwd\nAWS_PROFILE=from-cwd\n"
            "AWS_DEFAULT_REGION=from-cwd\n"
        )
        with patch.dict("os.environ", {"AWS_REGION": "from-shell"}):
            load_dotenv_once()
            assert os.environ["AWS_REGION"] == "from-shell"
            assert os.environ["AWS_PROFILE"] == "from-xdg"
            assert os.environ["AWS_DEFAULT_REGION"] == "from-cwd"
