import pytest
from pathlib import Path
from unittest.mock import patch

from chcc.errors import ConfigIOError
from chcc.utils.paths import get_config_path, get_home_dir, get_shell_rc_paths


def test_get_config_path_defaults_to_home(isolated_home):
    """Test the default config file lives in the home directory."""
    assert get_config_path() == isolated_home / ".chcc.yaml"


def test_get_config_path_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CHCC_CONFIG", str(tmp_path / "from-env.yaml"))
    assert get_config_path() == tmp_path / "from-env.yaml"


def test_get_config_path_override_wins(monkeypatch, tmp_path):
    """Test an explicit path beats $CHCC_CONFIG."""
    monkeypatch.setenv("CHCC_CONFIG", str(tmp_path / "from-env.yaml"))
    assert get_config_path(tmp_path / "explicit.yaml") == tmp_path / "explicit.yaml"


def test_get_config_path_without_home():
    with patch("chcc.utils.paths.Path.home", side_effect=RuntimeError("no home")):
        assert get_home_dir() is None
        with pytest.raises(ConfigIOError):
            get_config_path()


def test_get_shell_rc_paths():
    home = Path("/home/someone")
    assert get_shell_rc_paths(home) == [home / ".bashrc", home / ".zshrc"]
