"""
Filesystem locations used by CHCC.
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from ..errors import ConfigIOError

CONFIG_FILENAME = ".chcc.yaml"
CONFIG_ENV_VAR = "CHCC_CONFIG"
SHELL_RC_FILES = (".bashrc", ".zshrc")


def get_home_dir() -> Optional[Path]:
    """
    Get the current user's home directory.

    Returns:
        Optional[Path]: The home directory or None if it can't be determined
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def get_config_path(override: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve the path of the profile configuration file.

    Args:
        override: Explicit path, takes precedence over everything else

    Returns:
        Path: The --config value, then $CHCC_CONFIG, then ~/.chcc.yaml
    """
    if override:
        return Path(override).expanduser()

    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()

    home = get_home_dir()
    if home is None:
        raise ConfigIOError("could not determine the user home directory")
    return home / CONFIG_FILENAME


def get_shell_rc_paths(home: Path) -> List[Path]:
    """Get the interactive shell startup files under a home directory."""
    return [home / name for name in SHELL_RC_FILES]
