"""
Environment Propagator

Copies a profile's base URL and token into ANTHROPIC_BASE_URL and
ANTHROPIC_AUTH_TOKEN for the current process, then tries to make them stick
for future shell sessions:

- Windows: `setx` per variable (user scope).
- Unix-like: appends an export block to every existing ~/.bashrc / ~/.zshrc.

Only the in-process step is fatal. Persistence failures are logged and
recorded in the returned PropagationResult. Blocks written by earlier calls
are never rewritten, so repeated calls append duplicate blocks.
"""

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, MutableMapping, Optional

from ..errors import EnvError
from ..profiles.store import Profile
from ..utils.paths import get_home_dir, get_shell_rc_paths

__all__ = [
    'BASE_URL_VAR',
    'AUTH_TOKEN_VAR',
    'PersistOutcome',
    'PropagationResult',
    'platform_family',
    'set_for_profile',
    'manual_instructions',
]

logger = logging.getLogger(__name__)

BASE_URL_VAR = "ANTHROPIC_BASE_URL"
AUTH_TOKEN_VAR = "ANTHROPIC_AUTH_TOKEN"
BLOCK_MARKER = "# CHCC API Configuration"

WINDOWS = "windows"
UNIX = "unix"

_UNIX_PREFIXES = ("linux", "darwin", "freebsd", "openbsd", "netbsd", "dragonfly", "sunos", "aix")


class PersistOutcome:
    """Result of persisting the variables to one target (rc file or setx call)."""
    def __init__(self, target: str, ok: bool, error: Optional[str] = None):
        self.target = target
        self.ok = ok
        self.error = error

    def __repr__(self) -> str:
        state = "ok" if self.ok else f"failed: {self.error}"
        return f"PersistOutcome({self.target!r}, {state})"


class PropagationResult:
    """Per-target outcomes of a propagation call."""
    def __init__(self, platform: str, outcomes: Optional[List[PersistOutcome]] = None):
        self.platform = platform
        self.outcomes: List[PersistOutcome] = outcomes or []

    @property
    def failures(self) -> List[PersistOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def persisted(self) -> bool:
        """True if at least one target was written."""
        return any(o.ok for o in self.outcomes)


def platform_family(platform: str) -> Optional[str]:
    """
    Map a sys.platform value to the persistence strategy to use.

    Returns:
        "windows", "unix", or None for platforms with no known strategy
    """
    if platform in ("win32", "cygwin"):
        return WINDOWS
    if platform.startswith(_UNIX_PREFIXES):
        return UNIX
    return None


def _export_block(profile: Profile) -> str:
    return (
        f"\n{BLOCK_MARKER}\n"
        f'export {BASE_URL_VAR}="{profile.base_url}"\n'
        f'export {AUTH_TOKEN_VAR}="{profile.token}"\n'
    )


def _persist_windows(profile: Profile, runner: Callable[..., subprocess.CompletedProcess]) -> List[PersistOutcome]:
    outcomes = []
    for var, value in ((BASE_URL_VAR, profile.base_url), (AUTH_TOKEN_VAR, profile.token)):
        try:
            result = runner(["setx", var, value], capture_output=True, text=True)
            if result.returncode == 0:
                outcomes.append(PersistOutcome(var, True))
                continue
            error = (result.stderr or "").strip() or f"setx exited with status {result.returncode}"
        except (OSError, subprocess.SubprocessError) as e:
            error = str(e)
        logger.warning("Failed to set persistent %s: %s", var, error)
        outcomes.append(PersistOutcome(var, False, error))
    return outcomes


def _persist_unix(profile: Profile, home: Optional[Path]) -> List[PersistOutcome]:
    if home is None:
        home = get_home_dir()
    if home is None:
        raise EnvError("failed to get home directory")

    block = _export_block(profile)
    outcomes = []
    for rc_path in get_shell_rc_paths(Path(home)):
        if not rc_path.exists():
            continue
        try:
            with open(rc_path, "a", encoding="utf-8") as f:
                f.write(block)
        except OSError as e:
            logger.debug("Skipping %s: %s", rc_path, e)
            outcomes.append(PersistOutcome(str(rc_path), False, str(e)))
            continue
        logger.info("Appended %s block to %s", BASE_URL_VAR, rc_path)
        outcomes.append(PersistOutcome(str(rc_path), True))
    return outcomes


def set_for_profile(
    profile: Profile,
    environ: Optional[MutableMapping[str, str]] = None,
    platform: Optional[str] = None,
    home: Optional[Path] = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> PropagationResult:
    """
    Propagate a profile into the environment.

    Args:
        profile: The profile whose base URL and token are exported
        environ: Process environment to update (defaults to os.environ)
        platform: sys.platform-style name (defaults to sys.platform)
        home: Home directory holding the shell rc files (unix only)
        runner: Command runner used for setx (windows only)

    Returns:
        PropagationResult: Outcome of every persistence target

    Raises:
        EnvError: If the process environment can't be updated, the home
            directory can't be determined, or the platform is unsupported
    """
    environ = os.environ if environ is None else environ
    platform = platform or sys.platform

    try:
        environ[BASE_URL_VAR] = profile.base_url
        environ[AUTH_TOKEN_VAR] = profile.token
    except (ValueError, TypeError, OSError) as e:
        raise EnvError(f"failed to set process environment: {e}") from e

    family = platform_family(platform)
    if family == WINDOWS:
        outcomes = _persist_windows(profile, runner)
    elif family == UNIX:
        outcomes = _persist_unix(profile, home)
    else:
        raise EnvError(f"unsupported platform '{platform}'")

    return PropagationResult(platform, outcomes)


def manual_instructions(profile: Profile, platform: Optional[str] = None) -> List[str]:
    """
    Build the commands a user can run by hand to apply a profile.

    Args:
        profile: The profile to apply
        platform: sys.platform-style name (defaults to sys.platform)

    Returns:
        List[str]: Output lines, grouped by shell
    """
    family = platform_family(platform or sys.platform)
    if family == WINDOWS:
        return [
            "For Command Prompt (cmd.exe):",
            f"set {BASE_URL_VAR}={profile.base_url}",
            f"set {AUTH_TOKEN_VAR}={profile.token}",
            "",
            "For PowerShell:",
            f'$env:{BASE_URL_VAR}="{profile.base_url}"',
            f'$env:{AUTH_TOKEN_VAR}="{profile.token}"',
        ]
    if family == UNIX:
        return [
            "For Bash/Zsh:",
            f'export {BASE_URL_VAR}="{profile.base_url}"',
            f'export {AUTH_TOKEN_VAR}="{profile.token}"',
        ]
    return [
        "Unsupported OS. Please set the environment variables manually:",
        f"  {BASE_URL_VAR}={profile.base_url}",
        f"  {AUTH_TOKEN_VAR}={profile.token}",
    ]
