"""
Profile Store

This module keeps the ordered collection of API site profiles and reads and
writes it as a hand-editable YAML document:

    api_sites:
    - name: main
      base_url: https://api.example.com
      token: sk-...
    default_api_site: main
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..errors import ConfigIOError, ConfigParseError, ConfigSerializeError

__all__ = [
    'Profile',
    'ProfileStore',
    'load_store',
    'save_store',
]

logger = logging.getLogger(__name__)

SITES_KEY = "api_sites"
DEFAULT_KEY = "default_api_site"


class Profile:
    """A named API endpoint configuration."""
    def __init__(self, name: str, base_url: str = "", token: str = ""):
        self.name = name
        self.base_url = base_url
        self.token = token

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "base_url": self.base_url, "token": self.token}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Profile):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Profile(name={self.name!r}, base_url={self.base_url!r})"


class ProfileStore:
    """
    Ordered set of profiles plus the name of the default one.

    Names are unique. `default_name` is either empty or the name of a
    profile in `profiles`.
    """

    def __init__(self, profiles: Optional[List[Profile]] = None, default_name: str = ""):
        self.profiles: List[Profile] = list(profiles or [])
        self.default_name = default_name

    def __len__(self) -> int:
        return len(self.profiles)

    def names(self) -> List[str]:
        """Profile names in store order."""
        return [p.name for p in self.profiles]

    def get_by_name(self, name: str) -> Optional[Profile]:
        """
        Look up a profile by name.

        Args:
            name: Profile name

        Returns:
            The matching Profile or None if there is no such profile
        """
        return next((p for p in self.profiles if p.name == name), None)

    def get_default(self) -> Optional[Profile]:
        """
        Get the default profile.

        Falls back to the first profile when no default is set.

        Returns:
            The default Profile, or None if the store is empty
        """
        profile = self.get_by_name(self.default_name) if self.default_name else None
        if profile is not None:
            return profile
        if self.profiles:
            return self.profiles[0]
        return None

    def add_or_update(self, name: str, base_url: str, token: str) -> bool:
        """
        Add a profile, or update the URL and token of an existing one in place.

        The first profile added to an empty store becomes the default.

        Args:
            name: Profile name (non-empty)
            base_url: API base URL
            token: Access token

        Returns:
            True if a new profile was appended, False if one was updated
        """
        if not name:
            raise ValueError("profile name must not be empty")

        existing = self.get_by_name(name)
        if existing is not None:
            existing.base_url = base_url
            existing.token = token
            return False

        was_empty = not self.profiles and not self.default_name
        self.profiles.append(Profile(name, base_url, token))
        if was_empty:
            self.default_name = name
        return True

    def set_default(self, name: str) -> bool:
        """
        Make an existing profile the default.

        Args:
            name: Profile name

        Returns:
            True on success, False if no profile has that name
        """
        if self.get_by_name(name) is None:
            return False
        self.default_name = name
        return True

    def remove(self, name: str) -> bool:
        """
        Remove a profile.

        Removing the default re-points the default at the first remaining
        profile, or clears it when none remain.

        Args:
            name: Profile name

        Returns:
            True if the profile was removed, False if it was not found
        """
        for i, profile in enumerate(self.profiles):
            if profile.name != name:
                continue
            del self.profiles[i]
            if self.default_name == name:
                self.default_name = self.profiles[0].name if self.profiles else ""
            return True
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            SITES_KEY: [p.to_dict() for p in self.profiles],
            DEFAULT_KEY: self.default_name,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ProfileStore":
        """
        Build a store from deserialized YAML data.

        Raises:
            ConfigParseError: If the data does not have the expected shape
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigParseError("top level of the configuration must be a mapping")

        sites = data.get(SITES_KEY) or []
        if not isinstance(sites, list):
            raise ConfigParseError(f"'{SITES_KEY}' must be a list")

        profiles: List[Profile] = []
        seen = set()
        for index, entry in enumerate(sites):
            if not isinstance(entry, dict):
                raise ConfigParseError(f"'{SITES_KEY}' entry {index} must be a mapping")
            name = entry.get("name")
            if not isinstance(name, str) or not name:
                raise ConfigParseError(f"'{SITES_KEY}' entry {index} has no name")
            if name in seen:
                raise ConfigParseError(f"duplicate API site name '{name}'")
            seen.add(name)
            profiles.append(Profile(
                name=name,
                base_url=_scalar(entry, "base_url", name),
                token=_scalar(entry, "token", name),
            ))

        default_name = data.get(DEFAULT_KEY) or ""
        if not isinstance(default_name, str):
            raise ConfigParseError(f"'{DEFAULT_KEY}' must be a string")
        if default_name and default_name not in seen:
            logger.warning("Default API site '%s' does not exist, ignoring it", default_name)
            default_name = ""

        return cls(profiles, default_name)


def _scalar(entry: Dict[str, Any], key: str, name: str) -> str:
    value = entry.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ConfigParseError(f"'{key}' of API site '{name}' must be a scalar")
    return str(value)


def load_store(path: Union[str, Path]) -> ProfileStore:
    """
    Load the profile store from a YAML file.

    Args:
        path: Path of the configuration file

    Returns:
        ProfileStore: The stored profiles, or an empty store if the file does not exist

    Raises:
        ConfigIOError: If the file exists but can't be read
        ConfigParseError: If the file contents are not valid profile data
    """
    path = Path(path)
    if not path.exists():
        logger.info("Config file %s does not exist, starting with an empty store", path)
        return ProfileStore()

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigIOError(f"failed to read config file {path}: {e}") from e

    try:
        # BaseLoader keeps every scalar as the text the user wrote, so a
        # token like 0123 is not read as an octal number.
        data = yaml.load(content, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"failed to parse YAML in {path}: {e}") from e

    store = ProfileStore.from_dict(data)
    logger.debug("Loaded %d API sites from %s", len(store), path)
    return store


def save_store(store: ProfileStore, path: Union[str, Path]) -> None:
    """
    Write the whole profile store to a YAML file.

    The document is written to a temporary sibling and moved over the
    target, so readers never see a half-written file. An existing file keeps
    its permission bits.

    Args:
        store: The store to save
        path: Path of the configuration file

    Raises:
        ConfigSerializeError: If the store can't be serialized
        ConfigIOError: If the file can't be written
    """
    path = Path(path)
    try:
        content = yaml.safe_dump(store.to_dict(), sort_keys=False, allow_unicode=True)
    except yaml.YAMLError as e:
        raise ConfigSerializeError(f"failed to serialize config: {e}") from e

    tmp = path.with_name(f"{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(content)
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except OSError as e:
        _discard(tmp)
        raise ConfigIOError(f"failed to write config file {path}: {e}") from e
    logger.debug("Saved %d API sites to %s", len(store), path)


def _discard(tmp: Path) -> None:
    try:
        tmp.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove temporary file %s: %s", tmp, e)
