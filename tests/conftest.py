"""
Shared test fixtures and configuration.
"""

import pytest
import os
import sys

# Add the parent directory to the path so we can import the chcc package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chcc.environment import BASE_URL_VAR, AUTH_TOKEN_VAR
from chcc.profiles import ProfileStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at a temp dir and keep the real environment untouched."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("CHCC_CONFIG", raising=False)
    # setenv records the variables so teardown restores whatever the CLI writes
    monkeypatch.setenv(BASE_URL_VAR, "")
    monkeypatch.setenv(AUTH_TOKEN_VAR, "")
    return home


@pytest.fixture
def config_path(tmp_path):
    """Path of a config file that does not exist yet."""
    return tmp_path / "config" / ".chcc.yaml"


@pytest.fixture
def sample_store():
    """Store with two sites, 'alpha' being the default."""
    store = ProfileStore()
    store.add_or_update("alpha", "https://alpha.example.com", "sk-alpha-0123456789abcdefghij")
    store.add_or_update("beta", "https://beta.example.com", "sk-beta-0123456789")
    return store
