"""
API site profile store: named base URL + token pairs persisted to YAML.
"""

from .store import (
    Profile,
    ProfileStore,
    load_store,
    save_store,
)
