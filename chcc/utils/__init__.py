"""
Path resolution and display helpers.
"""

from .paths import get_home_dir, get_config_path, get_shell_rc_paths
from .display import truncate_token, format_store, format_default, format_names

__all__ = [
    'get_home_dir',
    'get_config_path',
    'get_shell_rc_paths',
    'truncate_token',
    'format_store',
    'format_default',
    'format_names',
]
