"""
CHCC - API site profile manager.

Keeps named API endpoint profiles (base URL + token) in a YAML file and
propagates the default one into ANTHROPIC_BASE_URL / ANTHROPIC_AUTH_TOKEN.
"""

__version__ = "0.1.0"
