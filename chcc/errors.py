"""
Exception types raised by the CHCC library code.

The CLI is the only place these are turned into user-facing messages.
"""


class ChccError(Exception):
    """Base class for all CHCC errors."""


class ConfigIOError(ChccError):
    """The configuration file could not be read or written."""


class ConfigParseError(ChccError):
    """The configuration file does not hold valid profile data."""


class ConfigSerializeError(ChccError):
    """The profile store could not be serialized."""


class EnvError(ChccError):
    """Environment propagation failed."""
