"""
Propagation of the selected profile into process and shell environments.
"""

from .propagator import (
    BASE_URL_VAR,
    AUTH_TOKEN_VAR,
    PersistOutcome,
    PropagationResult,
    set_for_profile,
    manual_instructions,
)
