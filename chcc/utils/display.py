"""
Human-readable formatting of the profile store. Tokens are never shown in full.
"""

from typing import List

from ..profiles.store import Profile, ProfileStore

LIST_TOKEN_PREFIX = 20
SUMMARY_TOKEN_PREFIX = 10


def truncate_token(token: str, length: int = LIST_TOKEN_PREFIX) -> str:
    """
    Shorten a token for display.

    Args:
        token: The access token
        length: Maximum number of characters to reveal

    Returns:
        str: At most `length` characters of the token followed by "..."
    """
    return f"{token[:max(length, 0)]}..."


def format_store(store: ProfileStore) -> str:
    """Format every profile in the store for the list command."""
    output = [f"Default API Site: {store.default_name}", "Available API Sites:"]
    for i, profile in enumerate(store.profiles, 1):
        output.append(f"  {i}. {profile.name}")
        output.append(f"     URL: {profile.base_url}")
        output.append(f"     Token: {truncate_token(profile.token, LIST_TOKEN_PREFIX)}")
    return "\n".join(output)


def format_default(profile: Profile) -> str:
    """Format the summary block of the default profile."""
    lines = [
        f"Name: {profile.name}",
        f"URL: {profile.base_url}",
        f"Token: {truncate_token(profile.token, SUMMARY_TOKEN_PREFIX)}",
    ]
    return "\n".join(lines)


def format_names(names: List[str]) -> str:
    return "\n".join(f"  - {name}" for name in names)
