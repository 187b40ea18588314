"""
CHCC CLI

A command-line utility for managing API site profiles.
This tool helps you list, add, remove and select the default API site, and
exports the default site's URL and token into your environment.
"""

import argparse
import logging
import sys
from typing import Optional

from .environment import (
    BASE_URL_VAR,
    AUTH_TOKEN_VAR,
    PropagationResult,
    set_for_profile,
    manual_instructions,
)
from .errors import ChccError, EnvError
from .logging_config import LEVEL_MAP, configure_logging
from .profiles import Profile, ProfileStore, load_store, save_store
from .utils import format_default, format_names, format_store, get_config_path

logger = logging.getLogger(__name__)


def _load(args) -> ProfileStore:
    path = get_config_path(args.config)
    if not path.exists():
        print(f"Creating new config file at: {path}")
    return load_store(path)


def _save(args, store: ProfileStore):
    save_store(store, get_config_path(args.config))
    print("Configuration saved successfully!")


def _report_not_found(store: ProfileStore, name: str):
    print(f"Error: API site '{name}' not found")
    if store.profiles:
        print("Available API sites:")
        print(format_names(store.names()))
    else:
        print("No API sites configured. Use 'chcc add' to add one first.")
    sys.exit(1)


def _propagate(profile: Profile) -> Optional[PropagationResult]:
    """Export a profile into the environment, printing fallbacks on failure."""
    try:
        result = set_for_profile(profile)
    except EnvError as e:
        print(f"Warning: Failed to set environment variables: {e}")
        print("You may need to set them manually:")
        print("\n".join(manual_instructions(profile)))
        return None

    for failure in result.failures:
        print(f"Warning: Failed to persist to {failure.target}: {failure.error}")
    if not result.persisted:
        print("Note: nothing was persisted, new shell sessions will not see these values.")
    return result


def handle_list(args):
    """Handle the list command."""
    store = _load(args)

    if not store.profiles:
        print("No API sites configured.")
        print("\nUse 'chcc add --help' to add your first API site.")
        return

    print("=== CHCC Configuration ===")
    print(format_store(store))

    print("\n=== Default API Site ===")
    default = store.get_default()
    if default:
        print(format_default(default))
    else:
        print("No default API site set")
        print("Use 'chcc set-default --name <site-name>' to set a default site.")


def handle_add(args):
    """Handle the add command."""
    store = _load(args)

    if store.get_by_name(args.name):
        print(f"Updating existing API site: {args.name}")
    else:
        print(f"Adding new API site: {args.name}")

    had_default = bool(store.default_name)
    store.add_or_update(args.name, args.url, args.token)
    if not had_default and store.default_name == args.name:
        print(f"Set {args.name} as default API site (first site added)")

    _save(args, store)


def handle_set_default(args):
    """Handle the set-default command."""
    store = _load(args)

    if not store.set_default(args.name):
        _report_not_found(store, args.name)

    print(f"Set {args.name} as default API site")
    _save(args, store)

    profile = store.get_by_name(args.name)
    print("Setting user environment variables...")
    result = _propagate(profile)
    if result is not None:
        print("User environment variables set successfully!")
        print("To apply this change to your current terminal session, run the following command:")
        print()
        print("\n".join(manual_instructions(profile, result.platform)))


def handle_remove(args):
    """Handle the remove command."""
    store = _load(args)
    was_default = store.default_name == args.name

    if not store.remove(args.name):
        _report_not_found(store, args.name)

    print(f"Removed API site: {args.name}")
    _save(args, store)

    default = store.get_by_name(store.default_name) if was_default and store.default_name else None
    if default:
        print(f"New default API site: {default.name}")
        print("Updating user environment variables...")
        if _propagate(default) is not None:
            print("User environment variables updated successfully!")
    elif not store.profiles:
        print("No API sites remaining. You may want to clear environment variables manually:")
        print(f"  {BASE_URL_VAR}")
        print(f"  {AUTH_TOKEN_VAR}")


def handle_env(args):
    """Print the shell commands for a profile without changing anything."""
    store = _load(args)

    if args.name:
        profile = store.get_by_name(args.name)
        if profile is None:
            _report_not_found(store, args.name)
    else:
        profile = store.get_default()
        if profile is None:
            print("No API sites configured. Use 'chcc add' to add one first.")
            sys.exit(1)

    print("\n".join(manual_instructions(profile)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chcc",
        description="CHCC - API Site Configuration Manager"
    )
    parser.add_argument("--config", help="Path to the config file (default: $CHCC_CONFIG or ~/.chcc.yaml)")
    parser.add_argument("--log-level", choices=list(LEVEL_MAP.keys()), default="WARNING",
                        help="Set logging level (default: WARNING)")
    parser.set_defaults(func=handle_list)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # List command
    list_parser = subparsers.add_parser("list", help="List all API sites")
    list_parser.set_defaults(func=handle_list)

    # Add command
    add_parser = subparsers.add_parser("add", help="Add or update an API site")
    add_parser.add_argument("--name", "-n", required=True, help="API site name")
    add_parser.add_argument("--url", "-u", required=True, help="API site base URL")
    add_parser.add_argument("--token", "-t", required=True, help="API site token")
    add_parser.set_defaults(func=handle_add)

    # Set default command
    default_parser = subparsers.add_parser("set-default", help="Set default API site")
    default_parser.add_argument("--name", "-n", required=True, help="API site name")
    default_parser.set_defaults(func=handle_set_default)

    # Remove command
    remove_parser = subparsers.add_parser("remove", help="Remove an API site")
    remove_parser.add_argument("--name", "-n", required=True, help="API site name")
    remove_parser.set_defaults(func=handle_remove)

    # Env command
    env_parser = subparsers.add_parser("env", help="Print shell commands for the default API site")
    env_parser.add_argument("--name", "-n", help="API site name (default: the default site)")
    env_parser.set_defaults(func=handle_env)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if getattr(args, "name", None) == "":
        parser.error("--name must not be empty")

    try:
        args.func(args)
    except ChccError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
