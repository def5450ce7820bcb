"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse

from modloader.core.dependency import DUPLICATE_MODES


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config flag pointing at a loader configuration YAML file."""
    parser.add_argument(
        "--config",
        type=str,
        help="Loader configuration file (top-level 'modloader' key)",
    )


def add_manifest_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("manifest", help="YAML manifest describing the mod set")


def add_provided_flag(parser: argparse.ArgumentParser) -> None:
    """Add --provided for extra virtual names (e.g. host@1.2)."""
    parser.add_argument(
        "--provided",
        action="append",
        default=[],
        help="Extra provided name; repeat the flag or pass a comma-separated list",
    )


def add_duplicates_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--duplicates",
        choices=list(DUPLICATE_MODES),
        help="How to treat mods sharing a name (default: from configuration)",
    )


__all__ = [
    "add_json_flag",
    "add_config_flag",
    "add_manifest_arg",
    "add_provided_flag",
    "add_duplicates_flag",
]
