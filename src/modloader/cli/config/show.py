"""
modloader config show command.

SUMMARY: Show the effective loader configuration

Displays the merged configuration from bundled defaults, an optional
configuration file and MODLOADER_* environment variables.
"""

from __future__ import annotations

import argparse
from pathlib import Path

import yaml

from modloader.cli import OutputFormatter, add_config_flag, add_json_flag
from modloader.core.config import SECTION, ConfigManager
from modloader.core.exceptions import ConfigError

SUMMARY = "Show the effective loader configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="yaml",
        help="Output format (default: yaml)",
    )
    add_config_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    manager = ConfigManager()
    try:
        section = manager.load_section(Path(args.config) if args.config else None)
        manager.validate(section)
    except ConfigError as exc:
        formatter.error(exc)
        return 1

    if args.json or args.format == "json":
        formatter.json_output({SECTION: section})
    else:
        formatter.text(
            yaml.safe_dump(
                {SECTION: section},
                default_flow_style=False,
                sort_keys=True,
                allow_unicode=True,
            ).rstrip()
        )
    return 0
