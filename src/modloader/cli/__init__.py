"""
Modloader CLI package.

Commands are auto-discovered from domain subfolders (deps/, config/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
"""
from ._output import OutputFormatter, format_json
from ._args import (
    add_config_flag,
    add_duplicates_flag,
    add_json_flag,
    add_manifest_arg,
    add_provided_flag,
)

__all__ = [
    "OutputFormatter",
    "format_json",
    "add_config_flag",
    "add_duplicates_flag",
    "add_json_flag",
    "add_manifest_arg",
    "add_provided_flag",
]
