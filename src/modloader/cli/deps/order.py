"""
modloader deps order command.

SUMMARY: Print the load order of a manifest
"""
from __future__ import annotations

import argparse

from modloader.cli import (
    OutputFormatter,
    add_config_flag,
    add_duplicates_flag,
    add_json_flag,
    add_manifest_arg,
    add_provided_flag,
)
from modloader.core.exceptions import ModLoaderError

from ._shared import prepare

SUMMARY = "Print the load order of a manifest"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_manifest_arg(parser)
    add_provided_flag(parser)
    add_duplicates_flag(parser)
    add_config_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        mods, resolver = prepare(args)
        ordered = resolver.order(mods)
    except ModLoaderError as exc:
        formatter.error(exc)
        return 1

    names = [mod.name for mod in ordered]
    pruned = sorted({mod.name for mod in mods} - set(names))
    formatter.success(
        {"order": names, "pruned": pruned, "provided": sorted(resolver.provided_names)},
        "\n".join(names),
    )
    return 0
