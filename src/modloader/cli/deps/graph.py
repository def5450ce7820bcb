"""
modloader deps graph command.

SUMMARY: Show normalized ordering constraints of a manifest
"""
from __future__ import annotations

import argparse
from typing import Any, Dict

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

SUMMARY = "Show normalized ordering constraints of a manifest"


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
        entries = resolver.graph(mods)
    except ModLoaderError as exc:
        formatter.error(exc)
        return 1

    payload: Dict[str, Any] = {}
    for name in sorted(entries):
        entry = entries[name]
        payload[name] = {
            "before": sorted(entry.before),
            "after": sorted(entry.after),
            "onDemand": entry.on_demand,
        }

    if formatter.json_mode:
        formatter.success({"entries": payload}, "")
        return 0

    for name, item in payload.items():
        flag = " (on demand)" if item["onDemand"] else ""
        formatter.text(f"{name}{flag}")
        formatter.text(f"  before: {', '.join(item['before']) or '-'}")
        formatter.text(f"  after: {', '.join(item['after']) or '-'}")
    return 0
