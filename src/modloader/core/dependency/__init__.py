"""Mod dependency resolution.

- ``ModInfo``: dependency description read from a mod's settings
- ``DependencyEntry``: mutable per-mod constraint set used while ordering
- ``DependencyResolver``: validation, on-demand pruning and deterministic ordering
"""
from __future__ import annotations

from .entry import DependencyEntry, strip_version, strip_versions
from .provider import (
    CONFLICTS_KEY,
    IMPORT_KEY,
    ONDEMAND_KEY,
    PRECEDES_KEY,
    REQUIRES_KEY,
    SUGGESTS_KEY,
    DependencyProvider,
    ModInfo,
    parse_bool,
    parse_list,
)
from .resolver import (
    DUPLICATE_MODES,
    DUPLICATES_ERROR,
    DUPLICATES_LAST_WINS,
    DependencyResolver,
    resolve_order,
)

__all__ = [
    "DependencyEntry",
    "strip_version",
    "strip_versions",
    "DependencyProvider",
    "ModInfo",
    "parse_bool",
    "parse_list",
    "REQUIRES_KEY",
    "CONFLICTS_KEY",
    "SUGGESTS_KEY",
    "PRECEDES_KEY",
    "ONDEMAND_KEY",
    "IMPORT_KEY",
    "DependencyResolver",
    "resolve_order",
    "DUPLICATE_MODES",
    "DUPLICATES_ERROR",
    "DUPLICATES_LAST_WINS",
]
