"""Helpers shared by the deps commands."""
from __future__ import annotations

import argparse
import dataclasses
from pathlib import Path
from typing import List, Optional, Tuple

from modloader.core.config import LoaderConfig, load_config
from modloader.core.dependency import DependencyResolver, ModInfo
from modloader.core.loader import ModLoader
from modloader.core.manifest import load_manifest


def parse_names(raw: Optional[List[str]]) -> List[str]:
    names: List[str] = []
    for item in raw or []:
        for part in str(item).split(","):
            p = part.strip()
            if p:
                names.append(p)
    return names


def effective_config(args: argparse.Namespace) -> LoaderConfig:
    config_path = getattr(args, "config", None)
    cfg = load_config(Path(config_path) if config_path else None)
    duplicates = getattr(args, "duplicates", None)
    if duplicates:
        cfg = dataclasses.replace(cfg, duplicates=duplicates)
    return cfg


def prepare(args: argparse.Namespace) -> Tuple[List[ModInfo], DependencyResolver[ModInfo]]:
    """Read the manifest named by ``args`` and build a resolver for it.

    The resolver provides everything a real load would provide, plus the
    manifest's and the command line's extra names.
    """
    cfg = effective_config(args)
    manifest = load_manifest(Path(args.manifest))
    resolver: DependencyResolver[ModInfo] = DependencyResolver(duplicates=cfg.duplicates)
    resolver.provided(ModLoader(cfg).provided_names())
    resolver.provided(manifest.provided)
    resolver.provided(parse_names(getattr(args, "provided", None)))
    return manifest.mods, resolver
