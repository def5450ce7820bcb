"""YAML manifests describing a mod set without loading any mod code.

Example::

    provided: [host@1.0]
    mods:
      alpha:
        depend.requires: beta
      beta:
        depend.ondemand: true
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from modloader.core.dependency.provider import ModInfo
from modloader.core.exceptions import ManifestError
from modloader.core.utils.io import read_yaml


@dataclass
class Manifest:
    mods: List[ModInfo] = field(default_factory=list)
    provided: List[str] = field(default_factory=list)


def parse_manifest(data: Any, *, source: str = "<manifest>") -> Manifest:
    """Build a :class:`Manifest` from already parsed YAML data."""
    if data is None:
        return Manifest()
    if not isinstance(data, Mapping):
        raise ManifestError(f"{source} must contain a mapping", context={"path": source})

    raw_provided = data.get("provided") or []
    if isinstance(raw_provided, str):
        raw_provided = [raw_provided]
    if not isinstance(raw_provided, list):
        raise ManifestError(f"{source}: 'provided' must be a list", context={"path": source})
    provided = [str(p).strip() for p in raw_provided if str(p).strip()]

    raw_mods = data.get("mods") or {}
    if not isinstance(raw_mods, Mapping):
        raise ManifestError(f"{source}: 'mods' must be a mapping of name to settings", context={"path": source})

    mods: List[ModInfo] = []
    for name, settings in raw_mods.items():
        if settings is None:
            settings = {}
        if not isinstance(settings, Mapping):
            raise ManifestError(
                f"{source}: settings of mod {name!r} must be a mapping",
                context={"path": source, "mod": str(name)},
            )
        normalized: Dict[str, Any] = {str(k): v for k, v in settings.items()}
        mods.append(ModInfo.from_settings(str(name), normalized))
    return Manifest(mods=mods, provided=provided)


def load_manifest(path: Path) -> Manifest:
    path = Path(path)
    try:
        data = read_yaml(path, default=None, raise_on_error=True)
    except FileNotFoundError as exc:
        raise ManifestError(str(exc), context={"path": str(path)}) from exc
    except (OSError, yaml.YAMLError) as exc:
        raise ManifestError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
    return parse_manifest(data, source=str(path))


__all__ = ["Manifest", "parse_manifest", "load_manifest"]
