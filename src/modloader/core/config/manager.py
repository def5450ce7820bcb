"""
Modloader configuration management (YAML layers plus environment overrides).
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from modloader.core.exceptions import ConfigError
from modloader.core.utils.io import read_yaml
from modloader.core.utils.merge import deep_merge
from modloader.data import read_yaml as read_data_yaml

logger = logging.getLogger(__name__)

SECTION = "modloader"
ENV_PREFIX = "MODLOADER_"

# Paths whose environment values are taken verbatim (``1.10`` must not become ``1.1``).
VERBATIM_PATHS = {("host", "name"), ("host", "version")}


@dataclass(frozen=True)
class LoaderConfig:
    """Validated loader settings."""

    provided: Tuple[str, ...] = ()
    duplicates: str = "error"
    host_name: Optional[str] = None
    host_version: Optional[str] = None
    log_level: str = "INFO"
    import_probe_prefixes: Tuple[str, ...] = ()

    @classmethod
    def from_section(cls, section: Mapping[str, Any]) -> "LoaderConfig":
        host = section.get("host") or {}
        logging_cfg = section.get("logging") or {}
        probes = section.get("probes") or {}
        version = host.get("version")
        return cls(
            provided=tuple(str(p) for p in section.get("provided") or ()),
            duplicates=str(section.get("duplicates", "error")),
            host_name=host.get("name") or None,
            host_version=str(version) if version is not None else None,
            log_level=str(logging_cfg.get("level", "INFO")),
            import_probe_prefixes=tuple(str(p) for p in probes.get("importPrefixes") or ()),
        )


class ConfigManager:
    """Load, merge, and validate loader configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: MODLOADER_* (``__`` separates nested keys)
    2. An optional YAML file passed to :meth:`load`
    3. Bundled defaults: modloader.data/config/defaults.yaml

    Every source is rooted at the top-level ``modloader`` key.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self.environ = os.environ if environ is None else environ

    def load(self, path: Optional[Path] = None) -> LoaderConfig:
        section = self.load_section(path)
        self.validate(section)
        return LoaderConfig.from_section(section)

    def load_section(self, path: Optional[Path] = None) -> Dict[str, Any]:
        defaults = copy.deepcopy(read_data_yaml("config", "defaults.yaml"))
        cfg: Dict[str, Any] = dict(defaults.get(SECTION) or {})

        if path is not None:
            try:
                # Fail closed: configuration must never silently ignore invalid YAML.
                data = read_yaml(Path(path), default={}, raise_on_error=True)
            except FileNotFoundError as exc:
                raise ConfigError(str(exc), context={"path": str(path)}) from exc
            except (OSError, yaml.YAMLError) as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
            if not isinstance(data, dict):
                raise ConfigError(f"{path} must contain a mapping", context={"path": str(path)})
            cfg = deep_merge(cfg, data.get(SECTION) or {})
            logger.debug("Loaded loader config from %s", path)

        self.apply_env_overrides(cfg)
        level = (cfg.get("logging") or {}).get("level")
        if isinstance(level, str):
            cfg["logging"]["level"] = level.upper()
        return cfg

    def validate(self, section: Dict[str, Any]) -> None:
        schema = read_data_yaml("schemas", "config.schema.yaml")
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(section), key=lambda e: list(e.path))
        if errors:
            issues: List[str] = []
            for err in errors:
                where = "/".join(str(p) for p in err.path) or "<root>"
                issues.append(f"{where}: {err.message}")
            raise ConfigError(
                "Invalid modloader configuration:\n  - " + "\n  - ".join(issues),
                context={"issues": issues},
            )

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("[") and s.endswith("]")) or (s.startswith("{") and s.endswith("}")):
            try:
                return json.loads(s)
            except ValueError:
                return s
        return s

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], str]]:
        for key in sorted(self.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            segs = raw.split("__")
            if not raw or any(seg == "" for seg in segs):
                raise ConfigError(f"Malformed {ENV_PREFIX}* key: {key!r}", context={"key": key})
            yield segs, self.environ[key]

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for i, part in enumerate(path):
            # Match existing keys case-insensitively so importPrefixes can be set as IMPORTPREFIXES.
            key_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = key_candidates.get(part.lower(), part)
            if i == len(path) - 1:
                cur[key] = value
                return
            nxt = cur.get(key)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[key] = nxt
            cur = nxt

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, raw in self._iter_env_overrides():
            key = tuple(p.lower() for p in path)
            value = raw if key in VERBATIM_PATHS else self._coerce_type(raw)
            logger.debug("Applying environment override %s", "__".join(path))
            self._set_nested(cfg, path, value)


def load_config(path: Optional[Path] = None, *, environ: Optional[Mapping[str, str]] = None) -> LoaderConfig:
    """Load the effective :class:`LoaderConfig`."""
    return ConfigManager(environ=environ).load(path)


__all__ = ["LoaderConfig", "ConfigManager", "load_config", "SECTION", "ENV_PREFIX"]
