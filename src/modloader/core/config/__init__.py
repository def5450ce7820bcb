"""Loader configuration: bundled defaults, YAML overrides and MODLOADER_* environment variables."""
from __future__ import annotations

from .manager import ENV_PREFIX, SECTION, ConfigManager, LoaderConfig, load_config

__all__ = ["ConfigManager", "LoaderConfig", "load_config", "ENV_PREFIX", "SECTION"]
