"""Shared helpers for the mod loader core."""
from __future__ import annotations

from .io import read_yaml
from .merge import deep_merge

__all__ = ["read_yaml", "deep_merge"]
