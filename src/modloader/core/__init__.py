"""Core building blocks: dependency ordering, lifecycle, configuration."""
from __future__ import annotations

from .exceptions import (
    ConfigError,
    ConflictDetectedError,
    DependencyError,
    DuplicateNameError,
    ManifestError,
    ModLoaderError,
    UnresolvedOrderError,
    UnresolvedRequirementError,
)

__all__ = [
    "ConfigError",
    "ConflictDetectedError",
    "DependencyError",
    "DuplicateNameError",
    "ManifestError",
    "ModLoaderError",
    "UnresolvedOrderError",
    "UnresolvedRequirementError",
]
