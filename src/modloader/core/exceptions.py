from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping


class ModLoaderError(Exception):
    """Base exception for the mod loader."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class DependencyError(ModLoaderError):
    """Raised when a mod set cannot be ordered.

    No partial order is ever produced once this is raised.
    """


class UnresolvedRequirementError(DependencyError):
    """A mod requires a name that is neither loaded nor provided."""

    def __init__(self, mod: str, required: str) -> None:
        super().__init__(
            f"{mod} requires {required} which is unavailable",
            context={"mod": mod, "required": required},
        )
        self.mod = mod
        self.required = required


class ConflictDetectedError(DependencyError):
    """A mod conflicts with a name that is loaded or provided."""

    def __init__(self, mod: str, conflict: str) -> None:
        super().__init__(
            f"{mod} conflicts with {conflict}",
            context={"mod": mod, "conflict": conflict},
        )
        self.mod = mod
        self.conflict = conflict


class UnresolvedOrderError(DependencyError):
    """The remaining mods form at least one cycle."""

    def __init__(self, elements: Iterable[str]) -> None:
        names: List[str] = sorted(elements)
        super().__init__(
            "Unresolved order for the following elements: " + ", ".join(names),
            context={"elements": names},
        )
        self.elements = names


class DuplicateNameError(DependencyError):
    """Two descriptors share the same version-stripped name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate mod name: {name}", context={"name": name})
        self.name = name


class ConfigError(ModLoaderError, ValueError):
    """Raised when loader configuration is missing or invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModLoaderError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ManifestError(ModLoaderError, ValueError):
    """Raised when a mod manifest cannot be read or is malformed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModLoaderError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "ModLoaderError",
    "DependencyError",
    "UnresolvedRequirementError",
    "ConflictDetectedError",
    "UnresolvedOrderError",
    "DuplicateNameError",
    "ConfigError",
    "ManifestError",
]
