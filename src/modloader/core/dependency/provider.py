from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

# Settings keys describing a mod's dependencies.
REQUIRES_KEY = "depend.requires"
CONFLICTS_KEY = "depend.conflicts"
SUGGESTS_KEY = "depend.suggests"
PRECEDES_KEY = "depend.precedes"
ONDEMAND_KEY = "depend.ondemand"
IMPORT_KEY = "depend.import"


@runtime_checkable
class DependencyProvider(Protocol):
    """Anything the resolver can order."""

    @property
    def name(self) -> str: ...

    @property
    def requires(self) -> Sequence[str]: ...

    @property
    def conflicts(self) -> Sequence[str]: ...

    @property
    def before(self) -> Sequence[str]:
        """Names that must be loaded before this one."""
        ...

    @property
    def after(self) -> Sequence[str]:
        """Names that must be loaded after this one."""
        ...

    @property
    def on_demand(self) -> bool:
        """Load only when another loaded mod still needs this one."""
        ...


def parse_list(value: Any) -> List[str]:
    """Normalize a comma separated string or a list into trimmed names.

    >>> parse_list("a, b,,c")
    ['a', 'b', 'c']
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = [str(v) for v in value]
    else:
        items = [str(value)]
    return [item.strip() for item in items if item and item.strip()]


def parse_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


@dataclass
class ModInfo:
    """Dependency description of one mod, read from its settings."""

    name: str
    settings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, name: str, settings: Optional[Mapping[str, Any]] = None) -> "ModInfo":
        return cls(name=str(name).strip(), settings=dict(settings or {}))

    @property
    def imports(self) -> List[str]:
        return parse_list(self.settings.get(IMPORT_KEY))

    @property
    def requires(self) -> List[str]:
        names = parse_list(self.settings.get(REQUIRES_KEY))
        names.extend(self.imports)
        return names

    @property
    def conflicts(self) -> List[str]:
        return parse_list(self.settings.get(CONFLICTS_KEY))

    @property
    def before(self) -> List[str]:
        return parse_list(self.settings.get(SUGGESTS_KEY))

    @property
    def after(self) -> List[str]:
        return parse_list(self.settings.get(PRECEDES_KEY))

    @property
    def on_demand(self) -> bool:
        return parse_bool(self.settings.get(ONDEMAND_KEY))

    @property
    def version(self) -> Optional[str]:
        raw = self.settings.get("version")
        if raw is None:
            return None
        text = str(raw).strip()
        return text or None


__all__ = [
    "DependencyProvider",
    "ModInfo",
    "parse_list",
    "parse_bool",
    "REQUIRES_KEY",
    "CONFLICTS_KEY",
    "SUGGESTS_KEY",
    "PRECEDES_KEY",
    "ONDEMAND_KEY",
    "IMPORT_KEY",
]
