from __future__ import annotations

from typing import Iterable, List, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from .provider import DependencyProvider


def strip_version(name: str) -> str:
    """Return ``name`` without an ``@version`` suffix.

    >>> strip_version("modloader@0.24")
    'modloader'
    """
    return str(name).split("@", 1)[0].strip()


def strip_versions(names: Iterable[str]) -> List[str]:
    """Strip version suffixes from ``names``, dropping empty results."""
    out: List[str] = []
    for name in names or ():
        base = strip_version(name)
        if base:
            out.append(base)
    return out


class DependencyEntry:
    """Mutable constraint set of one mod while it is being ordered.

    ``before`` holds the names that must load earlier than this entry and
    ``after`` the names that must load later. Requirements are seeded into
    ``before`` so a required mod is always loaded first.
    """

    __slots__ = ("name", "requires", "conflicts", "before", "after", "on_demand")

    def __init__(self, provider: "DependencyProvider") -> None:
        self.name: str = strip_version(provider.name)
        self.requires: Set[str] = set(strip_versions(provider.requires))
        self.conflicts: Set[str] = set(strip_versions(provider.conflicts))

        self.before: Set[str] = set(self.requires)
        self.before.update(strip_versions(provider.before))
        self.after: Set[str] = set(strip_versions(provider.after))

        self.on_demand: bool = bool(provider.on_demand)

    def add_before(self, name: str) -> None:
        self.before.add(name.strip())

    def add_after(self, name: str) -> None:
        self.after.add(name.strip())

    def discard(self, name: str) -> None:
        """Forget every ordering edge towards ``name``."""
        self.before.discard(name)
        self.after.discard(name)

    def __repr__(self) -> str:
        return (
            f"DependencyEntry(name={self.name!r}, before={sorted(self.before)!r}, "
            f"after={sorted(self.after)!r}, on_demand={self.on_demand!r})"
        )

    def __str__(self) -> str:
        return self.name


__all__ = ["DependencyEntry", "strip_version", "strip_versions"]
