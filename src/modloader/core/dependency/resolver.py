"""Load order resolution for mods.

The resolver turns a set of mod descriptors into one deterministic load order:

1. build one :class:`DependencyEntry` per descriptor (version-stripped names)
2. check that every requirement is loaded or provided
3. check that no conflict is loaded or provided
4. drop ordering hints towards mods that are not installed
5. drop self references
6. make ``before``/``after`` mirror each other
7. prune on-demand mods nobody needs (repeated until nothing changes)
8. emit entries whose ``before`` set is empty, smallest name first (Kahn)

Provided names are virtual: they satisfy requirements and trigger conflicts
but take no part in ordering.
"""
from __future__ import annotations

import heapq
import logging
from typing import Dict, Generic, Iterable, List, Sequence, Set, Tuple, TypeVar

from modloader.core.exceptions import (
    ConflictDetectedError,
    DuplicateNameError,
    UnresolvedOrderError,
    UnresolvedRequirementError,
)

from .entry import DependencyEntry, strip_versions
from .provider import DependencyProvider

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=DependencyProvider)

DUPLICATES_ERROR = "error"
DUPLICATES_LAST_WINS = "last-wins"
DUPLICATE_MODES = (DUPLICATES_ERROR, DUPLICATES_LAST_WINS)


class DependencyResolver(Generic[T]):
    """Order mods according to their declared dependencies.

    Usage:
        resolver = DependencyResolver().provided(["modloader@0.24"])
        ordered = resolver.order(mods)

    The resolver keeps no state between :meth:`order` calls apart from the
    configured provided names.
    """

    def __init__(self, *, duplicates: str = DUPLICATES_ERROR) -> None:
        if duplicates not in DUPLICATE_MODES:
            raise ValueError(
                f"Unknown duplicates mode {duplicates!r}; expected one of {', '.join(DUPLICATE_MODES)}"
            )
        self.duplicates = duplicates
        self._provided: Set[str] = set()

    @property
    def provided_names(self) -> Set[str]:
        return set(self._provided)

    def provided(self, names: Iterable[str]) -> "DependencyResolver[T]":
        """Add virtual names that satisfy requirements and conflicts.

        Version suffixes are ignored, so ``modloader@0.24`` provides ``modloader``.
        """
        self._provided.update(strip_versions(names))
        return self

    def order(self, mods: Sequence[T]) -> List[T]:
        """Return ``mods`` in load order, without pruned on-demand mods.

        Raises:
            DuplicateNameError: two mods share a name (``duplicates="error"``)
            UnresolvedRequirementError: a requirement is neither loaded nor provided
            ConflictDetectedError: a conflicting name is loaded or provided
            UnresolvedOrderError: the remaining mods contain a cycle
        """
        by_name, entries = self._build(mods)
        self._prepare(entries)
        ordered = self._resolve_order(entries)
        result = [by_name[entry.name] for entry in ordered]
        logger.info("Resolved load order: %s", ", ".join(e.name for e in ordered) or "<empty>")
        return result

    def graph(self, mods: Sequence[T]) -> Dict[str, DependencyEntry]:
        """Return the validated, symmetrized and pruned entries without ordering them."""
        _, entries = self._build(mods)
        self._prepare(entries)
        return entries

    def _build(self, mods: Sequence[T]) -> Tuple[Dict[str, T], Dict[str, DependencyEntry]]:
        by_name: Dict[str, T] = {}
        entries: Dict[str, DependencyEntry] = {}
        for mod in mods:
            entry = DependencyEntry(mod)
            if entry.name in entries:
                if self.duplicates == DUPLICATES_ERROR:
                    raise DuplicateNameError(entry.name)
                logger.warning("Duplicate mod name %s, the last definition wins", entry.name)
            by_name[entry.name] = mod
            entries[entry.name] = entry
        return by_name, entries

    def _prepare(self, entries: Dict[str, DependencyEntry]) -> None:
        self._check_requires(entries)
        self._check_conflicts(entries)
        self._remove_missing(entries)
        self._remove_self_references(entries)
        self._resolve_after(entries)
        self._resolve_before(entries)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Constraint graph: %s", ", ".join(repr(e) for e in entries.values()))

        pruned: List[str] = []
        while True:
            removed = self._prune_on_demand(entries)
            if not removed:
                break
            pruned.extend(removed)
        if pruned:
            logger.debug("Pruned on-demand mods: %s", ", ".join(sorted(pruned)))

    def _check_requires(self, entries: Dict[str, DependencyEntry]) -> None:
        for entry in entries.values():
            for required in sorted(entry.requires):
                if required not in entries and required not in self._provided:
                    raise UnresolvedRequirementError(entry.name, required)

    def _check_conflicts(self, entries: Dict[str, DependencyEntry]) -> None:
        for entry in entries.values():
            for conflict in sorted(entry.conflicts):
                if conflict in entries or conflict in self._provided:
                    raise ConflictDetectedError(entry.name, conflict)

    @staticmethod
    def _remove_missing(entries: Dict[str, DependencyEntry]) -> None:
        # Soft hints may name mods that are not installed.
        for entry in entries.values():
            entry.before.intersection_update(entries.keys())
            entry.after.intersection_update(entries.keys())

    @staticmethod
    def _remove_self_references(entries: Dict[str, DependencyEntry]) -> None:
        for entry in entries.values():
            entry.discard(entry.name)

    @staticmethod
    def _resolve_after(entries: Dict[str, DependencyEntry]) -> None:
        for entry in entries.values():
            for name in entry.after:
                entries[name].add_before(entry.name)

    @staticmethod
    def _resolve_before(entries: Dict[str, DependencyEntry]) -> None:
        for entry in entries.values():
            for name in entry.before:
                entries[name].add_after(entry.name)

    @staticmethod
    def _prune_on_demand(entries: Dict[str, DependencyEntry]) -> List[str]:
        removable = [e.name for e in entries.values() if e.on_demand and not e.after]
        for name in removable:
            del entries[name]
        for entry in entries.values():
            for name in removable:
                entry.discard(name)
        return removable

    @staticmethod
    def _resolve_order(entries: Dict[str, DependencyEntry]) -> List[DependencyEntry]:
        ready: List[str] = [name for name, entry in entries.items() if not entry.before]
        heapq.heapify(ready)
        blocked: Set[str] = {name for name, entry in entries.items() if entry.before}

        order: List[DependencyEntry] = []
        while ready:
            name = heapq.heappop(ready)
            entry = entries[name]
            for successor in sorted(entry.after):
                target = entries[successor]
                target.before.discard(name)
                if not target.before and successor in blocked:
                    blocked.remove(successor)
                    heapq.heappush(ready, successor)
            order.append(entry)

        if blocked:
            raise UnresolvedOrderError(blocked)
        return order


def resolve_order(
    mods: Sequence[T],
    provided: Iterable[str] = (),
    *,
    duplicates: str = DUPLICATES_ERROR,
) -> List[T]:
    """Convenience wrapper: ``DependencyResolver(...).provided(provided).order(mods)``."""
    return DependencyResolver(duplicates=duplicates).provided(provided).order(mods)


__all__ = [
    "DependencyResolver",
    "resolve_order",
    "DUPLICATES_ERROR",
    "DUPLICATES_LAST_WINS",
    "DUPLICATE_MODES",
]
