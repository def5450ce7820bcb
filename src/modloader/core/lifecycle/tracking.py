"""Attribution of lifecycle side effects to the mod and phase that caused them.

A :class:`PhaseTracker` wraps every lifecycle call. While a call runs the
tracker knows which mod and phase are executing; when it finishes, every
registered :class:`SideEffectProbe` is asked what it observed and each finding
is logged against that mod and phase.

Trackers and their probes are created by the caller and passed to the
orchestrator explicitly. One tracker belongs to one load.
"""
from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterable, Iterator, List, Optional, Protocol, Sequence, Set, Tuple

logger = logging.getLogger(__name__)


class SideEffectProbe(Protocol):
    """Observes one tracked call."""

    def start(self) -> None: ...

    def collect(self) -> Iterable[str]:
        """Return human readable findings since :meth:`start`."""
        ...


class ModuleImportProbe:
    """Report host modules imported for the first time during a phase.

    Mods should not pull in host modules while they are still being set up;
    ``prefixes`` names the host packages to watch.
    """

    def __init__(self, prefixes: Sequence[str]) -> None:
        self.prefixes: Tuple[str, ...] = tuple(p for p in prefixes if p)
        self._seen: Set[str] = set()

    def _matches(self, name: str) -> bool:
        return any(name == p or name.startswith(p + ".") for p in self.prefixes)

    def start(self) -> None:
        self._seen = set(sys.modules)

    def collect(self) -> List[str]:
        if not self.prefixes:
            return []
        fresh = sorted(n for n in set(sys.modules) - self._seen if self._matches(n))
        return [f"imported host module {name}" for name in fresh]


@dataclass(frozen=True)
class PhaseRecord:
    mod: str
    phase: str
    duration_ms: float
    findings: Tuple[str, ...] = ()
    failed: bool = False


@dataclass
class PhaseTracker:
    probes: List[SideEffectProbe] = field(default_factory=list)
    _records: List[PhaseRecord] = field(default_factory=list, init=False, repr=False)
    _current: Optional[Tuple[str, str]] = field(default=None, init=False, repr=False)

    @property
    def current(self) -> Optional[Tuple[str, str]]:
        """``(mod, phase)`` of the call in progress, if any."""
        return self._current

    @property
    def records(self) -> List[PhaseRecord]:
        return list(self._records)

    @contextmanager
    def track(self, mod: str, phase: str) -> Iterator[None]:
        """Attribute everything that happens inside the block to ``mod`` and ``phase``.

        Exceptions raised inside the block propagate unchanged.
        """
        previous = self._current
        self._current = (mod, phase)
        for probe in self.probes:
            probe.start()
        start = perf_counter()
        failed = True
        try:
            yield
            failed = False
        finally:
            duration_ms = (perf_counter() - start) * 1000.0
            findings: List[str] = []
            for probe in self.probes:
                findings.extend(probe.collect())
            for finding in findings:
                logger.warning("Mod %s %s during phase %s", mod, finding, phase)
            self._records.append(
                PhaseRecord(
                    mod=mod,
                    phase=phase,
                    duration_ms=duration_ms,
                    findings=tuple(findings),
                    failed=failed,
                )
            )
            self._current = previous


__all__ = ["SideEffectProbe", "ModuleImportProbe", "PhaseRecord", "PhaseTracker"]
