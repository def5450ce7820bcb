"""Top level entry point tying configuration, ordering and the lifecycle together."""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from modloader import __version__
from modloader.core.config import LoaderConfig
from modloader.core.dependency import DependencyResolver
from modloader.core.lifecycle import (
    HostHooks,
    LifecycleOrchestrator,
    ModEntry,
    ModuleImportProbe,
    PhaseTracker,
    SideEffectProbe,
)

logger = logging.getLogger(__name__)

HOST_VERSION_KEY = "host_version"


class ModLoader:
    """Order a set of registered mods and drive them through the lifecycle.

    Args:
        config: Effective loader configuration.
        hooks: Host callbacks; no-ops when omitted.
        tracker: Phase tracker shared with the caller. When omitted every
            :meth:`load` builds its own, watching ``config.import_probe_prefixes``
            if any are set, and keeps it as ``last_tracker``.
    """

    def __init__(
        self,
        config: Optional[LoaderConfig] = None,
        hooks: Optional[HostHooks] = None,
        tracker: Optional[PhaseTracker] = None,
    ) -> None:
        self.config = config or LoaderConfig()
        self.hooks = hooks or HostHooks()
        self.tracker = tracker
        self.last_tracker: Optional[PhaseTracker] = None

    def new_tracker(self) -> PhaseTracker:
        probes: List[SideEffectProbe] = []
        if self.config.import_probe_prefixes:
            probes.append(ModuleImportProbe(self.config.import_probe_prefixes))
        return PhaseTracker(probes=probes)

    def provided_names(self) -> List[str]:
        names = [f"modloader@{__version__}"]
        if self.config.host_name:
            if self.config.host_version:
                names.append(f"{self.config.host_name}@{self.config.host_version}")
            else:
                names.append(self.config.host_name)
        names.extend(self.config.provided)
        return names

    def resolver(self) -> DependencyResolver[ModEntry]:
        return DependencyResolver(duplicates=self.config.duplicates).provided(self.provided_names())

    def load(self, entries: Sequence[ModEntry]) -> List[Any]:
        """Resolve the load order of ``entries`` and run every lifecycle phase.

        Ordering errors surface before any mod code runs. Errors raised by mods
        or host hooks propagate unchanged.
        """
        logger.info("ModLoader version %s", __version__)
        if self.config.host_version:
            for entry in entries:
                entry.settings[HOST_VERSION_KEY] = self.config.host_version

        ordered = self.resolver().order(list(entries))
        tracker = self.tracker if self.tracker is not None else self.new_tracker()
        self.last_tracker = tracker
        orchestrator = LifecycleOrchestrator(self.hooks, tracker)
        return orchestrator.run(ordered)


__all__ = ["ModLoader", "HOST_VERSION_KEY"]
