"""Staged lifecycle driver.

Phases run strictly in this order, each one across every mod before the next
begins:

1. configure         - mods with pre-init or init that can be configured
2. host-init         - host hook, once
3. preinit           - mods with pre-init
4. host-preinit      - host hook, once
5. init              - mods with init
6. host-postinit     - host hook, once
7. legacy-configure  - configurable mods with neither pre-init nor init
8. modListener       - every listener is told about every activated mod

A failure in any call aborts the whole load; nothing is retried or skipped.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

from .capabilities import HostHooks, ModEntry
from .tracking import PhaseTracker

logger = logging.getLogger(__name__)

HOST = "host"


class Phase(str, Enum):
    CONFIGURE = "configure"
    HOST_INIT = "host-init"
    PRE_INIT = "preinit"
    HOST_PRE_INIT = "host-preinit"
    INIT = "init"
    HOST_POST_INIT = "host-postinit"
    LEGACY_CONFIGURE = "legacy-configure"
    LISTENER = "modListener"


class LifecycleOrchestrator:
    def __init__(self, hooks: Optional[HostHooks] = None, tracker: Optional[PhaseTracker] = None) -> None:
        self.hooks = hooks or HostHooks()
        self.tracker = tracker or PhaseTracker()

    def run(self, mods: Sequence[ModEntry]) -> List[Any]:
        """Drive ``mods`` (already in load order) through every phase.

        Returns:
            The mod objects in activation order.
        """
        mods = list(mods)
        logger.debug("Starting lifecycle for %d mods", len(mods))

        for entry in mods:
            if entry.is_new_style and entry.configure is not None:
                self._call(entry.name, Phase.CONFIGURE, entry.configure, entry.settings)

        self._call(HOST, Phase.HOST_INIT, self.hooks.host_init)

        for entry in mods:
            if entry.pre_init is not None:
                self._call(entry.name, Phase.PRE_INIT, entry.pre_init)

        self._call(HOST, Phase.HOST_PRE_INIT, self.hooks.pre_init)

        for entry in mods:
            if entry.init is not None:
                self._call(entry.name, Phase.INIT, entry.init)

        self._call(HOST, Phase.HOST_POST_INIT, self.hooks.init)

        for entry in mods:
            if not entry.is_new_style and entry.configure is not None:
                self._call(entry.name, Phase.LEGACY_CONFIGURE, entry.configure, entry.settings)

        for entry in mods:
            logger.info("Loaded %s as %s (%s)", entry.type_name, entry.name, entry.version or "unversioned")

        for listener in mods:
            if listener.mod_initialized is None:
                continue
            notify = listener.mod_initialized
            with self.tracker.track(listener.name, Phase.LISTENER.value):
                for entry in mods:
                    notify(entry)

        return [entry.mod for entry in mods]

    def _call(self, mod: str, phase: Phase, fn: Callable[..., Any], *args: Any) -> None:
        logger.debug("Running %s for %s", phase.value, mod)
        with self.tracker.track(mod, phase.value):
            fn(*args)


def run_lifecycle(
    mods: Sequence[ModEntry],
    hooks: Optional[HostHooks] = None,
    tracker: Optional[PhaseTracker] = None,
) -> List[Any]:
    return LifecycleOrchestrator(hooks, tracker).run(mods)


__all__ = ["Phase", "LifecycleOrchestrator", "run_lifecycle", "HOST"]
