"""Mod lifecycle: capabilities, phase tracking and the phase driver."""
from __future__ import annotations

from .capabilities import HostHooks, ModEntry
from .orchestrator import HOST, LifecycleOrchestrator, Phase, run_lifecycle
from .tracking import ModuleImportProbe, PhaseRecord, PhaseTracker, SideEffectProbe

__all__ = [
    "HostHooks",
    "ModEntry",
    "HOST",
    "LifecycleOrchestrator",
    "Phase",
    "run_lifecycle",
    "ModuleImportProbe",
    "PhaseRecord",
    "PhaseTracker",
    "SideEffectProbe",
]
