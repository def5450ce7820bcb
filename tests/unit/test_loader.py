from __future__ import annotations

import logging
from typing import List

import pytest

from modloader import __version__
from modloader.core.config import LoaderConfig
from modloader.core.dependency import ModInfo
from modloader.core.exceptions import UnresolvedRequirementError
from modloader.core.lifecycle import HostHooks, ModEntry, ModuleImportProbe, PhaseTracker
from modloader.core.loader import HOST_VERSION_KEY, ModLoader


class Recording:
    def __init__(self, name: str, log: List[str]) -> None:
        self.name = name
        self.log = log
        self.settings = None

    def configure(self, settings) -> None:
        self.settings = dict(settings)
        self.log.append(f"{self.name}.configure")

    def init(self) -> None:
        self.log.append(f"{self.name}.init")


def entry(name: str, mod, **settings) -> ModEntry:
    return ModEntry.register(ModInfo.from_settings(name, settings), mod)


def test_provided_names_include_loader_and_host() -> None:
    cfg = LoaderConfig(provided=("extra@1",), host_name="game", host_version="1.7")
    assert ModLoader(cfg).provided_names() == [f"modloader@{__version__}", "game@1.7", "extra@1"]


def test_provided_names_without_host() -> None:
    assert ModLoader().provided_names() == [f"modloader@{__version__}"]


def test_load_orders_then_runs_lifecycle() -> None:
    log: List[str] = []
    a = Recording("a", log)
    b = Recording("b", log)
    mods = [entry("a", a, **{"depend.requires": "b,modloader"}), entry("b", b)]

    result = ModLoader().load(mods)

    assert result == [b, a]
    assert log == ["b.configure", "a.configure", "b.init", "a.init"]


def test_load_injects_host_version() -> None:
    log: List[str] = []
    mod = Recording("a", log)
    ModLoader(LoaderConfig(host_name="game", host_version="1.7")).load([entry("a", mod)])
    assert mod.settings[HOST_VERSION_KEY] == "1.7"


def test_host_version_reaches_mods_as_written() -> None:
    from modloader.core.config import load_config

    cfg = load_config(environ={"MODLOADER_HOST__NAME": "game", "MODLOADER_HOST__VERSION": "1.10"})
    mod = Recording("a", [])
    loader = ModLoader(cfg)
    loader.load([entry("a", mod)])
    assert "game@1.10" in loader.provided_names()
    assert mod.settings[HOST_VERSION_KEY] == "1.10"


def test_requirement_on_host_name_is_satisfied() -> None:
    mods = [entry("a", None, **{"depend.requires": "game"})]
    assert ModLoader(LoaderConfig(host_name="game")).load(mods) == [None]


def test_resolution_error_runs_no_mod_code() -> None:
    calls: List[str] = []
    hooks = HostHooks(host_init=lambda: calls.append("host"))
    log: List[str] = []
    mods = [entry("a", Recording("a", log), **{"depend.requires": "missing"})]

    with pytest.raises(UnresolvedRequirementError):
        ModLoader(hooks=hooks).load(mods)

    assert calls == []
    assert log == []


def test_duplicates_follow_configuration() -> None:
    first, second = entry("a", "first"), entry("a", "second")
    result = ModLoader(LoaderConfig(duplicates="last-wins")).load([first, second])
    assert result == ["second"]


def test_import_probe_is_built_from_config() -> None:
    tracker = ModLoader(LoaderConfig(import_probe_prefixes=("game",))).new_tracker()
    assert len(tracker.probes) == 1
    assert isinstance(tracker.probes[0], ModuleImportProbe)
    assert ModLoader().new_tracker().probes == []


def test_each_load_gets_a_fresh_tracker() -> None:
    loader = ModLoader()
    loader.load([entry("a", Recording("a", []))])
    first = loader.last_tracker
    loader.load([entry("a", Recording("a", []))])
    second = loader.last_tracker

    assert first is not second
    assert [(r.mod, r.phase) for r in second.records].count(("a", "init")) == 1
    assert loader.tracker is None


def test_explicit_tracker_is_used() -> None:
    tracker = PhaseTracker()
    loader = ModLoader(tracker=tracker)
    loader.load([entry("a", Recording("a", []))])
    assert loader.last_tracker is tracker
    assert ("a", "init") in [(r.mod, r.phase) for r in tracker.records]


def test_version_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="modloader"):
        ModLoader().load([])
    assert f"ModLoader version {__version__}" in caplog.text
