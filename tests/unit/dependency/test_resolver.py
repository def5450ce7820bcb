from __future__ import annotations

import itertools
import logging
from typing import Any, List

import pytest

from modloader.core.dependency import DependencyResolver, ModInfo, resolve_order
from modloader.core.exceptions import (
    ConflictDetectedError,
    DependencyError,
    DuplicateNameError,
    UnresolvedOrderError,
    UnresolvedRequirementError,
)


def mod(name: str, **settings: Any) -> ModInfo:
    """Build a ModInfo from short keyword names.

    ``before`` lists mods that load earlier (``depend.suggests``), ``after``
    mods that load later (``depend.precedes``).
    """
    keys = {
        "requires": "depend.requires",
        "conflicts": "depend.conflicts",
        "before": "depend.suggests",
        "after": "depend.precedes",
        "ondemand": "depend.ondemand",
        "imports": "depend.import",
    }
    return ModInfo.from_settings(name, {keys.get(k, k): v for k, v in settings.items()})


def names(mods: List[ModInfo]) -> List[str]:
    return [m.name for m in mods]


def order(*mods: ModInfo, provided=()) -> List[str]:
    return names(resolve_order(list(mods), provided))


class TestOrdering:
    def test_independent_mods_load_alphabetically(self) -> None:
        assert order(mod("C"), mod("A"), mod("B")) == ["A", "B", "C"]

    def test_before_hint_loads_named_mod_first(self) -> None:
        assert order(mod("C"), mod("A"), mod("B", before="C")) == ["A", "C", "B"]

    def test_after_hint_loads_named_mod_later(self) -> None:
        assert order(mod("C"), mod("A"), mod("B", after="A")) == ["B", "A", "C"]

    def test_requirement_loads_first(self) -> None:
        assert order(mod("C"), mod("A", requires="B"), mod("B")) == ["B", "A", "C"]

    def test_versioned_requirement_matches_plain_name(self) -> None:
        assert order(mod("C"), mod("A", requires="B@1.0"), mod("B")) == ["B", "A", "C"]

    def test_import_counts_as_requirement(self) -> None:
        assert order(mod("A", imports="B"), mod("B")) == ["B", "A"]

    def test_list_values_are_accepted(self) -> None:
        assert order(mod("A", requires=["B", "C"]), mod("B"), mod("C")) == ["B", "C", "A"]

    def test_result_does_not_depend_on_input_order(self) -> None:
        mods = [mod("A", requires="C"), mod("B"), mod("C", before="B"), mod("D", after="A")]
        expected = order(*mods)
        for perm in itertools.permutations(mods):
            assert order(*perm) == expected

    def test_every_constraint_is_honoured(self) -> None:
        mods = [
            mod("core"),
            mod("ui", requires="core", after="theme"),
            mod("theme", requires="core"),
            mod("extras", before="ui,theme"),
        ]
        result = order(*mods)
        pos = {n: i for i, n in enumerate(result)}
        assert pos["core"] < pos["ui"]
        assert pos["core"] < pos["theme"]
        assert pos["ui"] < pos["theme"]
        assert pos["ui"] < pos["extras"]
        assert pos["theme"] < pos["extras"]

    def test_hints_to_missing_mods_are_ignored(self) -> None:
        assert order(mod("B", before="ghost"), mod("A", after="phantom")) == ["A", "B"]

    def test_self_references_are_ignored(self) -> None:
        assert order(mod("A", before="A", after="A"), mod("B")) == ["A", "B"]

    def test_empty_input(self) -> None:
        assert order() == []


class TestCycles:
    def test_three_way_cycle_names_every_member(self) -> None:
        mods = [mod("C", before="B"), mod("A", before="C"), mod("B", before="A")]
        with pytest.raises(UnresolvedOrderError) as excinfo:
            resolve_order(mods)
        assert str(excinfo.value) == "Unresolved order for the following elements: A, B, C"
        assert excinfo.value.elements == ["A", "B", "C"]

    def test_cycle_names_only_blocked_mods(self) -> None:
        mods = [mod("C"), mod("A", before="B"), mod("B", before="A")]
        with pytest.raises(UnresolvedOrderError, match=r"elements: A, B$"):
            resolve_order(mods)

    def test_after_cycle_is_detected(self) -> None:
        mods = [mod("C"), mod("A", after="B"), mod("B", after="A")]
        with pytest.raises(UnresolvedOrderError, match=r"elements: A, B$"):
            resolve_order(mods)

    def test_mod_both_before_and_after_another_is_blocked(self) -> None:
        mods = [mod("C"), mod("A", before="B", after="B"), mod("B")]
        with pytest.raises(UnresolvedOrderError) as excinfo:
            resolve_order(mods)
        assert str(excinfo.value) == "Unresolved order for the following elements: A, B"

    def test_three_way_after_cycle(self) -> None:
        mods = [mod("C", after="A"), mod("A", after="B"), mod("B", after="C")]
        with pytest.raises(UnresolvedOrderError) as excinfo:
            resolve_order(mods)
        assert str(excinfo.value) == "Unresolved order for the following elements: A, B, C"

    def test_mutual_requirement_is_a_cycle(self) -> None:
        with pytest.raises(UnresolvedOrderError):
            resolve_order([mod("A", requires="B"), mod("B", requires="A")])


class TestValidation:
    def test_missing_requirement(self) -> None:
        mods = [mod("C"), mod("A", requires="E"), mod("B")]
        with pytest.raises(UnresolvedRequirementError) as excinfo:
            resolve_order(mods)
        assert str(excinfo.value) == "A requires E which is unavailable"
        assert excinfo.value.mod == "A"
        assert excinfo.value.required == "E"

    def test_conflict_with_loaded_mod(self) -> None:
        mods = [mod("C"), mod("A", conflicts="B"), mod("B")]
        with pytest.raises(ConflictDetectedError) as excinfo:
            resolve_order(mods)
        assert str(excinfo.value) == "A conflicts with B"

    def test_conflict_with_provided_name(self) -> None:
        with pytest.raises(ConflictDetectedError, match="A conflicts with host"):
            resolve_order([mod("A", conflicts="host")], provided=["host@2.1"])

    def test_conflict_with_absent_mod_is_fine(self) -> None:
        assert order(mod("A", conflicts="ghost")) == ["A"]

    def test_requirement_satisfied_by_provided_name(self) -> None:
        mods = [mod("C"), mod("A", requires="modloader"), mod("B")]
        assert order(*mods, provided=["modloader@0.24"]) == ["A", "B", "C"]

    def test_errors_share_a_base_class(self) -> None:
        with pytest.raises(DependencyError):
            resolve_order([mod("A", requires="missing")])

    def test_error_payload(self) -> None:
        with pytest.raises(UnresolvedRequirementError) as excinfo:
            resolve_order([mod("A", requires="missing")])
        payload = excinfo.value.to_json_error()
        assert payload["code"] == "UnresolvedRequirementError"
        assert payload["context"] == {"mod": "A", "required": "missing"}


class TestOnDemand:
    def test_unneeded_on_demand_mod_is_pruned(self) -> None:
        mods = [mod("A", ondemand="true", requires="B"), mod("B", ondemand=True), mod("C", requires="B")]
        assert order(*mods) == ["B", "C"]

    def test_pruning_cascades(self) -> None:
        mods = [
            mod("A", ondemand=True, requires="B"),
            mod("B", ondemand=True, requires="D"),
            mod("D", ondemand=True),
            mod("C"),
        ]
        assert order(*mods) == ["C"]

    def test_on_demand_flag_is_case_insensitive(self) -> None:
        assert order(mod("A", ondemand="TRUE"), mod("B")) == ["B"]

    def test_ordering_hint_does_not_keep_on_demand_mod(self) -> None:
        # Only dependents (mods that must load after it) keep an on-demand mod alive.
        assert order(mod("A", ondemand=True, before="B"), mod("B")) == ["B"]

    def test_on_demand_mod_kept_by_after_hint_of_dependent(self) -> None:
        assert order(mod("A", ondemand=True, after="B"), mod("B")) == ["A", "B"]


class TestDuplicates:
    def test_duplicate_names_are_rejected(self) -> None:
        with pytest.raises(DuplicateNameError, match="Duplicate mod name: A"):
            resolve_order([mod("A"), mod("A@1.0")])

    def test_last_definition_wins_when_configured(self, caplog: pytest.LogCaptureFixture) -> None:
        first = mod("A", requires="missing")
        second = mod("A")
        with caplog.at_level(logging.WARNING, logger="modloader.core.dependency.resolver"):
            result = resolve_order([first, second, mod("B")], duplicates="last-wins")
        assert result[0] is second
        assert names(result) == ["A", "B"]
        assert "Duplicate mod name A" in caplog.text

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError):
            DependencyResolver(duplicates="first-wins")


class TestResolver:
    def test_provided_names_are_version_stripped(self) -> None:
        resolver = DependencyResolver().provided(["modloader@0.24", "host"])
        assert resolver.provided_names == {"modloader", "host"}

    def test_order_returns_original_objects(self) -> None:
        a, b = mod("A"), mod("B", requires="A")
        assert DependencyResolver().order([b, a]) == [a, b]

    def test_resolver_is_reusable(self) -> None:
        resolver = DependencyResolver()
        mods = [mod("A", requires="B"), mod("B")]
        assert names(resolver.order(mods)) == names(resolver.order(mods)) == ["B", "A"]

    def test_graph_is_symmetric(self) -> None:
        mods = [mod("A", requires="B", after="C"), mod("B", before="C"), mod("C")]
        entries = DependencyResolver().graph(mods)
        for entry in entries.values():
            for name in entry.before:
                assert entry.name in entries[name].after
            for name in entry.after:
                assert entry.name in entries[name].before

    def test_graph_excludes_pruned_and_missing(self) -> None:
        mods = [mod("A", ondemand=True), mod("B", before="ghost")]
        entries = DependencyResolver().graph(mods)
        assert set(entries) == {"B"}
        assert entries["B"].before == set()

    def test_order_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="modloader.core.dependency.resolver"):
            resolve_order([mod("B"), mod("A")])
        assert "Resolved load order: A, B" in caplog.text
