"""Tests for load order resolution via depth-first topological sort."""

from __future__ import annotations

import random

import pytest

from helpers import before, dep, record
from modorder.errors import CircularDependencyError, MissingRequiredDependencyError
from modorder.graph import build_graph
from modorder.resolver import resolve, resolve_load_order
from modorder.types import ResolvedModule


def order_of(*records) -> list[str]:
    return [node.module_id for node in resolve(build_graph(records))]


class TestNoDependencies:
    def test_no_deps_returns_all(self) -> None:
        """Modules with no dependencies all appear, in id order."""
        assert order_of(record("C"), record("A"), record("B")) == ["A", "B", "C"]


class TestSimpleOrdering:
    def test_after(self) -> None:
        """A depends on B -> B before A."""
        result = order_of(record("A", dep("B")), record("B"))
        assert result.index("B") < result.index("A")

    def test_before(self) -> None:
        """A declares 'before B' -> A before B."""
        result = order_of(record("A", before("B")), record("B"))
        assert result == ["A", "B"]

    def test_before_overrides_id_order(self) -> None:
        """Z declares 'before A' -> Z first even though A sorts first."""
        assert order_of(record("A"), record("Z", before("A"))) == ["Z", "A"]

    def test_chain(self) -> None:
        """Chain A -> B -> C -> order is C, B, A."""
        assert order_of(record("A", dep("B")), record("B", dep("C")), record("C")) == ["C", "B", "A"]

    def test_diamond(self) -> None:
        """Diamond: A -> B,C; B,C -> D; D once and first, A last."""
        result = order_of(
            record("A", dep("B"), dep("C")),
            record("B", dep("D")),
            record("C", dep("D")),
            record("D"),
        )
        assert result == ["D", "B", "C", "A"]
        assert result.count("D") == 1

    def test_mixed_before_and_after(self) -> None:
        """C loads before B; A needs B -> C, B, A."""
        result = order_of(record("A", dep("B")), record("B"), record("C", before("B")))
        assert result == ["C", "B", "A"]

    def test_long_chain_is_not_recursion_bound(self) -> None:
        """A chain much deeper than the interpreter recursion limit resolves."""
        size = 3000
        records = [record(f"m{i:05d}", dep(f"m{i + 1:05d}")) for i in range(size - 1)]
        records.append(record(f"m{size - 1:05d}"))
        result = order_of(*records)
        assert result == [f"m{i:05d}" for i in reversed(range(size))]


class TestCircularDetection:
    def test_simple_cycle(self) -> None:
        """A -> B -> A raises naming the closing edge B -> A."""
        with pytest.raises(CircularDependencyError) as exc_info:
            order_of(record("A", dep("B")), record("B", dep("A")))
        err = exc_info.value
        assert (err.from_id, err.to_id) == ("B", "A")
        assert err.cycle_path == ["A", "B", "A"]

    def test_three_node_cycle(self) -> None:
        with pytest.raises(CircularDependencyError) as exc_info:
            order_of(record("A", dep("B")), record("B", dep("C")), record("C", dep("A")))
        assert exc_info.value.cycle_path == ["A", "B", "C", "A"]

    def test_self_dependency(self) -> None:
        with pytest.raises(CircularDependencyError) as exc_info:
            order_of(record("A", dep("A")))
        assert (exc_info.value.from_id, exc_info.value.to_id) == ("A", "A")

    def test_cycle_through_before(self) -> None:
        """A after B, and A also before B -> cycle."""
        with pytest.raises(CircularDependencyError):
            order_of(record("A", dep("B"), before("B")), record("B"))

    def test_partial_cycle_with_independent(self) -> None:
        """Partial cycle B <-> C with independent D still raises."""
        with pytest.raises(CircularDependencyError) as exc_info:
            order_of(
                record("A", dep("B")),
                record("B", dep("C")),
                record("C", dep("B")),
                record("D"),
            )
        assert set(exc_info.value.cycle_path) == {"B", "C"}

    def test_no_partial_output(self) -> None:
        """resolve_load_order raises instead of returning a prefix."""
        with pytest.raises(CircularDependencyError):
            resolve_load_order([record("A"), record("B", dep("C")), record("C", dep("B"))])


class TestOptionalDependencies:
    def test_missing_optional_dep(self) -> None:
        assert order_of(record("A", dep("missing_dep", optional=True))) == ["A"]

    def test_missing_required_dep_raises(self) -> None:
        with pytest.raises(MissingRequiredDependencyError) as exc_info:
            resolve_load_order([record("A", dep("Z"))])
        assert (exc_info.value.module_id, exc_info.value.target_id) == ("A", "Z")

    def test_optional_dep_present_included(self) -> None:
        assert order_of(record("A", dep("B", optional=True)), record("B")) == ["B", "A"]


class TestDeterminism:
    RECORDS = [
        record("ui", dep("core"), dep("render")),
        record("render", dep("core"), dep("gpu", optional=True)),
        record("core"),
        record("net", dep("core")),
        record("log", before("core")),
        record("audio", dep("core"), before("ui")),
    ]

    def test_repeated_runs_identical(self) -> None:
        assert resolve_load_order(self.RECORDS) == resolve_load_order(self.RECORDS)

    def test_resolving_same_graph_twice(self) -> None:
        graph = build_graph(self.RECORDS)
        assert resolve(graph) == resolve(graph)

    def test_input_order_irrelevant(self) -> None:
        expected = resolve_load_order(self.RECORDS)
        shuffled = list(self.RECORDS)
        random.Random(7).shuffle(shuffled)
        assert resolve_load_order(shuffled) == expected

    def test_each_module_once(self) -> None:
        result = [m.module_id for m in resolve_load_order(self.RECORDS)]
        assert len(result) == len(set(result)) == len(self.RECORDS)

    def test_every_prerequisite_precedes_dependent(self) -> None:
        graph = build_graph(self.RECORDS)
        position = {node.module_id: i for i, node in enumerate(resolve(graph))}
        for node in graph:
            for edge in node.edges:
                assert position[edge] < position[node.module_id]


class TestResolveLoadOrder:
    def test_returns_id_and_source_pairs(self) -> None:
        result = resolve_load_order([record("A", dep("B")), record("B")])
        assert result == [ResolvedModule("B", "b_file"), ResolvedModule("A", "a_file")]

    def test_empty_input(self) -> None:
        assert resolve_load_order([]) == []

    def test_single_module(self) -> None:
        assert resolve_load_order([record("A")]) == [("A", "a_file")]
