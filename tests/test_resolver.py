"""Tests for the breadth-first resolver and the per-root aggregation."""

import logging

import pytest

from modgraph.analysis import (
    DependencyPath,
    DependencyResolver,
    GraphNode,
    ModuleGraph,
    ModuleOrdering,
    resolve_dependencies,
)
from modgraph.errors import UnknownModuleError


# ── Helpers ───────────────────────────────────────────────────

def _graph(**modules):
    return ModuleGraph.from_mapping(modules)


def _resolver():
    return DependencyResolver(ModuleOrdering({}))


def _by_name(dependencies):
    return {d.name: d for d in dependencies}


def _resolve_root(graph, root):
    resolver = _resolver()
    return _by_name(resolver.aggregate(root, resolver.resolve(root, graph)))


def _path(*modules, cycle=False):
    return DependencyPath(tuple(modules), cycle=cycle)


# ── Module Graph ──────────────────────────────────────────────

class TestModuleGraph:
    def test_empty(self):
        graph = ModuleGraph.from_mapping({})
        assert len(graph) == 0
        assert graph.all_names() == set()

    def test_unknown_module_has_no_dependencies(self):
        graph = _graph(A={"X"})
        assert "X" not in graph
        assert graph.dependencies_of("X") == frozenset()
        assert graph.unresolved_names() == {"X"}

    def test_copies_input(self):
        source = {"A": {"B"}}
        graph = ModuleGraph.from_mapping(source)
        source["A"].add("C")
        assert graph.dependencies_of("A") == frozenset({"B"})

    def test_names_are_case_sensitive(self):
        graph = _graph(core={"Core"})
        assert "core" in graph
        assert "Core" not in graph

    def test_hashable(self):
        first = _graph(A={"B"}, B=set())
        second = _graph(B=set(), A={"B"})
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second, _graph(A=set())}) == 2

    def test_default_is_read_only(self):
        graph = ModuleGraph()
        assert len(graph) == 0
        with pytest.raises(TypeError):
            graph._modules["A"] = frozenset()
        assert hash(graph) == hash(ModuleGraph.from_mapping({}))


# ── Graph Node ────────────────────────────────────────────────

class TestGraphNode:
    def test_root_node(self):
        node = GraphNode("A")
        assert node.is_root
        assert not node.is_cycle
        assert node.path == ()
        assert node.dependency_path() == DependencyPath()

    def test_child_path_excludes_root(self):
        child = GraphNode("A").child("B").child("C")
        assert child.trail == ("A", "B")
        assert child.path == ("B",)
        assert child.dependency_path() == _path("B", "C")

    def test_cycle_back_to_root(self):
        node = GraphNode("A").child("B").child("A")
        assert node.is_cycle
        assert node.dependency_path() == _path("B", "A", cycle=True)

    def test_self_dependency_is_cycle(self):
        node = GraphNode("A").child("A")
        assert node.is_cycle
        assert node.dependency_path() == _path("A", cycle=True)


# ── BFS Resolver ──────────────────────────────────────────────

class TestResolve:
    def test_chain(self):
        nodes = _resolver().resolve("A", _graph(A={"B"}, B={"C"}, C=set()))
        assert [n.name for n in nodes] == ["A", "B", "C"]
        assert all(n.visited for n in nodes)

    def test_breadth_first_order(self):
        graph = _graph(A={"B", "C"}, B={"D"}, C=set(), D=set())
        nodes = _resolver().resolve("A", graph)
        assert [n.name for n in nodes] == ["A", "B", "C", "D"]

    def test_one_node_per_route(self):
        graph = _graph(A={"B", "C"}, B={"D"}, C={"D"}, D=set())
        nodes = _resolver().resolve("A", graph)
        assert sorted(n.path for n in nodes if n.name == "D") == [("B",), ("C",)]

    def test_cycle_terminates(self):
        nodes = _resolver().resolve("A", _graph(A={"B"}, B={"A"}))
        assert [n.name for n in nodes] == ["A", "B", "A"]
        assert nodes[-1].is_cycle

    def test_cycle_not_through_root(self):
        graph = _graph(A={"B"}, B={"C"}, C={"B"})
        nodes = _resolver().resolve("A", graph)
        assert [n.name for n in nodes] == ["A", "B", "C", "B"]
        assert [n.is_cycle for n in nodes] == [False, False, False, True]

    def test_unknown_module_reported_once(self):
        graph = _graph(A={"B", "C"}, B={"X"}, C={"X"})
        seen = []
        nodes = _resolver().resolve("A", graph, on_unresolved=seen.append)
        assert seen == ["X"]
        # both routes to X are still recorded
        assert len([n for n in nodes if n.name == "X"]) == 2

    def test_unknown_module_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="modgraph.analysis.resolver"):
            _resolver().resolve("A", _graph(A={"X"}))
        assert "not-detected module: X" in caplog.text

    def test_unknown_root(self):
        nodes = _resolver().resolve("Z", _graph(A=set()))
        assert [n.name for n in nodes] == ["Z"]

    def test_fresh_state_per_call(self):
        resolver = _resolver()
        graph = _graph(A={"B"}, B=set(), C={"A"})
        first = resolver.resolve("A", graph)
        second = resolver.resolve("C", graph)
        assert [n.name for n in first] == ["A", "B"]
        assert [n.name for n in second] == ["C", "A", "B"]

    def test_explores_all_simple_paths(self):
        graph = _graph(A={"B", "C", "D"}, B={"C", "D"}, C={"D"}, D=set())
        deps = _resolve_root(graph, "A")
        assert deps["D"].paths == {
            _path("D"),
            _path("B", "D"),
            _path("C", "D"),
            _path("B", "C", "D"),
        }


# ── Aggregation / scenarios ───────────────────────────────────

class TestAggregate:
    def test_chain(self):
        deps = _resolve_root(_graph(A={"B"}, B={"C"}, C=set()), "A")
        assert set(deps) == {"A", "B", "C"}
        assert deps["A"].is_root
        assert deps["B"].is_direct_dependency
        assert deps["B"].paths == {_path("B")}
        assert deps["C"].is_transitive
        assert deps["C"].paths == {_path("B", "C")}

    def test_cycle(self):
        deps = _resolve_root(_graph(A={"B"}, B={"A"}), "A")
        assert set(deps) == {"A", "B"}
        assert deps["B"].paths == {_path("B")}
        assert deps["A"].is_root
        assert deps["A"].paths == {_path(), _path("B", "A", cycle=True)}
        assert deps["A"].has_cycle

    def test_diamond_single_record(self):
        graph = _graph(A={"B", "C"}, B={"D"}, C={"D"}, D=set())
        resolver = _resolver()
        dependencies = resolver.aggregate("A", resolver.resolve("A", graph))
        assert [d.name for d in dependencies].count("D") == 1
        d = _by_name(dependencies)["D"]
        assert d.paths == {_path("B", "D"), _path("C", "D")}
        assert d.is_transitive

    def test_unknown_dependency(self):
        result = resolve_dependencies(_graph(A={"X"}), ModuleOrdering({}))
        deps = _by_name(result.dependencies_of("A"))
        assert set(deps) == {"A", "X"}
        assert deps["X"].is_direct_dependency
        assert deps["X"].paths == {_path("X")}
        assert [(w.root, w.module) for w in result.warnings] == [("A", "X")]

    def test_direct_dominates_transitive(self):
        graph = _graph(A={"B", "C"}, B={"C"}, C=set())
        deps = _resolve_root(graph, "A")
        assert deps["C"].paths == {_path("C"), _path("B", "C")}
        assert deps["C"].is_direct_dependency
        assert not deps["C"].is_transitive

    def test_identical_paths_collapse(self):
        resolver = _resolver()
        nodes = [GraphNode("A"), GraphNode("A").child("B"), GraphNode("A").child("B")]
        dependencies = resolver.aggregate("A", nodes)
        assert len(dependencies) == 2
        assert _by_name(dependencies)["B"].paths == {_path("B")}

    def test_to_dict_keeps_path_cycle_flags(self):
        deps = _resolve_root(_graph(A={"B"}, B={"A"}), "A")
        assert deps["A"].to_dict() == {
            "name": "A",
            "kind": "root",
            "cycle": True,
            "paths": [
                {"modules": [], "cycle": False},
                {"modules": ["B", "A"], "cycle": True},
            ],
        }
        assert deps["B"].to_dict()["paths"] == [{"modules": ["B"], "cycle": False}]

    def test_sorted_root_first(self):
        graph = _graph(A={"Z", "M"}, M={"B"}, Z=set(), B=set())
        resolver = _resolver()
        names = [d.name for d in resolver.aggregate("A", resolver.resolve("A", graph))]
        assert names == ["A", "M", "Z", "B"]


# ── Whole-graph resolution ────────────────────────────────────

class TestResolveAll:
    def test_empty_graph(self):
        result = resolve_dependencies(ModuleGraph.from_mapping({}))
        assert len(result) == 0
        assert result.warnings == []

    def test_one_root_entry_per_module(self):
        graph = _graph(A={"B", "C"}, B={"C"}, C={"A"}, D=set())
        result = resolve_dependencies(graph, ModuleOrdering({}))
        assert result.roots() == ["A", "B", "C", "D"]
        for module in graph:
            roots = [d for d in result.dependencies_of(module) if d.is_root]
            assert [d.name for d in roots] == [module]

    def test_declared_dependencies_are_direct(self):
        graph = _graph(A={"B", "C"}, B={"C", "D"}, C={"D"}, D={"B"})
        result = resolve_dependencies(graph, ModuleOrdering({}))
        for root in graph:
            deps = _by_name(result.dependencies_of(root))
            for declared in graph.dependencies_of(root):
                assert deps[declared].is_direct_dependency

    def test_cycle_paths_are_flagged(self):
        graph = _graph(A={"B"}, B={"C"}, C={"A", "B"})
        result = resolve_dependencies(graph, ModuleOrdering({}))
        for root in result.roots():
            for dependency in result.dependencies_of(root):
                for path in dependency.paths:
                    if len(path) >= 2:
                        repeated = path.modules[-1] in (root,) + path.modules[:-1]
                        assert path.cycle == repeated

    def test_idempotent(self):
        graph = _graph(A={"B", "C"}, B={"C"}, C={"A"})
        first = resolve_dependencies(graph).to_dict()
        second = resolve_dependencies(graph).to_dict()
        assert first == second

    def test_to_dict_uses_dependency_shape(self):
        result = resolve_dependencies(_graph(A={"B"}, B={"A"}), ModuleOrdering({}))
        data = result.to_dict()
        assert data["roots"]["A"] == [d.to_dict() for d in result.dependencies_of("A")]
        assert data["warnings"] == []

    def test_graph_not_mutated(self):
        graph = _graph(A={"B"}, B={"A", "X"})
        before = {m: graph.dependencies_of(m) for m in graph}
        resolve_dependencies(graph)
        assert {m: graph.dependencies_of(m) for m in graph} == before

    def test_progress_callback(self):
        calls = []
        _resolver().resolve_all(_graph(A=set(), B=set()), progress=lambda *a: calls.append(a))
        assert calls[0] == ("Resolving", 0, 2)
        assert calls[-1] == ("Resolving", 2, 2)


# ── Lookups ───────────────────────────────────────────────────

class TestFind:
    def test_find(self):
        result = resolve_dependencies(_graph(A={"B"}, B={"C"}, C=set()))
        assert result.find("A", "C").paths == {_path("B", "C")}

    def test_unknown_root(self):
        result = resolve_dependencies(_graph(A=set()))
        with pytest.raises(UnknownModuleError, match="Root module Z not found"):
            result.find("Z", "A")

    def test_unknown_target(self):
        result = resolve_dependencies(_graph(A={"B"}, B=set()))
        with pytest.raises(UnknownModuleError, match="Dependency Q not found"):
            result.find("A", "Q")

    def test_target_not_reachable(self):
        result = resolve_dependencies(_graph(A=set(), B={"A"}))
        with pytest.raises(UnknownModuleError) as exc:
            result.find("A", "B")
        assert exc.value.root == "A"
        assert exc.value.target == "B"
        assert isinstance(exc.value, LookupError)
