"""Dependency resolver: breadth-first walk with path tracking, then aggregation per root."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from modgraph.analysis.graph_models import (
    Dependency,
    GraphNode,
    ModuleGraph,
    ResolutionResult,
    UnresolvedModule,
)
from modgraph.analysis.ordering import ModuleOrdering

logger = logging.getLogger(__name__)

UnresolvedCallback = Callable[[str], None]


class DependencyResolver:
    """Resolve direct and transitive dependencies of every module in a graph."""

    def __init__(self, ordering: ModuleOrdering | None = None):
        self.ordering = ordering or ModuleOrdering()

    def resolve(
        self,
        root: str,
        graph: ModuleGraph,
        on_unresolved: UnresolvedCallback | None = None,
    ) -> list[GraphNode]:
        """Walk every simple path from ``root``.

        Returns one node per distinct route to each reachable module. A node
        whose module already appears on its own route is kept as a cycle
        marker but not expanded, which bounds the walk. Modules without a
        descriptor end their branch and are reported once per walk through
        ``on_unresolved``.
        """
        queue = [GraphNode(root)]
        unresolved: set[str] = set()
        cursor = 0
        # Nodes are only appended, so the first unvisited one is always at cursor
        while cursor < len(queue):
            node = queue[cursor]
            cursor += 1
            node.visit()
            if node.is_cycle:
                continue
            if node.name not in graph:
                if node.name not in unresolved:
                    unresolved.add(node.name)
                    logger.warning(
                        "dependency on not-detected module: %s (from %s)",
                        node.name, root,
                    )
                    if on_unresolved:
                        on_unresolved(node.name)
                continue
            children = self.ordering.sort_names(graph.dependencies_of(node.name))
            queue.extend(node.child(name) for name in children)
        logger.debug("resolved %s: %d node(s)", root, len(queue))
        return queue

    def aggregate(self, root: str, nodes: Iterable[GraphNode]) -> list[Dependency]:
        """Merge nodes into one dependency per module, keeping every distinct path."""
        by_name: dict[str, Dependency] = {}
        for node in nodes:
            path = node.dependency_path()
            existing = by_name.get(node.name)
            if existing is not None:
                existing.add_path(path)
            else:
                by_name[node.name] = Dependency(node.name, {path})
        logger.debug("aggregated %s: %d dependencies", root, len(by_name))
        return self.ordering.sort_dependencies(by_name.values())

    def resolve_all(
        self,
        graph: ModuleGraph,
        progress: Callable[[str, int, int], None] | None = None,
    ) -> ResolutionResult:
        """Use every module of ``graph`` as root once."""
        result = ResolutionResult()
        roots = self.ordering.sort_names(graph)
        for i, root in enumerate(roots):
            if progress:
                progress("Resolving", i, len(roots))
            unresolved: list[str] = []
            nodes = self.resolve(root, graph, on_unresolved=unresolved.append)
            result.dependencies[root] = self.aggregate(root, nodes)
            result.warnings.extend(
                UnresolvedModule(root=root, module=module)
                for module in self.ordering.sort_names(unresolved)
            )
        if progress:
            progress("Resolving", len(roots), len(roots))
        logger.info(
            "Resolved %d module(s), %d unresolved reference(s)",
            len(result), len(result.warnings),
        )
        return result


def resolve_dependencies(
    graph: ModuleGraph,
    ordering: ModuleOrdering | None = None,
) -> ResolutionResult:
    """Resolve all modules of ``graph``."""
    return DependencyResolver(ordering).resolve_all(graph)
