"""Module graph resolution."""

from __future__ import annotations

from modgraph.analysis.graph_models import (
    Dependency,
    DependencyPath,
    GraphNode,
    ModuleGraph,
    ResolutionResult,
    UnresolvedModule,
)
from modgraph.analysis.ordering import ModuleOrdering
from modgraph.analysis.resolver import DependencyResolver, resolve_dependencies

__all__ = [
    "Dependency",
    "DependencyPath",
    "DependencyResolver",
    "GraphNode",
    "ModuleGraph",
    "ModuleOrdering",
    "ResolutionResult",
    "UnresolvedModule",
    "resolve_dependencies",
]
