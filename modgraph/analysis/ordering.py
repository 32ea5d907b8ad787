"""Display order for module names and dependencies.

Well-known modules are ordered by architectural layer (shared modules first,
leaf/UI modules last); everything else follows alphabetically after them.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable, Mapping

from modgraph.analysis.graph_models import Dependency
from modgraph.models import DEFAULT_MODULE_PRIORITIES


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


class ModuleOrdering:
    """Total order over module names and over dependencies of one root."""

    def __init__(self, priorities: Mapping[str, int] | None = None):
        self.priorities = dict(
            DEFAULT_MODULE_PRIORITIES if priorities is None else priorities
        )
        self.name_key = cmp_to_key(self.compare_names)
        self.dependency_key = cmp_to_key(self.compare_dependencies)

    def compare_names(self, a: str, b: str) -> int:
        pa = self.priorities.get(a)
        pb = self.priorities.get(b)
        if pa is not None and pb is not None:
            # Shared priorities fall through to alphabetical order
            return _cmp(pa, pb) or _cmp(a, b)
        if pa is not None:
            return -1
        if pb is not None:
            return 1
        return _cmp(a, b)

    def compare_dependencies(self, a: Dependency, b: Dependency) -> int:
        if a.name == b.name:
            return 0
        if a.is_root != b.is_root:
            return -1 if a.is_root else 1
        a_direct = a.is_direct_dependency
        b_direct = b.is_direct_dependency
        if a_direct != b_direct:
            return -1 if a_direct else 1
        if a_direct and b_direct:
            return self.compare_names(a.name, b.name)
        return _cmp(a.name, b.name)

    def sort_names(self, names: Iterable[str]) -> list[str]:
        return sorted(names, key=self.name_key)

    def sort_dependencies(self, dependencies: Iterable[Dependency]) -> list[Dependency]:
        return sorted(dependencies, key=self.dependency_key)
