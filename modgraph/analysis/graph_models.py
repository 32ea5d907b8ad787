"""Data models for module graph resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from modgraph.errors import UnknownModuleError


@dataclass(frozen=True)
class ModuleGraph:
    """Module name -> names of its directly declared dependencies.

    Dependency names need not be keys: a module referenced without a
    descriptor of its own is a dead end during resolution.
    """
    _modules: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __hash__(self) -> int:
        return hash(frozenset(self._modules.items()))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> ModuleGraph:
        return cls(MappingProxyType(
            {name: frozenset(deps) for name, deps in mapping.items()}
        ))

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[str]:
        return iter(self._modules)

    @property
    def modules(self) -> list[str]:
        return list(self._modules)

    def dependencies_of(self, name: str) -> frozenset[str]:
        return self._modules.get(name, frozenset())

    def all_names(self) -> set[str]:
        """Declared modules plus every name they reference."""
        names = set(self._modules)
        for deps in self._modules.values():
            names.update(deps)
        return names

    def unresolved_names(self) -> set[str]:
        return self.all_names() - set(self._modules)


@dataclass
class GraphNode:
    """One (module, route) pair discovered while walking from a root."""
    name: str
    trail: tuple[str, ...] = ()  # root .. parent, root included
    visited: bool = False

    @property
    def path(self) -> tuple[str, ...]:
        """Modules between the root and this node, root excluded."""
        return self.trail[1:]

    @property
    def is_root(self) -> bool:
        return not self.trail

    @property
    def is_cycle(self) -> bool:
        return self.name in self.trail

    def visit(self) -> None:
        self.visited = True

    def child(self, name: str) -> GraphNode:
        return GraphNode(name=name, trail=self.trail + (self.name,))

    def dependency_path(self) -> DependencyPath:
        if self.is_root:
            return DependencyPath()
        return DependencyPath(self.path + (self.name,), cycle=self.is_cycle)


@dataclass(frozen=True)
class DependencyPath:
    """One route from a root to a dependency, the dependency itself last.

    Empty for the root's own entry, a single module for a direct dependency.
    """
    modules: tuple[str, ...] = ()
    cycle: bool = False

    def __len__(self) -> int:
        return len(self.modules)

    @property
    def is_root(self) -> bool:
        return not self.modules

    @property
    def is_direct(self) -> bool:
        return len(self.modules) == 1

    def __str__(self) -> str:
        text = ",".join(self.modules)
        return f"{text} [cycle]" if self.cycle else text


@dataclass
class Dependency:
    """A module reachable from a root, with every distinct route to it."""
    name: str
    paths: set[DependencyPath] = field(default_factory=set)

    def add_path(self, path: DependencyPath) -> None:
        self.paths.add(path)

    @property
    def is_root(self) -> bool:
        return any(p.is_root for p in self.paths)

    @property
    def is_direct_dependency(self) -> bool:
        # A declared dependency stays direct even when also pulled in transitively
        return any(p.is_direct for p in self.paths)

    @property
    def is_transitive(self) -> bool:
        return not self.is_root and not self.is_direct_dependency

    @property
    def has_cycle(self) -> bool:
        return any(p.cycle for p in self.paths)

    @property
    def kind(self) -> str:
        if self.is_root:
            return "root"
        return "direct" if self.is_direct_dependency else "transitive"

    def sorted_paths(self) -> list[DependencyPath]:
        return sorted(self.paths, key=lambda p: (len(p), p.modules, p.cycle))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "kind": self.kind,
            "cycle": self.has_cycle,
            "paths": [
                {"modules": list(p.modules), "cycle": p.cycle}
                for p in self.sorted_paths()
            ],
        }


@dataclass(frozen=True)
class UnresolvedModule:
    """A dependency name with no descriptor, met while resolving ``root``."""
    root: str
    module: str


@dataclass
class ResolutionResult:
    """Root module -> its dependencies, in display order."""
    dependencies: dict[str, list[Dependency]] = field(default_factory=dict)
    warnings: list[UnresolvedModule] = field(default_factory=list)

    def __contains__(self, root: object) -> bool:
        return root in self.dependencies

    def __len__(self) -> int:
        return len(self.dependencies)

    def roots(self) -> list[str]:
        return list(self.dependencies)

    def dependencies_of(self, root: str) -> list[Dependency]:
        try:
            return self.dependencies[root]
        except KeyError:
            raise UnknownModuleError(f"Root module {root} not found.", root) from None

    def find(self, root: str, target: str) -> Dependency:
        """The dependency ``target`` of ``root``, for path analysis."""
        for dependency in self.dependencies_of(root):
            if dependency.name == target:
                return dependency
        if not self._observed(target):
            message = f"Dependency {target} not found."
        else:
            message = f"Module {target} is not a dependency of {root}."
        raise UnknownModuleError(message, root, target)

    def unresolved_modules(self) -> set[str]:
        return {w.module for w in self.warnings}

    def _observed(self, name: str) -> bool:
        return any(
            d.name == name for deps in self.dependencies.values() for d in deps
        )

    def to_dict(self) -> dict:
        return {
            "roots": {
                root: [d.to_dict() for d in deps]
                for root, deps in self.dependencies.items()
            },
            "warnings": [
                {"root": w.root, "module": w.module} for w in self.warnings
            ],
        }
