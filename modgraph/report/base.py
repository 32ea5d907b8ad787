"""Abstract base renderer and the data every renderer receives."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Iterable

from modgraph.analysis.graph_models import ModuleGraph, ResolutionResult
from modgraph.analysis.ordering import ModuleOrdering
from modgraph.models import DependencyId, OutputFormat


@dataclass
class ReportContext:
    graph: ModuleGraph
    resolution: ResolutionResult | None = None
    ordering: ModuleOrdering = field(default_factory=ModuleOrdering)
    dependency_id: DependencyId | None = None
    common_modules: frozenset[str] = frozenset()

    def require_resolution(self) -> ResolutionResult:
        if self.resolution is None:
            raise ValueError("This report needs resolved dependencies")
        return self.resolution


class BaseRenderer(abc.ABC):
    """Base class for report renderers, one per output format."""

    output_format: OutputFormat

    @abc.abstractmethod
    def title(self, context: ReportContext) -> str:
        """One-line description of what the report shows."""

    @abc.abstractmethod
    def render_lines(self, context: ReportContext) -> Iterable[str]:
        """Yield the report line by line."""

    def render(self, context: ReportContext) -> str:
        return "".join(f"{line}\n" for line in self.render_lines(context))
