"""PlantUML sources: mind maps and the deployment diagram.

Paste the output into https://www.plantuml.com/ to get the picture.
"""

from __future__ import annotations

from typing import Iterator

from modgraph.models import OutputFormat
from modgraph.report.base import BaseRenderer, ReportContext


class MindMapRenderer(BaseRenderer):
    """Modules with their direct dependencies, two levels deep.

    A quick check that every module and every declaration was picked up.
    """

    output_format = OutputFormat.MIND_MAP

    def title(self, context: ReportContext) -> str:
        return "Modules with direct (explicitly declared) dependencies as MIND MAP"

    def render_lines(self, context: ReportContext) -> Iterator[str]:
        graph, ordering = context.graph, context.ordering
        yield "@startmindmap"
        for module in ordering.sort_names(graph):
            yield f"* {module}"
            for dependency in ordering.sort_names(graph.dependencies_of(module)):
                yield f"** {dependency}"
        yield "@endmindmap"


class DeploymentDiagramRenderer(BaseRenderer):
    """Modules as nodes, direct dependencies as edges."""

    output_format = OutputFormat.DEPLOYMENT_DIAGRAM

    def title(self, context: ReportContext) -> str:
        return "Modules with direct (explicitly declared) dependencies as DEPLOYMENT DIAGRAM"

    def render_lines(self, context: ReportContext) -> Iterator[str]:
        graph, ordering = context.graph, context.ordering
        yield "@startuml"
        # orthogonal edges stay readable on dense graphs
        yield "skinparam linetype ortho"
        for name in ordering.sort_names(graph.all_names()):
            yield f'node "{name}"'
        for module in ordering.sort_names(graph):
            for dependency in ordering.sort_names(graph.dependencies_of(module)):
                yield f'"{module}" --> "{dependency}"'
        yield "@enduml"


class TransitiveMindMapRenderer(BaseRenderer):
    """Every root with all of its dependencies and the paths to transitive ones.

    Too large for a whole-project overview on real graphs; prefer the table
    for that and the path analysis for a single dependency.
    """

    output_format = OutputFormat.TRANSITIVE_MIND_MAP

    def title(self, context: ReportContext) -> str:
        return "Modules with direct and transitive dependencies including paths as MIND MAP"

    def render_lines(self, context: ReportContext) -> Iterator[str]:
        resolution = context.require_resolution()
        yield "@startmindmap"
        for root in resolution.roots():
            for dependency in resolution.dependencies_of(root):
                if dependency.is_root:
                    yield f"* {dependency.name}"
                    continue
                if dependency.is_direct_dependency:
                    yield f"** {dependency.name}"
                    continue
                yield f"** {dependency.name} [t]"
                if dependency.name in context.common_modules:
                    continue
                for path in dependency.sorted_paths():
                    yield f"*** {path}"
        yield "@endmindmap"
