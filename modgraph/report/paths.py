"""Every path by which one dependency is pulled into one root module."""

from __future__ import annotations

from typing import Iterator

from modgraph.analysis.graph_models import Dependency
from modgraph.models import OutputFormat
from modgraph.report.base import BaseRenderer, ReportContext

PATH_PREFIX = "--"


def format_paths(dependency: Dependency, prefix: str = PATH_PREFIX) -> list[str]:
    lines = []
    for path in dependency.sorted_paths():
        # the root's own entry has no route to print
        lines.append(f"{prefix} {path}" if len(path) else f"{prefix} (root)")
    return lines


class PathAnalysisRenderer(BaseRenderer):
    """Run the table first to see which transitive dependencies exist, then
    use this to find out why a given one is there."""

    output_format = OutputFormat.PATH_ANALYSIS

    def title(self, context: ReportContext) -> str:
        return f"Paths leading to dependency {context.dependency_id} as LIST"

    def render_lines(self, context: ReportContext) -> Iterator[str]:
        if context.dependency_id is None:
            raise ValueError("Path analysis needs a root:target dependency identifier")
        resolution = context.require_resolution()
        dependency = resolution.find(
            context.dependency_id.root, context.dependency_id.target,
        )
        yield from format_paths(dependency)
