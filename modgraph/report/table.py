"""CSV matrix of direct (x) and transitive (t) dependencies.

Rows say: for this root module, which modules are its direct and transitive
dependencies. Columns say: in which modules this module is included.
"""

from __future__ import annotations

import csv
import io
from typing import Iterator

from modgraph.analysis.graph_models import Dependency
from modgraph.models import OutputFormat
from modgraph.report.base import BaseRenderer, ReportContext

DIRECT_MARKER = "x"
TRANSITIVE_MARKER = "t"


def dependency_marker(dependency: Dependency | None) -> str:
    if dependency is None or dependency.is_root:
        return ""
    if dependency.is_direct_dependency:
        return DIRECT_MARKER
    return TRANSITIVE_MARKER


class TableRenderer(BaseRenderer):
    output_format = OutputFormat.TABLE

    def title(self, context: ReportContext) -> str:
        return "Modules with direct (x) and transitive (t) dependencies as TABLE"

    def columns(self, context: ReportContext) -> list[str]:
        resolution = context.require_resolution()
        names: set[str] = set()
        for root in resolution.roots():
            names.add(root)
            names.update(context.graph.dependencies_of(root))
        return context.ordering.sort_names(names)

    def rows(self, context: ReportContext) -> list[list[str]]:
        """Header row first, then one row per module."""
        resolution = context.require_resolution()
        columns = self.columns(context)
        rows = [["", *columns]]
        for module in columns:
            if module not in resolution:
                # No descriptor, so nothing was resolved for it
                rows.append([module, *([""] * len(columns))])
                continue
            by_name = {d.name: d for d in resolution.dependencies_of(module)}
            rows.append([module, *(dependency_marker(by_name.get(c)) for c in columns)])
        return rows

    def render_lines(self, context: ReportContext) -> Iterator[str]:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerows(self.rows(context))
        yield from buffer.getvalue().splitlines()
