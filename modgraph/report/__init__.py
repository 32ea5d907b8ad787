"""Renderer registry: one renderer per output format."""

from __future__ import annotations

from modgraph.models import OutputFormat
from modgraph.report.base import BaseRenderer, ReportContext
from modgraph.report.paths import PathAnalysisRenderer, format_paths
from modgraph.report.plantuml import (
    DeploymentDiagramRenderer,
    MindMapRenderer,
    TransitiveMindMapRenderer,
)
from modgraph.report.table import TableRenderer, dependency_marker

_RENDERERS: dict[OutputFormat, BaseRenderer] = {
    renderer.output_format: renderer
    for renderer in (
        MindMapRenderer(),
        DeploymentDiagramRenderer(),
        TableRenderer(),
        PathAnalysisRenderer(),
        TransitiveMindMapRenderer(),
    )
}

_missing = set(OutputFormat) - set(_RENDERERS)
if _missing:
    raise RuntimeError(f"No renderer for output format(s): {sorted(f.value for f in _missing)}")


def get_renderer(output_format: OutputFormat) -> BaseRenderer:
    return _RENDERERS[output_format]


def render(output_format: OutputFormat, context: ReportContext) -> str:
    """Render ``context`` in the given format."""
    return get_renderer(output_format).render(context)


__all__ = [
    "BaseRenderer",
    "ReportContext",
    "dependency_marker",
    "format_paths",
    "get_renderer",
    "render",
]
