"""Pipeline orchestrator: scan -> resolve -> render."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from modgraph.analysis import (
    DependencyResolver,
    ModuleGraph,
    ModuleOrdering,
    ResolutionResult,
)
from modgraph.models import AnalyzerConfig
from modgraph.report import ReportContext, get_renderer
from modgraph.scanner import build_module_graph, scan_descriptors

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


@dataclass
class AnalysisReport:
    config: AnalyzerConfig
    graph: ModuleGraph
    ordering: ModuleOrdering
    resolution: ResolutionResult | None = None

    def context(self) -> ReportContext:
        return ReportContext(
            graph=self.graph,
            resolution=self.resolution,
            ordering=self.ordering,
            dependency_id=self.config.dependency_id,
            common_modules=frozenset(self.config.common_modules),
        )


def run_scan(config: AnalyzerConfig, progress: ProgressCallback | None = None) -> ModuleGraph:
    """Stage 1: Scan the project for module descriptors."""
    if progress:
        progress("Scanning", 0, 1)
    descriptors = scan_descriptors(config)
    graph = build_module_graph(descriptors)
    logger.info("Scanned %d module(s) in %s", len(graph), config.project_dir)
    if progress:
        progress("Scanning", 1, 1)
    return graph


def run_analysis(
    config: AnalyzerConfig,
    progress: ProgressCallback | None = None,
    resolve: bool | None = None,
) -> AnalysisReport:
    """Scan the project and, when the output format needs it, resolve every module.

    Usage errors are raised before the project is touched.
    """
    config.validate()
    graph = run_scan(config, progress)
    ordering = ModuleOrdering(config.priorities)
    report = AnalysisReport(config=config, graph=graph, ordering=ordering)

    if resolve is None:
        resolve = config.output_format.requires_resolution
    if not resolve:
        return report

    report.resolution = DependencyResolver(ordering).resolve_all(graph, progress)
    return report


def render_report(report: AnalysisReport) -> tuple[str, str]:
    """Render ``report`` in its configured format. Returns ``(title, text)``."""
    renderer = get_renderer(report.config.output_format)
    context = report.context()
    return renderer.title(context), renderer.render(context)

