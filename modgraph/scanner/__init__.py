"""Scanner registry and dispatcher."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from modgraph.analysis.graph_models import ModuleGraph
from modgraph.models import AnalyzerConfig, ModuleDescriptor
from modgraph.scanner.base import BaseScanner
from modgraph.scanner.gradle_scanner import GradleScanner, gradle_path_to_module

logger = logging.getLogger(__name__)


def get_scanner(config: AnalyzerConfig) -> BaseScanner:
    return GradleScanner(
        skip_dirs=config.skip_dirs,
        name_translations=config.name_translations,
        configurations=config.configurations,
        descriptor_name=config.descriptor_name,
    )


def scan_descriptors(config: AnalyzerConfig) -> list[ModuleDescriptor]:
    """Scan the project directory for module descriptors."""
    return get_scanner(config).scan_directory(config.project_dir)


def build_module_graph(descriptors: list[ModuleDescriptor]) -> ModuleGraph:
    """Fold descriptors into a module graph, merging duplicate module names."""
    modules: dict[str, set[str]] = {}
    for descriptor in descriptors:
        if descriptor.name in modules:
            logger.warning(
                "module %s declared more than once (%s), merging dependencies",
                descriptor.name, descriptor.descriptor_path,
            )
        modules.setdefault(descriptor.name, set()).update(descriptor.dependencies)
    return ModuleGraph.from_mapping(modules)


def scan_project(project_dir: Path, config: AnalyzerConfig | None = None) -> ModuleGraph:
    """Scan ``project_dir`` and return its module graph."""
    if config is None:
        config = AnalyzerConfig(project_dir=project_dir)
    else:
        config = replace(config, project_dir=project_dir)
    return build_module_graph(scan_descriptors(config))


__all__ = [
    "BaseScanner",
    "GradleScanner",
    "build_module_graph",
    "get_scanner",
    "gradle_path_to_module",
    "scan_descriptors",
    "scan_project",
]
