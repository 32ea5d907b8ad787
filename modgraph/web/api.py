"""Analysis API: scan a project, then query dependencies, paths and reports."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from modgraph.config import ConfigFile, apply_config_file, load_analyzer_config
from modgraph.errors import ModgraphError, UnknownModuleError
from modgraph.models import DependencyId, OutputFormat
from modgraph.pipeline import AnalysisReport, run_analysis
from modgraph.report import format_paths, get_renderer
from modgraph.web.state import AnalysisSession, state

router = APIRouter(prefix="/api/analyses")


class AnalyzeRequest(BaseModel):
    path: str
    config: ConfigFile | None = None


def _run(project_dir: Path, config_file: ConfigFile | None) -> AnalysisReport:
    config = load_analyzer_config(project_dir)
    if config_file is not None:
        apply_config_file(config, config_file)
    return run_analysis(config, resolve=True)


def _get_session(analysis_id: str) -> AnalysisSession:
    session = state.get(analysis_id)
    if session is None:
        raise HTTPException(404, "Analysis not found")
    return session


def _summary(session: AnalysisSession) -> dict:
    report = session.report
    graph = report.graph
    unresolved = report.resolution.unresolved_modules()
    return {
        "analysis_id": session.id,
        "project_dir": str(report.config.project_dir),
        "timestamp": session.timestamp,
        "modules": [
            {
                "name": name,
                "dependencies": report.ordering.sort_names(graph.dependencies_of(name)),
            }
            for name in report.ordering.sort_names(graph)
        ],
        "unresolved": report.ordering.sort_names(unresolved),
        "warnings": [
            {"root": w.root, "module": w.module} for w in report.resolution.warnings
        ],
    }


@router.post("")
async def create_analysis(req: AnalyzeRequest):
    project_dir = Path(req.path).expanduser()
    if not project_dir.is_dir():
        raise HTTPException(400, f"Not a directory: {req.path}")
    try:
        report = await asyncio.to_thread(_run, project_dir, req.config)
    except ModgraphError as e:
        raise HTTPException(400, str(e))
    session = AnalysisSession(report=report)
    state.add(session)
    return _summary(session)


@router.get("/{analysis_id}")
async def get_analysis(analysis_id: str):
    return _summary(_get_session(analysis_id))


@router.delete("/{analysis_id}")
async def delete_analysis(analysis_id: str):
    if not state.delete(analysis_id):
        raise HTTPException(404, "Analysis not found")
    return {"deleted": analysis_id}


@router.get("/{analysis_id}/dependencies")
async def get_dependencies(analysis_id: str, root: str):
    resolution = _get_session(analysis_id).report.resolution
    try:
        dependencies = resolution.dependencies_of(root)
    except UnknownModuleError as e:
        raise HTTPException(404, str(e))
    return {
        "root": root,
        "dependencies": [d.to_dict() for d in dependencies],
    }


@router.get("/{analysis_id}/paths")
async def get_paths(analysis_id: str, root: str, target: str):
    resolution = _get_session(analysis_id).report.resolution
    try:
        dependency = resolution.find(root, target)
    except UnknownModuleError as e:
        raise HTTPException(404, str(e))
    return {
        "root": root,
        "target": target,
        **dependency.to_dict(),
        "text": format_paths(dependency),
    }


@router.get("/{analysis_id}/report/{output_format}", response_class=PlainTextResponse)
async def get_report(
    analysis_id: str,
    output_format: OutputFormat,
    root: str | None = None,
    target: str | None = None,
):
    report = _get_session(analysis_id).report
    context = report.context()
    if output_format is OutputFormat.PATH_ANALYSIS:
        if not root or not target:
            raise HTTPException(400, "The paths report needs root and target")
        context = replace(context, dependency_id=DependencyId(root, target))
    try:
        return get_renderer(output_format).render(context)
    except UnknownModuleError as e:
        raise HTTPException(404, str(e))
