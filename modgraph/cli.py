"""Click CLI with analyze, modules, and serve subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from modgraph.analysis import ModuleOrdering
from modgraph.config import load_analyzer_config
from modgraph.errors import ModgraphError, UsageError
from modgraph.models import DependencyId, OutputFormat
from modgraph.pipeline import render_report, run_analysis, run_scan

_FORMAT_CHOICES = [fmt.value for fmt in OutputFormat]

_project_dir = click.argument(
    "project_dir", type=click.Path(exists=True, file_okay=False, path_type=Path),
)
_config_option = click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON config file (defaults to PROJECT_DIR/.modgraph.json when present)",
)


def _parse_dependency_id(ctx, param, value: str | None) -> DependencyId | None:
    if value is None:
        return None
    try:
        return DependencyId.parse(value)
    except UsageError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Log debug details")
def cli(verbose: bool):
    """modgraph: Direct and transitive dependencies of Gradle modules."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@cli.command()
@_project_dir
@click.option(
    "--format", "-f", "output_format", type=click.Choice(_FORMAT_CHOICES),
    default=OutputFormat.TABLE.value, show_default=True, help="Report to print",
)
@click.option(
    "--dependency", "-d", "dependency_id", callback=_parse_dependency_id,
    metavar="ROOT:TARGET", help="Dependency to explain (paths format only)",
)
@_config_option
def analyze(
    project_dir: Path,
    output_format: str,
    dependency_id: DependencyId | None,
    config_path: Path | None,
):
    """Analyze module dependencies of a Gradle project."""
    fmt = OutputFormat(output_format)
    if fmt is OutputFormat.PATH_ANALYSIS and dependency_id is None:
        raise click.UsageError(
            "The paths format needs --dependency ROOT:TARGET, "
            "e.g. --dependency service:common"
        )
    if fmt is not OutputFormat.PATH_ANALYSIS and dependency_id is not None:
        raise click.UsageError("--dependency is only accepted with --format paths")

    try:
        config = load_analyzer_config(
            project_dir, config_path,
            output_format=fmt, dependency_id=dependency_id,
        )
        report = run_analysis(config)
        title, text = render_report(report)
    except UsageError as e:
        raise click.UsageError(str(e))
    except ModgraphError as e:
        raise click.ClickException(str(e))

    click.echo(f"======== {title}", err=True)
    click.echo(text, nl=False)


@cli.command()
@_project_dir
@_config_option
def modules(project_dir: Path, config_path: Path | None):
    """List discovered modules with their declared dependencies."""
    try:
        config = load_analyzer_config(project_dir, config_path)
        graph = run_scan(config)
    except ModgraphError as e:
        raise click.ClickException(str(e))

    if not len(graph):
        click.echo("No modules found.")
        return

    ordering = ModuleOrdering(config.priorities)
    click.echo(f"\nFound {len(graph)} module(s):\n")
    for module in ordering.sort_names(graph):
        click.echo(click.style(module, fg="cyan"))
        for dependency in ordering.sort_names(graph.dependencies_of(module)):
            if dependency in graph:
                click.echo(f"  {dependency}")
            else:
                click.echo(f"  {dependency}  {click.style('(not detected)', fg='yellow')}")

    unresolved = graph.unresolved_names()
    if unresolved:
        click.echo(f"\n{len(unresolved)} referenced module(s) without a descriptor:")
        for name in ordering.sort_names(unresolved):
            click.echo(f"  {name}")


@cli.command()
@click.option("--port", "-p", default=8430, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the HTTP API. "
            "Install with: pip install 'modgraph[web]'"
        )

    from modgraph.web import create_app

    click.echo(f"Starting modgraph API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


def main():
    cli()


if __name__ == "__main__":
    main()
