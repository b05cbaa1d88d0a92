"""
smithywire — CLI entrypoint.

Usage:
    python -m smithywire.main --help
    python -m smithywire.main evaluate
    python -m smithywire.main config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from smithywire import __version__
from smithywire.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="smithywire")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to build.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """smithywire — wire Smithy model builds into a project."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(debug=debug, verbose=verbose, quiet=quiet)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def evaluate(ctx: click.Context, as_json: bool) -> None:
    """Apply the smithy plugin to a build and show what was wired."""
    from smithywire.core.use_cases.evaluate import run_evaluate

    result = run_evaluate(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    project = result.project
    report = result.report
    assert project is not None and report is not None

    click.secho(f"\n🔧 {project.name}", fg="cyan", bold=True)
    click.echo(f"   {project.project_dir}")
    click.echo()

    click.secho("   Smithy sources:", fg="white", bold=True)
    for name in report.source_sets:
        sds = project.source_sets[name].extensions["smithy"]
        click.echo(f"     • {name}")
        for directory in sds.src_dirs:
            click.echo(f"         {directory.as_posix()}")

    click.echo()
    click.secho("   Smithy CLI:", fg="white", bold=True)
    cli_line = f"     {report.cli.version} ({report.cli.source})"
    if report.cli.added is not None:
        cli_line += f"  → added {report.cli.added.notation}"
    click.echo(cli_line)

    click.echo()
    click.secho("   Build task:", fg="white", bold=True)
    if report.wired_to:
        click.secho(f"     ✓ {report.wired_to} depends on smithyBuildJar", fg="green")
    else:
        click.secho("     ⊘ smithyBuildJar is disabled", fg="yellow")

    if ctx.obj.get("verbose"):
        click.echo()
        click.secho("   Events:", fg="white", bold=True)
        for event in result.events:
            click.echo(f"     {event['seq']:>3} {event['type']} {event['key']}")

    click.echo()


@cli.group()
def config() -> None:
    """Build configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate build.yml configuration."""
    from smithywire.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.build is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Project: {result.build.name}")
        click.echo(f"   Plugins: {', '.join(result.build.plugins) or '-'}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


if __name__ == "__main__":
    cli()
