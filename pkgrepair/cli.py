"""CLI entry point: pkgrepair.

Subcommands:
    pkgrepair run ./scratch --source package.json --locked locked.json   # repair a manifest
    pkgrepair classify install.log                                       # alias from a diagnostic
"""

from __future__ import annotations

import dataclasses
import sys
from pathlib import Path

import click

from pkgrepair.core.config import PACKAGE_MANAGERS, Settings
from pkgrepair.core.logging import setup_logging
from pkgrepair.diagnostics import GRAMMAR_REGISTRY, classify
from pkgrepair.exceptions import (
    ManifestError,
    PersistenceFailure,
    RetryBudgetExhausted,
    UnclassifiableFailure,
)
from pkgrepair.installer import CommandInstaller
from pkgrepair.manifest import load_locked_dependencies
from pkgrepair.runner import repair_sync
from pkgrepair.workspace import prepare_workspace

EXIT_ERROR = 1
EXIT_UNCLASSIFIABLE = 2
EXIT_EXHAUSTED = 3

# Tail of the install output echoed on failure
_DIAGNOSTIC_TAIL_LINES = 20


def _tail(text: str, lines: int = _DIAGNOSTIC_TAIL_LINES) -> str:
    return "\n".join(text.strip().splitlines()[-lines:])


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """pkgrepair: prune unresolvable packages from a manifest until it installs."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    setup_logging(level="DEBUG" if verbose else settings.log_level, log_format=settings.log_format)
    ctx.obj = settings


@main.command("run")
@click.argument("project_root", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--source",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Manifest to copy into PROJECT_ROOT before repairing",
)
@click.option(
    "--locked",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON locked dependency set (name -> {name, version})",
)
@click.option(
    "--export-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where to write the removal audit (default: PROJECT_ROOT/removed-items)",
)
@click.option(
    "--package-manager",
    type=click.Choice(PACKAGE_MANAGERS),
    default=None,
    help="Package manager whose diagnostics are parsed",
)
@click.option("--install-command", default=None, help="Override the install command line")
@click.pass_obj
def run(
    settings: Settings,
    project_root: Path,
    source: Path | None,
    locked: Path | None,
    export_dir: Path | None,
    package_manager: str | None,
    install_command: str | None,
) -> None:
    """Repair the manifest in PROJECT_ROOT until its install succeeds."""
    if package_manager and package_manager != settings.package_manager:
        settings = dataclasses.replace(
            settings,
            package_manager=package_manager,
            install_command=(package_manager, "install"),
        )
    installer = CommandInstaller(install_command or settings.install_command)
    export_root = export_dir or project_root / "removed-items"

    try:
        if source is not None:
            staged = prepare_workspace(source, project_root, settings.manifest_name)
            click.echo(f"Copied {source} to {staged}")

        locked_set = load_locked_dependencies(locked) if locked else {}
        result = repair_sync(
            project_root,
            locked_set,
            export_root,
            installer=installer,
            settings=settings,
        )
    except UnclassifiableFailure as e:
        click.echo(f"Error: {e}", err=True)
        click.echo(_tail(e.diagnostic), err=True)
        click.echo(f"Removal audit written to {export_root}", err=True)
        sys.exit(EXIT_UNCLASSIFIABLE)
    except RetryBudgetExhausted as e:
        click.echo(f"Error: {e}", err=True)
        click.echo(_tail(e.diagnostic), err=True)
        click.echo(f"Removal audit written to {export_root}", err=True)
        sys.exit(EXIT_EXHAUSTED)
    except (ManifestError, PersistenceFailure) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    record = result.record
    click.echo(f"Install succeeded after {result.attempts} attempt(s) (budget {result.budget}).")
    click.echo(f"  Removed dependencies:    {len(record.removed_names('dependencies'))}")
    click.echo(f"  Removed devDependencies: {len(record.removed_names('devDependencies'))}")
    click.echo(f"  Removed scripts:         {len(record.scripts)}")
    click.echo(f"Removal audit written to {export_root}")


@main.command("classify")
@click.argument("diagnostic_file", type=click.File("r"), default="-")
@click.option(
    "--grammar",
    type=click.Choice(sorted(GRAMMAR_REGISTRY)),
    default=None,
    help="Diagnostic grammar (default: the configured package manager)",
)
@click.pass_obj
def classify_cmd(settings: Settings, diagnostic_file, grammar: str | None) -> None:
    """Print the package alias implicated by an install log (stdin if omitted)."""
    alias = classify(diagnostic_file.read(), grammar or settings.grammar)
    if alias is None:
        click.echo("No package could be identified in the diagnostic.", err=True)
        sys.exit(EXIT_UNCLASSIFIABLE)
    click.echo(alias)


if __name__ == "__main__":
    main()
