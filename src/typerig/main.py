"""
TypeRig - CLI Entry Point.

Usage:
    typerig run              Start the interactive rig
    typerig build            Compile every source unit and report results
    typerig map              Load every source unit and list exported types
    typerig version          Show version information
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from typerig.compiler import ArtifactCompiler, error_report_path
from typerig.config import settings
from typerig.console import ConsoleHelper
from typerig.dispatch import DispatchHandler, SimpleDispatchHandler
from typerig.log_setup import setup_logging
from typerig.session import SessionManager
from typerig.types import Feedback

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="typerig",
    help="TypeRig - build, load and poke at Python types interactively.",
    add_completion=False,
)
console = Console()

SourceOption = typer.Option(None, "--source", "-s", help="Folder with source units (default: TYPERIG_SOURCE_FOLDER)")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level")
RebuildOption = typer.Option(False, "--rebuild", "-r", help="Rebuild artifacts even if they already exist")


def _make_session(source: Path | None, cli: ConsoleHelper, rebuild: bool) -> SessionManager:
    return SessionManager(
        source or Path(settings.source_folder),
        cli,
        compiler=ArtifactCompiler(rebuild_stale=settings.rebuild_stale),
        skip_if_exists=settings.skip_if_exists and not rebuild,
        recursive=settings.recursive,
    )


def run_loop(session: SessionManager, handler: DispatchHandler, cli: ConsoleHelper) -> None:
    """Read commands until $Quit; failures are reported and the loop continues."""
    while True:
        try:
            cmd = cli.get_user_input()
            if cmd is None or not cmd.is_valid:
                # Feedback already shown by the console helper
                continue

            if cmd.is_session:
                if not session.command(cmd):
                    break
                continue

            if not session.has_context:
                cli.show_message("ERROR: no current object in context.", Feedback.ERROR)
                continue

            handler.dispatch(session.current_object, cmd)

        except (KeyboardInterrupt, EOFError):
            cli.show_message("Session interrupted. Bye !", Feedback.DULL)
            break
        except Exception as e:
            logger.exception("Unexpected error while handling a command")
            cli.show_message(f"Error: {e}", Feedback.ERROR)


@app.command()
def run(
    source: Path = SourceOption,
    verbose: bool = VerboseOption,
    rebuild: bool = RebuildOption,
) -> None:
    """Start the interactive rig."""
    setup_logging(settings.log_level, settings.log_file, verbose)

    cli = ConsoleHelper(settings.title)
    cli.console.print(
        Panel.fit(
            "[bold green]TypeRig[/bold green]\n"
            "Load a type with [bold]$Set <type>[/bold], list types with [bold]$Map[/bold].\n"
            "Then [bold]Get <prop>[/bold], [bold]Get *[/bold] or [bold]Set <prop> = <value>[/bold].\n\n"
            "[dim]$Refresh rebuilds the type map, $Quit ends the session.[/dim]",
            title=settings.title,
            border_style="green",
        )
    )

    session = _make_session(source, cli, rebuild)
    handler = SimpleDispatchHandler(cli)

    with cli.console.status("Compiling and loading source units..."):
        asyncio.run(session.init())
    cli.show_message(f"{len(session.registry)} type(s) loaded from {session.source_folder}", Feedback.SUCCESS)

    try:
        run_loop(session, handler, cli)
    finally:
        session.close()


@app.command()
def build(
    source: Path = SourceOption,
    verbose: bool = VerboseOption,
    rebuild: bool = RebuildOption,
) -> None:
    """Compile every source unit and report which ones failed."""
    setup_logging(settings.log_level, settings.log_file, verbose)

    session = _make_session(source, ConsoleHelper(console=console), rebuild)
    sources = session.scan_sources()
    if not sources:
        console.print(f"[dim]No source units found in {session.source_folder}.[/dim]")
        return

    table = Table(title=f"Build results ({session.source_folder})")
    table.add_column("Source unit")
    table.add_column("Result")
    table.add_column("Error report", style="dim")

    failures = 0
    for path in sources:
        if session.compile_source(path):
            table.add_row(path.name, "[green]ok[/green]", "")
        else:
            failures += 1
            table.add_row(path.name, "[red]failed[/red]", str(error_report_path(path)))

    console.print(table)
    if failures:
        raise typer.Exit(1)


@app.command(name="map")
def map_types(
    source: Path = SourceOption,
    verbose: bool = VerboseOption,
    rebuild: bool = RebuildOption,
) -> None:
    """Load every source unit and list the types it exports."""
    setup_logging(settings.log_level, settings.log_file, verbose)

    session = _make_session(source, ConsoleHelper(console=console), rebuild)
    asyncio.run(session.refresh(purge=False))

    if not len(session.registry):
        console.print("[dim]No types loaded.[/dim]")
        return

    table = Table(title="Loaded types")
    table.add_column("Type")
    table.add_column("Kind")
    table.add_column("Source unit", style="dim")
    for descriptor in sorted(session.registry, key=lambda d: d.fq_name):
        table.add_row(descriptor.fq_name, descriptor.kind.value, descriptor.source_file.name)
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from typerig import __version__

    console.print(f"TypeRig version {__version__}")


if __name__ == "__main__":
    app()
