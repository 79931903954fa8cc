"""SUBSIFT CLI — terminal interface built with Typer + Rich."""

from __future__ import annotations

import asyncio
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from subsift import __version__
from subsift.core.config import load_config
from subsift.core.engine import EnumerationEngine, EnumerationResult
from subsift.utils.logger import configure_logging, get_logger

app = typer.Typer(
    name="subsift",
    help="[bold cyan]SUBSIFT[/] — passive subdomain enumeration from AnubisDB and crt.sh",
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _print_banner() -> None:
    """Print the SUBSIFT banner."""
    console.print(
        Panel(
            Text("SUBSIFT", style="bold cyan", justify="center"),
            subtitle=f"[dim]v{__version__} — AnubisDB + crt.sh[/]",
            border_style="cyan",
            expand=False,
        )
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]SUBSIFT[/] version [bold]{__version__}[/]")
        raise typer.Exit()


def _fatal(message: str) -> NoReturn:
    """Log *message* and terminate with a non-zero status."""
    logger.error(message)
    raise typer.Exit(code=1)


@app.command()
def sift(
    domain: Optional[str] = typer.Option(None, "-d", "--domain", help="Target domain"),
    output: Optional[str] = typer.Option(None, "-o", "--output", help="Output file path"),
    normalize_all: bool = typer.Option(
        False, "--normalize-all", help="Also strip wildcards and junk from AnubisDB results"
    ),
    config_file: Optional[str] = typer.Option(None, "--config", help="Custom config file"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    silent: bool = typer.Option(False, "--silent", help="Minimal output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """[bold]Enumerate subdomains of a domain into a text file.[/]

    Examples:

        subsift -d example.com -o out/example.txt

        subsift -d example.com -o subs.txt --normalize-all --verbose
    """
    configure_logging(log_file=log_file, verbose=verbose)

    if not domain:
        _fatal("Please provide a domain using the -d flag")
    if not output:
        _fatal("Please provide an output file using the -o flag")

    cfg = load_config(config_file)
    if normalize_all:
        cfg.sources.normalize_all = True

    if not silent:
        _print_banner()
        console.print(f"[bold green]►[/] Enumerating [bold]{domain}[/]")

    engine = EnumerationEngine(domain=domain, output_path=output, config=cfg)
    try:
        result = asyncio.run(engine.run())
    except OSError as exc:
        _fatal(f"Cannot write output {output}: {exc}")

    if not silent:
        _display_results(result)


def _display_results(result: EnumerationResult) -> None:
    """Render a Rich summary table of the enumeration."""
    console.print()
    table = Table(
        title=f"Subdomains — {result.domain}",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Source", style="cyan", no_wrap=True)
    table.add_column("Names", justify="right", style="bold")

    for source_name, names in result.sources.items():
        table.add_row(source_name, str(len(names)))
    table.add_row("[bold]unique[/]", str(len(result.subdomains)))

    console.print(table)
    console.print(
        f"\n[bold]Duration:[/] {result.duration:.1f}s  "
        f"[bold]Output:[/] {result.output_path}"
    )


def main() -> None:
    """Entry point registered in pyproject.toml."""
    app()
