"""
CLI for CodeTools.

Provides command-line access to language detection, compaction,
uncompaction and formatting, and starts the HTTP server.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from codetools.core.config import configure_logging, load_config
from codetools.services import ServicesContainer, create_services

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="codetools",
    help="CodeTools - Code language detection, compaction and formatting",
    add_completion=False,
)

# Config file selected with the global --config option
_state: dict = {"config_path": None}


@app.callback()
def main(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (.yaml, .yml or .json)"
    ),
):
    """CodeTools command-line interface."""
    load_dotenv()
    _state["config_path"] = config


def get_services() -> ServicesContainer:
    """Initialize services from the selected config file, .env and defaults."""
    container = create_services(_state["config_path"])
    configure_logging(container.config.logging)
    return container


def _read_source(file: str) -> str:
    """Read source text from a file, or from stdin when ``file`` is '-'."""
    if file == "-":
        return sys.stdin.read()
    path = Path(file)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {file}")
    return path.read_text(encoding="utf-8")


def _run(coro, container: ServicesContainer):
    async def runner():
        try:
            return await coro
        finally:
            await container.code_service.aclose()

    return asyncio.run(runner())


@app.command()
def detect(
    file: str = typer.Argument(..., help="Source file to analyze ('-' for stdin)"),
):
    """Detect the language of a source file."""
    try:
        text = _read_source(file)
        container = get_services()
        outcome = _run(container.code_service.detect(text), container)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"[bold]Language:[/bold] [green]{outcome.language}[/green]")
    if not outcome.engines:
        console.print("[yellow]No engine produced a candidate.[/yellow]")
        return

    table = Table(title="Candidates", border_style="blue")
    table.add_column("Engine", style="cyan")
    table.add_column("Language", style="green")
    table.add_column("Confidence", style="magenta", justify="right")
    for candidate in outcome.engines:
        table.add_row(candidate.engine, candidate.language, f"{candidate.confidence:.2f}")
    console.print(table)


@app.command()
def compact(
    file: str = typer.Argument(..., help="Source file to compact ('-' for stdin)"),
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Language of the source (detected when omitted)"
    ),
):
    """Strip comments and insignificant whitespace from a source file."""
    try:
        text = _read_source(file)
        container = get_services()
        outcome = _run(container.code_service.compact(text, language), container)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.out(outcome.compacted_text, highlight=False)


@app.command()
def uncompact(
    file: str = typer.Argument(..., help="Compacted source file ('-' for stdin)"),
):
    """Re-indent compacted code and format it for its detected language."""
    try:
        text = _read_source(file)
        container = get_services()
        outcome = _run(container.code_service.uncompact(text), container)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.out(outcome.formatted_text, highlight=False)


@app.command("format")
def format_command(
    file: str = typer.Argument(..., help="Source file to format ('-' for stdin)"),
):
    """Format a source file with the formatter for its detected language."""
    try:
        text = _read_source(file)
        container = get_services()
        outcome = _run(container.code_service.format(text), container)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not outcome.success:
        console.print(f"[yellow]{outcome.message}[/yellow]", highlight=False)
    console.out(outcome.formatted_text, highlight=False)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="HTTP host (default from CODETOOLS_SERVER_HOST or 0.0.0.0)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="HTTP port (default from CODETOOLS_SERVER_PORT or 3000)"),
):
    """Start the HTTP API server."""
    import uvicorn

    try:
        from codetools.http_server import create_app

        container = get_services()
        cfg = container.config
        actual_host = host if host is not None else cfg.server.host
        actual_port = port if port is not None else cfg.server.port

        app_instance = create_app(services=container)
        console.print(f"[bold green]Starting API server at http://{actual_host}:{actual_port}[/bold green]")
        uvicorn.run(
            app_instance,
            host=actual_host,
            port=actual_port,
            reload=False,
            log_level=cfg.logging.level.lower(),
        )
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
