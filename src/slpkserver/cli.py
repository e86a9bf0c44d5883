"""Command line interface for slpkserver."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from slpkserver.config import AppConfig, ConfigError, load_config
from slpkserver.models import ResolvedFile
from slpkserver.serving.resolver import resolve_file_path
from slpkserver.serving.responses import classify_payload
from slpkserver.utils.files import etag_for
from slpkserver.web.app import create_app


console = Console()
app = typer.Typer(help="slpkserver - serve scene layer package assets over HTTP")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_config(
    config_path: Path | None,
    *,
    root: Path | None = None,
    path_base: str | None = None,
    web_root: Path | None = None,
) -> AppConfig:
    try:
        config = load_config(config_path) if config_path is not None else AppConfig()
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    slpk = config.slpk
    if root is not None:
        slpk = dataclasses.replace(slpk, root_folder=root)
    if path_base is not None:
        slpk = dataclasses.replace(slpk, path_base=path_base)
    slpk = dataclasses.replace(slpk, root_folder=slpk.resolve_root_folder(Path.cwd()))

    return dataclasses.replace(
        config,
        slpk=slpk,
        web_root=web_root if web_root is not None else config.web_root,
    )


@app.command()
def serve(
    config_path: Path = typer.Option(None, "--config", "-c", help="JSON settings file"),
    root: Path = typer.Option(None, "--root", help="Folder holding the extracted SLPK files"),
    path_base: str = typer.Option(None, "--path-base", help="URL prefix the assets are served under"),
    web_root: Path = typer.Option(None, "--web-root", help="Folder for other static files"),
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(5000, help="Server port"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Start the HTTP server."""
    _setup_logging(verbose)
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter("uvicorn is not installed.") from exc

    config = _load_config(config_path, root=root, path_base=path_base, web_root=web_root)
    if not config.slpk.root_folder.is_dir():
        console.print(
            f"[yellow]Warning: root folder {config.slpk.root_folder} not found, "
            "every request will return 404.[/yellow]"
        )

    console.print(
        f"Serving [bold]{config.slpk.root_folder}[/bold] on "
        f"http://{host}:{port}{config.slpk.path_base}"
    )
    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        reload=False,
        log_level="debug" if verbose else "info",
    )


@app.command()
def resolve(
    request_path: str = typer.Argument(..., help="Request path below the URL prefix, e.g. /layers/0"),
    config_path: Path = typer.Option(None, "--config", "-c", help="JSON settings file"),
    root: Path = typer.Option(None, "--root", help="Folder holding the extracted SLPK files"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show which file a request path is answered with."""
    _setup_logging(verbose)
    config = _load_config(config_path, root=root)

    file_path = resolve_file_path(request_path, config.slpk)
    if file_path is None:
        console.print(f"[yellow]No file found for {request_path}.[/yellow]")
        raise typer.Exit(code=1)

    resolved = ResolvedFile.from_path(file_path)
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("File")
    table.add_column("Kind")
    table.add_column("Size")
    table.add_column("ETag")
    table.add_row(
        str(resolved.path),
        classify_payload(resolved.path).value,
        str(resolved.size),
        etag_for(resolved.mtime_ns),
    )
    console.print(table)
