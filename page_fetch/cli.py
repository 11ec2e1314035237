"""
Command-line interface for Page Fetch.

Uses Typer to fetch a single URL with either backend and print the
result. Supports loading .env files for the microservice endpoint.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .config import load_config
from .fetch.factory import available_fetchers, create_fetcher
from .logging_utils import setup_logging

app = typer.Typer(add_completion=False)
console = Console(stderr=True)


def _parse_headers(values: list[str] | None) -> dict[str, str]:
    headers: dict[str, str] = {}
    for value in values or []:
        name, sep, header_value = value.partition(":")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected KEY:VALUE, got {value!r}", param_hint="--header")
        headers[name.strip()] = header_value.strip()
    return headers


@app.command()
def fetch(
    url: str = typer.Argument(..., help="URL to fetch."),
    backend: str = typer.Option(
        "fetch",
        "--backend",
        "-b",
        help=f"Fetch backend: {', '.join(available_fetchers())}.",
    ),
    wait_for: int | None = typer.Option(
        None, "--wait-for", "-w", min=0, help="Post-load wait in ms (browser backend)."
    ),
    header: list[str] | None = typer.Option(
        None, "--header", "-H", help="Extra header as KEY:VALUE, repeatable."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    log_level: str | None = typer.Option(
        None, "--log-level", envvar="LOGGING_LEVEL", help="Logging level."
    ),
    log_dir: Path | None = typer.Option(
        None, "--log-dir", help="Write the JSONL fetch log into this directory."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
):
    """Fetch a URL and print its body.

    Exits with status 1 when the fetch reports an error or returns no
    content, after printing the reason.

    Args:
        url: The URL to fetch
        backend: Name of the fetch backend
        wait_for: Post-load wait for the browser backend
        header: Extra headers in KEY:VALUE form
        config: Optional path to YAML config file
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for the JSONL log file
        as_json: Print the full result as JSON instead of the body
    """
    load_dotenv()

    try:
        cfg = load_config(str(config) if config else None)
    except ValueError as exc:
        console.print(f"[red]Invalid config:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.file = True
    logger = setup_logging(cfg.logging, log_dir)

    headers = _parse_headers(header)
    try:
        fetcher = create_fetcher(backend, cfg, logger=logger)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2) from exc

    result = asyncio.run(fetcher.fetch(url, wait_for_ms=wait_for, headers=headers))

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    elif result.ok:
        typer.echo(result.content)

    if not result.ok:
        if not as_json:
            reason = result.page_error or "empty content"
            console.print(
                f"[red]Fetch failed[/red] ({result.page_status_code or 'no status'}): {escape(reason)}",
                highlight=False,
            )
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
