"""
Command-line interface for Page Reader.

Uses Typer to read a single URL or markup file and print one of its
artifacts. Loads a .env file so proxy variables apply to the fetch.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from .config import load_config
from .errors import ReaderError
from .fetch import is_fetchable
from .logging_utils import setup_logging
from .runner import read_sync

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)

FORMATS = ("text", "html", "content", "json")


@app.command()
def read(
    target: str = typer.Argument(..., help="URL to fetch, or a path to a local markup file."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    format: str = typer.Option("text", "--format", "-f", help="Output: text, html, content or json."),
    encoding: str | None = typer.Option(None, "--encoding", help="Override the source charset."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write output to a file."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Extract the readable article from TARGET.

    Args:
        target: URL or local file path
        config: Optional path to YAML config file
        format: Which artifact to print
        encoding: Charset override for fetched content
        output: Optional output file instead of stdout
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Enable/disable file logging
    """
    load_dotenv()

    if format not in FORMATS:
        raise typer.BadParameter(f"format must be one of {', '.join(FORMATS)}", param_hint="--format")

    cfg = load_config(str(config) if config else None)
    if encoding:
        cfg.fetch.encoding = encoding
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file

    logger = setup_logging(cfg.logging, output.parent if output else None)

    if not is_fetchable(target) and os.path.isfile(target):
        target = Path(target).read_text(encoding=cfg.fetch.encoding or "utf-8")

    try:
        readable, _ = read_sync(target, cfg, logger=logger)
    except ReaderError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    with readable:
        rendered = _render(readable, format)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        console.print(f"Written: {output}")
    else:
        console.print(rendered, markup=False, highlight=False, soft_wrap=True)


def _render(readable, fmt: str) -> str:
    if fmt == "html":
        return readable.html
    if fmt == "content":
        return readable.content or ""
    if fmt == "json":
        payload = {
            "title": readable.title,
            "content": readable.content,
            "text_body": readable.text_body,
            "original_url": readable.original_url,
            "metadata": readable.metadata.as_dict(),
        }
        return json.dumps(payload, ensure_ascii=False, indent=2, default=str)
    return f"{readable.title}\n\n{readable.text_body}"


if __name__ == "__main__":
    app()
