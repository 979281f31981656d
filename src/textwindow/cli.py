"""CLI implementation for textwindow."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from . import fetch_text, search_text
from .config import Settings, ConfigValidationError, validate_log_level
from .core.model import TextWindowError, RangeError
from .core.util import search_asdict

app = typer.Typer(add_completion=False, help="Fetch line-clean ranges from, and search, large text files and URLs.")

logger = logging.getLogger(__name__)


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigValidationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (default: $TEXTWINDOW_LOG_LEVEL or WARNING)"),
):
    """Fetch line-clean ranges from, and search, large text files and URLs."""
    if log_level is None:
        level = _load_settings().log_level
    else:
        try:
            level = validate_log_level(log_level, "--log-level")
        except ConfigValidationError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=2)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _source(src: str) -> str:
    if src.startswith(("http://", "https://")):
        return src
    return str(Path(src).resolve())


@app.command()
def fetch(
    source: str = typer.Argument(..., help="File path or URL"),
    range_spec: Optional[str] = typer.Option(None, "--range", "-r", help="Range spec, e.g. bytes=100-199, bytes=100-, bytes=-500"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
):
    """Print the requested byte range, trimmed to whole lines."""
    settings = _load_settings()
    try:
        result = fetch_text(_source(source), range_spec, settings=settings)
    except RangeError as e:
        typer.echo(f"{e} (Content-Range: {e.content_range})", err=True)
        raise typer.Exit(code=1)
    except TextWindowError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    if output:
        output.write_bytes(result.payload)
    else:
        sys.stdout.buffer.write(result.payload)
        sys.stdout.flush()
    typer.echo(f"{result.status_code} Content-Range: {result.content_range}", err=True)


@app.command()
def search(
    source: str = typer.Argument(..., help="File path or URL"),
    query: str = typer.Argument(..., help="Literal text to look for"),
    max_hits: Optional[int] = typer.Option(None, "--max-hits", help="Stop after N hits (1-1000)"),
    start_offset: int = typer.Option(0, "--start-offset", min=0, help="Byte offset to resume from"),
    jsonl: bool = typer.Option(False, "--jsonl", help="Emit one JSON line per hit"),
):
    """Search for lines containing QUERY and print hits as JSON."""
    settings = _load_settings()
    try:
        result = search_text(_source(source), query, max_hits=max_hits,
                             start_offset=start_offset, settings=settings)
    except TextWindowError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    payload = search_asdict(result)
    if jsonl:
        for hit in payload["hits"]:
            typer.echo(json.dumps(hit))
        typer.echo(f"nextOffset: {payload['nextOffset']}", err=True)
    else:
        typer.echo(json.dumps(payload, indent=2))


@app.command()
def serve(
    root: str = typer.Argument(..., help="Directory (or base URL) holding the resources"),
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8080, "--port", min=0, max=65535, help="Port to listen on"),
):
    """Serve /text/range and /text/search for the resources under ROOT."""
    from werkzeug.serving import run_simple

    from .io import open_content_source
    from .service import TextService
    from .web import create_app

    settings = _load_settings()
    content = open_content_source(root, timeout=settings.http_timeout)
    app_ = create_app(TextService(content, settings))
    logger.info("Serving %s on http://%s:%d", root, host, port)
    run_simple(host, port, app_, threaded=True)


if __name__ == "__main__":
    app()
