"""``recaudit`` command-line interface.

Commands:
    diff      -- Diff log entries read from a JSON file and print the results.
    profiles  -- Print the category diff profile table.
    serve     -- Run the REST API under uvicorn.
"""

from __future__ import annotations

import json
from typing import IO, Any

import click
from pydantic import ValidationError

from recaudit.api.schemas import LogEntryRequest
from recaudit.config import load_config
from recaudit.diff.profiles import PROFILES
from recaudit.history.service import diff_entries
from recaudit.models.entries import LogEntry
from recaudit.observability.logging import setup_logging


def _load_entries(source: IO[str]) -> list[LogEntry]:
    try:
        payload: Any = json.load(source)
    except json.JSONDecodeError as exc:
        raise click.UsageError(f"input is not valid JSON: {exc}") from exc
    items = payload if isinstance(payload, list) else [payload]
    entries: list[LogEntry] = []
    for index, item in enumerate(items):
        try:
            entries.append(LogEntryRequest.model_validate(item).to_entry())
        except ValidationError as exc:
            first = exc.errors()[0]
            where = ".".join(str(part) for part in first.get("loc", ()))
            raise click.UsageError(f"entry {index}: {where}: {first.get('msg', '')}") from exc
    return entries


@click.group()
@click.version_option(package_name="recaudit")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Structured change reports for business record history."""
    config = load_config()
    setup_logging(config.log.level, config.log.format)
    ctx.obj = config


@cli.command()
@click.argument("source", type=click.File("r"))
@click.option("--workers", type=click.IntRange(1, 32), default=None, help="Parallel diff workers.")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation.")
@click.pass_obj
def diff(config: Any, source: IO[str], workers: int | None, indent: int) -> None:
    """Diff the log entries in SOURCE (a JSON object or list; '-' for stdin)."""
    entries = _load_entries(source)
    results = diff_entries(entries, workers=workers or config.diff.workers)
    payload = [r.to_dict() for r in results]
    click.echo(json.dumps(payload, indent=indent or None, ensure_ascii=False, allow_nan=False))


@cli.command()
def profiles() -> None:
    """Print the category diff profiles."""
    click.echo(json.dumps([p.to_dict() for p in PROFILES.values()], indent=2))


@cli.command()
@click.option("--host", default=None, help="Bind address (default: RECAUDIT_API_HOST).")
@click.option("--port", type=int, default=None, help="Bind port (default: RECAUDIT_API_PORT).")
@click.pass_obj
def serve(config: Any, host: str | None, port: int | None) -> None:
    """Run the REST API."""
    import uvicorn

    from recaudit.api.app import create_app

    setup_logging(config.log.level, config.log.format)
    uvicorn.run(
        create_app(config=config),
        host=host or config.api.host,
        port=port or config.api.port,
        log_level=config.log.level,
    )
