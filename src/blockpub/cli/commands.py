"""CLI command implementations"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from blockpub.config import Settings, load_config
from blockpub.core.blocks.errors import BlockError
from blockpub.core.blocks.parse import parse_document
from blockpub.core.blocks.transform import default_converters
from blockpub.core.content import CONTENT_TYPE_PREFIX, split_type_declaration
from blockpub.core.pipeline import run_build
from blockpub.crud.database import init_db, make_engine
from blockpub.crud.records import record_render


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _echo_records(counts: dict, changes: list) -> None:
    """Print per-render status and a summary line."""
    for status, name in changes:
        typer.echo(f"  {status}: {name}")
    typer.echo(
        f"Build complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged"
    )


def build_cmd(
    source: Annotated[Optional[str], typer.Option("--source", "-s", help="Directory content is sourced from")] = None,
    destination: Annotated[Optional[str], typer.Option("--destination", "-d", help="Directory the site is built to")] = None,
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Path to the site config.json file")] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Log debug output")] = False,
    ):
    """Parse all content, render posts and section pages, and record the results."""
    settings = _settings(overrides={
        "source_dir": source, "output_dir": destination, "site_config": config, "debug": debug or None,
    })
    if settings.debug:
        logging.basicConfig(level=logging.DEBUG)

    try:
        results = run_build(
            settings.source_dir, settings.output_dir,
            settings.site_config, settings.markdown_preset,
        )
    except (OSError, RuntimeError, ValueError) as e:
        _fail("Build failed", e)

    engine = make_engine(settings.db_url)
    init_db(engine)
    counts = {"created": 0, "updated": 0, "unchanged": 0}
    changes = []
    rendered_at = datetime.now()
    with Session(engine) as session:
        for result in results:
            record, status = record_render(session, result.export, result.permalink)
            counts[status] += 1
            if status != 'unchanged':
                changes.append((status, record.name))
        session.commit()
    typer.echo(f"Rendered {len(results)} page(s) to {settings.output_dir}/ at {rendered_at:%Y-%m-%d %H:%M:%S}")
    _echo_records(counts, changes)


def parse_cmd(
    path: Annotated[Path, typer.Argument(help="Block document to parse")],
    preset: Annotated[Optional[str], typer.Option("--markdown-preset", help="MarkdownIt preset name")] = None,
    ):
    """Print the assembled document of a block file as JSON."""
    settings = _settings(overrides={"markdown_preset": preset})
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"Couldn't read {path}", e)
    try:
        if text.startswith(CONTENT_TYPE_PREFIX):
            _, text = split_type_declaration(text)
        document = parse_document(text, default_converters(settings.markdown_preset))
    except BlockError as e:
        _fail(f"Failed to parse {path}", e)
    typer.echo(json.dumps(document, indent=2, ensure_ascii=False))
