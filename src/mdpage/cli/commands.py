"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel

from mdpage.config import Settings, load_config
from mdpage.core.pipeline import compile_file, write_page
from mdpage.crud.database import init_db, make_engine
from mdpage.crud.pages import delete_page, list_pages, upsert_page
from mdpage.styles import STYLE_DESCRIPTIONS, UnknownStyleError


logger = logging.getLogger(__name__)


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _registry(settings: Settings) -> Engine:
    """Engine for the page registry, with the schema in place."""
    engine = make_engine(settings.db_url)
    init_db(engine)
    return engine


def publish_cmd(
    file: Annotated[Path, typer.Argument(help="Markdown file to publish")],
    path: Annotated[Optional[str], typer.Option("--path", help="Route path (default: derived from title)")] = None,
    title: Annotated[Optional[str], typer.Option("--title", help="Override the page title")] = None,
    style: Annotated[Optional[str], typer.Option("--style", help="Style preset name")] = None,
    accent: Annotated[Optional[str], typer.Option("--accent", help="Accent colour override, e.g. #FF5733")] = None,
    private: Annotated[bool, typer.Option("--private", help="Make the page private")] = False,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the publish payload as JSON")] = False,
    ):
    """Compile a markdown file into a page, write it out and register its route."""
    settings = _settings(overrides={
        "style": style, "accent": accent, "output_dir": out,
        "public": False if private else None,
    })

    try:
        page = compile_file(
            file, settings.style,
            title=title, route=path, accent=settings.accent, public=settings.public,
        )
    except (FileNotFoundError, UnknownStyleError) as e:
        _fail(str(e))
    logger.info("Compiled %s: %d words, route %s", file, page.meta.word_count, page.route_path)

    code_path, _ = write_page(page, Path(settings.output_dir))

    engine = _registry(settings)
    try:
        with Session(engine) as session:
            _, status = upsert_page(session, page)
            session.commit()
    except Exception as e:
        _fail("Registering page failed", e)

    if as_json:
        typer.echo("PUBLISH_OUTPUT:" + json.dumps(page.publish_payload()))
        return
    typer.echo(f"  {page.route_path} -> {code_path}")
    typer.echo(
        f"{status}: {page.title} ({page.meta.reading_time}, "
        f"{len(page.headings)} heading(s), style={page.style})"
    )


def list_cmd():
    """List all registered pages."""
    settings = _settings()
    engine = _registry(settings)
    with Session(engine) as session:
        pages = list_pages(session)
    if not pages:
        typer.echo("No pages published.")
        raise typer.Exit(1)
    for p in pages:
        visibility = "public" if p.public else "private"
        typer.echo(f"{p.route_path}\t{p.title}\t{p.style}\t{visibility}")


def unpublish_cmd(
    route: Annotated[str, typer.Argument(help="Route path of the page to remove")],
    ):
    """Remove a page from the registry."""
    settings = _settings()
    engine = _registry(settings)
    route = route if route.startswith("/") else f"/{route}"
    with Session(engine) as session:
        removed = delete_page(session, route)
        session.commit()
    if not removed:
        _fail(f"No page published at {route}")
    typer.echo(f"Unpublished {route}")


def styles_cmd():
    """List available style presets."""
    for name, description in STYLE_DESCRIPTIONS.items():
        typer.echo(f"{name.value:<14} {description}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize the page registry schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        SQLModel.metadata.drop_all(engine)
        typer.echo("Existing data cleared.")
    init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")
