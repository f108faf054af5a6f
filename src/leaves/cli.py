"""CLI entry point for leaves.

Provides the Textual TUI launcher (default) and headless subcommands for
listing the collection and printing laid-out poems.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from leaves import __version__
from leaves.config.paths import CONFIG_DIR, CONFIG_FILE, LOG_FILE, ensure_dirs
from leaves.config.settings import Settings, get_settings
from leaves.models import Poem, resolve_version
from leaves.services.layout import render_text
from leaves.services.library import LibraryIndex
from leaves.services.loader import PoemLoadError, load_poems
from leaves.utils.formatting import format_byline, format_language
from leaves.utils.terminal import content_height

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _json_output(data: Any, *, compact: bool = False) -> None:
    """Print *data* as JSON to stdout."""
    indent = None if compact else 2
    click.echo(json.dumps(data, indent=indent, ensure_ascii=False, default=str))


def _error(msg: str) -> NoReturn:
    """Print an error message to stderr and exit with code 1."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


def _load(ctx: click.Context) -> list[Poem]:
    """Load the collection; exit with a friendly message on failure."""
    poems_dir = _settings(ctx).poems_dir
    try:
        return load_poems(poems_dir)
    except PoemLoadError as exc:
        _error(f"{exc}\nSet [general] poems_dir in {CONFIG_FILE} or pass --poems-dir.")


def _setup_logging(verbose: bool, log_file: Path | None) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            level=level,
            filename=log_file,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )
    else:
        logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="leaves")
@click.option(
    "--poems-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory of .poem files (overrides config.toml).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Write logs to this file (the TUI always logs to {LOG_FILE}).",
)
@click.pass_context
def main(ctx: click.Context, poems_dir: Path | None, verbose: bool, log_file: Path | None) -> None:
    """leaves -- read a personal poetry collection in the terminal.

    Launch without arguments to start the interactive reader.
    """
    ensure_dirs()
    interactive = ctx.invoked_subcommand is None
    # The TUI owns the terminal, so its logs always go to a file.
    _setup_logging(verbose, log_file or (LOG_FILE if interactive else None))

    settings = get_settings()
    if poems_dir is not None:
        settings.general.poems_dir = str(poems_dir)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings

    if interactive:
        from leaves.app import LeavesApp

        app = LeavesApp(_load(ctx), settings)
        app.run()


# ---------------------------------------------------------------------------
# Headless commands
# ---------------------------------------------------------------------------


@main.command("list")
@click.option(
    "--by",
    "group",
    type=click.Choice(["title", "author", "language"]),
    default="title",
    show_default=True,
    help="How to list the collection.",
)
@click.pass_context
def list_poems(ctx: click.Context, group: str) -> None:
    """List poems by title, or authors/languages with counts."""
    library = LibraryIndex(_load(ctx))
    if library.is_empty:
        click.echo("No poems found.")
        return

    if group == "author":
        for author in library.sorted_authors():
            click.echo(f"{author} ({library.author_counts[author]})")
    elif group == "language":
        for lang in library.sorted_languages():
            click.echo(f"{format_language(lang)} ({library.language_counts[lang]})")
    else:
        for i, title in library.sorted_titles():
            click.echo(format_byline(library[i].canonical.author, title))


@main.command()
@click.argument("query")
@click.option("--version", "version_key", default="canonical", show_default=True, help="Version key to show.")
@click.option("--height", type=int, default=None, help="Viewport height for vertical scripts.")
@click.option("--width", type=int, default=None, help="Wrap horizontal lines at this width.")
@click.pass_context
def show(ctx: click.Context, query: str, version_key: str, height: int | None, width: int | None) -> None:
    """Print a poem laid out for the terminal.

    QUERY is matched against titles and authors; the first match is shown.
    """
    library = LibraryIndex(_load(ctx))
    matches = library.search(query)
    if not matches:
        _error(f"No poem matches {query!r}.")

    poem = library[matches[0]]
    if version_key != "canonical" and version_key not in poem.variants:
        available = ", ".join(poem.version_keys())
        _error(f"{poem.canonical.title!r} has no version {version_key!r} (available: {available}).")

    version = resolve_version(poem, version_key)
    settings = _settings(ctx)
    text = render_text(
        version,
        height or content_height(),
        width=width,
        indent=settings.display.wrap_indent,
    )
    click.echo(format_byline(version.author, version.title))
    click.echo()
    click.echo(text)


@main.command()
@click.option("--json", "compact_json", is_flag=True, help="Compact JSON output (no indentation).")
@click.pass_context
def stats(ctx: click.Context, compact_json: bool) -> None:
    """Show collection statistics as JSON."""
    library = LibraryIndex(_load(ctx))
    _json_output(
        {
            "poems": len(library),
            "versions": sum(library.language_counts.values()),
            "authors": {a: library.author_counts[a] for a in library.sorted_authors()},
            "languages": {lang: library.language_counts[lang] for lang in library.sorted_languages()},
        },
        compact=compact_json,
    )


@main.command()
def config() -> None:
    """Open the config file in your editor.

    Uses $EDITOR if set, otherwise falls back to xdg-open.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    # Ensure a default config exists.
    if not CONFIG_FILE.exists():
        Settings().save(CONFIG_FILE)

    editor = os.environ.get("EDITOR")
    if editor:
        target = str(CONFIG_FILE)
    else:
        editor = shutil.which("xdg-open")
        target = str(CONFIG_DIR)
        if editor is None:
            _error(f"No $EDITOR set and xdg-open not found. Open manually: {CONFIG_DIR}")

    try:
        subprocess.run([editor, target], check=True)
    except (subprocess.CalledProcessError, FileNotFoundError) as exc:
        _error(f"Failed to open editor: {exc}")
