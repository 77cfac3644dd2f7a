"""Command-line interface for Folio.

Commands:
- render: Render one document through its layout.
- meta: Print a document's front matter.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
import yaml
from jinja2 import TemplateSyntaxError

from . import __version__
from .build import build_page, render_file
from .config import load_config
from .errors import LayoutNotFoundError, ParseError
from .frontmatter import load_document
from .log import configure_logging

_SOURCE = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.group()
@click.version_option(version=__version__, prog_name="folio")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
def cli(verbose: bool):
    """Folio: render a Markdown document with front matter into a layout."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@cli.command()
@click.argument("source", type=_SOURCE)
@click.option(
    "--layouts",
    "layouts_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory of layout templates (overrides folio.yaml layouts_dir)",
)
@click.option(
    "--layout",
    "default_layout",
    help="Layout for documents whose front matter names none",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the page to this file instead of stdout",
)
@click.option(
    "--highlight/--no-highlight",
    default=None,
    help="Syntax highlight fenced code with Pygments",
)
def render(
    source: Path,
    layouts_dir: Path | None,
    default_layout: str | None,
    output: Path | None,
    highlight: bool | None,
):
    """Render SOURCE through the layout its front matter names."""
    config = load_config(source.parent)
    if layouts_dir is not None:
        config["layouts_dir"] = layouts_dir.resolve()
    if default_layout:
        config["default_layout"] = default_layout
    if highlight is not None:
        config["highlight"] = highlight

    try:
        if output is None:
            click.echo(render_file(source, config=config))
            return
        result = build_page(source, output_path=output, config=config)
    except (
        ParseError,
        LayoutNotFoundError,
        TemplateSyntaxError,
        UnicodeDecodeError,
    ) as exc:
        _fail(source, _format_error_message(exc))
    click.echo(f"Rendered {source} into {result.output_path}")


@cli.command()
@click.argument("source", type=_SOURCE)
def meta(source: Path):
    """Print the front matter of SOURCE as YAML."""
    try:
        document = load_document(source)
    except (ParseError, UnicodeDecodeError) as exc:
        _fail(source, _format_error_message(exc))
    if document.metadata:
        click.echo(
            yaml.safe_dump(document.metadata, sort_keys=False, allow_unicode=True),
            nl=False,
        )


def _format_error_message(exc: Exception) -> str:
    """Format a render failure into a user-friendly message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    if isinstance(exc, ParseError):
        if exc.lineno is not None:
            return f"{exc.message} (line {exc.lineno})"
        return exc.message
    if isinstance(exc, TemplateSyntaxError):
        return f"Template syntax error on line {exc.lineno}: {exc.message}"
    if isinstance(exc, UnicodeDecodeError):
        return f"File is not valid UTF-8 (byte {exc.start}: {exc.reason})"
    return str(exc)


def _fail(source: Path, message: str) -> None:
    """Report a failure on stderr and exit with status 1."""
    click.echo(click.style("Render failed:", fg="red", bold=True), err=True)
    click.echo(click.style(f"  File: {source}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {message}", fg="white"), err=True)
    raise SystemExit(1)


def main():
    """Entry point for the CLI application."""
    cli()
