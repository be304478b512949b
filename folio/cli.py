"""Command-line interface for Folio.

This module defines the CLI commands using Click framework.
It provides commands for creating new projects, creating documents and
building sites.

Commands:
- new: Scaffold a new Folio project.
- build: Build the site into the output directory.
- md: Create a new markdown document interactively.
- themes: List the available highlighting themes.
"""

from __future__ import annotations

import logging
import shutil
from datetime import date
from pathlib import Path

import click
import questionary
import yaml

from . import __version__
from .utils import slugify, titleize

# Path to the project skeleton copied by `folio new`
_SCAFFOLD_DIR = Path(__file__).parent / "scaffold"

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


class _ClickHandler(logging.Handler):
    """Logging handler that writes records to stderr through click."""

    _colors = {
        logging.ERROR: "red",
        logging.CRITICAL: "red",
        logging.WARNING: "yellow",
    }

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            click.echo(
                click.style(message, fg=self._colors.get(record.levelno)), err=True
            )
        except Exception:
            self.handleError(record)


def configure_logging(verbosity: int) -> None:
    """Send folio log records to stderr at a level chosen by ``-v`` flags.

    Args:
        verbosity: Number of ``-v`` flags; 0 = warnings, 1 = info, 2+ = debug.
    """
    logger = logging.getLogger("folio")
    logger.setLevel(_LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)])
    if not any(isinstance(h, _ClickHandler) for h in logger.handlers):
        handler = _ClickHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)


@click.group()
@click.version_option(version=__version__, prog_name="folio")
@click.option("-v", "--verbose", count=True, help="Increase log output (-vv for debug)")
def cli(verbose: int):
    """Folio static site generator."""
    configure_logging(verbose)


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Folio project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Folio site created at {target}")


@cli.command()
@click.option("--source", "source_dir", help="Source directory (overrides folio.yaml)")
@click.option("--output", "output_dir", help="Output directory (overrides folio.yaml)")
@click.option(
    "--code-style",
    help="Pygments theme for code highlighting (overrides folio.yaml)",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    required=False,
    help="Maximum number of worker threads (default: one per file)",
)
def build(
    source_dir: str | None,
    output_dir: str | None,
    code_style: str | None,
    workers: int | None,
):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import build_project
    from .errors import EnumerationError, SetupError

    try:
        result = build_project(
            project_root,
            source_dir=source_dir,
            output_dir=output_dir,
            code_style=code_style,
            workers=workers,
        )
    except (SetupError, EnumerationError) as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  Error: {exc}", fg="white"), err=True)
        raise SystemExit(1) from None

    click.echo(f"Built {len(result.written)} pages into {result.output_dir}")
    if result.skipped:
        click.echo(f"  Skipped {len(result.skipped)} unpublished documents")
    if result.failed:
        click.echo(
            click.style(f"  {len(result.failed)} documents failed:", fg="red"), err=True
        )
        for error in result.failed:
            click.echo(click.style(f"    {error}", fg="yellow"), err=True)


@cli.command()
def md():
    """Create a new markdown document interactively."""
    project_root = Path.cwd()
    from .build import load_config
    from .errors import SetupError

    try:
        config = load_config(project_root)
    except SetupError as exc:
        raise click.ClickException(str(exc)) from exc
    source_dir = project_root / config["source_dir"]

    if not source_dir.exists():
        raise click.ClickException(
            f"No {config['source_dir']}/ directory found. "
            "Run this command from a Folio project root."
        )

    folders = _get_content_folders(source_dir, exclude={config["assets_dir"]})

    folder = questionary.select(
        "Select folder:",
        choices=folders,
        style=_questionary_style(),
    ).ask()

    if folder is None:
        raise click.Abort()

    name = questionary.text(
        "Filename (without .md extension):",
        validate=lambda x: len(x.strip()) > 0 or "Filename cannot be empty",
        style=_questionary_style(),
    ).ask()

    if name is None:
        raise click.Abort()

    name = name.strip()

    publish = questionary.confirm(
        "Publish now? (sets status: true)",
        default=False,
        style=_questionary_style(),
    ).ask()

    if publish is None:
        raise click.Abort()

    target_dir = source_dir if folder == ". (root)" else source_dir / folder
    target_path = target_dir / f"{slugify(name)}.md"

    if target_path.exists():
        raise click.ClickException(
            f"File already exists: {target_path.relative_to(project_root)}"
        )

    target_dir.mkdir(parents=True, exist_ok=True)
    target_path.write_text(
        _document_stub(titleize(f"{name}.md"), publish, date.today()), encoding="utf-8"
    )

    rel_path = target_path.relative_to(project_root)
    click.echo(f"Created {rel_path}")


@cli.command()
def themes():
    """List the available highlighting themes."""
    from .styles import available_themes

    for theme in available_themes():
        click.echo(theme)


def _get_content_folders(source_dir: Path, exclude: set[str] | None = None) -> list[str]:
    """Get list of content folders in the source directory.

    Returns folders that aren't hidden or excluded (the assets tree).
    """
    exclude = exclude or set()
    folders = []
    for path in sorted(source_dir.rglob("*")):
        if not path.is_dir():
            continue
        rel = path.relative_to(source_dir)
        if rel.parts[0] in exclude or any(p.startswith(".") for p in rel.parts):
            continue
        folders.append(rel.as_posix())
    folders.insert(0, ". (root)")
    return folders


def _document_stub(title: str, publish: bool, today: date) -> str:
    """Return the text of a new document with a YAML front-matter block."""
    frontmatter = {
        "title": title,
        "desc": "",
        "date": today,
        "status": publish,
    }
    header = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n\n# {title}\n\n"


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path) -> None:
    """Create the directory structure and files for a new Folio project.

    Args:
        root: Root directory for the new project.
    """
    for src_path in sorted(_SCAFFOLD_DIR.rglob("*")):
        if src_path.is_dir():
            continue
        rel_path = src_path.relative_to(_SCAFFOLD_DIR)
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dest_path)
