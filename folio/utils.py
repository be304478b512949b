"""Utility functions for Folio.

This module contains small path and string helpers shared by the pipeline
and the CLI.

Key functions:
    is_markdown: Check if a path is a Markdown source file.
    derive_output_path: Map a Markdown source path to its HTML output path.
    ensure_clean_dir: Ensure a directory exists and is empty.
    slugify: Convert a name to a filename-friendly slug.
    titleize: Convert a filename to a human-readable title.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path

MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file name ends in ``.md``.
    """
    return path.name.endswith(MARKDOWN_SUFFIX)


def derive_output_path(source_path: Path, source_root: Path, output_root: Path) -> Path:
    """Return the HTML output path for a Markdown source file.

    Strips ``source_root`` from ``source_path``, swaps the trailing ``.md`` for
    ``.html`` and joins the result onto ``output_root``. Directories are not
    created here; the caller creates them when writing.

    Args:
        source_path: Path to a Markdown file under ``source_root``.
        source_root: Root of the source tree.
        output_root: Root of the output tree.

    Returns:
        Output path at the same relative location.

    Raises:
        ValueError: If ``source_path`` is not under ``source_root``.

    Examples:
        >>> derive_output_path(Path("src/posts/hello.md"), Path("src"), Path("dist"))
        PosixPath('dist/posts/hello.html')
    """
    rel = source_path.relative_to(source_root)
    name = rel.name
    if name.endswith(MARKDOWN_SUFFIX):
        name = name[: -len(MARKDOWN_SUFFIX)]
    return output_root / rel.parent / f"{name}{HTML_SUFFIX}"


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, removes it with all its contents, then creates
    it again.

    Args:
        path: Directory path to clean or create.

    Raises:
        OSError: If the directory cannot be removed or created.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
    path.mkdir(parents=True, exist_ok=True)


def slugify(name: str) -> str:
    """Convert a name to a lowercase, hyphen-separated slug.

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", name)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "untitled"


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Replaces hyphens and underscores with spaces and capitalizes each word.

    Examples:
        >>> titleize("getting-started.md")
        'Getting Started'
    """
    base = Path(filename).stem
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"
