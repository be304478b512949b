"""Content model for Folio.

This module defines the two values that flow through the per-file pipeline
and the pure function that turns one into the other.

Key classes:
- Metadata: Front-matter fields parsed from a single document.
- Page: Everything a layout needs to render one published document.

Key functions:
- assemble_page: Merge metadata, rendered content, CSS and JS into a Page.

Each worker owns its Metadata and Page exclusively; neither is shared
across threads or kept between runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from markupsafe import Markup

ASSETS_PATH = "./"


@dataclass
class Metadata:
    """Front-matter fields of a document.

    Attributes:
        title: Page title (front-matter key ``title``).
        description: Short description (front-matter key ``desc``).
        date: Publication date (front-matter key ``date``).
        published: Whether the document is built (front-matter key ``status``).
        css: Highlighting theme override (front-matter key ``css``).
        js: Raw script injected into the page (front-matter key ``js``).
        extra: All other front-matter keys, untouched.
    """

    title: str = ""
    description: str = ""
    date: datetime | None = None
    published: bool = False
    css: str | None = None
    js: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class Page:
    """Represents a rendered page ready to be substituted into the layout.

    Attributes:
        title: Page title, never empty.
        description: Short description.
        date: Publication date, if any.
        content: Rendered HTML content, embedded raw.
        inline_css: Stylesheet inlined into the page.
        inline_js: Script inlined into the page, embedded raw.
        assets_path: Relative prefix for links to copied assets.
        source_path: Path to the Markdown source.
        frontmatter: Extra front-matter keys for the layout.
    """

    title: str
    description: str
    date: datetime | None
    content: Markup
    inline_css: Markup
    inline_js: Markup
    assets_path: str = ASSETS_PATH
    source_path: Path | None = None
    frontmatter: dict[str, Any] = field(default_factory=dict)

    def context(self) -> dict[str, Any]:
        """Return the template context for this page.

        The page is available both as ``page`` and through its fields at the
        top level, so layouts can write ``{{ title }}`` or ``{{ page.title }}``.
        """
        return {
            "page": self,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "content": self.content,
            "inline_css": self.inline_css,
            "inline_js": self.inline_js,
            "assets_path": self.assets_path,
            "frontmatter": self.frontmatter,
        }


def default_title(source_path: Path, title: str) -> str:
    """Return ``title``, or the file name without its ``.md`` extension if empty."""
    if title:
        return title
    name = source_path.name
    if name.endswith(".md"):
        name = name[: -len(".md")]
    return name


def assemble_page(
    metadata: Metadata,
    content_html: str,
    css: str,
    js: str,
    source_path: Path,
) -> Page:
    """Build the Page for a published document.

    Args:
        metadata: Parsed front matter.
        content_html: Rendered HTML body.
        css: Stylesheet to inline.
        js: Script to inline.
        source_path: Path to the Markdown source, used for the title fallback.

    Returns:
        Page with a non-empty title and the fixed assets prefix.
    """
    return Page(
        title=default_title(source_path, metadata.title),
        description=metadata.description,
        date=metadata.date,
        content=Markup(content_html),
        inline_css=Markup(css),
        inline_js=Markup(js),
        assets_path=ASSETS_PATH,
        source_path=source_path,
        frontmatter=dict(metadata.extra),
    )
