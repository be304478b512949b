"""Layout rendering for Folio.

This module uses Jinja2 to substitute a Page into the shared layout template.

Key functions:
- render_layout: Render a page into the layout and return the output bytes.

The layout is loaded from disk on every call; no compiled template is kept
between pages. Undefined variables are errors rather than empty strings, so a
layout that references a field the page does not have fails loudly.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
    select_autoescape,
)
from jinja2 import TemplateError as JinjaTemplateError

from .content import Page
from .errors import TemplateError


def _environment(layout_dir: Path) -> Environment:
    """Create a fresh Jinja2 environment rooted at the layout directory."""
    return Environment(
        loader=FileSystemLoader(str(layout_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        cache_size=0,
        keep_trailing_newline=True,
    )


def render_layout(page: Page, layout_path: Path) -> bytes:
    """Render a page into the layout template.

    Args:
        page: Assembled page.
        layout_path: Path to the layout template file.

    Returns:
        Rendered HTML encoded as UTF-8.

    Raises:
        TemplateError: If the layout cannot be read or parsed, or rendering fails.
    """
    env = _environment(layout_path.parent)
    try:
        template = env.get_template(layout_path.name)
    except TemplateNotFound as exc:
        raise TemplateError(f"Layout template not found: {layout_path}") from exc
    except TemplateSyntaxError as exc:
        raise TemplateError(
            f"Template syntax error in {layout_path} on line {exc.lineno}: {exc.message}"
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateError(f"Failed to read layout template {layout_path}: {exc}") from exc

    try:
        rendered = template.render(**page.context())
    except TemplateSyntaxError as exc:
        # raised by templates pulled in with include/extends
        raise TemplateError(
            f"Template syntax error in {exc.filename} on line {exc.lineno}: {exc.message}"
        ) from exc
    except UndefinedError as exc:
        raise TemplateError(
            f"Undefined variable while rendering {page.title!r}: {exc.message}"
        ) from exc
    except JinjaTemplateError as exc:
        raise TemplateError(
            f"Failed to render layout for page {page.title!r}: {exc}"
        ) from exc
    return rendered.encode("utf-8")
