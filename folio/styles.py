"""Highlighting stylesheets for Folio.

Code blocks are highlighted with CSS classes under ``.highlight``; this module
renders the matching stylesheet for a named Pygments theme so it can be
inlined into each page.
"""

from __future__ import annotations

import functools

from pygments.formatters import HtmlFormatter
from pygments.styles import get_all_styles, get_style_by_name
from pygments.util import ClassNotFound

from .errors import UnknownThemeError

CSS_CLASS = "highlight"
DEFAULT_THEME = "friendly"


@functools.lru_cache(maxsize=None)
def extract_css(theme_name: str) -> str:
    """Return the stylesheet for a Pygments theme.

    Args:
        theme_name: Registered Pygments style name, e.g. ``friendly``.

    Returns:
        CSS rules scoped to the ``.highlight`` class.

    Raises:
        UnknownThemeError: If no style with that name is registered.
    """
    try:
        style = get_style_by_name(theme_name)
    except ClassNotFound as exc:
        raise UnknownThemeError(theme_name) from exc
    return HtmlFormatter(style=style, cssclass=CSS_CLASS).get_style_defs(
        f".{CSS_CLASS}"
    )


def available_themes() -> list[str]:
    """Return the sorted names of all registered highlighting themes."""
    return sorted(get_all_styles())
