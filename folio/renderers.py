"""Markdown rendering for Folio.

This module converts document bodies to HTML with mistune and highlights
fenced code blocks with Pygments.

Key classes:
- MarkdownRenderer: Renders Markdown bytes to an HTML string.

Documents are authored by the site owner, so raw HTML in the body is passed
through unescaped. The Markdown parser is built once per MarkdownRenderer
and shared read-only by every worker thread.
"""

from __future__ import annotations

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from .errors import RenderError
from .styles import CSS_CLASS

# GFM-equivalent extension set
PLUGINS = ["strikethrough", "table", "url", "task_lists", "footnotes"]


class _HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer that keeps raw HTML and highlights fenced code blocks."""

    def __init__(self):
        super().__init__(escape=False)
        self._formatter = HtmlFormatter(cssclass=CSS_CLASS)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Info string of the fence; its first word is the language.

        Returns:
            HTML string with highlighted code.
        """
        lang = info.split()[0] if info and info.strip() else ""
        lexer = TextLexer()
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                pass
        return highlight(code, lexer, self._formatter)


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    Supports tables, strikethrough, autolinks, task lists and footnotes.
    Code blocks are emitted as class-based markup styled by the stylesheet
    from ``folio.styles.extract_css``.
    """

    def __init__(self):
        self._markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(), plugins=PLUGINS
        )

    def render(self, body: bytes) -> str:
        """Render a Markdown body to HTML.

        Args:
            body: Markdown source as UTF-8 bytes.

        Returns:
            Rendered HTML.

        Raises:
            RenderError: If the body is not UTF-8 or conversion fails.
        """
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RenderError(f"Body is not valid UTF-8: {exc}") from exc
        try:
            return self._markdown(text)
        except Exception as exc:
            raise RenderError(f"Failed to convert markdown content: {exc}") from exc
