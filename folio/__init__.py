"""Folio static site generator.

This package turns a tree of Markdown documents with front matter into a static
HTML site. Each document is parsed, rendered with mistune and Pygments, wrapped
in a shared Jinja2 layout and written next to a verbatim copy of the assets tree.

The main entry point is the CLI module, which provides commands for scaffolding
new projects, creating documents and building sites.

Every build is a full rebuild:
- The output directory is wiped and recreated.
- Assets are mirrored before any page is rendered.
- Each Markdown file is processed by its own worker; one failing file never
  stops the others.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
