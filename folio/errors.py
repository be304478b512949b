"""Exception types for Folio.

Every error raised by the pipeline derives from FolioError so callers can
tell Folio failures apart from programming errors.

Fatal errors (abort the build):
- SetupError: the output directory could not be prepared.
- EnumerationError: the source tree could not be walked.

Non-fatal errors (logged, build continues):
- AssetCopyError: the assets tree could not be fully copied.
- BuildError: one document failed; wraps the underlying cause.

Per-document causes wrapped by BuildError:
- ParseError, RenderError, UnknownThemeError, TemplateError.
"""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base class for all Folio errors."""


class SetupError(FolioError):
    """The output directory could not be cleared or created."""


class EnumerationError(FolioError):
    """The source tree could not be walked reliably."""


class AssetCopyError(FolioError):
    """Copying the assets tree failed part way through."""


class ParseError(FolioError):
    """A front-matter block is malformed."""


class RenderError(FolioError):
    """A Markdown body could not be converted to HTML."""


class UnknownThemeError(FolioError):
    """A highlighting theme name is not registered with Pygments.

    Attributes:
        theme: The requested theme name.
    """

    def __init__(self, theme: str):
        self.theme = theme
        super().__init__(f"Unknown highlighting theme: {theme!r}")


class TemplateError(FolioError):
    """The layout template could not be loaded or rendered."""


class BuildError(FolioError):
    """Error while building a single page, with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")
