"""Protocol definitions for Folio.

The pipeline depends on these interfaces rather than on concrete classes so
that tests and embedding applications can substitute their own renderer.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for converting a document body to HTML.

    Implementations are shared by all worker threads and must not keep
    per-document state.
    """

    @abstractmethod
    def render(self, body: bytes) -> str:
        """Render a document body to HTML.

        Args:
            body: Document body without front matter.

        Returns:
            Rendered HTML.

        Raises:
            RenderError: If conversion fails.
        """
        ...
