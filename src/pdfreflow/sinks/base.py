"""Base class for document sinks (re-flow renderers)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pdfreflow.core.config import DEFAULT_CONFIG, LayoutConfig
from pdfreflow.core.document import PdfTextMap


class BaseDocumentSink(ABC):
    """Abstract base for renderers that apply a text map to a document.

    ``regenerate`` must treat ``data`` as read-only and return a complete
    new document, or raise; it never returns partial output.
    """

    name: str  # unique identifier for this sink

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG

    @abstractmethod
    def regenerate(self, data: bytes, text_map: PdfTextMap) -> bytes:
        """Erase and redraw every modified block of ``text_map``."""
        ...

    async def aregenerate(self, data: bytes, text_map: PdfTextMap) -> bytes:
        """Async variant. Defaults to sync implementation."""
        return self.regenerate(data, text_map)
