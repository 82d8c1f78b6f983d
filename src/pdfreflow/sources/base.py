"""Base classes for page text sources (glyph-run extractors)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from pydantic import BaseModel, Field


class RawTextItem(BaseModel):
    """A text item as reported by an extractor, before normalization.

    ``transform`` is the 6-value text matrix ``(a, b, c, d, e, f)``; the
    item's origin is ``(e, f)`` in bottom-left page coordinates. Metrics the
    extractor cannot supply are left as ``None`` and estimated downstream.
    """

    text: str
    transform: tuple[float, float, float, float, float, float]
    width: float | None = None
    height: float | None = None
    font_name: str | None = None
    font_size: float | None = None


class PageText(BaseModel):
    """Viewport size and text items of one page."""

    page_number: int  # 1-based
    width: float
    height: float
    items: list[RawTextItem] = Field(default_factory=list)


class DocumentHandle(ABC):
    """An open document. Must be closed to release parser state.

    Use as a context manager; ``close`` is idempotent.
    """

    @property
    @abstractmethod
    def num_pages(self) -> int: ...

    @abstractmethod
    def get_page(self, page_number: int) -> PageText:
        """Read one page. ``page_number`` is 1-based."""
        ...

    async def aget_page(self, page_number: int) -> PageText:
        """Async variant. Defaults to sync implementation."""
        return self.get_page(page_number)

    @abstractmethod
    def close(self) -> None: ...

    def __enter__(self) -> DocumentHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class BasePageTextSource(ABC):
    """Abstract base for page text extractors.

    Implementations must not keep a reference to ``data`` beyond the
    returned handle's lifetime and must not mutate it.
    """

    name: str  # unique identifier for this source

    @abstractmethod
    def open(self, data: bytes) -> DocumentHandle:
        """Open a document from raw bytes."""
        ...
