"""PyMuPDF-backed page text source."""

from __future__ import annotations

from pdfreflow.core.registry import SourceRegistry
from pdfreflow.sources.base import BasePageTextSource, DocumentHandle, PageText, RawTextItem
from pdfreflow.utils.io import clone_bytes


class PyMuPDFDocument(DocumentHandle):
    """Wraps an open ``fitz.Document``."""

    def __init__(self, doc) -> None:
        self._doc = doc

    @property
    def num_pages(self) -> int:
        return self._doc.page_count

    def get_page(self, page_number: int) -> PageText:
        if not 1 <= page_number <= self.num_pages:
            raise IndexError(f"Page {page_number} out of range (1-{self.num_pages})")

        page = self._doc[page_number - 1]
        width, height = page.rect.width, page.rect.height
        items: list[RawTextItem] = []
        for block in page.get_text("dict")["blocks"]:
            # Image blocks carry no "lines"
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = span.get("text", "")
                    if not text:
                        continue
                    x0, y0, x1, y1 = span["bbox"]
                    size = span.get("size", 0.0)
                    # Anchor at the span's lower-left corner, flipped to a
                    # bottom-left origin, so the run box covers descenders.
                    items.append(RawTextItem(
                        text=text,
                        transform=(size, 0.0, 0.0, size, x0, height - y1),
                        width=x1 - x0,
                        height=y1 - y0,
                        font_name=span.get("font"),
                        font_size=size or None,
                    ))
        return PageText(page_number=page_number, width=width, height=height, items=items)

    def close(self) -> None:
        if not self._doc.is_closed:
            self._doc.close()


class PyMuPDFSource(BasePageTextSource):
    """Extract positioned spans with PyMuPDF's ``dict`` text output."""

    name = "pymupdf"

    def open(self, data: bytes) -> PyMuPDFDocument:
        import fitz  # pymupdf

        return PyMuPDFDocument(fitz.open(stream=clone_bytes(data), filetype="pdf"))


SourceRegistry.register("pymupdf", PyMuPDFSource)
