"""PyMuPDF re-flow renderer: white-out modified blocks and redraw wrapped text."""

from __future__ import annotations

from pdfreflow.core.document import PdfTextMap, TextBlock
from pdfreflow.core.errors import RegenerationError
from pdfreflow.core.registry import SinkRegistry
from pdfreflow.layout.wrap import wrap_text
from pdfreflow.sinks.base import BaseDocumentSink
from pdfreflow.utils.io import clone_bytes
from pdfreflow.utils.logging import get_logger

logger = get_logger(__name__)

WHITE = (1, 1, 1)
BLACK = (0, 0, 0)


class PyMuPDFSink(BaseDocumentSink):
    """Render replacement text with a single base-14 font (Helvetica by default).

    Text goes through a ``fitz.Font`` and a ``TextWriter`` so that typographic
    punctuation such as curly quotes, dashes and bullets is both measured and
    drawn with its real glyph. The original glyphs stay in the content stream
    underneath an opaque white rectangle; only the visible page changes.
    """

    name = "pymupdf"

    def _load_font(self):
        import fitz

        return fitz.Font(fontname=self.config.font_name)

    def _draw_block(self, page, block: TextBlock, page_height: float, font) -> int:
        import fitz

        font_size = self.config.font_size
        rect = fitz.Rect(*block.box.flipped(page_height))
        page.draw_rect(rect, color=None, fill=WHITE, width=0, overlay=True)

        lines = wrap_text(
            block.text,
            rect.width,
            lambda text: font.text_length(text, fontsize=font_size),
            self.config,
        )
        if not lines:
            return 0

        writer = fitz.TextWriter(page.rect)
        for line in lines:
            # append takes the baseline; line offsets are measured to the line top
            baseline = fitz.Point(rect.x0, rect.y0 + line.offset + font_size)
            writer.append(baseline, line.text, font=font, fontsize=font_size)
        writer.write_text(page, color=BLACK, overlay=True)
        return len(lines)

    def regenerate(self, data: bytes, text_map: PdfTextMap) -> bytes:
        import fitz  # pymupdf

        try:
            doc = fitz.open(stream=clone_bytes(data), filetype="pdf")
        except Exception as exc:
            raise RegenerationError(f"Could not open document: {exc}") from exc

        try:
            font = self._load_font()
            for page in doc:
                modified = text_map.modified_blocks(page.number)
                if not modified:
                    continue
                page_height = page.rect.height
                for block in modified:
                    drawn = self._draw_block(page, block, page_height, font)
                    logger.debug("redrew_block", page_index=page.number, lines=drawn)
            return doc.tobytes(garbage=1, deflate=True)
        except Exception as exc:
            raise RegenerationError(f"Could not regenerate document: {exc}") from exc
        finally:
            doc.close()


SinkRegistry.register("pymupdf", PyMuPDFSink)
