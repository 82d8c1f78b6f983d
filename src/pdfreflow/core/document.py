"""Text map model: glyph runs, grouped blocks and the per-document index."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pdfreflow.core.geometry import Box


class RunPosition(Box):
    """Placement of a glyph run. ``(x, y)`` is the run origin."""

    font_size: float
    font_name: str | None = None


class GlyphRun(BaseModel):
    """One positioned text fragment as reported by page extraction."""

    model_config = ConfigDict(frozen=True)

    text: str
    page_index: int  # 0-based
    position: RunPosition


class TextBlock(BaseModel):
    """A group of glyph runs treated as one editable unit of text."""

    model_config = ConfigDict(frozen=True)

    runs: tuple[GlyphRun, ...]
    text: str
    box: Box
    page_index: int
    is_modified: bool = False
    original_text: str | None = None  # set once the block has been replaced


class PageSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: float
    height: float


class PdfTextMap(BaseModel):
    """Whole-document index of text blocks plus per-page dimensions.

    Maps are values: updates return a new map that shares every untouched
    block with its predecessor, so a caller can keep the pre-edit map around.
    """

    model_config = ConfigDict(frozen=True)

    blocks: tuple[TextBlock, ...] = Field(default_factory=tuple)
    pages: tuple[PageSize, ...] = Field(default_factory=tuple)

    @property
    def num_pages(self) -> int:
        return len(self.pages)

    @property
    def text(self) -> str:
        return "\n\n".join(
            "\n".join(block.text for block in self.blocks_on_page(index))
            for index in range(self.num_pages)
        )

    def blocks_on_page(self, page_index: int) -> list[TextBlock]:
        return [block for block in self.blocks if block.page_index == page_index]

    def modified_blocks(self, page_index: int | None = None) -> list[TextBlock]:
        return [
            block
            for block in self.blocks
            if block.is_modified and (page_index is None or block.page_index == page_index)
        ]
