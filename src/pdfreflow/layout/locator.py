"""Find the block an edit request refers to."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from pdfreflow.core.config import DEFAULT_CONFIG, LayoutConfig
from pdfreflow.core.document import PdfTextMap, TextBlock
from pdfreflow.core.geometry import Box, overlaps
from pdfreflow.matching.similarity import fuzzy_match
from pdfreflow.utils.logging import get_logger

logger = get_logger(__name__)


class MatchKind(StrEnum):
    MATCHED = "matched"  # an overlapping block fuzzy-matched the text
    FALLBACK = "fallback"  # nothing matched; first overlapping block returned
    NOT_FOUND = "not_found"  # no block overlaps the region


class BlockMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: MatchKind
    block: TextBlock | None = None

    @property
    def found(self) -> bool:
        return self.block is not None


def overlapping_blocks(text_map: PdfTextMap, region: Box, page_index: int) -> list[TextBlock]:
    """Blocks on ``page_index`` sharing a positive-area region with ``region``."""
    return [block for block in text_map.blocks_on_page(page_index) if overlaps(block.box, region)]


def locate_block(
    text_map: PdfTextMap,
    original_text: str,
    region: Box,
    page_index: int,
    config: LayoutConfig | None = None,
) -> BlockMatch:
    """Locate the block to edit and report how confident the result is."""
    config = config or DEFAULT_CONFIG
    candidates = overlapping_blocks(text_map, region, page_index)
    if not candidates:
        logger.debug("locate_not_found", page_index=page_index)
        return BlockMatch(kind=MatchKind.NOT_FOUND)

    for block in candidates:
        if fuzzy_match(block.text, original_text, config.similarity_threshold):
            return BlockMatch(kind=MatchKind.MATCHED, block=block)

    logger.info("locate_fallback", page_index=page_index, candidates=len(candidates))
    return BlockMatch(kind=MatchKind.FALLBACK, block=candidates[0])


def find_block_to_replace(
    text_map: PdfTextMap,
    original_text: str,
    region: Box,
    page_index: int,
    config: LayoutConfig | None = None,
) -> TextBlock | None:
    """Best-effort lookup: the matching block, else the first overlapping one.

    Use ``locate_block`` to tell a confident match from the fallback.
    """
    return locate_block(text_map, original_text, region, page_index, config).block
