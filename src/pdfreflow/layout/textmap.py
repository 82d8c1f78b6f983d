"""Copy-on-write updates of a ``PdfTextMap``."""

from __future__ import annotations

from pdfreflow.core.document import PdfTextMap, TextBlock
from pdfreflow.utils.logging import get_logger

logger = get_logger(__name__)


def index_of_block(text_map: PdfTextMap, target: TextBlock) -> int:
    """Index of the first block with the target's page and origin, or -1.

    Blocks are keyed by ``(page_index, x, y)``, not identity, so a block
    taken from an earlier version of the map still resolves.
    """
    for index, block in enumerate(text_map.blocks):
        if (
            block.page_index == target.page_index
            and block.box.x == target.box.x
            and block.box.y == target.box.y
        ):
            return index
    return -1


def replace_text_in_block(text_map: PdfTextMap, target: TextBlock, new_text: str) -> PdfTextMap:
    """Return a new map with ``target``'s text replaced by ``new_text``.

    The block keeps its box, runs and page; the replacement is fitted into
    the original region at render time. If the target is not in the map the
    same map object is returned and a warning is logged, so callers detect
    failure with ``result is text_map``.
    """
    index = index_of_block(text_map, target)
    if index == -1:
        logger.warning(
            "replace_target_not_found",
            page_index=target.page_index,
            x=target.box.x,
            y=target.box.y,
        )
        return text_map

    updated = target.model_copy(
        update={"text": new_text, "original_text": target.text, "is_modified": True}
    )
    blocks = list(text_map.blocks)
    blocks[index] = updated
    return text_map.model_copy(update={"blocks": tuple(blocks)})


def settle(text_map: PdfTextMap) -> PdfTextMap:
    """Clear ``is_modified`` on every block once its edits have been rendered."""
    if not text_map.modified_blocks():
        return text_map
    blocks = tuple(
        block.model_copy(update={"is_modified": False}) if block.is_modified else block
        for block in text_map.blocks
    )
    return text_map.model_copy(update={"blocks": blocks})
