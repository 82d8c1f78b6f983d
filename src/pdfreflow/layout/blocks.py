"""Group positioned glyph runs into spatial text blocks.

The grouping is a single pass over runs sorted into reading order. A block
ends whenever the next run is on another page, on another line, or too far
to the right of the previous run. Line and gap detection use multiples of
the run's own height/width (see ``LayoutConfig``), so a run that continues
a line closely enough is merged regardless of font.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable, Sequence

from pdfreflow.core.config import DEFAULT_CONFIG, LayoutConfig
from pdfreflow.core.document import GlyphRun, TextBlock
from pdfreflow.core.geometry import union
from pdfreflow.utils.logging import get_logger

logger = get_logger(__name__)


def _reading_order(config: LayoutConfig):
    def compare(a: GlyphRun, b: GlyphRun) -> float:
        if a.page_index != b.page_index:
            return a.page_index - b.page_index
        band = max(a.position.height, b.position.height) * config.same_line_ratio
        if abs(a.position.y - b.position.y) > band:
            # Larger y is higher on the page (bottom-left origin)
            return b.position.y - a.position.y
        return a.position.x - b.position.x

    return cmp_to_key(compare)


def sort_runs(runs: Iterable[GlyphRun], config: LayoutConfig = DEFAULT_CONFIG) -> list[GlyphRun]:
    """Stable sort into page, top-to-bottom, left-to-right order.

    This is a pairwise comparator with a tolerance band, not a tuple key:
    runs whose baselines differ by less than half the taller run's height
    compare by x only.
    """
    return sorted(runs, key=_reading_order(config))


def build_block(runs: Sequence[GlyphRun]) -> TextBlock:
    if not runs:
        raise ValueError("Cannot create block from empty runs")
    return TextBlock(
        runs=tuple(runs),
        text=" ".join(run.text for run in runs),
        box=union(run.position for run in runs),
        page_index=runs[0].page_index,
    )


def group_text_into_blocks(
    runs: Iterable[GlyphRun], config: LayoutConfig | None = None
) -> list[TextBlock]:
    config = config or DEFAULT_CONFIG
    blocks: list[TextBlock] = []
    current: list[GlyphRun] = []
    current_page: int | None = None
    last_y = 0.0
    last_right = 0.0

    for run in sort_runs(runs, config):
        pos = run.position
        if current:
            is_new_page = run.page_index != current_page
            is_new_line = abs(pos.y - last_y) > pos.height * config.line_break_ratio
            is_gap = pos.x > last_right + pos.width * config.gap_ratio
            if is_new_page or is_new_line or is_gap:
                blocks.append(build_block(current))
                current = []

        current.append(run)
        current_page = run.page_index
        last_y = pos.y
        last_right = pos.x + pos.width

    if current:
        blocks.append(build_block(current))

    logger.debug("grouped_runs", blocks=len(blocks))
    return blocks
