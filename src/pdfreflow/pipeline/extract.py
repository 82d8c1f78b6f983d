"""Build a ``PdfTextMap`` from document bytes through a page text source.

Pages are read strictly in order, one at a time, from a single open
document handle that is always released on exit.
"""

from __future__ import annotations

from pdfreflow.core.config import DEFAULT_CONFIG, LayoutConfig
from pdfreflow.core.document import GlyphRun, PageSize, PdfTextMap, RunPosition
from pdfreflow.core.errors import ExtractionError
from pdfreflow.core.registry import SourceRegistry
from pdfreflow.layout.blocks import group_text_into_blocks
from pdfreflow.sources.base import BasePageTextSource, PageText, RawTextItem
from pdfreflow.utils.logging import get_logger

import pdfreflow.sources.pymupdf  # noqa: F401  (registers the default source)

logger = get_logger(__name__)


def run_from_item(item: RawTextItem, page_index: int, config: LayoutConfig = DEFAULT_CONFIG) -> GlyphRun:
    """Convert an extractor item to a ``GlyphRun``, estimating missing metrics."""
    _, _, _, d, e, f = item.transform
    font_size = item.font_size or abs(d) or config.fallback_font_size
    width = item.width or len(item.text) * font_size * config.char_width_ratio
    height = item.height or font_size * config.line_height_ratio
    return GlyphRun(
        text=item.text,
        page_index=page_index,
        position=RunPosition(
            x=e,
            y=f,
            width=width,
            height=height,
            font_size=font_size,
            font_name=item.font_name,
        ),
    )


def runs_from_page(page: PageText, config: LayoutConfig = DEFAULT_CONFIG) -> list[GlyphRun]:
    page_index = page.page_number - 1
    return [run_from_item(item, page_index, config) for item in page.items]


def _resolve_source(source: BasePageTextSource | None, config: LayoutConfig) -> BasePageTextSource:
    return source if source is not None else SourceRegistry.create(config.source)


def _assemble(pages: list[PageText], config: LayoutConfig) -> PdfTextMap:
    runs: list[GlyphRun] = []
    for page in pages:
        runs.extend(runs_from_page(page, config))
    blocks = group_text_into_blocks(runs, config)
    logger.info("extracted_text_map", pages=len(pages), runs=len(runs), blocks=len(blocks))
    return PdfTextMap(
        blocks=tuple(blocks),
        pages=tuple(PageSize(width=page.width, height=page.height) for page in pages),
    )


def extract_text_map(
    data: bytes,
    source: BasePageTextSource | None = None,
    config: LayoutConfig | None = None,
) -> PdfTextMap:
    """Extract every page of ``data`` and group its runs into blocks.

    Raises ``ExtractionError`` if the source fails on any page.
    """
    config = config or DEFAULT_CONFIG
    source = _resolve_source(source, config)
    try:
        with source.open(data) as handle:
            pages = [handle.get_page(number) for number in range(1, handle.num_pages + 1)]
    except ExtractionError:
        raise
    except Exception as exc:
        logger.error("extraction_failed", source=source.name, error=str(exc))
        raise ExtractionError(f"Text extraction failed: {exc}") from exc
    return _assemble(pages, config)


async def aextract_text_map(
    data: bytes,
    source: BasePageTextSource | None = None,
    config: LayoutConfig | None = None,
) -> PdfTextMap:
    """Async variant of ``extract_text_map``; pages are awaited one by one."""
    config = config or DEFAULT_CONFIG
    source = _resolve_source(source, config)
    pages: list[PageText] = []
    try:
        with source.open(data) as handle:
            for number in range(1, handle.num_pages + 1):
                pages.append(await handle.aget_page(number))
    except ExtractionError:
        raise
    except Exception as exc:
        logger.error("extraction_failed", source=source.name, error=str(exc))
        raise ExtractionError(f"Text extraction failed: {exc}") from exc
    return _assemble(pages, config)
