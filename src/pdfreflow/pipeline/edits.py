"""Edit requests and placement of generator suggestions on the page.

The suggestion generator only knows which text it wants changed. Before a
suggestion can be applied it needs a page and an approximate region; this
module finds them by searching the text map, falling back to a default
slot on the first page when the text is nowhere to be found.
"""

from __future__ import annotations

from enum import StrEnum
from functools import cmp_to_key
from typing import Iterable

from pydantic import BaseModel, Field

from pdfreflow.core.document import PdfTextMap
from pdfreflow.core.geometry import Box

# Region size used when the text is on a page but no single block holds it
APPROX_REGION_SIZE = (200.0, 20.0)

# Fallback slots stack down the first page
FALLBACK_ORIGIN = (50.0, 100.0)
FALLBACK_SIZE = (400.0, 50.0)
FALLBACK_STEP = 50.0


class EditRequest(BaseModel):
    """Replace ``original_text`` near ``region`` on ``page`` (1-based)."""

    original_text: str
    suggested_text: str
    page: int = Field(ge=1)
    region: Box

    @property
    def page_index(self) -> int:
        return self.page - 1


class SuggestionKind(StrEnum):
    SUGGESTION = "suggestion"
    IMPROVEMENT = "improvement"


class Suggestion(BaseModel):
    """One structured edit proposed by the external suggestion generator."""

    original_text: str
    suggested_text: str
    section: str = ""
    priority: int | None = None
    kind: SuggestionKind = SuggestionKind.SUGGESTION


class PlacedSuggestion(EditRequest):
    id: str
    section: str = ""
    priority: int | None = None
    kind: SuggestionKind = SuggestionKind.SUGGESTION
    replace_in_place: bool = True


def _find_region(text_map: PdfTextMap, needle: str) -> tuple[int, Box] | None:
    for page_index in range(text_map.num_pages):
        blocks = text_map.blocks_on_page(page_index)
        if not blocks or needle not in " ".join(block.text for block in blocks):
            continue
        for block in blocks:
            if needle in block.text:
                return page_index, block.box
        # Text spans several blocks: approximate from the first block's origin
        first = blocks[0].box
        width, height = APPROX_REGION_SIZE
        return page_index, Box(x=first.x, y=first.y, width=width, height=height)
    return None


def _by_priority(a: PlacedSuggestion, b: PlacedSuggestion) -> int:
    if a.priority is not None and b.priority is not None:
        return b.priority - a.priority
    return 0


def place_suggestions(
    text_map: PdfTextMap, suggestions: Iterable[Suggestion]
) -> list[PlacedSuggestion]:
    """Turn suggestions into edit requests, highest priority first."""
    placed: list[PlacedSuggestion] = []
    for suggestion in suggestions:
        found = _find_region(text_map, suggestion.original_text)
        if found is not None:
            page_index, region = found
            in_place = True
        else:
            page_index = 0
            x, y = FALLBACK_ORIGIN
            width, height = FALLBACK_SIZE
            region = Box(x=x, y=y + len(placed) * FALLBACK_STEP, width=width, height=height)
            in_place = False

        placed.append(PlacedSuggestion(
            id=f"{suggestion.kind}-{len(placed) + 1}",
            original_text=suggestion.original_text,
            suggested_text=suggestion.suggested_text,
            page=page_index + 1,
            region=region,
            section=suggestion.section,
            priority=suggestion.priority,
            kind=suggestion.kind,
            replace_in_place=in_place,
        ))

    return sorted(placed, key=cmp_to_key(_by_priority))
