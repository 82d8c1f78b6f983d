"""Locate, match and re-flow editable text blocks in fixed-layout PDFs."""

from pdfreflow.core.config import LayoutConfig
from pdfreflow.core.document import GlyphRun, PageSize, PdfTextMap, TextBlock
from pdfreflow.core.errors import ExtractionError, RegenerationError, ReflowError
from pdfreflow.core.geometry import Box
from pdfreflow.core.registry import SinkRegistry, SourceRegistry
from pdfreflow.layout.blocks import group_text_into_blocks
from pdfreflow.layout.locator import BlockMatch, MatchKind, find_block_to_replace, locate_block
from pdfreflow.layout.textmap import replace_text_in_block, settle
from pdfreflow.matching.similarity import fuzzy_match
from pdfreflow.pipeline.edits import EditRequest, Suggestion, place_suggestions
from pdfreflow.pipeline.extract import aextract_text_map, extract_text_map
from pdfreflow.pipeline.session import EditResult, EditSession

__all__ = [
    "BlockMatch",
    "Box",
    "EditRequest",
    "EditResult",
    "EditSession",
    "ExtractionError",
    "GlyphRun",
    "LayoutConfig",
    "MatchKind",
    "PageSize",
    "PdfTextMap",
    "RegenerationError",
    "ReflowError",
    "SinkRegistry",
    "SourceRegistry",
    "Suggestion",
    "TextBlock",
    "aextract_text_map",
    "extract_text_map",
    "find_block_to_replace",
    "fuzzy_match",
    "group_text_into_blocks",
    "locate_block",
    "place_suggestions",
    "replace_text_in_block",
    "settle",
]
