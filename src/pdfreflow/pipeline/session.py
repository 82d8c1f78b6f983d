"""Editing session for one loaded document."""

from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from pdfreflow.core.config import DEFAULT_CONFIG, LayoutConfig
from pdfreflow.core.document import PdfTextMap, TextBlock
from pdfreflow.core.registry import SinkRegistry
from pdfreflow.layout.locator import MatchKind, locate_block
from pdfreflow.layout.textmap import replace_text_in_block
from pdfreflow.pipeline.edits import EditRequest
from pdfreflow.pipeline.extract import aextract_text_map, extract_text_map
from pdfreflow.sinks.base import BaseDocumentSink
from pdfreflow.sources.base import BasePageTextSource
from pdfreflow.utils.io import clone_bytes, read_document
from pdfreflow.utils.logging import get_logger

import pdfreflow.sinks.pymupdf  # noqa: F401  (registers the default sink)

logger = get_logger(__name__)


class EditResult(BaseModel):
    """Outcome of applying one edit request."""

    model_config = ConfigDict(frozen=True)

    request: EditRequest
    match: MatchKind
    block: TextBlock | None = None  # the block as it was before the edit
    applied: bool = False


class EditSession:
    """Holds a document, its pristine text map and the current edited map.

    Requests are processed one at a time. Block-level failures never raise:
    they come back as an ``EditResult`` with ``applied=False`` and leave
    earlier edits in place.

    Usage:
        with EditSession.open(pdf_bytes) as session:
            session.apply(request)
            new_bytes = session.render()
    """

    def __init__(
        self,
        data: bytes,
        text_map: PdfTextMap,
        sink: BaseDocumentSink | None = None,
        config: LayoutConfig | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self._data: bytes | None = clone_bytes(data)
        self.original_map = text_map
        self.text_map = text_map
        self.sink = sink if sink is not None else SinkRegistry.create(self.config.sink, config=self.config)

    @classmethod
    def open(
        cls,
        data: bytes,
        source: BasePageTextSource | None = None,
        sink: BaseDocumentSink | None = None,
        config: LayoutConfig | None = None,
    ) -> EditSession:
        text_map = extract_text_map(data, source=source, config=config)
        return cls(data, text_map, sink=sink, config=config)

    @classmethod
    def open_path(
        cls,
        file_path: str | Path,
        source: BasePageTextSource | None = None,
        sink: BaseDocumentSink | None = None,
        config: LayoutConfig | None = None,
    ) -> EditSession:
        """Open a session on a PDF read from disk."""
        return cls.open(read_document(file_path), source=source, sink=sink, config=config)

    @classmethod
    async def aopen(
        cls,
        data: bytes,
        source: BasePageTextSource | None = None,
        sink: BaseDocumentSink | None = None,
        config: LayoutConfig | None = None,
    ) -> EditSession:
        text_map = await aextract_text_map(data, source=source, config=config)
        return cls(data, text_map, sink=sink, config=config)

    @property
    def data(self) -> bytes:
        if self._data is None:
            raise RuntimeError("Session is closed")
        return self._data

    @property
    def is_modified(self) -> bool:
        return self.text_map is not self.original_map

    def apply(self, request: EditRequest) -> EditResult:
        match = locate_block(
            self.text_map,
            request.original_text,
            request.region,
            request.page_index,
            self.config,
        )
        if match.block is None:
            logger.info("edit_skipped", page=request.page, reason=str(match.kind))
            return EditResult(request=request, match=match.kind)

        updated = replace_text_in_block(self.text_map, match.block, request.suggested_text)
        applied = updated is not self.text_map
        self.text_map = updated
        return EditResult(request=request, match=match.kind, block=match.block, applied=applied)

    def apply_all(self, requests: Iterable[EditRequest]) -> list[EditResult]:
        results = [self.apply(request) for request in requests]
        logger.info(
            "edits_applied",
            requested=len(results),
            applied=sum(result.applied for result in results),
        )
        return results

    def reset(self) -> None:
        self.text_map = self.original_map

    def render(self) -> bytes:
        """Regenerate the document from the original bytes and the current map."""
        return self.sink.regenerate(self.data, self.text_map)

    async def arender(self) -> bytes:
        return await self.sink.aregenerate(self.data, self.text_map)

    def close(self) -> None:
        self._data = None

    def __enter__(self) -> EditSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
