"""Exception hierarchy for extraction and regeneration failures."""

from __future__ import annotations


class ReflowError(Exception):
    """Base class for orchestration-level failures."""


class ExtractionError(ReflowError):
    """The page text source could not read the document."""


class RegenerationError(ReflowError):
    """The document sink could not produce new document bytes."""
