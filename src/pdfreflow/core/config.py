"""Heuristic constants for grouping, matching and re-flow.

None of these values are derived from font metrics. They are tuned for
typical single-column text documents (CVs, letters) and can be overridden
per call or through ``PDFREFLOW_<FIELD>`` environment variables.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict

ENV_PREFIX = "PDFREFLOW_"


class LayoutConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Block builder. Multipliers of the run height/width.
    same_line_ratio: float = 0.5  # sort band: runs closer than this share a line
    line_break_ratio: float = 0.5  # |dy| above height * ratio starts a new block
    gap_ratio: float = 0.5  # x beyond last right edge + width * ratio starts a new block

    # Similarity matcher
    similarity_threshold: float = 0.7

    # Raw item conversion when the source omits metrics
    fallback_font_size: float = 10.0
    char_width_ratio: float = 0.6
    line_height_ratio: float = 1.2

    # Re-flow renderer
    font_name: str = "helv"
    font_size: float = 10.0
    paragraph_spacing_ratio: float = 0.5

    # Registry names of the default collaborators
    source: str = "pymupdf"
    sink: str = "pymupdf"

    @classmethod
    def from_env(cls, **overrides) -> LayoutConfig:
        """Build a config from ``PDFREFLOW_*`` variables, then ``overrides``."""
        values: dict[str, object] = {}
        for field in cls.model_fields:
            raw = os.getenv(f"{ENV_PREFIX}{field.upper()}")
            if raw is not None:
                values[field] = raw
        values.update(overrides)
        return cls.model_validate(values)


DEFAULT_CONFIG = LayoutConfig()
