"""Greedy word wrapping for replacement text."""

from __future__ import annotations

from typing import Callable, NamedTuple

from pdfreflow.core.config import DEFAULT_CONFIG, LayoutConfig


class WrappedLine(NamedTuple):
    text: str
    offset: float  # distance below the top of the region to this line's top


def wrap_text(
    text: str,
    max_width: float,
    measure: Callable[[str], float],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[WrappedLine]:
    """Lay out ``text`` into lines no wider than ``max_width`` where possible.

    ``measure`` returns the rendered width of a string at ``config.font_size``.
    Paragraphs are separated by ``\\n``; each is followed by an extra
    ``paragraph_spacing_ratio`` of a line, and blank paragraphs still take
    one line. Nothing is clipped: a word wider than ``max_width`` sits alone
    on its line and the result may be taller than the target region.
    """
    line_height = config.font_size * config.line_height_ratio
    lines: list[WrappedLine] = []
    offset = 0.0

    for paragraph in text.split("\n"):
        if not paragraph.strip():
            offset += line_height
            continue

        line = ""
        for word in paragraph.split(" "):
            candidate = f"{line} {word}" if line else word
            if line and measure(candidate) > max_width:
                lines.append(WrappedLine(line, offset))
                line = word
                offset += line_height
            else:
                line = candidate

        if line:
            lines.append(WrappedLine(line, offset))
            offset += line_height * (1 + config.paragraph_spacing_ratio)

    return lines
