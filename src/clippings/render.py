"""Plaintext rendering of a single clipping (used for excerpt messages)."""
from __future__ import annotations

import textwrap

from clippings.clipping_types import Clipping

TEXT_WIDTH = 100
INDENT = "    "


def wrap_text(text: str, width: int = TEXT_WIDTH) -> str:
    """Word-wrap each authored line to ``width``; authored line breaks are kept."""
    if width <= 0:
        raise ValueError(f"width must be > 0, got {width}")
    lines: list[str] = []
    for paragraph in text.split("\n"):
        wrapped = textwrap.wrap(
            paragraph, width=width, break_long_words=False, break_on_hyphens=False,
        )
        lines.extend(wrapped or [""])
    return "\n".join(lines)


def render_plaintext(clipping: Clipping, *, width: int = TEXT_WIDTH) -> str:
    """Render a clipping as an indented, wrapped excerpt with an attribution line."""
    created = (
        clipping.create_time.strftime("%Y-%m-%d")
        if clipping.create_time is not None
        else "an unknown date"
    )
    body = textwrap.indent(wrap_text(clipping.text, width), INDENT, lambda _line: True)
    return (
        f"Today's excerpt is a highlight created on {created}.\n"
        f"\n"
        f"{body}\n"
        f"\n"
        f"-- {clipping.source}\n"
        f"\n"
    )
