"""Reading aids built from hashtag notes.

Notes written on the device double as markup:

  ``#cn`` / ``#cn <level>``  the preceding clipping is a chapter name
  ``#quote``                 the preceding highlight is a quote
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from clippings.clipping_types import Clipping, ClippingType, sort_clippings

CHAPTER_MARKER = "#cn"
QUOTE_MARKER = "#quote"


@dataclass(slots=True)
class ChapterSummary:
    name: str
    level: str = "*"


@dataclass(slots=True)
class BookSummary:
    name: str
    chapters: list[ChapterSummary] = field(default_factory=list[ChapterSummary])

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "chapters": [
                {"name": ch.name, "level": ch.level}
                for ch in self.chapters
            ],
        }


def _chapter_level(text: str) -> str:
    prefix = f"{CHAPTER_MARKER} "
    if text.startswith(prefix):
        try:
            return "*" * int(text.removeprefix(prefix).strip())
        except ValueError:
            pass
    return "*"


def summarize(clippings: list[Clipping]) -> BookSummary:
    """Build the chapter outline of one source.

    The input should hold a single source in clipping order. A ``#cn``
    note on the very first record has no chapter name and is ignored.
    """
    if not clippings:
        raise ValueError("no clippings to summarize")
    summary = BookSummary(name=clippings[0].source)
    for i, clipping in enumerate(clippings):
        if not clipping.text.startswith(CHAPTER_MARKER) or i == 0:
            continue
        summary.chapters.append(
            ChapterSummary(
                name=clippings[i - 1].text,
                level=_chapter_level(clipping.text),
            )
        )
    return summary


def extract_quotes(clippings: list[Clipping]) -> list[Clipping]:
    """Highlights immediately followed (in clipping order) by a ``#quote`` note."""
    ordered = sort_clippings(clippings)
    quotes: list[Clipping] = []
    for i, clipping in enumerate(ordered):
        if i == 0 or clipping.type != ClippingType.NOTE:
            continue
        if not clipping.text.startswith(QUOTE_MARKER):
            continue
        previous = ordered[i - 1]
        if previous.type == ClippingType.HIGHLIGHT:
            quotes.append(previous)
    return quotes
