"""Reader for Bookcision highlight exports (the secondary source).

Bookcision exports a single book as JSON::

    {"title": "...", "authors": "...",
     "highlights": [{"text": "...", "isNoteOnly": false,
                     "location": {"url": "...", "value": 1234},
                     "note": "..."}]}

Each highlight becomes a Highlight clipping; a non-empty note adds a Note
clipping at the same location. Records carry no page and no timestamp.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from clippings.clipping_types import Clipping, ClippingType, Location
from clippings.errors import ClippingsIOError


@dataclass(frozen=True, slots=True)
class BookcisionHighlight:
    text: str
    is_note_only: bool
    location: int
    note: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BookcisionHighlight:
        location = data.get("location") or {}
        return cls(
            text=str(data.get("text") or ""),
            is_note_only=bool(data.get("isNoteOnly", False)),
            location=int(location.get("value") or 0),
            note=str(data.get("note") or ""),
        )


@dataclass(frozen=True, slots=True)
class BookcisionExport:
    title: str
    authors: str
    highlights: tuple[BookcisionHighlight, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BookcisionExport:
        return cls(
            title=str(data.get("title") or ""),
            authors=str(data.get("authors") or ""),
            highlights=tuple(
                BookcisionHighlight.from_dict(h) for h in data.get("highlights") or []
            ),
        )


def bookcision_to_clippings(export: BookcisionExport) -> list[Clipping]:
    """Convert an export into clippings, in export order."""
    output: list[Clipping] = []
    for hl in export.highlights:
        output.append(
            Clipping(
                source=export.title,
                type=ClippingType.HIGHLIGHT,
                location=Location(start=hl.location),
                text=hl.text,
            )
        )
        if hl.note:
            output.append(
                Clipping(
                    source=export.title,
                    type=ClippingType.NOTE,
                    location=Location(start=hl.location),
                    text=hl.note,
                )
            )
    return output


def load_bookcision(path: Path) -> list[Clipping]:
    """Read a Bookcision JSON file and convert it into clippings."""
    try:
        data = orjson.loads(path.read_bytes())
    except OSError as exc:
        raise ClippingsIOError(str(path), str(exc)) from exc
    except orjson.JSONDecodeError as exc:
        raise ClippingsIOError(str(path), f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ClippingsIOError(str(path), "expected a JSON object")
    return bookcision_to_clippings(BookcisionExport.from_dict(data))
