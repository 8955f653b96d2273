"""Core record types shared by every stage of the clippings pipeline.

Type hierarchy:
  Location: Position range inside a source document
  ClippingType: Highlight / Note (NONE is a zero-value sentinel)
  Clipping: One highlight or note, as parsed or supplied

Ordering: every stage that needs an order uses ``sort_clippings`` /
``ordering_key``. The order is source, location start, type ascending and
creation time descending, so among records sharing the first three keys
the most recently created one comes first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any


class ClippingType(IntEnum):
    """Kind of clipping. Values are the interchange integers."""

    NONE = 0
    HIGHLIGHT = 1
    NOTE = 2


@dataclass(frozen=True, slots=True)
class Location:
    """Position range inside a source document. ``end == 0`` means absent."""

    start: int = 0
    end: int = 0

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Location.start must be >= 0, got {self.start}")
        if self.end < 0:
            raise ValueError(f"Location.end must be >= 0, got {self.end}")


@dataclass(slots=True)
class Clipping:
    """One highlight or note captured from a source document.

    Only ``text`` is ever changed after construction (supplementation
    replaces withheld placeholder text).
    """

    source: str
    type: ClippingType
    location: Location = field(default_factory=Location)
    # Not always a number: front matter pages are lowercase roman numerals.
    page: str = ""
    create_time: datetime | None = None
    text: str = ""


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

def ordering_key(clipping: Clipping) -> tuple[str, int, int]:
    """Ascending part of the total order: (source, location start, type)."""
    return (clipping.source, clipping.location.start, int(clipping.type))


def _create_time_key(clipping: Clipping) -> datetime:
    # Device clocks have no zone: an offset loaded from JSON is ignored and
    # the wall-clock time is compared, so naive and aware times always mix.
    if clipping.create_time is None:
        return datetime.min
    return clipping.create_time.replace(tzinfo=None)


def sort_clippings(clippings: list[Clipping]) -> list[Clipping]:
    """Return a new list sorted by the total clipping order.

    Two stable passes: creation time descending first, then the ascending
    keys. Records equal on all four keys keep their input order.
    """
    ordered = sorted(clippings, key=_create_time_key, reverse=True)
    ordered.sort(key=ordering_key)
    return ordered


def same_position(a: Clipping, b: Clipping) -> bool:
    """True when both records share source, location start and type."""
    return ordering_key(a) == ordering_key(b)


# ---------------------------------------------------------------------------
# Interchange representation
# ---------------------------------------------------------------------------

def clipping_to_dict(clipping: Clipping) -> dict[str, Any]:
    """Convert a clipping into its interchange object."""
    location: dict[str, int] = {}
    if clipping.location.start:
        location["start"] = clipping.location.start
    if clipping.location.end:
        location["end"] = clipping.location.end
    return {
        "source": clipping.source,
        "type": int(clipping.type),
        "page": clipping.page,
        "location_in_source": location,
        "create_time": (
            clipping.create_time.isoformat()
            if clipping.create_time is not None
            else None
        ),
        "text": clipping.text,
    }


def clipping_from_dict(data: dict[str, Any]) -> Clipping:
    """Build a clipping from its interchange object.

    Raises ValueError for an unknown type value or a malformed timestamp.
    """
    location = data.get("location_in_source") or {}
    raw_time = data.get("create_time")
    create_time: datetime | None = None
    if raw_time:
        create_time = datetime.fromisoformat(str(raw_time))
    return Clipping(
        source=str(data.get("source", "")),
        type=ClippingType(int(data.get("type", 0))),
        location=Location(
            start=int(location.get("start", 0)),
            end=int(location.get("end", 0)),
        ),
        page=str(data.get("page") or ""),
        create_time=create_time,
        text=str(data.get("text", "")),
    )


def clippings_to_dicts(clippings: list[Clipping]) -> list[dict[str, Any]]:
    return [clipping_to_dict(c) for c in clippings]


def clippings_from_dicts(rows: list[dict[str, Any]]) -> list[Clipping]:
    return [clipping_from_dict(r) for r in rows]
