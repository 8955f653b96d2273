"""Duplicate handling for notes.

Editing a note on the device appends a new Note record at the same
location instead of replacing the old one. ``retain_latest`` keeps only the
most recent Note per (source, location start). Highlights are never
deduplicated.
"""
from __future__ import annotations

import logging
import re
from typing import TypeAlias

from clippings.clipping_types import (
    Clipping,
    ClippingType,
    ordering_key,
    same_position,
    sort_clippings,
)

log = logging.getLogger(__name__)

DuplicateKey: TypeAlias = tuple[str, int, int]


def retain_latest(
    clippings: list[Clipping],
    *,
    logger: logging.Logger | None = None,
) -> list[Clipping]:
    """Return the sorted clippings with redundant Notes removed.

    Sorting puts duplicates next to each other with the newest first, so
    the single scan below keeps the newest Note of every group.
    """
    logger = logger or log
    output: list[Clipping] = []
    for clipping in sort_clippings(clippings):
        if not output or clipping.type != ClippingType.NOTE:
            output.append(clipping)
            continue
        previous = output[-1]
        if same_position(clipping, previous):
            logger.debug(
                "duplicate note dropped: %s @%d (kept %s, dropped %s)",
                clipping.source,
                clipping.location.start,
                previous.create_time,
                clipping.create_time,
            )
            continue
        output.append(clipping)
    return output


def find_duplicate_notes(
    clippings: list[Clipping],
    *,
    source_pattern: re.Pattern[str] | None = None,
) -> dict[DuplicateKey, list[Clipping]]:
    """Group Notes sharing (source, location start); only groups of 2+ are returned.

    Each group is in clipping order (newest first).
    """
    groups: dict[DuplicateKey, list[Clipping]] = {}
    for clipping in clippings:
        if clipping.type != ClippingType.NOTE:
            continue
        if source_pattern is not None and not source_pattern.search(clipping.source):
            continue
        groups.setdefault(ordering_key(clipping), []).append(clipping)
    return {
        key: sort_clippings(group)
        for key, group in sorted(groups.items())
        if len(group) > 1
    }


def format_duplicate_key(key: DuplicateKey) -> str:
    source, start, ctype = key
    return f"{source}-{ctype}-{start}"
