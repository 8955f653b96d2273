"""Field extraction: turn the lines of one block into a ``Clipping``.

A sample block::

    Alias Grace (Atwood, Margaret)
    - Your Highlight on page 22 | location 281-283 | Added on Sunday, 5 May 2019 10:23:20

    They were bell-shaped and ruffled, gracefully waving and lovely under the sea...

The page may also be a lowercase roman numeral (``on page ix``).
"""
from __future__ import annotations

import logging
import re
from datetime import datetime

from clippings.clipping_types import Clipping, ClippingType, Location
from clippings.errors import DescriptionUnrecognizedError, FieldParseError
from clippings.layouts import DescriptionLayout, ParserConfig

log = logging.getLogger(__name__)


def clean_source(line: str) -> str:
    """Strip non-printable characters (e.g. a retained U+FEFF) from both ends."""
    start = 0
    end = len(line)
    while start < end and not line[start].isprintable():
        start += 1
    while end > start and not line[end - 1].isprintable():
        end -= 1
    return line[start:end].strip()


def clean_body(body: str, separator: str) -> str:
    return body.strip().removesuffix(separator).strip()


def strip_weekday(raw_time: str, glyphs: int) -> str:
    """Drop the weekday glyphs that end the date token.

    ``2023年5月15日月曜日 20:45:04`` becomes ``2023年5月15日 20:45:04``.
    """
    if glyphs <= 0:
        return raw_time
    date_part, sep, rest = raw_time.partition(" ")
    return f"{date_part[:-glyphs]}{sep}{rest}"


def _parse_int(
    field: str, raw: str, layout: DescriptionLayout, line: str, block_index: int,
) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise FieldParseError(
            field, raw, layout=layout.name, line=line, block_index=block_index,
        ) from exc


def _apply_layout(
    layout: DescriptionLayout,
    match: re.Match[str],
    line: str,
    clipping: Clipping,
    config: ParserConfig,
    block_index: int,
) -> None:
    keyword = match.group(layout.type_group)
    ctype = config.type_keywords.get(keyword)
    if ctype is None:
        raise FieldParseError(
            "clipping type", keyword, layout=layout.name, line=line, block_index=block_index,
        )
    clipping.type = ctype

    if layout.page_group is not None:
        clipping.page = match.group(layout.page_group) or ""

    start = _parse_int(
        "start location", match.group(layout.start_group), layout, line, block_index,
    )
    end = 0
    if layout.end_group is not None and match.group(layout.end_group) is not None:
        end = _parse_int(
            "end location", match.group(layout.end_group), layout, line, block_index,
        )
    clipping.location = Location(start=start, end=end)

    if layout.time_group is not None:
        raw_time = match.group(layout.time_group).strip()
        to_parse = strip_weekday(raw_time, layout.weekday_glyphs)
        try:
            clipping.create_time = datetime.strptime(to_parse, layout.time_format)
        except ValueError as exc:
            raise FieldParseError(
                "creation time", raw_time, layout=layout.name, line=line,
                block_index=block_index,
            ) from exc


def parse_description(
    line: str,
    clipping: Clipping,
    config: ParserConfig,
    *,
    block_index: int = -1,
    logger: logging.Logger | None = None,
) -> DescriptionLayout:
    """Fill type, page, location and creation time from a description line.

    Returns the layout that matched. Raises DescriptionUnrecognizedError
    listing every layout's mismatch when none matches.
    """
    logger = logger or log
    mismatches: list[str] = []
    for layout in config.layouts:
        match = layout.pattern.search(line)
        if match is None or len(match.groups()) != layout.required_groups:
            logger.debug("layout %s did not match %r", layout.name, line)
            mismatches.append(f"description line malformed with layout {layout.name}: {line!r}")
            continue
        logger.debug("layout %s matched %r", layout.name, line)
        _apply_layout(layout, match, line, clipping, config, block_index)
        return layout
    raise DescriptionUnrecognizedError(line, tuple(mismatches), block_index=block_index)


def extract_clipping(
    parts: list[str],
    config: ParserConfig,
    *,
    block_index: int = -1,
    logger: logging.Logger | None = None,
) -> Clipping:
    """Build a clipping from the four parts of a block."""
    source_line, description_line, _blank, body = parts
    clipping = Clipping(
        source=clean_source(source_line.strip()),
        type=ClippingType.NONE,
    )
    layout = parse_description(
        description_line.strip(), clipping, config,
        block_index=block_index, logger=logger,
    )
    if not clipping.source:
        raise FieldParseError(
            "source", source_line, layout=layout.name, line=source_line,
            block_index=block_index,
        )
    clipping.text = clean_body(body, config.separator)
    return clipping
