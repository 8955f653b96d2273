"""Split a clippings export into candidate clipping blocks.

Blocks are separated by a line holding only the ten-``=`` separator.
Whatever precedes the first separator is an encoding artifact and is
dropped. A trailing block without a closing separator is still yielded.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from clippings.layouts import SEPARATOR

log = logging.getLogger(__name__)

MAX_PARTS = 4


def separator_pattern(separator: str = SEPARATOR) -> re.Pattern[str]:
    """Regex matching a whole separator line (BOM, blanks and ``\\r`` tolerated)."""
    return re.compile(
        rf"^[ \t\ufeff]*{re.escape(separator)}[ \t]*\r?$",
        re.MULTILINE,
    )


def iter_blocks(
    text: str,
    *,
    separator: str = SEPARATOR,
    skip_leading_chunk: bool = True,
    logger: logging.Logger | None = None,
) -> Iterator[str]:
    """Yield the trimmed, non-empty blocks of ``text`` in file order."""
    logger = logger or log
    chunks = separator_pattern(separator).split(text)
    if skip_leading_chunk and chunks:
        logger.debug("dropping leading chunk of %d chars", len(chunks[0]))
        chunks = chunks[1:]
    for chunk in chunks:
        block = chunk.strip()
        if not block:
            continue
        logger.debug("block of %d chars", len(block))
        yield block


def split_block(block: str) -> list[str]:
    """Split a block into at most four parts: source, description, blank, body.

    The body keeps any further line breaks.
    """
    return block.split("\n", MAX_PARTS - 1)
