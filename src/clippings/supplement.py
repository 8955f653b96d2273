"""Fill withheld clipping text from a secondary export.

When a book's copy quota is exceeded, the device writes a placeholder
sentence instead of the highlighted text. A Bookcision export of the same
book still has the text, keyed by location start.
"""
from __future__ import annotations

import logging
import re

from clippings.clipping_types import Clipping, sort_clippings
from clippings.layouts import CLIPPING_LIMIT_MESSAGE

log = logging.getLogger(__name__)


def merge_supplement(
    primary: list[Clipping],
    secondary: list[Clipping],
    *,
    source_pattern: re.Pattern[str] | None = None,
    placeholder: str = CLIPPING_LIMIT_MESSAGE,
    logger: logging.Logger | None = None,
) -> list[Clipping]:
    """Replace placeholder texts in ``primary`` with matching ``secondary`` texts.

    Only primary records whose source matches ``source_pattern`` (all
    records when it is None) and whose text equals the placeholder are
    eligible. Both inputs are sorted first; the walk over ``secondary``
    only ever moves forward, so a secondary record passed over for one
    primary record is never reconsidered. Unmatched placeholders stay as
    they are. The text of matched primary records is replaced in place.
    """
    logger = logger or log
    ordered_primary = sort_clippings(primary)
    ordered_secondary = sort_clippings(secondary)

    j = 0
    replaced = 0
    for clipping in ordered_primary:
        if clipping.text != placeholder:
            continue
        if source_pattern is not None and not source_pattern.search(clipping.source):
            continue
        start = clipping.location.start
        while j < len(ordered_secondary) and ordered_secondary[j].location.start < start:
            j += 1
        if j < len(ordered_secondary) and ordered_secondary[j].location.start == start:
            logger.debug(
                "supplemented %s @%d from secondary export", clipping.source, start,
            )
            clipping.text = ordered_secondary[j].text
            replaced += 1
    logger.debug("supplemented %d placeholder clippings", replaced)
    return ordered_primary
