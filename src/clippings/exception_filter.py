"""Recognize blocks that must not become clippings."""
from __future__ import annotations

from clippings.layouts import ParserConfig


def is_bookmark(parts: list[str], config: ParserConfig) -> bool:
    """Bookmarks are two-line blocks: the source, then the bookmark description."""
    if len(parts) != 2:
        return False
    description = parts[1]
    if description.startswith(config.bookmark_prefix):
        return True
    return any(term in description for term in config.bookmark_terms)


def is_clipping_limit(parts: list[str], config: ParserConfig) -> bool:
    """Body replaced by the copy-quota placeholder sentence."""
    return len(parts) == 4 and config.clipping_limit_message in parts[3]


def should_skip(parts: list[str], config: ParserConfig) -> bool:
    """True when the block is dropped before field extraction.

    Clipping-limit placeholders are only dropped when the config asks for
    it; otherwise they are parsed and the placeholder becomes the text.
    """
    if is_bookmark(parts, config):
        return True
    return config.remove_clipping_limit and is_clipping_limit(parts, config)
