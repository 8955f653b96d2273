"""Parser for the e-reader's plaintext clippings export ("My Clippings.txt").

Pipeline per file: segment into blocks, drop exception blocks (bookmarks,
optionally clipping-limit placeholders), extract fields from the rest.
The whole file is parsed into memory; any failure aborts the parse.
"""
from __future__ import annotations

import logging
from pathlib import Path

from clippings.clipping_types import Clipping
from clippings.errors import ClippingsIOError, MalformedSegmentError
from clippings.exception_filter import should_skip
from clippings.extractor import extract_clipping
from clippings.layouts import ParserConfig
from clippings.segmenter import MAX_PARTS, iter_blocks, split_block

log = logging.getLogger(__name__)


class ClippingsParser:
    """Parses clippings exports with an injected, read-only ``ParserConfig``."""

    def __init__(
        self,
        config: ParserConfig | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config or ParserConfig()
        self._log = logger or log

    @property
    def config(self) -> ParserConfig:
        return self._config

    def parse_text(self, text: str) -> list[Clipping]:
        """Parse export content; clippings are returned in file order."""
        output: list[Clipping] = []
        skipped = 0
        blocks = iter_blocks(
            text,
            separator=self._config.separator,
            skip_leading_chunk=self._config.skip_leading_chunk,
            logger=self._log,
        )
        for block_index, block in enumerate(blocks):
            parts = split_block(block)
            if should_skip(parts, self._config):
                skipped += 1
                self._log.debug("skipping exception block %d", block_index)
                continue
            if len(parts) != MAX_PARTS:
                raise MalformedSegmentError(block, block_index=block_index)
            output.append(
                extract_clipping(
                    parts, self._config, block_index=block_index, logger=self._log,
                )
            )
        self._log.debug("parsed %d clippings, skipped %d blocks", len(output), skipped)
        return output

    def parse_file(self, path: Path) -> list[Clipping]:
        """Read and parse an export file (UTF-8, BOM and CRLF tolerated)."""
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise ClippingsIOError(str(path), str(exc)) from exc
        return self.parse_text(text)


def parse_clippings_file(
    path: Path,
    *,
    remove_clipping_limit: bool = False,
    logger: logging.Logger | None = None,
) -> list[Clipping]:
    """Parse a clippings export with the default layouts."""
    config = ParserConfig(remove_clipping_limit=remove_clipping_limit)
    return ClippingsParser(config, logger=logger).parse_file(path)
