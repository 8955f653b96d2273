#!/usr/bin/env python3
"""Build the chapter outline of one book from ``#cn`` notes, as JSON.

Usage:
    python3 scripts/build_summary.py --input-file-path clippings.json \
      --source-filter "Alias Grace"
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from clippings.cli_utils import (
    UsageError,
    configure_logging,
    dump_json,
    fail,
    require_input_file,
)
from clippings.clipping_types import sort_clippings
from clippings.errors import ClippingsError
from clippings.filters import compile_source_filter, filter_by_source
from clippings.io_utils import load_clippings
from clippings.summary import summarize

log = logging.getLogger("build_summary")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a chapter summary for one source.")
    parser.add_argument(
        "--input-file-path", required=True, type=Path,
        help="JSON clipping list written by parse_clippings.py.",
    )
    parser.add_argument(
        "--source-filter", default="",
        help="Regular expression selecting exactly one source.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        source_filter = compile_source_filter(args.source_filter)
        clippings = load_clippings(require_input_file(args.input_file_path))
        sources = sorted({
            c.source for c in clippings
            if source_filter is None or source_filter.search(c.source)
        })
        if len(sources) != 1:
            raise UsageError(
                f"source filter must select exactly one source, got {len(sources)}"
            )
        log.info("build summary for source %s", sources[0])
        summary = summarize(sort_clippings(filter_by_source(clippings, sources[0])))
    except (UsageError, ClippingsError, ValueError) as exc:
        return fail(str(exc))

    dump_json(summary.to_dict())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
