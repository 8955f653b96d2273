#!/usr/bin/env python3
"""Print the highlights marked as quotes (a following ``#quote`` note) as JSON.

Usage:
    python3 scripts/extract_quotes.py --input-file-path clippings.json \
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
from clippings.clipping_types import clippings_to_dicts
from clippings.errors import ClippingsError
from clippings.filters import compile_source_filter, filter_by_source_pattern
from clippings.io_utils import load_clippings
from clippings.summary import extract_quotes

log = logging.getLogger("extract_quotes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract quotes marked with #quote notes.")
    parser.add_argument(
        "--input-file-path", required=True, type=Path,
        help="JSON clipping list written by parse_clippings.py.",
    )
    parser.add_argument(
        "--source-filter", required=True,
        help="Regular expression for filtering the source of clippings",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        source_filter = compile_source_filter(args.source_filter)
        if source_filter is None:
            raise UsageError("source filter can not be empty")
        clippings = load_clippings(require_input_file(args.input_file_path))
    except (UsageError, ClippingsError, ValueError) as exc:
        return fail(str(exc))
    log.info("read %d clippings", len(clippings))

    quotes = extract_quotes(filter_by_source_pattern(clippings, source_filter))
    log.info("found %d quotes", len(quotes))
    dump_json(clippings_to_dicts(quotes))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
