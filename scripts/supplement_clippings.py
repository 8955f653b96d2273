#!/usr/bin/env python3
"""Fill clipping-limit placeholders from a Bookcision JSON export.

Usage:
    python3 scripts/supplement_clippings.py \
      --input-file-path clippings.json \
      --supplement-file-path bookcision.json \
      --source-filter "^Alias Grace" \
      --output-file-path supplemented.json
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from clippings.bookcision import load_bookcision
from clippings.cli_utils import (
    UsageError,
    configure_logging,
    fail,
    require_input_file,
    require_new_output,
)
from clippings.errors import ClippingsError
from clippings.filters import compile_source_filter
from clippings.io_utils import load_clippings, save_clippings
from clippings.supplement import merge_supplement

log = logging.getLogger("supplement_clippings")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Replace withheld clipping text using a Bookcision export."
    )
    parser.add_argument(
        "--input-file-path", required=True, type=Path,
        help="JSON clipping list written by parse_clippings.py.",
    )
    parser.add_argument(
        "--supplement-file-path", required=True, type=Path,
        help="JSON file with all the clippings of one book, exported using Bookcision.",
    )
    parser.add_argument(
        "--source-filter", required=True,
        help="Regular expression selecting the source the export belongs to.",
    )
    parser.add_argument("--output-file-path", required=True, type=Path)
    parser.add_argument("--force", action="store_true", help="Overwrite the output file.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        source_filter = compile_source_filter(args.source_filter)
        if source_filter is None:
            raise UsageError("source filter can not be empty")
        require_input_file(args.input_file_path)
        require_input_file(args.supplement_file_path, "supplement file")
        require_new_output(args.output_file_path, force=args.force)

        clippings = load_clippings(args.input_file_path)
        log.info("read %d clippings", len(clippings))
        secondary = load_bookcision(args.supplement_file_path)
        log.info("read %d supplement clippings", len(secondary))

        merged = merge_supplement(clippings, secondary, source_pattern=source_filter)
        save_clippings(merged, args.output_file_path)
    except (UsageError, ClippingsError, ValueError) as exc:
        return fail(str(exc))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
