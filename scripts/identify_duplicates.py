#!/usr/bin/env python3
"""Report notes that share a source location.

Prints one ``<source>-<type>-<start> = <count>`` line per group, or the
full groups with ``--json``.

Usage:
    python3 scripts/identify_duplicates.py --input-file-path clippings.json
    python3 scripts/identify_duplicates.py --input-file-path clippings.json \
      --source-filter "Atwood" --json
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
from clippings.dedup import find_duplicate_notes, format_duplicate_key
from clippings.errors import ClippingsError
from clippings.filters import compile_source_filter
from clippings.io_utils import load_clippings

log = logging.getLogger("identify_duplicates")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List notes that share a source and location start."
    )
    parser.add_argument(
        "--input-file-path", required=True, type=Path,
        help="JSON clipping list written by parse_clippings.py.",
    )
    parser.add_argument(
        "--source-filter", default="",
        help="Regular expression for filtering the source of clippings",
    )
    parser.add_argument("--json", action="store_true", help="Print the groups as JSON.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        source_filter = compile_source_filter(args.source_filter)
        clippings = load_clippings(require_input_file(args.input_file_path))
    except (UsageError, ClippingsError, ValueError) as exc:
        return fail(str(exc))
    log.info("read %d clippings", len(clippings))

    groups = find_duplicate_notes(clippings, source_pattern=source_filter)
    if args.json:
        dump_json([
            {"key": format_duplicate_key(key), "clippings": clippings_to_dicts(group)}
            for key, group in groups.items()
        ])
    else:
        for key, group in groups.items():
            print(f"{format_duplicate_key(key)} = {len(group)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
