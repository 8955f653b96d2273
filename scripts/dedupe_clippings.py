#!/usr/bin/env python3
"""Remove duplicate notes from a parsed clipping list, keeping the newest.

Usage:
    python3 scripts/dedupe_clippings.py \
      --input-file-path clippings.json --output-file-path deduped.json
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from clippings.cli_utils import (
    UsageError,
    configure_logging,
    fail,
    require_input_file,
    require_new_output,
)
from clippings.dedup import retain_latest
from clippings.errors import ClippingsError
from clippings.io_utils import load_clippings, save_clippings

log = logging.getLogger("dedupe_clippings")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Keep only the most recent note at each source location."
    )
    parser.add_argument(
        "--input-file-path", required=True, type=Path,
        help="JSON clipping list written by parse_clippings.py.",
    )
    parser.add_argument("--output-file-path", required=True, type=Path)
    parser.add_argument("--force", action="store_true", help="Overwrite the output file.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        require_input_file(args.input_file_path)
        require_new_output(args.output_file_path, force=args.force)
        clippings = load_clippings(args.input_file_path)
        log.info("read %d clippings", len(clippings))
        deduped = retain_latest(clippings)
        log.info("%d clippings after removing duplicates", len(deduped))
        save_clippings(deduped, args.output_file_path)
    except (UsageError, ClippingsError, ValueError) as exc:
        return fail(str(exc))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
