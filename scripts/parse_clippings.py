#!/usr/bin/env python3
"""Parse an e-reader clippings export into a sorted JSON clipping list.

Usage:
    python3 scripts/parse_clippings.py \
      --input-file-path "My Clippings.txt" --output-file-path clippings.json

    # Drop clipping-limit placeholders and keep only the newest note per location
    python3 scripts/parse_clippings.py --input-file-path "My Clippings.txt" \
      --output-file-path clippings.json --remove-clipping-limit --remove-duplicates
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
from clippings.clipping_types import sort_clippings
from clippings.dedup import retain_latest
from clippings.errors import ClippingsError
from clippings.io_utils import save_clippings
from clippings.kindle_parser import ClippingsParser
from clippings.layouts import ParserConfig

log = logging.getLogger("parse_clippings")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Parse a My Clippings.txt export into JSON."
    )
    parser.add_argument(
        "--input-file-path", required=True, type=Path,
        help="Input file. Preferably the My Clippings.txt file from the device.",
    )
    parser.add_argument(
        "--output-file-path", required=True, type=Path,
        help="Output file. Clippings are written as a JSON list.",
    )
    parser.add_argument(
        "--remove-clipping-limit", action="store_true",
        help="Skip clippings whose text was withheld because of the clipping limit.",
    )
    parser.add_argument(
        "--remove-duplicates", action="store_true",
        help="Keep only the most recent note at each source location.",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Optional JSON parser config (layouts, separator, markers).",
    )
    parser.add_argument(
        "--force", action="store_true",
        help="Overwrite the output file if it exists.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        require_input_file(args.input_file_path)
        require_new_output(args.output_file_path, force=args.force)
        overrides: dict[str, bool] = {}
        if args.remove_clipping_limit:
            overrides["remove_clipping_limit"] = True
        if args.config is not None:
            config = ParserConfig.from_json(require_input_file(args.config, "config"), **overrides)
        else:
            config = ParserConfig(**overrides)

        clippings = ClippingsParser(config).parse_file(args.input_file_path)
        log.info("read %d clippings from %s", len(clippings), args.input_file_path)

        if args.remove_duplicates:
            clippings = retain_latest(clippings)
            log.info("%d clippings after removing duplicates", len(clippings))

        save_clippings(sort_clippings(clippings), args.output_file_path)
    except (UsageError, ClippingsError, ValueError) as exc:
        return fail(str(exc))

    log.info("wrote %s", args.output_file_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
