#!/usr/bin/env python3
"""Print one randomly chosen highlight as a wrapped plaintext excerpt.

Usage:
    python3 scripts/random_clipping.py --input-file-path clippings.json --width 80
"""
from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path

from clippings.cli_utils import (
    UsageError,
    configure_logging,
    fail,
    require_input_file,
)
from clippings.clipping_types import ClippingType
from clippings.errors import ClippingsError
from clippings.filters import choose_random
from clippings.io_utils import load_clippings
from clippings.render import TEXT_WIDTH, render_plaintext

log = logging.getLogger("random_clipping")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print a random highlight excerpt.")
    parser.add_argument(
        "--input-file-path", required=True, type=Path,
        help="JSON clipping list written by parse_clippings.py.",
    )
    parser.add_argument("--width", type=int, default=TEXT_WIDTH, help="Wrap width")
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for a reproducible choice (default: system randomness).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        clippings = load_clippings(require_input_file(args.input_file_path))
        highlights = sum(1 for c in clippings if c.type == ClippingType.HIGHLIGHT)
        log.info("read %d clippings, %d highlights", len(clippings), highlights)
        rng = random.Random(args.seed) if args.seed is not None else None
        selected = choose_random(clippings, rng=rng)
        print(render_plaintext(selected, width=args.width), end="")
    except (UsageError, ClippingsError, ValueError) as exc:
        return fail(str(exc))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
