"""Shared plumbing for the command-line scripts in ``scripts/``."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from clippings.io_utils import dump_json_bytes


class UsageError(ValueError):
    """Invalid command-line input; reported as ``Error: ...`` with exit code 1."""


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def require_input_file(path: Path, label: str = "input file") -> Path:
    if not path.is_file():
        raise UsageError(f"{label} must point to a valid file: {path}")
    return path


def require_new_output(path: Path, *, force: bool = False) -> Path:
    if path.exists() and not force:
        raise UsageError(f"output file already exists (use --force to overwrite): {path}")
    return path


def dump_json(obj: Any) -> None:
    sys.stdout.buffer.write(dump_json_bytes(obj))
    sys.stdout.buffer.flush()


def fail(msg: str) -> int:
    print(f"Error: {msg}", file=sys.stderr)
    return 1
