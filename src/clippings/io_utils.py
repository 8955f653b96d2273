"""I/O utilities for JSON files and clipping collections.

orjson-backed JSON I/O plus load/save of clipping lists in their
interchange representation.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson

from clippings.clipping_types import Clipping, clippings_from_dicts, clippings_to_dicts
from clippings.errors import ClippingsIOError


def load_json(path: Path) -> Any:
    """Load JSON from a file."""
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ClippingsIOError(str(path), str(exc)) from exc
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ClippingsIOError(str(path), f"invalid JSON: {exc}") from exc


def dump_json_bytes(obj: Any, *, pretty: bool = True) -> bytes:
    opts = orjson.OPT_INDENT_2 if pretty else 0
    return orjson.dumps(obj, option=opts | orjson.OPT_APPEND_NEWLINE)


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dump_json_bytes(obj, pretty=pretty))


def load_clippings(path: Path) -> list[Clipping]:
    """Load clippings written by ``save_clippings``."""
    rows = load_json(path)
    if not isinstance(rows, list):
        raise ClippingsIOError(str(path), "expected a JSON list of clippings")
    try:
        return clippings_from_dicts(rows)
    except (ValueError, TypeError, AttributeError) as exc:
        raise ClippingsIOError(str(path), f"invalid clipping record: {exc}") from exc


def save_clippings(clippings: list[Clipping], path: Path) -> None:
    save_json(clippings_to_dicts(clippings), path)
