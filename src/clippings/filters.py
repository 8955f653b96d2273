"""Selection helpers over clipping lists."""
from __future__ import annotations

import random
import re

from clippings.clipping_types import Clipping, ClippingType
from clippings.errors import ClippingSelectionError

DEFAULT_ATTEMPTS = 10


def filter_by_source(clippings: list[Clipping], source: str) -> list[Clipping]:
    return [c for c in clippings if c.source == source]


def filter_by_source_pattern(
    clippings: list[Clipping], pattern: re.Pattern[str],
) -> list[Clipping]:
    return [c for c in clippings if pattern.search(c.source)]


def compile_source_filter(raw: str | None) -> re.Pattern[str] | None:
    """Compile a user-supplied source filter; empty means no filter."""
    if not raw:
        return None
    try:
        return re.compile(raw)
    except re.error as exc:
        raise ValueError(f"supplied source filter {raw!r} is invalid: {exc}") from exc


def choose_random(
    clippings: list[Clipping],
    *,
    wanted_type: ClippingType = ClippingType.HIGHLIGHT,
    attempts: int = DEFAULT_ATTEMPTS,
    rng: random.Random | None = None,
) -> Clipping:
    """Draw up to ``attempts`` random clippings; return the first of ``wanted_type``."""
    if not clippings:
        raise ClippingSelectionError("no clippings to choose from")
    rng = rng or random.SystemRandom()
    for _ in range(attempts):
        candidate = clippings[rng.randrange(len(clippings))]
        if candidate.type == wanted_type:
            return candidate
    raise ClippingSelectionError(
        f"could not get a {wanted_type.name.lower()} despite {attempts} attempts"
    )
