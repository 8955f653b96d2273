"""Tests for clippings.filters."""
from __future__ import annotations

import random
import re

import pytest

from clippings.clipping_types import Clipping, ClippingType, Location
from clippings.errors import ClippingSelectionError
from clippings.filters import (
    choose_random,
    compile_source_filter,
    filter_by_source,
    filter_by_source_pattern,
)


def _clip(source: str, ctype: ClippingType = ClippingType.HIGHLIGHT, start: int = 1) -> Clipping:
    return Clipping(source=source, type=ctype, location=Location(start=start), text=source)


CLIPS = [
    _clip("Dune (Herbert, Frank)"),
    _clip("Dune Messiah (Herbert, Frank)"),
    _clip("Emma (Austen, Jane)", ClippingType.NOTE),
]


class TestSourceFilters:
    def test_exact_source(self) -> None:
        assert filter_by_source(CLIPS, "Dune (Herbert, Frank)") == [CLIPS[0]]

    def test_pattern_searches_anywhere(self) -> None:
        assert filter_by_source_pattern(CLIPS, re.compile("Herbert")) == CLIPS[:2]

    def test_compile_empty_is_none(self) -> None:
        assert compile_source_filter("") is None
        assert compile_source_filter(None) is None

    def test_compile_invalid(self) -> None:
        with pytest.raises(ValueError, match="source filter"):
            compile_source_filter("(unclosed")


class TestChooseRandom:
    def test_returns_wanted_type(self) -> None:
        clips = [_clip(f"book {i}") for i in range(5)]
        chosen = choose_random(clips, rng=random.Random(7))
        assert chosen in clips

    def test_seeded_choice_is_reproducible(self) -> None:
        clips = [_clip(f"book {i}") for i in range(20)]
        first = choose_random(clips, rng=random.Random(42))
        second = choose_random(clips, rng=random.Random(42))
        assert first is second

    def test_gives_up_after_attempts(self) -> None:
        notes = [_clip("n", ClippingType.NOTE)]
        with pytest.raises(ClippingSelectionError, match="10 attempts"):
            choose_random(notes, rng=random.Random(0))

    def test_wanted_note(self) -> None:
        assert choose_random(CLIPS[2:], wanted_type=ClippingType.NOTE) is CLIPS[2]

    def test_empty_input(self) -> None:
        with pytest.raises(ClippingSelectionError):
            choose_random([])
