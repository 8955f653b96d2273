"""Description-line layouts and parser configuration.

The e-reader has changed the wording of the second line of each clipping
several times and localizes it. Each known wording is one
``DescriptionLayout``: a pattern plus the capture group that holds each
field. Layouts are tried in table order and the first match wins, so a
more specific layout must precede a more general one that overlaps it.

Adding a new export era means appending a layout (in code or in a JSON
config passed to ``ParserConfig.from_json``), not touching the parser.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import orjson

from clippings.clipping_types import ClippingType

SEPARATOR = "=========="
CLIPPING_LIMIT_MESSAGE = "<You have reached the clipping limit for this item>"
BOOKMARK_PREFIX = "- Your Bookmark"
BOOKMARK_TERMS: tuple[str, ...] = ("ブックマーク",)

DEFAULT_TYPE_KEYWORDS: dict[str, ClippingType] = {
    "Highlight": ClippingType.HIGHLIGHT,
    "ハイライト": ClippingType.HIGHLIGHT,
    "Note": ClippingType.NOTE,
    "メモ": ClippingType.NOTE,
}

# strptime formats for the timestamp conventions seen in exports.
ENGLISH_DAY_MONTH_FORMAT = "%A, %d %B %Y %H:%M:%S"
ENGLISH_MONTH_DAY_FORMAT = "%A, %B %d, %Y %I:%M:%S %p"
JAPANESE_FORMAT = "%Y年%m月%d日 %H:%M:%S"


@dataclass(frozen=True, slots=True)
class DescriptionLayout:
    """One recognized wording of the description line.

    Group indices are 1-based capture group numbers; ``None`` means the
    layout does not carry that field.
    """

    name: str
    pattern: re.Pattern[str]
    required_groups: int
    type_group: int
    start_group: int
    end_group: int | None = None
    page_group: int | None = None
    time_group: int | None = None
    time_format: str = ""
    # Trailing glyphs of the date token naming the weekday (e.g. 土曜日).
    weekday_glyphs: int = 0

    def __post_init__(self) -> None:
        if self.pattern.groups != self.required_groups:
            raise ValueError(
                f"layout {self.name}: pattern has {self.pattern.groups} groups, "
                f"expected {self.required_groups}"
            )
        for label, group in (
            ("type_group", self.type_group),
            ("start_group", self.start_group),
            ("end_group", self.end_group),
            ("page_group", self.page_group),
            ("time_group", self.time_group),
        ):
            if group is not None and not 1 <= group <= self.required_groups:
                raise ValueError(
                    f"layout {self.name}: {label}={group} outside 1..{self.required_groups}"
                )
        if self.time_group is not None and not self.time_format:
            raise ValueError(f"layout {self.name}: time_group requires time_format")
        if self.weekday_glyphs < 0:
            raise ValueError(f"layout {self.name}: weekday_glyphs must be >= 0")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DescriptionLayout:
        """Build a layout from a JSON object (pattern given as a string)."""
        try:
            pattern = re.compile(data["pattern"])
        except re.error as exc:
            raise ValueError(f"layout {data.get('name')}: invalid pattern: {exc}") from exc
        return cls(
            name=str(data["name"]),
            pattern=pattern,
            required_groups=int(data["required_groups"]),
            type_group=int(data["type_group"]),
            start_group=int(data["start_group"]),
            end_group=data.get("end_group"),
            page_group=data.get("page_group"),
            time_group=data.get("time_group"),
            time_format=str(data.get("time_format", "")),
            weekday_glyphs=int(data.get("weekday_glyphs", 0)),
        )


DEFAULT_LAYOUTS: tuple[DescriptionLayout, ...] = (
    # - Your Highlight on page 373 | location 5709-5720 | Added on Sunday, 16 April 2023 10:13:54
    # - Your Note on page 286 | location 4371 | Added on Saturday, 15 April 2023 12:51:43
    DescriptionLayout(
        name="english_page",
        pattern=re.compile(
            r"^- Your (.+?) on page ([ivx0-9]+) \| location (\d+)-?(\d+)? \| Added on (.+)$"
        ),
        required_groups=5,
        type_group=1,
        page_group=2,
        start_group=3,
        end_group=4,
        time_group=5,
        time_format=ENGLISH_DAY_MONTH_FORMAT,
    ),
    # - Your Highlight at location 9723-9727 | Added on Sunday, 2 January 2022 13:17:22
    DescriptionLayout(
        name="english_location",
        pattern=re.compile(
            r"^- Your (.+?) at location (\d+)-?(\d+)? \| Added on (.+)$"
        ),
        required_groups=4,
        type_group=1,
        start_group=2,
        end_group=3,
        time_group=4,
        time_format=ENGLISH_DAY_MONTH_FORMAT,
    ),
    # - 7ページ|位置No. 96-96のハイライト |作成日: 2023年5月14日日曜日 11:31:52
    # - 22ページ|位置No. 336のメモ |作成日: 2023年6月10日土曜日 9:18:40
    DescriptionLayout(
        name="japanese_page",
        pattern=re.compile(
            r"- (\d+)ページ\|位置No\. (\d+)-?(\d+)?の(.+) \|作成日: (.+)"
        ),
        required_groups=5,
        type_group=4,
        page_group=1,
        start_group=2,
        end_group=3,
        time_group=5,
        time_format=JAPANESE_FORMAT,
        weekday_glyphs=3,
    ),
    # Since June 2023:
    # - Your Highlight on page 4 | Location 52-54 | Added on Wednesday, June 14, 2023 10:34:06 PM
    DescriptionLayout(
        name="english_page_2023",
        pattern=re.compile(
            r"^- Your (.+?) on page ([ivx0-9]+) \| Location (\d+)-?(\d+)? \| Added on (.+)$"
        ),
        required_groups=5,
        type_group=1,
        page_group=2,
        start_group=3,
        end_group=4,
        time_group=5,
        time_format=ENGLISH_MONTH_DAY_FORMAT,
    ),
    # Since June 2024:
    # - Your Highlight on Location 136-138 | Added on Tuesday, March 19, 2024 9:45:15 PM
    DescriptionLayout(
        name="english_location_2024",
        pattern=re.compile(
            r"^- Your (.+?) on Location (\d+)-?(\d+)? \| Added on (.+)$"
        ),
        required_groups=4,
        type_group=1,
        start_group=2,
        end_group=3,
        time_group=4,
        time_format=ENGLISH_MONTH_DAY_FORMAT,
    ),
)


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Read-only configuration injected into ``ClippingsParser``."""

    separator: str = SEPARATOR
    layouts: tuple[DescriptionLayout, ...] = DEFAULT_LAYOUTS
    # Stored as a read-only view of a private copy.
    type_keywords: Mapping[str, ClippingType] = field(
        default_factory=lambda: dict(DEFAULT_TYPE_KEYWORDS)
    )
    clipping_limit_message: str = CLIPPING_LIMIT_MESSAGE
    bookmark_prefix: str = BOOKMARK_PREFIX
    bookmark_terms: tuple[str, ...] = BOOKMARK_TERMS
    # Skip clippings whose text was withheld because of the copy quota.
    remove_clipping_limit: bool = False
    # The first chunk of an export precedes the first separator and is
    # not a clipping.
    skip_leading_chunk: bool = True

    def __post_init__(self) -> None:
        if not self.separator.strip():
            raise ValueError("separator cannot be empty")
        if not self.layouts:
            raise ValueError("at least one description layout is required")
        object.__setattr__(
            self, "type_keywords", MappingProxyType(dict(self.type_keywords)),
        )
        for keyword, ctype in self.type_keywords.items():
            if ctype == ClippingType.NONE:
                raise ValueError(f"type keyword {keyword!r} maps to NONE")

    @classmethod
    def from_json(
        cls, path: Path, **overrides: Any,
    ) -> ParserConfig:
        """Load a config file; absent keys keep their defaults.

        Keyword ``overrides`` (e.g. from command-line flags) win over
        values in the file.
        """
        data: dict[str, Any] = orjson.loads(path.read_bytes())
        kwargs: dict[str, Any] = {}
        if "separator" in data:
            kwargs["separator"] = str(data["separator"])
        if "layouts" in data:
            kwargs["layouts"] = tuple(
                DescriptionLayout.from_dict(row) for row in data["layouts"]
            )
        if "type_keywords" in data:
            kwargs["type_keywords"] = {
                str(k): ClippingType(int(v)) for k, v in data["type_keywords"].items()
            }
        for key in ("clipping_limit_message", "bookmark_prefix"):
            if key in data:
                kwargs[key] = str(data[key])
        if "bookmark_terms" in data:
            kwargs["bookmark_terms"] = tuple(str(t) for t in data["bookmark_terms"])
        for key in ("remove_clipping_limit", "skip_leading_chunk"):
            if key in data:
                kwargs[key] = bool(data[key])
        kwargs.update(overrides)
        return cls(**kwargs)
