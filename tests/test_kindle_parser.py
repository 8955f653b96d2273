"""Tests for clippings.kindle_parser: end-to-end parsing of an export."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from clippings.clipping_types import ClippingType, Location
from clippings.errors import (
    ClippingsIOError,
    DescriptionUnrecognizedError,
    FieldParseError,
    MalformedSegmentError,
)
from clippings.kindle_parser import ClippingsParser, parse_clippings_file
from clippings.layouts import CLIPPING_LIMIT_MESSAGE, ParserConfig

FIXTURES = Path(__file__).resolve().parent / "fixtures"
SAMPLE = FIXTURES / "my_clippings.txt"
SEP = "=========="


def _block(source: str, description: str, body: str) -> str:
    return f"{source}\n{description}\n\n{body}\n{SEP}\n"


class TestParseText:
    def test_scenario_highlight(self) -> None:
        text = SEP + "\n" + _block(
            "Alias Grace (Atwood, Margaret)",
            "- Your Highlight on page 22 | location 281-283 | Added on Sunday, 5 May 2019 10:23:20",
            "They were bell-shaped...",
        )
        [clip] = ClippingsParser().parse_text(text)
        assert clip.source == "Alias Grace (Atwood, Margaret)"
        assert clip.type == ClippingType.HIGHLIGHT
        assert clip.page == "22"
        assert clip.location == Location(281, 283)
        assert clip.create_time == datetime(2019, 5, 5, 10, 23, 20)
        assert clip.text == "They were bell-shaped..."

    def test_n_blocks_give_n_clippings_in_file_order(self) -> None:
        descriptions = [
            "- Your Highlight at location 30-31 | Added on Sunday, 2 January 2022 13:17:22",
            "- Your Note at location 10 | Added on Sunday, 2 January 2022 13:18:00",
            "- Your Highlight at location 20-25 | Added on Sunday, 2 January 2022 13:19:00",
        ]
        text = SEP + "\n" + "".join(
            _block("Book", d, f"text {i}") for i, d in enumerate(descriptions)
        )
        clips = ClippingsParser().parse_text(text)
        assert [c.text for c in clips] == ["text 0", "text 1", "text 2"]
        assert [c.location.start for c in clips] == [30, 10, 20]

    def test_bookmark_block_skipped(self) -> None:
        text = f"{SEP}\nBook\n- Your Bookmark on page 3 | location 40 | Added on Sunday, 5 May 2019 11:00:00\n\n\n{SEP}\n"
        assert ClippingsParser().parse_text(text) == []

    def test_japanese_bookmark_block_skipped(self) -> None:
        text = f"{SEP}\n本\n- 12ページ|位置No. 170のブックマーク |作成日: 2023年5月14日日曜日 11:31:52\n{SEP}\n"
        assert ClippingsParser().parse_text(text) == []

    def test_malformed_block_raises_with_content(self) -> None:
        text = f"{SEP}\nonly a title\n{SEP}\n"
        with pytest.raises(MalformedSegmentError) as excinfo:
            ClippingsParser().parse_text(text)
        assert excinfo.value.content == "only a title"
        assert excinfo.value.length == len("only a title")
        assert excinfo.value.block_index == 0

    def test_two_line_non_bookmark_is_malformed(self) -> None:
        text = f"{SEP}\nBook\n- Your Highlight at location 3 | Added on Sunday, 2 January 2022 13:17:22\n{SEP}\n"
        with pytest.raises(MalformedSegmentError):
            ClippingsParser().parse_text(text)

    def test_source_of_only_non_printables_is_rejected(self) -> None:
        text = SEP + "\n" + _block(
            "\ufeff",
            "- Your Highlight at location 9723-9727 | Added on Sunday, 2 January 2022 13:17:22",
            "body",
        )
        with pytest.raises(FieldParseError) as excinfo:
            ClippingsParser().parse_text(text)
        assert excinfo.value.field == "source"
        assert excinfo.value.layout == "english_location"
        assert excinfo.value.block_index == 0

    def test_unrecognized_description_aborts_parse(self) -> None:
        text = SEP + "\n" + _block(
            "Book",
            "- Your Highlight at location 1 | Added on Sunday, 2 January 2022 13:17:22",
            "fine",
        )
        text += _block("Book", "- Votre surlignement", "bad")
        with pytest.raises(DescriptionUnrecognizedError) as excinfo:
            ClippingsParser().parse_text(text)
        assert excinfo.value.block_index == 1

    def test_leading_chunk_is_not_a_clipping(self) -> None:
        text = _block(
            "Book",
            "- Your Highlight at location 1 | Added on Sunday, 2 January 2022 13:17:22",
            "lost",
        )
        assert ClippingsParser().parse_text(text) == []
        config = ParserConfig(skip_leading_chunk=False)
        [clip] = ClippingsParser(config).parse_text(text)
        assert clip.text == "lost"

    def test_unterminated_final_block_parsed(self) -> None:
        text = (
            f"{SEP}\nBook\n"
            "- Your Highlight at location 1 | Added on Sunday, 2 January 2022 13:17:22\n\n"
            "tail text"
        )
        [clip] = ClippingsParser().parse_text(text)
        assert clip.text == "tail text"


class TestClippingLimit:
    def _text(self) -> str:
        return SEP + "\n" + _block(
            "Dune (Herbert, Frank)",
            "- Your Highlight on Location 136-138 | Added on Tuesday, March 19, 2024 9:45:15 PM",
            CLIPPING_LIMIT_MESSAGE,
        )

    def test_kept_as_placeholder_by_default(self) -> None:
        [clip] = ClippingsParser().parse_text(self._text())
        assert clip.text == CLIPPING_LIMIT_MESSAGE

    def test_skipped_when_enabled(self) -> None:
        config = ParserConfig(remove_clipping_limit=True)
        assert ClippingsParser(config).parse_text(self._text()) == []


class TestParseFile:
    def test_sample_export(self) -> None:
        clips = ClippingsParser().parse_file(SAMPLE)
        assert len(clips) == 6
        assert [c.source for c in clips] == [
            "Alias Grace (Atwood, Margaret)",
            "Alias Grace (Atwood, Margaret)",
            "Alias Grace (Atwood, Margaret)",
            "The Pragmatic Programmer (Hunt, Andrew)",
            "Dune (Herbert, Frank)",
            "吾輩は猫である (夏目漱石)",
        ]
        assert clips[3].text == "Care about your craft.\nThink about your work."
        assert clips[5].type == ClippingType.HIGHLIGHT
        assert clips[5].create_time == datetime(2023, 5, 14, 11, 31, 52)

    def test_sample_export_without_placeholders(self) -> None:
        clips = parse_clippings_file(SAMPLE, remove_clipping_limit=True)
        assert len(clips) == 5
        assert all(c.text != CLIPPING_LIMIT_MESSAGE for c in clips)

    def test_bom_and_crlf(self, tmp_path: Path) -> None:
        content = SAMPLE.read_text(encoding="utf-8").replace("\n", "\r\n")
        path = tmp_path / "My Clippings.txt"
        path.write_bytes(b"\xef\xbb\xbf" + content.encode("utf-8"))
        clips = ClippingsParser().parse_file(path)
        assert len(clips) == 6
        assert clips[0].source == "Alias Grace (Atwood, Margaret)"
        assert clips[3].text == "Care about your craft.\nThink about your work."

    def test_bom_on_each_title(self, tmp_path: Path) -> None:
        path = tmp_path / "clips.txt"
        path.write_text(
            SEP + "\n" + _block(
                "\ufeffBook",
                "- Your Note at location 7 | Added on Sunday, 2 January 2022 13:17:22",
                "n",
            ),
            encoding="utf-8",
        )
        [clip] = ClippingsParser().parse_file(path)
        assert clip.source == "Book"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ClippingsIOError) as excinfo:
            ClippingsParser().parse_file(tmp_path / "absent.txt")
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_undecodable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(ClippingsIOError):
            ClippingsParser().parse_file(path)
