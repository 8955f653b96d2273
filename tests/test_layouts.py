"""Tests for clippings.layouts: layout validation and config loading."""
from __future__ import annotations

import re
from pathlib import Path

import orjson
import pytest

from clippings.clipping_types import ClippingType
from clippings.kindle_parser import ClippingsParser
from clippings.layouts import (
    CLIPPING_LIMIT_MESSAGE,
    DEFAULT_LAYOUTS,
    DescriptionLayout,
    ParserConfig,
)


class TestDescriptionLayout:
    def test_default_table_order(self) -> None:
        assert [layout.name for layout in DEFAULT_LAYOUTS] == [
            "english_page",
            "english_location",
            "japanese_page",
            "english_page_2023",
            "english_location_2024",
        ]

    def test_group_count_must_match_pattern(self) -> None:
        with pytest.raises(ValueError, match="groups"):
            DescriptionLayout(
                name="bad",
                pattern=re.compile(r"^(\w+) (\d+)$"),
                required_groups=3,
                type_group=1,
                start_group=2,
            )

    def test_group_index_in_range(self) -> None:
        with pytest.raises(ValueError, match="start_group"):
            DescriptionLayout(
                name="bad",
                pattern=re.compile(r"^(\w+) (\d+)$"),
                required_groups=2,
                type_group=1,
                start_group=5,
            )

    def test_time_group_requires_format(self) -> None:
        with pytest.raises(ValueError, match="time_format"):
            DescriptionLayout(
                name="bad",
                pattern=re.compile(r"^(\w+) (\d+) (.+)$"),
                required_groups=3,
                type_group=1,
                start_group=2,
                time_group=3,
            )

    def test_from_dict_rejects_invalid_regex(self) -> None:
        with pytest.raises(ValueError, match="invalid pattern"):
            DescriptionLayout.from_dict({
                "name": "broken",
                "pattern": "([",
                "required_groups": 1,
                "type_group": 1,
                "start_group": 1,
            })


class TestParserConfig:
    def test_defaults(self) -> None:
        config = ParserConfig()
        assert config.separator == "=========="
        assert config.clipping_limit_message == CLIPPING_LIMIT_MESSAGE
        assert config.remove_clipping_limit is False
        assert config.skip_leading_chunk is True
        assert config.type_keywords["メモ"] == ClippingType.NOTE

    def test_type_keywords_read_only(self) -> None:
        keywords = {"Highlight": ClippingType.HIGHLIGHT, "Note": ClippingType.NOTE}
        config = ParserConfig(type_keywords=keywords)
        with pytest.raises(TypeError):
            config.type_keywords["Bookmark"] = ClippingType.NOTE  # type: ignore[index]
        keywords["Surlignement"] = ClippingType.HIGHLIGHT
        assert "Surlignement" not in config.type_keywords
        assert config == ParserConfig(
            type_keywords={"Highlight": ClippingType.HIGHLIGHT, "Note": ClippingType.NOTE}
        )

    def test_keyword_to_none_rejected(self) -> None:
        with pytest.raises(ValueError, match="NONE"):
            ParserConfig(type_keywords={"Bookmark": ClippingType.NONE})

    def test_empty_layouts_rejected(self) -> None:
        with pytest.raises(ValueError, match="layout"):
            ParserConfig(layouts=())

    def test_from_json_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "parser_config.json"
        path.write_bytes(orjson.dumps({
            "remove_clipping_limit": True,
            "type_keywords": {"Surlignement": 1, "Note": 2},
            "layouts": [
                {
                    "name": "french_page",
                    "pattern": r"^- Votre (\w+) sur la page (\d+) \| emplacement (\d+)-?(\d+)?",
                    "required_groups": 4,
                    "type_group": 1,
                    "page_group": 2,
                    "start_group": 3,
                    "end_group": 4,
                }
            ],
        }))
        config = ParserConfig.from_json(path)
        assert config.remove_clipping_limit is True
        assert [layout.name for layout in config.layouts] == ["french_page"]

        text = (
            "==========\n"
            "Livre (Auteur)\n"
            "- Votre Surlignement sur la page 9 | emplacement 52-53 | Ajouté le samedi 30 mars 2024\n"
            "\n"
            "Du texte.\n"
            "==========\n"
        )
        [clip] = ClippingsParser(config).parse_text(text)
        assert clip.type == ClippingType.HIGHLIGHT
        assert clip.page == "9"
        assert clip.location.start == 52
        assert clip.location.end == 53
        assert clip.create_time is None

    def test_from_json_keyword_overrides_win(self, tmp_path: Path) -> None:
        path = tmp_path / "parser_config.json"
        path.write_bytes(orjson.dumps({"remove_clipping_limit": False}))
        config = ParserConfig.from_json(path, remove_clipping_limit=True)
        assert config.remove_clipping_limit is True
        assert config.layouts == DEFAULT_LAYOUTS
