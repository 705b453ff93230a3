"""Unit tests for shortcode naming and template inspection."""

import pytest

from report_engine.engine.content import ContentMap, ShortcodeType
from report_engine.engine.shortcodes import (
    default_shortcode,
    inspect_template,
    make_shortcode,
    slugify,
)


class TestSlugify:
    """Tests for title slugs."""

    def test_lowercase_and_underscores(self) -> None:
        assert slugify("Market Share") == "market_share"

    def test_whitespace_runs_collapse(self) -> None:
        assert slugify("a \t  b") == "a_b"

    def test_drops_punctuation_and_accents(self) -> None:
        assert slugify("Crescita (%) è-ok!") == "crescita__-ok"

    def test_truncates_to_fifteen(self) -> None:
        assert slugify("Vendite Trimestrali 2024") == "vendite_trimest"


class TestMakeShortcode:
    """Tests for make_shortcode() and default_shortcode()."""

    def test_titled_shortcode(self) -> None:
        assert make_shortcode("chart", "Vendite Trimestrali 2024", 2) == "[chart_vendite_trimest_2]"

    def test_accepts_enum(self) -> None:
        assert make_shortcode(ShortcodeType.TABLE, "KPI", 1) == "[table_kpi_1]"

    @pytest.mark.parametrize(
        ("kind", "expected"),
        [("text", "[text_section_3]"), ("chart", "[chart_chart_3]"), ("table", "[table_table_3]")],
    )
    def test_default_shortcodes(self, kind: str, expected: str) -> None:
        assert default_shortcode(kind, 3) == expected

    def test_unknown_kind_raises(self) -> None:
        with pytest.raises(ValueError):
            make_shortcode("unknown", "x", 1)
        with pytest.raises(ValueError):
            make_shortcode("video", "x", 1)


class TestInspectTemplate:
    """Tests for inspect_template()."""

    def test_reports_usage(self) -> None:
        content = ContentMap(
            text={"intro": "hi", "dup": "t", "unused": "u"},
            tables={"dup": {"data": {}}, "unused": {"data": {}}},
        )
        inspection = inspect_template("[intro] [missing] [dup] [missing]", content)
        assert inspection.shortcodes == ["intro", "missing", "dup", "missing"]
        assert inspection.unresolved == ["missing"]
        assert inspection.collisions == {"dup": [ShortcodeType.TEXT, ShortcodeType.TABLE]}
