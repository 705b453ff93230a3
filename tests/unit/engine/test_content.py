"""Unit tests for ContentMap and record validation."""

import pytest

from report_engine.core.exceptions import ContentValidationError
from report_engine.engine.content import (
    ChartData,
    ChartRecord,
    ContentMap,
    ShortcodeType,
    TableRecord,
    TextRecord,
    validate_record,
)


class TestRecordValidation:
    """Tests for typed record models."""

    def test_text_record_from_bare_string(self) -> None:
        record = validate_record(ShortcodeType.TEXT, "intro", "Just text")
        assert record == TextRecord(content="Just text")

    def test_chart_nested_shape_is_flattened(self) -> None:
        data = ChartData.model_validate(
            {
                "type": "pie",
                "data": {
                    "labels": ["A", "B"],
                    "datasets": [{"data": [1, 2], "backgroundColor": ["#fff", "#000"]}],
                },
            }
        )
        assert data.labels == ["A", "B"]
        assert data.datasets[0].colors == ["#fff", "#000"]

    def test_unknown_chart_type_is_valid(self) -> None:
        record = validate_record(ShortcodeType.CHART, "c", {"data": {"type": "scatter"}})
        assert isinstance(record, ChartRecord)
        assert record.data.type == "scatter"

    def test_table_defaults(self) -> None:
        record = validate_record(ShortcodeType.TABLE, "t", {"data": {}})
        assert isinstance(record, TableRecord)
        assert record.data.type == "simple"
        assert record.data.rows == []
        assert record.data.headers is None

    def test_invalid_record_raises_content_error(self) -> None:
        with pytest.raises(ContentValidationError) as exc_info:
            validate_record(ShortcodeType.CHART, "broken", {"title": "no data"})
        assert exc_info.value.details == {"shortcode": "broken", "kind": "chart"}
        assert exc_info.value.status_code == 422


class TestContentMapLookup:
    """Tests for namespace lookup and precedence."""

    def test_lookup_missing(self) -> None:
        assert ContentMap().lookup("nope") is None

    def test_text_wins_over_charts_and_tables(self) -> None:
        content = ContentMap(text={"x": "t"}, charts={"x": {"data": {"type": "bar"}}}, tables={"x": {"data": {}}})
        entry = content.lookup("x")
        assert entry is not None
        assert entry.kind is ShortcodeType.TEXT
        assert entry.shadowed == (ShortcodeType.CHART, ShortcodeType.TABLE)
        assert entry.is_ambiguous

    def test_charts_win_over_tables(self) -> None:
        content = ContentMap(charts={"x": {"data": {"type": "bar"}}}, tables={"x": {"data": {}}})
        assert content.lookup("x").kind is ShortcodeType.CHART

    def test_none_and_empty_string_count_as_absent(self) -> None:
        content = ContentMap(text={"x": None, "y": ""}, tables={"x": {"data": {}}})
        assert content.lookup("x").kind is ShortcodeType.TABLE
        assert content.lookup("y") is None
        assert "y" not in content

    def test_contains(self) -> None:
        content = ContentMap(text={"intro": "hi"})
        assert "intro" in content
        assert "other" not in content

    def test_rejects_non_mapping_namespace(self) -> None:
        with pytest.raises(TypeError, match="ContentMap.charts must be a mapping"):
            ContentMap(charts=["not", "a", "mapping"])  # type: ignore[arg-type]


class TestContentMapViews:
    """Tests for entries() and collisions()."""

    def test_entries_single_mapping(self) -> None:
        content = ContentMap(text={"a": "x"}, charts={"b": {"data": {"type": "bar"}}}, tables={"a": {"data": {}}})
        entries = content.entries()
        assert set(entries) == {"a", "b"}
        assert entries["a"].kind is ShortcodeType.TEXT
        assert entries["b"].kind is ShortcodeType.CHART

    def test_collisions(self) -> None:
        content = ContentMap(text={"a": "x"}, charts={"b": {"data": {"type": "bar"}}}, tables={"a": {"data": {}}})
        assert content.collisions() == {"a": [ShortcodeType.TEXT, ShortcodeType.TABLE]}


class TestContentMapConstructors:
    """Tests for alternate constructors."""

    def test_from_dict(self) -> None:
        content = ContentMap.from_dict({"text": {"a": "x"}, "tables": None})
        assert content.text == {"a": "x"}
        assert content.charts == {}
        assert content.tables == {}

    def test_from_dict_none(self) -> None:
        assert ContentMap.from_dict(None) == ContentMap()

    def test_from_report_content(self) -> None:
        content = ContentMap.from_report_content(
            {
                "textSections": {"intro": {"content": "Hi"}},
                "chartSections": {"c": {"data": {"type": "line"}}},
            }
        )
        assert "intro" in content
        assert content.lookup("c").kind is ShortcodeType.CHART
        assert content.tables == {}


class TestScalarLabels:
    """Numeric chart labels and table headers display as text."""

    def test_numeric_chart_labels(self) -> None:
        data = ChartData.model_validate(
            {"type": "bar", "labels": [2022, 2023, None], "datasets": [{"data": [1, 2, 3]}]}
        )
        assert data.labels == ["2022", "2023", ""]

    def test_numeric_labels_in_nested_shape(self) -> None:
        data = ChartData.model_validate({"type": "line", "data": {"labels": [1, 2.5]}})
        assert data.labels == ["1", "2.5"]

    def test_numeric_table_headers(self) -> None:
        record = validate_record(
            ShortcodeType.TABLE, "t", {"data": {"headers": ["Voce", 2023, 2024], "rows": []}}
        )
        assert isinstance(record, TableRecord)
        assert record.data.headers == ["Voce", "2023", "2024"]
