"""Unit tests for the chart visualizer."""

import pytest

from report_engine.core.app_config import DEFAULT_SERIES_PALETTE, ChartsConfig, RenderConfig
from report_engine.engine.content import ChartData
from report_engine.visualizers.charts import (
    ChartSeries,
    PieSlice,
    category_points,
    render_chart,
)


def _chart(**kwargs) -> ChartData:
    return ChartData.model_validate(kwargs)


class TestSeriesCharts:
    """Bar, line and radar share the category-points layout."""

    @pytest.mark.parametrize("chart_type", ["bar", "line", "radar"])
    def test_points_follow_label_order(self, chart_type: str, render_config: RenderConfig) -> None:
        data = _chart(
            type=chart_type,
            labels=["Jan", "Feb"],
            datasets=[{"label": "Revenue", "data": [5, 7]}],
        )
        visual = render_chart(data, render_config)
        assert visual.supported is True
        assert visual.points == [{"name": "Jan", "Revenue": 5}, {"name": "Feb", "Revenue": 7}]

    def test_values_pass_through_unformatted(self, render_config: RenderConfig) -> None:
        data = _chart(type="bar", labels=["a"], datasets=[{"label": "s", "data": [0.5]}])
        assert render_chart(data, render_config).points == [{"name": "a", "s": 0.5}]

    def test_missing_values_are_none(self) -> None:
        data = _chart(type="line", labels=["a", "b", "c"], datasets=[{"label": "s", "data": [1]}])
        assert [p["s"] for p in category_points(data)] == [1, None, None]

    def test_default_series_names_and_palette(self, render_config: RenderConfig) -> None:
        data = _chart(
            type="bar",
            labels=["x"],
            datasets=[{"data": [1]}, {"data": [2]}],
        )
        visual = render_chart(data, render_config)
        assert visual.series == [
            ChartSeries(name="Dataset 1", color=DEFAULT_SERIES_PALETTE[0]),
            ChartSeries(name="Dataset 2", color=DEFAULT_SERIES_PALETTE[1]),
        ]

    def test_palette_cycles(self, render_config: RenderConfig) -> None:
        datasets = [{"label": f"s{i}", "data": [i]} for i in range(7)]
        visual = render_chart(_chart(type="bar", labels=["x"], datasets=datasets), render_config)
        assert visual.series[6].color == DEFAULT_SERIES_PALETTE[0]

    def test_explicit_colors(self, render_config: RenderConfig) -> None:
        data = _chart(
            type="bar",
            labels=["x"],
            datasets=[
                {"label": "list", "data": [1], "colors": ["#123456", "#abcdef"]},
                {"label": "single", "data": [1], "backgroundColor": "#00ff00"},
            ],
        )
        series = render_chart(data, render_config).series
        assert [s.color for s in series] == ["#123456", "#00ff00"]

    def test_configured_palette(self) -> None:
        config = RenderConfig(charts=ChartsConfig(default_palette="bold"))
        data = _chart(type="bar", labels=["x"], datasets=[{"data": [1]}])
        assert render_chart(data, config).series[0].color == "#ef4444"

    def test_title_and_height(self, render_config: RenderConfig) -> None:
        visual = render_chart(_chart(type="line", title="Trend"), render_config)
        assert visual.title == "Trend"
        assert visual.height == 300


class TestPieChart:
    """Pie charts use the first dataset only."""

    def test_slices_with_cycling_colors(self, render_config: RenderConfig) -> None:
        data = _chart(
            type="pie",
            labels=["A", "B", "C"],
            datasets=[
                {"data": [50, 30, 20], "colors": ["#111", "#222"]},
                {"data": [1, 1, 1]},
            ],
        )
        assert render_chart(data, render_config).slices == [
            PieSlice(name="A", value=50, color="#111"),
            PieSlice(name="B", value=30, color="#222"),
            PieSlice(name="C", value=20, color="#111"),
        ]

    def test_palette_when_no_colors(self, render_config: RenderConfig) -> None:
        data = _chart(type="pie", labels=["A", "B"], datasets=[{"data": [1, 2]}])
        colors = [s.color for s in render_chart(data, render_config).slices]
        assert colors == DEFAULT_SERIES_PALETTE[:2]

    def test_no_dataset_raises(self, render_config: RenderConfig) -> None:
        with pytest.raises(ValueError, match="at least one dataset"):
            render_chart(_chart(type="pie", labels=["A"]), render_config)


class TestUnsupportedChart:
    """Unknown chart types never raise."""

    def test_unsupported_visual(self, render_config: RenderConfig) -> None:
        visual = render_chart(_chart(type="scatter", title="S"), render_config)
        assert visual.supported is False
        assert visual.type == "scatter"
        assert visual.title == "S"
        assert visual.message == render_config.labels.unsupported_chart
        assert visual.points == []
