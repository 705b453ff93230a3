"""
Chart Visualizer
================

Turns a ChartData descriptor into a ChartVisual: the series, category
points and pie slices a charting front end needs, with colours resolved.

Supported types are bar, line, pie and radar. Any other type yields a
visual with ``supported=False`` rather than an error. Values are passed
through unchanged (no percentage formatting) and keep label order.
"""

from enum import Enum
from typing import Any

from pydantic import Field

from report_engine.core.app_config import RenderConfig, get_render_config
from report_engine.core.exceptions import UnsupportedVisualError
from report_engine.engine.content import ChartData, ChartDataset
from report_engine.visualizers.registry import VisualizerRegistry, VisualModel


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    RADAR = "radar"


class ChartSeries(VisualModel):
    name: str
    color: str


class PieSlice(VisualModel):
    name: str | None
    value: int | float | None
    color: str


class ChartVisual(VisualModel):
    """Chart ready for display.

    Attributes:
        type: Requested chart type tag
        title: Chart title
        supported: False when no visualizer exists for ``type``
        points: One dict per label, ``{"name": label, <series name>: value}``
        series: Series names and colours (bar, line, radar)
        slices: Pie slices (pie only)
        height: Display height in pixels
        message: Notice shown instead of the chart when unsupported
    """

    type: str
    title: str = ""
    supported: bool = True
    points: list[dict[str, Any]] = Field(default_factory=list)
    series: list[ChartSeries] = Field(default_factory=list)
    slices: list[PieSlice] = Field(default_factory=list)
    height: int = 300
    message: str | None = None


def series_name(dataset: ChartDataset, index: int) -> str:
    return dataset.label or f"Dataset {index + 1}"


def series_color(dataset: ChartDataset, index: int, palette: list[str]) -> str:
    """First colour of a colour list, the colour itself, or the palette colour."""
    colors = dataset.colors
    if isinstance(colors, list):
        if colors:
            return colors[0]
    elif colors:
        return colors
    return palette[index % len(palette)]


def category_points(data: ChartData) -> list[dict[str, Any]]:
    """Pivot datasets into one point per label, preserving label order."""
    points: list[dict[str, Any]] = []
    for i, label in enumerate(data.labels):
        point: dict[str, Any] = {"name": label}
        for j, dataset in enumerate(data.datasets):
            point[series_name(dataset, j)] = dataset.data[i] if i < len(dataset.data) else None
        points.append(point)
    return points


def _render_series_chart(data: ChartData, config: RenderConfig) -> ChartVisual:
    palette = config.charts.series_palette
    return ChartVisual(
        type=data.type,
        title=data.title,
        points=category_points(data),
        series=[
            ChartSeries(name=series_name(ds, i), color=series_color(ds, i, palette))
            for i, ds in enumerate(data.datasets)
        ],
        height=config.charts.height,
    )


def render_bar(data: ChartData, config: RenderConfig) -> ChartVisual:
    return _render_series_chart(data, config)


def render_line(data: ChartData, config: RenderConfig) -> ChartVisual:
    return _render_series_chart(data, config)


def render_radar(data: ChartData, config: RenderConfig) -> ChartVisual:
    return _render_series_chart(data, config)


def render_pie(data: ChartData, config: RenderConfig) -> ChartVisual:
    """Pie from the first dataset; colours map onto slices, cycling.

    Raises:
        ValueError: If the chart has no dataset
    """
    if not data.datasets:
        raise ValueError("Pie chart requires at least one dataset")

    palette = config.charts.series_palette
    dataset = data.datasets[0]
    colors = dataset.colors
    slices = []
    for i, value in enumerate(dataset.data):
        if isinstance(colors, list) and colors:
            color = colors[i % len(colors)]
        elif isinstance(colors, str) and colors:
            color = colors
        else:
            color = palette[i % len(palette)]
        name = data.labels[i] if i < len(data.labels) else None
        slices.append(PieSlice(name=name, value=value, color=color))

    return ChartVisual(
        type=data.type,
        title=data.title,
        slices=slices,
        height=config.charts.height,
    )


def build_chart_registry() -> VisualizerRegistry[ChartData, ChartVisual]:
    """Registry with the built-in chart types and no default."""
    registry: VisualizerRegistry[ChartData, ChartVisual] = VisualizerRegistry("chart")
    registry.register(ChartType.BAR.value, render_bar)
    registry.register(ChartType.LINE.value, render_line)
    registry.register(ChartType.PIE.value, render_pie)
    registry.register(ChartType.RADAR.value, render_radar)
    return registry


chart_registry = build_chart_registry()


def render_chart(
    data: ChartData,
    config: RenderConfig | None = None,
    registry: VisualizerRegistry[ChartData, ChartVisual] | None = None,
) -> ChartVisual:
    """Build the visual for a chart; unknown types yield an unsupported visual."""
    config = config or get_render_config()
    registry = chart_registry if registry is None else registry
    try:
        return registry.dispatch(data.type, data, config)
    except UnsupportedVisualError:
        return ChartVisual(
            type=data.type,
            title=data.title,
            supported=False,
            height=config.charts.height,
            message=config.labels.unsupported_chart,
        )
