"""
Table Visualizer
================

Turns a TableData descriptor into a TableVisual with every cell formatted
for display. Formatting happens here and is never written back to the data.

Cell rules:
- a number in [0, 1] becomes a percentage (``value * 100``, one decimal)
  when any body cell of the table is a string containing ``%``;
- any other number uses locale thousands/decimal separators;
- ``comparison`` tables tone string cells after the first column by their
  leading ``+`` (positive) or ``-`` (negative);
- ``progress`` tables tone the last column by known status strings.

``stats`` tables render as cards (``row[1]`` as value, ``row[0]`` as
caption). Unknown types use the simple grid.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum
from typing import Literal

from pydantic import Field

from report_engine.core.app_config import NumberFormatConfig, RenderConfig, get_render_config
from report_engine.engine.content import Cell, TableData
from report_engine.visualizers.registry import VisualizerRegistry, VisualModel

# Wide enough for any finite float quantized to a few fraction digits
_DECIMAL_CONTEXT = Context(prec=400)

# (thousands separator, decimal separator)
LOCALE_SEPARATORS: dict[str, tuple[str, str]] = {
    "it": (".", ","),
    "de": (".", ","),
    "es": (".", ","),
    "pt": (".", ","),
    "nl": (".", ","),
    "fr": (" ", ","),
    "en": (",", "."),
}


class TableType(str, Enum):
    SIMPLE = "simple"
    COMPARISON = "comparison"
    PROGRESS = "progress"
    STATS = "stats"


class CellTone(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    WARNING = "warning"
    NEUTRAL = "neutral"


class TableCell(VisualModel):
    value: Cell
    display: str
    tone: CellTone | None = None


class StatCard(VisualModel):
    value: str
    caption: str


class TableVisual(VisualModel):
    """Table ready for display.

    Attributes:
        type: Layout actually used (unknown requested types become ``simple``)
        requested_type: Type tag found in the data
        layout: ``grid`` for tabular types, ``cards`` for stats
    """

    type: TableType
    requested_type: str
    title: str = ""
    layout: Literal["grid", "cards"] = "grid"
    headers: list[TableCell] = Field(default_factory=list)
    rows: list[list[TableCell]] = Field(default_factory=list)
    footers: list[TableCell] = Field(default_factory=list)
    cards: list[StatCard] = Field(default_factory=list)


def locale_separators(locale: str) -> tuple[str, str]:
    """Separators for a BCP 47 locale tag, by language; English style if unknown."""
    language = locale.replace("_", "-").split("-")[0].lower()
    return LOCALE_SEPARATORS.get(language, LOCALE_SEPARATORS["en"])


def format_number(value: int | float, number_format: NumberFormatConfig) -> str:
    """Format a number with grouping and at most N fraction digits.

    Rounds half away from zero and drops trailing fraction zeros, so with
    ``it-IT`` 1234.5 -> ``1.234,5`` and 0.5 -> ``0,5``.
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"

    quantum = Decimal(1).scaleb(-number_format.max_fraction_digits)
    rounded = Decimal(repr(value)).quantize(
        quantum, rounding=ROUND_HALF_UP, context=_DECIMAL_CONTEXT
    )
    if rounded == 0:
        rounded = Decimal(0).quantize(quantum)

    text = f"{rounded:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    thousands, decimal = locale_separators(number_format.locale)
    return text.replace(",", "\x00").replace(".", decimal).replace("\x00", thousands)


def has_percent_cells(rows: list[list[Cell]]) -> bool:
    """Whether any body cell is a string containing ``%``."""
    return any(isinstance(cell, str) and "%" in cell for row in rows for cell in row)


def format_cell(value: Cell, percent_context: bool, number_format: NumberFormatConfig) -> str:
    """Display string for one cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int | float):
        if percent_context and 0 <= value <= 1:
            return f"{value * 100:.{number_format.percent_fraction_digits}f}%"
        return format_number(value, number_format)
    return str(value)


class _GridBuilder:
    """Builds grid cells for one table, applying the tone rule of its type."""

    def __init__(self, data: TableData, table_type: TableType, config: RenderConfig) -> None:
        self.data = data
        self.table_type = table_type
        self.config = config
        self.number_format = config.tables.number_format
        self.percent_context = has_percent_cells(data.rows)
        self.last_column = len(data.rows[0]) - 1 if data.rows else None

    def tone(self, value: Cell, col: int) -> CellTone | None:
        if self.table_type is TableType.COMPARISON and col > 0 and isinstance(value, str):
            if value.startswith("+"):
                return CellTone.POSITIVE
            if value.startswith("-"):
                return CellTone.NEGATIVE
        if self.table_type is TableType.PROGRESS and col == self.last_column:
            if isinstance(value, str):
                tone = self.config.tables.progress_status_tones.get(value)
                return CellTone(tone) if tone else CellTone.NEUTRAL
        return None

    def cell(self, value: Cell, col: int, formatted: bool = True) -> TableCell:
        display = (
            format_cell(value, self.percent_context, self.number_format)
            if formatted
            else ("" if value is None else str(value))
        )
        return TableCell(value=value, display=display, tone=self.tone(value, col))

    def build(self) -> TableVisual:
        data = self.data
        return TableVisual(
            type=self.table_type,
            requested_type=data.type,
            title=data.title,
            layout="grid",
            headers=[self.cell(h, c, formatted=False) for c, h in enumerate(data.headers or [])],
            rows=[[self.cell(v, c) for c, v in enumerate(row)] for row in data.rows],
            footers=[self.cell(f, c) for c, f in enumerate(data.footers or [])],
        )


def render_simple(data: TableData, config: RenderConfig) -> TableVisual:
    return _GridBuilder(data, TableType.SIMPLE, config).build()


def render_comparison(data: TableData, config: RenderConfig) -> TableVisual:
    return _GridBuilder(data, TableType.COMPARISON, config).build()


def render_progress(data: TableData, config: RenderConfig) -> TableVisual:
    return _GridBuilder(data, TableType.PROGRESS, config).build()


def render_stats(data: TableData, config: RenderConfig) -> TableVisual:
    """One card per row: ``row[1]`` formatted as value, ``row[0]`` as caption."""
    number_format = config.tables.number_format
    percent_context = has_percent_cells(data.rows)
    cards = []
    for row in data.rows:
        caption = row[0] if row else None
        value = row[1] if len(row) > 1 else None
        cards.append(
            StatCard(
                value=format_cell(value, percent_context, number_format),
                caption="" if caption is None else str(caption),
            )
        )
    return TableVisual(
        type=TableType.STATS,
        requested_type=data.type,
        title=data.title,
        layout="cards",
        cards=cards,
    )


def build_table_registry() -> VisualizerRegistry[TableData, TableVisual]:
    """Registry with the built-in table types, defaulting to ``simple``."""
    registry: VisualizerRegistry[TableData, TableVisual] = VisualizerRegistry(
        "table", default=TableType.SIMPLE.value
    )
    registry.register(TableType.SIMPLE.value, render_simple)
    registry.register(TableType.COMPARISON.value, render_comparison)
    registry.register(TableType.PROGRESS.value, render_progress)
    registry.register(TableType.STATS.value, render_stats)
    return registry


table_registry = build_table_registry()


def render_table(
    data: TableData,
    config: RenderConfig | None = None,
    registry: VisualizerRegistry[TableData, TableVisual] | None = None,
) -> TableVisual:
    """Build the visual for a table."""
    config = config or get_render_config()
    registry = table_registry if registry is None else registry
    return registry.dispatch(data.type, data, config)
