"""
Block Renderer
==============

Renders a template against a ContentMap into an ordered RenderNode list.

Literal segments go through the line classifier. Each shortcode reference
becomes exactly one block node; its whole rendering (lookup, record
validation, visualizer) runs inside an isolation boundary so a failure
yields an ErrorBlock for that shortcode and the rest of the document still
renders. The top-level entry points never raise for string input.

Example:
    >>> content = ContentMap(text={"intro": {"content": "Hello **world**"}})
    >>> nodes = render_template("## Title\\n[intro]", content)
"""

import time
import uuid
from dataclasses import dataclass, field

from report_engine.core.app_config import RenderConfig, get_render_config
from report_engine.core.logging_utils import (
    StructuredLogger,
    get_logger,
    log_render_complete,
    log_render_start,
    log_shortcode_collision,
    log_shortcode_error,
    log_shortcode_unresolved,
)
from report_engine.engine.content import (
    ChartData,
    ChartRecord,
    ContentMap,
    ShortcodeEntry,
    TableData,
    TableRecord,
    TextRecord,
)
from report_engine.engine.lines import classify
from report_engine.engine.nodes import (
    BlockNode,
    ChartBlock,
    ErrorBlock,
    LineNode,
    PlaceholderBlock,
    RenderNode,
    TableBlock,
    TextBlock,
)
from report_engine.engine.tokenizer import Literal, ShortcodeRef, tokenize
from report_engine.visualizers.charts import ChartVisual, chart_registry, render_chart
from report_engine.visualizers.registry import VisualizerRegistry
from report_engine.visualizers.tables import TableVisual, render_table, table_registry

logger = get_logger(__name__)


@dataclass
class RenderStats:
    """Counters for one render pass."""

    segments: int = 0
    shortcodes: int = 0
    placeholders: int = 0
    errors: int = 0
    collisions: list[str] = field(default_factory=list)
    duration_ms: float = 0.0


@dataclass
class RenderResult:
    """Output of one render pass.

    Attributes:
        segments: One node list per template segment, in segment order.
            Literal segments give zero or more line nodes; shortcode
            segments give exactly one block node.
        stats: Render counters
    """

    segments: list[list[RenderNode]] = field(default_factory=list)
    stats: RenderStats = field(default_factory=RenderStats)

    @property
    def nodes(self) -> list[RenderNode]:
        """Flattened node sequence."""
        return [node for segment_nodes in self.segments for node in segment_nodes]


class ReportRenderer:
    """Renders templates with a fixed configuration and visualizer registries.

    Stateless between calls: one instance may serve concurrent renders.
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        charts: VisualizerRegistry[ChartData, ChartVisual] | None = None,
        tables: VisualizerRegistry[TableData, TableVisual] | None = None,
    ) -> None:
        self.config = config or get_render_config()
        self.charts = chart_registry if charts is None else charts
        self.tables = table_registry if tables is None else tables

    def render_literal(self, text: str) -> list[LineNode]:
        return classify(text)

    def render_shortcode(
        self,
        name: str,
        content: ContentMap,
        log: StructuredLogger | None = None,
    ) -> BlockNode:
        """Render one shortcode inside its isolation boundary."""
        log = (log or logger).with_context(shortcode=name)
        try:
            entry = content.lookup(name)
            if entry is None:
                log_shortcode_unresolved(log, name)
                return PlaceholderBlock(shortcode=name)
            if entry.is_ambiguous:
                log_shortcode_collision(
                    log,
                    name,
                    [entry.kind.value, *(k.value for k in entry.shadowed)],
                    entry.kind.value,
                )
            return self._render_entry(entry)
        except Exception as e:
            log_shortcode_error(log, name, e)
            return ErrorBlock(
                shortcode=name,
                error_type=type(e).__name__,
                message=str(e)[:200],
            )

    def _render_entry(self, entry: ShortcodeEntry) -> BlockNode:
        record = entry.record()
        if isinstance(record, TextRecord):
            return TextBlock(
                shortcode=entry.name,
                title=record.title,
                children=classify(record.content),
                prompt=record.prompt,
            )
        if isinstance(record, ChartRecord):
            return ChartBlock(
                shortcode=entry.name,
                title=record.title,
                chart=render_chart(record.data, self.config, self.charts),
                prompt=record.prompt,
            )
        if isinstance(record, TableRecord):
            return TableBlock(
                shortcode=entry.name,
                title=record.title,
                table=render_table(record.data, self.config, self.tables),
                prompt=record.prompt,
            )
        raise TypeError(f"Unexpected record type {type(record).__name__}")

    def render(
        self,
        template: str,
        content: ContentMap | None = None,
        request_id: str | None = None,
    ) -> RenderResult:
        """Render a whole template; never raises for string input.

        ``request_id`` ties the render log lines to the HTTP request that
        triggered them.
        """
        content = content or ContentMap()
        template = template or ""
        log = logger.with_context(render_id=uuid.uuid4().hex, request_id=request_id)
        start = time.perf_counter()

        segments = tokenize(template)
        shortcode_count = sum(isinstance(seg, ShortcodeRef) for seg in segments)
        log_render_start(log, template, len(segments), shortcode_count)

        result = RenderResult()
        for segment in segments:
            if isinstance(segment, Literal):
                result.segments.append(self.render_literal(segment.text))
                continue
            node = self.render_shortcode(segment.name, content, log)
            result.segments.append([node])
            if isinstance(node, PlaceholderBlock):
                result.stats.placeholders += 1
            elif isinstance(node, ErrorBlock):
                result.stats.errors += 1
            if len(content.owners(segment.name)) > 1:
                result.stats.collisions.append(segment.name)

        result.stats.segments = len(segments)
        result.stats.shortcodes = shortcode_count
        result.stats.duration_ms = (time.perf_counter() - start) * 1000
        log_render_complete(
            log,
            node_count=len(result.nodes),
            placeholders=result.stats.placeholders,
            errors=result.stats.errors,
            duration_ms=result.stats.duration_ms,
        )
        return result


def render(name: str, content: ContentMap, config: RenderConfig | None = None) -> BlockNode:
    """Render a single shortcode by name."""
    return ReportRenderer(config).render_shortcode(name, content)


def render_segments(
    template: str,
    content: ContentMap | None = None,
    config: RenderConfig | None = None,
) -> list[list[RenderNode]]:
    """Per-segment node lists (one list per tokenizer segment)."""
    return ReportRenderer(config).render(template, content).segments


def render_template(
    template: str,
    content: ContentMap | None = None,
    config: RenderConfig | None = None,
) -> list[RenderNode]:
    """Flat node sequence for a template."""
    return ReportRenderer(config).render(template, content).nodes
