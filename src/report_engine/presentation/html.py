"""
HTML Presentation
=================

Serializes a RenderNode sequence to an HTML fragment for previews.

All text and attribute values are escaped; markup only ever comes from the
node kinds themselves. Chart and table visuals are embedded as JSON in a
``data-visual`` attribute for a client-side charting script, with a plain
rendering (table grid, stat cards, or the unsupported-chart notice) inside.
"""

import json
from collections.abc import Iterable
from html import escape

from report_engine.core.app_config import LabelsConfig, RenderConfig, get_render_config
from report_engine.engine.nodes import (
    Bold,
    ChartBlock,
    Code,
    ErrorBlock,
    Heading,
    Image,
    InlineNode,
    Italic,
    LineBreak,
    LineNode,
    Link,
    ListItem,
    Paragraph,
    PlaceholderBlock,
    RenderNode,
    Rule,
    TableBlock,
    TextBlock,
    TextSpan,
)
from report_engine.visualizers.tables import TableCell, TableVisual


def _attr(value: str) -> str:
    return escape(value, quote=True)


def render_inline(nodes: Iterable[InlineNode]) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, TextSpan):
            parts.append(escape(node.text))
        elif isinstance(node, Bold):
            parts.append(f"<strong>{render_inline(node.children)}</strong>")
        elif isinstance(node, Italic):
            parts.append(f"<em>{render_inline(node.children)}</em>")
        elif isinstance(node, Code):
            parts.append(f"<code>{escape(node.text)}</code>")
        elif isinstance(node, Link):
            parts.append(
                f'<a href="{_attr(node.href)}" target="_blank" rel="noopener noreferrer">'
                f"{render_inline(node.children)}</a>"
            )
        elif isinstance(node, Image):
            parts.append(f'<img src="{_attr(node.src)}" alt="{_attr(node.alt)}">')
    return "".join(parts)


def render_line(node: LineNode) -> str:
    if isinstance(node, Heading):
        return f"<h{node.level}>{escape(node.text)}</h{node.level}>"
    if isinstance(node, ListItem):
        css = "list-decimal" if node.ordered else "list-disc"
        return f'<li class="{css}">{escape(node.text)}</li>'
    if isinstance(node, Rule):
        return "<hr>"
    if isinstance(node, LineBreak):
        return "<br>"
    if isinstance(node, Paragraph):
        return f"<p>{render_inline(node.children)}</p>"
    raise TypeError(f"Not a line node: {type(node).__name__}")


def _prompt_note(label: str, prompt: str | None) -> str:
    if not prompt:
        return ""
    return (
        '<div class="prompt-note">'
        f'<p class="prompt-note-label">{escape(label)}</p>'
        f'<p class="prompt-note-text">{escape(prompt)}</p>'
        "</div>"
    )


def _title(title: str | None) -> str:
    return f"<h3>{escape(title)}</h3>" if title else ""


def _cell(tag: str, cell: TableCell) -> str:
    tone = f' class="tone-{cell.tone.value}"' if cell.tone else ""
    return f"<{tag}{tone}>{escape(cell.display)}</{tag}>"


def render_table_visual(table: TableVisual) -> str:
    if table.layout == "cards":
        cards = "".join(
            '<div class="stat-card">'
            f'<div class="stat-value">{escape(card.value)}</div>'
            f'<div class="stat-caption">{escape(card.caption)}</div>'
            "</div>"
            for card in table.cards
        )
        return f'<div class="stat-cards">{cards}</div>'

    parts = [f'<table class="table-{table.type.value}">']
    if table.headers:
        parts.append("<thead><tr>" + "".join(_cell("th", c) for c in table.headers) + "</tr></thead>")
    parts.append("<tbody>")
    for row in table.rows:
        parts.append("<tr>" + "".join(_cell("td", c) for c in row) + "</tr>")
    parts.append("</tbody>")
    if table.footers:
        parts.append("<tfoot><tr>" + "".join(_cell("td", c) for c in table.footers) + "</tr></tfoot>")
    parts.append("</table>")
    return "".join(parts)


def render_block(node: RenderNode, labels: LabelsConfig) -> str:
    """HTML for one shortcode block."""
    if isinstance(node, TextBlock):
        body = "".join(render_line(child) for child in node.children)
        return (
            f'<div class="shortcode-section" data-shortcode="{_attr(node.shortcode)}">'
            f"{_title(node.title)}<div class=\"prose\">{body}</div>"
            f"{_prompt_note(labels.prompt_note, node.prompt)}</div>"
        )
    if isinstance(node, ChartBlock):
        chart = node.chart
        payload = _attr(json.dumps(chart.model_dump(mode="json")))
        inner = "" if chart.supported else f'<p class="chart-unsupported">{escape(chart.message or "")}</p>'
        return (
            f'<div class="shortcode-chart" data-shortcode="{_attr(node.shortcode)}">'
            f"{_title(node.title)}"
            f'<figure class="chart chart-{_attr(chart.type)}" data-visual="{payload}">{inner}</figure>'
            f"{_prompt_note(labels.chart_prompt_note, node.prompt)}</div>"
        )
    if isinstance(node, TableBlock):
        payload = _attr(json.dumps(node.table.model_dump(mode="json")))
        return (
            f'<div class="shortcode-table" data-shortcode="{_attr(node.shortcode)}">'
            f"{_title(node.title)}"
            f'<figure class="table" data-visual="{payload}">{render_table_visual(node.table)}</figure>'
            f"{_prompt_note(labels.table_prompt_note, node.prompt)}</div>"
        )
    if isinstance(node, PlaceholderBlock):
        return (
            f'<div class="shortcode-placeholder">'
            f"{escape(labels.placeholder)}: [{escape(node.shortcode)}]</div>"
        )
    if isinstance(node, ErrorBlock):
        return f'<div class="shortcode-error">{escape(labels.error)}: [{escape(node.shortcode)}]</div>'
    return render_line(node)


def render_html(nodes: Iterable[RenderNode], config: RenderConfig | None = None) -> str:
    """Render a node sequence as an HTML fragment wrapped in ``shortcode-content``."""
    labels = (config or get_render_config()).labels
    body = "".join(render_block(node, labels) for node in nodes)
    return f'<div class="shortcode-content">{body}</div>'
