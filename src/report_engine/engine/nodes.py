"""
Render Nodes
============

Typed, presentation-agnostic output of the engine.

Inline nodes (TextSpan, Bold, Italic, Code, Link, Image) form the content of
paragraphs. Line nodes (Heading, ListItem, Rule, LineBreak, Paragraph) come
from literal template text. Block nodes (TextBlock, ChartBlock, TableBlock,
PlaceholderBlock, ErrorBlock) come from shortcodes, exactly one per reference.

Every node carries a ``kind`` tag so a serialized sequence can be displayed
without re-reading the template.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from report_engine.visualizers.charts import ChartVisual
from report_engine.visualizers.tables import TableVisual


class NodeModel(BaseModel):
    """Base for all render nodes."""

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Inline nodes
# ---------------------------------------------------------------------------


class TextSpan(NodeModel):
    kind: Literal["text"] = "text"
    text: str


class Bold(NodeModel):
    kind: Literal["bold"] = "bold"
    children: list["InlineNode"]


class Italic(NodeModel):
    kind: Literal["italic"] = "italic"
    children: list["InlineNode"]


class Code(NodeModel):
    kind: Literal["code"] = "code"
    text: str


class Link(NodeModel):
    kind: Literal["link"] = "link"
    href: str
    children: list["InlineNode"]


class Image(NodeModel):
    kind: Literal["image"] = "image"
    src: str
    alt: str = ""


InlineNode = Annotated[
    TextSpan | Bold | Italic | Code | Link | Image,
    Field(discriminator="kind"),
]

Bold.model_rebuild()
Italic.model_rebuild()
Link.model_rebuild()


# ---------------------------------------------------------------------------
# Line nodes (literal template text)
# ---------------------------------------------------------------------------


class Heading(NodeModel):
    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=5)
    text: str


class ListItem(NodeModel):
    """One list line. Consecutive items are not grouped into a container."""

    kind: Literal["list_item"] = "list_item"
    ordered: bool = False
    text: str


class Rule(NodeModel):
    kind: Literal["rule"] = "rule"


class LineBreak(NodeModel):
    kind: Literal["line_break"] = "line_break"


class Paragraph(NodeModel):
    kind: Literal["paragraph"] = "paragraph"
    children: list[InlineNode]


LineNode = Annotated[
    Heading | ListItem | Rule | LineBreak | Paragraph,
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Shortcode blocks
# ---------------------------------------------------------------------------


class TextBlock(NodeModel):
    kind: Literal["text_block"] = "text_block"
    shortcode: str
    title: str | None = None
    children: list[LineNode] = Field(default_factory=list)
    prompt: str | None = None


class ChartBlock(NodeModel):
    kind: Literal["chart_block"] = "chart_block"
    shortcode: str
    title: str | None = None
    chart: ChartVisual
    prompt: str | None = None


class TableBlock(NodeModel):
    kind: Literal["table_block"] = "table_block"
    shortcode: str
    title: str | None = None
    table: TableVisual
    prompt: str | None = None


class PlaceholderBlock(NodeModel):
    """Shortcode with no content in any namespace. Informational only."""

    kind: Literal["placeholder"] = "placeholder"
    shortcode: str


class ErrorBlock(NodeModel):
    """Shortcode whose rendering raised; the rest of the document is unaffected."""

    kind: Literal["error"] = "error"
    shortcode: str
    error_type: str
    message: str = ""


BlockNode = Annotated[
    TextBlock | ChartBlock | TableBlock | PlaceholderBlock | ErrorBlock,
    Field(discriminator="kind"),
]

RenderNode = Annotated[
    Heading
    | ListItem
    | Rule
    | LineBreak
    | Paragraph
    | TextBlock
    | ChartBlock
    | TableBlock
    | PlaceholderBlock
    | ErrorBlock,
    Field(discriminator="kind"),
]
