"""Render preview schemas."""

from typing import Any

from pydantic import Field

from report_engine.engine.content import ContentMap
from report_engine.engine.nodes import RenderNode
from report_engine.schemas.common import BaseSchema


class ContentPayload(BaseSchema):
    """Shortcode content in its three namespaces.

    Records stay unvalidated here; the engine validates each one when its
    shortcode is rendered.
    """

    text: dict[str, Any] = Field(default_factory=dict)
    charts: dict[str, Any] = Field(default_factory=dict)
    tables: dict[str, Any] = Field(default_factory=dict)

    def to_content_map(self) -> ContentMap:
        return ContentMap(text=self.text, charts=self.charts, tables=self.tables)


class RenderRequest(BaseSchema):
    """Template plus content to render."""

    template: str
    content: ContentPayload = Field(default_factory=ContentPayload)


class RenderStatsResponse(BaseSchema):
    segments: int
    shortcodes: int
    placeholders: int
    errors: int
    collisions: list[str]
    duration_ms: float


class RenderResponse(BaseSchema):
    nodes: list[RenderNode]
    stats: RenderStatsResponse


class HtmlResponse(BaseSchema):
    html: str


class InspectResponse(BaseSchema):
    """Shortcode usage of a template against its content."""

    shortcodes: list[str]
    unresolved: list[str]
    collisions: dict[str, list[str]]
