"""Template preview endpoints used by the admin editor."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Request

from report_engine.core.app_config import get_render_config
from report_engine.engine.renderer import ReportRenderer
from report_engine.engine.shortcodes import inspect_template
from report_engine.presentation.html import render_html
from report_engine.schemas.render import (
    HtmlResponse,
    InspectResponse,
    RenderRequest,
    RenderResponse,
    RenderStatsResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _renderer(request: Request) -> ReportRenderer:
    renderer = getattr(request.app.state, "renderer", None)
    if renderer is None:
        renderer = ReportRenderer(get_render_config())
    return renderer


def _request_id(request: Request) -> str | None:
    """ID assigned by RequestLoggingMiddleware, if it ran."""
    return getattr(request.state, "request_id", None)


@router.post("/render", response_model=RenderResponse)
async def render_template(body: RenderRequest, request: Request) -> RenderResponse:
    """Render a template to its node sequence.

    Shortcode failures come back as ``error`` nodes; the request itself
    succeeds whenever the body is valid.
    """
    result = _renderer(request).render(
        body.template, body.content.to_content_map(), request_id=_request_id(request)
    )
    return RenderResponse(
        nodes=result.nodes,
        stats=RenderStatsResponse(**asdict(result.stats)),
    )


@router.post("/render/html", response_model=HtmlResponse)
async def render_template_html(body: RenderRequest, request: Request) -> HtmlResponse:
    """Render a template to an HTML fragment."""
    renderer = _renderer(request)
    result = renderer.render(
        body.template, body.content.to_content_map(), request_id=_request_id(request)
    )
    return HtmlResponse(html=render_html(result.nodes, renderer.config))


@router.post("/shortcodes/inspect", response_model=InspectResponse)
async def inspect_shortcodes(body: RenderRequest) -> InspectResponse:
    """List the template's shortcodes, the unresolved ones and namespace collisions."""
    inspection = inspect_template(body.template, body.content.to_content_map())
    if inspection.unresolved:
        logger.debug("Unresolved shortcodes: %s", ", ".join(inspection.unresolved))
    return InspectResponse(
        shortcodes=inspection.shortcodes,
        unresolved=inspection.unresolved,
        collisions={
            name: [kind.value for kind in owners]
            for name, owners in inspection.collisions.items()
        },
    )
