"""API v1 router."""

from fastapi import APIRouter

from report_engine.api.v1 import health, render

router = APIRouter()

router.include_router(health.router, tags=["Health"])
router.include_router(render.router, tags=["Render"])
