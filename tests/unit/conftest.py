"""Unit test fixtures: render configuration and sample report content."""

from typing import Any

import pytest

from report_engine.core.app_config import RenderConfig
from report_engine.engine.content import ContentMap
from report_engine.engine.renderer import ReportRenderer


@pytest.fixture
def render_config() -> RenderConfig:
    """Stock configuration (Italian labels, it-IT numbers, default palette)."""
    return RenderConfig()


@pytest.fixture
def renderer(render_config: RenderConfig) -> ReportRenderer:
    return ReportRenderer(render_config)


@pytest.fixture
def bar_chart() -> dict[str, Any]:
    return {
        "title": "Vendite",
        "data": {
            "type": "bar",
            "title": "Vendite per trimestre",
            "labels": ["Q1", "Q2", "Q3"],
            "datasets": [
                {"label": "2023", "data": [10, 20, 30]},
                {"label": "2024", "data": [15, 25, 35], "colors": ["#111111"]},
            ],
        },
    }


@pytest.fixture
def progress_table() -> dict[str, Any]:
    return {
        "title": "Avanzamento",
        "data": {
            "type": "progress",
            "headers": ["Attività", "Responsabile", "Stato"],
            "rows": [
                ["Analisi", "Anna", "Completato"],
                ["Sviluppo", "Marco", "In corso"],
                ["Test", "Luca", "Da iniziare"],
            ],
        },
    }


@pytest.fixture
def sample_content(bar_chart: dict[str, Any], progress_table: dict[str, Any]) -> ContentMap:
    """Content with one record in each namespace."""
    return ContentMap(
        text={"intro": {"title": "Introduzione", "content": "Hello **world**"}},
        charts={"sales": bar_chart},
        tables={"plan": progress_table},
    )
