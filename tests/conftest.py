"""Pytest configuration for the report engine tests.

This file is automatically loaded by pytest and sets up:
1. Loading of .env file for local overrides
2. Logging configuration with third-party library suppression
3. Fresh configuration caches for every test
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from report_engine.core.app_config import clear_render_config_cache
from report_engine.middleware.logging import setup_logging

_project_root = Path(__file__).resolve().parent.parent

_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
setup_logging(log_level=_log_level, log_format="text")


@pytest.fixture(autouse=True)
def _fresh_config_cache():
    """Settings and render config are cached; isolate tests from each other."""
    clear_render_config_cache()
    yield
    clear_render_config_cache()
