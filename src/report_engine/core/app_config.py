"""Rendering configuration loaded from YAML.

The YAML file supports ``${VAR}`` and ``${VAR:-default}`` environment
variable references anywhere in string values. A missing file is not an
error: every section has defaults matching the stock report look.
"""

import logging
import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, model_validator

from report_engine.core.config import get_settings

logger = logging.getLogger(__name__)

# Pattern matches ${VAR} and ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

# Semantic cell tones a progress status may map to
ToneName = Literal["positive", "negative", "warning", "neutral"]

DEFAULT_SERIES_PALETTE = ["#4f46e5", "#60a5fa", "#34d399", "#fbbf24", "#f87171", "#d946ef"]

DEFAULT_PALETTES: dict[str, list[str]] = {
    "default": DEFAULT_SERIES_PALETTE,
    "pastel": ["#67e8f9", "#a7f3d0", "#fde68a", "#fecaca", "#ddd6fe"],
    "corporate": ["#1e40af", "#0e7490", "#4d7c0f", "#9f1239", "#6d28d9"],
    "monochrome": ["#020617", "#1e293b", "#334155", "#64748b", "#94a3b8"],
    "bold": ["#ef4444", "#f59e0b", "#10b981", "#3b82f6", "#8b5cf6"],
}


def interpolate_env_vars(value: Any) -> Any:
    """Recursively replace environment variable references in parsed YAML.

    Raises:
        ValueError: If a variable without default is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name, default = match.group(1), match.group(2)
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            if default is not None:
                return default
            raise ValueError(
                f"Environment variable '{var_name}' is not set and no default provided"
            )

        return ENV_VAR_PATTERN.sub(replace_var, value)
    if isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


class NumberFormatConfig(BaseModel):
    """Locale-aware number formatting for table cells."""

    locale: str = "it-IT"
    max_fraction_digits: int = Field(default=3, ge=0, le=10)
    percent_fraction_digits: int = Field(default=1, ge=0, le=10)

    model_config = {"frozen": True}


class LabelsConfig(BaseModel):
    """User-facing strings emitted by the renderers."""

    prompt_note: str = "Prompt specifico:"
    chart_prompt_note: str = "Prompt specifico per il grafico:"
    table_prompt_note: str = "Prompt specifico per la tabella:"
    placeholder: str = "Contenuto non disponibile per lo shortcode"
    error: str = "Errore nel rendering dello shortcode"
    unsupported_chart: str = "Tipo di grafico non supportato"

    model_config = {"frozen": True}


class ChartsConfig(BaseModel):
    """Chart visualizer defaults."""

    default_palette: str = "default"
    palettes: dict[str, list[str]] = Field(default_factory=lambda: dict(DEFAULT_PALETTES))
    height: int = Field(default=300, gt=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_default_palette(self) -> "ChartsConfig":
        """Default palette must exist and be non-empty."""
        colors = self.palettes.get(self.default_palette)
        if not colors:
            raise ValueError(
                f"default_palette '{self.default_palette}' is not defined or empty"
            )
        return self

    @property
    def series_palette(self) -> list[str]:
        """Colors cycled over series (and pie slices) without explicit colors."""
        return self.palettes[self.default_palette]


class TablesConfig(BaseModel):
    """Table visualizer defaults."""

    progress_status_tones: dict[str, ToneName] = Field(
        default_factory=lambda: {"Completato": "positive", "In corso": "warning"}
    )
    number_format: NumberFormatConfig = Field(default_factory=NumberFormatConfig)

    model_config = {"frozen": True}


class RenderConfig(BaseModel):
    """Root rendering configuration."""

    charts: ChartsConfig = Field(default_factory=ChartsConfig)
    tables: TablesConfig = Field(default_factory=TablesConfig)
    labels: LabelsConfig = Field(default_factory=LabelsConfig)

    model_config = {"frozen": True}


def load_render_config(config_path: Path) -> RenderConfig:
    """Load and validate rendering configuration.

    Raises:
        ValueError: If interpolation fails or the document is not a mapping
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If values are invalid
    """
    if not config_path.exists():
        logger.info("Render config %s not found, using defaults", config_path)
        return RenderConfig()

    with open(config_path, encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        logger.warning("Render config %s is empty, using defaults", config_path)
        return RenderConfig()

    interpolated = interpolate_env_vars(raw_config)
    if not isinstance(interpolated, dict):
        raise ValueError(f"Expected mapping in {config_path}, got {type(interpolated).__name__}")

    config = RenderConfig.model_validate(interpolated)
    logger.info("Loaded render config from %s", config_path)
    return config


@lru_cache
def get_render_config() -> RenderConfig:
    """Get cached rendering configuration from the configured path."""
    return load_render_config(Path(get_settings().render_config_path))


def clear_render_config_cache() -> None:
    """Drop cached configuration (settings and render config)."""
    get_render_config.cache_clear()
    get_settings.cache_clear()
