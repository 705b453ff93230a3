"""Structured logging utilities for render tracing."""

import logging
from dataclasses import dataclass, field
from typing import Any


@dataclass
class LogContext:
    """Context for correlating logs across a single render pass."""

    render_id: str | None = None
    request_id: str | None = None
    shortcode: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        if self.render_id:
            result["render_id"] = self.render_id
        if self.request_id:
            result["request_id"] = self.request_id
        if self.shortcode:
            result["shortcode"] = self.shortcode
        result.update(self.extra)
        return result

    def format_prefix(self) -> str:
        """Format as log prefix string."""
        parts = []
        if self.request_id:
            parts.append(f"req={self.request_id[:8]}")
        if self.render_id:
            parts.append(f"render={self.render_id[:8]}")
        if self.shortcode:
            parts.append(f"shortcode={self.shortcode}")
        return " | ".join(parts)


def truncate(text: str | None, max_length: int = 100) -> str:
    """Truncate text for logging, adding ellipsis if truncated."""
    if text is None:
        return "<none>"
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_log_dict(data: dict[str, Any]) -> str:
    """Format dictionary as key=value pairs for logging."""
    parts = []
    for key, value in data.items():
        if isinstance(value, str):
            parts.append(f'{key}="{truncate(value, 80)}"')
        elif isinstance(value, list | tuple):
            if len(value) <= 3:
                parts.append(f"{key}={list(value)}")
            else:
                parts.append(f"{key}=[{value[0]}, {value[1]}, ... +{len(value)-2} more]")
        elif isinstance(value, dict):
            parts.append(f"{key}={{...{len(value)} keys}}")
        else:
            parts.append(f"{key}={value}")
    return " | ".join(parts)


class StructuredLogger:
    """Logger wrapper that adds structured context to all log messages."""

    def __init__(self, name: str, context: LogContext | None = None):
        self._logger = logging.getLogger(name)
        self._context = context or LogContext()

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def context(self) -> LogContext:
        return self._context

    def _format_message(self, message: str, **kwargs: Any) -> str:
        """Format message with context and extra data."""
        prefix = self._context.format_prefix()
        if kwargs:
            extra = format_log_dict(kwargs)
            if prefix:
                return f"{prefix} | {message} | {extra}"
            return f"{message} | {extra}"
        if prefix:
            return f"{prefix} | {message}"
        return message

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(self._format_message(message, **kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with context and traceback."""
        self._logger.exception(self._format_message(message, **kwargs))

    def with_context(self, **kwargs: Any) -> "StructuredLogger":
        """Create new logger with additional context."""
        known = ("render_id", "request_id", "shortcode")
        new_context = LogContext(
            render_id=kwargs.get("render_id", self._context.render_id),
            request_id=kwargs.get("request_id", self._context.request_id),
            shortcode=kwargs.get("shortcode", self._context.shortcode),
            extra={
                **self._context.extra,
                **{k: v for k, v in kwargs.items() if k not in known},
            },
        )
        return StructuredLogger(self._logger.name, new_context)


def get_logger(name: str, context: LogContext | None = None) -> StructuredLogger:
    """Get a structured logger with optional context."""
    return StructuredLogger(name, context)


# Specialized logging functions for render events


def log_render_start(
    logger: StructuredLogger,
    template: str,
    segment_count: int,
    shortcode_count: int,
) -> None:
    """Log the start of a template render."""
    logger.info(
        "RENDER_START",
        template_len=len(template),
        segments=segment_count,
        shortcodes=shortcode_count,
    )


def log_render_complete(
    logger: StructuredLogger,
    node_count: int,
    placeholders: int,
    errors: int,
    duration_ms: float,
) -> None:
    """Log the end of a template render."""
    logger.info(
        "RENDER_COMPLETE",
        nodes=node_count,
        placeholders=placeholders,
        errors=errors,
        duration_ms=round(duration_ms, 1),
    )


def log_shortcode_unresolved(logger: StructuredLogger, name: str) -> None:
    """Unresolved shortcodes are informational, not errors."""
    logger.debug("SHORTCODE_UNRESOLVED", shortcode=name)


def log_shortcode_collision(
    logger: StructuredLogger,
    name: str,
    namespaces: list[str],
    winner: str,
) -> None:
    """Log a shortcode name defined in more than one namespace."""
    logger.warning(
        "SHORTCODE_COLLISION",
        shortcode=name,
        namespaces=namespaces,
        resolved_as=winner,
    )


def log_shortcode_error(
    logger: StructuredLogger,
    name: str,
    error: Exception,
) -> None:
    """Log a contained per-shortcode render failure with traceback."""
    logger.exception(
        "SHORTCODE_RENDER_ERROR",
        shortcode=name,
        error_type=type(error).__name__,
        error=str(error)[:200],
    )
