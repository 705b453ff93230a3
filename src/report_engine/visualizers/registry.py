"""
Visualizer Registry
===================

Dispatch table from a chart or table type tag to the visualizer that
builds its visual. Each family (charts, tables) owns one registry; an
optional default entry handles tags with no registered visualizer.
"""

from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict

from report_engine.core.app_config import RenderConfig
from report_engine.core.exceptions import UnsupportedVisualError

D = TypeVar("D", contravariant=True)
V = TypeVar("V", covariant=True)
DataT = TypeVar("DataT")
VisualT = TypeVar("VisualT")


class VisualModel(BaseModel):
    """Base for visual payloads."""

    model_config = ConfigDict(frozen=True)


class Visualizer(Protocol[D, V]):
    """Callable turning a data descriptor into a visual."""

    def __call__(self, data: D, config: RenderConfig) -> V: ...


class VisualizerRegistry(Generic[DataT, VisualT]):
    """Registry of visualizers for one family.

    Example:
        >>> registry = VisualizerRegistry("chart")
        >>> registry.register("bar", render_bar)
        >>> visual = registry.dispatch("bar", data, config)
    """

    def __init__(self, family: str, default: str | None = None) -> None:
        self.family = family
        self._default = default
        self._visualizers: dict[str, Visualizer[DataT, VisualT]] = {}

    def register(
        self,
        name: str,
        visualizer: Visualizer[DataT, VisualT],
        replace: bool = False,
    ) -> None:
        """Register a visualizer for a type tag.

        Raises:
            ValueError: If name already registered and replace=False
        """
        if name in self._visualizers and not replace:
            raise ValueError(
                f"{self.family.capitalize()} type '{name}' already registered. "
                f"Use replace=True to override."
            )
        self._visualizers[name] = visualizer

    def unregister(self, name: str) -> bool:
        """Unregister a type tag. Returns False if it was not registered."""
        if name in self._visualizers:
            del self._visualizers[name]
            return True
        return False

    def get(self, name: str) -> Visualizer[DataT, VisualT] | None:
        return self._visualizers.get(name)

    def resolve_name(self, name: str) -> str | None:
        """Registered tag that will handle ``name`` (itself or the default)."""
        if name in self._visualizers:
            return name
        if self._default is not None and self._default in self._visualizers:
            return self._default
        return None

    def dispatch(self, name: str, data: DataT, config: RenderConfig) -> VisualT:
        """Build the visual for ``data`` with the visualizer for ``name``.

        Raises:
            UnsupportedVisualError: If neither ``name`` nor a default is registered
        """
        resolved = self.resolve_name(name)
        if resolved is None:
            raise UnsupportedVisualError(self.family, name)
        return self._visualizers[resolved](data, config)

    def list_types(self) -> list[str]:
        return list(self._visualizers.keys())

    def has(self, name: str) -> bool:
        return name in self._visualizers

    def __len__(self) -> int:
        return len(self._visualizers)

    def __contains__(self, name: str) -> bool:
        return name in self._visualizers
