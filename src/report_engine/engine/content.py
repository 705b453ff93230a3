"""
Content Map
===========

Shortcode content supplied by the caller for one render.

The input keeps the stored report shape: three namespaces (``text``,
``charts``, ``tables``), each mapping a shortcode name to a raw record.
Records are validated lazily, one at a time, when a shortcode is rendered,
so a malformed record only affects its own shortcode.

``ContentMap.entries()`` gives the same content as a single mapping of
tagged variants, and ``collisions()`` reports names that more than one
namespace defines. Lookups use the fixed precedence text > charts > tables.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from report_engine.core.exceptions import ContentValidationError

Cell = str | int | float | None


class ShortcodeType(str, Enum):
    """Resolution result for a shortcode name."""

    TEXT = "text"
    CHART = "chart"
    TABLE = "table"
    UNKNOWN = "unknown"


# Lookup order; the first namespace holding the name wins.
NAMESPACE_PRECEDENCE: tuple[tuple[ShortcodeType, str], ...] = (
    (ShortcodeType.TEXT, "text"),
    (ShortcodeType.CHART, "charts"),
    (ShortcodeType.TABLE, "tables"),
)


def _stringify(value: Any) -> Any:
    """Scalar labels (e.g. year columns) display as text; None becomes empty."""
    if isinstance(value, list):
        return ["" if item is None else str(item) for item in value]
    return value


class RecordModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ChartDataset(RecordModel):
    """One numeric series; ``data[i]`` pairs with ``labels[i]``."""

    label: str | None = None
    data: list[int | float | None] = Field(default_factory=list)
    colors: str | list[str] | None = Field(default=None, alias="backgroundColor")


class ChartData(RecordModel):
    """Chart descriptor.

    ``type`` stays a free string so unknown chart types survive validation
    and render as "not supported" instead of failing the record.

    Accepts both the flat shape ``{type, title, labels, datasets}`` and the
    nested Chart.js shape ``{type, title, data: {labels, datasets}}``.
    """

    type: str
    title: str = ""
    labels: list[str] = Field(default_factory=list)
    datasets: list[ChartDataset] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def flatten_nested_data(cls, value: Any) -> Any:
        if isinstance(value, dict) and isinstance(value.get("data"), dict):
            nested = value["data"]
            flattened = {k: v for k, v in value.items() if k != "data"}
            flattened.setdefault("labels", nested.get("labels", []))
            flattened.setdefault("datasets", nested.get("datasets", []))
            return flattened
        return value

    @field_validator("labels", mode="before")
    @classmethod
    def stringify_labels(cls, value: Any) -> Any:
        return _stringify(value)


class TableData(RecordModel):
    """Table descriptor. Unknown ``type`` values render with the simple layout."""

    type: str = "simple"
    title: str = ""
    headers: list[str] | None = None
    rows: list[list[Cell]] = Field(default_factory=list)
    footers: list[Cell] | None = None

    @field_validator("headers", mode="before")
    @classmethod
    def stringify_headers(cls, value: Any) -> Any:
        return _stringify(value)


class TextRecord(RecordModel):
    title: str | None = None
    content: str = ""
    prompt: str | None = None

    @model_validator(mode="before")
    @classmethod
    def accept_bare_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"content": value}
        return value


class ChartRecord(RecordModel):
    title: str | None = None
    data: ChartData
    prompt: str | None = None


class TableRecord(RecordModel):
    title: str | None = None
    data: TableData
    prompt: str | None = None


Record = TextRecord | ChartRecord | TableRecord

_RECORD_MODELS: dict[ShortcodeType, type[RecordModel]] = {
    ShortcodeType.TEXT: TextRecord,
    ShortcodeType.CHART: ChartRecord,
    ShortcodeType.TABLE: TableRecord,
}


def is_present(value: Any) -> bool:
    """Whether a namespace value counts as defined (``None`` and ``""`` do not)."""
    return value is not None and value != ""


def validate_record(kind: ShortcodeType, name: str, raw: Any) -> Record:
    """Validate a raw namespace value into its typed record.

    Raises:
        ContentValidationError: If the value does not match the record shape
    """
    model = _RECORD_MODELS.get(kind)
    if model is None:
        raise ContentValidationError(f"No record type for '{kind.value}'", shortcode=name)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise ContentValidationError(
            f"Invalid {kind.value} content for shortcode '{name}': "
            f"{e.error_count()} validation error(s)",
            shortcode=name,
            kind=kind.value,
        ) from e


@dataclass(frozen=True)
class ShortcodeEntry:
    """A shortcode name bound to the namespace that owns it.

    Attributes:
        name: Shortcode name
        kind: Owning namespace
        raw: Unvalidated record
        shadowed: Other namespaces that also define the name
    """

    name: str
    kind: ShortcodeType
    raw: Any
    shadowed: tuple[ShortcodeType, ...] = ()

    @property
    def is_ambiguous(self) -> bool:
        return bool(self.shadowed)

    def record(self) -> Record:
        return validate_record(self.kind, self.name, self.raw)


@dataclass(frozen=True)
class ContentMap:
    """Read-only shortcode content for one render."""

    text: Mapping[str, Any] = field(default_factory=dict)
    charts: Mapping[str, Any] = field(default_factory=dict)
    tables: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for _, attr in NAMESPACE_PRECEDENCE:
            if not isinstance(getattr(self, attr), Mapping):
                raise TypeError(
                    f"ContentMap.{attr} must be a mapping, got {type(getattr(self, attr)).__name__}"
                )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ContentMap":
        """Build from ``{"text": ..., "charts": ..., "tables": ...}``."""
        data = data or {}
        return cls(
            text=dict(data.get("text") or {}),
            charts=dict(data.get("charts") or {}),
            tables=dict(data.get("tables") or {}),
        )

    @classmethod
    def from_report_content(cls, content: Mapping[str, Any] | None) -> "ContentMap":
        """Build from a stored report body.

        The body uses ``textSections``, ``chartSections`` and
        ``tableSections``; missing sections become empty namespaces.
        """
        content = content or {}
        return cls(
            text=dict(content.get("textSections") or {}),
            charts=dict(content.get("chartSections") or {}),
            tables=dict(content.get("tableSections") or {}),
        )

    def namespace(self, kind: ShortcodeType) -> Mapping[str, Any]:
        for ns_kind, attr in NAMESPACE_PRECEDENCE:
            if ns_kind is kind:
                return getattr(self, attr)
        raise KeyError(kind)

    def owners(self, name: str) -> list[ShortcodeType]:
        """Every namespace defining ``name``, in precedence order."""
        return [
            kind
            for kind, attr in NAMESPACE_PRECEDENCE
            if is_present(getattr(self, attr).get(name))
        ]

    def lookup(self, name: str) -> ShortcodeEntry | None:
        """Resolve ``name`` with the fixed precedence, or None if undefined."""
        owners = self.owners(name)
        if not owners:
            return None
        winner = owners[0]
        return ShortcodeEntry(
            name=name,
            kind=winner,
            raw=self.namespace(winner)[name],
            shadowed=tuple(owners[1:]),
        )

    def entries(self) -> dict[str, ShortcodeEntry]:
        """All names as tagged variants, first-namespace-wins."""
        result: dict[str, ShortcodeEntry] = {}
        for _, attr in NAMESPACE_PRECEDENCE:
            for name in getattr(self, attr):
                if name not in result:
                    entry = self.lookup(name)
                    if entry is not None:
                        result[name] = entry
        return result

    def collisions(self) -> dict[str, list[ShortcodeType]]:
        """Names defined by more than one namespace, with their owners."""
        return {
            name: [entry.kind, *entry.shadowed]
            for name, entry in self.entries().items()
            if entry.is_ambiguous
        }

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and bool(self.owners(name))
