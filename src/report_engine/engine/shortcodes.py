"""
Shortcode Utilities
===================

Helpers for the admin template editor: building shortcode names from
section titles and reporting how a template uses its content.

Example:
    >>> make_shortcode("chart", "Vendite Trimestrali 2024", 2)
    '[chart_vendite_trimest_2]'
"""

import re
from dataclasses import dataclass, field

from report_engine.engine.content import ContentMap, ShortcodeType
from report_engine.engine.resolver import find_unresolved
from report_engine.engine.tokenizer import extract_shortcodes

SHORTCODE_KINDS = (ShortcodeType.TEXT, ShortcodeType.CHART, ShortcodeType.TABLE)

SLUG_MAX_LENGTH = 15

# Name used for new, untitled sections
DEFAULT_SLUGS: dict[ShortcodeType, str] = {
    ShortcodeType.TEXT: "section",
    ShortcodeType.CHART: "chart",
    ShortcodeType.TABLE: "table",
}

_WHITESPACE = re.compile(r"\s+")
_NON_SLUG = re.compile(r"[^\w-]+", re.ASCII)


def _kind(kind: ShortcodeType | str) -> ShortcodeType:
    resolved = ShortcodeType(kind)
    if resolved not in SHORTCODE_KINDS:
        raise ValueError(f"Shortcode kind must be text, chart or table, got '{resolved.value}'")
    return resolved


def slugify(title: str) -> str:
    """Lowercase, whitespace runs to ``_``, drop non-word characters, cut to 15."""
    slug = _WHITESPACE.sub("_", title.lower())
    slug = _NON_SLUG.sub("", slug)
    return slug[:SLUG_MAX_LENGTH]


def make_shortcode(kind: ShortcodeType | str, title: str, index: int) -> str:
    """Shortcode for a titled section: ``[<kind>_<slug>_<index>]``.

    Args:
        kind: ``text``, ``chart`` or ``table``
        title: Section title
        index: 1-based position of the section in its list

    Raises:
        ValueError: If kind is not one of the three content kinds
    """
    return f"[{_kind(kind).value}_{slugify(title)}_{index}]"


def default_shortcode(kind: ShortcodeType | str, position: int) -> str:
    """Shortcode for a new untitled section, e.g. ``[text_section_3]``."""
    resolved = _kind(kind)
    return f"[{resolved.value}_{DEFAULT_SLUGS[resolved]}_{position}]"


@dataclass
class TemplateInspection:
    """How a template uses a content map.

    Attributes:
        shortcodes: Names in template order, repetitions included
        unresolved: Unique names with no content, first-seen order
        collisions: Used names defined in more than one namespace
    """

    shortcodes: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    collisions: dict[str, list[ShortcodeType]] = field(default_factory=dict)


def inspect_template(template: str, content: ContentMap) -> TemplateInspection:
    names = extract_shortcodes(template)
    used = set(names)
    return TemplateInspection(
        shortcodes=names,
        unresolved=find_unresolved(names, content),
        collisions={
            name: owners for name, owners in content.collisions().items() if name in used
        },
    )
