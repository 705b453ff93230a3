"""
Template Tokenizer
==================

Splits a report template into an ordered sequence of literal text spans
and shortcode references.

Shortcode syntax is ``[name]`` where ``name`` is a non-empty run of
characters other than ``]``. Brackets do not nest: the first ``]`` after a
``[`` closes the token, so ``[a[b]`` is a reference named ``a[b``. A ``[``
with no closing ``]`` before the end of input is literal text, as is ``[]``.

The output always alternates Literal / ShortcodeRef / Literal ... and both
starts and ends with a Literal, which may be empty.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Literal:
    """A span of template text outside any shortcode."""

    text: str


@dataclass(frozen=True)
class ShortcodeRef:
    """A ``[name]`` placeholder, stored without brackets."""

    name: str


Segment = Literal | ShortcodeRef


def tokenize(template: str) -> list[Segment]:
    """Scan a template left to right into Literal and ShortcodeRef segments.

    Args:
        template: Raw report body

    Returns:
        Segments in template order; ``len`` is always odd
    """
    segments: list[Segment] = []
    buffer: list[str] = []
    i = 0
    length = len(template)

    while i < length:
        char = template[i]
        if char == "[":
            close = template.find("]", i + 1)
            if close > i + 1:
                segments.append(Literal("".join(buffer)))
                segments.append(ShortcodeRef(template[i + 1 : close]))
                buffer = []
                i = close + 1
                continue
        buffer.append(char)
        i += 1

    segments.append(Literal("".join(buffer)))
    return segments


def extract_shortcodes(template: str) -> list[str]:
    """Shortcode names in template order, repetitions included."""
    return [seg.name for seg in tokenize(template) if isinstance(seg, ShortcodeRef)]
