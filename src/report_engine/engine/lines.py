"""
Line Classifier
===============

Classifies each ``\\n``-delimited line of literal text into a line node.
Rules are tried in order and the first match wins:

1. ``#`` .. ``#####`` followed by whitespace -> Heading (level = run length)
2. ``-`` followed by whitespace -> unordered ListItem
3. ``<digits>. `` -> ordered ListItem
4. exactly ``---`` -> Rule
5. empty line -> LineBreak
6. anything else -> Paragraph with inline markdown parsed

Each line is classified on its own; block constructs never span lines and
list items are never merged.
"""

import re

from report_engine.engine.inline import parse_inline
from report_engine.engine.nodes import Heading, LineBreak, LineNode, ListItem, Paragraph, Rule

HEADING_PATTERN = re.compile(r"^(#{1,5})\s")
UNORDERED_ITEM_PATTERN = re.compile(r"^-\s")
ORDERED_ITEM_PATTERN = re.compile(r"^\d+\.\s")


def classify_line(line: str) -> LineNode:
    """Classify a single line (without its newline)."""
    heading = HEADING_PATTERN.match(line)
    if heading:
        level = len(heading.group(1))
        return Heading(level=level, text=line[level + 1 :])

    unordered = UNORDERED_ITEM_PATTERN.match(line)
    if unordered:
        return ListItem(ordered=False, text=line[unordered.end() :])

    ordered = ORDERED_ITEM_PATTERN.match(line)
    if ordered:
        return ListItem(ordered=True, text=line[ordered.end() :])

    if line == "---":
        return Rule()

    if line == "":
        return LineBreak()

    return Paragraph(children=parse_inline(line))


def classify(literal_text: str) -> list[LineNode]:
    """Classify every line of a literal span.

    An empty span (between adjacent shortcodes, or at a template edge)
    yields no nodes. Otherwise a span with ``n`` newlines yields ``n + 1``
    nodes, so a trailing newline yields a trailing LineBreak.
    """
    if not literal_text:
        return []
    return [classify_line(line) for line in literal_text.split("\n")]
