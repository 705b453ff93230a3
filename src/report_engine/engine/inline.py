"""
Inline Markdown Parser
======================

Parses the inline subset used inside paragraphs into a node tree:

- ``**bold**`` and ``*italic*`` (content parsed recursively)
- ```code``` (content kept verbatim)
- ``![alt](url)`` images
- ``[text](url)`` links (text parsed recursively)

At each position the image form is tried before the link form, so a ``!``
directly before a link-shaped token always yields an image. Markers that
never close, or close around empty content, are kept as literal text.
Parsing never raises on string input.
"""

from report_engine.engine.nodes import Bold, Code, Image, InlineNode, Italic, Link, TextSpan


def _find_link_target(text: str, open_bracket: int) -> tuple[str, str, int] | None:
    """Match ``[label](target)`` starting at ``open_bracket``.

    Returns (label, target, index after closing paren) or None.
    """
    close_bracket = text.find("]", open_bracket + 1)
    if close_bracket == -1 or close_bracket + 1 >= len(text) or text[close_bracket + 1] != "(":
        return None
    close_paren = text.find(")", close_bracket + 2)
    if close_paren == -1:
        return None
    label = text[open_bracket + 1 : close_bracket]
    target = text[close_bracket + 2 : close_paren]
    return label, target, close_paren + 1


def _find_italic_close(text: str, start: int) -> int:
    """Index of the single ``*`` closing an italic run, skipping ``**..**`` pairs."""
    i = start
    while i < len(text):
        if text.startswith("**", i):
            bold_close = text.find("**", i + 2)
            if bold_close != -1:
                i = bold_close + 2
                continue
            return i
        if text[i] == "*":
            return i
        i += 1
    return -1


def _match_at(text: str, i: int) -> tuple[InlineNode, int] | None:
    """Try each inline construct at position ``i`` in fixed precedence."""
    char = text[i]

    if char == "!" and text.startswith("![", i):
        found = _find_link_target(text, i + 1)
        if found is not None:
            alt, src, end = found
            return Image(alt=alt, src=src), end

    if char == "[":
        found = _find_link_target(text, i)
        if found is not None:
            label, href, end = found
            return Link(href=href, children=parse_inline(label)), end

    if char == "`":
        close = text.find("`", i + 1)
        if close > i + 1:
            return Code(text=text[i + 1 : close]), close + 1

    if char == "*":
        if text.startswith("**", i):
            close = text.find("**", i + 2)
            if close > i + 2:
                return Bold(children=parse_inline(text[i + 2 : close])), close + 2
        close = _find_italic_close(text, i + 1)
        if close > i + 1:
            return Italic(children=parse_inline(text[i + 1 : close])), close + 1

    return None


def parse_inline(text: str) -> list[InlineNode]:
    """Parse a single line of paragraph text into inline nodes.

    Adjacent literal characters are merged into one TextSpan.
    """
    nodes: list[InlineNode] = []
    buffer: list[str] = []
    i = 0

    while i < len(text):
        matched = _match_at(text, i)
        if matched is None:
            buffer.append(text[i])
            i += 1
            continue
        if buffer:
            nodes.append(TextSpan(text="".join(buffer)))
            buffer = []
        node, i = matched
        nodes.append(node)

    if buffer:
        nodes.append(TextSpan(text="".join(buffer)))
    return nodes


def inline_to_plain(nodes: list[InlineNode]) -> str:
    """Visible text of an inline tree (images contribute their alt text)."""
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, TextSpan | Code):
            parts.append(node.text)
        elif isinstance(node, Image):
            parts.append(node.alt)
        else:
            parts.append(inline_to_plain(node.children))
    return "".join(parts)
