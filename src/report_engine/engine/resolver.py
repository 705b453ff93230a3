"""Shortcode resolution against a ContentMap."""

from report_engine.engine.content import ContentMap, ShortcodeEntry, ShortcodeType


def resolve_type(name: str, content: ContentMap) -> ShortcodeType:
    """Which namespace owns ``name``.

    Precedence is fixed: text, then charts, then tables. A name defined in
    several namespaces resolves to the first one; the others are shadowed.
    Pure function of its arguments.
    """
    entry = content.lookup(name)
    return entry.kind if entry is not None else ShortcodeType.UNKNOWN


def resolve(name: str, content: ContentMap) -> ShortcodeEntry | None:
    """Owning entry for ``name``, or None when unresolved."""
    return content.lookup(name)


def find_unresolved(names: list[str], content: ContentMap) -> list[str]:
    """Unique names with no owner, in first-seen order."""
    seen: set[str] = set()
    missing: list[str] = []
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        if resolve_type(name, content) is ShortcodeType.UNKNOWN:
            missing.append(name)
    return missing
