"""Codepoint assignment for icon names.

Explicit overrides are taken verbatim, except that 0 means unset.
Every other name gets the next free value after the starting codepoint,
skipping values already taken by an override.
"""

from collections.abc import Iterable, Mapping

import structlog

from iconfont.config.settings import DEFAULT_START_CODEPOINT
from iconfont.domain.icon import GlyphRecord, IconSource

logger = structlog.get_logger("iconfont")


def resolve_names(
    sources: Iterable[IconSource],
    renames: Mapping[str, str] | None = None,
) -> list[tuple[IconSource, str]]:
    """Pair each icon source with its icon name.

    Args:
        sources: Icon sources in file order
        renames: Optional mapping from file stem to icon name

    Returns:
        List of (source, name) pairs in file order
    """
    renames = renames or {}
    return [(source, renames.get(source.name, source.name)) for source in sources]


def allocate_codepoints(
    names: Iterable[str],
    overrides: Mapping[str, int] | None = None,
    start: int = DEFAULT_START_CODEPOINT,
) -> dict[str, int]:
    """Assign a unique codepoint to every icon name.

    The cursor is incremented before each assignment, so the first
    auto-assigned value is ``start + 1``.

    Args:
        names: Icon names in file order, duplicates allowed
        overrides: Explicit codepoints, trusted as given; 0 counts as unset
        start: Starting codepoint for auto-assignment

    Returns:
        Insertion-ordered mapping of name to codepoint, overrides first
    """
    table = {name: cp for name, cp in (overrides or {}).items() if cp}
    used = set(table.values())
    cursor = start

    for name in names:
        if name in table:
            continue
        cursor += 1
        while cursor in used:
            cursor += 1
        table[name] = cursor
        used.add(cursor)
        logger.debug("Codepoint assigned", icon=name, codepoint=hex(cursor))

    return table


def build_glyph_records(
    named_sources: Iterable[tuple[IconSource, str]],
    codepoints: Mapping[str, int],
) -> list[GlyphRecord]:
    """Build one glyph record per distinct icon name.

    When several files resolve to the same name the record keeps the
    position of the first file and the outline of the last one.

    Raises:
        KeyError: If a name has no codepoint
    """
    records: dict[str, GlyphRecord] = {}
    for source, name in named_sources:
        records[name] = GlyphRecord(name=name, codepoint=codepoints[name], path=source.path)
    return list(records.values())
