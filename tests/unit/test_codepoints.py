"""Tests for codepoint allocation and icon name resolution."""

from pathlib import Path

from iconfont.config import DEFAULT_START_CODEPOINT
from iconfont.core.codepoints import (
    allocate_codepoints,
    build_glyph_records,
    resolve_names,
)
from iconfont.domain import IconSource


def sources(*names: str) -> list[IconSource]:
    """Create icon sources for the given file names."""
    return [IconSource.from_path(Path("/icons") / name) for name in names]


class TestAllocateCodepoints:
    """Tests for allocate_codepoints."""

    def test_sequential_assignment_preincrements(self):
        """First auto-assigned value is one past the starting codepoint."""
        table = allocate_codepoints(["a", "b", "c"], start=0xF101)
        assert table == {"a": 0xF102, "b": 0xF103, "c": 0xF104}

    def test_default_start(self):
        """Default start codepoint is used when none is given."""
        table = allocate_codepoints(["a"])
        assert table["a"] == DEFAULT_START_CODEPOINT + 1

    def test_override_priority(self):
        """An explicit codepoint wins regardless of file order."""
        for names in (["five", "one", "two"], ["one", "two", "five"]):
            table = allocate_codepoints(names, overrides={"five": 65}, start=0xF101)
            assert table["five"] == 65

    def test_collision_avoidance(self):
        """Auto-assignment skips values taken by overrides."""
        table = allocate_codepoints(["a", "b"], overrides={"a": 0xF102}, start=0xF101)
        assert table == {"a": 0xF102, "b": 0xF103}

    def test_skips_several_taken_values(self):
        """A run of overridden values is skipped entirely."""
        overrides = {"x": 0xF102, "y": 0xF103, "z": 0xF105}
        table = allocate_codepoints(["a", "b"], overrides=overrides, start=0xF101)
        assert table["a"] == 0xF104
        assert table["b"] == 0xF106

    def test_values_are_unique(self):
        """No two names share a codepoint."""
        overrides = {f"o{i}": 0xF102 + 2 * i for i in range(10)}
        names = [f"n{i}" for i in range(30)] + list(overrides)
        table = allocate_codepoints(names, overrides=overrides, start=0xF101)

        assert len(set(table.values())) == len(table)
        assert set(names) <= set(table)

    def test_auto_values_non_decreasing(self):
        """Auto-assigned values increase in file order."""
        names = [f"n{i}" for i in range(20)]
        table = allocate_codepoints(names, overrides={"x": 0xF105}, start=0xF101)
        assigned = [table[name] for name in names]
        assert assigned == sorted(assigned)

    def test_overrides_come_first(self):
        """Table order is overrides, then names in file order."""
        table = allocate_codepoints(["b", "a"], overrides={"z": 0x41})
        assert list(table) == ["z", "b", "a"]

    def test_unused_override_kept(self):
        """Overrides for names without a file are still in the table."""
        table = allocate_codepoints(["a"], overrides={"ghost": 0x41})
        assert table["ghost"] == 0x41

    def test_duplicate_names_assigned_once(self):
        """A repeated name keeps its first codepoint."""
        table = allocate_codepoints(["a", "a", "b"], start=0xF101)
        assert table == {"a": 0xF102, "b": 0xF103}

    def test_overrides_not_range_checked(self):
        """Overrides are taken verbatim."""
        table = allocate_codepoints(["big"], overrides={"big": 0x10FFFF})
        assert table["big"] == 0x10FFFF

    def test_zero_override_is_unset(self):
        """An override of 0 is ignored and the name is auto-assigned."""
        table = allocate_codepoints(["zero", "a"], overrides={"zero": 0}, start=0xF101)
        assert table == {"zero": 0xF102, "a": 0xF103}


class TestResolveNames:
    """Tests for resolve_names."""

    def test_uses_file_stem(self):
        """Icon name is the file name without extension."""
        pairs = resolve_names(sources("arrow-left.svg", "home.svg"))
        assert [name for _, name in pairs] == ["arrow-left", "home"]

    def test_rename_applied(self):
        """Renames replace the file stem."""
        pairs = resolve_names(sources("a.svg", "b.svg"), {"a": "alpha"})
        assert [name for _, name in pairs] == ["alpha", "b"]

    def test_rename_collapses_to_one_entry(self):
        """Two files renamed to one name give a single table entry."""
        pairs = resolve_names(sources("x.svg", "y.svg"), {"x": "icon", "y": "icon"})
        table = allocate_codepoints(name for _, name in pairs)

        assert list(table) == ["icon"]


class TestBuildGlyphRecords:
    """Tests for build_glyph_records."""

    def test_one_record_per_source(self):
        """Each file becomes a record with its codepoint."""
        pairs = resolve_names(sources("a.svg", "b.svg"))
        table = allocate_codepoints(name for _, name in pairs)
        records = build_glyph_records(pairs, table)

        assert [(r.name, r.codepoint) for r in records] == [
            ("a", table["a"]),
            ("b", table["b"]),
        ]
        assert records[0].path == Path("/icons/a.svg").absolute()

    def test_collapsed_name_uses_last_file(self):
        """A shared name keeps its first position and the last file's outline."""
        pairs = resolve_names(
            sources("x.svg", "mid.svg", "y.svg"), {"x": "icon", "y": "icon"}
        )
        table = allocate_codepoints(name for _, name in pairs)
        records = build_glyph_records(pairs, table)

        assert [r.name for r in records] == ["icon", "mid"]
        assert records[0].path.name == "y.svg"

    def test_unicode_property(self):
        """Record exposes its codepoint as a character."""
        pairs = resolve_names(sources("a.svg"))
        records = build_glyph_records(pairs, {"a": 0x41})
        assert records[0].unicode == "A"
