"""Unit tests for font transcoding."""

import io
from pathlib import Path
from unittest.mock import patch

import pytest
from fontTools.misc.timeTools import timestampSinceEpoch
from fontTools.ttLib import TTFont

from iconfont.config import AssemblyOptions, FontFormat, TranscodeOptions
from iconfont.domain import GlyphRecord
from iconfont.exceptions import TranscodeError
from iconfont.io.assembler import SvgFontAssembler
from iconfont.io.transcoder import (
    NOTDEF,
    FontTranscoder,
    SvgFontGlyph,
    parse_svg_font,
    svg_font_to_ttf,
    ttf_to_woff,
    ttf_to_woff2,
    tt_glyph_name,
)

ICONS_DIR = Path(__file__).parent.parent / "fixtures" / "icons"

# Name table IDs
NAME_ID_COPYRIGHT = 0
NAME_ID_FAMILY = 1
NAME_ID_POSTSCRIPT = 6
NAME_ID_VERSION = 5
NAME_ID_DESCRIPTION = 10
NAME_ID_VENDOR_URL = 11


@pytest.fixture(scope="module")
def svg_font() -> str:
    """SVG font document built from the fixture icons."""
    records = [
        GlyphRecord(name="0", codepoint=0xF102, path=ICONS_DIR / "0.svg"),
        GlyphRecord(name="1", codepoint=0xF103, path=ICONS_DIR / "1.svg"),
    ]
    return SvgFontAssembler("icon", AssemblyOptions()).assemble(records)


@pytest.fixture(scope="module")
def ttf(svg_font: str) -> bytes:
    """TrueType build of the fixture font."""
    return svg_font_to_ttf(svg_font, TranscodeOptions())


def load(data: bytes) -> TTFont:
    """Load font bytes."""
    return TTFont(io.BytesIO(data))


class TestParseSvgFont:
    """Tests for parse_svg_font."""

    def test_parses_glyphs(self, svg_font: str):
        """Glyph names, codepoints and metrics are read back."""
        font = parse_svg_font(svg_font)

        assert font.family == "icon"
        assert font.units_per_em == 24
        assert [(g.name, g.codepoint) for g in font.glyphs] == [("0", 0xF102), ("1", 0xF103)]
        assert all(g.advance == 24 for g in font.glyphs)

    def test_missing_font_element(self):
        """A plain SVG is not an SVG font."""
        with pytest.raises(ValueError, match="font"):
            parse_svg_font('<svg xmlns="http://www.w3.org/2000/svg"></svg>')


class TestSvgFontToTtf:
    """Tests for svg_font_to_ttf."""

    def test_glyphs_and_cmap(self, ttf: bytes):
        """Glyph order starts with .notdef and cmap maps the codepoints."""
        font = load(ttf)

        assert font.getGlyphOrder() == [NOTDEF, "0", "1"]
        assert font.getBestCmap() == {0xF102: "0", 0xF103: "1"}
        assert font["head"].unitsPerEm == 24
        assert font["hmtx"]["0"][0] == 24
        assert font["glyf"]["0"].numberOfContours > 0

    def test_vertical_metrics(self, ttf: bytes):
        """Ascent and descent come from the SVG font."""
        font = load(ttf)
        assert font["hhea"].ascent == 24
        assert font["hhea"].descent == 0

    def test_default_names(self, ttf: bytes):
        """Family name and default version are written."""
        names = load(ttf)["name"]
        assert names.getDebugName(NAME_ID_FAMILY) == "icon"
        assert names.getDebugName(NAME_ID_VERSION) == "Version 1.0"
        assert names.getDebugName(NAME_ID_COPYRIGHT) is None

    def test_metadata_names(self, svg_font: str):
        """Copyright, description, URL and version are written."""
        options = TranscodeOptions(
            copyright="(c) Example",
            description="Example icons",
            url="https://example.com",
            version="Version 2.1",
        )
        names = load(svg_font_to_ttf(svg_font, options))["name"]

        assert names.getDebugName(NAME_ID_COPYRIGHT) == "(c) Example"
        assert names.getDebugName(NAME_ID_DESCRIPTION) == "Example icons"
        assert names.getDebugName(NAME_ID_VENDOR_URL) == "https://example.com"
        assert names.getDebugName(NAME_ID_VERSION) == "Version 2.1"

    def test_timestamp(self, svg_font: str):
        """The ts option pins creation and modification time."""
        ts = 1_600_000_000
        head = load(svg_font_to_ttf(svg_font, TranscodeOptions(ts=ts)))["head"]

        assert head.created == timestampSinceEpoch(ts)
        assert head.modified == timestampSinceEpoch(ts)

    def test_reproducible_with_timestamp(self, svg_font: str):
        """Same input and timestamp give identical bytes."""
        options = TranscodeOptions(ts=1_600_000_000)
        assert svg_font_to_ttf(svg_font, options) == svg_font_to_ttf(svg_font, options)

    def test_invalid_document(self):
        """Unparseable input raises TranscodeError."""
        with pytest.raises(TranscodeError) as exc_info:
            svg_font_to_ttf("<not-xml", TranscodeOptions())
        assert exc_info.value.font_format == "ttf"


class TestGlyphNames:
    """Tests for TrueType glyph naming."""

    @staticmethod
    def glyph(name: str, codepoint: int | None) -> SvgFontGlyph:
        return SvgFontGlyph(name=name, codepoint=codepoint, advance=0, path_data="")

    def test_ascii_name_kept(self):
        """Short ASCII names are used unchanged."""
        assert tt_glyph_name(self.glyph("arrow-left_2.x", 0xF102), 1, ()) == "arrow-left_2.x"

    def test_non_ascii_name_from_codepoint(self):
        """Non-ASCII names are derived from the codepoint."""
        assert tt_glyph_name(self.glyph("图标", 0xF102), 1, ()) == "uniF102"
        assert tt_glyph_name(self.glyph("café", 0x1F600), 1, ()) == "u1F600"

    def test_fallback_without_codepoint(self):
        """Glyphs without a codepoint are named by index."""
        assert tt_glyph_name(self.glyph("图标", None), 3, ()) == "glyph3"

    def test_reserved_and_long_names_replaced(self):
        """The .notdef name and overlong names are not kept."""
        assert tt_glyph_name(self.glyph(NOTDEF, 0x41), 1, ()) == "uni0041"
        assert tt_glyph_name(self.glyph("a" * 64, 0x41), 1, ()) == "uni0041"

    def test_collision_suffixed(self):
        """A name already in use gets a numeric suffix."""
        taken = {"uniF102", "uniF102.1"}
        assert tt_glyph_name(self.glyph("图标", 0xF102), 1, taken) == "uniF102.2"

    def test_non_latin_font(self):
        """Icon and family names outside Latin-1 still build a font."""
        records = [
            GlyphRecord(name="图标", codepoint=0xF102, path=ICONS_DIR / "0.svg"),
            GlyphRecord(name="uniF102", codepoint=0xF103, path=ICONS_DIR / "1.svg"),
            GlyphRecord(name="значок", codepoint=0x1F600, path=ICONS_DIR / "2.svg"),
        ]
        document = SvgFontAssembler("图标 font", AssemblyOptions()).assemble(records)
        font = load(svg_font_to_ttf(document, TranscodeOptions()))

        assert font.getGlyphOrder() == [NOTDEF, "uniF102", "uniF102.1", "u1F600"]
        assert font.getBestCmap() == {
            0xF102: "uniF102",
            0xF103: "uniF102.1",
            0x1F600: "u1F600",
        }
        names = font["name"]
        assert names.getDebugName(NAME_ID_FAMILY) == "图标 font"
        assert names.getDebugName(NAME_ID_POSTSCRIPT) == "font-Regular"


class TestWebFonts:
    """Tests for WOFF and WOFF2 conversion."""

    def test_woff(self, ttf: bytes):
        """WOFF output has the WOFF signature and the same glyphs."""
        woff = ttf_to_woff(ttf)
        assert woff[:4] == b"wOFF"
        assert load(woff).getBestCmap() == {0xF102: "0", 0xF103: "1"}

    def test_woff2(self, ttf: bytes):
        """WOFF2 output has the WOFF2 signature."""
        woff2 = ttf_to_woff2(ttf)
        assert woff2[:4] == b"wOF2"
        assert load(woff2).getGlyphOrder() == [NOTDEF, "0", "1"]

    def test_invalid_input(self):
        """Garbage input raises TranscodeError for the target format."""
        with pytest.raises(TranscodeError) as exc_info:
            ttf_to_woff(b"not a font")
        assert exc_info.value.font_format == "woff"


class TestFontTranscoder:
    """Tests for FontTranscoder."""

    def test_svg_passthrough(self, svg_font: str):
        """The SVG format reuses the intermediate document."""
        artifact = FontTranscoder(svg_font, TranscodeOptions()).transcode(FontFormat.SVG)
        assert artifact.extension == "svg"
        assert artifact.data == svg_font

    def test_every_format(self, svg_font: str):
        """Every known format can be produced."""
        transcoder = FontTranscoder(svg_font, TranscodeOptions())
        for fmt in FontFormat:
            artifact = transcoder.transcode(fmt)
            assert artifact.extension == fmt.extension
            assert artifact.size > 0

    @patch("iconfont.io.transcoder.ttf_to_woff2", return_value=b"woff2")
    @patch("iconfont.io.transcoder.ttf_to_woff", return_value=b"woff")
    @patch("iconfont.io.transcoder.svg_font_to_ttf", return_value=b"ttf")
    def test_ttf_built_once(self, mock_ttf, mock_woff, mock_woff2):
        """TrueType is built once and shared by derived formats."""
        transcoder = FontTranscoder("<svg/>", TranscodeOptions())

        assert transcoder.transcode(FontFormat.TTF).data == b"ttf"
        assert transcoder.transcode(FontFormat.WOFF).data == b"woff"
        assert transcoder.transcode(FontFormat.WOFF2).data == b"woff2"

        mock_ttf.assert_called_once()
        mock_woff.assert_called_once_with(b"ttf")
        mock_woff2.assert_called_once_with(b"ttf")

    @patch("iconfont.io.transcoder.svg_font_to_ttf")
    def test_svg_only_skips_ttf(self, mock_ttf):
        """No TrueType build when only SVG is requested."""
        FontTranscoder("<svg/>", TranscodeOptions()).transcode(FontFormat.SVG)
        mock_ttf.assert_not_called()
