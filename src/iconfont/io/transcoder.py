"""Conversion of the SVG font into binary font formats.

The SVG font is parsed back, each glyph outline is converted to quadratic
curves and a TrueType font is built with ``FontBuilder``. WOFF and WOFF2
are re-flavored copies of that TrueType font.
"""

import io
import re
from collections.abc import Callable, Container
from dataclasses import dataclass, field

import structlog
from fontTools.fontBuilder import FontBuilder
from fontTools.misc import etree
from fontTools.misc.roundTools import otRound
from fontTools.misc.timeTools import timestampSinceEpoch
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.recordingPen import RecordingPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.svgLib.path import parse_path
from fontTools.ttLib import TTFont

from iconfont.config.settings import FontFormat, TranscodeOptions
from iconfont.domain.icon import Artifact
from iconfont.exceptions import TranscodeError

logger = structlog.get_logger("iconfont")

NOTDEF = ".notdef"

# Maximum error, in font units, when approximating cubic curves.
CU2QU_MAX_ERR = 1.0

DEFAULT_WEIGHT_CLASS = 400

# Glyph names kept as-is in the TrueType font.
_SAFE_GLYPH_NAME_RE = re.compile(r"^[A-Za-z0-9._-]{1,63}\Z")

# Characters not allowed in a PostScript font name.
_PS_NAME_STRIP_RE = re.compile(r"[^!-~]|[\[\](){}<>/%]")


@dataclass
class SvgFontGlyph:
    """A glyph read from an SVG font document."""

    name: str
    codepoint: int | None
    advance: float
    path_data: str


@dataclass
class SvgFont:
    """The parts of an SVG font document needed to build a TrueType font."""

    family: str
    units_per_em: float
    ascent: float
    descent: float
    weight: str | None = None
    style: str | None = None
    glyphs: list[SvgFontGlyph] = field(default_factory=list)


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def parse_svg_font(document: str) -> SvgFont:
    """Parse an SVG font document.

    Raises:
        ValueError: If the document has no font or font-face element
    """
    root = etree.fromstring(document.encode("utf-8"))
    font_el = next((el for el in root.iter() if _local_name(el.tag) == "font"), None)
    if font_el is None:
        raise ValueError("no <font> element")
    face_el = next((el for el in font_el if _local_name(el.tag) == "font-face"), None)
    if face_el is None:
        raise ValueError("no <font-face> element")

    units_per_em = float(face_el.get("units-per-em", "1000"))
    descent = abs(float(face_el.get("descent", "0")))
    ascent = float(face_el.get("ascent", units_per_em - descent))
    default_advance = float(font_el.get("horiz-adv-x", "0"))

    font = SvgFont(
        family=face_el.get("font-family") or font_el.get("id") or "icons",
        units_per_em=units_per_em,
        ascent=ascent,
        descent=descent,
        weight=face_el.get("font-weight"),
        style=face_el.get("font-style"),
    )

    for index, glyph_el in enumerate(el for el in font_el if _local_name(el.tag) == "glyph"):
        unicode = glyph_el.get("unicode")
        font.glyphs.append(
            SvgFontGlyph(
                name=glyph_el.get("glyph-name") or f"glyph{index}",
                codepoint=ord(unicode[0]) if unicode else None,
                advance=float(glyph_el.get("horiz-adv-x", default_advance)),
                path_data=glyph_el.get("d", ""),
            )
        )
    return font


def _weight_class(weight: str | None) -> int:
    if weight and weight.isdigit():
        return int(weight)
    if weight == "bold":
        return 700
    return DEFAULT_WEIGHT_CLASS


def tt_glyph_name(svg_glyph: SvgFontGlyph, index: int, taken: Container[str]) -> str:
    """Pick a TrueType glyph name for an SVG font glyph.

    Icon names that are short ASCII identifiers are kept. Other names are
    replaced by a name derived from the codepoint, or from the glyph index
    when there is none, since the post table only holds Latin-1 names.
    """
    name = svg_glyph.name
    if not _SAFE_GLYPH_NAME_RE.match(name) or name == NOTDEF:
        codepoint = svg_glyph.codepoint
        if codepoint is None:
            name = f"glyph{index}"
        elif codepoint <= 0xFFFF:
            name = f"uni{codepoint:04X}"
        else:
            name = f"u{codepoint:X}"

    candidate = name
    suffix = 1
    while candidate in taken:
        candidate = f"{name}.{suffix}"
        suffix += 1
    return candidate


def _build_ttf(font: SvgFont, options: TranscodeOptions) -> bytes:
    upm = otRound(font.units_per_em)
    ascent = otRound(font.ascent)
    descent = otRound(font.descent)

    glyph_order = [NOTDEF]
    cmap: dict[int, str] = {}
    glyphs = {NOTDEF: TTGlyphPen(None).glyph()}
    metrics: dict[str, tuple[int, int]] = {NOTDEF: (0, 0)}

    seen: set[str] = set()
    for index, svg_glyph in enumerate(font.glyphs, start=1):
        if svg_glyph.name in seen:
            logger.warning("Duplicate glyph name skipped", glyph=svg_glyph.name)
            continue
        seen.add(svg_glyph.name)
        name = tt_glyph_name(svg_glyph, index, glyphs)

        recording = RecordingPen()
        parse_path(svg_glyph.path_data, recording)

        tt_pen = TTGlyphPen(None)
        recording.replay(Cu2QuPen(tt_pen, CU2QU_MAX_ERR, reverse_direction=True))
        bounds_pen = BoundsPen(None)
        recording.replay(bounds_pen)

        glyph_order.append(name)
        glyphs[name] = tt_pen.glyph()
        lsb = otRound(bounds_pen.bounds[0]) if bounds_pen.bounds else 0
        metrics[name] = (otRound(svg_glyph.advance), lsb)
        if svg_glyph.codepoint is not None:
            cmap[svg_glyph.codepoint] = name

    style_name = "Italic" if font.style == "italic" else "Regular"
    ps_name = (_PS_NAME_STRIP_RE.sub("", font.family) or "Icons")[:55] + "-" + style_name
    names = {
        "copyright": options.copyright,
        "familyName": font.family,
        "styleName": style_name,
        "uniqueFontIdentifier": f"{font.family} {style_name}",
        "fullName": font.family,
        "version": options.version,
        "psName": ps_name,
        "description": options.description,
        "vendorURL": options.url,
    }

    builder = FontBuilder(upm, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap(cmap)
    builder.setupGlyf(glyphs)
    builder.setupHorizontalMetrics(metrics)
    builder.setupHorizontalHeader(ascent=ascent, descent=-descent)
    builder.setupNameTable({key: value for key, value in names.items() if value})
    builder.setupOS2(
        sTypoAscender=ascent,
        sTypoDescender=-descent,
        sTypoLineGap=0,
        usWinAscent=ascent,
        usWinDescent=descent,
        usWeightClass=_weight_class(font.weight),
    )
    builder.setupPost()

    if options.ts is not None:
        stamp = timestampSinceEpoch(options.ts)
        builder.updateHead(created=stamp, modified=stamp)
        builder.font.recalcTimestamp = False

    buffer = io.BytesIO()
    builder.save(buffer)
    return buffer.getvalue()


def svg_font_to_ttf(document: str, options: TranscodeOptions) -> bytes:
    """Build a TrueType font from an SVG font document.

    Args:
        document: SVG font document text
        options: Name table and timestamp metadata

    Returns:
        TrueType font bytes

    Raises:
        TranscodeError: If the document cannot be parsed or compiled
    """
    try:
        return _build_ttf(parse_svg_font(document), options)
    except Exception as e:
        raise TranscodeError(FontFormat.TTF.value, str(e)) from e


def _reflavor(ttf: bytes, flavor: FontFormat) -> bytes:
    try:
        font = TTFont(io.BytesIO(ttf), recalcTimestamp=False)
        font.flavor = flavor.value
        buffer = io.BytesIO()
        font.save(buffer)
        font.close()
    except Exception as e:
        raise TranscodeError(flavor.value, str(e)) from e
    return buffer.getvalue()


def ttf_to_woff(ttf: bytes) -> bytes:
    """Wrap a TrueType font as WOFF."""
    return _reflavor(ttf, FontFormat.WOFF)


def ttf_to_woff2(ttf: bytes) -> bytes:
    """Compress a TrueType font as WOFF2 (requires brotli)."""
    return _reflavor(ttf, FontFormat.WOFF2)


class FontTranscoder:
    """Produces every font format from one SVG font document.

    The TrueType font is built at most once and shared by the WOFF and
    WOFF2 conversions.

    Example:
        transcoder = FontTranscoder(document, TranscodeOptions())
        artifact = transcoder.transcode(FontFormat.WOFF2)
    """

    def __init__(self, svg_font: str, options: TranscodeOptions) -> None:
        self._svg_font = svg_font
        self._options = options
        self._ttf: bytes | None = None
        self._converters: dict[FontFormat, Callable[[], str | bytes]] = {
            FontFormat.SVG: lambda: self._svg_font,
            FontFormat.TTF: lambda: self.ttf,
            FontFormat.WOFF: lambda: ttf_to_woff(self.ttf),
            FontFormat.WOFF2: lambda: ttf_to_woff2(self.ttf),
        }

    @property
    def ttf(self) -> bytes:
        """TrueType font bytes, built on first access."""
        if self._ttf is None:
            self._ttf = svg_font_to_ttf(self._svg_font, self._options)
            logger.info("TrueType font built", size=len(self._ttf))
        return self._ttf

    def transcode(self, font_format: FontFormat) -> Artifact:
        """Produce the payload for one font format."""
        data = self._converters[font_format]()
        logger.debug("Font transcoded", format=font_format.value, size=len(data))
        return Artifact(extension=font_format.extension, data=data)
