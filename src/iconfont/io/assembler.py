"""Assembly of SVG icons into an SVG font document.

Each icon is parsed with ``fontTools.svgLib``, scaled into font units,
flipped so that y grows upwards from the baseline, optionally centered,
and serialized back to path data inside a ``<glyph>`` element.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from xml.sax.saxutils import quoteattr

import structlog
from fontTools.misc.transform import Transform
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.recordingPen import RecordingPen
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.svgLib.path import SVGPath

from iconfont.config.settings import AssemblyOptions
from iconfont.domain.icon import GlyphRecord
from iconfont.exceptions import GlyphSourceError

logger = structlog.get_logger("iconfont")

SVG_NS = "http://www.w3.org/2000/svg"

# Units per em used when there is no icon to measure and no explicit height.
EMPTY_FONT_HEIGHT = 1000

_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_LENGTH_RE = re.compile(rf"^\s*({_NUMBER})\s*(?:px)?\s*$")
_SEPARATOR_RE = re.compile(r"[\s,]+")

_DOCUMENT_HEAD = (
    '<?xml version="1.0" standalone="no"?>\n'
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd" >\n'
    f'<svg xmlns="{SVG_NS}">\n'
    "<defs>\n"
)
_DOCUMENT_TAIL = "  </font>\n</defs>\n</svg>\n"


@dataclass
class IconOutline:
    """An icon's outline in its own SVG coordinate system.

    Attributes:
        record: Glyph record the outline belongs to
        recording: Recorded drawing commands, y axis pointing down
        min_x: Left edge of the icon viewport
        min_y: Top edge of the icon viewport
        width: Viewport width
        height: Viewport height
    """

    record: GlyphRecord
    recording: RecordingPen
    min_x: float
    min_y: float
    width: float
    height: float


@dataclass
class AssembledGlyph:
    """A glyph ready to be written into the SVG font."""

    record: GlyphRecord
    advance: float
    path_data: str


def parse_length(value: str | None) -> float | None:
    """Parse an SVG length in user units or px; other units give None."""
    if value is None:
        return None
    match = _LENGTH_RE.match(value)
    if match is None:
        return None
    return float(match.group(1))


def parse_view_box(value: str | None) -> tuple[float, float, float, float] | None:
    """Parse a ``viewBox`` attribute into (min_x, min_y, width, height)."""
    if not value:
        return None
    parts = _SEPARATOR_RE.split(value.strip())
    if len(parts) != 4:
        return None
    try:
        min_x, min_y, width, height = (float(part) for part in parts)
    except ValueError:
        return None
    return min_x, min_y, width, height


def outline_bounds(recording: RecordingPen) -> tuple[float, float, float, float] | None:
    """Return (x_min, y_min, x_max, y_max) of a recorded outline, or None if empty."""
    pen = BoundsPen(None)
    recording.replay(pen)
    return pen.bounds


def read_icon(record: GlyphRecord) -> IconOutline:
    """Load an SVG icon file and record its outline.

    Raises:
        GlyphSourceError: If the file cannot be read, parsed or measured
    """
    try:
        svg = SVGPath.fromstring(record.path.read_bytes())
        recording = RecordingPen()
        svg.draw(recording)
        attrib = svg.root.attrib
    except Exception as e:
        raise GlyphSourceError(str(record.path), str(e)) from e

    view_box = parse_view_box(attrib.get("viewBox"))
    if view_box is not None:
        min_x, min_y, width, height = view_box
    else:
        min_x = min_y = 0.0
        width = parse_length(attrib.get("width"))
        height = parse_length(attrib.get("height"))
        if width is None or height is None:
            bounds = outline_bounds(recording)
            if bounds is not None:
                width = bounds[2] if width is None else width
                height = bounds[3] if height is None else height

    if not width or not height or width <= 0 or height <= 0:
        raise GlyphSourceError(str(record.path), "cannot determine icon size")

    return IconOutline(
        record=record,
        recording=recording,
        min_x=min_x,
        min_y=min_y,
        width=width,
        height=height,
    )


class SvgFontAssembler:
    """Builds an SVG font document from glyph records.

    Example:
        assembler = SvgFontAssembler("icon", AssemblyOptions())
        document = assembler.assemble(records)
    """

    def __init__(self, font_name: str, options: AssemblyOptions) -> None:
        """Initialize the assembler.

        Args:
            font_name: Font family name
            options: Assembly settings
        """
        self._font_name = font_name
        self._options = options

    def format_number(self, value: float) -> str:
        """Round a coordinate to the configured precision and format it."""
        precision = self._options.round
        value = round(value * precision) / precision
        if value == int(value):
            return str(int(value))
        return repr(value)

    def assemble(self, records: Iterable[GlyphRecord]) -> str:
        """Read every icon and return the SVG font document.

        Icons are processed one at a time in record order; the first
        failing icon aborts assembly.

        Args:
            records: Glyph records, one per distinct icon name

        Returns:
            SVG font document text

        Raises:
            GlyphSourceError: If any icon cannot be read
        """
        icons = [read_icon(record) for record in records]
        options = self._options

        tallest = max((icon.height for icon in icons), default=0.0)
        font_height = options.font_height or tallest or EMPTY_FONT_HEIGHT
        descent = options.descent
        ascent = options.ascent if options.ascent is not None else font_height - descent

        scaled: list[tuple[IconOutline, RecordingPen, float]] = []
        for icon in icons:
            ratio = font_height / (icon.height if options.normalize else tallest)
            transform = Transform(
                ratio, 0, 0, -ratio, -icon.min_x * ratio, ascent + icon.min_y * ratio
            )
            recording = RecordingPen()
            icon.recording.replay(TransformPen(recording, transform))
            scaled.append((icon, recording, icon.width * ratio))

        widest = max((width for _, _, width in scaled), default=0.0)

        glyphs = []
        for icon, recording, width in scaled:
            advance = widest if options.fixed_width else width
            glyphs.append(
                AssembledGlyph(
                    record=icon.record,
                    advance=advance,
                    path_data=self._path_data(recording, advance, ascent, descent),
                )
            )
            logger.debug(
                "Glyph assembled",
                icon=icon.record.name,
                source=str(icon.record.path),
                advance=round(advance, 2),
            )

        logger.info(
            "SVG font assembled",
            font=self._font_name,
            glyphs=len(glyphs),
            font_height=font_height,
        )
        return self._render(glyphs, font_height, ascent, descent, widest)

    def _path_data(
        self,
        recording: RecordingPen,
        advance: float,
        ascent: float,
        descent: float,
    ) -> str:
        """Serialize a scaled outline, applying the centering options."""
        dx = dy = 0.0
        bounds = outline_bounds(recording)
        if bounds is not None:
            x_min, y_min, x_max, y_max = bounds
            if self._options.center_horizontally:
                dx = (advance - (x_max - x_min)) / 2 - x_min
            if self._options.center_vertically:
                dy = (ascent - descent) / 2 - (y_min + y_max) / 2

        path_pen = SVGPathPen(None, ntos=self.format_number)
        if dx or dy:
            recording.replay(TransformPen(path_pen, (1, 0, 0, 1, dx, dy)))
        else:
            recording.replay(path_pen)
        return path_pen.getCommands()

    def _render(
        self,
        glyphs: list[AssembledGlyph],
        font_height: float,
        ascent: float,
        descent: float,
        widest: float,
    ) -> str:
        num = self.format_number
        options = self._options
        font_id = options.font_id or self._font_name

        face_attrs = [
            f"font-family={quoteattr(self._font_name)}",
            f'units-per-em="{num(font_height)}"',
            f'ascent="{num(ascent)}"',
            f'descent="{num(-descent)}"',
        ]
        if options.font_weight:
            face_attrs.append(f"font-weight={quoteattr(options.font_weight)}")
        if options.font_style:
            face_attrs.append(f"font-style={quoteattr(options.font_style)}")

        parts = [
            _DOCUMENT_HEAD,
            f'  <font id={quoteattr(font_id)} horiz-adv-x="{num(widest)}">\n',
            f"    <font-face {' '.join(face_attrs)} />\n",
            '    <missing-glyph horiz-adv-x="0" />\n',
        ]
        for glyph in glyphs:
            parts.append(
                f"    <glyph glyph-name={quoteattr(glyph.record.name)}"
                f' unicode="&#x{glyph.record.codepoint:X};"'
                f' horiz-adv-x="{num(glyph.advance)}"'
                f" d={quoteattr(glyph.path_data)} />\n"
            )
        parts.append(_DOCUMENT_TAIL)
        return "".join(parts)
