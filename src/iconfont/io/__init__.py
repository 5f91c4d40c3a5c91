"""Font I/O layer for iconfont.

This module wraps fontTools for everything that touches font data or
the filesystem.

Key responsibilities:
- Read SVG icons and assemble them into an SVG font document
- Build TrueType from the SVG font and derive WOFF/WOFF2
- Write generated files with the ``<font name>.<ext>`` convention

Key classes:
- SvgFontAssembler: Icons to SVG font
- FontTranscoder: SVG font to binary formats
- OutputWriter: Persist artifacts
"""

from iconfont.io.assembler import SvgFontAssembler
from iconfont.io.transcoder import (
    FontTranscoder,
    svg_font_to_ttf,
    ttf_to_woff,
    ttf_to_woff2,
)
from iconfont.io.writer import OutputWriter

__all__ = [
    "FontTranscoder",
    "OutputWriter",
    "SvgFontAssembler",
    "svg_font_to_ttf",
    "ttf_to_woff",
    "ttf_to_woff2",
]
