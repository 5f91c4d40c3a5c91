"""Domain models for iconfont.

All models are frozen dataclasses and independent of fontTools:

- IconSource: An input SVG file and its derived name
- GlyphRecord: Name, codepoint and outline source of one glyph
- Artifact: A generated file payload
"""

from iconfont.domain.icon import Artifact, GlyphRecord, IconSource

__all__: list[str] = [
    "Artifact",
    "GlyphRecord",
    "IconSource",
]
