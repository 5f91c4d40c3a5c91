"""Core logic for iconfont.

This module contains the parts of the tool that are not delegated to
fontTools:

- Codepoint allocation (overrides first, then sequential auto-assignment)
- Stylesheet rendering
- Pipeline orchestration

Key functions:
- allocate_codepoints: Build the name to codepoint table
- resolve_names: Apply renames to icon file stems
- render_css: Render the stylesheet
- generate: Run the whole pipeline

Key classes:
- IconFontGenerator: Orchestrates a generation run
"""

from iconfont.core.codepoints import (
    allocate_codepoints,
    build_glyph_records,
    resolve_names,
)
from iconfont.core.css import render_css
from iconfont.core.pipeline import IconFontGenerator, generate

__all__ = [
    "IconFontGenerator",
    "allocate_codepoints",
    "build_glyph_records",
    "generate",
    "render_css",
    "resolve_names",
]
