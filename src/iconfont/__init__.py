"""iconfont - Build icon fonts and stylesheets from SVG files.

iconfont assigns a codepoint to each SVG icon, assembles the icons into a
font, converts it to the requested web font formats and writes a
stylesheet with one class per icon.

Example:
    $ iconfont icons/ --name icon --dest dist

This will create dist/icon.css, dist/icon.woff2 and dist/icon.woff.
"""

__version__ = "0.1.0"

from iconfont.config import FontFormat, GenerationRequest  # noqa: E402
from iconfont.core import generate  # noqa: E402

__all__ = ["FontFormat", "GenerationRequest", "__version__", "generate"]
