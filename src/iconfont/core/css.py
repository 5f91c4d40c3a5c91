"""Stylesheet rendering.

Produces the @font-face declaration, the shared base rule and one
``:before`` rule per icon. Output is deterministic: per-icon rules
follow the codepoint table's insertion order.
"""

from collections.abc import Iterable, Mapping

from iconfont.config.settings import CSS_FORMAT_ORDER, CssOptions, FontFormat

BASE_RULE_BODY = """\
\tdisplay: inline-block;

\tfont-family: {font_name} !important;
\tfont-style: normal;
\tfont-variant: normal;

\tline-height: 1;
\ttext-rendering: auto;
\tvertical-align: middle;"""


def font_face_sources(font_name: str, formats: Iterable[FontFormat]) -> str:
    """Render the @font-face ``src`` list for the requested formats."""
    requested = set(formats)
    return ",".join(
        f'url("./{font_name}.{fmt.extension}") format("{fmt.css_format}")'
        for fmt in CSS_FORMAT_ORDER
        if fmt in requested
    )


def css_escape(codepoint: int) -> str:
    """Escape a codepoint for a CSS ``content`` value (``\\f102``)."""
    return f"\\{codepoint:x}"


def render_css(
    font_name: str,
    formats: Iterable[FontFormat],
    css_options: CssOptions,
    codepoints: Mapping[str, int],
) -> str:
    """Render the stylesheet for an icon font.

    Args:
        font_name: Font family name, also the font file stem
        formats: Requested font formats
        css_options: Base selector and class prefix
        codepoints: Icon name to codepoint table

    Returns:
        Stylesheet text
    """
    selector = css_options.base_selector
    prefix = css_options.class_prefix

    lines = [
        f"@font-face {{ font-family: {font_name}; src: {font_face_sources(font_name, formats)}; }}",
        f"{selector} {{\n{BASE_RULE_BODY.format(font_name=font_name)}\n}}",
    ]
    lines.extend(
        f'{selector}.{prefix}{name}:before {{ content: "{css_escape(codepoint)}"; }}'
        for name, codepoint in codepoints.items()
    )
    return "\n".join(lines)
