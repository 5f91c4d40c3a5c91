"""Exception hierarchy for iconfont."""


class IconFontError(Exception):
    """Base exception for all iconfont errors."""

    pass


class GlyphSourceError(IconFontError):
    """An icon file could not be read or turned into a glyph."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read icon '{path}': {reason}")


class TranscodeError(IconFontError):
    """Error converting the intermediate font into a target format."""

    def __init__(self, font_format: str, reason: str) -> None:
        self.font_format = font_format
        self.reason = reason
        super().__init__(f"Failed to build {font_format} font: {reason}")


class UnknownFormatError(IconFontError):
    """Requested output format is not one we can produce."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unknown font format '{value}'")
