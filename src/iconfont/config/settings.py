"""Configuration settings for iconfont."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from iconfont.domain.icon import IconSource
from iconfont.exceptions import UnknownFormatError

DEFAULT_BASE_SELECTOR = ".icon"
DEFAULT_CLASS_PREFIX = "icon-"
DEFAULT_START_CODEPOINT = 0xF101
DEFAULT_ROUND = 10e12
DEFAULT_VERSION = "Version 1.0"


def is_font_codepoint(codepoint: int) -> bool:
    """Whether a codepoint can be mapped to a glyph in every output format."""
    if codepoint in (0x9, 0xA, 0xD):
        return True
    return (
        0x20 <= codepoint <= 0x10FFFF
        and not 0xD800 <= codepoint <= 0xDFFF
        and codepoint not in (0xFFFE, 0xFFFF)
    )


class FontFormat(str, Enum):
    """Font file formats that can be generated."""

    SVG = "svg"
    TTF = "ttf"
    WOFF = "woff"
    WOFF2 = "woff2"

    @property
    def extension(self) -> str:
        """File extension used for this format."""
        return self.value

    @property
    def css_format(self) -> str:
        """Keyword used in a @font-face ``format()`` hint."""
        if self is FontFormat.TTF:
            return "truetype"
        return self.value

    @classmethod
    def parse(cls, value: str) -> "FontFormat":
        """Look up a format by name, case-insensitively.

        Raises:
            UnknownFormatError: If the name is not a known format
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnknownFormatError(value) from None


# Order of preference in the @font-face src list, best compression first.
CSS_FORMAT_ORDER: tuple[FontFormat, ...] = (
    FontFormat.WOFF2,
    FontFormat.WOFF,
    FontFormat.TTF,
    FontFormat.SVG,
)

DEFAULT_FILE_OUTPUTS: tuple[FontFormat, ...] = (FontFormat.WOFF2, FontFormat.WOFF)


class AssemblyOptions(BaseModel):
    """Settings for assembling icons into the intermediate SVG font."""

    model_config = ConfigDict(frozen=True)

    font_id: str | None = Field(
        default=None,
        description="Font id (defaults to the font name)",
    )
    font_style: str | None = Field(
        default=None,
        description="Font style written to the font-face element",
    )
    font_weight: str | None = Field(
        default=None,
        description="Font weight written to the font-face element",
    )
    fixed_width: bool = Field(
        default=False,
        description="Give every glyph the advance width of the widest icon",
    )
    center_horizontally: bool = Field(
        default=False,
        description="Center each glyph horizontally inside its advance width",
    )
    center_vertically: bool = Field(
        default=False,
        description="Center each glyph vertically inside the em box",
    )
    normalize: bool = Field(
        default=False,
        description="Scale every icon to the font height",
    )
    font_height: float | None = Field(
        default=None,
        gt=0,
        description="Font height in units (default: height of the tallest icon)",
    )
    round: float = Field(
        default=DEFAULT_ROUND,
        gt=0,
        description="Path coordinates are rounded to 1/round",
    )
    descent: float = Field(
        default=0,
        ge=0,
        description="Font descent, as a positive value",
    )
    ascent: float | None = Field(
        default=None,
        description="Font ascent (default: font height minus descent)",
    )


class TranscodeOptions(BaseModel):
    """Metadata written while building the binary fonts."""

    model_config = ConfigDict(frozen=True)

    copyright: str | None = Field(default=None, description="Copyright notice")
    description: str | None = Field(default=None, description="Font description")
    ts: int | None = Field(
        default=None,
        ge=0,
        description="Unix timestamp overriding creation and modification time",
    )
    url: str | None = Field(default=None, description="Manufacturer URL")
    version: str = Field(
        default=DEFAULT_VERSION,
        description="Font version string ('Version x.y' or 'x.y')",
    )


class CssOptions(BaseModel):
    """Stylesheet rendering options."""

    model_config = ConfigDict(frozen=True)

    base_selector: str = Field(
        default=DEFAULT_BASE_SELECTOR,
        description="Selector of the rule shared by all icons",
    )
    class_prefix: str = Field(
        default=DEFAULT_CLASS_PREFIX,
        description="Prefix of each icon's class name",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GenerationRequest(BaseModel):
    """Everything needed for one font generation run."""

    model_config = ConfigDict(frozen=True)

    font_name: str = Field(min_length=1, description="Font family name and output file stem")
    files: list[Path] = Field(description="SVG icon files, in glyph order")
    dest: Path = Field(description="Output directory")
    types: list[FontFormat] = Field(
        default_factory=lambda: list(DEFAULT_FILE_OUTPUTS),
        description="Font formats to generate",
    )
    start_codepoint: int = Field(
        default=DEFAULT_START_CODEPOINT,
        ge=0,
        description="Auto-assigned codepoints start after this value",
    )
    codepoints: dict[str, int] = Field(
        default_factory=dict,
        description="Explicit codepoint per icon name",
    )
    renames: dict[str, str] = Field(
        default_factory=dict,
        description="Icon name per file stem",
    )
    assembly: AssemblyOptions = Field(default_factory=AssemblyOptions)
    transcode: TranscodeOptions = Field(default_factory=TranscodeOptions)
    css: CssOptions = Field(default_factory=CssOptions)

    @field_validator("codepoints")
    @classmethod
    def _check_codepoints(cls, value: dict[str, int]) -> dict[str, int]:
        for name, codepoint in value.items():
            if codepoint and not is_font_codepoint(codepoint):
                raise ValueError(
                    f"codepoint {codepoint:#x} for icon '{name}' cannot be mapped in a font"
                )
        return value

    @field_validator("types")
    @classmethod
    def _drop_duplicate_types(cls, value: list[FontFormat]) -> list[FontFormat]:
        return list(dict.fromkeys(value))

    def icon_sources(self) -> list[IconSource]:
        """Icon sources in file order."""
        return [IconSource.from_path(path) for path in self.files]


def get_default_request(font_name: str, files: list[Path], dest: Path) -> GenerationRequest:
    """Build a request that uses every default option."""
    return GenerationRequest(font_name=font_name, files=files, dest=dest)
