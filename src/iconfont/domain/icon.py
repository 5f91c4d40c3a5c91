"""Icon, glyph and artifact representations.

This module defines the small value objects passed between pipeline
stages: the icon files read from the request, the glyph records handed
to the font assembler, and the generated file payloads.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IconSource:
    """One input SVG file.

    Attributes:
        path: Absolute path to the SVG file
    """

    path: Path

    @classmethod
    def from_path(cls, path: Path | str) -> "IconSource":
        """Create an icon source with an absolute path."""
        return cls(path=Path(path).absolute())

    @property
    def name(self) -> str:
        """File name without extension."""
        return self.path.stem


@dataclass(frozen=True)
class GlyphRecord:
    """A glyph to be assembled into the font.

    Attributes:
        name: Icon name, used as glyph name and CSS class suffix
        codepoint: Assigned Unicode codepoint
        path: SVG file providing the outline
    """

    name: str
    codepoint: int
    path: Path

    @property
    def unicode(self) -> str:
        """The codepoint as a one-character string."""
        return chr(self.codepoint)


@dataclass(frozen=True)
class Artifact:
    """A generated file payload awaiting persistence.

    Attributes:
        extension: File extension, also identifies the format
        data: Text (written as UTF-8) or binary payload
    """

    extension: str
    data: str | bytes

    @property
    def size(self) -> int:
        """Payload size in bytes."""
        if isinstance(self.data, str):
            return len(self.data.encode("utf-8"))
        return len(self.data)
