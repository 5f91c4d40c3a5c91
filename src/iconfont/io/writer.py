"""Output writer for generated artifacts.

This module provides the OutputWriter class, which owns the destination
directory and the ``<dest>/<font name>.<extension>`` naming scheme.
"""

from pathlib import Path

from iconfont.domain.icon import Artifact


class OutputWriter:
    """Persists generated artifacts under a destination directory.

    Filesystem errors are not wrapped; they propagate as ``OSError``.

    Example:
        writer = OutputWriter(Path("dist"), "icon")
        writer.ensure_destination()
        writer.write(Artifact("css", css_text))  # dist/icon.css
    """

    def __init__(self, dest: Path, font_name: str) -> None:
        """Initialize the output writer.

        Args:
            dest: Destination directory
            font_name: File stem shared by every artifact
        """
        self._dest = Path(dest)
        self._font_name = font_name

    @property
    def dest(self) -> Path:
        """Destination directory."""
        return self._dest

    def ensure_destination(self) -> None:
        """Create the destination directory if it does not exist."""
        self._dest.mkdir(parents=True, exist_ok=True)

    def path_for(self, extension: str) -> Path:
        """Absolute output path for a file extension."""
        return (self._dest / f"{self._font_name}.{extension}").absolute()

    def write(self, artifact: Artifact) -> Path:
        """Write one artifact, text as UTF-8.

        Returns:
            Path of the written file
        """
        path = self.path_for(artifact.extension)
        if isinstance(artifact.data, str):
            path.write_text(artifact.data, encoding="utf-8")
        else:
            path.write_bytes(artifact.data)
        return path
