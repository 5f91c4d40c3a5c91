"""Generation pipeline orchestration.

This module sequences a full icon font run: codepoint allocation, SVG
font assembly, transcoding, stylesheet rendering and file output.
Transcoding and file writes for different formats run in a thread pool;
every other step is sequential and the first error aborts the run.

Key components:
- IconFontGenerator: Main orchestrator class
- generate: Library entry point
"""

import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import structlog

from iconfont.config import FontFormat, GenerationRequest
from iconfont.core.codepoints import allocate_codepoints, build_glyph_records, resolve_names
from iconfont.core.css import render_css
from iconfont.domain import Artifact, GlyphRecord
from iconfont.io import FontTranscoder, OutputWriter, SvgFontAssembler
from iconfont.utils import GenerationStats

CSS_EXTENSION = "css"

# Formats derived from the TrueType build.
TTF_BASED_FORMATS = frozenset({FontFormat.TTF, FontFormat.WOFF, FontFormat.WOFF2})


class IconFontGenerator:
    """Orchestrates one icon font generation run.

    Manages the complete workflow:
    1. Create the destination directory
    2. Resolve icon names and allocate codepoints
    3. Assemble the SVG font from all icons
    4. Transcode into each requested format
    5. Render the stylesheet
    6. Write the stylesheet and every font file

    Partial output is left in place when a step fails.

    Example:
        request = GenerationRequest(font_name="icon", files=files, dest=Path("dist"))
        stats = IconFontGenerator(request).generate()
    """

    def __init__(
        self,
        request: GenerationRequest,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            request: Configuration of the run
            logger: Logger to use (default: the "iconfont" logger)
        """
        self.request = request
        self.logger = logger or structlog.get_logger("iconfont")
        self.writer = OutputWriter(request.dest, request.font_name)
        self.assembler = SvgFontAssembler(request.font_name, request.assembly)

    def allocate(self) -> tuple[dict[str, int], list[GlyphRecord]]:
        """Resolve icon names and assign codepoints.

        Returns:
            Tuple of (codepoint table, glyph records)
        """
        request = self.request
        named_sources = resolve_names(request.icon_sources(), request.renames)
        codepoints = allocate_codepoints(
            (name for _, name in named_sources),
            overrides=request.codepoints,
            start=request.start_codepoint,
        )
        records = build_glyph_records(named_sources, codepoints)
        return codepoints, records

    def generate(
        self,
        progress_callback: Callable[[Path, int], None] | None = None,
    ) -> GenerationStats:
        """Run the pipeline.

        Args:
            progress_callback: Optional callback(path, size) called once per
                written file

        Returns:
            GenerationStats with counts, written files and timing

        Raises:
            OSError: If the destination or a file cannot be written
            GlyphSourceError: If an icon cannot be read
            TranscodeError: If a font format cannot be produced
        """
        request = self.request
        stats = GenerationStats()
        stats.start_time = time.time()

        self.logger.info(
            "Starting font generation",
            font=request.font_name,
            dest=str(request.dest),
            icons=len(request.files),
            types=[fmt.value for fmt in request.types],
        )

        self.writer.ensure_destination()

        codepoints, records = self.allocate()
        stats.icon_count = len(request.files)
        stats.glyph_count = len(records)

        svg_font = self.assembler.assemble(records)

        artifacts = self._transcode_all(FontTranscoder(svg_font, request.transcode))
        css = render_css(request.font_name, request.types, request.css, codepoints)
        artifacts.insert(0, Artifact(extension=CSS_EXTENSION, data=css))

        for path, size in self._write_all(artifacts):
            stats.written.append((path, size))
            self.logger.info("Artifact written", path=str(path), size=size)
            if progress_callback is not None:
                progress_callback(path, size)

        stats.end_time = time.time()

        self.logger.info(
            "Generation complete",
            font=request.font_name,
            glyphs=stats.glyph_count,
            files=len(stats.written),
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _transcode_all(self, transcoder: FontTranscoder) -> list[Artifact]:
        """Produce an artifact for every requested format, in request order."""
        formats = self.request.types
        if not formats:
            return []

        # Built once up front so concurrent conversions share it.
        if TTF_BASED_FORMATS.intersection(formats):
            _ = transcoder.ttf

        with ThreadPoolExecutor(max_workers=len(formats)) as executor:
            return list(executor.map(transcoder.transcode, formats))

    def _write_all(self, artifacts: list[Artifact]) -> list[tuple[Path, int]]:
        """Write all artifacts concurrently.

        Returns:
            List of (path, size) in artifact order
        """
        with ThreadPoolExecutor(max_workers=len(artifacts)) as executor:
            paths = list(executor.map(self.writer.write, artifacts))
        return [(path, artifact.size) for path, artifact in zip(paths, artifacts)]


def generate(request: GenerationRequest) -> None:
    """Generate an icon font and stylesheet as described by ``request``.

    Raises:
        OSError: If the destination or a file cannot be written
        GlyphSourceError: If an icon cannot be read
        TranscodeError: If a font format cannot be produced
    """
    IconFontGenerator(request).generate()
