"""CLI application entry point for iconfont.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from iconfont import __version__
from iconfont.cli.output import (
    console,
    print_error,
    print_header,
    print_request_info,
    print_step,
    print_success,
    print_written,
)
from iconfont.config import (
    DEFAULT_BASE_SELECTOR,
    DEFAULT_CLASS_PREFIX,
    DEFAULT_FILE_OUTPUTS,
    DEFAULT_START_CODEPOINT,
    AssemblyOptions,
    CssOptions,
    FontFormat,
    GenerationRequest,
    LoggingConfig,
    TranscodeOptions,
)
from iconfont.core import IconFontGenerator
from iconfont.exceptions import GlyphSourceError, IconFontError
from iconfont.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="iconfont",
    help="Build an icon font and stylesheet from SVG files.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]iconfont[/bold blue] v{__version__}")
        raise typer.Exit()


def parse_types(value: str) -> list[FontFormat]:
    """Parse a comma-separated list of font formats.

    Raises:
        UnknownFormatError: If a name is not a known format
    """
    return [FontFormat.parse(item) for item in value.split(",") if item.strip()]


def parse_codepoint(value: str) -> int:
    """Parse a codepoint given in decimal or with a 0x/U+ prefix."""
    value = value.strip()
    if value[:2].lower() == "u+":
        return int(value[2:], 16)
    return int(value, 0)


def parse_assignments(values: list[str] | None, option: str) -> dict[str, str]:
    """Parse repeated NAME=VALUE options into a dict.

    Raises:
        typer.BadParameter: If an entry has no '='
    """
    result: dict[str, str] = {}
    for entry in values or []:
        name, sep, value = entry.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"expected NAME=VALUE, got '{entry}'", param_hint=option)
        result[name] = value
    return result


def collect_icon_files(paths: list[Path]) -> list[Path]:
    """Expand directories to their SVG files, sorted by name."""
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.glob("*.svg")))
        else:
            files.append(path)
    return files


@app.command()
def build(
    icons: Annotated[
        list[Path],
        typer.Argument(
            help="SVG icon files or directories containing them",
            show_default=False,
        ),
    ],
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Font name, also the output file stem"),
    ] = "icon",
    dest: Annotated[
        Path,
        typer.Option("--dest", "-d", help="Output directory"),
    ] = Path("."),
    types: Annotated[
        str,
        typer.Option(
            "--types",
            "-t",
            help="Comma-separated font formats (svg,ttf,woff,woff2)",
        ),
    ] = ",".join(fmt.value for fmt in DEFAULT_FILE_OUTPUTS),
    start_codepoint: Annotated[
        str,
        typer.Option(
            "--start-codepoint",
            help="Auto-assigned codepoints start after this value",
        ),
    ] = hex(DEFAULT_START_CODEPOINT),
    codepoint: Annotated[
        list[str] | None,
        typer.Option(
            "--codepoint",
            "-c",
            help="Explicit codepoint as NAME=CODEPOINT (repeatable)",
        ),
    ] = None,
    rename: Annotated[
        list[str] | None,
        typer.Option(
            "--rename",
            "-r",
            help="Icon name for a file as FILENAME=NAME (repeatable)",
        ),
    ] = None,
    fixed_width: Annotated[
        bool,
        typer.Option("--fixed-width", help="Give every glyph the width of the widest icon"),
    ] = False,
    center_horizontally: Annotated[
        bool,
        typer.Option("--center-horizontally", help="Center glyphs horizontally"),
    ] = False,
    center_vertically: Annotated[
        bool,
        typer.Option("--center-vertically", help="Center glyphs vertically"),
    ] = False,
    normalize: Annotated[
        bool,
        typer.Option("--normalize", help="Scale every icon to the font height"),
    ] = False,
    font_height: Annotated[
        float | None,
        typer.Option("--font-height", help="Font height (default: tallest icon)", min=1),
    ] = None,
    ascent: Annotated[
        float | None,
        typer.Option("--ascent", help="Font ascent (default: font height minus descent)"),
    ] = None,
    descent: Annotated[
        float,
        typer.Option("--descent", help="Font descent, as a positive value", min=0),
    ] = 0,
    round_: Annotated[
        float | None,
        typer.Option("--round", help="Round path coordinates to 1/ROUND"),
    ] = None,
    copyright_: Annotated[
        str | None,
        typer.Option("--copyright", help="Copyright notice"),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", help="Font description"),
    ] = None,
    font_version: Annotated[
        str | None,
        typer.Option("--font-version", help="Font version string"),
    ] = None,
    url: Annotated[
        str | None,
        typer.Option("--url", help="Manufacturer URL"),
    ] = None,
    timestamp: Annotated[
        int | None,
        typer.Option("--timestamp", help="Unix timestamp for font creation time", min=0),
    ] = None,
    base_selector: Annotated[
        str,
        typer.Option("--base-selector", help="Selector shared by all icons"),
    ] = DEFAULT_BASE_SELECTOR,
    class_prefix: Annotated[
        str,
        typer.Option("--class-prefix", help="Prefix of each icon class"),
    ] = DEFAULT_CLASS_PREFIX,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose console output"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build an icon font and stylesheet from SVG icons.

    Each icon gets a codepoint, the icons are bundled into a font in the
    requested formats, and a stylesheet maps one class per icon to its
    codepoint.

    Example:
        iconfont icons/ --name icon --dest dist

    This will create dist/icon.css, dist/icon.woff2 and dist/icon.woff.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    try:
        font_types = parse_types(types)
        start = parse_codepoint(start_codepoint)
        codepoints = {
            icon: parse_codepoint(value)
            for icon, value in parse_assignments(codepoint, "--codepoint").items()
        }
        renames = parse_assignments(rename, "--rename")
    except IconFontError as e:
        print_error(str(e), details="Valid formats: svg, ttf, woff, woff2")
        raise typer.Exit(code=1)
    except ValueError as e:
        print_error(f"Invalid codepoint: {e}")
        raise typer.Exit(code=1)

    files = collect_icon_files(icons)
    missing = [path for path in files if not path.is_file()]
    if missing:
        print_error(
            f"Icon file not found: {missing[0]}",
            details=f"The file '{missing[0]}' does not exist or is not a file.",
        )
        raise typer.Exit(code=1)

    logging_config = LoggingConfig(
        log_file=log_file,
        log_level="INFO" if verbose else log_level,
    )
    logger = configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
        quiet=quiet,
    )

    assembly_values = {
        "fixed_width": fixed_width,
        "center_horizontally": center_horizontally,
        "center_vertically": center_vertically,
        "normalize": normalize,
        "font_height": font_height,
        "ascent": ascent,
        "descent": descent,
        "round": round_,
    }
    transcode_values = {
        "copyright": copyright_,
        "description": description,
        "version": font_version,
        "url": url,
        "ts": timestamp,
    }

    try:
        request = GenerationRequest(
            font_name=name,
            files=files,
            dest=dest,
            types=font_types,
            start_codepoint=start,
            codepoints=codepoints,
            renames=renames,
            assembly=AssemblyOptions(
                **{key: value for key, value in assembly_values.items() if value is not None}
            ),
            transcode=TranscodeOptions(
                **{key: value for key, value in transcode_values.items() if value is not None}
            ),
            css=CssOptions(base_selector=base_selector, class_prefix=class_prefix),
        )
    except ValidationError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        print_request_info(name, len(files), [fmt.value for fmt in font_types])
        print_step("Generating")

    generator = IconFontGenerator(request, logger=logger)

    try:
        stats = generator.generate(
            progress_callback=None if quiet else lambda path, size: print_written(str(path), size)
        )
    except GlyphSourceError as e:
        print_error(f"Could not read icon: {e.path}", details=e.reason)
        raise typer.Exit(code=1)
    except IconFontError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write output: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        print_success(
            total_time_s=stats.duration_seconds,
            glyphs=stats.glyph_count,
            files=len(stats.written),
            total_bytes=stats.total_bytes,
        )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
