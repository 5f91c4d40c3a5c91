"""Rich console output helpers for the CLI.

This module provides user-friendly console output using the Rich library.
"""

from rich.console import Console
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]iconfont[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_request_info(font_name: str, icon_count: int, formats: list[str]) -> None:
    """Print what is about to be generated.

    Args:
        font_name: Font family name
        icon_count: Number of input icons
        formats: Requested font formats
    """
    line = Text("  ")
    line.append(font_name, style="bold")
    console.print(line)
    formats_str = ", ".join(formats) if formats else "none"
    console.print(f"  {icon_count} icons {SYM_DOT} css, {formats_str}")


def print_written(path: str, size: int) -> None:
    """Print one written file.

    Args:
        path: Path of the written file
        size: File size in bytes
    """
    line = Text(f"  {SYM_OK} ")
    line.append(path)
    line.append(f" ({format_size(size)})")
    console.print(line)


def format_size(size_bytes: int) -> str:
    """Format a byte count in human-readable form (e.g. "12 KB")."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(total_time_s: float, glyphs: int, files: int, total_bytes: int) -> None:
    """Print success message with summary.

    Args:
        total_time_s: Total run time in seconds
        glyphs: Number of glyphs in the font
        files: Number of files written
        total_bytes: Combined size of the written files
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")
    console.print(
        f"  {glyphs} glyphs {SYM_DOT} {files} files {SYM_DOT} {format_size(total_bytes)}"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
