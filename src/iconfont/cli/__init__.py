"""Command-line interface for iconfont.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Files or whole icon directories as input
- Codepoint and rename overrides on the command line
- Verbose/quiet output modes
- Detailed error reporting
"""

from iconfont.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
