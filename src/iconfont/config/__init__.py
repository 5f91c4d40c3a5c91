"""Configuration management for iconfont.

This module provides configuration management using Pydantic models.
A generation run is described by a single immutable GenerationRequest;
defaults are plain module constants injected as field defaults.

Key classes:
- FontFormat: Output font formats
- AssemblyOptions: Icon-to-font assembly settings
- TranscodeOptions: Binary font metadata
- CssOptions: Stylesheet settings
- LoggingConfig: Logging settings
- GenerationRequest: Full configuration for one run
"""

from iconfont.config.settings import (
    CSS_FORMAT_ORDER,
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
    get_default_request,
    is_font_codepoint,
)

__all__ = [
    "CSS_FORMAT_ORDER",
    "DEFAULT_BASE_SELECTOR",
    "DEFAULT_CLASS_PREFIX",
    "DEFAULT_FILE_OUTPUTS",
    "DEFAULT_START_CODEPOINT",
    "AssemblyOptions",
    "CssOptions",
    "FontFormat",
    "GenerationRequest",
    "LoggingConfig",
    "TranscodeOptions",
    "get_default_request",
    "is_font_codepoint",
]
