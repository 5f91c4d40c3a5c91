"""Utility functions for iconfont.

This module provides logging setup and run statistics.
"""

from iconfont.utils.logging import GenerationStats, configure_logging

__all__ = [
    "GenerationStats",
    "configure_logging",
]
