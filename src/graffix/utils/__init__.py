"""Utility functions for graffix.

This module provides utility functions including:

- Logging setup and configuration
- Generation statistics
"""

from graffix.utils.logging import (
    GenerationLogger,
    GenerationStats,
    configure_logging,
)

__all__ = [
    "GenerationLogger",
    "GenerationStats",
    "configure_logging",
]
