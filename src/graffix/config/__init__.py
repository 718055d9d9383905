"""Configuration management for graffix.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, style files or defaults.

Key classes:
- RasterConfig: Rasterization and silhouette settings
- KerningConfig: Overlap search settings
- CacheConfig: Glyph cache settings
- LayoutConfig: Display fitting settings
- LoggingConfig: Logging settings
- GraffixSettings: Main application settings
- StyleConfiguration: Effect toggles, colors and parameters
"""

from graffix.config.settings import (
    STRAIGHT_MODE,
    CacheConfig,
    GraffixSettings,
    KerningConfig,
    LayoutConfig,
    LoggingConfig,
    RasterConfig,
    StyleConfiguration,
    get_default_settings,
)

__all__ = [
    "STRAIGHT_MODE",
    "CacheConfig",
    "GraffixSettings",
    "KerningConfig",
    "LayoutConfig",
    "LoggingConfig",
    "RasterConfig",
    "StyleConfiguration",
    "get_default_settings",
]
