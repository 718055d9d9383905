"""Configuration settings for Graffix."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from graffix.domain.layers import (
    ContentStyle,
    HaloStyle,
    LayerStyles,
    OutlineStyle,
    ShadowHaloStyle,
    ShadowStyle,
    ShineStyle,
    StrokeStyle,
)

STRAIGHT_MODE = "straight"


class RasterConfig(BaseModel):
    """Configuration for glyph rasterization and silhouette extraction."""

    resolution: int = Field(
        default=200,
        ge=16,
        le=2048,
        description="Square raster size in pixels",
    )
    sampling_stride: int = Field(
        default=2,
        ge=1,
        le=8,
        description="Sample every Nth pixel on both axes",
    )
    alpha_threshold: int = Field(
        default=20,
        ge=0,
        le=254,
        description="Alpha above which a sampled pixel counts as opaque (0-255)",
    )
    space_width: int = Field(
        default=70,
        ge=1,
        description="Width of the blank glyph used for the space character",
    )
    max_interpolation_gap: int = Field(
        default=10,
        ge=1,
        description="Column gaps narrower than this are interpolated in the profile",
    )


class KerningConfig(BaseModel):
    """Configuration for the overlap search between adjacent glyphs."""

    step: float = Field(
        default=0.005,
        gt=0.0,
        le=0.1,
        description="Decrement applied to the candidate overlap fraction",
    )
    collision_stride: int = Field(
        default=2,
        ge=1,
        le=8,
        description="Column stride used when probing for collisions",
    )
    density_threshold: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Minimum column density on both sides to count as a collision",
    )
    exception_factor: float = Field(
        default=0.7,
        gt=0.0,
        le=1.0,
        description="Multiplier applied to max overlap for exception letter pairs",
    )


class CacheConfig(BaseModel):
    """Configuration for the rasterized glyph cache."""

    ttl_seconds: float = Field(
        default=30 * 60,
        gt=0.0,
        description="Lifetime of a cache entry in seconds",
    )


class LayoutConfig(BaseModel):
    """Configuration for display scale suggestions."""

    viewport_width: float = Field(
        default=800.0,
        gt=0.0,
        description="Width of the display area the layout is fitted into",
    )
    viewport_height: float = Field(
        default=300.0,
        gt=0.0,
        description="Height of the display area the layout is fitted into",
    )
    fit_margin: float = Field(
        default=0.8,
        gt=0.0,
        le=1.0,
        description="Fraction of the fitted scale kept as margin for effects",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GraffixSettings(BaseModel):
    """Main application settings."""

    raster: RasterConfig = Field(default_factory=RasterConfig)
    kerning: KerningConfig = Field(default_factory=KerningConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class StyleConfiguration(BaseModel):
    """User-controllable effect toggles, colors and parameters.

    Accepts both the camelCase keys used by style files and snake_case
    field names. Disabling an effect only removes its derived layer; the
    glyph geometry itself is always rendered by the content layer.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    background_enabled: bool = Field(default=False, alias="backgroundEnabled")
    background_color: str = Field(default="#ffffff", alias="backgroundColor")

    fill_enabled: bool = Field(default=True, alias="fillEnabled")
    fill_color: str = Field(default="#ffffff", alias="fillColor")

    stroke_enabled: bool = Field(default=False, alias="strokeEnabled")
    stroke_color: str = Field(default="#ff0000", alias="strokeColor")
    stroke_width: float = Field(default=45.0, ge=0.0, alias="strokeWidth")

    outline_enabled: bool = Field(default=True, alias="outlineEnabled")
    outline_color: str = Field(default="#000000", alias="outlineColor")
    outline_width: float = Field(default=75.0, ge=0.0, alias="outlineWidth")

    halo_enabled: bool = Field(default=False, alias="haloEnabled")
    halo_color: str = Field(default="#3f51b5", alias="haloColor")
    halo_width: float = Field(default=15.0, ge=0.0, alias="haloWidth")

    shine_enabled: bool = Field(default=False, alias="shineEnabled")
    shine_color: str = Field(default="#ffffff", alias="shineColor")
    shine_opacity: float = Field(default=1.0, ge=0.0, le=1.0, alias="shineOpacity")

    shadow_enabled: bool = Field(default=False, alias="shadowEnabled")
    shadow_offset_x: float = Field(default=-15.0, alias="shadowOffsetX")
    shadow_offset_y: float = Field(default=8.0, alias="shadowOffsetY")

    def layer_styles(self) -> LayerStyles:
        """Split this record into per-layer render-mode variants.

        Each variant carries only the fields its layer needs. A variant is
        None when its layer is not rendered under this configuration.

        Returns:
            LayerStyles with content, halo, shadow-halo, shadow and outline
            variants
        """
        outline = (
            OutlineStyle(color=self.outline_color, width=self.outline_width)
            if self.outline_enabled
            else None
        )
        offset = (self.shadow_offset_x, self.shadow_offset_y)

        halo = None
        if self.halo_enabled:
            halo = HaloStyle(
                color=self.halo_color,
                width=self.halo_width,
                outline=outline,
            )

        shadow = None
        shadow_halo = None
        if self.shadow_enabled:
            shadow = ShadowStyle(
                color=self.outline_color,
                outline_width=self.outline_width if self.outline_enabled else None,
                offset=offset,
            )
            if self.halo_enabled:
                shadow_halo = ShadowHaloStyle(
                    color=self.halo_color,
                    width=self.outline_width * 0.5 + self.halo_width * 2,
                    offset=offset,
                )

        content = ContentStyle(
            fill_color=self.fill_color if self.fill_enabled else "#000000",
            stroke=(
                StrokeStyle(color=self.stroke_color, width=self.stroke_width)
                if self.stroke_enabled
                else None
            ),
            shine=(
                ShineStyle(color=self.shine_color, opacity=self.shine_opacity)
                if self.shine_enabled
                else None
            ),
        )

        return LayerStyles(
            content=content,
            halo=halo,
            shadow_halo=shadow_halo,
            shadow=shadow,
            outline=outline,
        )


def get_default_settings() -> GraffixSettings:
    """Get default application settings."""
    return GraffixSettings()
