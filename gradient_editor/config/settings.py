"""
Editor Settings Module
Runtime settings loaded from the environment (GRADIENT_EDITOR_*) or a .env file.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.color_stops import DEFAULT_STOPS, ColorStopCollection, build_collection
from ..core.geometry import LineSegment, Point
from ..core.hit_testing import HitRadii


class InitialStop(BaseModel):
    """A color stop the store starts with."""
    rgba: Tuple[int, int, int, float] = Field(..., description="r, g, b in 0-255 and alpha in 0-1")
    offset: float = Field(..., ge=0.0, le=100.0, description="Position along the axis in percent")

    @field_validator('rgba')
    @classmethod
    def _check_channels(cls, value):
        r, g, b, a = value
        if not all(0 <= channel <= 255 for channel in (r, g, b)):
            raise ValueError(f"color channels must be within 0-255, got {value}")
        if not 0.0 <= a <= 1.0:
            raise ValueError(f"alpha must be within 0-1, got {a}")
        return value


class EditorSettings(BaseSettings):
    """
    Gradient editor settings.
    Every field can be overridden with a GRADIENT_EDITOR_<FIELD> variable.
    """
    model_config = SettingsConfigDict(
        env_prefix="GRADIENT_EDITOR_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    canvas_width: int = Field(600, ge=1, description="Canvas width in host units")
    canvas_height: int = Field(600, ge=1, description="Canvas height in host units")

    start: Tuple[float, float] = Field((0.0, 0.0), description="Initial start handle position")
    end: Tuple[float, float] = Field((600.0, 600.0), description="Initial end handle position")

    handle_radius: float = Field(8.0, gt=0.0, description="Hit radius of the axis handles")
    stop_radius: float = Field(8.0, gt=0.0, description="Hit radius of idle color stops")
    active_stop_radius: float = Field(9.0, gt=0.0, description="Hit radius of the dragged stop")

    initial_stops: List[InitialStop] = Field(
        default_factory=lambda: [InitialStop(rgba=rgba, offset=offset) for rgba, offset in DEFAULT_STOPS],
        description="Color stops loaded into the store at startup",
    )

    view_preset: str = Field("default", description="Name of the view style preset")

    log_dir: Optional[Path] = Field(None, description="Directory for log files; defaults to ./logs")
    log_level: str = Field("INFO", description="File log level")
    console_log_level: str = Field("WARNING", description="Console log level")
    log_keep_count: int = Field(5, ge=1, description="Number of old log files kept")

    def initial_segment(self) -> LineSegment:
        return LineSegment(Point(*self.start), Point(*self.end))

    def initial_colors(self) -> ColorStopCollection:
        return build_collection((stop.rgba, stop.offset) for stop in self.initial_stops)

    def hit_radii(self) -> HitRadii:
        return HitRadii(self.handle_radius, self.stop_radius, self.active_stop_radius)


def load_settings(**overrides) -> EditorSettings:
    """Load settings from the environment, applying keyword overrides."""
    return EditorSettings(**overrides)
