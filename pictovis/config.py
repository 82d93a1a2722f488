"""Engine configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_CANVAS_RADIUS, DEFAULT_GRID_SCALE
from .types import PositionStrategy


class EngineConfig(BaseModel):
    """Fixed per-deployment settings for a TimelineEngine.

    The position strategy is chosen once here and applies to every step of
    every sequence the engine loads; it is never inferred from the data.
    """

    model_config = ConfigDict(frozen=True)

    position_strategy: PositionStrategy = Field(
        default=PositionStrategy.CIRCLE,
        description="How prop x/y are derived from location codes",
    )
    path_radius: float = Field(
        default=DEFAULT_CANVAS_RADIUS,
        gt=0.0,
        description="Radius of the hand path circle (circle strategy)",
    )
    grid_scale: float = Field(
        default=DEFAULT_GRID_SCALE,
        gt=0.0,
        description="Scale applied to unit-grid coordinates (grid strategy)",
    )
