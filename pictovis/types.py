"""Core data types for the pictograph animator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import MAX_SEQUENCE_STEPS


class SequenceFormatError(ValueError):
    """Raised when raw sequence data cannot be turned into a SequenceData."""


class MotionType(str, Enum):
    PRO = "pro"
    ANTI = "anti"
    STATIC = "static"
    DASH = "dash"
    NONE = "none"


class PropRotDir(str, Enum):
    CW = "cw"
    CCW = "ccw"
    NO_ROT = "no_rot"

    @property
    def multiplier(self) -> int:
        return {
            PropRotDir.CW: 1,
            PropRotDir.CCW: -1,
            PropRotDir.NO_ROT: 0,
        }[self]


class PropColor(Enum):
    BLUE = "blue"
    RED = "red"

    @property
    def attributes_key(self) -> str:
        return f"{self.value}_attributes"


class PositionStrategy(str, Enum):
    CIRCLE = "circle"  # x, y from the center path angle on a fixed radius
    GRID = "grid"  # x, y from the location grid, angle from the vector


class PropAttributes(BaseModel):
    """Motion descriptor for one prop within one step."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    start_loc: str | None = None
    end_loc: str | None = None
    start_ori: str | None = None
    end_ori: str | None = None
    prop_rot_dir: PropRotDir | None = None
    turns: float = Field(default=0.0, ge=0.0)
    motion_type: MotionType = MotionType.NONE

    @field_validator("prop_rot_dir", mode="before")
    @classmethod
    def _lenient_rot_dir(cls, v: Any) -> Any:
        # Unknown directions contribute no rotation.
        if isinstance(v, str):
            v = v.strip().lower()
            return v if v in {d.value for d in PropRotDir} else None
        return v

    @field_validator("motion_type", mode="before")
    @classmethod
    def _lenient_motion_type(cls, v: Any) -> Any:
        if v is None:
            return MotionType.NONE
        if isinstance(v, str):
            v = v.strip().lower()
            return v if v in {m.value for m in MotionType} else MotionType.NONE
        return v

    @field_validator("turns", mode="before")
    @classmethod
    def _missing_turns(cls, v: Any) -> Any:
        return 0.0 if v is None else v


class SequenceStep(BaseModel):
    """One beat of the timeline."""

    model_config = ConfigDict(frozen=True, extra="allow")

    beat: int = Field(ge=0)
    letter: str | None = None
    start_pos: str | None = None
    end_pos: str | None = None
    blue_attributes: PropAttributes
    red_attributes: PropAttributes

    def attributes_for(self, color: PropColor) -> PropAttributes:
        if color == PropColor.BLUE:
            return self.blue_attributes
        return self.red_attributes


class SequenceMeta(BaseModel):
    """Sequence header. Unknown fields are kept."""

    model_config = ConfigDict(frozen=True, extra="allow")

    word: str | None = None
    author: str | None = None
    level: int | str | None = None
    prop_type: str | None = None
    grid_mode: str | None = None


@dataclass(frozen=True)
class SequenceData:
    meta: SequenceMeta
    steps: tuple[SequenceStep, ...] = ()

    @classmethod
    def from_raw(cls, raw: Any) -> SequenceData:
        """Validate a decoded ``[meta, step, step, ...]`` JSON array.

        Raises:
            SequenceFormatError: if the array is empty, headerless, has an
                invalid step, too many steps, or non-increasing beats.
        """
        if not isinstance(raw, (list, tuple)) or not raw:
            raise SequenceFormatError("Sequence must be a non-empty array")

        header, *raw_steps = raw
        if not isinstance(header, dict):
            raise SequenceFormatError("Sequence header must be an object")
        if any(c.attributes_key in header for c in PropColor):
            raise SequenceFormatError("Sequence is missing its header record")
        if len(raw_steps) > MAX_SEQUENCE_STEPS:
            raise SequenceFormatError(
                f"Sequence has {len(raw_steps)} steps (max {MAX_SEQUENCE_STEPS})"
            )

        try:
            meta = SequenceMeta.model_validate(header)
            steps = tuple(SequenceStep.model_validate(s) for s in raw_steps)
        except ValidationError as e:
            raise SequenceFormatError(str(e)) from e

        for prev, step in zip(steps, steps[1:]):
            if step.beat <= prev.beat:
                raise SequenceFormatError(
                    f"Beats must be strictly increasing: {prev.beat} then {step.beat}"
                )
        return cls(meta=meta, steps=steps)

    def to_raw(self) -> list[dict[str, Any]]:
        """Inverse of from_raw, for re-embedding."""
        return [
            self.meta.model_dump(mode="json", exclude_none=True),
            *(s.model_dump(mode="json", exclude_none=True) for s in self.steps),
        ]


@dataclass
class PropState:
    center_path_angle: float = 0.0  # radians, position of the hand around the center
    staff_rotation_angle: float = 0.0  # radians, the prop's own spin
    x: float = 0.0
    y: float = 0.0

    def copy(self) -> PropState:
        return PropState(self.center_path_angle, self.staff_rotation_angle, self.x, self.y)


@dataclass
class Pose:
    beat: float
    props: dict[PropColor, PropState] = field(default_factory=dict)

    @property
    def blue(self) -> PropState:
        return self.props[PropColor.BLUE]

    @property
    def red(self) -> PropState:
        return self.props[PropColor.RED]

    def copy(self) -> Pose:
        return Pose(
            beat=self.beat,
            props={color: ps.copy() for color, ps in self.props.items()},
        )
