"""Staff rotation formulas, one per motion type.

Each formula returns the prop's own rotation at local progress ``t`` in
[0, 1] within a single step, normalized to [0, 2π). ``turns`` counts extra
full revolutions and is never negative; its sign comes from
``prop_rot_dir`` (cw +1, ccw -1, no_rot/unset 0).
"""

from __future__ import annotations

from .angles import HALF_PI, TWO_PI, normalize_positive, normalize_signed
from .locations import orientation_to_angle
from .types import MotionType, PropAttributes, PropRotDir


def _multiplier(prop_rot_dir: PropRotDir | None) -> int:
    return prop_rot_dir.multiplier if prop_rot_dir else 0


def _turning_delta(
    start_angle: float,
    end_angle: float,
    prop_rot_dir: PropRotDir | None,
    turns: float,
) -> float:
    """Orientation change plus signed turns, unreduced."""
    return end_angle - start_angle + turns * TWO_PI * _multiplier(prop_rot_dir)


def pro_staff_angle(
    start_ori: str | None,
    end_ori: str | None,
    prop_rot_dir: PropRotDir | None,
    turns: float,
    t: float,
) -> float:
    """Prop rotating with its own path.

    Zero turns is a float: a quarter turn over the step in the rotation
    direction, regardless of the end orientation.
    """
    start_angle = orientation_to_angle(start_ori)
    if turns == 0:
        return normalize_positive(start_angle + HALF_PI * _multiplier(prop_rot_dir) * t)

    end_angle = orientation_to_angle(end_ori)
    delta = normalize_signed(_turning_delta(start_angle, end_angle, prop_rot_dir, turns))
    return normalize_positive(start_angle + delta * t)


def anti_staff_angle(
    center_path_angle: float,
    start_ori: str | None,
    end_ori: str | None,
    prop_rot_dir: PropRotDir | None,
    turns: float,
    t: float,
) -> float:
    """Prop counter-rotating against its path; expressed relative to the path.

    Unlike pro, the delta is not reduced, so every whole turn is played out.
    """
    start_angle = orientation_to_angle(start_ori)
    end_angle = orientation_to_angle(end_ori)
    delta = _turning_delta(start_angle, end_angle, prop_rot_dir, turns)
    return normalize_positive(start_angle + delta * t - center_path_angle)


def static_staff_angle(center_path_angle: float, start_ori: str | None) -> float:
    """Start orientation held fixed relative to the grid."""
    return normalize_positive(orientation_to_angle(start_ori) - center_path_angle)


def dash_staff_angle(
    center_path_angle: float,
    start_ori: str | None,
    end_ori: str | None,
    t: float,
) -> float:
    """Shortest-arc orientation change, expressed relative to the grid."""
    start_angle = orientation_to_angle(start_ori)
    end_angle = orientation_to_angle(end_ori)
    delta = normalize_signed(end_angle - start_angle)
    return normalize_positive(start_angle + delta * t - center_path_angle)


def staff_rotation_angle(
    attrs: PropAttributes,
    center_path_angle: float,
    t: float,
) -> float:
    """Dispatch on the step's motion type. Unknown/none motions rest at 0."""
    motion = attrs.motion_type
    if motion == MotionType.PRO:
        return pro_staff_angle(
            attrs.start_ori, attrs.end_ori, attrs.prop_rot_dir, attrs.turns, t,
        )
    elif motion == MotionType.ANTI:
        return anti_staff_angle(
            center_path_angle,
            attrs.start_ori, attrs.end_ori, attrs.prop_rot_dir, attrs.turns, t,
        )
    elif motion == MotionType.STATIC:
        return static_staff_angle(center_path_angle, attrs.start_ori)
    elif motion == MotionType.DASH:
        return dash_staff_angle(center_path_angle, attrs.start_ori, attrs.end_ori, t)
    return 0.0
