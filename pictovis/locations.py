"""Symbolic location/orientation codes mapped to angles and grid points.

Screen convention: x grows east, y grows south, so ``s`` sits at +π/2.
Every lookup is total: unknown or missing codes resolve to a neutral value
(angle 0, point (0, 0)) instead of raising.
"""

from __future__ import annotations

import math

from .angles import HALF_PI, PI, lerp

_DIAG = math.sqrt(2) / 2

LOCATION_ANGLES: dict[str, float] = {
    "e": 0.0,
    "se": PI / 4,
    "s": HALF_PI,
    "sw": 3 * PI / 4,
    "w": PI,
    "nw": -3 * PI / 4,
    "n": -HALF_PI,
    "ne": -PI / 4,
}

ORIENTATION_ANGLES: dict[str, float] = {
    "in": PI,
    "out": 0.0,
    "n": -HALF_PI,
    "e": 0.0,
    "s": HALF_PI,
    "w": PI,
}

# Hand positions on the unit grid; diamond points on the axes, box points
# on the diagonals.
LOCATION_COORDINATES: dict[str, tuple[float, float]] = {
    "n": (0.0, -1.0),
    "ne": (_DIAG, -_DIAG),
    "e": (1.0, 0.0),
    "se": (_DIAG, _DIAG),
    "s": (0.0, 1.0),
    "sw": (-_DIAG, _DIAG),
    "w": (-1.0, 0.0),
    "nw": (-_DIAG, -_DIAG),
}

ORIGIN = (0.0, 0.0)


def _key(code: str | None) -> str:
    return code.strip().lower() if code else ""


def location_to_angle(loc: str | None) -> float:
    return LOCATION_ANGLES.get(_key(loc), 0.0)


def orientation_to_angle(ori: str | None) -> float:
    return ORIENTATION_ANGLES.get(_key(ori), 0.0)


def location_to_coordinates(loc: str | None) -> tuple[float, float]:
    return LOCATION_COORDINATES.get(_key(loc), ORIGIN)


def lerp_coordinates(
    a: tuple[float, float],
    b: tuple[float, float],
    t: float,
) -> tuple[float, float]:
    """Straight-line interpolation between two grid points."""
    return (lerp(a[0], b[0], t), lerp(a[1], b[1], t))
