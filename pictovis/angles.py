"""Angle normalization and interpolation. All angles are in radians."""

from __future__ import annotations

import math

PI = math.pi
TWO_PI = 2 * math.pi
HALF_PI = math.pi / 2


def normalize_positive(angle: float) -> float:
    """Normalize an angle to [0, 2π)."""
    norm = angle % TWO_PI
    # Tiny negative inputs round up to exactly 2π.
    if norm >= TWO_PI:
        return 0.0
    return norm


def normalize_signed(angle: float) -> float:
    """Normalize an angle to (-π, π]. Exactly -π maps to +π."""
    norm = normalize_positive(angle)
    return norm - TWO_PI if norm > PI else norm


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_angle(a: float, b: float, t: float) -> float:
    """Interpolate from a to b along the shortest arc, result in [0, 2π).

    When both arcs are equally long (a delta of exactly π) the
    positive-going arc is taken.
    """
    diff = normalize_signed(b - a)
    return normalize_positive(a + diff * t)
