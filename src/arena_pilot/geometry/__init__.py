"""Shared geometry primitives.

Public API
----------
Vec2, Vec3      - immutable ground-plane / arena vectors
Rotator         - Euler orientation (pitch, yaw, roll)
signed_angle    - counter-clockwise-positive angle between two Vec2
normalize_angle - wrap an angle into [-π, π)
clamp, yaw_diff - scalar helpers used by the control laws
"""

from arena_pilot.geometry.angles import (
    TAU,
    clamp,
    feasible_hit_angle_away,
    feasible_hit_angle_toward,
    normalize_angle,
    yaw_diff,
)
from arena_pilot.geometry.vectors import Rotator, Vec2, Vec3, signed_angle

__all__ = [
    "TAU",
    "Rotator",
    "Vec2",
    "Vec3",
    "clamp",
    "feasible_hit_angle_away",
    "feasible_hit_angle_toward",
    "normalize_angle",
    "signed_angle",
    "yaw_diff",
]
