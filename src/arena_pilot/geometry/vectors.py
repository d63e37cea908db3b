"""Small immutable vector types for arena coordinates.

The arena uses unreal units (uu). The ground plane is ``x``/``y`` and ``z``
points up. Yaw is measured counter-clockwise from the ``+x`` axis, so a car
with yaw ``θ`` faces ``(cos θ, sin θ)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """A point or direction on the ground plane."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Vec2:
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec2) -> float:
        """z component of the 3D cross product; positive when *other* is counter-clockwise."""
        return self.x * other.y - self.y * other.x

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> Vec2:
        """Return the unit vector in this direction.

        Raises:
            ValueError: If the vector has zero length.
        """
        n = self.norm()
        if n == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vec2(self.x / n, self.y / n)

    def rotate(self, angle: float) -> Vec2:
        """Rotate counter-clockwise by *angle* radians."""
        c = math.cos(angle)
        s = math.sin(angle)
        return Vec2(self.x * c - self.y * s, self.x * s + self.y * c)

    def angle(self) -> float:
        """Heading of this vector in radians, in ``(-π, π]``."""
        return math.atan2(self.y, self.x)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_3d(self, z: float = 0.0) -> Vec3:
        return Vec3(self.x, self.y, z)

    @classmethod
    def unit(cls, angle: float) -> Vec2:
        """Unit vector pointing at heading *angle*."""
        return cls(math.cos(angle), math.sin(angle))


@dataclass(frozen=True)
class Vec3:
    """A point or direction in arena space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> Vec3:
        return Vec3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def to_2d(self) -> Vec2:
        """Drop the height component."""
        return Vec2(self.x, self.y)


@dataclass(frozen=True)
class Rotator:
    """Euler orientation in radians, as reported by the simulator."""

    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    def forward_axis_2d(self) -> Vec2:
        """Unit heading on the ground plane (ignores pitch)."""
        return Vec2.unit(self.yaw)

    def is_finite(self) -> bool:
        return math.isfinite(self.pitch) and math.isfinite(self.yaw) and math.isfinite(self.roll)


def signed_angle(a: Vec2, b: Vec2) -> float:
    """Signed angle that rotates *a* onto *b*; counter-clockwise is positive."""
    return math.atan2(a.cross(b), a.dot(b))
