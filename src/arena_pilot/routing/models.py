"""Routing data model: car states, the segment contract and runner outcomes."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from arena_pilot.geometry import Rotator, Vec2, Vec3, normalize_angle
from arena_pilot.routing.errors import NonFiniteState
from arena_pilot.simulate.constants import CAR_REST_Z
from arena_pilot.world.context import Context
from arena_pilot.world.models import CarInfo, ControllerInput

LOC_TOLERANCE = 0.5
VEL_TOLERANCE = 0.5
ROT_TOLERANCE = 1e-3
BOOST_TOLERANCE = 1e-3


@dataclass(frozen=True)
class CarState:
    """Kinematic snapshot of a car at a planned instant."""

    loc: Vec3
    rot: Rotator
    vel: Vec3
    boost: float

    @classmethod
    def from_car(cls, car: CarInfo) -> CarState:
        p = car.physics
        return cls(loc=p.location, rot=p.rotation, vel=p.velocity, boost=car.boost)

    def to_2d(self) -> CarState2D:
        return CarState2D(
            loc=self.loc.to_2d(),
            yaw=self.rot.yaw,
            vel=self.vel.to_2d(),
            boost=self.boost,
        )

    def forward_axis_2d(self) -> Vec2:
        return self.rot.forward_axis_2d()

    def is_finite(self) -> bool:
        return (
            self.loc.is_finite()
            and self.rot.is_finite()
            and self.vel.is_finite()
            and math.isfinite(self.boost)
        )

    def require_finite(self, what: str) -> CarState:
        """Return ``self``, raising :class:`NonFiniteState` if any value is NaN/Inf."""
        if not self.is_finite():
            raise NonFiniteState(f"{what} has non-finite values: {self!r}")
        return self

    def close_to(self, other: CarState) -> bool:
        """Equality within the tolerances used for segment continuity."""
        return (
            (self.loc - other.loc).norm() <= LOC_TOLERANCE
            and (self.vel - other.vel).norm() <= VEL_TOLERANCE
            and abs(normalize_angle(self.rot.yaw - other.rot.yaw)) <= ROT_TOLERANCE
            and abs(normalize_angle(self.rot.pitch - other.rot.pitch)) <= ROT_TOLERANCE
            and abs(normalize_angle(self.rot.roll - other.rot.roll)) <= ROT_TOLERANCE
            and abs(self.boost - other.boost) <= BOOST_TOLERANCE
        )


@dataclass(frozen=True)
class CarState2D:
    """Ground-plane projection of :class:`CarState`.

    Converting to 3D fixes height, pitch, roll and vertical speed to their
    resting values, so ``state2d.to_3d().to_2d() == state2d``.
    """

    loc: Vec2
    yaw: float
    vel: Vec2
    boost: float

    def to_3d(self) -> CarState:
        return CarState(
            loc=self.loc.to_3d(CAR_REST_Z),
            rot=Rotator(pitch=0.0, yaw=self.yaw, roll=0.0),
            vel=self.vel.to_3d(0.0),
            boost=self.boost,
        )


@dataclass(frozen=True)
class SegmentYield:
    """Runner is still going; emit *input* this tick."""

    input: ControllerInput


@dataclass(frozen=True)
class Success:
    """Runner reached the end of its segment."""


@dataclass(frozen=True)
class Failure:
    """Runner can no longer follow its segment."""


SegmentRunAction = SegmentYield | Success | Failure


class SegmentRunner(ABC):
    """Stateful per-tick executor bound to one :class:`SegmentPlan`."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def execute(self, ctx: Context) -> SegmentRunAction:
        """Advance one tick."""


class SegmentPlan(ABC):
    """Immutable description of one primitive motion.

    ``start``/``end``/``duration`` are available for feasibility queries
    before committing; :meth:`run` creates a fresh runner for execution.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def start(self) -> CarState:
        """Declared state at the beginning of the segment."""

    @abstractmethod
    def end(self) -> CarState:
        """Predicted state at the end of the segment."""

    @abstractmethod
    def duration(self) -> float:
        """Predicted time to complete the segment, in seconds."""

    @abstractmethod
    def run(self) -> SegmentRunner:
        """A new runner executing this plan."""
