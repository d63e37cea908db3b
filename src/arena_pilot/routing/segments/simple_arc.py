"""SimpleArc — constant-speed travel along a circle."""

from __future__ import annotations

import math

from arena_pilot.behavior.basic import on_flat_ground
from arena_pilot.geometry import TAU, Vec2, clamp, signed_angle
from arena_pilot.routing.errors import NonFiniteState, VelocityTooLow, WrongGeometry
from arena_pilot.routing.models import (
    CarState,
    CarState2D,
    Failure,
    SegmentPlan,
    SegmentRunAction,
    SegmentRunner,
    SegmentYield,
    Success,
)
from arena_pilot.world.context import Context
from arena_pilot.world.models import ControllerInput

MIN_START_SPEED = 100.0
"""Below this, the constant-speed duration estimate is meaningless."""

RADIUS_TOLERANCE = 1.0
LOOKAHEAD_ANGLE = math.radians(15.0)


class SimpleArc(SegmentPlan):
    """Drive around *center* from *start_loc* to *end_loc*.

    The path starts tangent to *start_vel*, which fixes the direction of
    travel. If the end point lies "behind" that direction the arc goes the
    long way round (more than 180°) instead of reversing.

    Raises:
        VelocityTooLow: If ``|start_vel| < 100``.
        WrongGeometry: If the start and end radii differ by 1 uu or more.
        NonFiniteState: If any input is NaN or infinite.
    """

    def __init__(
        self,
        center: Vec2,
        radius: float,
        start_loc: Vec2,
        start_vel: Vec2,
        start_boost: float,
        end_loc: Vec2,
    ) -> None:
        if not (
            center.is_finite()
            and start_loc.is_finite()
            and start_vel.is_finite()
            and end_loc.is_finite()
            and math.isfinite(radius)
            and math.isfinite(start_boost)
        ):
            raise NonFiniteState(
                f"SimpleArc inputs are not finite: center={center!r} start_loc={start_loc!r} "
                f"start_vel={start_vel!r} end_loc={end_loc!r}"
            )

        if start_vel.norm() < MIN_START_SPEED:
            raise VelocityTooLow(f"start speed {start_vel.norm():.1f} < {MIN_START_SPEED}")

        if abs((start_loc - center).norm() - (end_loc - center).norm()) >= RADIUS_TOLERANCE:
            raise WrongGeometry(
                f"start radius {(start_loc - center).norm():.1f} != "
                f"end radius {(end_loc - center).norm():.1f}"
            )

        # Starting on a tangent, the velocity is ±90° from the radius vector.
        positive = signed_angle(start_vel, start_loc - center) < 0.0

        sweep = signed_angle(start_loc - center, end_loc - center)
        if positive and sweep < 0.0:
            sweep += TAU
        elif not positive and sweep >= 0.0:
            sweep -= TAU

        self.center = center
        self.radius = radius
        self.start_loc = start_loc
        self.start_vel = start_vel
        self.start_boost = start_boost
        self.sweep = sweep

    @classmethod
    def from_state(cls, start: CarState, center: Vec2, end_loc: Vec2) -> SimpleArc:
        """Arc from a planned state, with the radius taken from the start point."""
        loc = start.loc.to_2d()
        return cls(
            center=center,
            radius=(loc - center).norm(),
            start_loc=loc,
            start_vel=start.vel.to_2d(),
            start_boost=start.boost,
            end_loc=end_loc,
        )

    @property
    def direction(self) -> float:
        """``+1.0`` for counter-clockwise travel, ``-1.0`` for clockwise."""
        return math.copysign(1.0, self.sweep)

    def sweep_between(self, start_loc: Vec2, end_loc: Vec2) -> float:
        """Angle from *start_loc* to *end_loc* measured in this arc's direction."""
        result = signed_angle(start_loc - self.center, end_loc - self.center)
        if result < 0.0 and self.sweep >= 0.0:
            return result + TAU
        if result > 0.0 and self.sweep < 0.0:
            return result - TAU
        return result

    def end_loc(self) -> Vec2:
        return self.center + (self.start_loc - self.center).rotate(self.sweep)

    def end_vel(self) -> Vec2:
        return self.start_vel.rotate(self.sweep)

    def start(self) -> CarState:
        return CarState2D(
            loc=self.start_loc,
            yaw=self.start_vel.angle(),
            vel=self.start_vel,
            boost=self.start_boost,
        ).to_3d()

    def end(self) -> CarState:
        end_vel = self.end_vel()
        return CarState2D(
            loc=self.end_loc(),
            yaw=end_vel.angle(),
            vel=end_vel,
            boost=self.start_boost,
        ).to_3d()

    def duration(self) -> float:
        return self.radius * abs(self.sweep) / self.start_vel.norm()

    def run(self) -> SegmentRunner:
        return SimpleArcRunner(self)


class SimpleArcRunner(SegmentRunner):
    """Steers at a point a fixed angle further along the circle."""

    def __init__(self, plan: SimpleArc) -> None:
        self.plan = plan

    def ahead_loc(self, loc: Vec2, angle: float) -> Vec2:
        """Point on the circle *angle* radians ahead of *loc*'s bearing."""
        plan = self.plan
        center_to_ahead = (loc - plan.center).rotate(angle * plan.direction)
        return plan.center + center_to_ahead.normalize() * plan.radius

    def execute(self, ctx: Context) -> SegmentRunAction:
        me = ctx.me()
        if not on_flat_ground(me):
            ctx.debug.log(self.name, "not on flat ground")
            return Failure()

        car_loc = me.physics.loc_2d()
        swept = self.plan.sweep_between(self.plan.start_loc, car_loc)
        if abs(swept) >= abs(self.plan.sweep):
            return Success()

        target_loc = self.ahead_loc(car_loc, LOOKAHEAD_ANGLE)
        angle = signed_angle(me.physics.forward_axis_2d(), target_loc - car_loc)
        return SegmentYield(ControllerInput(throttle=1.0, steer=clamp(angle, -1.0, 1.0)))
