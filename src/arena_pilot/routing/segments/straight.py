"""Straight — drive directly to a ground target, optionally finishing with a dodge."""

from __future__ import annotations

from arena_pilot.behavior.basic import drive_towards, on_flat_ground
from arena_pilot.geometry import Vec2
from arena_pilot.routing.errors import TargetUnreachable
from arena_pilot.routing.estimate import PLANNING_HORIZON, steer_penalty
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
from arena_pilot.routing.route import Route
from arena_pilot.routing.segments.jump_and_dodge import (
    JumpAndDodge,
    dodge_distance,
    dodge_saves_time,
)
from arena_pilot.simulate.car1d import Car1D
from arena_pilot.simulate.constants import CAR_ALMOST_MAX_SPEED
from arena_pilot.simulate.tables import LookupTables, default_tables
from arena_pilot.world.context import Context
from arena_pilot.world.models import ControllerInput

PLANNING_DT = 1.0 / 120.0
ARRIVAL_RADIUS = 50.0


def straight_inputs(
    speed: float, final_speed: float | None, allow_boost: bool
) -> tuple[float, bool]:
    """``(throttle, boost)`` used both when planning and when driving a straight."""
    if final_speed is None or speed < final_speed:
        return 1.0, allow_boost and speed < CAR_ALMOST_MAX_SPEED
    return 0.0, False


class Straight(SegmentPlan):
    """Drive from *start* to *target_loc* in a straight line.

    The approach is simulated with :class:`Car1D` at construction: full
    throttle (and boost, if allowed) while below *final_speed*, coasting
    above it. With no *final_speed* the car simply goes as fast as it can.

    Raises:
        TargetUnreachable: If the car would stall before the target or the
            approach exceeds the planning horizon.
    """

    def __init__(
        self,
        start: CarState,
        target_loc: Vec2,
        final_speed: float | None = None,
        allow_boost: bool = True,
        tables: LookupTables | None = None,
    ) -> None:
        start.require_finite("Straight start")
        self._start = start
        self.target_loc = target_loc
        self.final_speed = final_speed
        self.allow_boost = allow_boost

        offset = target_loc - start.loc.to_2d()
        distance = offset.norm()
        self.heading = offset.angle() if distance > 0.0 else start.rot.yaw

        sim = Car1D(start.vel.to_2d().norm(), tables or default_tables(), boost=start.boost)
        while sim.distance_traveled < distance:
            if sim.time >= PLANNING_HORIZON:
                raise TargetUnreachable(f"{distance:.0f} uu not covered within {PLANNING_HORIZON} s")
            throttle, boost = straight_inputs(sim.speed, final_speed, allow_boost)
            if throttle == 0.0 and sim.speed <= 0.0:
                raise TargetUnreachable(
                    f"stalls {distance - sim.distance_traveled:.0f} uu short of the target"
                )
            sim.step(PLANNING_DT, throttle, boost)

        self._drive_time = sim.time
        self._end_speed = sim.speed
        self._end_boost = sim.boost

    def start(self) -> CarState:
        return self._start

    def end(self) -> CarState:
        return CarState2D(
            loc=self.target_loc,
            yaw=self.heading,
            vel=Vec2.unit(self.heading) * self._end_speed,
            boost=self._end_boost,
        ).to_3d()

    def duration(self) -> float:
        return self._drive_time + steer_penalty(self._start.rot.yaw, self.heading)

    def run(self) -> SegmentRunner:
        return StraightRunner(self)


class StraightRunner(SegmentRunner):
    def __init__(self, plan: Straight) -> None:
        self.plan = plan
        self._axis = Vec2.unit(plan.heading)

    def execute(self, ctx: Context) -> SegmentRunAction:
        me = ctx.me()
        if not on_flat_ground(me):
            ctx.debug.log(self.name, "not on flat ground")
            return Failure()

        to_target = self.plan.target_loc - me.physics.loc_2d()
        if to_target.norm() <= ARRIVAL_RADIUS or to_target.dot(self._axis) <= 0.0:
            return Success()

        steering = drive_towards(ctx, self.plan.target_loc)
        throttle, boost = straight_inputs(
            me.physics.velocity.norm(), self.plan.final_speed, self.plan.allow_boost
        )
        return SegmentYield(
            ControllerInput(
                throttle=throttle,
                steer=steering.steer,
                handbrake=steering.handbrake,
                boost=boost and me.boost > 0.0,
            )
        )


class StraightPlanner:
    """Segment factory for a straight drive to *target_loc*.

    With dodging allowed (the default) and no *final_speed*, the straight is
    cut short where a forward dodge saves time, and the result is a
    :class:`Route` of the shortened straight followed by a
    :class:`JumpAndDodge`.
    """

    def __init__(
        self,
        target_loc: Vec2,
        final_speed: float | None = None,
        allow_boost: bool = True,
        tables: LookupTables | None = None,
    ) -> None:
        self.target_loc = target_loc
        self.final_speed = final_speed
        self.allow_boost = allow_boost
        self._tables = tables
        self._allow_dodging = True

    def allow_dodging(self, allow: bool = True) -> StraightPlanner:
        self._allow_dodging = allow
        return self

    def __call__(self, start: CarState) -> SegmentPlan:
        dodge_loc = None
        if self._allow_dodging and self.final_speed is None:
            dodge_loc = self._find_dodge_loc(start)

        if dodge_loc is None:
            return self._straight(start, self.target_loc)

        approach = self._straight(start, dodge_loc)
        return Route([approach, JumpAndDodge(approach.end(), 0.0)])

    def _straight(self, start: CarState, target_loc: Vec2) -> Straight:
        return Straight(start, target_loc, self.final_speed, self.allow_boost, self._tables)

    def _find_dodge_loc(self, start: CarState) -> Vec2 | None:
        """Where along the straight a forward dodge should begin, if anywhere."""
        start_loc = start.loc.to_2d()
        offset = self.target_loc - start_loc
        distance = offset.norm()
        if distance == 0.0:
            return None
        axis = offset * (1.0 / distance)

        sim = Car1D(start.vel.to_2d().norm(), self._tables or default_tables(), boost=start.boost)
        while sim.time < PLANNING_HORIZON:
            throttle, boost = straight_inputs(sim.speed, None, self.allow_boost)
            sim.step(PLANNING_DT, throttle, boost)

            remaining = distance - sim.distance_traveled
            if remaining <= 0.0:
                return None
            if remaining <= dodge_distance(sim.speed) and dodge_saves_time(
                sim, remaining, boost=self.allow_boost
            ):
                return start_loc + axis * sim.distance_traveled
        return None
