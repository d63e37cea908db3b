"""JumpAndDodge — fixed-timing jump followed by a planar dodge."""

from __future__ import annotations

import math

from arena_pilot.behavior.action import Priority, Return, Yield
from arena_pilot.behavior.basic import Yielder
from arena_pilot.behavior.higher_order import Chain
from arena_pilot.geometry import Vec2, yaw_diff
from arena_pilot.routing.errors import NonFiniteState, TargetUnreachable
from arena_pilot.routing.estimate import time_to_cover
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
from arena_pilot.simulate.car1d import Car1D
from arena_pilot.simulate.constants import CAR_ALMOST_MAX_SPEED
from arena_pilot.world.context import Context
from arena_pilot.world.models import NEUTRAL_INPUT, CarInfo, ControllerInput

JUMP_TIME = 6.0 / 120.0
WAIT_TIME = 6.0 / 120.0
DODGE_INPUT_TIME = 6.0 / 120.0
FLOAT_TIME = 4.0 / 3.0
"""Time from the dodge input until the car is back on its wheels (rough)."""

DODGE_IMPULSE = 500.0
"""Planar speed added by the dodge. Known to be low; it is an exact lower bound."""

MIN_DODGE_SPEED = 1300.0
"""Below this, accelerating beats dodging."""

MAX_DODGE_PITCH = math.pi / 12.0
MAX_DODGE_MISALIGNMENT = math.pi / 60.0


class JumpAndDodge(SegmentPlan):
    """Jump, wait, dodge in *direction* and float until landing.

    Args:
        start: State at the moment jump is pressed.
        direction: Dodge direction in radians relative to the car's facing
            (0 = forward, positive = towards increasing yaw).
    """

    def __init__(self, start: CarState, direction: float = 0.0) -> None:
        self._start = start
        self.direction = direction

    def start(self) -> CarState:
        return self._start

    def end(self) -> CarState:
        start = self._start.require_finite("JumpAndDodge start")
        if not math.isfinite(self.direction):
            raise NonFiniteState(f"dodge direction is {self.direction}")

        vel = start.vel.to_2d()
        impulse = start.forward_axis_2d().rotate(self.direction) * DODGE_IMPULSE
        dodge_vel = vel + impulse
        loc = start.loc.to_2d() + vel * (JUMP_TIME + WAIT_TIME) + dodge_vel * FLOAT_TIME
        return CarState2D(loc=loc, yaw=start.rot.yaw, vel=dodge_vel, boost=start.boost).to_3d()

    def duration(self) -> float:
        return JUMP_TIME + WAIT_TIME + FLOAT_TIME

    def run(self) -> SegmentRunner:
        return JumpAndDodgeRunner(self)


class JumpAndDodgeRunner(SegmentRunner):
    """Plays the four input phases back to back."""

    def __init__(self, plan: JumpAndDodge) -> None:
        self._behavior = Chain(
            Priority.IDLE,
            [
                Yielder(JUMP_TIME, ControllerInput(jump=True)),
                Yielder(WAIT_TIME, NEUTRAL_INPUT),
                Yielder(
                    DODGE_INPUT_TIME,
                    ControllerInput(
                        pitch=-math.cos(plan.direction),
                        yaw=math.sin(plan.direction),
                        jump=True,
                    ),
                ),
                Yielder(FLOAT_TIME - DODGE_INPUT_TIME, NEUTRAL_INPUT),
            ],
        )

    def execute(self, ctx: Context) -> SegmentRunAction:
        action = self._behavior.execute(ctx)
        if isinstance(action, Yield):
            return SegmentYield(action.input)
        if isinstance(action, Return):
            return Success()
        return Failure()


def dodge_distance(speed: float) -> float:
    """Ground covered by a forward dodge started at *speed*."""
    return speed * (JUMP_TIME + WAIT_TIME) + (speed + DODGE_IMPULSE) * FLOAT_TIME


def dodge_time_to_cover(speed: float, distance: float) -> float:
    """Seconds a forward dodge started at *speed* needs to cover *distance*."""
    pre = speed * (JUMP_TIME + WAIT_TIME)
    if distance <= pre:
        return distance / speed
    return JUMP_TIME + WAIT_TIME + (distance - pre) / (speed + DODGE_IMPULSE)


def dodge_saves_time(sim: Car1D, distance: float, boost: bool = True) -> bool:
    """True if dodging now reaches *distance* sooner than keeping on driving.

    *sim* is the car's predicted longitudinal state; it is cloned, not
    stepped.
    """
    if not MIN_DODGE_SPEED <= sim.speed < CAR_ALMOST_MAX_SPEED:
        return False
    try:
        drive_time = time_to_cover(sim, distance, boost=boost)
    except TargetUnreachable:
        return True
    return dodge_time_to_cover(sim.speed, distance) < drive_time


def get_route_dodge(car: CarInfo, target_loc: Vec2) -> JumpAndDodge | None:
    """A forward dodge towards *target_loc* if one is worthwhile right now."""
    physics = car.physics
    if not car.on_ground:
        return None
    if physics.rotation.pitch >= MAX_DODGE_PITCH:
        return None
    if abs(yaw_diff(physics.loc_2d(), physics.rotation.yaw, target_loc)) >= MAX_DODGE_MISALIGNMENT:
        return None

    speed = physics.velocity.norm()
    if speed < MIN_DODGE_SPEED:
        return None  # Faster to accelerate.
    if speed >= CAR_ALMOST_MAX_SPEED:
        return None  # Can't get any faster.

    target_dist = (physics.loc_2d() - target_loc).norm()
    if target_dist / (speed + DODGE_IMPULSE) < JUMP_TIME + WAIT_TIME + FLOAT_TIME:
        return None

    return JumpAndDodge(CarState.from_car(car), 0.0)
