"""Primitive behaviors and the ground-steering helper they share."""

from __future__ import annotations

import math

import numpy as np

from arena_pilot.behavior.action import Abort, Action, Behavior, Priority, Return, TailCall, Yield
from arena_pilot.behavior.higher_order import MAX_CHILD_STEPS
from arena_pilot.geometry import Vec2, clamp, yaw_diff
from arena_pilot.simulate.constants import CAR_NORMAL_SPEED
from arena_pilot.simulate.tables import lookup_nearest_lower
from arena_pilot.world.context import Context
from arena_pilot.world.models import NEUTRAL_INPUT, CarInfo, ControllerInput

FLAT_GROUND_TOLERANCE = math.radians(15.0)

TIME_EPSILON = 1e-6
"""Slack for game clocks built by summing float tick lengths."""

_HANDBRAKE_SPEEDS = np.array([0.0, CAR_NORMAL_SPEED])
_HANDBRAKE_CUTOFFS = np.array([math.pi * 0.25, math.pi * 0.5])


def on_flat_ground(car: CarInfo) -> bool:
    """True if the car has its wheels down and is level within 15°."""
    rot = car.physics.rotation
    return (
        car.on_ground
        and abs(rot.pitch) < FLAT_GROUND_TOLERANCE
        and abs(rot.roll) < FLAT_GROUND_TOLERANCE
    )


def drive_towards(ctx: Context, target_loc: Vec2) -> ControllerInput:
    """Full-throttle command steering towards *target_loc*.

    Handbrake engages when the required turn exceeds a speed-dependent cutoff.
    """
    physics = ctx.me().physics
    diff = yaw_diff(physics.loc_2d(), physics.rotation.yaw, target_loc)
    handbrake_cutoff = lookup_nearest_lower(
        _HANDBRAKE_SPEEDS, _HANDBRAKE_CUTOFFS, physics.velocity.norm()
    )
    return ControllerInput(
        throttle=1.0,
        steer=clamp(diff * 2.0, -1.0, 1.0),
        handbrake=abs(diff) >= handbrake_cutoff,
    )


class NullBehavior(Behavior):
    """Emits a neutral command forever."""

    def execute(self, ctx: Context) -> Action:
        return Yield(NEUTRAL_INPUT)


class Yielder(Behavior):
    """Emit a fixed command for *duration* seconds of game time, then Return."""

    def __init__(self, duration: float, input: ControllerInput) -> None:
        self.duration = duration
        self.input = input
        self._start: float | None = None

    def execute(self, ctx: Context) -> Action:
        if self._start is None:
            self._start = ctx.time
        if ctx.time - self._start < self.duration - TIME_EPSILON:
            return Yield(self.input)
        return Return()


class DriveTowards(Behavior):
    """Naive driving that never knows it has arrived; wrap in :class:`TimeLimit`."""

    def __init__(self, target_loc: Vec2) -> None:
        self.target_loc = target_loc

    def execute(self, ctx: Context) -> Action:
        return Yield(drive_towards(ctx, self.target_loc))


class TimeLimit(Behavior):
    """Run *child* until it finishes or *limit* seconds of game time pass."""

    def __init__(self, limit: float, child: Behavior) -> None:
        self.limit = limit
        self._child = child
        self._start: float | None = None

    def priority(self) -> Priority:
        return self._child.priority()

    def execute(self, ctx: Context) -> Action:
        if self._start is None:
            self._start = ctx.time
        if ctx.time - self._start >= self.limit - TIME_EPSILON:
            ctx.debug.log(self.name, f"{self._child.name} ran out of time")
            return Return()

        for _ in range(MAX_CHILD_STEPS):
            action = self._child.execute(ctx)
            if not isinstance(action, TailCall):
                return action
            # Keep the deadline across the replacement.
            self._child = action.behavior
        return Abort()
