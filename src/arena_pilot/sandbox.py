"""GroundSandbox — flat-ground stand-in for the real simulator.

Lets behaviors and routes run end to end in tests and scripts. Longitudinal
motion follows :class:`~arena_pilot.simulate.Car1D`; turning is limited by a
speed-dependent maximum curvature. Jumps, dodges and collisions are not
modelled: the car never leaves the ground.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from arena_pilot.behavior.runner import BehaviorRunner
from arena_pilot.geometry import Rotator, Vec2, Vec3
from arena_pilot.simulate.car1d import Car1D
from arena_pilot.simulate.constants import CAR_REST_Z, DEFAULT_BOOST
from arena_pilot.simulate.tables import LookupTables, default_tables
from arena_pilot.world.models import (
    BallInfo,
    CarInfo,
    ControllerInput,
    GameInfo,
    Physics,
    WorldSnapshot,
)

_logger = logging.getLogger(__name__)

BALL_REST_Z = 92.75

# Max curvature (1/uu) at full steer, by speed (uu/s).
_CURVATURE_SPEEDS = np.array([0.0, 500.0, 1000.0, 1500.0, 1750.0, 2300.0])
_CURVATURE_VALUES = np.array([0.0069, 0.00398, 0.00235, 0.001375, 0.0011, 0.00088])


def max_curvature(speed: float) -> float:
    """Tightest turn available at *speed*, linearly interpolated."""
    return float(np.interp(speed, _CURVATURE_SPEEDS, _CURVATURE_VALUES))


@dataclass
class DriveResult:
    """Outcome of :meth:`GroundSandbox.drive`."""

    inputs: list[ControllerInput]
    elapsed: float
    stopped_early: bool


class GroundSandbox:
    """One car on an endless flat floor.

    Args:
        loc: Starting ground position.
        yaw: Starting heading in radians.
        speed: Starting forward speed in uu/s.
        boost: Starting boost reserve.
        tables: Regime tables driving the speed model.
        tick_rate: Ticks per second.
    """

    def __init__(
        self,
        loc: Vec2 = Vec2(),
        yaw: float = 0.0,
        speed: float = 0.0,
        boost: float = DEFAULT_BOOST,
        tables: LookupTables | None = None,
        tick_rate: int = 120,
    ) -> None:
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        self._tables = tables or default_tables()
        self.dt = 1.0 / tick_rate
        self.loc = loc
        self.yaw = yaw
        self.speed = speed
        self.boost = boost
        self.time = 0.0
        self.ball_loc = Vec3(0.0, 0.0, BALL_REST_Z)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> WorldSnapshot:
        car = CarInfo(
            physics=Physics(
                location=self.loc.to_3d(CAR_REST_Z),
                rotation=Rotator(yaw=self.yaw),
                velocity=(Vec2.unit(self.yaw) * self.speed).to_3d(0.0),
            ),
            boost=min(max(self.boost, 0.0), 100.0),
        )
        return WorldSnapshot(
            cars=(car,),
            ball=BallInfo(physics=Physics(location=self.ball_loc)),
            game=GameInfo(time_seconds=self.time),
        )

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self, controls: ControllerInput) -> WorldSnapshot:
        """Apply *controls* for one tick and return the resulting snapshot."""
        throttle = 1.0 if controls.throttle >= 0.5 else 0.0
        boost = controls.boost and throttle == 1.0

        sim = Car1D(self.speed, self._tables, boost=self.boost)
        sim.step(self.dt, throttle, boost)

        yaw_rate = controls.steer * self.speed * max_curvature(self.speed)
        self.loc = self.loc + Vec2.unit(self.yaw) * (self.speed * self.dt)
        self.yaw += yaw_rate * self.dt
        self.speed = sim.speed
        self.boost = sim.boost
        self.time += self.dt
        return self.snapshot()

    def drive(
        self,
        runner: BehaviorRunner,
        duration: float,
        until: Callable[[WorldSnapshot], bool] | None = None,
    ) -> DriveResult:
        """Tick *runner* against this sandbox for up to *duration* seconds.

        Stops early once *until* returns True for the current snapshot.
        """
        inputs: list[ControllerInput] = []
        start = self.time
        snapshot = self.snapshot()
        while self.time - start < duration:
            if until is not None and until(snapshot):
                _logger.debug("drive stopped at t=%.3f", self.time)
                return DriveResult(inputs, self.time - start, stopped_early=True)
            controls = runner.tick(snapshot)
            inputs.append(controls)
            snapshot = self.step(controls)
        return DriveResult(inputs, self.time - start, stopped_early=False)
