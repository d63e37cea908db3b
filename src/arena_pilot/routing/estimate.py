"""Rough drive-time estimates built on :class:`~arena_pilot.simulate.Car1D`."""

from __future__ import annotations

from arena_pilot.geometry import Vec2, normalize_angle
from arena_pilot.routing.errors import TargetUnreachable
from arena_pilot.simulate.car1d import Car1D
from arena_pilot.simulate.tables import LookupTables
from arena_pilot.world.models import CarInfo

ESTIMATE_DT = 1.0 / 60.0
PLANNING_HORIZON = 30.0
"""Simulated seconds after which an approach is declared unreachable."""


def steer_penalty(yaw: float, desired_yaw: float) -> float:
    """Very rough time cost of turning from *yaw* to *desired_yaw*."""
    return abs(normalize_angle(yaw - desired_yaw)) * 3.0 / 4.0


def time_to_cover(
    sim: Car1D,
    distance: float,
    boost: bool = True,
    dt: float = ESTIMATE_DT,
    horizon: float = PLANNING_HORIZON,
) -> float:
    """Seconds for a full-throttle clone of *sim* to travel *distance*.

    *sim* itself is left untouched.

    Raises:
        TargetUnreachable: If *horizon* seconds pass first.
    """
    clone = sim.copy()
    start_time = clone.time
    start_dist = clone.distance_traveled
    while clone.distance_traveled - start_dist < distance:
        if clone.time - start_time >= horizon:
            raise TargetUnreachable(f"{distance:.0f} uu not covered within {horizon:.0f} s")
        clone.step(dt, 1.0, boost)
    return clone.time - start_time


def rough_time_drive_to_loc(car: CarInfo, target_loc: Vec2, tables: LookupTables) -> float:
    """Estimate how long *car* needs to drive to *target_loc* at full throttle and boost."""
    physics = car.physics
    target_dist = (physics.loc_2d() - target_loc).norm()
    desired_yaw = (target_loc - physics.loc_2d()).angle()

    t = 2.0 / 120.0 + steer_penalty(physics.rotation.yaw, desired_yaw)
    sim = Car1D(physics.velocity.norm(), tables).with_boost(car.boost)
    # Always at least one tick, even when already at the target.
    return t + max(time_to_cover(sim, target_dist), ESTIMATE_DT)
