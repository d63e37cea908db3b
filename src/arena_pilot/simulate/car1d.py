"""Car1D — table-driven longitudinal motion simulator."""

from __future__ import annotations

import copy

from arena_pilot.simulate.constants import BOOST_DEPLETION, CAR_NORMAL_SPEED, DEFAULT_BOOST
from arena_pilot.simulate.tables import LookupTables, lookup_nearest_lower


class Car1D:
    """Simulates a car driving in a straight line.

    Speed is advanced by walking along the empirical speed-vs-time curve of
    the active regime: the current speed is mapped to a time on the curve,
    that time is advanced by ``dt`` and mapped back to a speed.

    Only full throttle (``1.0``) or no throttle (``0.0``) is supported, and
    boosting requires full throttle.

    Args:
        speed: Initial speed in uu/s.
        tables: Regime lookup tables (see :func:`default_tables`).
        boost: Initial boost reserve.
    """

    def __init__(self, speed: float, tables: LookupTables, boost: float = DEFAULT_BOOST) -> None:
        self._tables = tables
        self._time = 0.0
        self._loc = 0.0
        self._vel = float(speed)
        self._boost = float(boost)

    def with_boost(self, boost: float) -> Car1D:
        """Set the boost reserve and return ``self`` for chaining."""
        self._boost = float(boost)
        return self

    def copy(self) -> Car1D:
        """Independent clone for exploring a divergent future."""
        return copy.copy(self)

    @property
    def time(self) -> float:
        return self._time

    @property
    def distance_traveled(self) -> float:
        return self._loc

    @property
    def speed(self) -> float:
        return self._vel

    @property
    def boost(self) -> float:
        return self._boost

    def step(self, dt: float, throttle: float, boost: bool) -> None:
        """Advance one tick of *dt* seconds.

        A boost request is silently dropped once the reserve is empty.
        Distance accumulates using the pre-step speed.
        """
        boost = boost and self._boost > 0.0
        new_vel = self._compute_new_vel(dt, throttle, boost)

        self._time += dt
        self._loc += self._vel * dt
        self._vel = new_vel
        if boost:
            self._boost -= BOOST_DEPLETION * dt

    def step_rev(self, dt: float, throttle: float, boost: bool) -> None:
        """Simulate time running backwards, given the *previous* tick's inputs.

        An instance must never switch between :meth:`step` and
        :meth:`step_rev`; the two answer different questions and mixing them
        gives nonsense.

        Boost is deliberately not regenerated even though time is reversed,
        so the reserve runs out at the same point it would in :meth:`step`.
        Elapsed time and distance still grow, the latter using the new speed.
        """
        boost = boost and self._boost > 0.0
        new_vel = self._compute_new_vel(-dt, throttle, boost)

        self._time += dt
        self._vel = new_vel
        self._loc += self._vel * dt
        if boost:
            self._boost -= BOOST_DEPLETION * dt

    def _compute_new_vel(self, dt: float, throttle: float, boost: bool) -> float:
        if self._vel >= CAR_NORMAL_SPEED and throttle == 1.0:
            return self._vel

        if not boost and throttle == 0.0:
            table = self._tables.coast
            # Coast speeds fall over time; search the reversed twins instead.
            src_vel, src_time = table.speed_rev, table.time_rev
        elif not boost and throttle == 1.0:
            table = self._tables.throttle
            src_vel, src_time = table.speed, table.time
        elif boost and throttle == 1.0:
            table = self._tables.boost
            src_vel, src_time = table.speed, table.time
        else:
            raise ValueError(f"Unsupported inputs: throttle={throttle!r}, boost={boost!r}")

        old_time = lookup_nearest_lower(src_vel, src_time, self._vel)
        new_time = old_time + dt
        return lookup_nearest_lower(table.time, table.speed, new_time)
