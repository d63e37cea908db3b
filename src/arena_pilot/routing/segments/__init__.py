"""Concrete route segments.

Public API
----------
- :class:`JumpAndDodge` / :func:`get_route_dodge` — fixed-timing dodge
- :class:`SimpleArc` — constant-speed circular arc
- :class:`Straight` / :class:`StraightPlanner` — straight drive, optionally ending in a dodge
"""

from arena_pilot.routing.segments.jump_and_dodge import (
    JumpAndDodge,
    JumpAndDodgeRunner,
    dodge_distance,
    dodge_saves_time,
    dodge_time_to_cover,
    get_route_dodge,
)
from arena_pilot.routing.segments.simple_arc import SimpleArc, SimpleArcRunner
from arena_pilot.routing.segments.straight import (
    Straight,
    StraightPlanner,
    StraightRunner,
    straight_inputs,
)

__all__ = [
    "JumpAndDodge",
    "JumpAndDodgeRunner",
    "SimpleArc",
    "SimpleArcRunner",
    "Straight",
    "StraightPlanner",
    "StraightRunner",
    "dodge_distance",
    "dodge_saves_time",
    "dodge_time_to_cover",
    "get_route_dodge",
    "straight_inputs",
]
