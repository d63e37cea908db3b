"""Route planning and execution.

Public API
----------
- :class:`SegmentPlan` / :class:`SegmentRunner` — the segment contract
- :class:`Route` / :func:`compose_route` — chaining segments
- :class:`FollowRoute` — run a plan as a behavior
- :mod:`arena_pilot.routing.segments` — concrete segments
"""

from arena_pilot.routing.errors import (
    ArcError,
    DiscontinuousRoute,
    InvariantViolation,
    NonFiniteState,
    RoutingError,
    SegmentInfeasible,
    TargetUnreachable,
    VelocityTooLow,
    WrongGeometry,
)
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
from arena_pilot.routing.estimate import rough_time_drive_to_loc, steer_penalty, time_to_cover
from arena_pilot.routing.route import Route, RouteRunner, SegmentFactory, compose_route
from arena_pilot.routing.segments import (
    JumpAndDodge,
    SimpleArc,
    Straight,
    StraightPlanner,
    get_route_dodge,
)
from arena_pilot.routing.follow import FollowRoute

__all__ = [
    "ArcError",
    "CarState",
    "CarState2D",
    "DiscontinuousRoute",
    "Failure",
    "FollowRoute",
    "InvariantViolation",
    "JumpAndDodge",
    "NonFiniteState",
    "Route",
    "RouteRunner",
    "RoutingError",
    "SegmentFactory",
    "SegmentInfeasible",
    "SegmentPlan",
    "SegmentRunAction",
    "SegmentRunner",
    "SegmentYield",
    "SimpleArc",
    "Straight",
    "StraightPlanner",
    "Success",
    "TargetUnreachable",
    "VelocityTooLow",
    "WrongGeometry",
    "compose_route",
    "get_route_dodge",
    "rough_time_drive_to_loc",
    "steer_penalty",
    "time_to_cover",
]
