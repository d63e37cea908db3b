"""Routing error taxonomy.

Two families: :class:`SegmentInfeasible` is an expected, recoverable answer
("this plan cannot be built"); :class:`InvariantViolation` means a planning
bug and halts the plan that hit it.
"""

from __future__ import annotations


class RoutingError(Exception):
    """Base class for routing failures."""


class SegmentInfeasible(RoutingError):
    """A segment cannot be constructed from the given inputs."""


class ArcError(SegmentInfeasible):
    """A :class:`~arena_pilot.routing.segments.SimpleArc` cannot be built."""


class VelocityTooLow(ArcError):
    """Start speed is too low for a constant-speed duration estimate."""


class WrongGeometry(ArcError):
    """Start and end points do not lie on the same circle."""


class TargetUnreachable(SegmentInfeasible):
    """The simulated approach stalls or exceeds the planning horizon."""


class InvariantViolation(RoutingError):
    """A programming error upstream; never recovered from in place."""


class NonFiniteState(InvariantViolation):
    """A kinematic value is NaN or infinite."""


class DiscontinuousRoute(InvariantViolation):
    """A segment does not start where the previous one ended."""
