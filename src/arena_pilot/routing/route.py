"""Route — a sequence of segments executed back to back."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from arena_pilot.routing.errors import DiscontinuousRoute
from arena_pilot.routing.models import (
    CarState,
    Failure,
    SegmentPlan,
    SegmentRunAction,
    SegmentRunner,
    SegmentYield,
    Success,
)
from arena_pilot.world.context import Context

_logger = logging.getLogger(__name__)

SegmentFactory = Callable[[CarState], SegmentPlan]
"""Builds a segment that starts from the given state."""


class Route(SegmentPlan):
    """Composite plan whose segments must join up end to start.

    Raises:
        ValueError: If *segments* is empty.
        DiscontinuousRoute: If one segment's end is not
            :meth:`~arena_pilot.routing.models.CarState.close_to` the next
            segment's start.
    """

    def __init__(self, segments: Sequence[SegmentPlan]) -> None:
        if not segments:
            raise ValueError("a route needs at least one segment")
        for i, (prev, nxt) in enumerate(zip(segments, segments[1:])):
            if not prev.end().close_to(nxt.start()):
                raise DiscontinuousRoute(
                    f"segment {i} ({prev.name}) ends at {prev.end()!r} but segment "
                    f"{i + 1} ({nxt.name}) starts at {nxt.start()!r}"
                )
        self.segments: tuple[SegmentPlan, ...] = tuple(segments)

    def start(self) -> CarState:
        return self.segments[0].start()

    def end(self) -> CarState:
        return self.segments[-1].end()

    def duration(self) -> float:
        return sum(segment.duration() for segment in self.segments)

    def run(self) -> SegmentRunner:
        return RouteRunner(self)


class RouteRunner(SegmentRunner):
    """Runs each segment in turn; a finished segment hands over within the same tick."""

    def __init__(self, plan: Route) -> None:
        self.plan = plan
        self._index = 0
        self._current = plan.segments[0].run()

    @property
    def index(self) -> int:
        """Position of the segment currently being run."""
        return self._index

    def execute(self, ctx: Context) -> SegmentRunAction:
        while True:
            action = self._current.execute(ctx)
            if isinstance(action, SegmentYield):
                return action
            if isinstance(action, Failure):
                ctx.debug.log(self.name, f"segment {self._index} ({self._current.name}) failed")
                return action

            self._index += 1
            if self._index >= len(self.plan.segments):
                return Success()
            _logger.debug("route advancing to segment %d", self._index)
            self._current = self.plan.segments[self._index].run()


def compose_route(start: CarState, factories: Iterable[SegmentFactory]) -> Route:
    """Build a route by feeding each segment's end state into the next factory.

    Errors raised while constructing a segment propagate unchanged.
    """
    segments: list[SegmentPlan] = []
    state = start
    for factory in factories:
        segment = factory(state)
        segments.append(segment)
        state = segment.end()
    return Route(segments)
