"""FollowRoute — adapts a segment plan to the behavior protocol."""

from __future__ import annotations

import logging

from arena_pilot.behavior.action import Abort, Action, Behavior, Priority, Return, Yield
from arena_pilot.routing.models import Failure, SegmentPlan, SegmentRunner, SegmentYield
from arena_pilot.world.context import Context

_logger = logging.getLogger(__name__)


class FollowRoute(Behavior):
    """Execute *plan* tick by tick.

    The runner is created on the first tick, so a freshly constructed
    behavior can be offered and dropped without side effects.
    """

    def __init__(self, plan: SegmentPlan, priority: Priority = Priority.IDLE) -> None:
        self.plan = plan
        self._priority = priority
        self._runner: SegmentRunner | None = None

    def priority(self) -> Priority:
        return self._priority

    def execute(self, ctx: Context) -> Action:
        if self._runner is None:
            self._runner = self.plan.run()

        action = self._runner.execute(ctx)
        if isinstance(action, SegmentYield):
            return Yield(action.input)
        if isinstance(action, Failure):
            _logger.info("%s failed while running %s", self.name, self.plan.name)
            ctx.debug.log(self.name, f"{self.plan.name} failed")
            return Abort()
        return Return()
