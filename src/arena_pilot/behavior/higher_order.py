"""Composers that drive other behaviors: Chain and TryChoose."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from arena_pilot.behavior.action import Abort, Action, Behavior, Priority, Return, TailCall, Yield
from arena_pilot.world.context import Context

_logger = logging.getLogger(__name__)

MAX_CHILD_STEPS = 64
"""Cap on child invocations a composer performs within one tick."""


class Chain(Behavior):
    """Run behaviors one after another.

    A child that Returns hands over to the next child within the same tick; a
    child that tail-calls is replaced in place. Any Abort aborts the whole
    chain. The chain Returns once every child has Returned.

    Args:
        priority: The chain's own priority, so it can itself be preempted.
        children: Behaviors to run in order.
    """

    def __init__(self, priority: Priority, children: Iterable[Behavior]) -> None:
        self._priority = priority
        self._children: deque[Behavior] = deque(children)

    def priority(self) -> Priority:
        return self._priority

    @property
    def remaining(self) -> int:
        return len(self._children)

    def execute(self, ctx: Context) -> Action:
        for _ in range(MAX_CHILD_STEPS):
            if not self._children:
                return Return()

            child = self._children[0]
            action = child.execute(ctx)

            if isinstance(action, Yield):
                return action
            if isinstance(action, TailCall):
                self._children[0] = action.behavior
                continue
            if isinstance(action, Return):
                self._children.popleft()
                continue
            ctx.debug.log(self.name, f"child {child.name} aborted")
            return Abort()

        _logger.warning("%s exceeded %d child steps in one tick", self.name, MAX_CHILD_STEPS)
        return Abort()


class TryChoose(Behavior):
    """Commit to the highest-priority choice that does not Abort this tick.

    Choices are tried in descending priority (ties keep their given order).
    Once one accepts, it alone is driven on later ticks. Aborts only when
    every choice aborts.
    """

    def __init__(self, priority: Priority, choices: Iterable[Behavior]) -> None:
        self._priority = priority
        self._choices = sorted(choices, key=lambda b: b.priority(), reverse=True)
        self._chosen: Behavior | None = None

    def priority(self) -> Priority:
        return self._priority

    @property
    def chosen(self) -> Behavior | None:
        return self._chosen

    def execute(self, ctx: Context) -> Action:
        if self._chosen is not None:
            return self._chosen.execute(ctx)

        for choice in self._choices:
            action = choice.execute(ctx)
            if isinstance(action, Abort):
                ctx.debug.log(self.name, f"{choice.name} not applicable")
                continue
            ctx.debug.log(self.name, f"chose {choice.name}")
            self._chosen = choice
            return action

        return Abort()
