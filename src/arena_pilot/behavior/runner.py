"""BehaviorRunner — drives one behavior tree, one command per tick."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from pydantic import ValidationError

from arena_pilot.behavior.action import Abort, Behavior, Return, TailCall, Yield
from arena_pilot.routing.errors import InvariantViolation, NonFiniteState
from arena_pilot.world.context import Context, DebugLog
from arena_pilot.world.models import NEUTRAL_INPUT, ControllerInput, WorldSnapshot

_logger = logging.getLogger(__name__)

DEFAULT_MAX_TAIL_CALLS = 64


class BehaviorRunner:
    """Trampoline driver for the active behavior.

    Each :meth:`tick` invokes the active behavior; tail calls swap in the new
    behavior and re-invoke it within the same tick, up to *max_tail_calls*
    times. When the active behavior Returns or Aborts, a fresh root behavior
    takes over within the same tick.

    Args:
        root: Factory for the fallback behavior that runs whenever nothing
            else is active.
        player_index: Index of the controlled car in each snapshot.
        max_tail_calls: Same-tick cap on behavior invocations, guarding
            against behaviors that tail-call each other in a cycle.
    """

    def __init__(
        self,
        root: Callable[[], Behavior],
        player_index: int = 0,
        max_tail_calls: int = DEFAULT_MAX_TAIL_CALLS,
    ) -> None:
        if max_tail_calls < 1:
            raise ValueError("max_tail_calls must be >= 1")
        self._root = root
        self._player_index = player_index
        self._max_tail_calls = max_tail_calls
        self._active: Behavior = root()
        self.debug = DebugLog()

    @property
    def active(self) -> Behavior:
        return self._active

    def offer(self, behavior: Behavior) -> bool:
        """Activate *behavior* if it outranks the active one.

        Returns True if *behavior* preempted the active behavior. The
        displaced behavior is simply dropped.
        """
        if behavior.priority() <= self._active.priority():
            return False
        _logger.info(
            "%s (%s) preempts %s (%s)",
            behavior.name,
            behavior.priority().name,
            self._active.name,
            self._active.priority().name,
        )
        self._active = behavior
        return True

    def tick(self, snapshot: WorldSnapshot) -> ControllerInput:
        """Produce exactly one command for *snapshot*."""
        self.debug.clear()
        ctx = Context(snapshot, self._player_index, self.debug)
        try:
            _require_finite_car(ctx)
            return self._trampoline(ctx)
        except (InvariantViolation, ValidationError):
            _logger.exception("Invariant violated in %s; dropping the plan", self._active.name)
            self._active = self._root()
            return NEUTRAL_INPUT

    def _trampoline(self, ctx: Context) -> ControllerInput:
        for _ in range(self._max_tail_calls):
            action = self._active.execute(ctx)

            if isinstance(action, Yield):
                return action.input
            if isinstance(action, TailCall):
                ctx.debug.log(self._active.name, f"tail call to {action.behavior.name}")
                self._active = action.behavior
                continue
            if isinstance(action, Return):
                _logger.info("%s finished", self._active.name)
            elif isinstance(action, Abort):
                _logger.info("%s aborted", self._active.name)
            self._active = self._root()

        _logger.error(
            "Exceeded %d behavior invocations in one tick (last: %s)",
            self._max_tail_calls,
            self._active.name,
        )
        self._active = self._root()
        return NEUTRAL_INPUT


def _require_finite_car(ctx: Context) -> None:
    physics = ctx.me().physics
    if not (
        physics.location.is_finite()
        and physics.rotation.is_finite()
        and physics.velocity.is_finite()
        and math.isfinite(ctx.me().boost)
    ):
        raise NonFiniteState(f"player {ctx.player_index} has non-finite physics: {physics!r}")
