"""The behavior contract: one :class:`Action` per invocation."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass

from arena_pilot.world.context import Context
from arena_pilot.world.models import ControllerInput


class Priority(enum.IntEnum):
    """Used by composers choosing among competing behaviors; higher preempts lower."""

    IDLE = 0
    DEFENSE = 1
    STRIKE = 2
    FORCE = 3


class Behavior(ABC):
    """Something that can be driven tick by tick.

    Subclasses implement :meth:`execute`; it is called once per tick (or
    several times within a tick after a tail call) and must never block.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    def priority(self) -> Priority:
        return Priority.IDLE

    @abstractmethod
    def execute(self, ctx: Context) -> Action:
        """Run one step and say what happens next."""


@dataclass(frozen=True)
class Yield:
    """Not finished: emit *input* this tick and call me again next tick."""

    input: ControllerInput


@dataclass(frozen=True)
class TailCall:
    """Replace the current behavior with *behavior* and re-run it this tick."""

    behavior: Behavior


@dataclass(frozen=True)
class Return:
    """Completed successfully."""


@dataclass(frozen=True)
class Abort:
    """A precondition failed; the composer must treat this as failure."""


Action = Yield | TailCall | Return | Abort
