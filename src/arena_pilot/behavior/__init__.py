"""Behavior execution model.

Public API
----------
Behavior        - base class; ``execute(ctx) -> Action``
Yield, TailCall, Return, Abort - the four Action variants
Priority        - IDLE < DEFENSE < STRIKE < FORCE
Chain, TryChoose - composers
Yielder, NullBehavior, DriveTowards, TimeLimit - primitives
BehaviorRunner  - trampoline driver producing one command per tick
"""

from arena_pilot.behavior.action import Abort, Action, Behavior, Priority, Return, TailCall, Yield
from arena_pilot.behavior.basic import (
    DriveTowards,
    NullBehavior,
    TimeLimit,
    Yielder,
    drive_towards,
    on_flat_ground,
)
from arena_pilot.behavior.higher_order import Chain, TryChoose
from arena_pilot.behavior.runner import BehaviorRunner

__all__ = [
    "Abort",
    "Action",
    "Behavior",
    "BehaviorRunner",
    "Chain",
    "DriveTowards",
    "NullBehavior",
    "Priority",
    "Return",
    "TailCall",
    "TimeLimit",
    "TryChoose",
    "Yield",
    "Yielder",
    "drive_towards",
    "on_flat_ground",
]
