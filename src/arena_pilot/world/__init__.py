"""Simulator boundary types and the per-tick context.

Public API
----------
WorldSnapshot    - one tick of world state (cars, ball, clock)
CarInfo, BallInfo, GameInfo, Physics - snapshot components
ControllerInput  - validated outbound control command
NEUTRAL_INPUT    - all-zero command
Context          - snapshot + controlled-car index + debug channel
DebugLog         - per-tick scratch log
"""

from arena_pilot.world.context import Context, DebugLog
from arena_pilot.world.models import (
    NEUTRAL_INPUT,
    BallInfo,
    CarInfo,
    ControllerInput,
    GameInfo,
    Physics,
    WorldSnapshot,
)

__all__ = [
    "NEUTRAL_INPUT",
    "BallInfo",
    "CarInfo",
    "Context",
    "ControllerInput",
    "DebugLog",
    "GameInfo",
    "Physics",
    "WorldSnapshot",
]
