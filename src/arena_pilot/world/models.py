"""Pydantic schemas for the simulator boundary: world snapshots in, controls out."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from arena_pilot.geometry import Rotator, Vec2, Vec3

_Axis = Annotated[float, Field(ge=-1.0, le=1.0, allow_inf_nan=False)]


class Physics(BaseModel):
    """Kinematic state of one rigid body."""

    model_config = ConfigDict(frozen=True)

    location: Vec3
    rotation: Rotator = Rotator()
    velocity: Vec3 = Vec3()
    angular_velocity: Vec3 = Vec3()

    def loc_2d(self) -> Vec2:
        return self.location.to_2d()

    def forward_axis_2d(self) -> Vec2:
        return self.rotation.forward_axis_2d()


class CarInfo(BaseModel):
    """One vehicle in the snapshot."""

    model_config = ConfigDict(frozen=True)

    physics: Physics
    boost: float = Field(default=0.0, ge=0.0, le=100.0)
    on_ground: bool = True
    team: int = 0


class BallInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    physics: Physics


class GameInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    time_seconds: float = 0.0
    """Game clock in seconds; monotonically non-decreasing between ticks."""


class WorldSnapshot(BaseModel):
    """Everything the pilot sees on one tick. Consumed read-only."""

    model_config = ConfigDict(frozen=True)

    cars: tuple[CarInfo, ...]
    ball: BallInfo
    game: GameInfo = GameInfo()


class ControllerInput(BaseModel):
    """The one command emitted per tick.

    Axes are validated to ``[-1, 1]`` and must be finite; a command that fails
    validation indicates a planning bug upstream. Positive ``steer`` turns
    towards increasing yaw.
    """

    model_config = ConfigDict(frozen=True)

    throttle: _Axis = 0.0
    steer: _Axis = 0.0
    pitch: _Axis = 0.0
    yaw: _Axis = 0.0
    roll: _Axis = 0.0
    jump: bool = False
    boost: bool = False
    handbrake: bool = False


NEUTRAL_INPUT = ControllerInput()
