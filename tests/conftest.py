"""Shared fixtures and snapshot builders."""

from __future__ import annotations

import pytest

from arena_pilot.geometry import Rotator, Vec2, Vec3
from arena_pilot.routing.models import CarState, CarState2D
from arena_pilot.simulate.constants import CAR_REST_Z
from arena_pilot.simulate.tables import LookupTables, default_tables
from arena_pilot.world.context import Context
from arena_pilot.world.models import BallInfo, CarInfo, GameInfo, Physics, WorldSnapshot


@pytest.fixture
def tables() -> LookupTables:
    """The lookup tables bundled with the package."""
    return default_tables()


def make_car(
    loc: Vec2 = Vec2(),
    yaw: float = 0.0,
    speed: float = 0.0,
    boost: float = 100.0,
    on_ground: bool = True,
    pitch: float = 0.0,
    roll: float = 0.0,
) -> CarInfo:
    """A grounded car at *loc* moving forward at *speed*."""
    return CarInfo(
        physics=Physics(
            location=loc.to_3d(CAR_REST_Z),
            rotation=Rotator(pitch=pitch, yaw=yaw, roll=roll),
            velocity=(Vec2.unit(yaw) * speed).to_3d(0.0),
        ),
        boost=boost,
        on_ground=on_ground,
    )


def make_snapshot(time: float = 0.0, **car_kwargs) -> WorldSnapshot:
    return WorldSnapshot(
        cars=(make_car(**car_kwargs),),
        ball=BallInfo(physics=Physics(location=Vec3(0.0, 0.0, 92.75))),
        game=GameInfo(time_seconds=time),
    )


def make_context(time: float = 0.0, **car_kwargs) -> Context:
    return Context(make_snapshot(time, **car_kwargs))


def make_state(
    loc: Vec2 = Vec2(), yaw: float = 0.0, speed: float = 0.0, boost: float = 100.0
) -> CarState:
    """A resting-height ground state moving along its heading."""
    return CarState2D(loc=loc, yaw=yaw, vel=Vec2.unit(yaw) * speed, boost=boost).to_3d()

