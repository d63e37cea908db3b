from __future__ import annotations

import math

import pytest

from arena_pilot.geometry import (
    Vec2,
    clamp,
    feasible_hit_angle_away,
    feasible_hit_angle_toward,
    normalize_angle,
    yaw_diff,
)


def test_clamp():
    assert clamp(2.0, -1.0, 1.0) == 1.0
    assert clamp(-2.0, -1.0, 1.0) == -1.0
    assert clamp(0.25, -1.0, 1.0) == 0.25


def test_clamp_passes_nan_through():
    assert math.isnan(clamp(math.nan, -1.0, 1.0))


@pytest.mark.parametrize("theta", [-10.0, -math.pi, -1.0, 0.0, 3.0, math.pi, 7.5])
def test_normalize_angle_range(theta):
    wrapped = normalize_angle(theta)
    assert -math.pi <= wrapped < math.pi
    assert math.cos(wrapped) == pytest.approx(math.cos(theta))
    assert math.sin(wrapped) == pytest.approx(math.sin(theta), abs=1e-9)


def test_yaw_diff_target_to_the_left_is_positive():
    assert yaw_diff(Vec2(), 0.0, Vec2(0.0, 100.0)) == pytest.approx(math.pi / 2.0)
    assert yaw_diff(Vec2(), 0.0, Vec2(0.0, -100.0)) == pytest.approx(-math.pi / 2.0)
    assert yaw_diff(Vec2(), 0.0, Vec2(100.0, 0.0)) == pytest.approx(0.0)


class TestHitAngles:
    def test_toward_keeps_an_aligned_aim(self):
        aim = feasible_hit_angle_toward(Vec2(), Vec2(-100.0, 0.0), Vec2(1000.0, 0.0), 0.5)
        assert aim.x == pytest.approx(1000.0)
        assert aim.y == pytest.approx(0.0, abs=1e-9)

    def test_toward_preserves_aim_distance(self):
        ball = Vec2(10.0, 20.0)
        aim = feasible_hit_angle_toward(ball, Vec2(-100.0, 0.0), Vec2(10.0, 1020.0), math.pi / 6)
        assert (aim - ball).norm() == pytest.approx(1000.0)

    def test_away_preserves_distance_and_moves_the_aim(self):
        ball = Vec2()
        avoid = Vec2(1000.0, 100.0)
        aim = feasible_hit_angle_away(ball, Vec2(-100.0, 0.0), avoid, 0.3)
        assert (aim - ball).norm() == pytest.approx(avoid.norm())
        assert (aim - avoid).norm() > 1.0
