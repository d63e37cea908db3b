"""Vec2 / Vec3 / Rotator and signed angles."""

from __future__ import annotations

import math

import pytest

from arena_pilot.geometry import Rotator, Vec2, Vec3, signed_angle


class TestVec2:
    def test_arithmetic(self):
        a = Vec2(1.0, 2.0)
        b = Vec2(3.0, -1.0)
        assert a + b == Vec2(4.0, 1.0)
        assert a - b == Vec2(-2.0, 3.0)
        assert a * 2.0 == Vec2(2.0, 4.0)
        assert 2.0 * a == Vec2(2.0, 4.0)
        assert -a == Vec2(-1.0, -2.0)

    def test_cross_sign_follows_counter_clockwise(self):
        assert Vec2(1.0, 0.0).cross(Vec2(0.0, 1.0)) == pytest.approx(1.0)
        assert Vec2(1.0, 0.0).cross(Vec2(0.0, -1.0)) == pytest.approx(-1.0)

    def test_rotate_quarter_turn(self):
        v = Vec2(1.0, 0.0).rotate(math.pi / 2.0)
        assert v.x == pytest.approx(0.0, abs=1e-12)
        assert v.y == pytest.approx(1.0)

    def test_normalize(self):
        v = Vec2(3.0, 4.0).normalize()
        assert v.norm() == pytest.approx(1.0)
        assert v.x == pytest.approx(0.6)

    def test_normalize_zero_raises(self):
        with pytest.raises(ValueError):
            Vec2().normalize()

    def test_unit_and_angle_agree(self):
        for theta in (-3.0, -1.0, 0.0, 0.5, 2.5):
            assert Vec2.unit(theta).angle() == pytest.approx(theta)

    def test_is_finite(self):
        assert Vec2(1.0, 2.0).is_finite()
        assert not Vec2(math.nan, 0.0).is_finite()
        assert not Vec2(0.0, math.inf).is_finite()


def test_vec3_projection_drops_z():
    v = Vec3(1.0, 2.0, 3.0)
    assert v.to_2d() == Vec2(1.0, 2.0)
    assert v.to_2d().to_3d(3.0) == v


def test_vec3_norm():
    assert Vec3(2.0, 3.0, 6.0).norm() == pytest.approx(7.0)


def test_rotator_forward_axis_follows_yaw():
    forward = Rotator(yaw=math.pi / 2.0).forward_axis_2d()
    assert forward.x == pytest.approx(0.0, abs=1e-12)
    assert forward.y == pytest.approx(1.0)


@pytest.mark.parametrize(
    "b, expected",
    [
        (Vec2(0.0, 1.0), math.pi / 2.0),
        (Vec2(0.0, -1.0), -math.pi / 2.0),
        (Vec2(1.0, 1.0), math.pi / 4.0),
        (Vec2(1.0, 0.0), 0.0),
    ],
)
def test_signed_angle(b, expected):
    assert signed_angle(Vec2(1.0, 0.0), b) == pytest.approx(expected)
