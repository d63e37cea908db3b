"""Scalar angle helpers and hit-angle geometry."""

from __future__ import annotations

import math

from arena_pilot.geometry.vectors import Vec2, signed_angle

TAU = 2.0 * math.pi


def clamp(value: float, lo: float, hi: float) -> float:
    """Limit *value* to ``[lo, hi]``; NaN passes through unchanged."""
    if math.isnan(value):
        return value
    return max(lo, min(hi, value))


def normalize_angle(theta: float) -> float:
    """Wrap *theta* into ``[-π, π)``."""
    return (theta + math.pi) % TAU - math.pi


def yaw_diff(loc: Vec2, yaw: float, target: Vec2) -> float:
    """Signed yaw change needed to face *target* from *loc* with heading *yaw*."""
    return signed_angle(Vec2.unit(yaw), target - loc)


def feasible_hit_angle_toward(
    ball_loc: Vec2,
    car_loc: Vec2,
    ideal_aim: Vec2,
    max_angle_diff: float,
) -> Vec2:
    """Aim point as close to *ideal_aim* as a hit from *car_loc* can manage.

    The turn between the approach direction and the ideal shot direction is
    limited to *max_angle_diff*; the returned point lies at the same distance
    from the ball as *ideal_aim*.
    """
    turn = signed_angle(ball_loc - car_loc, ideal_aim - ball_loc)
    adjust = clamp(turn, -max_angle_diff, max_angle_diff)
    return ball_loc + (ideal_aim - ball_loc).rotate(adjust)


def feasible_hit_angle_away(
    ball_loc: Vec2,
    car_loc: Vec2,
    aim_avoid_loc: Vec2,
    max_angle_adjust: float,
) -> Vec2:
    """Aim point pushed at least *max_angle_adjust* further away from *aim_avoid_loc*."""
    avoid = signed_angle(ball_loc - car_loc, aim_avoid_loc - ball_loc)
    adjust = avoid + math.copysign(max_angle_adjust, avoid)
    return ball_loc + (aim_avoid_loc - ball_loc).rotate(adjust)
