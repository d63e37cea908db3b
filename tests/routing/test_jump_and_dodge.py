"""JumpAndDodge plan, runner phases and dodge feasibility helpers."""

from __future__ import annotations

import math

import pytest

from arena_pilot.geometry import Rotator, Vec2, Vec3
from arena_pilot.routing import CarState, JumpAndDodge, NonFiniteState, SegmentYield, Success
from arena_pilot.routing.segments.jump_and_dodge import (
    DODGE_IMPULSE,
    FLOAT_TIME,
    dodge_distance,
    dodge_saves_time,
    dodge_time_to_cover,
    get_route_dodge,
)
from arena_pilot.simulate import Car1D
from arena_pilot.world.models import NEUTRAL_INPUT, ControllerInput
from tests.conftest import make_car, make_context, make_state

TOTAL = 6.0 / 120.0 + 6.0 / 120.0 + 4.0 / 3.0


class TestPlan:
    @pytest.mark.parametrize("direction", [0.0, 0.7, -math.pi / 2.0, math.pi])
    @pytest.mark.parametrize("speed", [0.0, 800.0, 2000.0])
    def test_duration_is_constant(self, direction, speed):
        plan = JumpAndDodge(make_state(yaw=0.4, speed=speed, boost=12.0), direction)
        assert plan.duration() == pytest.approx(TOTAL)

    def test_start_is_the_given_state(self):
        state = make_state(speed=1000.0)
        assert JumpAndDodge(state).start() is state

    def test_forward_dodge_end(self):
        end = JumpAndDodge(make_state(speed=1000.0, boost=40.0), 0.0).end()
        assert end.loc.x == pytest.approx(1000.0 * 0.1 + 1500.0 * FLOAT_TIME)
        assert end.loc.y == pytest.approx(0.0, abs=1e-9)
        assert end.vel.x == pytest.approx(1000.0 + DODGE_IMPULSE)
        assert end.rot.yaw == 0.0
        assert end.boost == 40.0

    def test_sideways_dodge_is_in_the_car_frame(self):
        # Facing +y; a quarter-turn dodge pushes towards -x.
        end = JumpAndDodge(make_state(yaw=math.pi / 2.0, speed=1000.0), math.pi / 2.0).end()
        assert end.vel.x == pytest.approx(-DODGE_IMPULSE)
        assert end.vel.y == pytest.approx(1000.0)
        assert end.loc.x == pytest.approx(-DODGE_IMPULSE * FLOAT_TIME)

    def test_non_finite_start_is_an_invariant_violation(self):
        bad = CarState(loc=Vec3(), rot=Rotator(), vel=Vec3(math.nan, 0.0, 0.0), boost=0.0)
        with pytest.raises(NonFiniteState):
            JumpAndDodge(bad).end()

    def test_non_finite_direction(self):
        with pytest.raises(NonFiniteState):
            JumpAndDodge(make_state(speed=1000.0), math.nan).end()


class TestRunner:
    def test_phase_sequence(self):
        runner = JumpAndDodge(make_state(speed=1400.0), 0.0).run()

        def step(t):
            return runner.execute(make_context(time=t, speed=1400.0))

        assert step(0.0) == SegmentYield(ControllerInput(jump=True))
        assert step(0.03) == SegmentYield(ControllerInput(jump=True))
        assert step(0.06) == SegmentYield(NEUTRAL_INPUT)
        assert step(0.12) == SegmentYield(ControllerInput(pitch=-1.0, jump=True))
        assert step(0.2) == SegmentYield(NEUTRAL_INPUT)
        assert step(1.0) == SegmentYield(NEUTRAL_INPUT)
        assert step(1.5) == Success()

    def test_phases_last_six_ticks_each_at_120hz(self):
        runner = JumpAndDodge(make_state(speed=1400.0), 0.0).run()
        t = 0.0
        inputs = []
        for _ in range(20):
            inputs.append(runner.execute(make_context(time=t, speed=1400.0)).input)
            t += 1.0 / 120.0

        assert [cmd.jump for cmd in inputs] == [True] * 6 + [False] * 6 + [True] * 6 + [False] * 2
        assert inputs[:6] == [ControllerInput(jump=True)] * 6
        assert inputs[6:12] == [NEUTRAL_INPUT] * 6
        assert inputs[12:18] == [ControllerInput(pitch=-1.0, jump=True)] * 6

    def test_sideways_dodge_input(self):
        runner = JumpAndDodge(make_state(speed=1400.0), math.pi / 2.0).run()
        for t in (0.0, 0.06):
            runner.execute(make_context(time=t))
        action = runner.execute(make_context(time=0.12))
        assert action.input.yaw == pytest.approx(1.0)
        assert action.input.pitch == pytest.approx(0.0, abs=1e-9)
        assert action.input.jump


class TestFeasibility:
    def test_dodge_distance(self):
        assert dodge_distance(1500.0) == pytest.approx(1500.0 * 0.1 + 2000.0 * FLOAT_TIME)

    def test_dodge_time_to_cover(self):
        assert dodge_time_to_cover(1000.0, 50.0) == pytest.approx(0.05)
        assert dodge_time_to_cover(1000.0, 100.0 + 1500.0) == pytest.approx(1.1)

    def test_saves_time_at_speed(self, tables):
        sim = Car1D(1400.0, tables)
        assert dodge_saves_time(sim, 2500.0)
        # Only a clone is stepped.
        assert sim.time == 0.0

    def test_too_slow_to_bother(self, tables):
        assert not dodge_saves_time(Car1D(1000.0, tables), 2500.0)

    def test_already_at_max_speed(self, tables):
        assert not dodge_saves_time(Car1D(2295.0, tables), 2500.0)


class TestGetRouteDodge:
    def test_fast_and_aligned(self):
        car = make_car(speed=1500.0)
        dodge = get_route_dodge(car, Vec2(5000.0, 0.0))
        assert dodge is not None
        assert dodge.direction == 0.0
        assert dodge.start() == CarState.from_car(car)

    @pytest.mark.parametrize(
        "car, target",
        [
            (make_car(speed=1000.0), Vec2(5000.0, 0.0)),
            (make_car(speed=2295.0), Vec2(9000.0, 0.0)),
            (make_car(speed=1500.0, on_ground=False), Vec2(5000.0, 0.0)),
            (make_car(speed=1500.0, pitch=0.5), Vec2(5000.0, 0.0)),
            (make_car(speed=1500.0), Vec2(5000.0, 500.0)),
            (make_car(speed=1500.0), Vec2(1000.0, 0.0)),
        ],
        ids=["slow", "max-speed", "airborne", "pitched", "misaligned", "too-close"],
    )
    def test_rejected(self, car, target):
        assert get_route_dodge(car, target) is None
