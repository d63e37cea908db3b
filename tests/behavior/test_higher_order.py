"""Chain and TryChoose."""

from __future__ import annotations

from arena_pilot.behavior import Abort, Behavior, Chain, Priority, Return, TailCall, TryChoose, Yield
from arena_pilot.world.models import ControllerInput
from tests.conftest import make_context

A = ControllerInput(throttle=1.0)
B = ControllerInput(throttle=-1.0)


class _Scripted(Behavior):
    def __init__(self, *actions, priority: Priority = Priority.IDLE):
        self._actions = list(actions)
        self._priority = priority
        self.calls = 0

    def priority(self) -> Priority:
        return self._priority

    def execute(self, ctx):
        self.calls += 1
        return self._actions.pop(0)


class TestChain:
    def test_runs_children_in_order(self):
        chain = Chain(Priority.IDLE, [_Scripted(Yield(A), Return()), _Scripted(Yield(B), Return())])
        ctx = make_context()
        assert chain.execute(ctx) == Yield(A)
        # First child returns and the second starts within the same call.
        assert chain.execute(ctx) == Yield(B)
        assert chain.execute(ctx) == Return()

    def test_abort_aborts_the_chain(self):
        second = _Scripted(Yield(B))
        chain = Chain(Priority.IDLE, [_Scripted(Abort()), second])
        ctx = make_context()
        assert chain.execute(ctx) == Abort()
        assert second.calls == 0
        assert ctx.debug.messages("Chain") == ["child _Scripted aborted"]

    def test_tail_call_replaces_child_in_place(self):
        replacement = _Scripted(Yield(B), Return())
        chain = Chain(Priority.IDLE, [_Scripted(TailCall(replacement)), _Scripted(Yield(A))])
        ctx = make_context()
        assert chain.execute(ctx) == Yield(B)
        assert chain.remaining == 2
        assert chain.execute(ctx) == Yield(A)
        assert chain.remaining == 1

    def test_empty_chain_returns(self):
        assert Chain(Priority.IDLE, []).execute(make_context()) == Return()

    def test_explicit_priority(self):
        chain = Chain(Priority.DEFENSE, [_Scripted(Yield(A), priority=Priority.FORCE)])
        assert chain.priority() is Priority.DEFENSE

    def test_unbounded_tail_calls_abort(self):
        class _Loop(Behavior):
            def execute(self, ctx):
                return TailCall(_Loop())

        assert Chain(Priority.IDLE, [_Loop()]).execute(make_context()) == Abort()


class TestTryChoose:
    def test_picks_highest_priority_applicable(self):
        low = _Scripted(Yield(A), priority=Priority.IDLE)
        high = _Scripted(Yield(B), priority=Priority.STRIKE)
        choose = TryChoose(Priority.IDLE, [low, high])
        assert choose.execute(make_context()) == Yield(B)
        assert choose.chosen is high
        assert low.calls == 0

    def test_skips_aborting_choice(self):
        high = _Scripted(Abort(), priority=Priority.FORCE)
        low = _Scripted(Yield(A), Yield(A), priority=Priority.IDLE)
        choose = TryChoose(Priority.IDLE, [high, low])
        ctx = make_context()
        assert choose.execute(ctx) == Yield(A)
        assert choose.chosen is low
        # Committed: the aborting choice is not retried.
        assert choose.execute(ctx) == Yield(A)
        assert high.calls == 1

    def test_aborts_when_nothing_applies(self):
        choose = TryChoose(Priority.IDLE, [_Scripted(Abort()), _Scripted(Abort())])
        assert choose.execute(make_context()) == Abort()
        assert choose.chosen is None

    def test_ties_keep_given_order(self):
        first = _Scripted(Yield(A))
        second = _Scripted(Yield(B))
        assert TryChoose(Priority.IDLE, [first, second]).execute(make_context()) == Yield(A)
