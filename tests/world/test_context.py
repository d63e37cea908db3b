from __future__ import annotations

import logging

import pytest

from arena_pilot.world.context import Context, DebugLog
from tests.conftest import make_snapshot


def test_me_returns_controlled_car():
    ctx = Context(make_snapshot(speed=300.0))
    assert ctx.me().physics.velocity.norm() == pytest.approx(300.0)


def test_time_reads_game_clock():
    assert Context(make_snapshot(time=12.0)).time == 12.0


def test_bad_player_index():
    with pytest.raises(IndexError):
        Context(make_snapshot(), player_index=3)


class TestDebugLog:
    def test_messages_filtered_by_source(self):
        log = DebugLog()
        log.log("Chain", "child aborted")
        log.log("SimpleArcRunner", "not on flat ground")
        assert log.messages() == ["child aborted", "not on flat ground"]
        assert log.messages("Chain") == ["child aborted"]

    def test_clear(self):
        log = DebugLog()
        log.log("x", "y")
        log.clear()
        assert log.entries == []

    def test_mirrors_to_logger(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="arena_pilot.world.context"):
            DebugLog().log("Yielder", "done")
        assert "Yielder: done" in caplog.text

    def test_context_creates_its_own_log(self):
        assert isinstance(Context(make_snapshot()).debug, DebugLog)
