"""
test_game_clock.py
------------------
Unit tests for the injected GameClock.
"""

import pytest

from gameflow.core.runtime.game_clock import GameClock
from gameflow.exceptions import ClockError


def test_advance_moves_both_domains():
    clock = GameClock()
    applied = clock.advance(0.25)

    assert applied == pytest.approx(0.25)
    assert clock.time == pytest.approx(0.25)
    assert clock.unscaled_time == pytest.approx(0.25)


def test_paused_clock_only_advances_unscaled_time():
    clock = GameClock()
    clock.pause()
    clock.advance(1.0)

    assert clock.time_scale == 0.0
    assert clock.time == 0.0
    assert clock.unscaled_time == pytest.approx(1.0)


def test_nested_pauses_are_reference_counted():
    clock = GameClock()
    clock.pause()
    clock.pause()
    clock.resume()

    assert clock.is_paused
    clock.advance(1.0)
    assert clock.time == 0.0

    clock.resume()
    assert not clock.is_paused
    assert clock.time_scale == 1.0


def test_resume_without_pause_raises():
    with pytest.raises(ClockError):
        GameClock().resume()


def test_base_scale_survives_pause():
    clock = GameClock(time_scale=0.5)
    clock.pause()
    clock.resume()
    clock.advance(2.0)

    assert clock.time == pytest.approx(1.0)


def test_negative_scale_rejected():
    clock = GameClock()
    with pytest.raises(ValueError):
        clock.time_scale = -1


def test_separate_clocks_are_independent():
    a, b = GameClock(), GameClock()
    a.pause()
    b.advance(1.0)
    assert b.time == pytest.approx(1.0)
    assert not b.is_paused
