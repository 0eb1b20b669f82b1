"""
test_states.py
--------------
Unit tests for the built-in state bodies.

Covers:
1. State / PauseState two-step bodies
2. DelayState timing on the injected clock
3. Scene load/unload bodies and eager id validation
4. Link ownership on AbstractState
"""

from unittest.mock import MagicMock

import pytest

from gameflow.core.services.game_event import GameEvent
from gameflow.exceptions import ConfigurationError
from gameflow.sequence.level_data import LevelDefinition
from gameflow.statemachine.links import EventLink, Link
from gameflow.statemachine.states import (
    DelayState,
    LoadLevelState,
    LoadSceneState,
    PauseState,
    State,
    UnloadLastSceneState,
)
from gameflow.statemachine.step_status import StepStatus


def _drive(state, max_steps=20):
    """Run a state's body to completion. Returns steps used."""
    state.reset()
    state.enter()
    for steps in range(1, max_steps + 1):
        if state.execute() is StepStatus.DONE:
            return steps
    raise AssertionError("body never completed")


# ===========================================================
# State
# ===========================================================

def test_state_runs_callback_on_second_step():
    callback = MagicMock()
    state = State(callback)
    state.reset()

    assert state.execute() is StepStatus.RUNNING
    callback.assert_not_called()
    assert state.execute() is StepStatus.DONE
    callback.assert_called_once()


def test_state_without_callback_completes():
    assert _drive(State()) == 2


def test_state_reset_restarts_body():
    callback = MagicMock()
    state = State(callback)

    _drive(state)
    _drive(state)

    assert callback.call_count == 2


def test_default_name_is_class_name():
    assert State().name == "State"
    assert State(name="Menu").name == "Menu"


# ===========================================================
# DelayState
# ===========================================================

def test_delay_completes_on_fourth_half_second_tick(clock):
    state = DelayState(2.0, clock)
    state.reset()
    state.enter()

    results = []
    for _ in range(4):
        clock.advance(0.5)
        results.append(state.execute())

    assert results == [StepStatus.RUNNING] * 3 + [StepStatus.DONE]


def test_zero_delay_completes_immediately(clock):
    assert _drive(DelayState(0.0, clock)) == 1


def test_negative_delay_rejected(clock):
    with pytest.raises(ConfigurationError):
        DelayState(-1.0, clock)


def test_delay_frozen_while_clock_paused(clock):
    state = DelayState(1.0, clock)
    state.reset()

    clock.pause()
    clock.advance(5.0)
    assert state.execute() is StepStatus.RUNNING
    assert state.elapsed == 0.0

    clock.resume()
    clock.advance(1.0)
    assert state.execute() is StepStatus.DONE


def test_unscaled_delay_ignores_pause(clock):
    state = DelayState(1.0, clock, unscaled=True)
    state.reset()

    clock.pause()
    clock.advance(1.0)

    assert state.execute() is StepStatus.DONE


def test_delay_restarts_on_reactivation(clock):
    state = DelayState(1.0, clock)
    state.reset()
    clock.advance(1.0)
    assert state.execute() is StepStatus.DONE

    state.reset()
    assert state.execute() is StepStatus.RUNNING


# ===========================================================
# PauseState
# ===========================================================

def test_pause_state_holds_clock_until_exit(clock):
    on_pause = MagicMock()
    state = PauseState(clock, on_pause)

    state.reset()
    state.enter()
    assert clock.is_paused
    on_pause.assert_called_once()

    assert state.execute() is StepStatus.RUNNING
    assert state.execute() is StepStatus.DONE

    state.exit()
    assert not clock.is_paused


def test_pause_state_exit_without_enter_does_not_resume(clock):
    PauseState(clock).exit()
    assert clock.pause_depth == 0


def test_pause_state_double_enter_pauses_once(clock):
    state = PauseState(clock)
    state.enter()
    state.enter()
    state.exit()

    assert not clock.is_paused


def test_pause_state_nests_with_outer_pause(clock):
    clock.pause()
    state = PauseState(clock)
    state.enter()
    state.exit()

    assert clock.is_paused
    assert clock.pause_depth == 1


# ===========================================================
# Scene States
# ===========================================================

def test_load_scene_state_polls_until_loaded(scene_controller):
    loaded = MagicMock()
    state = LoadSceneState(scene_controller, "Levels/Level1.scene", loaded)

    assert _drive(state) == 2
    loaded.assert_called_once()
    assert scene_controller.last_scene.name == "Level1"


def test_load_scene_state_name_includes_path(scene_controller):
    state = LoadSceneState(scene_controller, "Levels/Level1.scene")
    assert state.name == "LoadSceneState: Levels/Level1.scene"


def test_load_scene_with_empty_id_fails_before_backend(scene_controller, scene_backend):
    state = LoadSceneState(scene_controller, "")
    state.reset()

    with pytest.raises(ConfigurationError):
        state.execute()
    assert scene_backend.operations == []


def test_load_level_state_passes_definition(scene_controller, scene_backend):
    loaded = MagicMock()
    level = LevelDefinition("Level2", {"speed": 3})
    state = LoadLevelState(scene_controller, level, loaded)

    _drive(state)

    loaded.assert_called_once_with(level)
    assert ("create", "Level2") in scene_backend.operations
    assert state.name == "LoadLevelState: Level2"


def test_load_level_state_without_definition_raises(scene_controller, scene_backend):
    state = LoadLevelState(scene_controller, None)
    state.reset()

    with pytest.raises(ConfigurationError):
        state.execute()
    assert scene_backend.operations == []


def test_unload_state_returns_to_base(scene_controller):
    _drive(LoadSceneState(scene_controller, "a.scene"))
    _drive(UnloadLastSceneState(scene_controller))

    assert scene_controller.last_scene == scene_controller.never_unload_scene


def test_scene_state_restarts_task_after_reset(scene_controller, scene_backend):
    state = LoadSceneState(scene_controller, "a.scene")
    _drive(state)
    _drive(state)

    assert scene_backend.operations.count(("load", "a.scene")) == 2


# ===========================================================
# Link Ownership
# ===========================================================

def test_first_open_link_wins_in_insertion_order():
    event = GameEvent("x")
    first, second = State(name="A"), State(name="B")
    owner = State()
    owner.add_link(Link(first))
    owner.add_link(EventLink(event, second))
    owner.enable_links()

    event.fire()

    assert owner.validate_links() is first


def test_add_same_link_twice_ignored():
    owner = State()
    link = Link(State())
    owner.add_link(link)
    owner.add_link(link)

    assert owner.links == (link,)


def test_remove_link_disarms_armed_link():
    event = GameEvent("x")
    owner = State()
    link = EventLink(event, State())
    owner.add_link(link)
    owner.enable_links()

    owner.remove_link(link)

    assert not link.is_armed
    assert owner.links == ()


def test_remove_all_links_disarms_and_keeps_enabled_flag():
    event = GameEvent("x")
    owner = State()
    owner.add_link(EventLink(event, State()))
    owner.add_link(EventLink(event, State()))
    owner.enable_links()

    owner.remove_all_links()

    assert event.listener_count == 0
    assert owner.links == ()
    assert owner.links_enabled


def test_disable_links_clears_enabled_flag():
    owner = State()
    owner.add_link(Link(State()))
    owner.enable_links()
    owner.disable_links()

    assert not owner.links_enabled
