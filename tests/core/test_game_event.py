"""
test_game_event.py
------------------
Unit tests for GameEvent and the flow event registry.

Covers:
1. Idempotent subscribe/unsubscribe
2. Reverse-registration notification order
3. Payload reset after fire
4. Listeners removing themselves or others mid-fire
"""

from gameflow.core.services.game_event import (
    FlowEvents,
    GameEvent,
    GenericGameEventListener,
    ItemPickedEvent,
    LevelCompletedEvent,
    get_flow_events,
    reset_flow_events,
)


# ===========================================================
# Subscription
# ===========================================================

def test_double_subscribe_notifies_once(make_listener):
    event = GameEvent("continue")
    log = []
    listener = make_listener("a", log)

    event.subscribe(listener)
    event.subscribe(listener)
    event.fire()

    assert log == ["a"]
    assert event.listener_count == 1


def test_unsubscribe_unknown_listener_is_noop(make_listener):
    event = GameEvent()
    event.unsubscribe(make_listener("ghost", []))
    assert event.listener_count == 0


def test_unsubscribed_listener_not_notified(make_listener):
    event = GameEvent()
    log = []
    listener = make_listener("a", log)
    event.subscribe(listener)
    event.unsubscribe(listener)

    event.fire()

    assert log == []
    assert not event.is_subscribed(listener)


def test_fire_without_listeners_is_valid():
    event = ItemPickedEvent()
    event.fire(5)
    assert event.count == -1


# ===========================================================
# Dispatch Order
# ===========================================================

def test_listeners_notified_in_reverse_registration_order(make_listener):
    event = GameEvent()
    log = []
    for label in ("first", "second", "third"):
        event.subscribe(make_listener(label, log))

    event.fire()

    assert log == ["third", "second", "first"]


def test_listener_can_unsubscribe_itself_during_fire(make_listener):
    event = GameEvent()
    log = []
    event.subscribe(make_listener("a", log))
    event.subscribe(make_listener("b", log, on_raise=event.unsubscribe))
    event.subscribe(make_listener("c", log))

    event.fire()
    event.fire()

    assert log == ["c", "b", "a", "c", "a"]


def test_listener_removed_by_another_is_skipped(make_listener):
    event = GameEvent()
    log = []
    victim = make_listener("victim", log)
    event.subscribe(victim)
    event.subscribe(make_listener("killer", log, on_raise=lambda _: event.unsubscribe(victim)))

    event.fire()

    assert log == ["killer"]


def test_listener_added_during_fire_waits_for_next_fire(make_listener):
    event = GameEvent()
    log = []
    late = make_listener("late", log)
    event.subscribe(make_listener("adder", log, on_raise=lambda _: event.subscribe(late)))

    event.fire()
    assert log == ["adder"]

    event.fire()
    assert log == ["adder", "late", "adder"]


# ===========================================================
# Payload
# ===========================================================

def test_payload_visible_during_fire_and_reset_after(make_listener):
    event = ItemPickedEvent()
    seen = []
    event.subscribe(make_listener("a", [], on_raise=lambda _: seen.append(event.count)))

    event.fire(7)

    assert seen == [7]
    assert event.count == ItemPickedEvent.UNSET_PAYLOAD


def test_payload_set_before_fire_is_kept(make_listener):
    event = ItemPickedEvent()
    seen = []
    event.subscribe(make_listener("a", [], on_raise=lambda _: seen.append(event.count)))

    event.count = 3
    event.fire()

    assert seen == [3]
    assert event.count == -1


def test_plain_event_payload_resets_to_none():
    event = GameEvent()
    event.fire("anything")
    assert event.payload is None


# ===========================================================
# Generic Listener & Registry
# ===========================================================

def test_generic_listener_invokes_handler():
    event = GameEvent()
    calls = []
    listener = GenericGameEventListener(event, lambda: calls.append(1))

    listener.start_listening()
    event.fire()
    listener.stop_listening()
    event.fire()

    assert calls == [1]


def test_flow_events_exposes_standard_events():
    events = FlowEvents()
    assert set(events.names()) == {"continue", "back", "win", "lose", "pause"}
    assert isinstance(events.win_event, LevelCompletedEvent)
    assert events.get("continue") is events.continue_event


def test_flow_events_get_creates_missing_event():
    events = FlowEvents()
    custom = events.get("shop")
    assert events.get("shop") is custom


def test_flow_events_singleton_resets():
    first = get_flow_events()
    assert get_flow_events() is first
    reset_flow_events()
    assert get_flow_events() is not first
