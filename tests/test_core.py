"""Tests for the state machine and event bus."""

from enum import Enum, auto

from skichase.core.events import Event, EventBus, EventType, key_down_event, tick_event
from skichase.core.state import StateMachine


class Light(Enum):
    RED = auto()
    GREEN = auto()
    YELLOW = auto()


TRANSITIONS = [
    (Light.RED, Light.GREEN),
    (Light.GREEN, Light.YELLOW),
    (Light.YELLOW, Light.RED),
]


def _machine():
    return StateMachine("light", Light.RED, TRANSITIONS)


# ── StateMachine ─────────────────────────────────────────────────────

class TestStateMachine:
    def test_initial_state(self):
        assert _machine().state == Light.RED

    def test_valid_transition(self):
        machine = _machine()
        assert machine.transition(Light.GREEN)
        assert machine.state == Light.GREEN

    def test_invalid_transition_refused(self, caplog):
        machine = _machine()
        assert not machine.transition(Light.YELLOW)
        assert machine.state == Light.RED
        assert "invalid transition RED -> YELLOW" in caplog.text

    def test_can_transition(self):
        machine = _machine()
        assert machine.can_transition(Light.GREEN)
        assert not machine.can_transition(Light.RED)

    def test_listeners_get_old_and_new(self):
        machine = _machine()
        seen = []
        machine.add_listener(lambda old, new: seen.append((old, new)))
        machine.transition(Light.GREEN)
        machine.transition(Light.RED)  # refused, no notification
        assert seen == [(Light.RED, Light.GREEN)]

    def test_failing_listener_does_not_block_others(self):
        machine = _machine()
        seen = []

        def broken(old, new):
            raise RuntimeError("boom")

        machine.add_listener(broken)
        machine.add_listener(lambda old, new: seen.append(new))
        assert machine.transition(Light.GREEN)
        assert seen == [Light.GREEN]


# ── EventBus ─────────────────────────────────────────────────────────

class TestEventBus:
    def test_subscribe_and_emit(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.PAUSED, received.append)
        bus.emit(Event(EventType.PAUSED, data={"score": 3}))
        bus.emit(Event(EventType.RESUMED))
        assert [e.type for e in received] == [EventType.PAUSED]
        assert received[0].data["score"] == 3

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe(EventType.TICK, received.append)
        unsubscribe()
        bus.emit(tick_event(0, 0))
        assert received == []

    def test_subscribe_all(self):
        bus = EventBus()
        received = []
        bus.subscribe_all(received.append)
        bus.emit(key_down_event("p"))
        bus.emit(tick_event(16.0, 1))
        assert [e.type for e in received] == [EventType.KEY_DOWN, EventType.TICK]
        assert received[0].data == {"key": "p"}
        assert received[1].data == {"time": 16.0, "frame": 1}

    def test_handler_error_does_not_stop_dispatch(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise ValueError("bad handler")

        bus.subscribe(EventType.QUIT, broken)
        bus.subscribe(EventType.QUIT, received.append)
        bus.emit(Event(EventType.QUIT))
        assert len(received) == 1
