"""Tests for event dispatch."""

import pytest

from togglefield.events import EventDispatcher, GameEvent


class TestEventDispatcher:
    """Tests for EventDispatcher."""

    def test_trigger_calls_subscribers_in_order(self):
        """Callbacks run in subscription order with the trigger arguments."""
        dispatcher = EventDispatcher()
        calls = []
        dispatcher.on(GameEvent.VICTORY, lambda *a: calls.append(("first", a)))
        dispatcher.on(GameEvent.VICTORY, lambda *a: calls.append(("second", a)))
        dispatcher.trigger(GameEvent.VICTORY, 1, 2)
        assert calls == [("first", (1, 2)), ("second", (1, 2))]

    def test_events_are_independent(self):
        """Only subscribers of the triggered event run."""
        dispatcher = EventDispatcher()
        calls = []
        dispatcher.on(GameEvent.GENERATED, lambda: calls.append("generated"))
        dispatcher.trigger(GameEvent.VICTORY)
        assert calls == []

    def test_string_event_names(self):
        """Event names are accepted as strings."""
        dispatcher = EventDispatcher()
        calls = []
        dispatcher.on("cell:toggle", lambda: calls.append("toggle"))
        dispatcher.trigger(GameEvent.CELL_TOGGLE)
        dispatcher.trigger("cell:toggle")
        assert calls == ["toggle", "toggle"]

    def test_unknown_event_name(self):
        """Unknown event names raise ValueError."""
        dispatcher = EventDispatcher()
        with pytest.raises(ValueError):
            dispatcher.on("explode", lambda: None)

    def test_off(self):
        """Unsubscribed callbacks no longer run."""
        dispatcher = EventDispatcher()
        calls = []

        def callback():
            calls.append("x")

        dispatcher.on(GameEvent.VICTORY, callback)
        dispatcher.off(GameEvent.VICTORY, callback)
        dispatcher.off(GameEvent.VICTORY, callback)  # no-op
        dispatcher.trigger(GameEvent.VICTORY)
        assert calls == []
        assert dispatcher.subscribers(GameEvent.VICTORY) == []

    def test_unsubscribe_during_trigger(self):
        """A callback removing itself does not skip the next one."""
        dispatcher = EventDispatcher()
        calls = []

        def once():
            calls.append("once")
            dispatcher.off(GameEvent.GENERATED, once)

        dispatcher.on(GameEvent.GENERATED, once)
        dispatcher.on(GameEvent.GENERATED, lambda: calls.append("always"))
        dispatcher.trigger(GameEvent.GENERATED)
        dispatcher.trigger(GameEvent.GENERATED)
        assert calls == ["once", "always", "always"]
