"""Event dispatch for ToggleField games."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any


class GameEvent(Enum):
    """Notifications emitted by a game."""

    GENERATED = "generated"
    VICTORY = "victory"
    CELL_TOGGLE = "cell:toggle"


class EventDispatcher:
    """Ordered subscriber lists keyed by event.

    Callbacks run synchronously, in subscription order.
    """

    def __init__(self) -> None:
        self._subscribers: dict[GameEvent, list[Callable[..., Any]]] = {
            event: [] for event in GameEvent
        }

    def on(self, event: GameEvent | str, callback: Callable[..., Any]) -> None:
        """Subscribe a callback to an event."""
        self._subscribers[GameEvent(event)].append(callback)

    def off(self, event: GameEvent | str, callback: Callable[..., Any]) -> None:
        """Unsubscribe a callback; unknown callbacks are ignored."""
        callbacks = self._subscribers[GameEvent(event)]
        if callback in callbacks:
            callbacks.remove(callback)

    def trigger(self, event: GameEvent | str, *args: Any) -> None:
        """Call every subscriber of an event with the given arguments."""
        for callback in list(self._subscribers[GameEvent(event)]):
            callback(*args)

    def subscribers(self, event: GameEvent | str) -> list[Callable[..., Any]]:
        """Return a copy of the subscribers of an event."""
        return list(self._subscribers[GameEvent(event)])
