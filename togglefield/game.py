"""Playable game built on a generated field.

The game owns the current field and replaces it wholesale on every
(re)generation. Pressing a cell flips it and its direct connections; the
game is won once every cell shares the same state.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

from togglefield.cell import Cell
from togglefield.config import Config
from togglefield.events import EventDispatcher, GameEvent
from togglefield.field import Field
from togglefield.generator import GenerationResult, generate_with_retry


class Game:
    """A toggle puzzle session.

    Attributes:
        config: Configuration used for the next generation.
        events: Dispatcher for generated / victory / cell:toggle events.
        field: Current field, or None before the first generation.
        result: Generation result of the current field.
        moves: Number of presses since the field was generated.
    """

    def __init__(self, config: Config | None = None, max_attempts: int = 100) -> None:
        self.config = config if config is not None else Config()
        self.max_attempts = max_attempts
        self.events = EventDispatcher()
        self.field: Field | None = None
        self.result: GenerationResult | None = None
        self.moves = 0

    def on(self, event: GameEvent | str, callback: Callable[..., Any]) -> None:
        """Subscribe to a game event."""
        self.events.on(event, callback)

    def off(self, event: GameEvent | str, callback: Callable[..., Any]) -> None:
        """Unsubscribe from a game event."""
        self.events.off(event, callback)

    @property
    def size(self) -> int:
        """Current grid size."""
        return self.config.grid.size

    def generate(
        self,
        size: int | None = None,
        percent: int | None = None,
        seed: int | None = None,
    ) -> Field:
        """Generate a new field, replacing the current one.

        On failure the previous field is kept and no event is emitted.

        Args:
            size: Grid size (default: current size).
            percent: Legacy budget percentage (default: current).
            seed: Seed to use (default: config seed, 0 = random).

        Returns:
            The new field.

        Raises:
            GenerationError: If no valid field could be generated.
        """
        grid = dataclasses.replace(
            self.config.grid,
            size=self.config.grid.size if size is None else size,
            percent=self.config.grid.percent if percent is None else percent,
        )
        config = dataclasses.replace(
            self.config,
            grid=grid,
            seed=self.config.seed if seed is None else seed,
        )

        result = generate_with_retry(config, max_attempts=self.max_attempts)

        self.config = config
        self.result = result
        self.field = result.field
        self.moves = 0
        self.events.trigger(GameEvent.GENERATED, self)
        return result.field

    def restart(self, size: int | None = None) -> Field:
        """Regenerate the field with a fresh random seed."""
        return self.generate(size=size, seed=0)

    def _require_field(self) -> Field:
        if self.field is None:
            raise RuntimeError("No field generated yet")
        return self.field

    def toggle(self, cell: Cell | str) -> Cell:
        """Press a cell: flip it and every directly connected cell.

        Args:
            cell: The cell or its id.

        Returns:
            The pressed cell.

        Raises:
            RuntimeError: If no field has been generated.
            KeyError: If the cell does not belong to the current field.
        """
        field = self._require_field()
        key = cell.id if isinstance(cell, Cell) else cell
        target = field.get_cell(key)
        if target is None:
            raise KeyError(f"Unknown cell: {key}")

        target.press()
        self.moves += 1
        self.events.trigger(GameEvent.CELL_TOGGLE, self, target)

        if self.is_victory():
            self.events.trigger(GameEvent.VICTORY, self)
        return target

    def is_victory(self) -> bool:
        """Whether all cells are off or all cells are on."""
        field = self._require_field()
        return field.count_on() in (0, field.size * field.size)
