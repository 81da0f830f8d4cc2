"""Pool of cells that are still free during field generation."""

from __future__ import annotations

import random
from collections.abc import Iterable

from togglefield.cell import Cell
from togglefield.config import DEFAULT_DRAW_ATTEMPTS
from togglefield.errors import PoolExhausted


class CellPool:
    """Tracks which cells have not been assigned to a structure yet.

    Every cell passed to `create` is handed out at most once. Draws are
    uniform over the cells that are still free.
    """

    def __init__(
        self, rng: random.Random, max_attempts: int = DEFAULT_DRAW_ATTEMPTS
    ) -> None:
        self.rng = rng
        self.max_attempts = max_attempts
        self._cells: dict[str, Cell] = {}
        self._consumed: dict[str, bool] = {}
        self._free: list[str] = []

    def create(self, cells: Iterable[Cell]) -> None:
        """Mark every given cell as free, discarding any previous state."""
        self._cells = {cell.id: cell for cell in cells}
        self._consumed = {cid: False for cid in self._cells}
        self._free = list(self._cells)

    def free_count(self) -> int:
        """Number of cells still free."""
        return len(self._free)

    def is_free(self, cell: Cell) -> bool:
        """Whether the cell belongs to the pool and has not been drawn."""
        return self._consumed.get(cell.id) is False

    def draw_free(self, exclude: Cell | None = None) -> Cell | None:
        """Draw and consume a random free cell.

        Args:
            exclude: Cell that must not be returned.

        Returns:
            The drawn cell, or None if no acceptable free cell was found
            within `max_attempts` draws.
        """
        if not self._free:
            return None
        if exclude is not None and self._free == [exclude.id]:
            return None

        for _ in range(self.max_attempts):
            index = int(self.rng.random() * len(self._free))
            chosen = self._free[index]
            if exclude is not None and chosen == exclude.id:
                continue
            # Swap-remove keeps the draw order reproducible
            self._free[index] = self._free[-1]
            self._free.pop()
            self._consumed[chosen] = True
            return self._cells[chosen]

        return None

    def take(self, exclude: Cell | None = None) -> Cell:
        """Draw a free cell, raising PoolExhausted when none is available."""
        cell = self.draw_free(exclude)
        if cell is None:
            raise PoolExhausted(
                f"No free cell available ({self.free_count()} free, "
                f"exclude={exclude.id if exclude else None})"
            )
        return cell
