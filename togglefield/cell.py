"""Cell data structures for ToggleField.

A cell is one square of the grid. Pressing a cell flips its own state and
the state of every cell it is connected to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class CellRole(Enum):
    """Structural role of a cell in the generated field."""

    NORMAL = "normal"
    ENTRY = "entry"  # Starting point of the linked structure

    @property
    def is_entry(self) -> bool:
        """Whether this role marks the entry cell."""
        return self is CellRole.ENTRY


def cell_id(x: int, y: int) -> str:
    """Build the id of the cell at column x, row y (0-based)."""
    return f"{x}_{y}"


@dataclass
class Cell:
    """A single grid cell with a binary state and outgoing toggle links.

    Cells are identified by their `id` field. Two cells with the same id
    are considered equal regardless of other fields.
    """

    id: str
    x: int
    y: int
    state: bool = False
    connections: list[Cell] = field(default_factory=list, repr=False)
    role: CellRole = CellRole.NORMAL

    def __hash__(self) -> int:
        """Hash by id only."""
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        """Equality by id only."""
        if not isinstance(other, Cell):
            return NotImplemented
        return self.id == other.id

    @property
    def is_entry(self) -> bool:
        """Whether this cell is the entry of the field."""
        return self.role.is_entry

    @property
    def connection_ids(self) -> list[str]:
        """Ids of connected cells, in connection order."""
        return [c.id for c in self.connections]

    def connect(self, cell: Cell, backward: bool = False) -> None:
        """Connect this cell to another one.

        Args:
            cell: Cell toggled whenever this cell is pressed.
            backward: Connect `cell -> self` instead.

        Raises:
            ValueError: If a cell would be connected to itself.
        """
        if backward:
            cell.connect(self)
            return
        if cell.id == self.id:
            raise ValueError(f"Cell {self.id} cannot be connected to itself")
        self.connections.append(cell)

    def toggle(self) -> None:
        """Flip the cell state."""
        self.state = not self.state

    def toggle_connected(self) -> None:
        """Flip the state of every directly connected cell."""
        for cell in self.connections:
            cell.toggle()

    def press(self) -> None:
        """Flip this cell and its direct connections (one level deep)."""
        self.toggle()
        self.toggle_connected()
