"""Field data structures for ToggleField.

A Field owns every Cell of one generation pass together with the cycles and
chains that were used to connect them. A new generation always builds a new
Field; cells are never shared between fields.
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field

from togglefield.cell import Cell, CellRole, cell_id


@dataclass
class Cycle:
    """A closed ring of cells: each member connects to the next one."""

    members: list[str]

    @property
    def size(self) -> int:
        """Number of cells in the ring."""
        return len(self.members)

    def is_closed(self, cells: dict[str, Cell]) -> bool:
        """Check that member i connects to member i+1 (mod size)."""
        if not self.members:
            return False
        for i, member_id in enumerate(self.members):
            next_id = self.members[(i + 1) % len(self.members)]
            member = cells.get(member_id)
            if member is None or next_id not in member.connection_ids:
                return False
        return True


@dataclass
class Chain:
    """A linear sequence of cells linking a source cell to a target cell.

    A chain without a target is the tail that consumes the leftover cells.
    """

    source_id: str
    cell_ids: list[str] = field(default_factory=list)
    target_id: str | None = None

    @property
    def length(self) -> int:
        """Number of intermediate cells drawn for the chain."""
        return len(self.cell_ids)


@dataclass
class Field:
    """The complete toggle field.

    Attributes:
        size: Grid side length (the field holds size * size cells).
        seed: Seed of the generation that produced the field.
        percent: Legacy budget percentage, carried through save files.
        cells: Cells keyed by id, in row-major order.
        entry_id: Id of the entry cell (empty until linking).
        cycles: Cycles created by the cycle builder.
        chains: Chains created by the sequence linker.
    """

    size: int
    seed: int = 0
    percent: int = 45
    cells: dict[str, Cell] = field(default_factory=dict)
    entry_id: str = ""
    cycles: list[Cycle] = field(default_factory=list)
    chains: list[Chain] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        size: int,
        seed: int = 0,
        percent: int = 45,
        rng: random.Random | None = None,
    ) -> Field:
        """Create a field of size * size unconnected cells.

        When `rng` is given each cell gets a random starting state,
        otherwise all cells start off.
        """
        result = cls(size=size, seed=seed, percent=percent)
        for y in range(size):
            for x in range(size):
                state = rng.random() < 0.5 if rng is not None else False
                result.add_cell(Cell(id=cell_id(x, y), x=x, y=y, state=state))
        return result

    def add_cell(self, cell: Cell) -> None:
        """Add a cell to the field."""
        self.cells[cell.id] = cell

    def get_cell(self, cell_id: str) -> Cell | None:
        """Get a cell by id, or None if not found."""
        return self.cells.get(cell_id)

    def cell_at(self, x: int, y: int) -> Cell | None:
        """Get the cell at column x, row y, or None if out of bounds."""
        return self.cells.get(cell_id(x, y))

    @property
    def entry(self) -> Cell | None:
        """The entry cell, or None before linking."""
        return self.cells.get(self.entry_id) if self.entry_id else None

    def set_entry(self, cell: Cell) -> None:
        """Mark a cell as the unique entry of the field."""
        for other in self.cells.values():
            if other.role.is_entry:
                other.role = CellRole.NORMAL
        cell.role = CellRole.ENTRY
        self.entry_id = cell.id

    @property
    def cell_count(self) -> int:
        """Return the total number of cells."""
        return len(self.cells)

    def count_on(self) -> int:
        """Return the number of cells currently on."""
        return sum(1 for cell in self.cells.values() if cell.state)

    def is_uniform(self) -> bool:
        """Whether all cells share the same state (the winning condition)."""
        return self.count_on() in (0, self.cell_count)

    def reachable_from(self, start_id: str) -> set[str]:
        """Find all cell ids reachable from a cell via connections (BFS)."""
        if start_id not in self.cells:
            return set()

        reachable: set[str] = set()
        queue: deque[str] = deque([start_id])

        while queue:
            current = queue.popleft()
            if current in reachable:
                continue
            reachable.add(current)
            for target in self.cells[current].connections:
                if target.id not in reachable:
                    queue.append(target.id)

        return reachable

    def validate_structure(self) -> list[str]:
        """Validate the field structure for correctness.

        Checks:
        - entry_id is set and references an existing cell
        - Exactly one cell carries the entry role
        - Connections reference cells of this field, never the cell itself
        - Every cell is reachable from the entry

        Returns:
            List of error messages. Empty list means valid.
        """
        errors: list[str] = []

        if not self.entry_id:
            errors.append("Missing entry_id")
        elif self.entry_id not in self.cells:
            errors.append(f"Entry cell '{self.entry_id}' not found in cells")

        entries = [c.id for c in self.cells.values() if c.role.is_entry]
        if len(entries) != 1:
            errors.append(f"Expected exactly one entry cell, found {len(entries)}")
        elif self.entry_id and entries[0] != self.entry_id:
            errors.append(
                f"Entry role on '{entries[0]}' but entry_id is '{self.entry_id}'"
            )

        for cell in self.cells.values():
            for target in cell.connections:
                if target.id == cell.id:
                    errors.append(f"Cell '{cell.id}' is connected to itself")
                elif self.cells.get(target.id) is not target:
                    errors.append(
                        f"Cell '{cell.id}' connects to '{target.id}' outside the field"
                    )

        if self.entry_id in self.cells:
            reachable = self.reachable_from(self.entry_id)
            for cid in self.cells:
                if cid not in reachable:
                    errors.append(f"Cell '{cid}' is unreachable from entry")

        return errors
