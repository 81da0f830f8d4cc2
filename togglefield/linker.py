"""Sequence linker for ToggleField.

Connects the entry cell, every cycle and all remaining free cells into one
structure reachable from the entry:

- entry -> chain -> a member of the first cycle
- base cycle member -> chain -> a member of each following cycle, where a
  coin flip decides whether the newly linked cycle becomes the base
- base cycle member -> tail chain draining the pool
"""

from __future__ import annotations

import logging
import random

from togglefield.cell import Cell
from togglefield.config import GridConfig
from togglefield.errors import PoolExhausted
from togglefield.field import Chain, Cycle, Field
from togglefield.pool import CellPool

logger = logging.getLogger(__name__)

MIN_CHAIN_LENGTH = 3


def pick_chain_length(
    max_length: int, rng: random.Random, min_length: int = MIN_CHAIN_LENGTH
) -> int:
    """Draw a chain length in [min_length, max_length], biased toward long.

    Uses the larger of two uniform draws.
    """
    span = max_length - min_length + 1
    return min_length + int(max(rng.random(), rng.random()) * span)


def _draw_chain(
    field: Field,
    pool: CellPool,
    length: int,
    source: Cell,
    target: Cell | None,
) -> Chain:
    """Draw `length` free cells and connect source -> c1 -> ... -> target."""
    chain = Chain(source_id=source.id, target_id=target.id if target else None)
    previous = source
    for _ in range(length):
        cell = pool.take(exclude=previous)
        previous.connect(cell)
        chain.cell_ids.append(cell.id)
        previous = cell
    if target is not None:
        previous.connect(target)
    field.chains.append(chain)
    return chain


def link_sequence(
    field: Field,
    pool: CellPool,
    rng: random.Random,
    max_length: int,
    source: Cell,
    target: Cell | None = None,
    min_length: int = MIN_CHAIN_LENGTH,
) -> Chain:
    """Link two cells through a chain of freshly drawn free cells.

    When the pool cannot supply the drawn length, the maximum is lowered by
    one and the length redrawn.

    Args:
        field: Field receiving the chain.
        pool: Pool to draw cells from.
        rng: Random number generator.
        max_length: Longest acceptable chain.
        source: Cell the chain starts from.
        target: Cell the chain ends on (None for an open tail).
        min_length: Shortest acceptable chain.

    Returns:
        The created chain.

    Raises:
        PoolExhausted: If no length >= min_length fits the pool.
    """
    while max_length >= min_length:
        length = pick_chain_length(max_length, rng, min_length)
        if length <= pool.free_count():
            logger.debug(
                "Chain %s -> %s: %d cells (max %d)",
                source.id,
                target.id if target else "-",
                length,
                max_length,
            )
            return _draw_chain(field, pool, length, source, target)
        max_length -= 1

    raise PoolExhausted(
        f"Cannot link {source.id}: {pool.free_count()} free cells, "
        f"chains need at least {min_length}"
    )


def _bridge(
    field: Field,
    pool: CellPool,
    rng: random.Random,
    max_length: int,
    source: Cell,
    target: Cell,
    min_length: int,
) -> Chain:
    """Link two cells, shortening the chain to what the pool can still give."""
    try:
        return link_sequence(field, pool, rng, max_length, source, target, min_length)
    except PoolExhausted:
        length = min(pool.free_count(), max(max_length, 0))
        logger.debug(
            "Short bridge %s -> %s with %d cells", source.id, target.id, length
        )
        return _draw_chain(field, pool, length, source, target)


def link_field(
    field: Field,
    pool: CellPool,
    cycles: list[Cycle],
    rng: random.Random,
    grid: GridConfig,
) -> Cell:
    """Connect entry, cycles and leftover cells into a single structure.

    Args:
        field: Field holding the cells and cycles.
        pool: Pool with the cells not used by cycles.
        cycles: Cycles to link, in creation order.
        rng: Random number generator.
        grid: Grid configuration (minimum chain length).

    Returns:
        The entry cell.

    Raises:
        PoolExhausted: If no free cell is left for the entry.
    """
    entry = pool.take()
    field.set_entry(entry)

    if not cycles:
        if pool.free_count():
            _draw_chain(field, pool, pool.free_count(), entry, None)
        return entry

    min_length = grid.min_chain_length
    max_length = pool.free_count() // len(cycles)

    def member(cycle: Cycle) -> Cell:
        return field.cells[rng.choice(cycle.members)]

    _bridge(field, pool, rng, max_length, entry, member(cycles[0]), min_length)

    base = cycles[0]
    for cycle in cycles[1:]:
        _bridge(field, pool, rng, max_length, member(base), member(cycle), min_length)
        if rng.random() < 0.5:
            base = cycle

    if pool.free_count():
        _draw_chain(field, pool, pool.free_count(), member(base), None)

    return entry
