"""Cycle builder for ToggleField.

Half of the grid is spent on closed toggle rings. The number of rings and
their sizes come from a composition of the cycle budget: an ordered
sequence of ring sizes in [min_size, max_size] whose sum fits the budget.
One composition is chosen uniformly among all of them.
"""

from __future__ import annotations

import logging
import random
from functools import lru_cache

from togglefield.config import GridConfig
from togglefield.errors import InvalidConfiguration
from togglefield.field import Cycle, Field
from togglefield.pool import CellPool

logger = logging.getLogger(__name__)


def enumerate_compositions(
    limit: int, min_size: int = 3, max_size: int = 6
) -> list[tuple[int, ...]]:
    """Enumerate every composition of ring sizes whose sum is <= limit.

    Compositions are produced in pre-order: a composition is recorded
    before the compositions that extend it, and extensions are tried in
    increasing ring size. Every prefix of a composition is itself recorded.

    Args:
        limit: Cell budget for all rings.
        min_size: Smallest ring size.
        max_size: Largest ring size.

    Returns:
        List of compositions (empty if limit < min_size).
    """
    compositions: list[tuple[int, ...]] = []

    def extend(prefix: tuple[int, ...], remaining: int) -> None:
        for size in range(min_size, max_size + 1):
            if size > remaining:
                break
            composition = prefix + (size,)
            compositions.append(composition)
            extend(composition, remaining - size)

    extend((), limit)
    return compositions


@lru_cache(maxsize=None)
def _composition_counts(limit: int, min_size: int, max_size: int) -> tuple[int, ...]:
    """Composition counts for every budget from 0 to limit (bottom-up)."""
    counts = [0] * (limit + 1)
    for remaining in range(limit + 1):
        counts[remaining] = sum(
            1 + counts[remaining - size]
            for size in range(min_size, min(max_size, remaining) + 1)
        )
    return tuple(counts)


def count_compositions(limit: int, min_size: int = 3, max_size: int = 6) -> int:
    """Count the compositions enumerate_compositions() would return."""
    if limit < 0:
        return 0
    return _composition_counts(limit, min_size, max_size)[limit]


def composition_at(
    index: int, limit: int, min_size: int = 3, max_size: int = 6
) -> tuple[int, ...]:
    """Return enumerate_compositions(limit, ...)[index] without enumerating.

    Raises:
        IndexError: If index is out of range.
    """
    counts = _composition_counts(max(limit, 0), min_size, max_size)
    if limit < 0 or index < 0 or index >= counts[limit]:
        raise IndexError(f"Composition index {index} out of range")

    result: list[int] = []
    remaining = limit
    while True:
        for size in range(min_size, min(max_size, remaining) + 1):
            block = 1 + counts[remaining - size]
            if index < block:
                break
            index -= block
        result.append(size)
        if index == 0:
            return tuple(result)
        index -= 1
        remaining -= size


def choose_composition(
    limit: int, rng: random.Random, min_size: int = 3, max_size: int = 6
) -> tuple[int, ...]:
    """Pick one composition uniformly at random.

    Equivalent to rng-picking from enumerate_compositions(), but counts
    instead of listing so large grids stay cheap.

    Raises:
        InvalidConfiguration: If no composition fits the budget.
    """
    total = count_compositions(limit, min_size, max_size)
    if total == 0:
        raise InvalidConfiguration(
            f"Cycle budget {limit} is smaller than the minimum cycle size {min_size}"
        )
    return composition_at(rng.randrange(total), limit, min_size, max_size)


def build_cycles(
    field: Field, pool: CellPool, rng: random.Random, grid: GridConfig
) -> list[Cycle]:
    """Choose ring sizes and materialize each ring from free cells.

    Each ring is connected in draw order: member i connects to member
    i+1 and the last member connects back to the first.

    Args:
        field: Field receiving the cycles.
        pool: Pool to draw cells from.
        rng: Random number generator.
        grid: Grid configuration (budget and ring size bounds).

    Returns:
        The created cycles, also recorded on the field.
    """
    composition = choose_composition(
        grid.cycle_budget, rng, grid.min_cycle_size, grid.max_cycle_size
    )
    logger.debug(
        "Cycle composition %s (budget %d, %d cells)",
        composition,
        grid.cycle_budget,
        sum(composition),
    )

    cycles: list[Cycle] = []
    for size in composition:
        members = [pool.take() for _ in range(size)]
        for current, following in zip(members, members[1:] + members[:1]):
            current.connect(following)
        cycle = Cycle([m.id for m in members])
        field.cycles.append(cycle)
        cycles.append(cycle)

    return cycles
