"""Field generation for ToggleField.

Builds a field in one pass:
- Cells: size * size cells with random starting states
- Cycles: closed toggle rings using half of the grid
- Links: chains from the entry cell through every cycle, plus a tail
  that consumes the remaining cells
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from togglefield.config import Config
from togglefield.cycles import build_cycles
from togglefield.errors import GenerationError, InvalidConfiguration
from togglefield.field import Field
from togglefield.linker import link_field
from togglefield.pool import CellPool
from togglefield.validator import ValidationResult, validate_field

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Result of field generation.

    Attributes:
        field: The generated field.
        seed: The actual seed used for generation.
        validation: Validation result (with any warnings).
        attempts: Number of generation attempts made.
    """

    field: Field
    seed: int
    validation: ValidationResult
    attempts: int


def validate_config(config: Config) -> list[str]:
    """Validate configuration options that the dataclasses cannot check alone.

    Args:
        config: Configuration to validate.

    Returns:
        List of error messages (empty if valid).
    """
    errors: list[str] = []
    grid = config.grid

    if grid.cycle_budget < grid.min_cycle_size:
        errors.append(
            f"Grid size {grid.size} leaves a cycle budget of {grid.cycle_budget} "
            f"cells, below min_cycle_size {grid.min_cycle_size}"
        )

    return errors


def generate_field(config: Config, seed: int) -> Field:
    """Generate a connected field.

    Args:
        config: Configuration (grid size and generation bounds).
        seed: Random seed; the same seed and config give the same field.

    Returns:
        A fully linked field.

    Raises:
        InvalidConfiguration: If the grid cannot hold a single cycle.
        GenerationError: If generation leaves cells unassigned.
    """
    config_errors = validate_config(config)
    if config_errors:
        raise InvalidConfiguration("; ".join(config_errors))

    grid = config.grid
    rng = random.Random(seed)

    field = Field.create(grid.size, seed=seed, percent=grid.percent, rng=rng)

    pool = CellPool(rng, max_attempts=grid.draw_attempts)
    pool.create(field.cells.values())

    cycles = build_cycles(field, pool, rng, grid)
    link_field(field, pool, cycles, rng, grid)

    if pool.free_count():
        raise GenerationError(f"{pool.free_count()} cells left unassigned")

    # A new puzzle must not start solved
    if field.is_uniform():
        cells = list(field.cells.values())
        rng.choice(cells).toggle()

    return field


def generate_with_retry(config: Config, max_attempts: int = 100) -> GenerationResult:
    """Generate a field with automatic retry on failure.

    If config.seed is 0, tries random seeds until success (generation + validation).
    If config.seed is non-zero, uses that seed (fails if generation or validation fails).

    Args:
        config: Configuration
        max_attempts: Maximum retry attempts (only for seed=0)

    Returns:
        GenerationResult with field, seed, validation, and attempt count.

    Raises:
        InvalidConfiguration: If the configuration can never succeed.
        GenerationError: If generation fails after max_attempts
    """
    config_errors = validate_config(config)
    if config_errors:
        raise InvalidConfiguration(
            f"Invalid configuration: {'; '.join(config_errors)}"
        )

    if config.seed != 0:
        # Fixed seed - single attempt
        field = generate_field(config, config.seed)
        validation = validate_field(field, config)
        if not validation.is_valid:
            errors = "; ".join(validation.errors)
            raise GenerationError(f"Validation failed: {errors}")
        return GenerationResult(
            field=field,
            seed=config.seed,
            validation=validation,
            attempts=1,
        )

    # Auto-reroll mode
    base_rng = random.Random()

    for attempt in range(max_attempts):
        seed = base_rng.randint(1, 999999999)
        try:
            field = generate_field(config, seed)
            validation = validate_field(field, config)
            if not validation.is_valid:
                errors = "; ".join(validation.errors)
                raise GenerationError(f"Validation failed: {errors}")
            return GenerationResult(
                field=field,
                seed=seed,
                validation=validation,
                attempts=attempt + 1,
            )
        except GenerationError as e:
            logger.info("Attempt %d: seed %d failed - %s", attempt + 1, seed, e)
            continue

    raise GenerationError(f"Failed to generate field after {max_attempts} attempts")
