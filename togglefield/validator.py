"""Field validation for ToggleField.

This module validates fields against configuration requirements,
distinguishing between errors (blocking) and warnings (informational).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from togglefield.config import Config
from togglefield.field import Field


@dataclass
class ValidationResult:
    """Result of field validation.

    Attributes:
        is_valid: True if the field passes all required checks (no errors).
        errors: List of blocking issues that make the field invalid.
        warnings: List of informational issues that don't block validation.
    """

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_field(puzzle: Field, config: Config) -> ValidationResult:
    """Validate a field against all constraints.

    Checks:
    - Structural validity (uses puzzle.validate_structure())
    - Cell count matches the configured grid
    - Cycle sizes within bounds, every cycle closed
    - Every cell assigned to exactly one structure
    - Short bridges, single cycle, already-solved start (warnings)

    Args:
        puzzle: The field to validate.
        config: Configuration with grid bounds.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    structural_errors = puzzle.validate_structure()
    if structural_errors:
        errors.extend(structural_errors)

    expected = puzzle.size * puzzle.size
    if puzzle.cell_count != expected:
        errors.append(
            f"Field holds {puzzle.cell_count} cells, expected {expected} "
            f"for size {puzzle.size}"
        )

    _check_cycles(puzzle, config, errors, warnings)

    assignment_errors = _check_assignment(puzzle)
    if assignment_errors:
        errors.extend(assignment_errors)

    _check_chains(puzzle, config, warnings)

    if puzzle.cells and puzzle.is_uniform():
        warnings.append("Field starts already solved")

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _check_cycles(
    puzzle: Field, config: Config, errors: list[str], warnings: list[str]
) -> None:
    """Check cycle sizes and closure.

    Args:
        puzzle: The field to check.
        config: Configuration with cycle size bounds.
        errors: List to append errors to.
        warnings: List to append warnings to.
    """
    grid = config.grid
    for index, cycle in enumerate(puzzle.cycles):
        if not grid.min_cycle_size <= cycle.size <= grid.max_cycle_size:
            errors.append(
                f"Cycle {index} has {cycle.size} cells, outside "
                f"[{grid.min_cycle_size}, {grid.max_cycle_size}]"
            )
        if not cycle.is_closed(puzzle.cells):
            errors.append(f"Cycle {index} is not closed")

    if len(puzzle.cycles) == 1:
        warnings.append("Only a single cycle exists")


def _check_assignment(puzzle: Field) -> list[str]:
    """Check that every cell belongs to exactly one structure.

    The entry cell, cycle members and chain cells together must cover the
    field with no cell drawn twice.

    Args:
        puzzle: The field to check.

    Returns:
        List of error messages.
    """
    errors: list[str] = []
    usage: Counter[str] = Counter()

    if puzzle.entry_id:
        usage[puzzle.entry_id] += 1
    for cycle in puzzle.cycles:
        usage.update(cycle.members)
    for chain in puzzle.chains:
        usage.update(chain.cell_ids)

    for cid, count in sorted(usage.items()):
        if cid not in puzzle.cells:
            errors.append(f"Structure references unknown cell '{cid}'")
        elif count > 1:
            errors.append(f"Cell '{cid}' assigned {count} times")

    for cid in puzzle.cells:
        if cid not in usage:
            errors.append(f"Cell '{cid}' is not assigned to any structure")

    return errors


def _check_chains(puzzle: Field, config: Config, warnings: list[str]) -> None:
    """Warn about bridges shorter than the configured minimum.

    Args:
        puzzle: The field to check.
        config: Configuration with the minimum chain length.
        warnings: List to append warnings to.
    """
    for chain in puzzle.chains:
        if chain.target_id is None:
            continue
        if chain.length < config.grid.min_chain_length:
            warnings.append(
                f"Short bridge {chain.source_id} -> {chain.target_id}: "
                f"{chain.length} < {config.grid.min_chain_length} cells"
            )
