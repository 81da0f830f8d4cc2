"""Output module for field export to JSON and spoiler logs.

This module provides functions to:
- Save and load a field as JSON (ids, states, roles, ordered connections)
- Render the grid as text
- Write a human-readable spoiler log describing the generated structure
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from togglefield.cell import Cell, CellRole
from togglefield.field import Chain, Cycle, Field

FORMAT_VERSION = "1.0"


def field_to_dict(field: Field) -> dict[str, Any]:
    """Convert a field to a JSON-serializable dictionary.

    Args:
        field: The field to convert

    Returns:
        Dictionary with the following structure:
        - version: format version
        - seed, size, percent: generation parameters
        - entry: entry cell id
        - total_cells, cells_on: metadata
        - cells: list of {id, x, y, state, role, connections}
        - cycles: list of member id lists
        - chains: list of {from, cells, to}
    """
    cells = [
        {
            "id": cell.id,
            "x": cell.x,
            "y": cell.y,
            "state": int(cell.state),
            "role": cell.role.value,
            "connections": cell.connection_ids,
        }
        for cell in field.cells.values()
    ]

    return {
        "version": FORMAT_VERSION,
        "seed": field.seed,
        "size": field.size,
        "percent": field.percent,
        "entry": field.entry_id,
        "total_cells": field.cell_count,
        "cells_on": field.count_on(),
        "cells": cells,
        "cycles": [list(cycle.members) for cycle in field.cycles],
        "chains": [
            {
                "from": chain.source_id,
                "cells": list(chain.cell_ids),
                "to": chain.target_id,
            }
            for chain in field.chains
        ],
    }


def field_from_dict(data: dict[str, Any]) -> Field:
    """Rebuild a field from field_to_dict() output.

    Args:
        data: Parsed field dictionary

    Returns:
        Field with the same cells, states, roles and connection order.

    Raises:
        ValueError: If a connection references an unknown cell.
    """
    field = Field(
        size=data["size"],
        seed=data.get("seed", 0),
        percent=data.get("percent", 45),
    )

    cell_entries = data.get("cells", [])
    for entry in cell_entries:
        field.add_cell(
            Cell(
                id=entry["id"],
                x=entry["x"],
                y=entry["y"],
                state=bool(entry.get("state", 0)),
                role=CellRole(entry.get("role", CellRole.NORMAL.value)),
            )
        )

    # Second pass: connections may point forward in the list
    for entry in cell_entries:
        source = field.cells[entry["id"]]
        for target_id in entry.get("connections", []):
            target = field.get_cell(target_id)
            if target is None:
                raise ValueError(
                    f"Cell {source.id} connects to unknown cell {target_id}"
                )
            source.connect(target)

    field.entry_id = data.get("entry", "")
    field.cycles = [Cycle(list(members)) for members in data.get("cycles", [])]
    field.chains = [
        Chain(
            source_id=chain["from"],
            cell_ids=list(chain.get("cells", [])),
            target_id=chain.get("to"),
        )
        for chain in data.get("chains", [])
    ]
    return field


def export_json(field: Field, output_path: Path) -> None:
    """Export a field to a JSON file.

    Args:
        field: The field to export
        output_path: Path to write the JSON file
    """
    data = field_to_dict(field)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_json(path: Path) -> Field:
    """Load a field from a JSON file written by export_json().

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Field file not found: {path}")
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = json.load(f)
    return field_from_dict(data)


def render_grid(field: Field, on: str = "#", off: str = ".") -> str:
    """Render cell states as text, one grid row per line."""
    lines: list[str] = []
    for y in range(field.size):
        row = []
        for x in range(field.size):
            cell = field.cell_at(x, y)
            row.append(on if cell is not None and cell.state else off)
        lines.append(" ".join(row))
    return "\n".join(lines)


def export_spoiler_log(field: Field, output_path: Path) -> None:
    """Export a human-readable spoiler log.

    Args:
        field: The field to describe
        output_path: Path to write the spoiler log
    """
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append("TOGGLEFIELD SPOILER LOG")
    lines.append("=" * 60)
    lines.append(f"Generated: {datetime.now().isoformat(timespec='seconds')}")
    lines.append(f"seed: {field.seed}")
    lines.append(f"size: {field.size}x{field.size}")
    lines.append(f"cells on: {field.count_on()}/{field.cell_count}")
    lines.append("")
    lines.append(render_grid(field))
    lines.append("")
    lines.append(f"Entry: {field.entry_id or '-'}")
    lines.append("")

    lines.append(f"Cycles ({len(field.cycles)}):")
    for index, cycle in enumerate(field.cycles):
        ring = " -> ".join(cycle.members + cycle.members[:1])
        lines.append(f"  [{index}] size {cycle.size}: {ring}")
    lines.append("")

    lines.append(f"Chains ({len(field.chains)}):")
    for chain in field.chains:
        path = [chain.source_id, *chain.cell_ids]
        if chain.target_id is not None:
            path.append(chain.target_id)
        label = "tail" if chain.target_id is None else "link"
        lines.append(f"  {label}: {' -> '.join(path)}")
    lines.append("")

    lines.append("Connections:")
    for cell in field.cells.values():
        marker = " (entry)" if cell.is_entry else ""
        targets = ", ".join(cell.connection_ids) or "-"
        lines.append(f"  {cell.id}{marker}: {targets}")

    with open(output_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
