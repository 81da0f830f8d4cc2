"""Tests for output module (JSON save/load, grid rendering, spoiler log)."""

import json

import pytest

from togglefield.cell import CellRole
from togglefield.config import Config, GridConfig
from togglefield.field import Field
from togglefield.generator import generate_field
from togglefield.output import (
    FORMAT_VERSION,
    export_json,
    export_spoiler_log,
    field_from_dict,
    field_to_dict,
    load_json,
    render_grid,
)


def make_field(size: int = 4, seed: int = 21) -> Field:
    """Generate a field for output tests."""
    return generate_field(Config(grid=GridConfig(size=size)), seed)


class TestFieldToDict:
    """Tests for field_to_dict."""

    def test_top_level_keys(self):
        """Metadata is exported alongside cells and structures."""
        field = make_field()
        data = field_to_dict(field)
        assert data["version"] == FORMAT_VERSION
        assert data["seed"] == 21
        assert data["size"] == 4
        assert data["percent"] == 45
        assert data["entry"] == field.entry_id
        assert data["total_cells"] == 16
        assert data["cells_on"] == field.count_on()
        assert len(data["cells"]) == 16

    def test_cell_entries(self):
        """Each cell exports id, coordinates, state, role and connections."""
        field = make_field()
        data = field_to_dict(field)
        by_id = {entry["id"]: entry for entry in data["cells"]}
        for cell in field.cells.values():
            entry = by_id[cell.id]
            assert (entry["x"], entry["y"]) == (cell.x, cell.y)
            assert entry["state"] == int(cell.state)
            assert entry["role"] == cell.role.value
            assert entry["connections"] == cell.connection_ids
        assert by_id[field.entry_id]["role"] == "entry"

    def test_structures(self):
        """Cycles and chains are exported."""
        field = make_field()
        data = field_to_dict(field)
        assert data["cycles"] == [cycle.members for cycle in field.cycles]
        assert len(data["chains"]) == len(field.chains)
        first = data["chains"][0]
        assert first["from"] == field.entry_id
        assert first["to"] in field.cycles[0].members

    def test_json_serializable(self):
        """The dictionary survives json.dumps."""
        json.dumps(field_to_dict(make_field()))


class TestFieldFromDict:
    """Tests for rebuilding fields."""

    def test_rebuild_preserves_play_state(self):
        """Ids, states, roles and ordered connections survive a rebuild."""
        field = make_field(5, 3)
        rebuilt = field_from_dict(field_to_dict(field))
        assert list(rebuilt.cells) == list(field.cells)
        for cid, cell in field.cells.items():
            other = rebuilt.cells[cid]
            assert other.state == cell.state
            assert other.role is cell.role
            assert other.connection_ids == cell.connection_ids
        assert rebuilt.entry_id == field.entry_id
        assert rebuilt.seed == field.seed

    def test_rebuilt_connections_are_local(self):
        """Rebuilt connections point to the rebuilt cells."""
        rebuilt = field_from_dict(field_to_dict(make_field()))
        assert rebuilt.validate_structure() == []

    def test_unknown_connection(self):
        """Connections to unknown cells are rejected."""
        data = field_to_dict(make_field())
        data["cells"][0]["connections"].append("9_9")
        with pytest.raises(ValueError, match="unknown cell"):
            field_from_dict(data)

    def test_minimal_dict(self):
        """Optional keys fall back to defaults."""
        field = field_from_dict(
            {"size": 2, "cells": [{"id": "0_0", "x": 0, "y": 0}]}
        )
        assert field.percent == 45
        assert field.cells["0_0"].state is False
        assert field.cells["0_0"].role is CellRole.NORMAL
        assert field.cycles == []


class TestJsonFiles:
    """Tests for export_json / load_json."""

    def test_export_and_load(self, tmp_path):
        """A saved field loads back with the same structure."""
        field = make_field()
        path = tmp_path / "field.json"
        export_json(field, path)
        loaded = load_json(path)
        assert field_to_dict(loaded) == field_to_dict(field)

    def test_export_is_indented_json(self, tmp_path):
        """The file is readable JSON."""
        path = tmp_path / "field.json"
        export_json(make_field(), path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["size"] == 4

    def test_load_missing_file(self, tmp_path):
        """Loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")


class TestRendering:
    """Tests for render_grid and export_spoiler_log."""

    def test_render_grid(self):
        """Rows are rendered top to bottom, on as '#', off as '.'."""
        field = Field.create(2)
        field.cells["1_0"].state = True
        field.cells["0_1"].state = True
        assert render_grid(field) == ". #\n# ."

    def test_render_custom_symbols(self):
        """Symbols can be overridden."""
        field = Field.create(2)
        field.cells["0_0"].state = True
        assert render_grid(field, on="1", off="0") == "1 0\n0 0"

    def test_spoiler_log(self, tmp_path):
        """The spoiler log describes grid, entry, cycles and chains."""
        field = make_field()
        path = tmp_path / "spoiler.txt"
        export_spoiler_log(field, path)
        content = path.read_text(encoding="utf-8")
        assert "TOGGLEFIELD SPOILER LOG" in content
        assert "seed: 21" in content
        assert "size: 4x4" in content
        assert f"Entry: {field.entry_id}" in content
        assert f"Cycles ({len(field.cycles)}):" in content
        assert f"{field.entry_id} (entry):" in content
        assert render_grid(field) in content
