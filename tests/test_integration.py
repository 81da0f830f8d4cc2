"""Integration tests for the full generation pipeline and CLI."""

import io
import json

import pytest

from togglefield import (
    Config,
    Game,
    GameEvent,
    GridConfig,
    export_json,
    export_spoiler_log,
    generate_with_retry,
    load_json,
)
from togglefield.main import main, play


@pytest.fixture
def small_config():
    """A fixed-seed 4x4 configuration."""
    return Config(seed=1, grid=GridConfig(size=4))


class TestFullPipeline:
    """End-to-end tests for the generation pipeline."""

    def test_generate_validate_export(self, small_config, tmp_path):
        """Full pipeline: generate -> validate -> export -> load."""
        result = generate_with_retry(small_config)
        assert result.seed == 1
        assert result.validation.is_valid, result.validation.errors

        json_path = tmp_path / "field.json"
        export_json(result.field, json_path)
        with open(json_path) as f:
            data = json.load(f)
        assert data["seed"] == 1

        spoiler_path = tmp_path / "spoiler.txt"
        export_spoiler_log(result.field, spoiler_path)
        assert "seed: 1" in spoiler_path.read_text()

        loaded = load_json(json_path)
        assert loaded.reachable_from(loaded.entry_id) == set(loaded.cells)

    @pytest.mark.parametrize("size", [3, 5, 9, 15])
    def test_auto_reroll_sizes(self, size):
        """Random seeds produce valid fields across grid sizes."""
        result = generate_with_retry(Config(grid=GridConfig(size=size)))
        assert result.validation.is_valid
        assert result.field.cell_count == size * size

    def test_loaded_field_plays_the_same(self, small_config, tmp_path):
        """Pressing cells on a reloaded field matches the original."""
        game = Game(small_config)
        field = game.generate()
        path = tmp_path / "field.json"
        export_json(field, path)
        loaded = load_json(path)
        for cell_id in ["0_0", "3_3", "1_2"]:
            field.cells[cell_id].press()
            loaded.cells[cell_id].press()
        assert [c.state for c in loaded.cells.values()] == [
            c.state for c in field.cells.values()
        ]


class TestPlay:
    """Tests for the text game loop."""

    def test_quit(self, small_config):
        """'q' ends the loop without a win."""
        game = Game(small_config)
        game.generate()
        out = io.StringIO()
        assert play(game, ["q"], out) is False
        assert game.moves == 0

    def test_invalid_input(self, small_config):
        """Malformed lines and out-of-range cells are reported."""
        game = Game(small_config)
        game.generate()
        out = io.StringIO()
        play(game, ["hello", "7 7", "q"], out)
        text = out.getvalue()
        assert "Enter 'x y'" in text
        assert "No cell at 7 7" in text
        assert game.moves == 0

    def test_presses_cells(self, small_config):
        """'x y' presses the cell at column x, row y."""
        game = Game(small_config)
        field = game.generate()
        target = field.cell_at(1, 2)
        before = target.state
        play(game, ["1 2", "q"], io.StringIO())
        assert game.moves == 1
        assert target.state != before

    def test_win_ends_loop(self):
        """A winning press stops the loop and reports the move count."""
        config = Config(
            seed=5, grid=GridConfig(size=2, min_cycle_size=2, max_cycle_size=2)
        )
        game = Game(config)
        field = game.generate()
        cell = field.cells["0_0"]
        for other in field.cells.values():
            other.state = False
        cell.state = True
        for target in cell.connections:
            target.state = True
        out = io.StringIO()
        assert play(game, ["0 0", "1 1"], out) is True
        assert "Solved in 1 moves!" in out.getvalue()
        assert game.moves == 1
        assert game.events.subscribers(GameEvent.VICTORY) == []


class TestCli:
    """Tests for the togglefield command."""

    def test_writes_field_json(self, tmp_path, capsys):
        """The CLI writes <output>/<seed>/field.json."""
        code = main(["--seed", "12", "--size", "5", "-o", str(tmp_path)])
        assert code == 0
        path = tmp_path / "12" / "field.json"
        assert path.exists()
        assert json.loads(path.read_text())["size"] == 5
        assert "Written:" in capsys.readouterr().out

    def test_spoiler_flag(self, tmp_path):
        """--spoiler also writes spoiler.txt."""
        code = main(["--seed", "3", "--spoiler", "-o", str(tmp_path)])
        assert code == 0
        assert (tmp_path / "3" / "spoiler.txt").exists()

    def test_config_file(self, tmp_path):
        """Settings are read from a TOML config."""
        config_file = tmp_path / "config.toml"
        out_dir = tmp_path / "out"
        config_file.write_text(f"""
[run]
seed = 9

[grid]
size = 6

[paths]
output_dir = "{out_dir.as_posix()}"
""")
        code = main([str(config_file)])
        assert code == 0
        data = json.loads((out_dir / "9" / "field.json").read_text())
        assert data["size"] == 6

    def test_missing_config(self, tmp_path, capsys):
        """A missing config file is an error."""
        code = main([str(tmp_path / "nope.toml")])
        assert code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_grid_too_small(self, tmp_path, capsys):
        """A grid that cannot hold a cycle fails with exit code 1."""
        code = main(["--size", "2", "--seed", "1", "-o", str(tmp_path)])
        assert code == 1
        assert "Generation failed" in capsys.readouterr().err

    def test_invalid_size(self, tmp_path, capsys):
        """Sizes below 2 are rejected."""
        code = main(["--size", "1", "-o", str(tmp_path)])
        assert code == 1
        assert "size must be >= 2" in capsys.readouterr().err
