"""ToggleField CLI entry point."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from togglefield.config import Config, load_config
from togglefield.errors import GenerationError
from togglefield.events import GameEvent
from togglefield.game import Game
from togglefield.output import export_json, export_spoiler_log, render_grid


def play(game: Game, lines: Iterable[str], out: TextIO = sys.stdout) -> bool:
    """Run a text game loop.

    Each input line is either "x y" (press the cell at column x, row y) or
    "q" to quit.

    Returns:
        True if the game was won.
    """
    field = game.field
    if field is None:
        raise RuntimeError("No field generated yet")

    won = False

    def on_victory(_game: Game) -> None:
        nonlocal won
        won = True

    game.on(GameEvent.VICTORY, on_victory)
    try:
        print(render_grid(field), file=out)
        for line in lines:
            command = line.strip()
            if command in ("q", "quit"):
                break
            parts = command.split()
            if len(parts) != 2 or not all(p.lstrip("-").isdigit() for p in parts):
                print("Enter 'x y' to press a cell, or 'q' to quit", file=out)
                continue
            cell = field.cell_at(int(parts[0]), int(parts[1]))
            if cell is None:
                print(f"No cell at {parts[0]} {parts[1]}", file=out)
                continue
            game.toggle(cell)
            print(render_grid(field), file=out)
            if won:
                print(f"Solved in {game.moves} moves!", file=out)
                break
    finally:
        game.off(GameEvent.VICTORY, on_victory)

    return won


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the togglefield command."""
    parser = argparse.ArgumentParser(
        description="ToggleField - Generate toggle puzzle fields",
    )
    parser.add_argument(
        "config",
        type=Path,
        nargs="?",
        default=None,
        help="Path to config.toml (optional, uses defaults if not provided)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output directory (default: config's output_dir). "
        "Files are written to <output>/<seed>/",
    )
    parser.add_argument(
        "--size",
        type=int,
        help="Grid size (overrides config)",
    )
    parser.add_argument(
        "--percent",
        type=int,
        help="Legacy budget percentage stored with the field (overrides config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (overrides config, 0 = auto-reroll)",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=100,
        help="Max generation attempts for auto-reroll (default: 100)",
    )
    parser.add_argument(
        "--spoiler",
        action="store_true",
        help="Generate spoiler log file",
    )
    parser.add_argument(
        "--play",
        action="store_true",
        help="Play the generated field in the terminal",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Load or create config
    if args.config:
        try:
            config = load_config(args.config)
            if args.verbose:
                print(f"Loaded config from {args.config}")
        except FileNotFoundError:
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: Invalid config: {e}", file=sys.stderr)
            return 1
    else:
        config = Config()
        if args.verbose:
            print("Using default configuration")

    # CLI overrides
    try:
        if args.size is not None or args.percent is not None:
            config.grid = dataclasses.replace(
                config.grid,
                size=args.size if args.size is not None else config.grid.size,
                percent=(
                    args.percent if args.percent is not None else config.grid.percent
                ),
            )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.seed is not None:
        config.seed = args.seed

    output_dir = (
        args.output if args.output is not None else Path(config.paths.output_dir)
    )

    if args.verbose:
        mode = "fixed seed" if config.seed != 0 else "auto-reroll"
        print(f"Generating {config.grid.size}x{config.grid.size} field ({mode})...")

    game = Game(config, max_attempts=args.max_attempts)
    try:
        field = game.generate()
    except GenerationError as e:
        print(f"Error: Generation failed: {e}", file=sys.stderr)
        return 1

    result = game.result
    assert result is not None

    if args.verbose and result.validation.warnings:
        print("Validation warnings:")
        for warning in result.validation.warnings:
            print(f"  - {warning}")

    if args.verbose or config.seed == 0:
        print(f"Generated field with seed {result.seed}")
        print(f"  Cells: {field.cell_count} ({field.count_on()} on)")
        print(f"  Cycles: {[cycle.size for cycle in field.cycles]}")
        print(f"  Chains: {len(field.chains)}")
        print(f"  Entry: {field.entry_id}")

    seed_dir = output_dir / str(result.seed)
    seed_dir.mkdir(parents=True, exist_ok=True)

    json_path = seed_dir / "field.json"
    export_json(field, json_path)
    print(f"Written: {json_path}")

    if args.spoiler:
        spoiler_path = seed_dir / "spoiler.txt"
        export_spoiler_log(field, spoiler_path)
        print(f"Written: {spoiler_path}")

    if args.play:
        play(game, sys.stdin)

    return 0


if __name__ == "__main__":
    sys.exit(main())
