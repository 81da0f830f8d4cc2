"""Configuration parsing for ToggleField."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Use tomllib (Python 3.11+) with fallback to tomli
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError as e:
        raise ImportError(
            "tomli is required for Python < 3.11. Install with: pip install tomli"
        ) from e


DEFAULT_DRAW_ATTEMPTS = 9999


@dataclass
class GridConfig:
    """Grid and generation configuration."""

    size: int = 4
    percent: int = 45  # Kept for save files; cycle budget is size-based
    min_cycle_size: int = 3
    max_cycle_size: int = 6
    min_chain_length: int = 3
    draw_attempts: int = DEFAULT_DRAW_ATTEMPTS

    def __post_init__(self) -> None:
        """Validate grid configuration."""
        if self.size < 2:
            raise ValueError(f"size must be >= 2, got {self.size}")
        if self.percent < 0 or self.percent > 100:
            raise ValueError(f"percent must be 0-100, got {self.percent}")
        if self.min_cycle_size < 2:
            raise ValueError(
                f"min_cycle_size must be >= 2, got {self.min_cycle_size}"
            )
        if self.max_cycle_size < self.min_cycle_size:
            raise ValueError(
                f"max_cycle_size ({self.max_cycle_size}) must be >= "
                f"min_cycle_size ({self.min_cycle_size})"
            )
        if self.min_chain_length < 1:
            raise ValueError(
                f"min_chain_length must be >= 1, got {self.min_chain_length}"
            )
        if self.draw_attempts < 1:
            raise ValueError(f"draw_attempts must be >= 1, got {self.draw_attempts}")

    @property
    def cell_count(self) -> int:
        """Total number of cells in the grid."""
        return self.size * self.size

    @property
    def cycle_budget(self) -> int:
        """Number of cells reserved for cycles (half the grid, rounded up)."""
        return math.ceil(self.cell_count / 2)


@dataclass
class PathsConfig:
    """File paths configuration."""

    output_dir: str = "./output"


@dataclass
class Config:
    """Main configuration container."""

    seed: int = 0
    grid: GridConfig = field(default_factory=GridConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create Config from a dictionary (e.g., parsed TOML)."""
        run_section = data.get("run", {})
        grid_section = data.get("grid", {})
        paths_section = data.get("paths", {})

        return cls(
            seed=run_section.get("seed", 0),
            grid=GridConfig(
                size=grid_section.get("size", 4),
                percent=grid_section.get("percent", 45),
                min_cycle_size=grid_section.get("min_cycle_size", 3),
                max_cycle_size=grid_section.get("max_cycle_size", 6),
                min_chain_length=grid_section.get("min_chain_length", 3),
                draw_attempts=grid_section.get(
                    "draw_attempts", DEFAULT_DRAW_ATTEMPTS
                ),
            ),
            paths=PathsConfig(
                output_dir=paths_section.get("output_dir", "./output"),
            ),
        )

    @classmethod
    def from_toml(cls, path: str | Path) -> Config:
        """Load configuration from a TOML file."""
        path = Path(path)
        with path.open("rb") as f:
            data = tomllib.load(f)
        return cls.from_dict(data)


def load_config(path: str | Path) -> Config:
    """Load configuration from a TOML file.

    This is a convenience function that wraps Config.from_toml().

    Args:
        path: Path to the TOML configuration file.

    Returns:
        Parsed Config object.
    """
    return Config.from_toml(path)
