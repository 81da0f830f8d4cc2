"""ToggleField - connectivity generator for Lights Out style toggle puzzles."""

__version__ = "0.1.0"

from togglefield.cell import Cell, CellRole, cell_id
from togglefield.config import Config, GridConfig, PathsConfig, load_config
from togglefield.cycles import (
    build_cycles,
    choose_composition,
    count_compositions,
    enumerate_compositions,
)
from togglefield.errors import GenerationError, InvalidConfiguration, PoolExhausted
from togglefield.events import EventDispatcher, GameEvent
from togglefield.field import Chain, Cycle, Field
from togglefield.game import Game
from togglefield.generator import (
    GenerationResult,
    generate_field,
    generate_with_retry,
    validate_config,
)
from togglefield.linker import link_field, link_sequence, pick_chain_length
from togglefield.output import (
    export_json,
    export_spoiler_log,
    field_from_dict,
    field_to_dict,
    load_json,
    render_grid,
)
from togglefield.pool import CellPool
from togglefield.validator import ValidationResult, validate_field

__all__ = [
    # Config
    "Config",
    "GridConfig",
    "PathsConfig",
    "load_config",
    # Cells and field
    "Cell",
    "CellRole",
    "cell_id",
    "Chain",
    "Cycle",
    "Field",
    # Generation
    "CellPool",
    "build_cycles",
    "choose_composition",
    "count_compositions",
    "enumerate_compositions",
    "link_field",
    "link_sequence",
    "pick_chain_length",
    "GenerationResult",
    "generate_field",
    "generate_with_retry",
    "validate_config",
    # Errors
    "GenerationError",
    "InvalidConfiguration",
    "PoolExhausted",
    # Game
    "EventDispatcher",
    "Game",
    "GameEvent",
    # Validator
    "ValidationResult",
    "validate_field",
    # Output
    "export_json",
    "export_spoiler_log",
    "field_from_dict",
    "field_to_dict",
    "load_json",
    "render_grid",
]
