"""
Grid Package - Cell arena, grid edits and obstacle generation.

Public API:
    - Grid / Cell: Flat cell arena and immutable cell snapshots
    - create_grid(), clone_grid(), reset_grid(): Grid lifecycle
    - neighbors(): Up/down/left/right neighbors
    - move_start(), move_goal(), toggle_wall(): Role edits (return new grids)
    - SeededRandom, generate_random_obstacles(), generate_maze()
    - validate_path(): Flood-fill reachability check

Usage:
    from pathviz.grid import create_grid, place_endpoints, generate_random_obstacles

    grid = place_endpoints(create_grid(7, 7), (1, 1), (5, 5))
    grid = generate_random_obstacles(grid, density=0.3, seed=42)
    reachable = validate_path(grid)
"""

from .model import (
    CELL_DTYPE,
    Cell,
    Coord,
    DIRECTIONS,
    Grid,
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    NO_PREVIOUS,
    clamp_coord,
    clamp_grid_size,
    clone_grid,
    create_grid,
    default_endpoints,
    move_goal,
    move_start,
    neighbors,
    place_endpoints,
    reset_grid,
    toggle_wall,
)
from .obstacles import (
    ObstacleMode,
    SeededRandom,
    clear_obstacles,
    generate_maze,
    generate_obstacles,
    generate_random_obstacles,
    validate_path,
)

__all__ = [
    # Model
    "CELL_DTYPE",
    "Cell",
    "Coord",
    "DIRECTIONS",
    "Grid",
    "MAX_GRID_SIZE",
    "MIN_GRID_SIZE",
    "NO_PREVIOUS",
    "clamp_coord",
    "clamp_grid_size",
    "clone_grid",
    "create_grid",
    "default_endpoints",
    "move_goal",
    "move_start",
    "neighbors",
    "place_endpoints",
    "reset_grid",
    "toggle_wall",
    # Obstacles
    "ObstacleMode",
    "SeededRandom",
    "clear_obstacles",
    "generate_maze",
    "generate_obstacles",
    "generate_random_obstacles",
    "validate_path",
]
