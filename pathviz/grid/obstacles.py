"""
Obstacle Generator Module - Seeded wall layouts and connectivity checks.

Layouts depend only on (seed, density, grid size, endpoints), so the
same request always yields the same walls on every platform.
"""

import logging
import math
from enum import Enum
from typing import Optional, Union

from .model import Coord, Grid, clone_grid

logger = logging.getLogger(__name__)


# Park-Miller minimal standard generator
LCG_MODULUS = 2147483647  # 2**31 - 1
LCG_MULTIPLIER = 16807

# Fraction of cells the maze generator tries to open
MAZE_OPEN_FRACTION = 0.3


class ObstacleMode(Enum):
    """Obstacle generation modes offered to the user."""
    MANUAL = "manual"
    RANDOM = "random"
    MAZE = "maze"

    @classmethod
    def parse(cls, name: Union[str, "ObstacleMode", None]) -> "ObstacleMode":
        """Look up a mode by name, falling back to MANUAL."""
        if isinstance(name, ObstacleMode):
            return name
        try:
            return cls(str(name).lower())
        except ValueError:
            logger.warning(f"Unknown obstacle mode '{name}', using manual")
            return cls.MANUAL


class SeededRandom:
    """
    Deterministic linear-congruential random source.

    Seeds are folded into [1, LCG_MODULUS - 1]; zero and negative
    seeds are valid and map to positive states.
    """

    def __init__(self, seed: int):
        state = int(seed) % LCG_MODULUS
        if state <= 0:
            state += LCG_MODULUS - 1
        self._state = state

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Next value in [0, 1)."""
        self._state = (self._state * LCG_MULTIPLIER) % LCG_MODULUS
        return (self._state - 1) / (LCG_MODULUS - 1)

    def randint(self, upper: int) -> int:
        """Next integer in [0, upper)."""
        return int(math.floor(self.next() * upper))


def _is_endpoint(grid: Grid, index: int) -> bool:
    return bool(grid.cells["is_start"][index] or grid.cells["is_goal"][index])


def clear_obstacles(grid: Grid) -> Grid:
    """Copy of a grid with every wall removed."""
    cleared = clone_grid(grid)
    cleared.cells["is_wall"] = False
    return cleared


def generate_random_obstacles(grid: Grid, density: float, seed: int) -> Grid:
    """
    Scatter walls with a given density.

    Existing walls are cleared first, then one random draw is taken per
    non-endpoint cell in row-major order; the cell becomes a wall when
    the draw is below density.

    Args:
        grid: Grid with start and goal placed
        density: Wall probability, clamped to [0, 1]
        seed: Integer seed for SeededRandom

    Returns:
        New grid with the generated walls
    """
    density = min(max(float(density), 0.0), 1.0)
    rng = SeededRandom(seed)
    result = clear_obstacles(grid)

    for index in range(result.size):
        if _is_endpoint(result, index):
            continue
        if rng.next() < density:
            result.cells["is_wall"][index] = True

    logger.debug(f"Random obstacles: seed={seed}, density={density:.2f}, walls={len(result.walls)}")
    return result


def generate_maze(grid: Grid, seed: int) -> Grid:
    """
    Fill the grid with walls and carve random openings.

    floor(0.3 * rows * cols) random (row, col) draws are made; each drawn
    cell is opened unless it is an endpoint. Repeated draws may hit the
    same cell, so fewer cells can end up open. Solvability is not
    guaranteed - check with validate_path.
    """
    rng = SeededRandom(seed)
    result = clone_grid(grid)
    result.cells["is_wall"] = ~(result.cells["is_start"] | result.cells["is_goal"])

    openings = int(math.floor(MAZE_OPEN_FRACTION * grid.rows * grid.cols))
    for _ in range(openings):
        row = rng.randint(grid.rows)
        col = rng.randint(grid.cols)
        index = row * grid.cols + col
        if _is_endpoint(result, index):
            continue
        result.cells["is_wall"][index] = False

    logger.debug(f"Maze: seed={seed}, openings={openings}, walls={len(result.walls)}")
    return result


def generate_obstacles(
    grid: Grid,
    mode: ObstacleMode,
    density: float = 0.3,
    seed: int = 42
) -> Grid:
    """
    Generate walls for the given mode.

    MANUAL clears all walls so the user can draw their own.
    """
    if mode is ObstacleMode.RANDOM:
        return generate_random_obstacles(grid, density, seed)
    elif mode is ObstacleMode.MAZE:
        return generate_maze(grid, seed)
    return clear_obstacles(grid)


def validate_path(grid: Grid, start: Optional[Coord] = None, goal: Optional[Coord] = None) -> bool:
    """
    Check whether goal is reachable from start through open cells.

    Stack-based 4-way flood fill that ignores cost. Advisory only:
    obstacle generation never depends on the answer.

    Args:
        grid: Grid to check
        start: Origin (defaults to the grid's start cell)
        goal: Target (defaults to the grid's goal cell)

    Returns:
        True if a route exists
    """
    start = start if start is not None else grid.start
    goal = goal if goal is not None else grid.goal
    if start is None or goal is None:
        return False

    start_index = grid.index(start)
    goal_index = grid.index(goal)
    walls = grid.cells["is_wall"]
    if walls[start_index] or walls[goal_index]:
        return False

    seen = {start_index}
    stack = [start_index]
    while stack:
        index = stack.pop()
        if index == goal_index:
            return True
        for neighbor in grid.neighbor_indices(index):
            if neighbor in seen or walls[neighbor]:
                continue
            seen.add(neighbor)
            stack.append(neighbor)

    return False
