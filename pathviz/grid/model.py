"""
Grid Model Module - Flat cell arena for the pathfinding grid.

Cells are stored in a single numpy structured array indexed by
``row * cols + col``. Every search run works on its own copy of that
array, so runs never see each other's visited flags or back-references.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

MIN_GRID_SIZE = 5
MAX_GRID_SIZE = 20

# No predecessor
NO_PREVIOUS = -1

CELL_DTYPE = np.dtype([
    ("is_start", np.bool_),
    ("is_goal", np.bool_),
    ("is_wall", np.bool_),
    ("is_visited", np.bool_),
    ("is_path", np.bool_),
    ("distance", np.float64),
    ("g_score", np.float64),
    ("f_score", np.float64),
    ("previous", np.int32),
])

# Up, down, left, right - tie-break order for every algorithm
DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class Cell:
    """
    Immutable snapshot of one grid cell.

    Attributes:
        row: Row index
        col: Column index
        is_start: Cell is the search origin
        is_goal: Cell is the search target
        is_wall: Cell is impassable
        is_visited: Cell was finalized by a search
        is_path: Cell lies on the reconstructed path
        distance: Cumulative cost from start (inf until discovered)
        g_score: A* cost from start
        f_score: A* g_score + heuristic
        previous: Predecessor coordinate on the best known path
    """
    row: int
    col: int
    is_start: bool = False
    is_goal: bool = False
    is_wall: bool = False
    is_visited: bool = False
    is_path: bool = False
    distance: float = math.inf
    g_score: float = math.inf
    f_score: float = math.inf
    previous: Optional[Coord] = None

    @property
    def coord(self) -> Coord:
        """(row, col) of this cell."""
        return (self.row, self.col)


class Grid:
    """
    Rectangular grid of cells backed by a flat structured array.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        cells: numpy array of CELL_DTYPE, length rows * cols
    """

    def __init__(self, rows: int, cols: int, cells: Optional[np.ndarray] = None):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        if cells is None:
            cells = np.zeros(rows * cols, dtype=CELL_DTYPE)
            cells["distance"] = np.inf
            cells["g_score"] = np.inf
            cells["f_score"] = np.inf
            cells["previous"] = NO_PREVIOUS
        elif cells.shape != (rows * cols,) or cells.dtype != CELL_DTYPE:
            raise ValueError("Cell array does not match grid dimensions")
        self.cells = cells

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.rows * self.cols

    def in_bounds(self, coord: Coord) -> bool:
        row, col = coord
        return 0 <= row < self.rows and 0 <= col < self.cols

    def index(self, coord: Coord) -> int:
        """
        Convert (row, col) to a flat index.

        Raises:
            ValueError: If coord is outside the grid
        """
        if not self.in_bounds(coord):
            raise ValueError(f"Coordinate {coord} outside {self.rows}x{self.cols} grid")
        return coord[0] * self.cols + coord[1]

    def coord(self, index: int) -> Coord:
        """Convert a flat index to (row, col)."""
        return divmod(index, self.cols)

    def neighbor_indices(self, index: int) -> List[int]:
        """
        Flat indices of the in-bounds axis neighbors of a cell.

        Order is always up, down, left, right.
        """
        row, col = divmod(index, self.cols)
        result = []
        for d_row, d_col in DIRECTIONS:
            n_row, n_col = row + d_row, col + d_col
            if 0 <= n_row < self.rows and 0 <= n_col < self.cols:
                result.append(n_row * self.cols + n_col)
        return result

    def cell_at(self, index: int) -> Cell:
        """Snapshot of the cell at a flat index."""
        record = self.cells[index]
        row, col = divmod(index, self.cols)
        previous = int(record["previous"])
        return Cell(
            row=row,
            col=col,
            is_start=bool(record["is_start"]),
            is_goal=bool(record["is_goal"]),
            is_wall=bool(record["is_wall"]),
            is_visited=bool(record["is_visited"]),
            is_path=bool(record["is_path"]),
            distance=float(record["distance"]),
            g_score=float(record["g_score"]),
            f_score=float(record["f_score"]),
            previous=None if previous == NO_PREVIOUS else self.coord(previous),
        )

    def cell(self, row: int, col: int) -> Cell:
        """Snapshot of the cell at (row, col)."""
        return self.cell_at(self.index((row, col)))

    def _find_role(self, field: str) -> Optional[Coord]:
        found = np.flatnonzero(self.cells[field])
        if len(found) == 0:
            return None
        return self.coord(int(found[0]))

    @property
    def start(self) -> Optional[Coord]:
        """Coordinate of the start cell, or None before placement."""
        return self._find_role("is_start")

    @property
    def goal(self) -> Optional[Coord]:
        """Coordinate of the goal cell, or None before placement."""
        return self._find_role("is_goal")

    @property
    def walls(self) -> List[Coord]:
        """Wall coordinates in row-major order."""
        return [self.coord(int(i)) for i in np.flatnonzero(self.cells["is_wall"])]

    def is_wall(self, coord: Coord) -> bool:
        return bool(self.cells["is_wall"][self.index(coord)])

    def iter_cells(self):
        """Yield snapshots of all cells in row-major order."""
        for index in range(self.size):
            yield self.cell_at(index)

    def to_rows(self) -> List[List[Cell]]:
        """2D list of cell snapshots, [row][col]."""
        return [
            [self.cell_at(r * self.cols + c) for c in range(self.cols)]
            for r in range(self.rows)
        ]

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        if self.rows != other.rows or self.cols != other.cols:
            return False
        return all(
            np.array_equal(self.cells[name], other.cells[name])
            for name in CELL_DTYPE.names
        )

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, start={self.start}, goal={self.goal}, walls={len(self.walls)})"


def create_grid(rows: int, cols: int) -> Grid:
    """
    Allocate a rows x cols grid with every cell at its defaults.

    No walls, no start or goal, all costs infinite, no predecessors.
    """
    return Grid(rows, cols)


def clone_grid(grid: Grid) -> Grid:
    """Deep copy of a grid, all flags preserved."""
    return Grid(grid.rows, grid.cols, grid.cells.copy())


def reset_grid(grid: Grid) -> Grid:
    """
    Copy of a grid with all search state cleared.

    is_visited / is_path become False, distance / g_score / f_score become
    inf and previous is dropped. is_start / is_goal / is_wall are unchanged.
    """
    clean = clone_grid(grid)
    clean.cells["is_visited"] = False
    clean.cells["is_path"] = False
    clean.cells["distance"] = np.inf
    clean.cells["g_score"] = np.inf
    clean.cells["f_score"] = np.inf
    clean.cells["previous"] = NO_PREVIOUS
    return clean


def neighbors(cell: Union[Cell, Coord], grid: Grid) -> List[Cell]:
    """
    Axis-aligned neighbors of a cell inside the grid bounds.

    Args:
        cell: Cell snapshot or (row, col)
        grid: Grid to look in

    Returns:
        Up to four cells, ordered up, down, left, right
    """
    coord = cell.coord if isinstance(cell, Cell) else cell
    return [grid.cell_at(i) for i in grid.neighbor_indices(grid.index(coord))]


def place_endpoints(grid: Grid, start: Coord, goal: Coord) -> Grid:
    """
    Copy of a grid with start and goal placed at the given coordinates.

    Any previous start/goal flags are cleared, and walls on either
    endpoint are removed.

    Raises:
        ValueError: If start equals goal or either is out of bounds
    """
    if start == goal:
        raise ValueError(f"Start and goal must differ, both are {start}")
    start_index = grid.index(start)
    goal_index = grid.index(goal)

    placed = clone_grid(grid)
    placed.cells["is_start"] = False
    placed.cells["is_goal"] = False
    placed.cells["is_start"][start_index] = True
    placed.cells["is_wall"][start_index] = False
    placed.cells["is_goal"][goal_index] = True
    placed.cells["is_wall"][goal_index] = False
    return placed


def _move_role(grid: Grid, coord: Coord, role: str, other: str) -> Grid:
    index = grid.index(coord)
    if grid.cells[other][index]:
        logger.debug(f"Refusing to move {role} onto {other} at {coord}")
        return grid

    moved = clone_grid(grid)
    moved.cells[role] = False
    moved.cells[role][index] = True
    moved.cells["is_wall"][index] = False
    return moved


def move_start(grid: Grid, coord: Coord) -> Grid:
    """
    Move the start cell to coord.

    The old start flag and any wall on the destination are cleared in the
    same copy. Moving onto the goal is refused and the grid is returned
    unchanged.
    """
    return _move_role(grid, coord, "is_start", "is_goal")


def move_goal(grid: Grid, coord: Coord) -> Grid:
    """Move the goal cell to coord. Mirror of move_start."""
    return _move_role(grid, coord, "is_goal", "is_start")


def toggle_wall(grid: Grid, coord: Coord) -> Grid:
    """Flip the wall flag at coord. Start and goal cells are left alone."""
    index = grid.index(coord)
    if grid.cells["is_start"][index] or grid.cells["is_goal"][index]:
        return grid
    toggled = clone_grid(grid)
    toggled.cells["is_wall"][index] = not toggled.cells["is_wall"][index]
    return toggled


def clamp_coord(coord: Coord, rows: int, cols: int) -> Coord:
    """Clamp a coordinate into a rows x cols grid."""
    row = min(max(coord[0], 0), rows - 1)
    col = min(max(coord[1], 0), cols - 1)
    return (row, col)


def clamp_grid_size(size: int) -> int:
    """Clamp a side length into [MIN_GRID_SIZE, MAX_GRID_SIZE]."""
    return min(max(int(size), MIN_GRID_SIZE), MAX_GRID_SIZE)


def default_endpoints(size: int) -> Tuple[Coord, Coord]:
    """
    Start and goal positions used after a grid resize.

    Start sits one cell in from the top-left corner, goal one cell in
    from the bottom-right corner.
    """
    start = (min(1, size - 2), min(1, size - 2))
    goal = (size - 2, size - 2)
    return start, goal
