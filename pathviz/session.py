"""
Visualizer Session - Grid, obstacle settings and scheduler in one place.

The session is what the UI and the tools talk to. It owns the role grid
(start, goal, walls) and pushes every edit into the AnimationScheduler,
which resets itself whenever the grid changes underneath a run.

Usage:
    session = VisualizerSession(ManualTimer(), grid_size=10, algorithm="astar")
    session.generate_obstacles(ObstacleMode.RANDOM, density=0.25, seed=7)
    session.scheduler.play()
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .animation import DEFAULT_SPEED_MS, AnimationScheduler, AnimationState
from .grid import (
    Coord,
    Grid,
    ObstacleMode,
    clamp_grid_size,
    create_grid,
    default_endpoints,
    place_endpoints,
    validate_path,
)
from .grid import move_goal as grid_move_goal
from .grid import move_start as grid_move_start
from .grid import toggle_wall as grid_toggle_wall
from .grid import generate_obstacles as grid_generate_obstacles
from .timers import AnimationTimer

logger = logging.getLogger(__name__)


STATUS_RUNNING = "Animation in progress..."
STATUS_FOUND = "Path found successfully!"
STATUS_NOT_FOUND = "No path found"
STATUS_READY = "Ready to start pathfinding"

STATUS_COLORS = {
    STATUS_RUNNING: "#17a2b8",
    STATUS_FOUND: "#28a745",
    STATUS_NOT_FOUND: "#dc3545",
    STATUS_READY: "#6c757d",
}


@dataclass
class RunStats:
    """
    Statistics for the stats panel.

    Attributes:
        algorithm_name: Display name of the selected algorithm
        heuristic_name: Heuristic in use, None for uninformed algorithms
        nodes_visited: Cells finalized by the search
        path_length: Cells on the path (0 if none)
        execution_time_ms: Search time, animation excluded
        path_found: Reachability, None before any run
        is_complete: Replay has shown every visited cell
        current_step: Cells revealed so far
        total_steps: Cells to reveal
        progress_percent: current_step / total_steps * 100
        efficiency_percent: path_length / nodes_visited * 100
        status_message: One-line status text
    """
    algorithm_name: str = ""
    heuristic_name: Optional[str] = None
    nodes_visited: int = 0
    path_length: int = 0
    execution_time_ms: float = 0.0
    path_found: Optional[bool] = None
    is_complete: bool = False
    current_step: int = 0
    total_steps: int = 0
    progress_percent: float = 0.0
    efficiency_percent: float = 0.0
    status_message: str = STATUS_READY

    @property
    def status_color(self) -> str:
        return STATUS_COLORS.get(self.status_message, STATUS_COLORS[STATUS_READY])


class VisualizerSession:
    """
    Holds grid size, endpoints, obstacle settings and the scheduler.

    Every edit produces a new role grid and hands it to the scheduler,
    which cancels any pending tick and returns to IDLE.
    """

    def __init__(
        self,
        timer: AnimationTimer,
        grid_size: int = 7,
        algorithm: str = "dfs",
        heuristic: str = "manhattan",
        speed_ms: int = DEFAULT_SPEED_MS,
        obstacle_mode: Union[str, ObstacleMode] = ObstacleMode.MANUAL,
        obstacle_density: float = 0.3,
        obstacle_seed: int = 42
    ):
        self.obstacle_mode = ObstacleMode.parse(obstacle_mode)
        self.obstacle_density = _clamp_density(obstacle_density)
        self.obstacle_seed = int(obstacle_seed)

        self._grid_size = clamp_grid_size(grid_size)
        self._grid = self._build_grid(self._grid_size)

        self.scheduler = AnimationScheduler(
            timer,
            grid=self._grid,
            algorithm=algorithm,
            heuristic=heuristic,
            speed_ms=speed_ms,
        )

        if self.obstacle_mode != ObstacleMode.MANUAL:
            self.generate_obstacles()

        logger.info(f"Session created: {self._grid_size}x{self._grid_size}, "
                    f"algorithm={self.scheduler.algorithm.value}")

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], timer: AnimationTimer) -> "VisualizerSession":
        """Build a session from a settings dictionary (see pathviz.settings)."""
        return cls(
            timer,
            grid_size=settings.get("grid_size", 7),
            algorithm=settings.get("algorithm", "dfs"),
            heuristic=settings.get("heuristic", "manhattan"),
            speed_ms=settings.get("animation_speed_ms", DEFAULT_SPEED_MS),
            obstacle_mode=settings.get("obstacle_mode", "manual"),
            obstacle_density=settings.get("obstacle_density", 0.3),
            obstacle_seed=settings.get("obstacle_seed", 42),
        )

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @property
    def grid(self) -> Grid:
        """Role grid (start, goal, walls)."""
        return self._grid

    @property
    def start(self) -> Optional[Coord]:
        return self._grid.start

    @property
    def goal(self) -> Optional[Coord]:
        return self._grid.goal

    # -------------------- grid edits --------------------

    def set_grid_size(self, size: int) -> int:
        """
        Resize the grid.

        Size is clamped to 5-20, endpoints move to their default
        positions and all walls are dropped.

        Returns:
            The size actually applied
        """
        self._grid_size = clamp_grid_size(size)
        self._apply_grid(self._build_grid(self._grid_size))
        logger.info(f"Grid size set to {self._grid_size}x{self._grid_size}")
        return self._grid_size

    def move_start(self, coord: Coord) -> bool:
        """Move the start cell. Returns False if the move was refused."""
        return self._edit(grid_move_start, coord)

    def move_goal(self, coord: Coord) -> bool:
        """Move the goal cell. Returns False if the move was refused."""
        return self._edit(grid_move_goal, coord)

    def toggle_wall(self, coord: Coord) -> bool:
        """Flip a wall. Returns False on start or goal cells."""
        return self._edit(grid_toggle_wall, coord)

    def generate_obstacles(
        self,
        mode: Union[str, ObstacleMode, None] = None,
        density: Optional[float] = None,
        seed: Optional[int] = None
    ) -> bool:
        """
        Regenerate walls and report whether the goal is still reachable.

        Arguments left as None keep the session's current setting.

        Returns:
            True if a route from start to goal exists
        """
        if mode is not None:
            self.obstacle_mode = ObstacleMode.parse(mode)
        if density is not None:
            self.obstacle_density = _clamp_density(density)
        if seed is not None:
            self.obstacle_seed = int(seed)

        self.scheduler.reset()
        start, goal = self._grid.start, self._grid.goal
        grid = grid_generate_obstacles(
            self._grid, self.obstacle_mode, self.obstacle_density, self.obstacle_seed
        )
        grid = place_endpoints(grid, start, goal)

        reachable = validate_path(grid)
        if not reachable:
            logger.warning(
                f"Obstacles ({self.obstacle_mode.value}, seed={self.obstacle_seed}) "
                f"block every route from {start} to {goal}"
            )
        self._apply_grid(grid)
        return reachable

    def is_reachable(self) -> bool:
        """Flood-fill check on the current role grid."""
        return validate_path(self._grid)

    # -------------------- stats --------------------

    def stats(self) -> RunStats:
        """Snapshot of the numbers shown in the stats panel."""
        scheduler = self.scheduler
        result = scheduler.result
        stats = RunStats(
            algorithm_name=scheduler.algorithm_label,
            heuristic_name=scheduler.heuristic.value if scheduler.uses_heuristic else None,
            current_step=scheduler.current_step,
            total_steps=scheduler.total_steps,
            progress_percent=scheduler.progress * 100,
            is_complete=scheduler.state == AnimationState.COMPLETE,
        )

        if result is not None:
            stats.nodes_visited = result.nodes_visited
            stats.path_length = result.path_length
            stats.execution_time_ms = scheduler.execution_time_ms
            stats.path_found = result.path_found
            if result.nodes_visited > 0:
                stats.efficiency_percent = result.path_length / result.nodes_visited * 100

        if scheduler.is_running:
            stats.status_message = STATUS_RUNNING
        elif stats.is_complete and stats.path_found:
            stats.status_message = STATUS_FOUND
        elif stats.is_complete:
            stats.status_message = STATUS_NOT_FOUND
        else:
            stats.status_message = STATUS_READY
        return stats

    def to_settings(self) -> Dict[str, Any]:
        """Current preferences as a settings dictionary."""
        return {
            "grid_size": self._grid_size,
            "algorithm": self.scheduler.algorithm.value,
            "heuristic": self.scheduler.heuristic.value,
            "animation_speed_ms": self.scheduler.speed_ms,
            "obstacle_mode": self.obstacle_mode.value,
            "obstacle_density": self.obstacle_density,
            "obstacle_seed": self.obstacle_seed,
        }

    # -------------------- internals --------------------

    @staticmethod
    def _build_grid(size: int) -> Grid:
        start, goal = default_endpoints(size)
        return place_endpoints(create_grid(size, size), start, goal)

    def _edit(self, operation, coord: Coord) -> bool:
        if self.scheduler.state != AnimationState.IDLE:
            self.scheduler.reset()
        edited = operation(self._grid, coord)
        if edited is self._grid:
            return False
        self._apply_grid(edited)
        return True

    def _apply_grid(self, grid: Grid) -> None:
        self._grid = grid
        self.scheduler.set_grid(grid)


def _clamp_density(density: float) -> float:
    return min(max(float(density), 0.0), 1.0)
