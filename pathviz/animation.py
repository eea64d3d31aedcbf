"""
Animation Scheduler Module - Step replay of a search run.

This module provides the AnimationScheduler which replays the visit
order of a search result onto a display grid, one cell per timer tick,
then overlays the final path.

State machine:
  - IDLE: no result, display grid shows roles and walls only
  - RUNNING: a tick is pending on the timer
  - PAUSED: replay halted mid-way, resumable or steppable
  - COMPLETE: every visited cell shown, path overlay pending or shown

The scheduler owns exactly one timer handle. Every reschedule cancels the
previous callback first, and each callback carries a run generation so a
tick scheduled before a reset can never touch the new display grid.

For the search algorithms themselves, see the pathviz.search package.
"""

import logging
from enum import Enum, auto
from typing import Callable, List, Optional, Union

from pathviz.grid import Cell, Coord, Grid, reset_grid
from pathviz.search import (
    Algorithm, Heuristic, SearchAlgorithm, SearchResult, create_algorithm
)
from pathviz.timers import AnimationTimer

logger = logging.getLogger(__name__)


__all__ = [
    "AnimationState",
    "CellDisplay",
    "AnimationScheduler",
    "display_state",
]


MIN_SPEED_MS = 10
MAX_SPEED_MS = 1000
DEFAULT_SPEED_MS = 100

# Pause between the last visited cell and the path overlay
PATH_DELAY_MS = 500


class AnimationState(Enum):
    """
    Replay states.

    States:
        IDLE: Nothing computed yet (or reset)
        RUNNING: Ticking
        PAUSED: Halted, keeps current step
        COMPLETE: All steps shown
    """
    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()
    COMPLETE = auto()


class CellDisplay(Enum):
    """What a cell looks like on screen, highest priority first."""
    START = "start"
    GOAL = "goal"
    WALL = "wall"
    PATH = "path"
    VISITED = "visited"
    EMPTY = "empty"


def display_state(cell: Cell) -> CellDisplay:
    """
    Resolve a cell's display state.

    Priority: start > goal > wall > path > visited > empty.
    """
    if cell.is_start:
        return CellDisplay.START
    if cell.is_goal:
        return CellDisplay.GOAL
    if cell.is_wall:
        return CellDisplay.WALL
    if cell.is_path:
        return CellDisplay.PATH
    if cell.is_visited:
        return CellDisplay.VISITED
    return CellDisplay.EMPTY


def clamp_speed(speed_ms: int) -> int:
    """Clamp an animation delay into [MIN_SPEED_MS, MAX_SPEED_MS]."""
    return min(max(int(speed_ms), MIN_SPEED_MS), MAX_SPEED_MS)


class AnimationScheduler:
    """
    Replays search results on a display grid.

    The role grid (start, goal, walls) is owned by the caller and handed
    over with set_grid(). play() runs the selected algorithm on a clean
    copy and starts ticking; each tick reveals one more visited cell.

    State Flow:
        IDLE --play--> RUNNING --last step--> COMPLETE --(delay)--> path shown
                        |    ^
                    pause    play
                        v    |
                        PAUSED
        any --reset--> IDLE
    """

    def __init__(
        self,
        timer: AnimationTimer,
        grid: Optional[Grid] = None,
        algorithm: Union[str, Algorithm] = Algorithm.DFS,
        heuristic: Union[str, Heuristic] = Heuristic.MANHATTAN,
        speed_ms: int = DEFAULT_SPEED_MS,
        path_delay_ms: int = PATH_DELAY_MS
    ):
        """
        Initialize the scheduler.

        Args:
            timer: One-shot timer used for ticks and the path overlay
            grid: Initial role grid (may be set later with set_grid)
            algorithm: Algorithm name or enum member (unknown -> dfs)
            heuristic: Heuristic name or enum member (unknown -> manhattan)
            speed_ms: Delay per step, clamped to 10-1000
            path_delay_ms: Delay before the path overlay
        """
        self._timer = timer
        self.path_delay_ms = path_delay_ms
        self._speed_ms = clamp_speed(speed_ms)

        # Selection
        self._algorithm: SearchAlgorithm = create_algorithm(algorithm)
        self._heuristic = Heuristic.parse(heuristic)

        # State machine
        self._state = AnimationState.IDLE
        self._generation = 0

        # Grids
        self._grid: Optional[Grid] = None
        self._display_grid: Optional[Grid] = None

        # Run tracking
        self._result: Optional[SearchResult] = None
        self._current_step = 0
        self._execution_time_ms = 0.0
        self._path_shown = False

        self._listeners: List[Callable[["AnimationScheduler"], None]] = []

        if grid is not None:
            self.set_grid(grid)

    # -------------------- properties --------------------

    @property
    def state(self) -> AnimationState:
        """Get current state machine state."""
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == AnimationState.RUNNING

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm.algorithm

    @property
    def algorithm_label(self) -> str:
        """Display name of the selected algorithm."""
        return self._algorithm.name

    @property
    def uses_heuristic(self) -> bool:
        return self._algorithm.uses_heuristic

    @property
    def heuristic(self) -> Heuristic:
        return self._heuristic

    @property
    def speed_ms(self) -> int:
        return self._speed_ms

    @property
    def grid(self) -> Optional[Grid]:
        """Role grid (start, goal, walls) the next run will search."""
        return self._grid

    @property
    def display_grid(self) -> Optional[Grid]:
        """Grid as it should be drawn right now."""
        return self._display_grid

    @property
    def result(self) -> Optional[SearchResult]:
        """Result of the current run, None while idle."""
        return self._result

    @property
    def visited_nodes_in_order(self) -> List[Cell]:
        if self._result is None:
            return []
        return self._result.visited_nodes_in_order

    @property
    def path(self) -> List[Coord]:
        if self._result is None:
            return []
        return self._result.path

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def total_steps(self) -> int:
        return len(self.visited_nodes_in_order)

    @property
    def progress(self) -> float:
        """Replay progress from 0.0 to 1.0."""
        total = self.total_steps
        if total == 0:
            return 0.0
        return self._current_step / total

    @property
    def execution_time_ms(self) -> float:
        """Duration of the last search call, excluding animation."""
        return self._execution_time_ms

    @property
    def path_shown(self) -> bool:
        """True once the path overlay has been applied."""
        return self._path_shown

    @property
    def path_found(self) -> Optional[bool]:
        """Reachability of the last run, None before any run."""
        if self._result is None:
            return None
        return self._result.path_found

    # -------------------- listeners --------------------

    def add_listener(self, callback: Callable[["AnimationScheduler"], None]) -> None:
        """Register a callback run after every display change."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[["AnimationScheduler"], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # -------------------- configuration --------------------

    def set_grid(self, grid: Grid) -> None:
        """
        Replace the role grid.

        A structural change: any run in flight is cancelled and the
        scheduler returns to IDLE.
        """
        self._grid = reset_grid(grid)
        self.reset()

    def set_algorithm(self, algorithm: Union[str, Algorithm]) -> None:
        """
        Select the algorithm for the next run.

        Cancels and resets when a run is in flight.
        """
        new_algorithm = create_algorithm(algorithm)
        if new_algorithm.algorithm == self.algorithm:
            return
        if self._state != AnimationState.IDLE:
            self.reset()
        self._algorithm = new_algorithm
        logger.info(f"Algorithm changed to: {new_algorithm.name}")

    def set_heuristic(self, heuristic: Union[str, Heuristic]) -> None:
        """
        Select the heuristic for Greedy and A*.

        Cancels and resets when a run is in flight.
        """
        new_heuristic = Heuristic.parse(heuristic)
        if new_heuristic == self._heuristic:
            return
        if self._state != AnimationState.IDLE:
            self.reset()
        self._heuristic = new_heuristic
        logger.info(f"Heuristic changed to: {new_heuristic.value}")

    def set_speed(self, speed_ms: int) -> None:
        """Set delay per step; takes effect from the next tick."""
        self._speed_ms = clamp_speed(speed_ms)
        logger.debug(f"Animation speed: {self._speed_ms}ms")

    # -------------------- controls --------------------

    def play(self) -> bool:
        """
        Start or resume the replay.

        From IDLE or COMPLETE a fresh search runs first. From PAUSED the
        replay resumes at the current step. Ignored while RUNNING.

        Returns:
            True if the scheduler is now RUNNING
        """
        if self._state == AnimationState.RUNNING:
            return False

        if self._state != AnimationState.PAUSED:
            if not self._start_run():
                return False

        self._state = AnimationState.RUNNING
        logger.info(f"State[RUNNING]: step {self._current_step}/{self.total_steps}")
        self._schedule(self._speed_ms, self._tick)
        self._notify()
        return True

    def pause(self) -> bool:
        """
        Halt ticking without losing the current step.

        Returns:
            True if the scheduler was RUNNING
        """
        if self._state != AnimationState.RUNNING:
            return False
        self._cancel_pending()
        self._state = AnimationState.PAUSED
        logger.info(f"State[PAUSED]: step {self._current_step}/{self.total_steps}")
        self._notify()
        return True

    def step_forward(self) -> bool:
        """
        Reveal one more visited cell.

        Refused while RUNNING. From IDLE the search runs first. Reaching
        the last step completes the run and shows the path at once.

        Returns:
            True if a step was taken
        """
        if self._state == AnimationState.RUNNING:
            logger.debug("step_forward ignored while running")
            return False
        if self._state == AnimationState.COMPLETE:
            return False
        if self._state == AnimationState.IDLE:
            if not self._start_run():
                return False

        self._advance()
        if self._current_step >= self.total_steps:
            self._complete(delay_path=False)
        else:
            self._state = AnimationState.PAUSED
        self._notify()
        return True

    def step_backward(self) -> bool:
        """
        Hide the most recently revealed cell.

        Refused while RUNNING. The display grid is rebuilt from the role
        grid for steps [0, current_step) rather than undone in place.

        Returns:
            True if a step was taken
        """
        if self._state == AnimationState.RUNNING:
            logger.debug("step_backward ignored while running")
            return False
        if self._result is None or self._current_step == 0:
            return False

        self._cancel_pending()
        self._current_step -= 1
        self._rebuild_display()
        self._state = AnimationState.PAUSED
        self._notify()
        return True

    def reset(self) -> None:
        """
        Cancel any pending tick and return to IDLE.

        Clears the step counter, result and execution time; the display
        grid goes back to roles and walls only.
        """
        self._cancel_pending()
        self._state = AnimationState.IDLE
        self._result = None
        self._current_step = 0
        self._execution_time_ms = 0.0
        self._path_shown = False
        self._display_grid = reset_grid(self._grid) if self._grid is not None else None
        logger.info("AnimationScheduler reset")
        self._notify()

    # -------------------- display queries --------------------

    def cell_display_state(self, row: int, col: int) -> CellDisplay:
        """Display state of one cell of the display grid."""
        if self._display_grid is None:
            return CellDisplay.EMPTY
        return display_state(self._display_grid.cell(row, col))

    def display_states(self) -> List[List[CellDisplay]]:
        """Display state of every cell, [row][col]."""
        if self._display_grid is None:
            return []
        return [
            [display_state(cell) for cell in row]
            for row in self._display_grid.to_rows()
        ]

    def get_state_string(self) -> str:
        """Get human-readable state string for UI display."""
        state_strings = {
            AnimationState.IDLE: "Idle",
            AnimationState.RUNNING: "Running",
            AnimationState.PAUSED: "Paused",
            AnimationState.COMPLETE: "Complete",
        }
        base = state_strings.get(self._state, "Unknown")

        if self._result is not None:
            return f"{base} ({self._current_step}/{self.total_steps})"

        return base

    # -------------------- internals --------------------

    def _start_run(self) -> bool:
        """Run the search on a clean copy of the role grid."""
        if self._grid is None:
            logger.warning("No grid set, cannot start a run")
            return False
        start, goal = self._grid.start, self._grid.goal
        if start is None or goal is None:
            logger.warning("Grid has no start or goal, cannot start a run")
            return False

        self._cancel_pending()
        clean = reset_grid(self._grid)
        result = self._algorithm.run(clean, start, goal, self._heuristic)

        self._result = result
        self._execution_time_ms = result.metrics.execution_time_ms
        self._current_step = 0
        self._path_shown = False
        self._display_grid = reset_grid(self._grid)

        logger.info(
            f"{self._algorithm.name}: {result.nodes_visited} steps, "
            f"path length {result.path_length} ({self._execution_time_ms:.2f}ms)"
        )
        return True

    def _schedule(self, delay_ms: int, action: Callable[[], None]) -> None:
        """Replace the pending callback with action after delay_ms."""
        self._timer.cancel()
        generation = self._generation
        self._timer.start(delay_ms, lambda: self._on_timer(generation, action))

    def _on_timer(self, generation: int, action: Callable[[], None]) -> None:
        if generation != self._generation:
            logger.debug(f"Dropping stale timer callback (generation {generation} != {self._generation})")
            return
        action()

    def _cancel_pending(self) -> None:
        self._timer.cancel()
        self._generation += 1

    def _tick(self) -> None:
        if self._state != AnimationState.RUNNING:
            return

        self._advance()
        logger.debug(f"Tick: step {self._current_step}/{self.total_steps}")

        if self._current_step >= self.total_steps:
            self._complete(delay_path=True)
        else:
            self._schedule(self._speed_ms, self._tick)
        self._notify()

    def _advance(self) -> None:
        """Reveal visited cell number current_step and move on."""
        cell = self.visited_nodes_in_order[self._current_step]
        index = self._display_grid.index(cell.coord)
        self._display_grid.cells["is_visited"][index] = True
        self._current_step += 1

    def _rebuild_display(self) -> None:
        """Recompute the display grid from scratch for [0, current_step)."""
        display = reset_grid(self._grid)
        for cell in self.visited_nodes_in_order[:self._current_step]:
            display.cells["is_visited"][display.index(cell.coord)] = True
        self._display_grid = display
        self._path_shown = False

    def _complete(self, delay_path: bool) -> None:
        self._state = AnimationState.COMPLETE
        found = self._result is not None and self._result.path_found
        logger.info(f"State[COMPLETE]: {'path found' if found else 'no path'}")

        if not found:
            return
        if delay_path:
            self._schedule(self.path_delay_ms, self._show_path)
        else:
            self._show_path(notify=False)

    def _show_path(self, notify: bool = True) -> None:
        """Overlay the path on the display grid (endpoints excluded)."""
        cells = self._display_grid.cells
        for coord in self.path:
            index = self._display_grid.index(coord)
            if cells["is_start"][index] or cells["is_goal"][index]:
                continue
            cells["is_path"][index] = True
        self._path_shown = True
        logger.debug(f"Path overlay applied ({len(self.path)} cells)")
        if notify:
            self._notify()
