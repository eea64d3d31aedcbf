"""
Base Algorithm Module - Abstract base class for search algorithms.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import replace
from enum import Enum
from typing import List, Optional, Union

from ..grid.model import NO_PREVIOUS, Cell, Coord, Grid, reset_grid
from .context import SearchContext
from .heuristics import Heuristic, HeuristicFn
from .result import SearchMetrics, SearchResult

logger = logging.getLogger(__name__)


class Algorithm(Enum):
    """The closed set of search algorithms."""
    DFS = "dfs"
    BFS = "bfs"
    UCS = "ucs"
    GREEDY = "greedy"
    ASTAR = "astar"

    @classmethod
    def parse(cls, name: Union[str, "Algorithm", None]) -> "Algorithm":
        """
        Resolve an algorithm by name.

        Unknown or missing names fall back to DFS so the UI always has
        a runnable selection.
        """
        if isinstance(name, Algorithm):
            return name
        try:
            return cls(str(name).lower())
        except ValueError:
            logger.warning(f"Unknown algorithm '{name}', falling back to dfs")
            return cls.DFS


class SearchAlgorithm(ABC):
    """
    Abstract base class for all grid search algorithms.

    Subclasses implement _explore() and set the class attributes.
    search() handles the shared parts: an isolated working copy,
    timing, success detection and path reconstruction.

    Attributes:
        algorithm: Enum member this class implements
        name: Short display name
        description: Human-readable description for UI
        uses_heuristic: True if the heuristic argument is read
        complete: Always finds a path when one exists
        optimal: Found paths are shortest
    """
    algorithm: Algorithm = Algorithm.DFS
    name: str = "base"
    description: str = "Base algorithm"
    uses_heuristic: bool = False
    complete: bool = False
    optimal: bool = False

    def run(
        self,
        grid: Grid,
        start: Coord,
        goal: Coord,
        heuristic: Union[str, Heuristic, HeuristicFn, None] = None
    ) -> SearchResult:
        """
        Search from start to goal on a grid.

        Args:
            grid: Grid with roles and walls; never mutated
            start: Origin coordinate
            goal: Target coordinate
            heuristic: Heuristic name or callable (ignored unless
                uses_heuristic)

        Returns:
            SearchResult with visit order and path
        """
        return self.search(SearchContext(grid=grid, start=start, goal=goal, heuristic=heuristic))

    def search(self, context: SearchContext) -> SearchResult:
        """Run the algorithm on a private copy of the context grid."""
        start_time = time.perf_counter()

        if self.uses_heuristic and not callable(context.heuristic):
            # Resolve the name once so a fallback warning is logged once per run
            context = replace(context, heuristic=Heuristic.parse(context.heuristic))

        working = reset_grid(context.grid)
        visited_order = self._explore(working, context)

        reached = bool(visited_order) and visited_order[-1].coord == context.goal
        path = self.reconstruct_path(working, context.goal_index) if reached else []

        elapsed_ms = (time.perf_counter() - start_time) * 1000

        heuristic = context.heuristic_name if self.uses_heuristic else None
        logger.debug(
            f"{self.name}: visited {len(visited_order)} cells, "
            f"path length {len(path)} ({elapsed_ms:.2f}ms)"
        )

        return SearchResult(
            visited_nodes_in_order=visited_order,
            path=path,
            metrics=SearchMetrics(
                execution_time_ms=elapsed_ms,
                nodes_visited=len(visited_order),
                path_length=len(path),
                algorithm_name=self.name,
                heuristic_name=heuristic,
            ),
        )

    @abstractmethod
    def _explore(self, grid: Grid, context: SearchContext) -> List[Cell]:
        """
        Traverse the working grid.

        Must stop as soon as the goal is finalized, with the goal as the
        last entry of the returned list.

        Args:
            grid: Private working copy, already reset
            context: Run inputs

        Returns:
            Snapshots of finalized cells in finalize order
        """
        pass

    @staticmethod
    def _finalize(grid: Grid, index: int, order: List[Cell]) -> None:
        """Record a finalized cell in the visit order."""
        order.append(grid.cell_at(index))

    @staticmethod
    def reconstruct_path(grid: Grid, goal_index: int) -> List[Coord]:
        """
        Follow predecessor handles from goal back to start.

        Marks the cells as is_path on the working grid and returns the
        coordinates ordered start to goal.
        """
        path: List[Coord] = []
        previous = grid.cells["previous"]
        index: Optional[int] = goal_index

        # A tree of predecessors can never be longer than the grid
        for _ in range(grid.size):
            grid.cells["is_path"][index] = True
            path.append(grid.coord(index))
            parent = int(previous[index])
            if parent == NO_PREVIOUS:
                break
            index = parent

        path.reverse()
        return path
