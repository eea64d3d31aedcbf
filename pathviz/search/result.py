"""
Search Result Module - Visit order, path and timing of one search run.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..grid.model import Cell, Coord


@dataclass
class SearchMetrics:
    """
    Performance metrics for a search run.

    Attributes:
        execution_time_ms: Wall time of the search call only
        nodes_visited: Number of finalized cells
        path_length: Cells on the path, endpoints included (0 if none)
        algorithm_name: Algorithm that produced the result
        heuristic_name: Heuristic used, None for uninformed algorithms
    """
    execution_time_ms: float = 0.0
    nodes_visited: int = 0
    path_length: int = 0
    algorithm_name: str = ""
    heuristic_name: Optional[str] = None


@dataclass
class SearchResult:
    """
    Output of a search algorithm.

    Attributes:
        visited_nodes_in_order: Cell snapshots in the order they were
            finalized (popped), which is the order animation replays
        path: (row, col) from start to goal inclusive, empty if unreachable
        metrics: Timing and counters
    """
    visited_nodes_in_order: List[Cell] = field(default_factory=list)
    path: List[Coord] = field(default_factory=list)
    metrics: SearchMetrics = field(default_factory=SearchMetrics)

    @property
    def path_found(self) -> bool:
        """True if the goal was reached."""
        return len(self.path) > 0

    @property
    def path_length(self) -> int:
        return len(self.path)

    @property
    def nodes_visited(self) -> int:
        return len(self.visited_nodes_in_order)

    @property
    def visited_coords(self) -> List[Coord]:
        """Visit order as plain coordinates."""
        return [cell.coord for cell in self.visited_nodes_in_order]
