"""
Search Context Module - Inputs for one search run.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..grid.model import Coord, Grid
from .heuristics import Heuristic, HeuristicFn, describe_heuristic, get_heuristic


@dataclass
class SearchContext:
    """
    Everything an algorithm needs for one run.

    Attributes:
        grid: Grid with roles and walls (search state is ignored)
        start: Origin coordinate
        goal: Target coordinate
        heuristic: Heuristic name, enum member or custom callable.
            Only Greedy and A* read it.
    """
    grid: Grid
    start: Coord
    goal: Coord
    heuristic: Union[str, Heuristic, HeuristicFn, None] = None

    @property
    def start_index(self) -> int:
        return self.grid.index(self.start)

    @property
    def goal_index(self) -> int:
        return self.grid.index(self.goal)

    def heuristic_function(self) -> HeuristicFn:
        """Resolved distance function (manhattan when unset or unknown)."""
        return get_heuristic(self.heuristic)

    @property
    def heuristic_name(self) -> Optional[str]:
        return describe_heuristic(self.heuristic)
