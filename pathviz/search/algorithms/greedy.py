"""
Greedy Best-First Search - priority queue keyed by heuristic only.
"""

from typing import List

from ...grid.model import Cell, Grid
from ..base import Algorithm, SearchAlgorithm
from ..context import SearchContext
from ..factory import register_algorithm
from ..frontier import PriorityFrontier


@register_algorithm
class GreedyBestFirstSearch(SearchAlgorithm):
    """
    Expands whichever frontier cell looks closest to the goal.

    No cost is tracked: every unvisited neighbor is pushed with its
    heuristic value and takes the current cell as predecessor, so the
    last discoverer before finalization wins. Fast, not optimal.
    """
    algorithm = Algorithm.GREEDY
    name = "Greedy"
    description = "Greedy Best-First - follows the heuristic, ignores cost so far"
    uses_heuristic = True

    def _explore(self, grid: Grid, context: SearchContext) -> List[Cell]:
        cells = grid.cells
        order: List[Cell] = []
        goal = context.goal_index
        goal_coord = context.goal
        h = context.heuristic_function()

        start = context.start_index
        frontier = PriorityFrontier()
        frontier.push(start, float(h(context.start, goal_coord)))

        while frontier:
            current = frontier.pop()
            if cells["is_visited"][current]:
                continue

            cells["is_visited"][current] = True
            self._finalize(grid, current, order)

            if current == goal:
                return order

            for neighbor in grid.neighbor_indices(current):
                if cells["is_wall"][neighbor] or cells["is_visited"][neighbor]:
                    continue
                cells["previous"][neighbor] = current
                frontier.push(neighbor, float(h(grid.coord(neighbor), goal_coord)))

        return order
