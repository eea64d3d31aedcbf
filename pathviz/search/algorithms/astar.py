"""
A* Search - priority queue keyed by f = g + h.
"""

from typing import List

from ...grid.model import Cell, Grid
from ..base import Algorithm, SearchAlgorithm
from ..context import SearchContext
from ..factory import register_algorithm
from ..frontier import PriorityFrontier
from .ucs import STEP_COST


@register_algorithm
class AStarSearch(SearchAlgorithm):
    """
    Best-first search on actual cost plus estimated remaining cost.

    A neighbor is relaxed only when the new g is strictly lower than the
    best known g. Returns a shortest path whenever the heuristic is
    admissible; with an inadmissible one the path is valid but may be
    longer.
    """
    algorithm = Algorithm.ASTAR
    name = "A*"
    description = "A* Search - cost so far plus heuristic, optimal when admissible"
    uses_heuristic = True
    complete = True
    optimal = True

    def _explore(self, grid: Grid, context: SearchContext) -> List[Cell]:
        cells = grid.cells
        order: List[Cell] = []
        goal = context.goal_index
        goal_coord = context.goal
        h = context.heuristic_function()

        start = context.start_index
        cells["g_score"][start] = 0
        cells["f_score"][start] = h(context.start, goal_coord)
        frontier = PriorityFrontier()
        frontier.push(start, float(cells["f_score"][start]))

        while frontier:
            current = frontier.pop()
            if cells["is_visited"][current]:
                continue

            cells["is_visited"][current] = True
            self._finalize(grid, current, order)

            if current == goal:
                return order

            tentative_g = cells["g_score"][current] + STEP_COST
            for neighbor in grid.neighbor_indices(current):
                if cells["is_wall"][neighbor] or cells["is_visited"][neighbor]:
                    continue
                if tentative_g < cells["g_score"][neighbor]:
                    cells["previous"][neighbor] = current
                    cells["g_score"][neighbor] = tentative_g
                    f = tentative_g + h(grid.coord(neighbor), goal_coord)
                    cells["f_score"][neighbor] = f
                    frontier.push(neighbor, float(f))

        return order
