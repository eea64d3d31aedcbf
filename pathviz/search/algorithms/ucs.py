"""
Uniform Cost Search - priority queue keyed by cumulative cost.
"""

from typing import List

from ...grid.model import Cell, Grid
from ..base import Algorithm, SearchAlgorithm
from ..context import SearchContext
from ..factory import register_algorithm
from ..frontier import PriorityFrontier

# Cost of one move between adjacent open cells
STEP_COST = 1.0


@register_algorithm
class UniformCostSearch(SearchAlgorithm):
    """
    Always expands the cheapest frontier cell.

    Cells are finalized when popped. A cheaper discovery re-inserts the
    cell; the stale, costlier entry is skipped when it surfaces. With
    unit step costs the result matches BFS.
    """
    algorithm = Algorithm.UCS
    name = "UCS"
    description = "Uniform Cost Search - expands lowest cumulative cost first"
    complete = True
    optimal = True

    def _explore(self, grid: Grid, context: SearchContext) -> List[Cell]:
        cells = grid.cells
        order: List[Cell] = []
        goal = context.goal_index

        start = context.start_index
        cells["distance"][start] = 0
        frontier = PriorityFrontier()
        frontier.push(start, 0.0)

        while frontier:
            current = frontier.pop()
            if cells["is_visited"][current]:
                continue

            cells["is_visited"][current] = True
            self._finalize(grid, current, order)

            if current == goal:
                return order

            cost = cells["distance"][current] + STEP_COST
            for neighbor in grid.neighbor_indices(current):
                if cells["is_wall"][neighbor] or cells["is_visited"][neighbor]:
                    continue
                if cost < cells["distance"][neighbor]:
                    cells["distance"][neighbor] = cost
                    cells["previous"][neighbor] = current
                    frontier.push(neighbor, float(cost))

        return order
