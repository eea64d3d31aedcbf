"""
Depth-First Search - LIFO stack, cells marked visited when pushed.
"""

from typing import List

from ...grid.model import Cell, Grid
from ..base import Algorithm, SearchAlgorithm
from ..context import SearchContext
from ..factory import register_algorithm


@register_algorithm
class DepthFirstSearch(SearchAlgorithm):
    """
    Explores as far as possible along one branch before backtracking.

    Neighbors are pushed up, down, left, right, so right is expanded
    first. Marking at push time keeps every cell on the stack at most
    once. Not complete in the general sense and not optimal.
    """
    algorithm = Algorithm.DFS
    name = "DFS"
    description = "Depth-First Search - stack based, no shortest path guarantee"

    def _explore(self, grid: Grid, context: SearchContext) -> List[Cell]:
        cells = grid.cells
        order: List[Cell] = []
        goal = context.goal_index

        start = context.start_index
        cells["is_visited"][start] = True
        stack = [start]

        while stack:
            current = stack.pop()
            self._finalize(grid, current, order)

            if current == goal:
                return order

            for neighbor in grid.neighbor_indices(current):
                if cells["is_wall"][neighbor] or cells["is_visited"][neighbor]:
                    continue
                cells["is_visited"][neighbor] = True
                cells["previous"][neighbor] = current
                stack.append(neighbor)

        return order
