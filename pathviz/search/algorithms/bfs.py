"""
Breadth-First Search - FIFO queue, distance tracked as depth.
"""

from collections import deque
from typing import List

from ...grid.model import Cell, Grid
from ..base import Algorithm, SearchAlgorithm
from ..context import SearchContext
from ..factory import register_algorithm


@register_algorithm
class BreadthFirstSearch(SearchAlgorithm):
    """
    Explores the grid level by level.

    Cells are marked visited when enqueued so each enters the queue
    once. On a unit-cost grid the first path found is a shortest one.
    """
    algorithm = Algorithm.BFS
    name = "BFS"
    description = "Breadth-First Search - shortest path on unweighted grids"
    complete = True
    optimal = True

    def _explore(self, grid: Grid, context: SearchContext) -> List[Cell]:
        cells = grid.cells
        order: List[Cell] = []
        goal = context.goal_index

        start = context.start_index
        cells["is_visited"][start] = True
        cells["distance"][start] = 0
        queue = deque([start])

        while queue:
            current = queue.popleft()
            self._finalize(grid, current, order)

            if current == goal:
                return order

            depth = cells["distance"][current] + 1
            for neighbor in grid.neighbor_indices(current):
                if cells["is_wall"][neighbor] or cells["is_visited"][neighbor]:
                    continue
                cells["is_visited"][neighbor] = True
                cells["previous"][neighbor] = current
                cells["distance"][neighbor] = depth
                queue.append(neighbor)

        return order
