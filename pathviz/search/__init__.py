"""
Search Package - Grid search algorithms for the pathfinding visualizer.

Every algorithm takes (grid, start, goal, heuristic) and returns the cells
it finalized, in order, plus the reconstructed path. The input grid is
never touched; each run works on its own reset copy.

Public API:
    - Algorithm: Enum of the five algorithms (dfs, bfs, ucs, greedy, astar)
    - Heuristic: Enum of heuristics (manhattan, euclidean, diagonal)
    - SearchAlgorithm: Abstract base for algorithms
    - SearchContext: Inputs for one run
    - SearchResult / SearchMetrics: Outputs of one run
    - create_algorithm(), run_search(): Factory and convenience runner
    - get_algorithm_names(), get_algorithm_info(): Registry queries

Usage:
    from pathviz.search import run_search

    result = run_search(grid, (0, 0), (4, 4), "astar", "manhattan")
    for cell in result.visited_nodes_in_order:
        print(cell.row, cell.col)
    print(f"Path: {result.path}")
"""

# Core data structures
from .context import SearchContext
from .result import SearchMetrics, SearchResult
from .heuristics import (
    Heuristic,
    diagonal,
    euclidean,
    get_heuristic,
    manhattan,
)

# Algorithm framework
from .base import Algorithm, SearchAlgorithm
from .factory import (
    create_algorithm,
    get_algorithm_info,
    get_algorithm_names,
    get_default_algorithm_name,
    register_algorithm,
    run_search,
)

# Import algorithms to register them
from . import algorithms

__all__ = [
    # Data structures
    "SearchContext",
    "SearchMetrics",
    "SearchResult",
    # Heuristics
    "Heuristic",
    "diagonal",
    "euclidean",
    "get_heuristic",
    "manhattan",
    # Algorithm framework
    "Algorithm",
    "SearchAlgorithm",
    "create_algorithm",
    "get_algorithm_info",
    "get_algorithm_names",
    "get_default_algorithm_name",
    "register_algorithm",
    "run_search",
]
