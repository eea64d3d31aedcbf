"""
Algorithms Package - Concrete search implementations.

Import this module to register all built-in algorithms.
"""

from .dfs import DepthFirstSearch
from .bfs import BreadthFirstSearch
from .ucs import UniformCostSearch
from .greedy import GreedyBestFirstSearch
from .astar import AStarSearch

__all__ = [
    "DepthFirstSearch",
    "BreadthFirstSearch",
    "UniformCostSearch",
    "GreedyBestFirstSearch",
    "AStarSearch",
]
