"""
Algorithm Factory Module - Registry and factory for algorithm instantiation.
"""

import logging
from typing import Any, Dict, List, Type, Union

from ..grid.model import Coord, Grid
from .base import Algorithm, SearchAlgorithm
from .heuristics import Heuristic, HeuristicFn
from .result import SearchResult

logger = logging.getLogger(__name__)


# Global registry of algorithms
_ALGORITHMS: Dict[Algorithm, Type[SearchAlgorithm]] = {}

DEFAULT_ALGORITHM = Algorithm.DFS


def register_algorithm(cls: Type[SearchAlgorithm]) -> Type[SearchAlgorithm]:
    """
    Decorator to register an algorithm class.

    Usage:
        @register_algorithm
        class BreadthFirstSearch(SearchAlgorithm):
            algorithm = Algorithm.BFS
            ...

    Args:
        cls: Algorithm class to register

    Returns:
        The same class (for decorator chaining)

    Raises:
        TypeError: If cls is not a SearchAlgorithm subclass
    """
    if not (isinstance(cls, type) and issubclass(cls, SearchAlgorithm)):
        raise TypeError(f"{cls} must be a subclass of SearchAlgorithm")
    _ALGORITHMS[cls.algorithm] = cls
    return cls


def create_algorithm(algorithm: Union[str, Algorithm, None], **kwargs: Any) -> SearchAlgorithm:
    """
    Create an algorithm instance.

    Args:
        algorithm: Enum member or name (e.g., "bfs", "astar"). Unknown
            names fall back to dfs.
        **kwargs: Additional arguments passed to the constructor

    Returns:
        Algorithm instance
    """
    selected = Algorithm.parse(algorithm)
    if selected not in _ALGORITHMS:
        logger.warning(f"Algorithm '{selected.value}' not registered, using {DEFAULT_ALGORITHM.value}")
        selected = DEFAULT_ALGORITHM
    return _ALGORITHMS[selected](**kwargs)


def get_algorithm_names() -> List[str]:
    """
    Get list of available algorithm names.

    Returns:
        Registered names in enum declaration order
    """
    return [member.value for member in Algorithm if member in _ALGORITHMS]


def get_algorithm_info() -> List[Dict[str, Any]]:
    """
    Get name, description and capabilities for all registered algorithms.

    Returns:
        List of dicts with 'name', 'label', 'description',
        'uses_heuristic', 'complete' and 'optimal' keys
    """
    info = []
    for member in Algorithm:
        cls = _ALGORITHMS.get(member)
        if cls is None:
            continue
        info.append({
            "name": member.value,
            "label": cls.name,
            "description": cls.description,
            "uses_heuristic": cls.uses_heuristic,
            "complete": cls.complete,
            "optimal": cls.optimal,
        })
    return info


def get_default_algorithm_name() -> str:
    """
    Get the default algorithm name.

    Returns:
        "dfs"
    """
    return DEFAULT_ALGORITHM.value


def run_search(
    grid: Grid,
    start: Coord,
    goal: Coord,
    algorithm: Union[str, Algorithm, None] = DEFAULT_ALGORITHM,
    heuristic: Union[str, Heuristic, HeuristicFn, None] = Heuristic.MANHATTAN
) -> SearchResult:
    """
    Convenience wrapper: create an algorithm and run it once.

    Example:
        result = run_search(grid, (0, 0), (4, 4), "astar", "euclidean")
        print(result.path_length, result.nodes_visited)
    """
    return create_algorithm(algorithm).run(grid, start, goal, heuristic)
