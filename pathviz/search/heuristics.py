"""
Heuristic Library - Distance estimates between two grid coordinates.

All three are admissible for 4-directional unit-cost movement:
Manhattan is exact on an open grid, Euclidean and Diagonal never exceed it.
"""

import logging
import math
from enum import Enum
from typing import Callable, Dict, Optional, Union

from ..grid.model import Coord

logger = logging.getLogger(__name__)

HeuristicFn = Callable[[Coord, Coord], float]


def manhattan(a: Coord, b: Coord) -> float:
    """|d_row| + |d_col|."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def euclidean(a: Coord, b: Coord) -> float:
    """Straight-line distance."""
    d_row = a[0] - b[0]
    d_col = a[1] - b[1]
    return math.sqrt(d_row * d_row + d_col * d_col)


def diagonal(a: Coord, b: Coord) -> float:
    """Chebyshev distance, max(|d_row|, |d_col|)."""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


class Heuristic(Enum):
    """Heuristics selectable for Greedy and A*."""
    MANHATTAN = "manhattan"
    EUCLIDEAN = "euclidean"
    DIAGONAL = "diagonal"

    @classmethod
    def parse(cls, name: Union[str, "Heuristic", None]) -> "Heuristic":
        """
        Resolve a heuristic by name.

        Unknown or missing names fall back to MANHATTAN.
        """
        if isinstance(name, Heuristic):
            return name
        if name is None:
            return cls.MANHATTAN
        try:
            return cls(str(name).lower())
        except ValueError:
            logger.warning(f"Unknown heuristic '{name}', falling back to manhattan")
            return cls.MANHATTAN

    @property
    def function(self) -> HeuristicFn:
        return _FUNCTIONS[self]


_FUNCTIONS: Dict[Heuristic, HeuristicFn] = {
    Heuristic.MANHATTAN: manhattan,
    Heuristic.EUCLIDEAN: euclidean,
    Heuristic.DIAGONAL: diagonal,
}


def get_heuristic(heuristic: Union[str, Heuristic, HeuristicFn, None]) -> HeuristicFn:
    """
    Get a distance function.

    Args:
        heuristic: Heuristic name, enum member, or a custom callable
            taking two coordinates

    Returns:
        Callable (a, b) -> estimated remaining cost
    """
    if callable(heuristic) and not isinstance(heuristic, Heuristic):
        return heuristic
    return Heuristic.parse(heuristic).function


def describe_heuristic(heuristic: Union[str, Heuristic, HeuristicFn, None]) -> Optional[str]:
    """Display name for a heuristic argument ("custom" for callables)."""
    if callable(heuristic) and not isinstance(heuristic, Heuristic):
        return getattr(heuristic, "__name__", "custom")
    return Heuristic.parse(heuristic).value
