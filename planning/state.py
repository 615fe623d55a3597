"""
Shared State and Data Structures
Node records used by the planners. Parent links are integer indices into
the planner's flat node list (-1 marks the root).
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class SearchNode:
    """
    Open/closed record for the A* grid search.

    Attributes:
        cell: (col, row) grid coordinates
        g: Accumulated cost from the start cell
        h: Heuristic estimate to the goal cell
        parent: Index of the parent node in the arena (-1 for the root)
        order: Insertion sequence, used to break ties between equal f
        closed: Whether the node has been expanded (g is final)
    """
    cell: Tuple[int, int]
    g: float
    h: float
    parent: int
    order: int
    closed: bool = False

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass
class TreeNode:
    """
    Vertex of an RRT.

    Attributes:
        point: (x, y) position in pixels
        parent: Index of the parent node in the tree (-1 for the root)
    """
    point: Tuple[float, float]
    parent: int


@dataclass
class PotentialSample:
    """
    Scalar potential at a sample point (visualization only).

    Attributes:
        x, y: Sample position in pixels
        value: Attractive + repulsive potential
    """
    x: float
    y: float
    value: float
