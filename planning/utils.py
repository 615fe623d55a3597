"""
Planning Utilities
Common collision helpers shared across planners and the controller.
"""

from typing import List, Tuple

import numpy as np

from config import ASTAR_LOS_STEP
from core.geometry import point_in_any_rect, segment_is_clear


def obstacle_rects(obstacles, margin: float = 0.0) -> np.ndarray:
    """
    Inflated obstacle bounds as an (N, 4) array.

    Args:
        obstacles: List of Obstacle
        margin: Clearance added on every side

    Returns:
        numpy array of left, top, right, bottom rows
    """
    if not obstacles:
        return np.zeros((0, 4))
    return np.array([o.inflated(margin) for o in obstacles], dtype=float)


def line_of_sight(a: Tuple[float, float], b: Tuple[float, float], rects: np.ndarray,
                  step: float = ASTAR_LOS_STEP) -> bool:
    """
    True if the straight segment a -> b stays out of every rectangle.

    Args:
        a, b: Segment endpoints (x, y)
        rects: Inflated obstacle bounds
        step: Sampling resolution in pixels
    """
    return segment_is_clear(a[0], a[1], b[0], b[1], rects, step)


def path_is_clear(path: List[Tuple[float, float]], rects: np.ndarray,
                  step: float = ASTAR_LOS_STEP) -> bool:
    """True if every consecutive segment of path is collision-free."""
    return all(line_of_sight(a, b, rects, step) for a, b in zip(path, path[1:]))


def in_collision(point: Tuple[float, float], rects: np.ndarray) -> bool:
    """True if point lies inside any rectangle."""
    return point_in_any_rect(point[0], point[1], rects)
