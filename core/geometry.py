"""
Core Geometry Functions for Navigation Simulation
Pure functions for vector math, angle handling and rectangle collision tests.
No state - all functions are side-effect free.

Rectangles are (left, top, right, bottom) in canvas pixels.
"""

import math
import numpy as np


# ==================== Vector Math ====================

def vector_from_angle_magnitude(angle_rad, magnitude):
    """
    Convert canvas angle (radians, 0 = +x) and magnitude to vector (x, y).

    Args:
        angle_rad: Angle in radians
        magnitude: Magnitude of vector

    Returns:
        (x, y) tuple
    """
    return (magnitude * math.cos(angle_rad), magnitude * math.sin(angle_rad))


def magnitude(vx, vy):
    """Length of vector (vx, vy)."""
    return math.sqrt(vx * vx + vy * vy)


def distance(x1, y1, x2, y2):
    """Euclidean distance between two points."""
    return magnitude(x2 - x1, y2 - y1)


def unit_vector(vx, vy):
    """
    Normalize vector to unit length.

    Returns:
        (ux, uy) tuple, or (0.0, 0.0) for a zero vector
    """
    length = magnitude(vx, vy)
    if length == 0.0:
        return (0.0, 0.0)
    return (vx / length, vy / length)


def clamp_magnitude(vx, vy, max_length):
    """Scale vector down so its length does not exceed max_length."""
    length = magnitude(vx, vy)
    if length > max_length and length > 0.0:
        scale = max_length / length
        return (vx * scale, vy * scale)
    return (vx, vy)


def clamp(value, low, high):
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def polyline_length(points):
    """Total length of a polyline given as a list of (x, y) tuples."""
    total = 0.0
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        total += distance(x1, y1, x2, y2)
    return total


# ==================== Angles ====================

def wrap_angle(angle):
    """
    Wrap angle to [-pi, pi].

    Args:
        angle: Angle in radians

    Returns:
        Equivalent angle in [-pi, pi]
    """
    return math.atan2(math.sin(angle), math.cos(angle))


def angle_difference(angle1, angle2):
    """
    Shortest signed angular distance from angle1 to angle2.
    Handles wraparound (e.g. from 3.1 to -3.1 rad is about +0.08, not -6.2).

    Returns:
        Difference in radians, range [-pi, pi]
    """
    return wrap_angle(angle2 - angle1)


# ==================== Rectangles ====================

def inflate_rect(rect, margin):
    """Grow rectangle by margin on every side."""
    left, top, right, bottom = rect
    return (left - margin, top - margin, right + margin, bottom + margin)


def point_in_rect(x, y, rect):
    """True if (x, y) lies inside or on the border of rect."""
    left, top, right, bottom = rect
    return left <= x <= right and top <= y <= bottom


def nearest_point_on_rect(x, y, rect):
    """Closest point of rect (border or interior) to (x, y)."""
    left, top, right, bottom = rect
    return (clamp(x, left, right), clamp(y, top, bottom))


def point_in_any_rect(x, y, rects):
    """
    Check a single point against many rectangles.

    Args:
        x, y: Point coordinates
        rects: numpy array of shape (N, 4)

    Returns:
        True if the point is inside any rectangle
    """
    if len(rects) == 0:
        return False
    inside = ((rects[:, 0] <= x) & (x <= rects[:, 2]) &
              (rects[:, 1] <= y) & (y <= rects[:, 3]))
    return bool(inside.any())


def points_in_rects(xs, ys, rects):
    """
    Vectorized point-in-rectangle test.

    Args:
        xs, ys: numpy arrays of identical shape S
        rects: numpy array of shape (N, 4)

    Returns:
        Boolean array of shape S, True where a point is inside any rectangle
    """
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    if len(rects) == 0:
        return np.zeros(xs.shape, dtype=bool)

    px = xs[..., np.newaxis]
    py = ys[..., np.newaxis]
    inside = ((rects[:, 0] <= px) & (px <= rects[:, 2]) &
              (rects[:, 1] <= py) & (py <= rects[:, 3]))
    return inside.any(axis=-1)


def sample_segment(x1, y1, x2, y2, step):
    """
    Sample points along a segment at a fixed spatial resolution.
    Both endpoints are always included.

    Returns:
        (xs, ys) numpy arrays
    """
    length = distance(x1, y1, x2, y2)
    count = max(2, int(math.ceil(length / step)) + 1)
    t = np.linspace(0.0, 1.0, count)
    return x1 + (x2 - x1) * t, y1 + (y2 - y1) * t


def segment_is_clear(x1, y1, x2, y2, rects, step):
    """
    Check that a straight segment does not pass through any rectangle.

    The segment is stepped at `step` pixels and each sample is tested
    against the rectangles.

    Args:
        x1, y1: Segment start
        x2, y2: Segment end
        rects: numpy array of shape (N, 4), usually inflated obstacle bounds
        step: Sampling resolution in pixels

    Returns:
        True if no sample falls inside a rectangle
    """
    if len(rects) == 0:
        return True
    xs, ys = sample_segment(x1, y1, x2, y2, step)
    return not bool(points_in_rects(xs, ys, rects).any())
