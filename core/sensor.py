"""
Simulated Range Sensor (LiDAR)
Casts a fan of rays from the drone and reports the distance to the first
obstacle or canvas edge along each ray.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from config import SENSOR_RAY_COUNT, SENSOR_MAX_RANGE, SENSOR_STEP
from core.geometry import clamp, points_in_rects


@dataclass
class SensorReading:
    """
    Single ray of a sensor sweep.

    Attributes:
        angle: Ray direction in radians (canvas convention)
        distance: Distance to the terminating sample, or max range
        hit: Whether the ray was stopped by an obstacle or the canvas edge
        hit_point: (x, y) where the ray stopped, None when nothing was hit
    """
    angle: float
    distance: float
    hit: bool
    hit_point: Optional[Tuple[float, float]] = None


class RangeSensor:
    """
    Ray-marching range sensor.

    Rays are spread evenly over a full revolution starting at the drone
    heading, so reading 0 always looks forward and index i is at
    heading + 2*pi*i/ray_count.
    """

    def __init__(self, ray_count=SENSOR_RAY_COUNT, max_range=SENSOR_MAX_RANGE, step=SENSOR_STEP):
        self.ray_count = ray_count
        self.max_range = max_range
        self.step = step

        # Sample distances along each ray: step, 2*step, ..., <= max_range
        sample_count = max(1, int(math.floor(max_range / step + 1e-9)))
        self._distances = np.arange(1, sample_count + 1) * step

    def ray_angles(self, heading):
        """Angles of all rays for the given heading."""
        return heading + 2.0 * math.pi * np.arange(self.ray_count) / self.ray_count

    def scan(self, x, y, heading, field, width, height) -> List[SensorReading]:
        """
        Take a full sweep from pose (x, y, heading).

        Each ray stops at the first sample that is outside the canvas or
        inside any obstacle rectangle (static or dynamic, not inflated).

        Args:
            x, y: Sensor origin in pixels
            heading: Drone heading in radians
            field: ObstacleField
            width, height: Canvas size in pixels

        Returns:
            List of SensorReading, one per ray, in angle order
        """
        angles = self.ray_angles(heading)
        ds = self._distances

        xs = x + np.cos(angles)[:, np.newaxis] * ds[np.newaxis, :]
        ys = y + np.sin(angles)[:, np.newaxis] * ds[np.newaxis, :]

        outside = (xs < 0) | (xs > width) | (ys < 0) | (ys > height)
        blocked = outside | points_in_rects(xs, ys, field.bounds_array())

        readings = []
        for i, angle in enumerate(angles):
            hits = np.flatnonzero(blocked[i])
            if hits.size == 0:
                readings.append(SensorReading(float(angle), float(self.max_range), False))
                continue

            k = hits[0]
            hit_point = (clamp(float(xs[i, k]), 0.0, width), clamp(float(ys[i, k]), 0.0, height))
            readings.append(SensorReading(float(angle), float(ds[k]), True, hit_point))

        return readings

    def min_distance(self, readings):
        """Smallest distance in a sweep (max range for an empty sweep)."""
        if not readings:
            return self.max_range
        return min(r.distance for r in readings)
