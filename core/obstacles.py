"""
Obstacle Field
Owns static and dynamic obstacle geometry, generates random layouts and
integrates dynamic obstacle motion every tick.
"""

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np
from shapely.geometry import Point, box

from config import (
    CANVAS_WIDTH,
    CANVAS_HEIGHT,
    DRONE_START,
    STATIC_MIN_SIZE,
    STATIC_MAX_SIZE,
    STATIC_MIN_GAP,
    STATIC_PLACEMENT_ATTEMPTS,
    START_CLEAR_RADIUS,
    STATIC_CATEGORIES,
    DYNAMIC_SIZE,
    DYNAMIC_MIN_SPEED,
    DYNAMIC_MAX_SPEED,
    DYNAMIC_SPAWN_MARGIN,
    DYNAMIC_COLLISION_MARGIN,
    DYNAMIC_SEPARATION,
    DYNAMIC_REPULSION,
    DYNAMIC_PERTURBATION,
    DYNAMIC_SPAWN_ATTEMPTS,
)
from core.geometry import clamp, inflate_rect, magnitude


class ObstacleKind(Enum):
    STATIC = 'static'
    DYNAMIC = 'dynamic'


@dataclass
class Obstacle:
    """
    Axis-aligned rectangular obstacle.

    Attributes:
        x, y: Top-left corner in canvas pixels
        width, height: Size in pixels
        kind: ObstacleKind.STATIC or ObstacleKind.DYNAMIC
        category: Cosmetic label for static obstacles (rendering only)
        vx, vy: Velocity in pixels per tick (dynamic obstacles only)
    """
    x: float
    y: float
    width: float
    height: float
    kind: ObstacleKind = ObstacleKind.STATIC
    category: Optional[str] = None
    vx: float = 0.0
    vy: float = 0.0

    @property
    def is_dynamic(self) -> bool:
        return self.kind == ObstacleKind.DYNAMIC

    def bounds(self) -> Tuple[float, float, float, float]:
        """Return (left, top, right, bottom)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def inflated(self, margin: float) -> Tuple[float, float, float, float]:
        """Bounds grown by margin on every side."""
        return inflate_rect(self.bounds(), margin)

    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def speed(self) -> float:
        return magnitude(self.vx, self.vy)

    def geometry(self):
        """Shapely box for distance queries."""
        left, top, right, bottom = self.bounds()
        return box(left, top, right, bottom)


def _rects_overlap(a, b):
    """True if two (left, top, right, bottom) rectangles intersect."""
    return a[0] < b[2] and a[2] > b[0] and a[1] < b[3] and a[3] > b[1]


class ObstacleField:
    """
    Collection of static and dynamic obstacles on a bounded canvas.

    Static obstacles never move. Dynamic obstacles bounce off statics,
    repel each other, reflect off the canvas edges and keep their speed
    inside [min_speed, max_speed].
    """

    def __init__(self, width=CANVAS_WIDTH, height=CANVAS_HEIGHT, start=DRONE_START,
                 rng: Optional[random.Random] = None,
                 min_speed=DYNAMIC_MIN_SPEED, max_speed=DYNAMIC_MAX_SPEED):
        """
        Initialize an empty field.

        Args:
            width, height: Canvas size in pixels
            start: (x, y) drone start point, kept clear of obstacles
            rng: random.Random instance (seed it for reproducible layouts)
            min_speed, max_speed: Dynamic obstacle speed band (pixels per tick)
        """
        self.width = width
        self.height = height
        self.start = start
        self.rng = rng if rng is not None else random.Random()
        self.min_speed = min_speed
        self.max_speed = max_speed

        self.obstacles: List[Obstacle] = []

    # ==================== Queries ====================

    def static_obstacles(self) -> List[Obstacle]:
        return [o for o in self.obstacles if not o.is_dynamic]

    def dynamic_obstacles(self) -> List[Obstacle]:
        return [o for o in self.obstacles if o.is_dynamic]

    def all_obstacles(self) -> List[Obstacle]:
        return list(self.obstacles)

    def bounds_array(self, kind: Optional[ObstacleKind] = None, margin: float = 0.0) -> np.ndarray:
        """
        Obstacle bounds as a numpy array for vectorized collision tests.

        Args:
            kind: Restrict to one ObstacleKind (None = all obstacles)
            margin: Inflation added on every side

        Returns:
            Array of shape (N, 4): left, top, right, bottom
        """
        rects = [o.inflated(margin) for o in self.obstacles if kind is None or o.kind == kind]
        if not rects:
            return np.zeros((0, 4))
        return np.array(rects, dtype=float)

    # ==================== Generation ====================

    def generate(self, static_count, dynamic_count):
        """Replace all obstacles with a fresh random layout."""
        self.obstacles = []
        self.generate_static(static_count)
        self.generate_dynamic(dynamic_count)

    def _too_close_to_start(self, geom, radius):
        return geom.distance(Point(self.start)) < radius

    def generate_static(self, count):
        """
        Place up to `count` static obstacles spread over a coarse grid.

        The canvas is split into cols x rows cells sized from the requested
        count and the canvas aspect ratio. Each obstacle gets a random size
        and a jittered position inside its cell. Placements that leave the
        canvas, cut into the start region or come closer than STATIC_MIN_GAP
        to an existing obstacle are retried; after STATIC_PLACEMENT_ATTEMPTS
        failures the obstacle is skipped.

        Returns:
            Number of obstacles actually placed
        """
        if count <= 0:
            return 0

        cols = max(1, math.ceil(math.sqrt(count * self.width / self.height)))
        rows = max(1, math.ceil(count / cols))
        cell_w = self.width / cols
        cell_h = self.height / rows

        placed = 0
        for i in range(count):
            col = i % cols
            row = i // cols
            cell_x = col * cell_w
            cell_y = row * cell_h

            for _ in range(STATIC_PLACEMENT_ATTEMPTS):
                w = self.rng.uniform(STATIC_MIN_SIZE, STATIC_MAX_SIZE)
                h = self.rng.uniform(STATIC_MIN_SIZE, STATIC_MAX_SIZE)

                # Centered in the cell, jittered by up to a quarter cell
                x = cell_x + (cell_w - w) / 2 + self.rng.uniform(-0.25, 0.25) * cell_w
                y = cell_y + (cell_h - h) / 2 + self.rng.uniform(-0.25, 0.25) * cell_h

                if x < 0 or y < 0 or x + w > self.width or y + h > self.height:
                    continue

                candidate = Obstacle(x, y, w, h, ObstacleKind.STATIC,
                                     category=self.rng.choice(STATIC_CATEGORIES))
                geom = candidate.geometry()

                if self._too_close_to_start(geom, START_CLEAR_RADIUS):
                    continue

                if any(geom.distance(o.geometry()) < STATIC_MIN_GAP for o in self.static_obstacles()):
                    continue

                self.obstacles.append(candidate)
                placed += 1
                break

        return placed

    def generate_dynamic(self, count):
        """
        Spawn up to `count` dynamic obstacles at random free positions.

        Spawn points keep DYNAMIC_SPAWN_MARGIN from every other obstacle and
        START_CLEAR_RADIUS from the drone start. Initial velocity has a random
        direction and a speed inside the configured band.

        Returns:
            Number of obstacles actually spawned
        """
        placed = 0
        for _ in range(max(0, count)):
            for _ in range(DYNAMIC_SPAWN_ATTEMPTS):
                x = self.rng.uniform(0, self.width - DYNAMIC_SIZE)
                y = self.rng.uniform(0, self.height - DYNAMIC_SIZE)
                angle = self.rng.uniform(0, 2 * math.pi)
                speed = self.rng.uniform(self.min_speed, self.max_speed)

                candidate = Obstacle(x, y, DYNAMIC_SIZE, DYNAMIC_SIZE, ObstacleKind.DYNAMIC,
                                     vx=speed * math.cos(angle), vy=speed * math.sin(angle))
                geom = candidate.geometry()

                if self._too_close_to_start(geom, START_CLEAR_RADIUS):
                    continue

                if any(geom.distance(o.geometry()) < DYNAMIC_SPAWN_MARGIN for o in self.obstacles):
                    continue

                self.obstacles.append(candidate)
                placed += 1
                break

        return placed

    # ==================== Motion ====================

    def update(self):
        """
        Advance every dynamic obstacle by one tick (mutates in place).

        For each dynamic obstacle:
        1. Predict next position
        2. Bounce off static obstacles, per axis, with a small random kick
        3. Push away from dynamic neighbors that are too close
        4. Reflect off the canvas edges
        5. Clamp speed into [min_speed, max_speed]
        6. Integrate and clamp position to the canvas
        """
        statics = [o.inflated(DYNAMIC_COLLISION_MARGIN) for o in self.static_obstacles()]
        dynamics = self.dynamic_obstacles()

        for obstacle in dynamics:
            next_x = obstacle.x + obstacle.vx
            next_y = obstacle.y + obstacle.vy
            cx, cy = obstacle.center()

            # Static collisions, each axis checked on its own
            for rect in statics:
                moved_x = (next_x, obstacle.y, next_x + obstacle.width, obstacle.y + obstacle.height)
                if _rects_overlap(moved_x, rect):
                    rect_cx = (rect[0] + rect[2]) / 2
                    away = 1.0 if cx >= rect_cx else -1.0
                    obstacle.vx = away * abs(obstacle.vx) + self._perturbation()

                moved_y = (obstacle.x, next_y, obstacle.x + obstacle.width, next_y + obstacle.height)
                if _rects_overlap(moved_y, rect):
                    rect_cy = (rect[1] + rect[3]) / 2
                    away = 1.0 if cy >= rect_cy else -1.0
                    obstacle.vy = away * abs(obstacle.vy) + self._perturbation()

            # Separation between dynamic obstacles
            for other in dynamics:
                if other is obstacle:
                    continue
                ox, oy = other.center()
                dx = cx - ox
                dy = cy - oy
                d = magnitude(dx, dy)
                if 0.0 < d < DYNAMIC_SEPARATION:
                    obstacle.vx += dx / d * DYNAMIC_REPULSION
                    obstacle.vy += dy / d * DYNAMIC_REPULSION

            # Canvas edges
            if next_x < 0:
                obstacle.vx = abs(obstacle.vx)
            elif next_x + obstacle.width > self.width:
                obstacle.vx = -abs(obstacle.vx)
            if next_y < 0:
                obstacle.vy = abs(obstacle.vy)
            elif next_y + obstacle.height > self.height:
                obstacle.vy = -abs(obstacle.vy)

            self._clamp_speed(obstacle)

            obstacle.x = clamp(obstacle.x + obstacle.vx, 0.0, self.width - obstacle.width)
            obstacle.y = clamp(obstacle.y + obstacle.vy, 0.0, self.height - obstacle.height)

    def _perturbation(self):
        return self.rng.uniform(-DYNAMIC_PERTURBATION, DYNAMIC_PERTURBATION)

    def _clamp_speed(self, obstacle):
        """Keep speed inside [min_speed, max_speed]; a stalled obstacle gets a random direction."""
        speed = obstacle.speed()
        if speed == 0.0:
            angle = self.rng.uniform(0, 2 * math.pi)
            obstacle.vx = self.min_speed * math.cos(angle)
            obstacle.vy = self.min_speed * math.sin(angle)
        elif speed > self.max_speed:
            scale = self.max_speed / speed
            obstacle.vx *= scale
            obstacle.vy *= scale
        elif speed < self.min_speed:
            scale = self.min_speed / speed
            obstacle.vx *= scale
            obstacle.vy *= scale
