"""
Artificial Potential Field Planner
Steers the drone every tick with an attractive pull toward the goal and
repulsive pushes away from nearby obstacles. There is no precomputed path.

Known limitation: obstacles placed symmetrically between drone and goal can
cancel the attraction (local minimum) and the drone stalls. The controller
reports this through its stall counter; the planner does not try to escape.
"""

import math
from typing import List

import numpy as np

from config import (
    APF_ATTRACTIVE_GAIN,
    APF_REPULSIVE_GAIN,
    APF_INFLUENCE_RADIUS,
    APF_MIN_DISTANCE,
    APF_SAMPLE_SPACING,
)
from core.geometry import nearest_point_on_rect, magnitude
from planning.base_planner import BasePlanner, PlanningContext, PlanResult
from planning.state import PotentialSample


class FieldPlanner(BasePlanner):
    """Potential-field steering (continuous control, not route planning)."""

    continuous = True

    def __init__(self, config=None):
        """
        Initialize planner.

        Config parameters:
            attractive_gain: Magnitude of the pull toward the goal
            repulsive_gain: Scale of obstacle repulsion
            influence_radius: Obstacles farther than this are ignored
            min_distance: Floor on obstacle distance (singularity guard)
        """
        super().__init__(config)
        self.attractive_gain = self.config.get('attractive_gain', APF_ATTRACTIVE_GAIN)
        self.repulsive_gain = self.config.get('repulsive_gain', APF_REPULSIVE_GAIN)
        self.influence_radius = self.config.get('influence_radius', APF_INFLUENCE_RADIUS)
        self.min_distance = self.config.get('min_distance', APF_MIN_DISTANCE)

    def plan(self, context: PlanningContext) -> PlanResult:
        """Nothing to precompute; the controller calls compute_force() each tick."""
        return PlanResult(path=[], nodes_explored=0, continuous=True)

    def attractive_force(self, x, y, goal):
        """Unit vector toward the goal scaled by the attractive gain."""
        dx = goal[0] - x
        dy = goal[1] - y
        d = magnitude(dx, dy)
        if d == 0.0:
            return (0.0, 0.0)
        return (self.attractive_gain * dx / d, self.attractive_gain * dy / d)

    def repulsive_force(self, x, y, obstacle):
        """
        Repulsion from one obstacle.

        Magnitude k_rep * (1/d - 1/rho0) / d^2 inside the influence radius,
        with d floored at min_distance.
        """
        rect = obstacle.bounds()
        nx, ny = nearest_point_on_rect(x, y, rect)
        dx = x - nx
        dy = y - ny
        d = magnitude(dx, dy)

        if d >= self.influence_radius:
            return (0.0, 0.0)

        if d == 0.0:
            # Inside the rectangle: push away from its center
            cx, cy = obstacle.center()
            dx = x - cx
            dy = y - cy
            length = magnitude(dx, dy)
            if length == 0.0:
                return (0.0, 0.0)
            ux, uy = dx / length, dy / length
        else:
            ux, uy = dx / d, dy / d

        d = max(d, self.min_distance)
        strength = self.repulsive_gain * (1.0 / d - 1.0 / self.influence_radius) / (d * d)
        return (strength * ux, strength * uy)

    def compute_force(self, x, y, goal, obstacles):
        """
        Combined steering force at (x, y).

        Args:
            x, y: Drone position
            goal: (x, y) goal position
            obstacles: Obstacles to repel from (static and dynamic)

        Returns:
            (fx, fy) tuple
        """
        fx, fy = self.attractive_force(x, y, goal)
        for obstacle in obstacles:
            rx, ry = self.repulsive_force(x, y, obstacle)
            fx += rx
            fy += ry
        return (fx, fy)

    def sample_potential(self, goal, obstacles, width, height,
                         spacing=APF_SAMPLE_SPACING) -> List[PotentialSample]:
        """
        Sample the scalar potential on a regular grid for visualization.

        U = k_att * |p - goal| + sum 0.5 * k_rep * (1/d - 1/rho0)^2 (d < rho0)
        """
        xs = np.arange(0.0, width + 1e-9, spacing)
        ys = np.arange(0.0, height + 1e-9, spacing)
        gx, gy = np.meshgrid(xs, ys)

        potential = self.attractive_gain * np.hypot(gx - goal[0], gy - goal[1])

        for obstacle in obstacles:
            left, top, right, bottom = obstacle.bounds()
            d = np.hypot(gx - np.clip(gx, left, right), gy - np.clip(gy, top, bottom))
            d = np.maximum(d, self.min_distance)
            inside = d < self.influence_radius
            term = 0.5 * self.repulsive_gain * (1.0 / d - 1.0 / self.influence_radius) ** 2
            potential += np.where(inside, term, 0.0)

        return [PotentialSample(float(x), float(y), float(v))
                for x, y, v in zip(gx.ravel(), gy.ravel(), potential.ravel())]

    def get_name(self) -> str:
        """Return planner name."""
        return "APF"
