"""
RRT Tree Planner
Grows a rapidly-exploring random tree from the start toward the goal.
Finds a feasible, not necessarily short, collision-free route.
"""

import random

from config import RRT_STEP_SIZE, RRT_GOAL_BIAS, RRT_MAX_ITERATIONS, ASTAR_LOS_STEP, DEBUG_MODE
from core.geometry import distance
from planning.base_planner import BasePlanner, PlanningContext, PlanResult
from planning.state import TreeNode
from planning.utils import line_of_sight, obstacle_rects


class TreePlanner(BasePlanner):
    """
    Goal-biased RRT.

    Each iteration samples the goal (probability goal_bias) or a uniform
    point on the canvas, extends the nearest tree node one step toward it
    and keeps the new node if the connecting segment is clear. The search
    stops once a node lands within one step of the goal with a clear final
    segment, or when the iteration budget runs out.
    """

    def __init__(self, config=None):
        """
        Initialize planner.

        Config parameters:
            step_size: Extension length in pixels
            goal_bias: Probability of sampling the goal
            max_iterations: Sample budget
            collision_step: Segment sampling resolution
            seed: Seed for a private random.Random (reproducible trees)
            rng: random.Random instance (overrides seed)
        """
        super().__init__(config)
        self.step_size = self.config.get('step_size', RRT_STEP_SIZE)
        self.goal_bias = self.config.get('goal_bias', RRT_GOAL_BIAS)
        self.max_iterations = self.config.get('max_iterations', RRT_MAX_ITERATIONS)
        self.collision_step = self.config.get('collision_step', ASTAR_LOS_STEP)
        self.rng = self.config.get('rng') or random.Random(self.config.get('seed'))

    def plan(self, context: PlanningContext) -> PlanResult:
        rects = obstacle_rects(context.obstacles, context.inflation)
        goal = context.goal

        nodes = [TreeNode((float(context.start[0]), float(context.start[1])), -1)]
        edges = []

        for iteration in range(1, self.max_iterations + 1):
            if self.rng.random() < self.goal_bias:
                sample = goal
            else:
                sample = (self.rng.uniform(0, context.width), self.rng.uniform(0, context.height))

            nearest_idx = self._nearest(nodes, sample)
            parent = nodes[nearest_idx].point

            new_point = self._steer(parent, sample)
            if new_point is None:
                continue

            x, y = new_point
            if not (0 <= x <= context.width and 0 <= y <= context.height):
                continue
            if not line_of_sight(parent, new_point, rects, self.collision_step):
                continue

            nodes.append(TreeNode(new_point, nearest_idx))
            edges.append((parent, new_point))

            if (distance(x, y, goal[0], goal[1]) <= self.step_size and
                    line_of_sight(new_point, goal, rects, self.collision_step)):
                path = self._reconstruct(nodes, len(nodes) - 1, goal)
                if DEBUG_MODE:
                    print(f"  RRT: reached goal after {iteration} iterations ({len(nodes)} nodes)")
                return PlanResult(path=path, edges=edges, nodes_explored=iteration)

        if DEBUG_MODE:
            print(f"  RRT: budget of {self.max_iterations} iterations exhausted")
        return PlanResult(path=[], edges=edges, nodes_explored=self.max_iterations)

    @staticmethod
    def _nearest(nodes, sample):
        """Index of the tree node closest to sample (linear scan)."""
        best_idx = 0
        best_d2 = float('inf')
        sx, sy = sample
        for i, node in enumerate(nodes):
            dx = node.point[0] - sx
            dy = node.point[1] - sy
            d2 = dx * dx + dy * dy
            if d2 < best_d2:
                best_d2 = d2
                best_idx = i
        return best_idx

    def _steer(self, origin, target):
        """Point one step from origin toward target (None if they coincide)."""
        d = distance(origin[0], origin[1], target[0], target[1])
        if d == 0.0:
            return None
        if d <= self.step_size:
            return (float(target[0]), float(target[1]))
        scale = self.step_size / d
        return (origin[0] + (target[0] - origin[0]) * scale,
                origin[1] + (target[1] - origin[1]) * scale)

    @staticmethod
    def _reconstruct(nodes, last_idx, goal):
        """Goal, last node, then parents up to the root - reversed."""
        goal = (float(goal[0]), float(goal[1]))
        path = [] if nodes[last_idx].point == goal else [goal]
        idx = last_idx
        while idx != -1:
            path.append(nodes[idx].point)
            idx = nodes[idx].parent
        path.reverse()
        return path

    def get_name(self) -> str:
        """Return planner name."""
        return "RRT"
