"""
A* Grid Planner
---------------
Discretizes free space into an occupancy grid, searches the shortest
8-connected route with the octile heuristic and smooths it by greedy
line-of-sight shortcutting.

Strategy:
1. Mark cells whose center lies within an inflated obstacle bound
2. A* from the start cell to the goal cell (binary heap, ties broken by
   insertion order)
3. Walk parent indices back to the start, convert cells to pixels and
   swap the end cells for the exact start and goal positions
4. Jump from each point to the furthest later point in line of sight
"""

import heapq
import math
from typing import List, Tuple

import numpy as np

from config import ASTAR_CELL_SIZE, ASTAR_LOS_STEP, DEBUG_MODE
from planning.base_planner import BasePlanner, PlanningContext, PlanResult
from planning.state import SearchNode
from planning.utils import in_collision, line_of_sight, obstacle_rects

SQRT2 = math.sqrt(2.0)

# (d_col, d_row, cost): straight moves first, then diagonals
MOTIONS = [
    (1, 0, 1.0), (0, 1, 1.0), (-1, 0, 1.0), (0, -1, 1.0),
    (1, 1, SQRT2), (-1, 1, SQRT2), (1, -1, SQRT2), (-1, -1, SQRT2),
]


def octile_distance(a: Tuple[int, int], b: Tuple[int, int]) -> float:
    """
    Octile distance between two cells.

    Exact cost of an unobstructed 8-connected move sequence with straight
    cost 1 and diagonal cost sqrt(2), hence admissible and consistent.
    """
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return max(dx, dy) + (SQRT2 - 1.0) * min(dx, dy)


class OccupancyGrid:
    """
    Boolean occupancy grid over the canvas.

    Cell (col, row) is centered on pixel (col * cell_size, row * cell_size).
    """

    def __init__(self, width: float, height: float, cell_size: float):
        self.cell_size = cell_size
        self.cols = int(math.floor(width / cell_size)) + 1
        self.rows = int(math.floor(height / cell_size)) + 1
        self.grid = np.zeros((self.rows, self.cols), dtype=bool)

    @classmethod
    def from_obstacles(cls, obstacles, width, height, cell_size, inflation):
        """
        Build a grid from obstacles inflated by the agent clearance.

        Bounds are padded by a further half cell so that a straight or
        diagonal move between two free cell centers never clips an
        inflated bound.
        """
        occupancy = cls(width, height, cell_size)
        pad = inflation + cell_size / 2.0

        for obstacle in obstacles:
            left, top, right, bottom = obstacle.inflated(pad)
            c0 = max(0, int(math.ceil(left / cell_size)))
            c1 = min(occupancy.cols - 1, int(math.floor(right / cell_size)))
            r0 = max(0, int(math.ceil(top / cell_size)))
            r1 = min(occupancy.rows - 1, int(math.floor(bottom / cell_size)))
            if c0 <= c1 and r0 <= r1:
                occupancy.grid[r0:r1 + 1, c0:c1 + 1] = True

        return occupancy

    def world_to_grid(self, x: float, y: float) -> Tuple[int, int]:
        """Nearest cell to a pixel position (clamped into the grid)."""
        col = int(math.floor(x / self.cell_size + 0.5))
        row = int(math.floor(y / self.cell_size + 0.5))
        return (min(max(col, 0), self.cols - 1), min(max(row, 0), self.rows - 1))

    def grid_to_world(self, col: int, row: int) -> Tuple[float, float]:
        """Pixel position of a cell center."""
        return (col * self.cell_size, row * self.cell_size)

    def is_valid(self, col: int, row: int) -> bool:
        """Check if grid coordinates are within bounds."""
        return 0 <= col < self.cols and 0 <= row < self.rows

    def is_occupied(self, col: int, row: int) -> bool:
        return bool(self.grid[row, col])


def smooth_path(path: List[Tuple[float, float]], rects: np.ndarray,
                step: float = ASTAR_LOS_STEP) -> List[Tuple[float, float]]:
    """
    Greedy line-of-sight shortcutting.

    From the current point, jump to the furthest later point whose straight
    segment is clear; if none is, advance to the next point.

    Args:
        path: Raw waypoints
        rects: Inflated obstacle bounds
        step: Line-of-sight sampling resolution

    Returns:
        Subsequence of path (first and last points kept)
    """
    if len(path) <= 2:
        return list(path)

    smoothed = [path[0]]
    i = 0
    while i < len(path) - 1:
        for j in range(len(path) - 1, i, -1):
            if line_of_sight(path[i], path[j], rects, step):
                break
        else:
            j = i + 1
        smoothed.append(path[j])
        i = j
    return smoothed


class GridPlanner(BasePlanner):
    """A* planner over an occupancy grid of static obstacles."""

    allows_direct_fallback = True

    def __init__(self, config=None):
        """
        Initialize planner.

        Config parameters:
            cell_size: Grid resolution in pixels (default ASTAR_CELL_SIZE)
            los_step: Line-of-sight sampling step (default ASTAR_LOS_STEP)
            smooth: Apply shortcut smoothing (default True)
        """
        super().__init__(config)
        self.cell_size = self.config.get('cell_size', ASTAR_CELL_SIZE)
        self.los_step = self.config.get('los_step', ASTAR_LOS_STEP)
        self.smooth = self.config.get('smooth', True)

    def plan(self, context: PlanningContext) -> PlanResult:
        grid = OccupancyGrid.from_obstacles(
            context.obstacles, context.width, context.height,
            self.cell_size, context.inflation
        )
        raw_cells, explored = self.search(grid, context.start, context.goal)

        if not raw_cells:
            if DEBUG_MODE:
                print(f"  A*: no path after {explored} nodes")
            return PlanResult(path=[], nodes_explored=explored)

        rects = obstacle_rects(context.obstacles, context.inflation)
        path = self.attach_endpoints(
            [grid.grid_to_world(col, row) for col, row in raw_cells],
            context.start, context.goal, rects
        )
        if not path:
            if DEBUG_MODE:
                print("  A*: goal cell found but goal not reachable in line of sight")
            return PlanResult(path=[], nodes_explored=explored)

        if self.smooth:
            path = smooth_path(path, rects, self.los_step)

        if DEBUG_MODE:
            print(f"  A*: {len(raw_cells)} cells -> {len(path)} waypoints, {explored} nodes")

        return PlanResult(path=path, nodes_explored=explored)

    def search(self, grid: OccupancyGrid, start, goal):
        """
        Run A* between two pixel positions.

        Args:
            grid: OccupancyGrid
            start, goal: (x, y) pixel positions

        Returns:
            (cells, nodes_explored) tuple; cells is the start-to-goal list of
            (col, row), empty when the goal is unreachable
        """
        start_cell = grid.world_to_grid(*start)
        goal_cell = grid.world_to_grid(*goal)

        # Flat arena; parents are indices into it
        nodes = [SearchNode(start_cell, 0.0, octile_distance(start_cell, goal_cell), -1, 0)]
        index = {start_cell: 0}
        open_heap = [(nodes[0].f, nodes[0].order, 0)]
        explored = 0

        while open_heap:
            f, _, current_idx = heapq.heappop(open_heap)
            current = nodes[current_idx]
            if current.closed or f != current.f:
                continue  # stale heap entry

            current.closed = True
            explored += 1

            if current.cell == goal_cell:
                return self._reconstruct(nodes, current_idx), explored

            col, row = current.cell
            for d_col, d_row, cost in MOTIONS:
                cell = (col + d_col, row + d_row)
                if not grid.is_valid(*cell):
                    continue
                if cell != goal_cell and grid.is_occupied(*cell):
                    continue

                g = current.g + cost
                neighbor_idx = index.get(cell)

                if neighbor_idx is None:
                    neighbor_idx = len(nodes)
                    node = SearchNode(cell, g, octile_distance(cell, goal_cell), current_idx, neighbor_idx)
                    nodes.append(node)
                    index[cell] = neighbor_idx
                    heapq.heappush(open_heap, (node.f, node.order, neighbor_idx))
                    continue

                node = nodes[neighbor_idx]
                if node.closed or g >= node.g:
                    continue

                # Cheaper route to an open node: keep its original order
                node.g = g
                node.parent = current_idx
                heapq.heappush(open_heap, (node.f, node.order, neighbor_idx))

        return [], explored

    def attach_endpoints(self, points, start, goal, rects):
        """
        Replace the start and goal cell centers with the exact positions.

        Cell centers of the start and goal cells may sit inside an inflated
        bound (neither is occupancy-checked), so both are dropped. The goal
        joins the latest remaining point that sees it; the start joins the
        earliest. A start already inside a bound keeps the first point.

        Returns:
            [start, ..., goal], or [] when no remaining point sees the goal
        """
        interior = [p for p in points[1:-1] if not in_collision(p, rects)]

        for k in range(len(interior) - 1, -1, -1):
            if line_of_sight(interior[k], goal, rects, self.los_step):
                break
        else:
            if line_of_sight(start, goal, rects, self.los_step):
                return [start, goal]
            return []
        interior = interior[:k + 1]

        first = 0
        for m, point in enumerate(interior):
            if line_of_sight(start, point, rects, self.los_step):
                first = m
                break
        return [start] + interior[first:] + [goal]

    @staticmethod
    def _reconstruct(nodes, goal_idx):
        """Walk parent indices from the goal back to the root."""
        cells = []
        idx = goal_idx
        while idx != -1:
            cells.append(nodes[idx].cell)
            idx = nodes[idx].parent
        cells.reverse()
        return cells

    def get_name(self) -> str:
        """Return planner name."""
        return "A*"
