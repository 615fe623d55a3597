import heapq
import math
import random

import numpy as np
import pytest

from config import DRONE_START, INFLATION_MARGIN
from core.obstacles import Obstacle, ObstacleField
from planning.base_planner import PlanningContext
from planning.search.astar_planner import (
    MOTIONS,
    GridPlanner,
    OccupancyGrid,
    octile_distance,
    smooth_path,
)
from planning.utils import in_collision, obstacle_rects, path_is_clear


def context(start, goal, obstacles=()):
    return PlanningContext(start=start, goal=goal, obstacles=list(obstacles),
                           width=800, height=500, inflation=INFLATION_MARGIN)


def dijkstra(grid, source):
    """Exact 8-connected cost from source to every reachable cell."""
    dist = {source: 0.0}
    heap = [(0.0, source)]
    while heap:
        d, cell = heapq.heappop(heap)
        if d > dist[cell]:
            continue
        for d_col, d_row, cost in MOTIONS:
            nxt = (cell[0] + d_col, cell[1] + d_row)
            if not grid.is_valid(*nxt) or grid.is_occupied(*nxt):
                continue
            nd = d + cost
            if nd < dist.get(nxt, math.inf):
                dist[nxt] = nd
                heapq.heappush(heap, (nd, nxt))
    return dist


def cell_path_cost(cells):
    total = 0.0
    for (c0, r0), (c1, r1) in zip(cells, cells[1:]):
        total += math.sqrt(2.0) if c0 != c1 and r0 != r1 else 1.0
    return total


def test_octile_distance():
    assert octile_distance((0, 0), (0, 0)) == 0.0
    assert octile_distance((0, 0), (4, 0)) == 4.0
    assert octile_distance((0, 0), (3, 5)) == pytest.approx(5 + (math.sqrt(2) - 1) * 3)


def test_grid_coordinates():
    grid = OccupancyGrid(800, 500, 10)
    assert (grid.cols, grid.rows) == (81, 51)
    assert grid.world_to_grid(50, 250) == (5, 25)
    assert grid.world_to_grid(54.9, 245.1) == (5, 25)
    assert grid.world_to_grid(-30, 9999) == (0, 50)
    assert grid.grid_to_world(5, 25) == (50.0, 250.0)


def test_empty_field_gives_straight_path():
    result = GridPlanner().plan(context((50.0, 250.0), (600.0, 250.0)))
    assert result.path == [(50.0, 250.0), (600.0, 250.0)]
    # Chebyshev distance between start and goal cells is 55
    assert 55 <= result.nodes_explored <= 60


def test_detour_around_central_block(central_block):
    result = GridPlanner().plan(context((50.0, 250.0), (750.0, 250.0), central_block))
    rects = obstacle_rects(central_block, INFLATION_MARGIN)

    assert result.success
    assert result.path[0] == (50.0, 250.0)
    assert result.path[-1] == (750.0, 250.0)
    assert len(result.path) >= 3
    assert path_is_clear(result.path, rects)


def test_unreachable_goal_returns_empty_path(enclosure):
    result = GridPlanner().plan(context((50.0, 250.0), (650.0, 250.0), enclosure))
    assert result.path == []
    assert result.nodes_explored > 0
    assert not result.success


def test_search_is_deterministic(central_block):
    planner = GridPlanner()
    a = planner.plan(context((50.0, 250.0), (750.0, 250.0), central_block))
    b = planner.plan(context((50.0, 250.0), (750.0, 250.0), central_block))
    assert a.path == b.path
    assert a.nodes_explored == b.nodes_explored


@pytest.mark.parametrize('seed', range(6))
def test_heuristic_admissible_and_search_optimal(seed):
    rng = np.random.default_rng(seed)
    grid = OccupancyGrid(300, 200, 10)
    grid.grid = rng.random((grid.rows, grid.cols)) < 0.25

    start_cell = (0, 0)
    goal_cell = (grid.cols - 1, grid.rows - 1)
    grid.grid[start_cell[1], start_cell[0]] = False
    grid.grid[goal_cell[1], goal_cell[0]] = False

    # Costs to the goal; moves are symmetric between free cells
    true_cost = dijkstra(grid, goal_cell)
    for cell, cost in true_cost.items():
        assert octile_distance(cell, goal_cell) <= cost + 1e-9

    cells, explored = GridPlanner().search(grid, grid.grid_to_world(*start_cell), grid.grid_to_world(*goal_cell))
    assert explored > 0
    if start_cell in true_cost:
        assert cells[0] == start_cell and cells[-1] == goal_cell
        assert cell_path_cost(cells) == pytest.approx(true_cost[start_cell])
        for cell in cells[1:-1]:
            assert not grid.is_occupied(*cell)
    else:
        assert cells == []


def test_goal_cell_is_exempt_from_occupancy():
    grid = OccupancyGrid(100, 100, 10)
    grid.grid[5, 5] = True
    cells, _ = GridPlanner().search(grid, (0.0, 0.0), (50.0, 50.0))
    assert cells[-1] == (5, 5)


def test_smoothing_shortens_and_stays_clear(central_block):
    planner = GridPlanner({'smooth': False})
    raw = planner.plan(context((50.0, 250.0), (750.0, 250.0), central_block)).path
    rects = obstacle_rects(central_block, INFLATION_MARGIN)

    smoothed = smooth_path(raw, rects)
    assert len(smoothed) <= len(raw)
    assert smoothed[0] == raw[0] and smoothed[-1] == raw[-1]
    assert path_is_clear(smoothed, rects)
    assert set(smoothed) <= set(raw)


def test_smoothing_keeps_short_paths():
    rects = np.zeros((0, 4))
    assert smooth_path([], rects) == []
    assert smooth_path([(0.0, 0.0), (5.0, 5.0)], rects) == [(0.0, 0.0), (5.0, 5.0)]


def test_path_ends_exactly_at_goal_beside_obstacle():
    obstacles = [Obstacle(310.0, 200.0, 60.0, 100.0)]
    rects = obstacle_rects(obstacles, INFLATION_MARGIN)

    # Inflated left edge is at 298; the goal cell center (300, 250) is not
    result = GridPlanner().plan(context((50.0, 250.0), (296.0, 250.0), obstacles))
    assert result.path == [(50.0, 250.0), (296.0, 250.0)]
    assert path_is_clear(result.path, rects)


def test_path_starts_at_off_grid_position():
    result = GridPlanner({'smooth': False}).plan(context((53.0, 247.0), (121.0, 318.0)))
    assert result.path[0] == (53.0, 247.0)
    assert result.path[-1] == (121.0, 318.0)
    assert all(p[0] % 10 == 0 and p[1] % 10 == 0 for p in result.path[1:-1])


@pytest.mark.parametrize('seed', range(5))
def test_goals_next_to_inflated_bounds_on_random_layouts(seed):
    field = ObstacleField(800, 500, rng=random.Random(seed))
    field.generate_static(10)
    statics = field.static_obstacles()
    rects = obstacle_rects(statics, INFLATION_MARGIN)
    planner = GridPlanner()

    checked = 0
    for obstacle in statics:
        left, top, right, bottom = obstacle.inflated(INFLATION_MARGIN)
        middle_x, middle_y = (left + right) / 2, (top + bottom) / 2
        for goal in [(left - 2.0, middle_y), (right + 2.0, middle_y),
                     (middle_x, top - 2.0), (middle_x, bottom + 2.0)]:
            if not (0 <= goal[0] <= 800 and 0 <= goal[1] <= 500) or in_collision(goal, rects):
                continue
            result = planner.plan(context(DRONE_START, goal, statics))
            if not result.path:
                continue
            checked += 1
            assert result.path[0] == DRONE_START
            assert result.path[-1] == goal
            assert path_is_clear(result.path, rects)

    assert checked > 0
