import random

import pytest

from config import INFLATION_MARGIN, RRT_MAX_ITERATIONS
from core.geometry import distance
from planning.base_planner import PlanningContext
from planning.sampling.rrt_planner import TreePlanner
from planning.utils import line_of_sight, obstacle_rects, path_is_clear


def context(start, goal, obstacles=()):
    return PlanningContext(start=start, goal=goal, obstacles=list(obstacles),
                           width=800, height=500, inflation=INFLATION_MARGIN)


@pytest.mark.parametrize('seed', [1, 2, 3])
def test_path_and_edges_are_collision_free(seed, central_block):
    planner = TreePlanner({'seed': seed})
    result = planner.plan(context((50.0, 250.0), (750.0, 250.0), central_block))
    rects = obstacle_rects(central_block, INFLATION_MARGIN)

    assert result.success
    assert result.path[0] == (50.0, 250.0)
    assert result.path[-1] == (750.0, 250.0)
    assert path_is_clear(result.path, rects)
    for start, end in result.edges:
        assert line_of_sight(start, end, rects)
    assert 1 <= result.nodes_explored <= RRT_MAX_ITERATIONS


def test_tree_steps_never_exceed_step_size():
    planner = TreePlanner({'seed': 4, 'step_size': 25.0})
    result = planner.plan(context((50.0, 250.0), (700.0, 100.0)))
    for (x1, y1), (x2, y2) in result.edges:
        assert distance(x1, y1, x2, y2) <= 25.0 + 1e-9


def test_enclosed_goal_exhausts_budget(enclosure):
    planner = TreePlanner({'seed': 0})
    result = planner.plan(context((50.0, 250.0), (650.0, 250.0), enclosure))
    assert result.path == []
    assert result.nodes_explored == RRT_MAX_ITERATIONS
    assert not result.success


def test_injected_rng_makes_trees_reproducible(central_block):
    a = TreePlanner({'rng': random.Random(9)}).plan(context((50.0, 250.0), (750.0, 250.0), central_block))
    b = TreePlanner({'rng': random.Random(9)}).plan(context((50.0, 250.0), (750.0, 250.0), central_block))
    assert a.path == b.path
    assert a.edges == b.edges
