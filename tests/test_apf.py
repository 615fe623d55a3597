import math

import pytest

from config import APF_ATTRACTIVE_GAIN, APF_INFLUENCE_RADIUS, APF_STALL_TICKS
from core import simulation
from core.drone import NavState
from core.obstacles import Obstacle
from planning.reactive.apf_planner import FieldPlanner


def test_attraction_is_normalized():
    planner = FieldPlanner()
    fx, fy = planner.attractive_force(0.0, 0.0, (300.0, 400.0))
    assert math.hypot(fx, fy) == pytest.approx(APF_ATTRACTIVE_GAIN)
    assert (fx, fy) == pytest.approx((0.6 * APF_ATTRACTIVE_GAIN, 0.8 * APF_ATTRACTIVE_GAIN))
    assert planner.attractive_force(5.0, 5.0, (5.0, 5.0)) == (0.0, 0.0)


def test_repulsion_points_away_and_vanishes_outside_influence():
    planner = FieldPlanner()
    obstacle = Obstacle(100.0, 100.0, 50.0, 50.0)

    rx, ry = planner.repulsive_force(170.0, 125.0, obstacle)  # 20 px right of the block
    assert rx > 0.0
    assert ry == pytest.approx(0.0)

    far = 150.0 + APF_INFLUENCE_RADIUS + 1.0
    assert planner.repulsive_force(far, 125.0, obstacle) == (0.0, 0.0)


def test_repulsion_grows_closer_in():
    planner = FieldPlanner()
    obstacle = Obstacle(100.0, 100.0, 50.0, 50.0)
    near = planner.repulsive_force(160.0, 125.0, obstacle)[0]
    farther = planner.repulsive_force(190.0, 125.0, obstacle)[0]
    assert near > farther > 0.0


def test_inside_obstacle_pushes_from_center():
    planner = FieldPlanner()
    obstacle = Obstacle(100.0, 100.0, 50.0, 50.0)
    rx, ry = planner.repulsive_force(110.0, 125.0, obstacle)
    assert rx < 0.0


def test_compute_force_without_obstacles_is_attraction():
    planner = FieldPlanner()
    assert planner.compute_force(0.0, 0.0, (10.0, 0.0), []) == pytest.approx((APF_ATTRACTIVE_GAIN, 0.0))


def test_plan_is_continuous_and_has_no_path():
    planner = FieldPlanner()
    result = planner.plan(None)
    assert result.continuous
    assert result.path == []
    assert result.success


def test_potential_samples_cover_canvas():
    planner = FieldPlanner()
    samples = planner.sample_potential((400.0, 250.0), [Obstacle(100, 100, 50, 50)], 800, 500, 20)
    assert len(samples) == 41 * 26

    values = {(s.x, s.y): s.value for s in samples}
    # Lowest potential at the goal, higher next to the obstacle
    assert values[(400.0, 240.0)] < values[(160.0, 120.0)]
    assert min(values.values()) == pytest.approx(APF_ATTRACTIVE_GAIN * 10.0)


def test_symmetric_block_traps_drone_and_stall_is_reported(make_sim):
    # 40 x 40 block dead ahead on the line from start to goal
    state = make_sim([Obstacle(280.0, 230.0, 40.0, 40.0)], algorithm='apf')
    assert simulation.request_goal(state, 500.0, 250.0)

    stats = None
    for _ in range(600):
        stats = simulation.step(state)

    assert stats.stalled
    assert stats.stall_ticks >= APF_STALL_TICKS
    assert state.goal == (500.0, 250.0)
    assert state.drone.nav_state in (NavState.NAVIGATING, NavState.AVOIDING)
    assert state.drone.x < 280.0
    assert state.last_force is not None
    assert math.hypot(*state.last_force) < 0.01
