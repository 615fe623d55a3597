import pytest

from config import BATTERY_FULL, DRONE_START
from core import simulation
from core.drone import NavState
from core.simulation import SimulationSettings


def test_settings_are_clamped():
    settings = SimulationSettings(speed_multiplier=5.0, static_obstacle_count=1, dynamic_obstacle_count=99)
    assert settings.speed_multiplier == 1.5
    assert settings.static_obstacle_count == 4
    assert settings.dynamic_obstacle_count == 15

    settings = SimulationSettings(speed_multiplier=0.0, static_obstacle_count=50, dynamic_obstacle_count=-3)
    assert settings.speed_multiplier == 0.2
    assert settings.static_obstacle_count == 20
    assert settings.dynamic_obstacle_count == 0


def test_unknown_algorithm_is_rejected():
    with pytest.raises(ValueError):
        SimulationSettings(algorithm='dijkstra')

    state = simulation.create_simulation(seed=1)
    with pytest.raises(ValueError):
        simulation.set_algorithm(state, 'dijkstra')
    assert state.settings.algorithm == 'astar'


def test_create_simulation_is_reproducible():
    a = simulation.create_simulation(seed=21)
    b = simulation.create_simulation(seed=21)
    assert a.obstacle_field.bounds_array().tolist() == b.obstacle_field.bounds_array().tolist()
    assert a.drone.position == DRONE_START
    assert a.drone.nav_state == NavState.IDLE
    assert len(a.readings) == a.sensor.ray_count


def test_step_advances_tick_and_stats():
    state = simulation.create_simulation(seed=2)
    for _ in range(10):
        stats = simulation.step(state)
    assert stats.tick == 10
    assert stats.nav_state == 'idle'
    assert stats.distance_to_goal is None


def test_battery_never_increases(make_sim, central_block):
    state = make_sim(central_block)
    assert simulation.request_goal(state, 750.0, 250.0)

    previous = state.drone.battery
    for _ in range(400):
        stats = simulation.step(state)
        assert 0.0 <= stats.battery_percent <= previous
        previous = stats.battery_percent
    assert previous < BATTERY_FULL


def test_reset_restores_start():
    state = simulation.create_simulation(seed=8)
    simulation.request_goal(state, 700.0, 400.0)
    for _ in range(50):
        simulation.step(state)

    simulation.reset(state)
    assert state.drone.position == DRONE_START
    assert state.drone.battery == BATTERY_FULL
    assert state.drone.nav_state == NavState.IDLE
    assert state.goal is None
    assert state.path == []
    assert state.last_plan is None
    assert state.tick == 0


def test_set_obstacle_counts_regenerates_field():
    state = simulation.create_simulation(seed=5)
    simulation.set_obstacle_counts(state, static_count=30, dynamic_count=0)
    assert state.settings.static_obstacle_count == 20
    assert state.settings.dynamic_obstacle_count == 0
    assert state.obstacle_field.dynamic_obstacles() == []
    assert 0 < len(state.obstacle_field.static_obstacles()) <= 20


def test_speed_multiplier_setter_clamps():
    state = simulation.create_simulation(seed=6)
    assert simulation.set_speed_multiplier(state, 9.0) == 1.5
    assert simulation.set_speed_multiplier(state, 0.7) == 0.7


def test_empty_field_scenario_stats(make_sim):
    state = make_sim()
    assert simulation.request_goal(state, 600.0, 250.0)
    stats = state.stats
    assert stats.path_length == 2
    assert stats.path_distance == pytest.approx(550.0)
    assert 55 <= stats.nodes_explored <= 60
    assert stats.nav_state == 'navigating'
    assert stats.distance_to_goal == pytest.approx(550.0)


def test_potential_samples_only_for_field_planner(make_sim):
    state = make_sim(algorithm='astar')
    simulation.request_goal(state, 600.0, 250.0)
    assert simulation.potential_samples(state) == []

    state = make_sim(algorithm='apf')
    simulation.request_goal(state, 600.0, 250.0)
    assert len(simulation.potential_samples(state, spacing=50)) == 17 * 11


def test_distance_traveled_reported_and_reset(make_sim):
    state = make_sim()
    simulation.request_goal(state, 600.0, 250.0)
    for _ in range(50):
        stats = simulation.step(state)
    assert stats.distance_traveled > 0.0
    assert stats.distance_traveled == state.drone.distance_traveled

    simulation.reset(state, regenerate=False)
    assert state.stats.distance_traveled == 0.0
