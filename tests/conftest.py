"""
Shared fixtures for the simulator tests.
"""

import pytest

from core import simulation
from core.obstacles import Obstacle, ObstacleKind
from core.simulation import SimulationSettings
from scenarios.layouts import EnclosureLayout


@pytest.fixture
def make_sim():
    """
    Build a simulation with an explicit obstacle layout (no random generation).

    Usage: state = make_sim([Obstacle(...)], algorithm='rrt', seed=3)
    """
    def _make(obstacles=(), algorithm='astar', seed=0):
        settings = SimulationSettings(algorithm=algorithm)
        state = simulation.create_simulation(settings, seed=seed, generate=False)
        simulation.load_layout(state, list(obstacles))
        return state
    return _make


@pytest.fixture
def central_block():
    """50 x 120 block centered on the canvas, between start and a far goal."""
    return [Obstacle(375.0, 190.0, 50.0, 120.0, ObstacleKind.STATIC, category='building')]


@pytest.fixture
def enclosure():
    """Four walls sealing off the area around (650, 250)."""
    return EnclosureLayout((650.0, 250.0), (100.0, 120.0), 20.0).build(800, 500)
