"""
Simulation Step
Explicit simulation state and the per-tick update sequence.

One tick:
1. Advance dynamic obstacles
2. Sweep the range sensor from the current drone pose
3. Controller: state transitions and steering
4. Integrate drone kinematics (inside the controller)
5. Publish statistics
"""

import random
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from config import (
    CANVAS_WIDTH,
    CANVAS_HEIGHT,
    DRONE_START,
    SPEED_MULTIPLIER_RANGE,
    STATIC_COUNT_RANGE,
    DYNAMIC_COUNT_RANGE,
    DEFAULT_SPEED_MULTIPLIER,
    DEFAULT_STATIC_COUNT,
    DEFAULT_DYNAMIC_COUNT,
    DEFAULT_ALGORITHM,
    APF_SAMPLE_SPACING,
)
from core.controller import NavigationController
from core.drone import Drone, NavState
from core.geometry import clamp, distance, polyline_length
from core.obstacles import ObstacleField
from core.sensor import RangeSensor, SensorReading
from planning.base_planner import PlanResult
from planning.planner_factory import create_planner, list_planners


@dataclass
class SimulationSettings:
    """
    User-facing configuration.

    Attributes:
        speed_multiplier: Scales the drone speed limit, in [0.2, 1.5]
        static_obstacle_count: Requested static obstacles, in [4, 20]
        dynamic_obstacle_count: Requested dynamic obstacles, in [0, 15]
        algorithm: Planner for the next goal request ('astar', 'rrt', 'apf')
    """
    speed_multiplier: float = DEFAULT_SPEED_MULTIPLIER
    static_obstacle_count: int = DEFAULT_STATIC_COUNT
    dynamic_obstacle_count: int = DEFAULT_DYNAMIC_COUNT
    algorithm: str = DEFAULT_ALGORITHM

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Clamp numeric settings into range and check the algorithm name.

        Raises:
            ValueError: If algorithm is not a registered planner
        """
        self.speed_multiplier = clamp(float(self.speed_multiplier), *SPEED_MULTIPLIER_RANGE)
        self.static_obstacle_count = int(clamp(int(self.static_obstacle_count), *STATIC_COUNT_RANGE))
        self.dynamic_obstacle_count = int(clamp(int(self.dynamic_obstacle_count), *DYNAMIC_COUNT_RANGE))
        if self.algorithm not in list_planners():
            raise ValueError(f"Unknown planner: '{self.algorithm}'. Available: {list_planners()}")


@dataclass
class SimulationStats:
    """Observable per-tick statistics (read-only to collaborators)."""
    path_length: int = 0  # waypoints in the active path
    path_distance: float = 0.0  # pixels along the active path
    nodes_explored: int = 0
    compute_time_ms: float = 0.0
    distance_to_goal: Optional[float] = None
    battery_percent: float = 100.0
    distance_traveled: float = 0.0  # pixels flown since the last reset
    nav_state: str = NavState.IDLE.value
    min_sensor_distance: float = 0.0
    stall_ticks: int = 0
    stalled: bool = False
    tick: int = 0


@dataclass
class SimulationState:
    """
    The single mutable simulation context.

    Everything one tick reads or writes lives here and is passed explicitly
    to the step functions.
    """
    width: float
    height: float
    settings: SimulationSettings
    drone: Drone
    obstacle_field: ObstacleField
    rng: random.Random
    controller: NavigationController = field(default_factory=NavigationController)
    sensor: RangeSensor = field(default_factory=RangeSensor)
    readings: List[SensorReading] = field(default_factory=list)
    path: List[Tuple[float, float]] = field(default_factory=list)
    path_index: int = 0
    goal: Optional[Tuple[float, float]] = None
    active_planner: Any = None  # BasePlanner serving the current goal
    last_plan: Optional[PlanResult] = None
    last_force: Optional[Tuple[float, float]] = None
    stall_ticks: int = 0
    tick: int = 0
    stats: SimulationStats = field(default_factory=SimulationStats)


def create_simulation(settings: Optional[SimulationSettings] = None, seed=None,
                      width=CANVAS_WIDTH, height=CANVAS_HEIGHT, generate=True) -> SimulationState:
    """
    Build a ready-to-run simulation.

    Args:
        settings: SimulationSettings (defaults if None)
        seed: Seed for obstacle layouts and sampling planners
        width, height: Canvas size in pixels
        generate: Generate a random obstacle layout (False = empty field)

    Returns:
        SimulationState with the drone idle at its start pose
    """
    settings = settings if settings is not None else SimulationSettings()
    rng = random.Random(seed)
    start = (min(DRONE_START[0], width), min(DRONE_START[1], height))

    state = SimulationState(
        width=width,
        height=height,
        settings=settings,
        drone=Drone(*start),
        obstacle_field=ObstacleField(width, height, start=start, rng=rng),
        rng=rng,
    )

    if generate:
        state.obstacle_field.generate(settings.static_obstacle_count, settings.dynamic_obstacle_count)
    _sense(state)
    update_stats(state)
    return state


def step(state: SimulationState) -> SimulationStats:
    """
    Run one simulation tick.

    Returns:
        The refreshed SimulationStats
    """
    state.obstacle_field.update()
    _sense(state)
    state.controller.update(state, state.readings)
    state.tick += 1
    return update_stats(state)


def _sense(state):
    drone = state.drone
    state.readings = state.sensor.scan(drone.x, drone.y, drone.heading,
                                       state.obstacle_field, state.width, state.height)


def update_stats(state: SimulationState) -> SimulationStats:
    """Recompute observable statistics from the current state."""
    drone = state.drone
    stats = state.stats

    stats.path_length = len(state.path)
    stats.path_distance = polyline_length(state.path)
    if state.last_plan is not None:
        stats.nodes_explored = state.last_plan.nodes_explored
        stats.compute_time_ms = state.last_plan.compute_time_ms
    if state.goal is not None:
        stats.distance_to_goal = distance(drone.x, drone.y, state.goal[0], state.goal[1])
    else:
        stats.distance_to_goal = None
    stats.battery_percent = drone.battery
    stats.distance_traveled = drone.distance_traveled
    stats.nav_state = drone.nav_state.value
    stats.min_sensor_distance = state.sensor.min_distance(state.readings)
    stats.stall_ticks = state.stall_ticks
    stats.stalled = state.controller.is_stalled(state)
    stats.tick = state.tick
    return stats


# ==================== Commands ====================

def request_goal(state: SimulationState, x, y) -> bool:
    """
    Request a new goal with the currently selected algorithm.

    The planner created here serves this goal until arrival or a new
    request; later algorithm changes do not replan it.

    Returns:
        True if the drone is navigating toward the (possibly relocated) goal
    """
    planner = create_planner(state.settings.algorithm, {'rng': state.rng})
    accepted = state.controller.request_goal(state, x, y, planner)
    update_stats(state)
    return accepted


def reset(state: SimulationState, regenerate=True):
    """
    Clear path and goal, regenerate the field and put the drone back at start.

    Args:
        state: SimulationState
        regenerate: Build a new random layout (False keeps current obstacles)
    """
    if regenerate:
        settings = state.settings
        state.obstacle_field.generate(settings.static_obstacle_count, settings.dynamic_obstacle_count)
    state.controller.clear_goal(state)
    state.last_plan = None
    state.stats = SimulationStats()
    state.tick = 0
    state.drone.reset(*state.obstacle_field.start)
    _sense(state)
    update_stats(state)


def load_layout(state: SimulationState, obstacles):
    """Replace the field with an explicit obstacle list and reset the drone."""
    state.obstacle_field.obstacles = list(obstacles)
    reset(state, regenerate=False)


def set_speed_multiplier(state: SimulationState, value):
    state.settings.speed_multiplier = clamp(float(value), *SPEED_MULTIPLIER_RANGE)
    return state.settings.speed_multiplier


def set_algorithm(state: SimulationState, name):
    """
    Select the planner for future goal requests.

    Raises:
        ValueError: If name is not a registered planner
    """
    if name not in list_planners():
        raise ValueError(f"Unknown planner: '{name}'. Available: {list_planners()}")
    state.settings.algorithm = name


def set_obstacle_counts(state: SimulationState, static_count=None, dynamic_count=None):
    """Change obstacle counts; always regenerates the field and resets the drone."""
    if static_count is not None:
        state.settings.static_obstacle_count = int(clamp(int(static_count), *STATIC_COUNT_RANGE))
    if dynamic_count is not None:
        state.settings.dynamic_obstacle_count = int(clamp(int(dynamic_count), *DYNAMIC_COUNT_RANGE))
    reset(state)


def potential_samples(state: SimulationState, spacing=APF_SAMPLE_SPACING):
    """
    Potential field samples for the heat map overlay.

    Returns:
        List of PotentialSample, empty unless a field planner is steering
    """
    planner = state.active_planner
    if planner is None or not planner.continuous or state.goal is None:
        return []
    return planner.sample_potential(state.goal, state.obstacle_field.all_obstacles(),
                                    state.width, state.height, spacing)
