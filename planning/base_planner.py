"""
Base Planner - Abstract Interface for Navigation Planners
Defines the contract that all planning algorithms must implement.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

Point2D = Tuple[float, float]


@dataclass
class PlanningContext:
    """
    Context passed to planners containing everything a plan request needs.

    Attributes:
        start: Drone position (x, y)
        goal: Goal position (x, y)
        obstacles: Obstacles the planner must route around (static ones)
        width: Canvas width in pixels
        height: Canvas height in pixels
        inflation: Clearance added around obstacle bounds
    """
    start: Point2D
    goal: Point2D
    obstacles: list  # List of Obstacle
    width: float
    height: float
    inflation: float


@dataclass
class PlanResult:
    """
    Outcome of a planning request. An empty path means failure.

    Attributes:
        path: Waypoints from start to goal
        nodes_explored: Search effort (closed nodes or sampling iterations)
        edges: Tree edges for diagnostics (sampling planners only)
        compute_time_ms: Wall-clock planning time
        continuous: True for planners that steer every tick instead of
            producing a path
    """
    path: List[Point2D] = field(default_factory=list)
    nodes_explored: int = 0
    edges: List[Tuple[Point2D, Point2D]] = field(default_factory=list)
    compute_time_ms: float = 0.0
    continuous: bool = False

    @property
    def success(self) -> bool:
        return self.continuous or len(self.path) > 0


class BasePlanner(ABC):
    """
    Abstract base class for all planners.

    Subclasses must implement:
    - plan(): Compute a result for a start/goal pair

    Continuous planners also override compute_force(), which the
    controller calls every tick instead of following a path.
    """

    # Planner produces no path; controller steers with compute_force()
    continuous = False

    # Controller may try a straight segment when this planner fails
    allows_direct_fallback = False

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize planner with configuration.

        Args:
            config: Algorithm-specific configuration dict
        """
        self.config = config if config is not None else {}

    def run(self, context: PlanningContext) -> PlanResult:
        """
        Plan and stamp the wall-clock time spent.

        Args:
            context: PlanningContext

        Returns:
            PlanResult with compute_time_ms filled in
        """
        started = time.perf_counter()
        result = self.plan(context)
        result.compute_time_ms = (time.perf_counter() - started) * 1000.0
        return result

    @abstractmethod
    def plan(self, context: PlanningContext) -> PlanResult:
        """
        Compute a route from context.start to context.goal.

        Args:
            context: PlanningContext

        Returns:
            PlanResult (empty path on failure)
        """
        pass

    def compute_force(self, x, y, goal, obstacles):
        """
        Instantaneous steering force for continuous planners.

        Returns:
            (fx, fy) tuple
        """
        raise NotImplementedError(f"{self.get_name()} does not steer continuously")

    def get_name(self) -> str:
        """
        Return human-readable planner name.

        Returns:
            Planner name string
        """
        return self.__class__.__name__
