"""
Planner Factory
Creates planning algorithm instances by name using registry pattern.
"""

from typing import Dict, Any, List
from planning.base_planner import BasePlanner


# Global planner registry
_PLANNERS: Dict[str, type] = {}


def register_planner(name: str, planner_class: type):
    """
    Register a planner implementation.

    Args:
        name: Planner identifier (e.g., 'astar', 'rrt')
        planner_class: Planner class (subclass of BasePlanner)
    """
    _PLANNERS[name] = planner_class


def create_planner(name: str, config: Dict[str, Any] = None) -> BasePlanner:
    """
    Create planner instance by name.

    Args:
        name: Planner identifier
        config: Optional configuration dict

    Returns:
        BasePlanner instance

    Raises:
        ValueError: If planner name not found
    """
    if name not in _PLANNERS:
        raise ValueError(f"Unknown planner: '{name}'. Available: {list(_PLANNERS.keys())}")

    planner_class = _PLANNERS[name]
    return planner_class(config)


def list_planners() -> List[str]:
    """
    List available planner names.

    Returns:
        List of registered planner names
    """
    return list(_PLANNERS.keys())


# ===== PLANNER REGISTRATION =====

from planning.search.astar_planner import GridPlanner
from planning.sampling.rrt_planner import TreePlanner
from planning.reactive.apf_planner import FieldPlanner

register_planner('astar', GridPlanner)
register_planner('rrt', TreePlanner)
register_planner('apf', FieldPlanner)
