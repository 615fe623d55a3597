"""
Navigation Planning System
Interchangeable planners for the autonomous drone: grid search (A*),
sampling-based tree search (RRT) and artificial potential field (APF).
"""

from planning.base_planner import BasePlanner, PlanningContext, PlanResult
from planning.planner_factory import create_planner, list_planners, register_planner

__all__ = [
    'BasePlanner',
    'PlanningContext',
    'PlanResult',
    'create_planner',
    'list_planners',
    'register_planner',
]
