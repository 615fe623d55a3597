import pytest

from planning import BasePlanner, PlanResult, create_planner, list_planners, register_planner
from planning.reactive.apf_planner import FieldPlanner
from planning.sampling.rrt_planner import TreePlanner
from planning.planner_factory import _PLANNERS
from planning.search.astar_planner import GridPlanner


def test_builtin_planners_registered():
    assert {'astar', 'rrt', 'apf'} <= set(list_planners())
    assert isinstance(create_planner('astar'), GridPlanner)
    assert isinstance(create_planner('rrt'), TreePlanner)
    assert isinstance(create_planner('apf'), FieldPlanner)


def test_unknown_planner_raises():
    with pytest.raises(ValueError, match="Unknown planner"):
        create_planner('nope')


def test_config_is_passed_through():
    planner = create_planner('rrt', {'step_size': 10.0, 'max_iterations': 5})
    assert planner.step_size == 10.0
    assert planner.max_iterations == 5


def test_planner_capabilities():
    assert create_planner('apf').continuous
    assert not create_planner('astar').continuous
    assert create_planner('astar').allows_direct_fallback
    assert not create_planner('rrt').allows_direct_fallback


def test_register_custom_planner():
    class StraightLine(BasePlanner):
        def plan(self, context):
            return PlanResult(path=[context.start, context.goal], nodes_explored=1)

    register_planner('straight', StraightLine)
    try:
        assert isinstance(create_planner('straight'), StraightLine)
        assert 'straight' in list_planners()
    finally:
        _PLANNERS.pop('straight', None)
