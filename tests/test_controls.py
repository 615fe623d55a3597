import pygame
import pytest

from core import simulation
from core.drone import NavState
from scenarios.layouts import BlockLayout
from ui.controls import ControlHandler


class CanvasStub:
    """Stands in for MapView; only canvas hit testing is used by the handler."""

    def contains(self, pos):
        return 0 <= pos[0] < 800 and 0 <= pos[1] < 500


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


@pytest.fixture
def controls(make_sim):
    return ControlHandler(make_sim(), CanvasStub())


def test_number_keys_select_algorithm(controls):
    controls.handle_event(key(pygame.K_2))
    assert controls.state.settings.algorithm == 'rrt'
    controls.handle_event(key(pygame.K_3))
    assert controls.state.settings.algorithm == 'apf'
    controls.handle_event(key(pygame.K_1))
    assert controls.state.settings.algorithm == 'astar'


def test_speed_keys_step_and_clamp(controls):
    controls.handle_event(key(pygame.K_EQUALS))
    assert controls.state.settings.speed_multiplier == pytest.approx(1.1)
    for _ in range(20):
        controls.handle_event(key(pygame.K_MINUS))
    assert controls.state.settings.speed_multiplier == pytest.approx(0.2)


def test_obstacle_keys_regenerate(controls):
    settings = controls.state.settings
    static_before = settings.static_obstacle_count
    controls.handle_event(key(pygame.K_RIGHTBRACKET))
    assert settings.static_obstacle_count == static_before + 1
    controls.handle_event(key(pygame.K_SEMICOLON))
    assert settings.dynamic_obstacle_count >= 0
    assert controls.state.drone.nav_state == NavState.IDLE


def test_toggles_and_quit(controls):
    assert not controls.show_heatmap
    controls.handle_event(key(pygame.K_p))
    assert controls.show_heatmap
    controls.handle_event(key(pygame.K_SPACE))
    assert controls.paused
    controls.handle_event(key(pygame.K_i))
    assert controls.show_inflation
    controls.handle_event(key(pygame.K_h))
    assert controls.show_help
    assert controls.handle_event(key(pygame.K_ESCAPE)) == 'quit'


def test_click_on_canvas_sets_goal(controls):
    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(300, 250))
    controls.handle_event(click)
    assert controls.state.goal == (300.0, 250.0)
    assert controls.state.drone.nav_state == NavState.NAVIGATING


def test_click_off_canvas_is_ignored(controls):
    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(900, 250))
    controls.handle_event(click)
    assert controls.state.goal is None


def test_reset_reloads_preset_layout(make_sim):
    layout = BlockLayout((40, 40), (300, 250))
    state = make_sim(layout.build(800, 500))
    controls = ControlHandler(state, CanvasStub(), layout)

    simulation.request_goal(state, 500.0, 250.0)
    controls.reset()
    assert state.goal is None
    assert state.obstacle_field.bounds_array().tolist() == [[280.0, 230.0, 320.0, 270.0]]
