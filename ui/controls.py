"""
Controls Handler
Processes keyboard and mouse input for simulator control.
"""

import pygame
from config import ALGORITHMS, SPEED_MULTIPLIER_STEP
from core import simulation


class ControlHandler:
    """
    Handles user input and maintains control state.
    """

    def __init__(self, state, map_view, layout=None):
        """
        Initialize control handler.

        Args:
            state: SimulationState driven by the host loop
            map_view: MapView instance (canvas hit testing)
            layout: Optional LayoutScenario that R reloads instead of a random field
        """
        self.state = state
        self.map_view = map_view
        self.layout = layout

        # Simulation state
        self.paused = False

        # UI state
        self.show_heatmap = False
        self.show_tree_edges = True
        self.show_sensor_rays = True
        self.show_inflation = False
        self.show_help = False

    def handle_event(self, event):
        """
        Process pygame event.

        Args:
            event: Pygame event object

        Returns:
            'quit' if user wants to quit, None otherwise
        """
        if event.type == pygame.KEYDOWN:
            # ===== ALGORITHM =====
            if event.key == pygame.K_1:
                self.select_algorithm('astar')

            elif event.key == pygame.K_2:
                self.select_algorithm('rrt')

            elif event.key == pygame.K_3:
                self.select_algorithm('apf')

            # ===== SIMULATION CONTROL =====
            elif event.key == pygame.K_SPACE:
                self.toggle_pause()

            elif event.key == pygame.K_EQUALS or event.key == pygame.K_PLUS:
                self.adjust_speed(SPEED_MULTIPLIER_STEP)

            elif event.key == pygame.K_MINUS:
                self.adjust_speed(-SPEED_MULTIPLIER_STEP)

            elif event.key == pygame.K_r:
                self.reset()

            # ===== OBSTACLES =====
            elif event.key == pygame.K_LEFTBRACKET:
                self.adjust_obstacles(static_delta=-1)

            elif event.key == pygame.K_RIGHTBRACKET:
                self.adjust_obstacles(static_delta=1)

            elif event.key == pygame.K_SEMICOLON:
                self.adjust_obstacles(dynamic_delta=-1)

            elif event.key == pygame.K_QUOTE:
                self.adjust_obstacles(dynamic_delta=1)

            # ===== OVERLAY TOGGLES =====
            elif event.key == pygame.K_p:
                self.show_heatmap = not self.show_heatmap
                status = "ON" if self.show_heatmap else "OFF"
                print(f"Potential heat map {status}")

            elif event.key == pygame.K_e:
                self.show_tree_edges = not self.show_tree_edges
                status = "ON" if self.show_tree_edges else "OFF"
                print(f"Tree edges {status}")

            elif event.key == pygame.K_l:
                self.show_sensor_rays = not self.show_sensor_rays
                status = "ON" if self.show_sensor_rays else "OFF"
                print(f"Sensor rays {status}")

            elif event.key == pygame.K_i:
                self.show_inflation = not self.show_inflation
                status = "ON" if self.show_inflation else "OFF"
                print(f"Obstacle clearance {status}")

            elif event.key == pygame.K_h:
                self.show_help = not self.show_help

            # ===== QUIT =====
            elif event.key == pygame.K_ESCAPE:
                return 'quit'

        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1 and self.map_view.contains(event.pos):
                self.set_goal(event.pos[0], event.pos[1])

        return None

    def set_goal(self, x, y):
        """Request a goal at a canvas position with the selected algorithm."""
        simulation.request_goal(self.state, float(x), float(y))

    def select_algorithm(self, name):
        """Select the planner for the next goal; the current goal keeps its planner."""
        if name not in ALGORITHMS or name == self.state.settings.algorithm:
            return
        simulation.set_algorithm(self.state, name)
        print(f"Algorithm: {name}")

    def toggle_pause(self):
        self.paused = not self.paused
        status = "PAUSED" if self.paused else "RESUMED"
        print(f"Simulation {status}")

    def adjust_speed(self, delta):
        """Change drone speed multiplier by delta (clamped)."""
        old = self.state.settings.speed_multiplier
        new = simulation.set_speed_multiplier(self.state, round(old + delta, 2))
        if new != old:
            print(f"Drone speed: {new:.1f}x")

    def adjust_obstacles(self, static_delta=0, dynamic_delta=0):
        """Change obstacle counts; regenerates the layout and resets the drone."""
        settings = self.state.settings
        self.layout = None  # counts only apply to random layouts
        old = (settings.static_obstacle_count, settings.dynamic_obstacle_count)
        simulation.set_obstacle_counts(
            self.state,
            static_count=old[0] + static_delta,
            dynamic_count=old[1] + dynamic_delta,
        )
        new = (settings.static_obstacle_count, settings.dynamic_obstacle_count)
        print(f"Obstacles: {new[0]} static, {new[1]} dynamic "
              f"({len(self.state.obstacle_field.static_obstacles())} placed)")

    def reset(self):
        """New layout (or the preset again), drone back at start."""
        if self.layout is not None:
            obstacles = self.layout.build(self.state.width, self.state.height)
            simulation.load_layout(self.state, obstacles)
        else:
            simulation.reset(self.state)
        print("Simulation reset")
