"""
Map View - Canvas Rendering
Draws obstacles, planner diagnostics, sensor rays and the drone onto the
canvas surface. Canvas pixels map 1:1 to simulation coordinates.
"""

import pygame
import math
import numpy as np
from config import (
    COLOR_BACKGROUND,
    COLOR_GRID,
    COLOR_DRONE,
    COLOR_PATH,
    COLOR_GOAL,
    COLOR_TREE_EDGE,
    COLOR_SENSOR_RAY,
    COLOR_SENSOR_HIT,
    COLOR_DYNAMIC,
    COLOR_WHITE,
    COLOR_RED,
    CATEGORY_COLORS,
    NAV_STATE_COLORS,
    DRONE_RADIUS,
    INFLATION_MARGIN,
    GRID_LINE_SPACING,
    HEATMAP_ALPHA,
    FONT_FAMILY,
)


class MapView:
    """
    Renders the simulation canvas.
    """

    def __init__(self, canvas_width, canvas_height):
        """
        Initialize map view.

        Args:
            canvas_width: Canvas surface width in pixels
            canvas_height: Canvas surface height in pixels
        """
        self.width = canvas_width
        self.height = canvas_height
        self.font = pygame.font.SysFont(FONT_FAMILY, 11, bold=True)

        print(f"Map view initialized: {canvas_width}x{canvas_height} pixels")

    def contains(self, pos):
        """True if a screen position lies on the canvas."""
        return 0 <= pos[0] < self.width and 0 <= pos[1] < self.height

    def render_background(self, surface):
        """Fill the canvas and draw the reference grid."""
        surface.fill(COLOR_BACKGROUND)

        for x in range(0, self.width + 1, GRID_LINE_SPACING):
            pygame.draw.line(surface, COLOR_GRID, (x, 0), (x, self.height), 1)
        for y in range(0, self.height + 1, GRID_LINE_SPACING):
            pygame.draw.line(surface, COLOR_GRID, (0, y), (self.width, y), 1)

    def render_obstacles(self, surface, obstacle_field, show_inflation=False):
        """
        Render static obstacles by category color and dynamic ones in orange.

        Args:
            surface: Pygame surface
            obstacle_field: ObstacleField instance
            show_inflation: Outline the clearance the planners keep
        """
        for obstacle in obstacle_field.static_obstacles():
            rect = pygame.Rect(int(obstacle.x), int(obstacle.y), int(obstacle.width), int(obstacle.height))
            color = CATEGORY_COLORS.get(obstacle.category, (100, 100, 100))
            pygame.draw.rect(surface, color, rect)
            pygame.draw.rect(surface, COLOR_WHITE, rect, 1)

            if show_inflation:
                left, top, right, bottom = obstacle.inflated(INFLATION_MARGIN)
                inflated = pygame.Rect(int(left), int(top), int(right - left), int(bottom - top))
                pygame.draw.rect(surface, COLOR_GRID, inflated, 1)

        for obstacle in obstacle_field.dynamic_obstacles():
            rect = pygame.Rect(int(obstacle.x), int(obstacle.y), int(obstacle.width), int(obstacle.height))
            pygame.draw.rect(surface, COLOR_DYNAMIC, rect)

            # Velocity tick
            cx, cy = obstacle.center()
            end = (cx + obstacle.vx * 10, cy + obstacle.vy * 10)
            pygame.draw.line(surface, COLOR_WHITE, (cx, cy), end, 1)

    def render_heatmap(self, surface, samples, spacing):
        """
        Render potential field samples as a translucent heat map.

        Args:
            surface: Pygame surface
            samples: List of PotentialSample
            spacing: Sample spacing in pixels (cell size of the heat map)
        """
        if not samples:
            return

        values = np.array([s.value for s in samples])
        # Repulsion spikes dominate the range; compress with a log scale
        values = np.log1p(values - values.min())
        top = values.max()
        if top > 0:
            values = values / top

        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        half = spacing / 2
        size = int(math.ceil(spacing))
        for sample, level in zip(samples, values):
            red = int(255 * level)
            blue = int(255 * (1.0 - level))
            rect = pygame.Rect(int(sample.x - half), int(sample.y - half), size, size)
            overlay.fill((red, 40, blue, HEATMAP_ALPHA), rect)

        surface.blit(overlay, (0, 0))

    def render_tree_edges(self, surface, edges):
        """
        Render sampling-planner tree edges.

        Args:
            surface: Pygame surface
            edges: List of ((x1, y1), (x2, y2)) pairs
        """
        for start, end in edges:
            pygame.draw.line(surface, COLOR_TREE_EDGE, start, end, 1)

    def render_path(self, surface, path, path_index=0):
        """
        Render the planned path with the remaining waypoints highlighted.

        Args:
            surface: Pygame surface
            path: List of (x, y) waypoints
            path_index: Index of the waypoint the drone is heading for
        """
        if len(path) < 2:
            return

        points = [(int(x), int(y)) for x, y in path]
        pygame.draw.lines(surface, COLOR_PATH, False, points, 2)

        for idx, point in enumerate(points):
            radius = 4 if idx >= path_index else 2
            pygame.draw.circle(surface, COLOR_PATH, point, radius)

    def render_goal(self, surface, goal):
        """Render the goal as a crosshair marker."""
        if goal is None:
            return

        gx, gy = int(goal[0]), int(goal[1])
        pygame.draw.circle(surface, COLOR_GOAL, (gx, gy), 8, 2)
        pygame.draw.line(surface, COLOR_GOAL, (gx - 12, gy), (gx + 12, gy), 1)
        pygame.draw.line(surface, COLOR_GOAL, (gx, gy - 12), (gx, gy + 12), 1)

    def render_sensor_rays(self, surface, drone, readings):
        """
        Render range sensor rays; rays that hit something end in a red dot.

        Args:
            surface: Pygame surface
            drone: Drone instance
            readings: List of SensorReading
        """
        origin = (int(drone.x), int(drone.y))
        for reading in readings:
            end_x = drone.x + reading.distance * math.cos(reading.angle)
            end_y = drone.y + reading.distance * math.sin(reading.angle)
            pygame.draw.line(surface, COLOR_SENSOR_RAY, origin, (int(end_x), int(end_y)), 1)

            if reading.hit:
                pygame.draw.circle(surface, COLOR_SENSOR_HIT, (int(end_x), int(end_y)), 2)

    def render_drone(self, surface, drone):
        """
        Render drone as a triangle pointing in the heading direction,
        ringed in the color of its navigation state.

        Args:
            surface: Pygame surface
            drone: Drone instance
        """
        screen_x, screen_y = drone.x, drone.y
        angle_rad = drone.heading

        size = DRONE_RADIUS * 1.8

        nose_x = screen_x + size * math.cos(angle_rad)
        nose_y = screen_y + size * math.sin(angle_rad)

        base_left_x = screen_x + size * 0.6 * math.cos(angle_rad + 2.6)
        base_left_y = screen_y + size * 0.6 * math.sin(angle_rad + 2.6)

        base_right_x = screen_x + size * 0.6 * math.cos(angle_rad - 2.6)
        base_right_y = screen_y + size * 0.6 * math.sin(angle_rad - 2.6)

        vertices = [
            (int(nose_x), int(nose_y)),
            (int(base_left_x), int(base_left_y)),
            (int(base_right_x), int(base_right_y))
        ]

        state_color = NAV_STATE_COLORS.get(drone.nav_state.value, COLOR_WHITE)
        pygame.draw.circle(surface, state_color, (int(screen_x), int(screen_y)), int(DRONE_RADIUS), 1)
        pygame.draw.polygon(surface, COLOR_DRONE, vertices)
        pygame.draw.polygon(surface, COLOR_WHITE, vertices, 1)

    def render_stall_warning(self, surface, drone):
        """Label the drone when the field planner is stuck in a local minimum."""
        text = self.font.render("LOCAL MINIMUM", True, COLOR_WHITE)

        label_x = int(drone.x) + 14
        label_y = int(drone.y) - 24

        label_bg = pygame.Rect(label_x - 2, label_y - 2, text.get_width() + 4, text.get_height() + 4)
        pygame.draw.rect(surface, (0, 0, 0), label_bg)
        pygame.draw.rect(surface, COLOR_RED, label_bg, 1)

        surface.blit(text, (label_x, label_y))
