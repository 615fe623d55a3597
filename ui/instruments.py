"""
Instrument Panel
Displays drone telemetry and planner statistics in dashboard panels.
"""

import pygame
from config import (
    COLOR_PANEL_BG,
    COLOR_BORDER,
    COLOR_TEXT,
    COLOR_LABEL,
    COLOR_GREEN,
    COLOR_RED,
    COLOR_WHITE,
    NAV_STATE_COLORS,
    ALGORITHMS,
    FONT_TITLE_SIZE,
    FONT_LABEL_SIZE,
    FONT_VALUE_SIZE,
    FONT_SMALL_SIZE,
    FONT_FAMILY,
    INSTRUMENT_PANEL_PADDING,
    INSTRUMENT_LINE_SPACING,
    INSTRUMENT_SECTION_SPACING,
)

ALGORITHM_LABELS = {
    'astar': 'A*',
    'rrt': 'RRT',
    'apf': 'APF',
}


class Button:
    """
    Clickable button for instrument panel.
    """
    def __init__(self, x, y, width, height, text, color=None):
        self.rect = pygame.Rect(x, y, width, height)
        self.text = text
        self.color = color or COLOR_LABEL
        self.hovered = False
        self.selected = False
        self.font = pygame.font.SysFont(FONT_FAMILY, 11, bold=True)

    def draw(self, surface):
        if self.selected:
            bg_color = (30, 80, 40)
        else:
            bg_color = (60, 60, 60) if self.hovered else (40, 40, 40)
        pygame.draw.rect(surface, bg_color, self.rect)
        pygame.draw.rect(surface, self.color, self.rect, 2)

        text_surface = self.font.render(self.text, True, COLOR_WHITE)
        text_rect = text_surface.get_rect(center=self.rect.center)
        surface.blit(text_surface, text_rect)

    def check_hover(self, mouse_pos):
        self.hovered = self.rect.collidepoint(mouse_pos)
        return self.hovered

    def check_click(self, mouse_pos):
        return self.rect.collidepoint(mouse_pos)


class InstrumentPanel:
    """
    Renders instrument dashboard showing drone and planner data.
    """

    def __init__(self, x, y, width, height):
        """
        Initialize instrument panel.

        Args:
            x, y: Top-left position in pixels
            width, height: Panel dimensions in pixels
        """
        self.x = x
        self.y = y
        self.width = width
        self.height = height

        # Load fonts
        self.font_title = pygame.font.SysFont(FONT_FAMILY, FONT_TITLE_SIZE, bold=True)
        self.font_label = pygame.font.SysFont(FONT_FAMILY, FONT_LABEL_SIZE)
        self.font_value = pygame.font.SysFont(FONT_FAMILY, FONT_VALUE_SIZE, bold=True)
        self.font_small = pygame.font.SysFont(FONT_FAMILY, FONT_SMALL_SIZE)

        self.buttons = self._create_buttons()

    def _create_buttons(self):
        """Algorithm selectors in one row, reset and pause below them."""
        x = self.x + INSTRUMENT_PANEL_PADDING
        inner_width = self.width - 2 * INSTRUMENT_PANEL_PADDING
        button_height = 24
        bottom = self.y + self.height - INSTRUMENT_PANEL_PADDING

        buttons = {}
        algo_width = (inner_width - 2 * 5) // len(ALGORITHMS)
        algo_y = bottom - 2 * button_height - 6
        for idx, name in enumerate(ALGORITHMS):
            bx = x + idx * (algo_width + 5)
            buttons[name] = Button(bx, algo_y, algo_width, button_height, ALGORITHM_LABELS.get(name, name))

        half = (inner_width - 5) // 2
        row_y = bottom - button_height
        buttons['reset'] = Button(x, row_y, half, button_height, "RESET", COLOR_RED)
        buttons['pause'] = Button(x + half + 5, row_y, half, button_height, "PAUSE", COLOR_GREEN)
        return buttons

    def render(self, surface, state, is_paused=False):
        """
        Render all instrument panels.

        Args:
            surface: Pygame surface
            state: SimulationState
            is_paused: Whether simulation is paused
        """
        bg_rect = pygame.Rect(self.x, self.y, self.width, self.height)
        pygame.draw.rect(surface, COLOR_PANEL_BG, bg_rect)
        pygame.draw.rect(surface, COLOR_BORDER, bg_rect, 2)

        y_pos = self.y + INSTRUMENT_PANEL_PADDING

        title = self.font_title.render("> DRONE NAV", True, COLOR_TEXT)
        surface.blit(title, (self.x + INSTRUMENT_PANEL_PADDING, y_pos))

        if is_paused:
            pause_text = self.font_title.render("|| PAUSED", True, COLOR_RED)
            surface.blit(pause_text, (self.x + self.width - pause_text.get_width() - 10, y_pos))

        y_pos += 25

        stats = state.stats
        y_pos = self._render_navigation_panel(surface, y_pos, state, stats)
        y_pos = self._render_planner_panel(surface, y_pos, state, stats)
        y_pos = self._render_sensor_panel(surface, y_pos, stats)
        self._render_settings_panel(surface, y_pos, state.settings, stats)

        self._render_buttons(surface, state.settings.algorithm, is_paused)

    def _row(self, surface, x, y_pos, label, value, color=COLOR_TEXT):
        label_surface = self.font_label.render(label, True, COLOR_LABEL)
        surface.blit(label_surface, (x, y_pos))
        value_surface = self.font_label.render(value, True, color)
        surface.blit(value_surface, (x + 130, y_pos))
        return y_pos + INSTRUMENT_LINE_SPACING

    def _render_navigation_panel(self, surface, y_pos, state, stats):
        """Render navigation state, goal distance and battery."""
        x = self.x + INSTRUMENT_PANEL_PADDING

        title = self.font_title.render("NAVIGATION", True, COLOR_TEXT)
        surface.blit(title, (x, y_pos))
        y_pos += 22

        state_color = NAV_STATE_COLORS.get(stats.nav_state, COLOR_TEXT)
        value = self.font_value.render(stats.nav_state.upper(), True, state_color)
        surface.blit(value, (x, y_pos))
        y_pos += 24

        if stats.distance_to_goal is not None:
            y_pos = self._row(surface, x, y_pos, "To goal:", f"{stats.distance_to_goal:.0f} px")
        else:
            y_pos = self._row(surface, x, y_pos, "To goal:", "--", COLOR_LABEL)

        # Battery turns red below 20%
        battery_color = COLOR_GREEN if stats.battery_percent >= 20 else COLOR_RED
        y_pos = self._row(surface, x, y_pos, "Battery:", f"{stats.battery_percent:.1f}%", battery_color)
        y_pos = self._row(surface, x, y_pos, "Speed:", f"{state.drone.speed:.2f} px/t")
        y_pos = self._row(surface, x, y_pos, "Flown:", f"{stats.distance_traveled:.0f} px")

        return y_pos + INSTRUMENT_SECTION_SPACING - INSTRUMENT_LINE_SPACING

    def _render_planner_panel(self, surface, y_pos, state, stats):
        """Render statistics of the most recent plan."""
        x = self.x + INSTRUMENT_PANEL_PADDING

        planner = state.active_planner
        name = planner.get_name() if planner is not None else "--"
        title = self.font_title.render(f"PLANNER  {name}", True, COLOR_TEXT)
        surface.blit(title, (x, y_pos))
        y_pos += 22

        y_pos = self._row(surface, x, y_pos, "Waypoints:", f"{stats.path_length}")
        y_pos = self._row(surface, x, y_pos, "Path dist:", f"{stats.path_distance:.0f} px")
        y_pos = self._row(surface, x, y_pos, "Nodes:", f"{stats.nodes_explored}")
        y_pos = self._row(surface, x, y_pos, "Compute:", f"{stats.compute_time_ms:.1f} ms")

        return y_pos + INSTRUMENT_SECTION_SPACING - INSTRUMENT_LINE_SPACING

    def _render_sensor_panel(self, surface, y_pos, stats):
        """Render the closest sensor return and the local-minimum monitor."""
        x = self.x + INSTRUMENT_PANEL_PADDING

        title = self.font_title.render("SENSOR", True, COLOR_TEXT)
        surface.blit(title, (x, y_pos))
        y_pos += 22

        y_pos = self._row(surface, x, y_pos, "Nearest:", f"{stats.min_sensor_distance:.0f} px")

        if stats.stalled:
            y_pos = self._row(surface, x, y_pos, "APF stall:", f"STUCK ({stats.stall_ticks})", COLOR_RED)
        else:
            y_pos = self._row(surface, x, y_pos, "APF stall:", f"{stats.stall_ticks}", COLOR_LABEL)

        return y_pos + INSTRUMENT_SECTION_SPACING - INSTRUMENT_LINE_SPACING

    def _render_settings_panel(self, surface, y_pos, settings, stats):
        """Render user settings and the tick counter."""
        x = self.x + INSTRUMENT_PANEL_PADDING

        title = self.font_title.render("SETTINGS", True, COLOR_TEXT)
        surface.blit(title, (x, y_pos))
        y_pos += 22

        y_pos = self._row(surface, x, y_pos, "Speed:", f"{settings.speed_multiplier:.1f}x")
        y_pos = self._row(surface, x, y_pos, "Obstacles:",
                          f"{settings.static_obstacle_count} / {settings.dynamic_obstacle_count}")

        tick_text = self.font_small.render(f"Tick {stats.tick}", True, COLOR_LABEL)
        surface.blit(tick_text, (x, y_pos))
        return y_pos + INSTRUMENT_LINE_SPACING

    def _render_buttons(self, surface, algorithm, is_paused):
        """Render clickable control buttons."""
        for name in ALGORITHMS:
            self.buttons[name].selected = (name == algorithm)

        self.buttons['pause'].text = "RESUME" if is_paused else "PAUSE"

        for button in self.buttons.values():
            button.draw(surface)

    def handle_button_click(self, mouse_pos, controls):
        """
        Dispatch a click on the panel buttons.

        Args:
            mouse_pos: (x, y) screen position
            controls: ControlHandler instance

        Returns:
            True if a button consumed the click
        """
        for name, button in self.buttons.items():
            if not button.check_click(mouse_pos):
                continue

            if name == 'reset':
                controls.reset()
            elif name == 'pause':
                controls.toggle_pause()
            else:
                controls.select_algorithm(name)
            return True

        return False

    def update_button_hover(self, mouse_pos):
        """Update hover state for all buttons."""
        for button in self.buttons.values():
            button.check_hover(mouse_pos)


class ControlsHelpOverlay:
    """
    Displays keyboard controls help overlay.
    """

    def __init__(self):
        """Initialize help overlay."""
        self.font_title = pygame.font.SysFont(FONT_FAMILY, 20, bold=True)
        self.font_text = pygame.font.SysFont(FONT_FAMILY, 14)

    def render(self, surface):
        """
        Render help overlay (semi-transparent).

        Args:
            surface: Pygame surface
        """
        screen_width = surface.get_width()
        screen_height = surface.get_height()
        overlay_width, overlay_height = 560, 460

        overlay = pygame.Surface((overlay_width, overlay_height))
        overlay.set_alpha(230)
        overlay.fill((40, 40, 40))

        pygame.draw.rect(overlay, COLOR_WHITE, overlay.get_rect(), 3)

        title = self.font_title.render("KEYBOARD CONTROLS", True, COLOR_WHITE)
        overlay.blit(title, ((overlay_width - title.get_width()) // 2, 15))

        y = 55
        controls = [
            ("NAVIGATION", ""),
            ("  Click canvas", "Set goal"),
            ("  1 / 2 / 3", "Algorithm A* / RRT / APF"),
            ("", ""),
            ("SIMULATION", ""),
            ("  SPACE", "Pause/Resume"),
            ("  - / =", "Drone speed -/+ 0.1x"),
            ("  [ / ]", "Static obstacles -/+ 1"),
            ("  ; / '", "Dynamic obstacles -/+ 1"),
            ("  R", "Reset (new layout)"),
            ("", ""),
            ("VIEW", ""),
            ("  P", "Toggle potential heat map"),
            ("  E", "Toggle tree edges"),
            ("  L", "Toggle sensor rays"),
            ("  I", "Toggle obstacle clearance"),
            ("  H", "Toggle this help"),
            ("", ""),
            ("  ESC", "Quit simulator"),
        ]

        for text, description in controls:
            if text and not text.startswith(" "):
                label = self.font_text.render(text, True, COLOR_GREEN)
                overlay.blit(label, (30, y))
                y += 24
            elif text:
                key = self.font_text.render(text, True, COLOR_TEXT)
                overlay.blit(key, (30, y))

                if description:
                    desc = self.font_text.render(description, True, COLOR_LABEL)
                    overlay.blit(desc, (220, y))

                y += 20
            else:
                y += 6

        x_pos = (screen_width - overlay_width) // 2
        y_pos = (screen_height - overlay_height) // 2
        surface.blit(overlay, (x_pos, y_pos))
