"""
Drone State Management
Holds the drone pose, velocity, battery and navigation state.
The NavigationController mutates it every tick.
"""

from enum import Enum

from config import BATTERY_FULL, DRONE_START
from core.geometry import magnitude


class NavState(Enum):
    IDLE = 'idle'
    PLANNING = 'planning'
    NAVIGATING = 'navigating'
    AVOIDING = 'avoiding'
    LANDING = 'landing'  # reserved, never entered


class Drone:
    """
    Point-mass drone on the 2D canvas.
    """

    def __init__(self, x=DRONE_START[0], y=DRONE_START[1], heading=0.0):
        """
        Initialize drone at given position.

        Args:
            x, y: Initial position in pixels
            heading: Initial heading in radians (0 = +x)
        """
        self.reset(x, y, heading)

    def reset(self, x=DRONE_START[0], y=DRONE_START[1], heading=0.0):
        """Return to a start pose: zero velocity, full battery, idle."""
        # Position
        self.x = x
        self.y = y

        # Velocity (pixels per tick)
        self.vx = 0.0
        self.vy = 0.0

        # Orientation (radians)
        self.heading = heading
        self.target_heading = heading

        self.battery = BATTERY_FULL  # percent
        self.nav_state = NavState.IDLE

        # Statistics
        self.distance_traveled = 0.0  # pixels
        self.ticks = 0

    @property
    def position(self):
        return (self.x, self.y)

    @property
    def speed(self):
        return magnitude(self.vx, self.vy)

    def drain_battery(self, amount):
        """Reduce battery by amount (never below zero, never increases)."""
        if amount > 0:
            self.battery = max(0.0, self.battery - amount)

    def __repr__(self):
        return (f"Drone(x={self.x:.1f}, y={self.y:.1f}, v=({self.vx:.2f}, {self.vy:.2f}), "
                f"state={self.nav_state.value}, battery={self.battery:.1f}%)")
