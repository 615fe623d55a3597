"""
Preset Obstacle Layouts
Provides reproducible test layouts with known planning behavior.
"""

from config import LAYOUTS
from core.obstacles import Obstacle, ObstacleKind


class LayoutScenario:
    """
    Base class for layout scenarios.
    Subclasses build a fixed list of obstacles for a canvas size.
    """

    def build(self, width, height):
        """
        Build obstacles for the canvas.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels

        Returns:
            List of Obstacle
        """
        raise NotImplementedError("Subclasses must implement build()")


class EmptyLayout(LayoutScenario):
    """No obstacles at all."""

    def build(self, width, height):
        return []


class BlockLayout(LayoutScenario):
    """
    Single static block.
    Centered on the canvas unless a center is given.
    """

    def __init__(self, size, center=None):
        """
        Args:
            size: (width, height) of the block
            center: (x, y) of the block center, None = canvas center
        """
        self.size = size
        self.center = center

    def build(self, width, height):
        cx, cy = self.center if self.center is not None else (width / 2, height / 2)
        w, h = self.size
        return [Obstacle(cx - w / 2, cy - h / 2, w, h, ObstacleKind.STATIC, category='building')]


class EnclosureLayout(LayoutScenario):
    """
    Four walls around a goal area.
    No route exists from outside into the inner area.
    """

    def __init__(self, center, inner_size, wall):
        """
        Args:
            center: (x, y) center of the enclosed area
            inner_size: (width, height) of the free area inside the walls
            wall: Wall thickness in pixels
        """
        self.center = center
        self.inner_size = inner_size
        self.wall = wall

    def build(self, width, height):
        cx, cy = self.center
        iw, ih = self.inner_size
        t = self.wall

        left = cx - iw / 2 - t
        top = cy - ih / 2 - t
        outer_w = iw + 2 * t
        outer_h = ih + 2 * t

        return [
            Obstacle(left, top, outer_w, t, ObstacleKind.STATIC, category='container'),  # top
            Obstacle(left, top + outer_h - t, outer_w, t, ObstacleKind.STATIC, category='container'),  # bottom
            Obstacle(left, top, t, outer_h, ObstacleKind.STATIC, category='container'),  # left
            Obstacle(left + outer_w - t, top, t, outer_h, ObstacleKind.STATIC, category='container'),  # right
        ]


class CorridorLayout(LayoutScenario):
    """
    Vertical wall across the canvas with one gap in the middle.
    """

    def __init__(self, gap, wall_width):
        self.gap = gap
        self.wall_width = wall_width

    def build(self, width, height):
        x = width / 2 - self.wall_width / 2
        upper_h = (height - self.gap) / 2
        lower_y = upper_h + self.gap
        return [
            Obstacle(x, 0, self.wall_width, upper_h, ObstacleKind.STATIC, category='building'),
            Obstacle(x, lower_y, self.wall_width, height - lower_y, ObstacleKind.STATIC, category='building'),
        ]


def create_layout(name):
    """
    Factory function to create a layout by name.

    Args:
        name: Layout name from config.LAYOUTS

    Returns:
        LayoutScenario instance, or None for random / unknown layouts
    """
    if name not in LAYOUTS:
        return None

    layout_config = LAYOUTS[name]
    layout_type = layout_config.get('type')

    if layout_type == 'empty':
        return EmptyLayout()

    elif layout_type == 'block':
        return BlockLayout(layout_config['size'], layout_config.get('center'))

    elif layout_type == 'enclosure':
        return EnclosureLayout(
            layout_config['center'],
            layout_config['inner_size'],
            layout_config['wall']
        )

    elif layout_type == 'corridor':
        return CorridorLayout(layout_config['gap'], layout_config['wall_width'])

    else:
        # 'random' is generated by the ObstacleField itself
        return None
