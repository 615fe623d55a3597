"""
Drone Navigation Simulator - Configuration
All constants and settings for the simulator.
"""

# ==================== Screen Dimensions ====================
SCREEN_WIDTH = 1100
SCREEN_HEIGHT = 500
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 500
INSTRUMENT_WIDTH = 300
FPS = 60

# ==================== Drone ====================
DRONE_START = (50.0, CANVAS_HEIGHT / 2)  # pixels - start pose (x, y)
DRONE_RADIUS = 8.0  # pixels - physical radius of the drone
INFLATION_MARGIN = DRONE_RADIUS + 4.0  # pixels - clearance added around obstacles
DRONE_MAX_SPEED = 2.5  # pixels per tick at speed multiplier 1.0
DRONE_ACCELERATION = 0.35  # pixels per tick^2 toward the next waypoint
DRONE_DAMPING = 0.9  # multiplicative velocity damping per tick
DRONE_TURN_RATE = 0.15  # fraction of heading error corrected per tick
DRONE_MIN_HEADING_SPEED = 0.05  # below this speed the target heading is held
BATTERY_FULL = 100.0  # percent
BATTERY_DRAIN_PER_SPEED = 0.004  # percent per tick per pixel/tick of speed

# ==================== Range Sensor (LiDAR) ====================
SENSOR_RAY_COUNT = 24  # rays over a full revolution
SENSOR_MAX_RANGE = 150.0  # pixels
SENSOR_STEP = 2.0  # pixels - ray marching resolution

# ==================== Navigation Controller ====================
SAFE_DISTANCE = 22.0  # pixels - below this the controller starts avoiding
AVOID_RECOVERY_FACTOR = 1.2  # leave avoidance above SAFE_DISTANCE * factor
AVOID_GAIN = 0.6  # velocity push per ray at full urgency
ARRIVAL_THRESHOLD = 12.0  # pixels - goal reached
WAYPOINT_RADIUS = 15.0  # pixels - advance to next waypoint
GOAL_OFFSET_MARGIN = 10.0  # pixels beyond inflated bound for relocated goals

# ==================== A* Grid Planner ====================
ASTAR_CELL_SIZE = 10.0  # pixels per grid cell
ASTAR_LOS_STEP = 4.0  # pixels - line-of-sight sampling resolution

# ==================== RRT Tree Planner ====================
RRT_STEP_SIZE = 25.0  # pixels - extension length
RRT_GOAL_BIAS = 0.1  # probability of sampling the goal
RRT_MAX_ITERATIONS = 1500  # sample budget per request

# ==================== APF Field Planner ====================
APF_ATTRACTIVE_GAIN = 0.2  # normalized pull toward goal
APF_REPULSIVE_GAIN = 6000.0  # repulsive gain
APF_INFLUENCE_RADIUS = 80.0  # pixels - obstacles beyond this are ignored
APF_MIN_DISTANCE = 5.0  # pixels - singularity guard
APF_STALL_EPSILON = 0.01  # force magnitude treated as a stall
APF_STALL_TICKS = 30  # consecutive stall ticks before reporting a local minimum
APF_SAMPLE_SPACING = 20.0  # pixels - heat map resolution

# ==================== Obstacle Field ====================
STATIC_MIN_SIZE = 30.0  # pixels
STATIC_MAX_SIZE = 80.0  # pixels
STATIC_MIN_GAP = 40.0  # pixels between static bounding boxes
STATIC_PLACEMENT_ATTEMPTS = 30  # retries per obstacle
START_CLEAR_RADIUS = 80.0  # pixels around DRONE_START kept free
STATIC_CATEGORIES = ['building', 'tree', 'tower', 'container', 'helipad']

DYNAMIC_SIZE = 20.0  # pixels (square)
DYNAMIC_MIN_SPEED = 0.3  # pixels per tick
DYNAMIC_MAX_SPEED = 1.2  # pixels per tick
DYNAMIC_SPAWN_MARGIN = 20.0  # pixels from static obstacles at spawn
DYNAMIC_COLLISION_MARGIN = 4.0  # pixels look-ahead margin against statics
DYNAMIC_SEPARATION = 40.0  # pixels between dynamic obstacle centers
DYNAMIC_REPULSION = 0.15  # velocity nudge when too close
DYNAMIC_PERTURBATION = 0.2  # random jitter added on bounce
DYNAMIC_SPAWN_ATTEMPTS = 50  # retries per obstacle

# ==================== Simulation Settings ====================
SPEED_MULTIPLIER_RANGE = (0.2, 1.5)
STATIC_COUNT_RANGE = (4, 20)
DYNAMIC_COUNT_RANGE = (0, 15)
ALGORITHMS = ['astar', 'rrt', 'apf']

DEFAULT_SPEED_MULTIPLIER = 1.0
DEFAULT_STATIC_COUNT = 10
DEFAULT_DYNAMIC_COUNT = 4
DEFAULT_ALGORITHM = 'astar'

SPEED_MULTIPLIER_STEP = 0.1  # per key press

# ==================== Preset Layouts ====================
LAYOUTS = {
    'Random': {
        'description': 'Random static and dynamic obstacles',
        'type': 'random',
    },
    'Empty': {
        'description': 'No obstacles - straight-line baseline',
        'type': 'empty',
    },
    'Central Block': {
        'description': 'One block between start and a goal on the far side',
        'type': 'block',
        'size': (60, 120),
    },
    'Enclosed Goal': {
        'description': 'Goal area walled in on all sides',
        'type': 'enclosure',
        'center': (650, 250),
        'inner_size': (100, 120),
        'wall': 20,
    },
    'APF Trap': {
        'description': 'Square block dead ahead - potential field local minimum',
        'type': 'block',
        'size': (40, 40),
        'center': (300, CANVAS_HEIGHT / 2),
    },
    'Corridor': {
        'description': 'Two walls with a narrow gap',
        'type': 'corridor',
        'gap': 70,
        'wall_width': 30,
    },
}

# ==================== Colors (RGB tuples) ====================
COLOR_BACKGROUND = (12, 16, 24)  # Near black
COLOR_GRID = (32, 40, 52)
COLOR_DRONE = (0, 229, 255)  # Cyan
COLOR_PATH = (80, 220, 120)  # Green
COLOR_GOAL = (255, 220, 0)  # Yellow
COLOR_TREE_EDGE = (70, 90, 140)
COLOR_SENSOR_RAY = (80, 120, 255)
COLOR_SENSOR_HIT = (255, 80, 80)
COLOR_DYNAMIC = (255, 140, 0)  # Orange
COLOR_TEXT = (255, 255, 255)
COLOR_LABEL = (180, 180, 180)
COLOR_BORDER = (200, 200, 200)
COLOR_PANEL_BG = (40, 40, 40)
COLOR_GREEN = (0, 255, 0)
COLOR_RED = (255, 0, 0)
COLOR_WHITE = (255, 255, 255)

# Cosmetic only - never read by planning code
CATEGORY_COLORS = {
    'building': (90, 100, 120),
    'tree': (40, 110, 60),
    'tower': (130, 90, 140),
    'container': (150, 110, 60),
    'helipad': (100, 100, 100),
}

NAV_STATE_COLORS = {
    'idle': (180, 180, 180),
    'planning': (100, 200, 255),
    'navigating': (0, 255, 0),
    'avoiding': (255, 100, 0),
    'landing': (255, 255, 0),
}

# ==================== Visualization ====================
GRID_LINE_SPACING = 40  # pixels
HEATMAP_ALPHA = 90  # 0-255

# ==================== UI Font Settings ====================
FONT_TITLE_SIZE = 16
FONT_LABEL_SIZE = 14
FONT_VALUE_SIZE = 18
FONT_SMALL_SIZE = 12
FONT_FAMILY = 'monospace'

# ==================== Instrument Panel Layout ====================
INSTRUMENT_PANEL_PADDING = 10  # Pixels between sections
INSTRUMENT_LINE_SPACING = 20  # Pixels between lines
INSTRUMENT_SECTION_SPACING = 30  # Pixels between sections

# ==================== Debug Settings ====================
DEBUG_MODE = False  # Enable verbose planner prints
SHOW_FPS = True  # Show FPS counter

# ==================== Coordinate System Notes ====================
# Canvas coordinates: origin top-left, x to the right, y downward
# Angles: radians, 0 = +x, positive toward +y (clockwise on screen)
# Velocities: pixels per simulation tick
