"""
Navigation Controller
State machine and kinematic integrator driving the drone.

States: idle -> planning -> navigating <-> avoiding -> idle
(landing is reserved and never entered).
"""

import math

from config import (
    INFLATION_MARGIN,
    GOAL_OFFSET_MARGIN,
    SAFE_DISTANCE,
    AVOID_RECOVERY_FACTOR,
    AVOID_GAIN,
    ARRIVAL_THRESHOLD,
    WAYPOINT_RADIUS,
    DRONE_MAX_SPEED,
    DRONE_ACCELERATION,
    DRONE_DAMPING,
    DRONE_TURN_RATE,
    DRONE_MIN_HEADING_SPEED,
    BATTERY_DRAIN_PER_SPEED,
    APF_STALL_EPSILON,
    APF_STALL_TICKS,
)
from core.drone import NavState
from core.geometry import (
    angle_difference,
    clamp,
    clamp_magnitude,
    distance,
    magnitude,
    point_in_rect,
    unit_vector,
    wrap_angle,
)
from planning.base_planner import PlanningContext
from planning.utils import in_collision, line_of_sight, obstacle_rects


class NavigationController:
    """
    Consumes planner output and sensor sweeps to steer the drone.

    The controller holds tuning only; every piece of mutable state lives in
    the SimulationState passed to each call.
    """

    def __init__(self, config=None):
        """
        Initialize controller.

        Args:
            config: Optional dict overriding tuning constants
                (safe_distance, arrival_threshold, max_speed, ...)
        """
        config = config if config is not None else {}
        self.inflation = config.get('inflation', INFLATION_MARGIN)
        self.goal_offset = config.get('goal_offset', GOAL_OFFSET_MARGIN)
        self.safe_distance = config.get('safe_distance', SAFE_DISTANCE)
        self.recovery_factor = config.get('recovery_factor', AVOID_RECOVERY_FACTOR)
        self.avoid_gain = config.get('avoid_gain', AVOID_GAIN)
        self.arrival_threshold = config.get('arrival_threshold', ARRIVAL_THRESHOLD)
        self.waypoint_radius = config.get('waypoint_radius', WAYPOINT_RADIUS)
        self.max_speed = config.get('max_speed', DRONE_MAX_SPEED)
        self.acceleration = config.get('acceleration', DRONE_ACCELERATION)
        self.damping = config.get('damping', DRONE_DAMPING)
        self.turn_rate = config.get('turn_rate', DRONE_TURN_RATE)
        self.battery_drain = config.get('battery_drain', BATTERY_DRAIN_PER_SPEED)
        self.stall_epsilon = config.get('stall_epsilon', APF_STALL_EPSILON)
        self.stall_ticks = config.get('stall_ticks', APF_STALL_TICKS)

    # ==================== Goal Requests ====================

    def resolve_goal(self, x, y, obstacles, width, height):
        """
        Turn a click into a collision-free goal.

        If the click lies inside an obstacle's inflated bound, candidates are
        placed perpendicular to each side of that obstacle, just outside the
        inflated bound. The candidate nearest to the click that is inside the
        canvas and clear of every inflated bound wins.

        Args:
            x, y: Requested point in canvas pixels
            obstacles: Static obstacles
            width, height: Canvas size

        Returns:
            (x, y) goal, or None if no valid goal exists
        """
        x = clamp(x, 0.0, width)
        y = clamp(y, 0.0, height)
        rects = obstacle_rects(obstacles, self.inflation)

        blocking = next((o for o in obstacles if point_in_rect(x, y, o.inflated(self.inflation))), None)
        if blocking is None:
            return (x, y)

        offset = self.inflation + self.goal_offset
        left, top, right, bottom = blocking.bounds()
        candidates = [
            (left - offset, y),
            (right + offset, y),
            (x, top - offset),
            (x, bottom + offset),
        ]

        valid = [c for c in candidates
                 if 0.0 <= c[0] <= width and 0.0 <= c[1] <= height and not in_collision(c, rects)]
        if not valid:
            return None

        return min(valid, key=lambda c: distance(x, y, c[0], c[1]))

    def request_goal(self, state, x, y, planner):
        """
        Handle a goal request synchronously.

        Replaces any in-flight plan. An invalid request (no collision-free
        goal near the click) changes nothing.

        Args:
            state: SimulationState
            x, y: Requested point
            planner: BasePlanner used for this goal

        Returns:
            True if the drone is now navigating toward the goal
        """
        statics = state.obstacle_field.static_obstacles()
        goal = self.resolve_goal(x, y, statics, state.width, state.height)
        if goal is None:
            print(f"⚠ Goal ({x:.0f}, {y:.0f}) is blocked with no free spot nearby - ignored")
            return False

        clamped = (clamp(x, 0.0, state.width), clamp(y, 0.0, state.height))
        if goal != clamped:
            print(f"Goal ({x:.0f}, {y:.0f}) inside obstacle - moved to ({goal[0]:.0f}, {goal[1]:.0f})")
        elif clamped != (x, y):
            print(f"Goal ({x:.0f}, {y:.0f}) outside canvas - clamped to ({goal[0]:.0f}, {goal[1]:.0f})")

        drone = state.drone
        state.goal = goal
        state.path = []
        state.path_index = 0
        state.active_planner = planner
        state.stall_ticks = 0
        state.last_force = None
        drone.nav_state = NavState.PLANNING

        context = PlanningContext(
            start=drone.position,
            goal=goal,
            obstacles=statics,
            width=state.width,
            height=state.height,
            inflation=self.inflation,
        )
        result = planner.run(context)
        state.last_plan = result

        if result.continuous:
            drone.nav_state = NavState.NAVIGATING
            print(f"{planner.get_name()}: steering toward ({goal[0]:.0f}, {goal[1]:.0f})")
            return True

        path = list(result.path)
        if not path and planner.allows_direct_fallback:
            rects = obstacle_rects(statics, self.inflation)
            if line_of_sight(drone.position, goal, rects):
                path = [drone.position, goal]
                print(f"{planner.get_name()}: no grid route, using direct line of sight")

        if not path:
            print(f"⚠ {planner.get_name()}: no route to ({goal[0]:.0f}, {goal[1]:.0f}) "
                  f"after {result.nodes_explored} nodes - goal abandoned")
            self.clear_goal(state)
            return False

        state.path = path
        state.path_index = 1 if len(path) > 1 else 0
        drone.nav_state = NavState.NAVIGATING
        print(f"{planner.get_name()}: {len(path)} waypoints, {result.nodes_explored} nodes, "
              f"{result.compute_time_ms:.1f} ms")
        return True

    def clear_goal(self, state):
        """Drop goal and path and return to idle."""
        state.goal = None
        state.path = []
        state.path_index = 0
        state.active_planner = None
        state.stall_ticks = 0
        state.last_force = None
        state.drone.nav_state = NavState.IDLE

    # ==================== Per-Tick Update ====================

    def update(self, state, readings):
        """
        Advance the drone one tick.

        1. State transitions from the sensor sweep
        2. Steering from the active planner (waypoint pull or field force)
        3. Reactive avoidance while avoiding
        4. Kinematics: damping, speed limit, integration, heading, battery
        5. Arrival check

        Args:
            state: SimulationState
            readings: Current sensor sweep
        """
        drone = state.drone
        active = drone.nav_state in (NavState.NAVIGATING, NavState.AVOIDING) and state.goal is not None

        if active:
            self.update_nav_state(drone, readings)
            self._steer(state)
            if drone.nav_state == NavState.AVOIDING:
                self.avoid(drone, readings)
        else:
            state.stall_ticks = 0
            state.last_force = None

        self.integrate(drone, state.settings.speed_multiplier, state.width, state.height)

        if active:
            self._check_arrival(state)

    def update_nav_state(self, drone, readings):
        """Switch between navigating and avoiding with hysteresis."""
        if not readings:
            return
        min_distance = min(r.distance for r in readings)

        if drone.nav_state == NavState.NAVIGATING and min_distance < self.safe_distance:
            drone.nav_state = NavState.AVOIDING
        elif (drone.nav_state == NavState.AVOIDING and
              min_distance > self.safe_distance * self.recovery_factor):
            drone.nav_state = NavState.NAVIGATING

    def _steer(self, state):
        drone = state.drone
        planner = state.active_planner

        if planner is not None and planner.continuous:
            fx, fy = planner.compute_force(drone.x, drone.y, state.goal, state.obstacle_field.all_obstacles())
            drone.vx += fx
            drone.vy += fy
            state.last_force = (fx, fy)

            # Local minimum monitor (observability only)
            if magnitude(fx, fy) < self.stall_epsilon:
                state.stall_ticks += 1
            else:
                state.stall_ticks = 0
            return

        target = self._current_target(state)
        ux, uy = unit_vector(target[0] - drone.x, target[1] - drone.y)
        drone.vx += ux * self.acceleration
        drone.vy += uy * self.acceleration

    def _current_target(self, state):
        """Next waypoint; the cursor skips waypoints already within reach."""
        drone = state.drone
        while (state.path_index < len(state.path) and
               distance(drone.x, drone.y, *state.path[state.path_index]) < self.waypoint_radius):
            state.path_index += 1

        if state.path_index < len(state.path):
            return state.path[state.path_index]
        return state.goal

    def avoid(self, drone, readings):
        """Push away from every ray closer than the safe distance."""
        for reading in readings:
            if reading.distance >= self.safe_distance:
                continue
            urgency = (self.safe_distance - reading.distance) / self.safe_distance
            drone.vx -= math.cos(reading.angle) * urgency * self.avoid_gain
            drone.vy -= math.sin(reading.angle) * urgency * self.avoid_gain

    def integrate(self, drone, speed_multiplier, width, height):
        """
        Kinematic update, applied every tick in every state.

        Args:
            drone: Drone
            speed_multiplier: User speed setting scaling the speed limit
            width, height: Canvas size for position clamping
        """
        drone.vx *= self.damping
        drone.vy *= self.damping
        drone.vx, drone.vy = clamp_magnitude(drone.vx, drone.vy, self.max_speed * speed_multiplier)

        old_x, old_y = drone.x, drone.y
        drone.x = clamp(drone.x + drone.vx, 0.0, width)
        drone.y = clamp(drone.y + drone.vy, 0.0, height)

        speed = drone.speed
        if speed > DRONE_MIN_HEADING_SPEED:
            drone.target_heading = math.atan2(drone.vy, drone.vx)
        drone.heading = wrap_angle(
            drone.heading + angle_difference(drone.heading, drone.target_heading) * self.turn_rate
        )

        drone.drain_battery(speed * self.battery_drain)
        drone.distance_traveled += distance(old_x, old_y, drone.x, drone.y)
        drone.ticks += 1

    def _check_arrival(self, state):
        drone = state.drone
        if state.goal is None:
            return
        if distance(drone.x, drone.y, state.goal[0], state.goal[1]) < self.arrival_threshold:
            print(f"✓ Arrived at ({state.goal[0]:.0f}, {state.goal[1]:.0f}) - battery {drone.battery:.1f}%")
            self.clear_goal(state)

    def is_stalled(self, state):
        """True once the field planner force stayed near zero long enough."""
        return state.stall_ticks >= self.stall_ticks
