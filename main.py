"""
Drone Navigation Simulator - Main Entry Point
Integrates all components and runs the main game loop.
"""

import argparse
import pygame
import sys

# Import configuration
from config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    CANVAS_WIDTH,
    CANVAS_HEIGHT,
    INSTRUMENT_WIDTH,
    FPS,
    ALGORITHMS,
    DEFAULT_ALGORITHM,
    APF_SAMPLE_SPACING,
    LAYOUTS,
    SHOW_FPS,
    COLOR_WHITE
)

# Import core components
from core import simulation
from core.simulation import SimulationSettings

# Import presets
from scenarios.layouts import create_layout

# Import UI components
from ui.map_view import MapView
from ui.instruments import InstrumentPanel, ControlsHelpOverlay
from ui.controls import ControlHandler


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Drone navigation simulator')
    parser.add_argument('--layout', choices=list(LAYOUTS.keys()), default='Random',
                        help='Obstacle layout (default: Random)')
    parser.add_argument('--algorithm', choices=ALGORITHMS, default=DEFAULT_ALGORITHM,
                        help=f'Initial planner (default: {DEFAULT_ALGORITHM})')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for layouts and sampling planners')
    return parser.parse_args(argv)


def main(argv=None):
    """Main simulator entry point."""
    args = parse_args(argv)

    print("=" * 60)
    print("Drone Navigation Simulator")
    print("=" * 60)

    # Initialize Pygame
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    pygame.display.set_caption("Drone Navigation Simulator")
    clock = pygame.time.Clock()

    print(f"\nStarting simulation:")
    print(f"  Layout: {args.layout} - {LAYOUTS[args.layout]['description']}")
    print(f"  Algorithm: {args.algorithm}")
    print(f"  Seed: {args.seed if args.seed is not None else 'random'}")

    # Create simulation
    print("Creating simulation...")
    settings = SimulationSettings(algorithm=args.algorithm)
    layout = create_layout(args.layout)
    state = simulation.create_simulation(settings, seed=args.seed, generate=layout is None)
    if layout is not None:
        simulation.load_layout(state, layout.build(state.width, state.height))

    field = state.obstacle_field
    print(f"  Obstacles: {len(field.static_obstacles())} static, {len(field.dynamic_obstacles())} dynamic")

    # Create UI components
    print("Initializing UI...")
    map_view = MapView(CANVAS_WIDTH, CANVAS_HEIGHT)
    instruments = InstrumentPanel(CANVAS_WIDTH, 0, INSTRUMENT_WIDTH, SCREEN_HEIGHT)
    controls = ControlHandler(state, map_view, layout)
    help_overlay = ControlsHelpOverlay()
    fps_font = pygame.font.SysFont('monospace', 14)

    print("\n" + "=" * 60)
    print("Simulation ready! Click the canvas to set a goal.")
    print("Press H for help, ESC to quit.")
    print("=" * 60 + "\n")

    # Main game loop
    running = True
    while running:
        clock.tick(FPS)

        # ===== EVENT HANDLING =====
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break

            # Instrument panel buttons take priority
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if instruments.handle_button_click(event.pos, controls):
                    continue

            result = controls.handle_event(event)
            if result == 'quit':
                running = False
                break

        if not running:
            break

        instruments.update_button_hover(pygame.mouse.get_pos())

        # ===== SIMULATION STEP (one per frame) =====
        if not controls.paused:
            simulation.step(state)

        # ===== RENDERING =====
        canvas = pygame.Surface((CANVAS_WIDTH, CANVAS_HEIGHT))
        map_view.render_background(canvas)

        if controls.show_heatmap:
            samples = simulation.potential_samples(state, APF_SAMPLE_SPACING)
            map_view.render_heatmap(canvas, samples, APF_SAMPLE_SPACING)

        if controls.show_tree_edges and state.last_plan is not None:
            map_view.render_tree_edges(canvas, state.last_plan.edges)

        map_view.render_obstacles(canvas, state.obstacle_field, controls.show_inflation)
        map_view.render_path(canvas, state.path, state.path_index)
        map_view.render_goal(canvas, state.goal)

        if controls.show_sensor_rays:
            map_view.render_sensor_rays(canvas, state.drone, state.readings)

        map_view.render_drone(canvas, state.drone)

        if state.stats.stalled:
            map_view.render_stall_warning(canvas, state.drone)

        screen.blit(canvas, (0, 0))

        instruments.render(screen, state, controls.paused)

        if controls.show_help:
            help_overlay.render(screen)

        if SHOW_FPS:
            fps_text = fps_font.render(f"FPS: {int(clock.get_fps())}", True, COLOR_WHITE)
            screen.blit(fps_text, (10, 10))

        pygame.display.flip()

    # ===== CLEANUP =====
    print("\nShutting down...")
    pygame.quit()
    print("Simulator closed")


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        pygame.quit()
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ Fatal error: {e}")
        import traceback
        traceback.print_exc()
        pygame.quit()
        sys.exit(1)
