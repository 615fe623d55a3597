#!/usr/bin/env python3
"""
Benchmark the navigation planners headlessly.

Runs every selected algorithm on the same seeded random layouts, flies the
drone until it arrives, gives up or runs out of ticks, and prints
aggregate statistics.

Usage:
    python scripts/benchmark_planners.py --trials 20
    python scripts/benchmark_planners.py --trials 50 --static 15 --dynamic 0
    python scripts/benchmark_planners.py --algorithms astar rrt --seed 7
"""

import argparse
import random
import sys
from pathlib import Path

import numpy as np

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import (
    ALGORITHMS,
    DEFAULT_STATIC_COUNT,
    DEFAULT_DYNAMIC_COUNT,
    STATIC_COUNT_RANGE,
    DYNAMIC_COUNT_RANGE,
)
from core import simulation
from core.drone import NavState
from core.geometry import distance
from core.simulation import SimulationSettings

MAX_TICKS = 3000
GOAL_EDGE_MARGIN = 20.0


def pick_goal(rng, width, height):
    """Random goal in the far half of the canvas."""
    x = rng.uniform(width * 0.6, width - GOAL_EDGE_MARGIN)
    y = rng.uniform(GOAL_EDGE_MARGIN, height - GOAL_EDGE_MARGIN)
    return (x, y)


def run_trial(algorithm, static_count, dynamic_count, seed, max_ticks=MAX_TICKS):
    """
    Fly one goal request to completion.

    Args:
        algorithm: Planner name
        static_count, dynamic_count: Obstacle counts
        seed: Seed shared by every algorithm for this trial
        max_ticks: Tick budget before the trial counts as a timeout

    Returns:
        Dict with success, nodes, compute_ms, path_distance, ticks, flown, stalled
    """
    settings = SimulationSettings(
        static_obstacle_count=static_count,
        dynamic_obstacle_count=dynamic_count,
        algorithm=algorithm,
    )
    state = simulation.create_simulation(settings, seed=seed)
    goal = pick_goal(random.Random(seed), state.width, state.height)

    result = {
        'success': False,
        'nodes': 0,
        'compute_ms': 0.0,
        'path_distance': 0.0,
        'ticks': 0,
        'flown': 0.0,
        'stalled': False,
    }

    accepted = simulation.request_goal(state, *goal)
    if state.last_plan is not None:
        result['nodes'] = state.last_plan.nodes_explored
        result['compute_ms'] = state.last_plan.compute_time_ms
    result['path_distance'] = state.stats.path_distance
    if not accepted:
        return result

    target = state.goal
    threshold = state.controller.arrival_threshold
    while state.tick < max_ticks and state.drone.nav_state != NavState.IDLE:
        stats = simulation.step(state)
        result['stalled'] = result['stalled'] or stats.stalled

    drone = state.drone
    result['ticks'] = state.tick
    result['flown'] = drone.distance_traveled
    result['success'] = (state.goal is None and
                         distance(drone.x, drone.y, target[0], target[1]) < threshold)
    return result


def summarize(results):
    """Aggregate a list of trial dicts."""
    successes = [r for r in results if r['success']]
    return {
        'trials': len(results),
        'success_rate': len(successes) / len(results) if results else 0.0,
        'nodes': float(np.mean([r['nodes'] for r in results])) if results else 0.0,
        'compute_ms': float(np.mean([r['compute_ms'] for r in results])) if results else 0.0,
        'path_distance': float(np.mean([r['path_distance'] for r in successes])) if successes else 0.0,
        'ticks': float(np.mean([r['ticks'] for r in successes])) if successes else 0.0,
        'flown': float(np.mean([r['flown'] for r in successes])) if successes else 0.0,
        'stalls': sum(1 for r in results if r['stalled']),
    }


def main():
    parser = argparse.ArgumentParser(
        description='Benchmark A*, RRT and APF on random obstacle layouts.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # 20 trials with default obstacle counts
    python scripts/benchmark_planners.py --trials 20

    # Static obstacles only, dense layout
    python scripts/benchmark_planners.py --static 20 --dynamic 0

    # Compare two planners with a fixed seed
    python scripts/benchmark_planners.py --algorithms astar rrt --seed 7
        """
    )

    parser.add_argument(
        '--trials',
        type=int,
        default=10,
        help='Number of random layouts per algorithm (default: 10)'
    )

    parser.add_argument(
        '--static',
        type=int,
        default=DEFAULT_STATIC_COUNT,
        help=f'Static obstacle count {STATIC_COUNT_RANGE} (default: {DEFAULT_STATIC_COUNT})'
    )

    parser.add_argument(
        '--dynamic',
        type=int,
        default=DEFAULT_DYNAMIC_COUNT,
        help=f'Dynamic obstacle count {DYNAMIC_COUNT_RANGE} (default: {DEFAULT_DYNAMIC_COUNT})'
    )

    parser.add_argument(
        '--algorithms',
        nargs='+',
        choices=ALGORITHMS,
        default=ALGORITHMS,
        help='Algorithms to compare (default: all)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=0,
        help='Base seed; trial i uses seed + i (default: 0)'
    )

    args = parser.parse_args()

    if args.trials < 1:
        print("Error: --trials must be at least 1")
        return 1

    print("=" * 60)
    print("Drone Navigation Simulator - Planner Benchmark")
    print("=" * 60)
    print(f"\nBenchmark configuration:")
    print(f"  Trials: {args.trials}")
    print(f"  Obstacles: {args.static} static, {args.dynamic} dynamic")
    print(f"  Algorithms: {', '.join(args.algorithms)}")
    print(f"  Seeds: {args.seed}..{args.seed + args.trials - 1}")

    summaries = {}
    for algorithm in args.algorithms:
        print(f"\nRunning {algorithm}...")
        results = []
        for trial in range(args.trials):
            result = run_trial(algorithm, args.static, args.dynamic, args.seed + trial)
            results.append(result)
            mark = "✓" if result['success'] else "⚠"
            print(f"  {mark} trial {trial + 1}: {result['nodes']} nodes, "
                  f"{result['compute_ms']:.1f} ms, {result['ticks']} ticks")
        summaries[algorithm] = summarize(results)

    # Summary
    print("\n" + "=" * 60)
    print("Benchmark complete!")
    print(f"{'algo':<8}{'success':>9}{'nodes':>9}{'ms':>9}{'path px':>10}{'flown px':>10}{'ticks':>9}{'stalls':>8}")
    for algorithm, s in summaries.items():
        print(f"{algorithm:<8}{s['success_rate'] * 100:>8.0f}%{s['nodes']:>9.0f}{s['compute_ms']:>9.1f}"
              f"{s['path_distance']:>10.0f}{s['flown']:>10.0f}{s['ticks']:>9.0f}{s['stalls']:>8}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
