"""
Compare all search algorithms on one seeded grid.

Prints visit counts, path lengths and timings side by side, then replays
one algorithm headlessly to check the scheduler ends in the same place.

Usage:
    python tools/compare_algorithms.py
    python tools/compare_algorithms.py --size 15 --mode maze --seed 7
    python tools/compare_algorithms.py --heuristic euclidean --replay astar
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pathviz.grid import ObstacleMode, validate_path
from pathviz.search import Heuristic, get_algorithm_info, run_search
from pathviz.session import VisualizerSession
from pathviz.timers import ManualTimer


def print_grid(session: VisualizerSession):
    """Print the role grid as text: S start, G goal, # wall."""
    grid = session.grid
    for row in grid.to_rows():
        line = ""
        for cell in row:
            if cell.is_start:
                line += "S"
            elif cell.is_goal:
                line += "G"
            elif cell.is_wall:
                line += "#"
            else:
                line += "."
        print(f"  {line}")


def compare(session: VisualizerSession, heuristic: str):
    """Run every algorithm once and print a table."""
    grid = session.grid
    print(f"\n  {'Algorithm':<22} {'Visited':>8} {'Path':>6} {'Time (ms)':>10}  Optimal")
    print(f"  {'-'*22} {'-'*8} {'-'*6} {'-'*10}  {'-'*7}")

    for info in get_algorithm_info():
        result = run_search(grid, grid.start, grid.goal, info["name"], heuristic)
        path = str(result.path_length) if result.path_found else "-"
        print(f"  {info['label']:<22} {result.nodes_visited:>8} {path:>6} "
              f"{result.metrics.execution_time_ms:>10.3f}  {'yes' if info['optimal'] else 'no'}")


def replay(session: VisualizerSession, timer: ManualTimer, algorithm: str):
    """Animate one algorithm with a manual timer and print final stats."""
    scheduler = session.scheduler
    scheduler.set_algorithm(algorithm)
    scheduler.play()
    fires = timer.run_until_idle()

    stats = session.stats()
    print(f"\n  Replay {stats.algorithm_name}: {fires} timer fires, "
          f"{timer.elapsed_ms} ms simulated")
    print(f"  State: {scheduler.get_state_string()}, path shown: {scheduler.path_shown}")
    print(f"  {stats.status_message} (efficiency {stats.efficiency_percent:.1f}%)")


def main():
    parser = argparse.ArgumentParser(description="Compare search algorithms on a seeded grid")
    parser.add_argument("--size", type=int, default=10, help="Grid side length (5-20)")
    parser.add_argument("--mode", default="random", choices=[m.value for m in ObstacleMode])
    parser.add_argument("--density", type=float, default=0.3)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--heuristic", default="manhattan", choices=[h.value for h in Heuristic])
    parser.add_argument("--replay", default=None, help="Algorithm to replay after the table")
    parser.add_argument("--debug", action="store_true", help="Show debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    timer = ManualTimer()
    session = VisualizerSession(timer, grid_size=args.size, heuristic=args.heuristic)
    session.generate_obstacles(args.mode, args.density, args.seed)

    print("\n" + "="*60)
    print(f"GRID {session.grid_size}x{session.grid_size} "
          f"({args.mode}, density={args.density}, seed={args.seed})")
    print("="*60)
    print_grid(session)
    print(f"\n  Reachable: {validate_path(session.grid)}")

    compare(session, args.heuristic)

    if args.replay:
        replay(session, timer, args.replay)

    return 0


if __name__ == "__main__":
    sys.exit(main())
