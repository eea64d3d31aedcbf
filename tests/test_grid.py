"""
Test script for the grid model and obstacle generator

Covers:
1. Grid creation, indexing and neighbors
2. Role edits (start, goal, walls)
3. reset_grid / clone_grid isolation
4. Seeded obstacle generation and the reachability check

Usage:
    python tests/test_grid.py
    pytest tests/test_grid.py
"""

import math
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pathviz.grid import (
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    ObstacleMode,
    SeededRandom,
    clamp_coord,
    clamp_grid_size,
    clear_obstacles,
    clone_grid,
    create_grid,
    default_endpoints,
    generate_maze,
    generate_obstacles,
    generate_random_obstacles,
    move_goal,
    move_start,
    neighbors,
    place_endpoints,
    reset_grid,
    toggle_wall,
    validate_path,
)
from pathviz.grid.obstacles import LCG_MODULUS


def make_grid(size=5, start=(0, 0), goal=(4, 4)):
    return place_endpoints(create_grid(size, size), start, goal)


def test_create_grid():
    """Fresh grids have every cell at its defaults."""
    print("\n" + "="*60)
    print("TEST: Grid creation")
    print("="*60)

    grid = create_grid(4, 6)
    print(f"  Created: {grid}")

    assert grid.rows == 4 and grid.cols == 6
    assert grid.size == 24
    assert grid.start is None and grid.goal is None
    assert grid.walls == []

    cell = grid.cell(3, 5)
    assert cell.coord == (3, 5)
    assert not (cell.is_start or cell.is_goal or cell.is_wall or cell.is_visited or cell.is_path)
    assert math.isinf(cell.distance) and math.isinf(cell.g_score) and math.isinf(cell.f_score)
    assert cell.previous is None

    assert grid.index((2, 3)) == 15
    assert grid.coord(15) == (2, 3)

    with pytest.raises(ValueError):
        create_grid(0, 5)

    print("  [PASS] Grid creation tests")


def test_neighbors_order():
    """Neighbors come back up, down, left, right and stay in bounds."""
    print("\n" + "="*60)
    print("TEST: Neighbors")
    print("="*60)

    grid = create_grid(5, 5)

    corner = [c.coord for c in neighbors((0, 0), grid)]
    center = [c.coord for c in neighbors(grid.cell(2, 2), grid)]
    edge = [c.coord for c in neighbors((4, 2), grid)]
    print(f"  (0,0): {corner}")
    print(f"  (2,2): {center}")
    print(f"  (4,2): {edge}")

    assert corner == [(1, 0), (0, 1)]
    assert center == [(1, 2), (3, 2), (2, 1), (2, 3)]
    assert edge == [(3, 2), (4, 1), (4, 3)]

    # Walls are still neighbors; searches skip them
    walled = toggle_wall(grid, (1, 2))
    assert (1, 2) in [c.coord for c in neighbors((2, 2), walled)]

    with pytest.raises(ValueError):
        neighbors((5, 0), grid)

    print("  [PASS] Neighbor tests")


def test_role_edits():
    """Start, goal and wall edits return new grids and keep one of each role."""
    print("\n" + "="*60)
    print("TEST: Role edits")
    print("="*60)

    grid = make_grid()
    assert grid.start == (0, 0) and grid.goal == (4, 4)

    with pytest.raises(ValueError):
        place_endpoints(create_grid(5, 5), (1, 1), (1, 1))

    # Walls on destination cells are removed
    walled = toggle_wall(grid, (2, 2))
    assert walled.is_wall((2, 2))
    assert not grid.is_wall((2, 2)), "toggle_wall must not mutate its input"

    moved = move_start(walled, (2, 2))
    print(f"  Start moved onto wall: {moved}")
    assert moved.start == (2, 2)
    assert not moved.is_wall((2, 2))
    assert not moved.cell(0, 0).is_start
    assert int(moved.cells["is_start"].sum()) == 1

    moved_goal = move_goal(moved, (0, 4))
    assert moved_goal.goal == (0, 4)
    assert int(moved_goal.cells["is_goal"].sum()) == 1

    # Start onto goal (and the reverse) is refused
    assert move_start(grid, (4, 4)) is grid
    assert move_goal(grid, (0, 0)) is grid

    # Endpoints never become walls
    assert toggle_wall(grid, (0, 0)) is grid
    assert not toggle_wall(grid, (4, 4)).is_wall((4, 4))

    # Toggling twice restores the grid
    assert toggle_wall(toggle_wall(grid, (3, 1)), (3, 1)) == grid

    with pytest.raises(ValueError):
        move_start(grid, (-1, 0))
    with pytest.raises(ValueError):
        toggle_wall(grid, (0, 5))

    print("  [PASS] Role edit tests")


def test_reset_and_clone():
    """reset_grid clears search state only and is idempotent."""
    print("\n" + "="*60)
    print("TEST: reset_grid / clone_grid")
    print("="*60)

    grid = toggle_wall(make_grid(), (1, 1))
    dirty = clone_grid(grid)
    dirty.cells["is_visited"][:] = True
    dirty.cells["is_path"][3] = True
    dirty.cells["distance"][3] = 2.0
    dirty.cells["g_score"][3] = 2.0
    dirty.cells["f_score"][3] = 5.0
    dirty.cells["previous"][3] = 2

    assert not grid.cell(0, 3).is_visited, "clone must not share cell storage"

    clean = reset_grid(dirty)
    print(f"  Reset: {clean}")
    assert clean == grid
    assert reset_grid(clean) == clean
    assert clean.start == (0, 0) and clean.goal == (4, 4)
    assert clean.walls == [(1, 1)]
    assert dirty.cell(0, 3).is_path, "reset_grid must not mutate its input"

    print("  [PASS] reset/clone tests")


def test_clamping_and_defaults():
    print("\n" + "="*60)
    print("TEST: Clamping and default endpoints")
    print("="*60)

    assert clamp_grid_size(2) == MIN_GRID_SIZE
    assert clamp_grid_size(50) == MAX_GRID_SIZE
    assert clamp_grid_size(12) == 12

    assert clamp_coord((-3, 9), 5, 5) == (0, 4)
    assert clamp_coord((2, 2), 5, 5) == (2, 2)

    assert default_endpoints(5) == ((1, 1), (3, 3))
    assert default_endpoints(7) == ((1, 1), (5, 5))
    assert default_endpoints(20) == ((1, 1), (18, 18))

    print("  [PASS] Clamping tests")


def test_seeded_random():
    """Same seed, same sequence; zero folds to a valid state."""
    print("\n" + "="*60)
    print("TEST: SeededRandom")
    print("="*60)

    a = SeededRandom(42)
    b = SeededRandom(42)
    seq_a = [a.next() for _ in range(20)]
    seq_b = [b.next() for _ in range(20)]
    print(f"  First values (seed 42): {[round(v, 4) for v in seq_a[:4]]}")

    assert seq_a == seq_b
    assert all(0.0 <= v < 1.0 for v in seq_a)
    assert seq_a != [SeededRandom(43).next() for _ in range(20)]

    assert SeededRandom(0).state == LCG_MODULUS - 1
    assert SeededRandom(LCG_MODULUS).state == LCG_MODULUS - 1
    assert 0 < SeededRandom(-7).state < LCG_MODULUS

    rng = SeededRandom(1)
    assert all(0 <= rng.randint(7) < 7 for _ in range(100))

    print("  [PASS] SeededRandom tests")


def test_random_obstacles_deterministic():
    """7x7, seed 42, density 0.3: identical walls on every call."""
    print("\n" + "="*60)
    print("TEST: Random obstacles (seed=42, density=0.3, 7x7)")
    print("="*60)

    start, goal = default_endpoints(7)
    grid = place_endpoints(create_grid(7, 7), start, goal)

    first = generate_random_obstacles(grid, 0.3, 42)
    second = generate_random_obstacles(place_endpoints(create_grid(7, 7), start, goal), 0.3, 42)
    print(f"  Walls: {len(first.walls)}")

    assert first.walls == second.walls
    assert first.walls, "density 0.3 on 47 cells should place some walls"
    assert not first.is_wall(start) and not first.is_wall(goal)
    assert grid.walls == [], "generation must not mutate its input"

    assert generate_random_obstacles(grid, 0.0, 42).walls == []
    assert len(generate_random_obstacles(grid, 1.0, 42).walls) == 47

    # Existing walls are replaced, not added to
    pre_walled = toggle_wall(grid, (0, 6))
    assert generate_random_obstacles(pre_walled, 0.3, 42).walls == first.walls

    print("  [PASS] Random obstacle tests")


def test_maze_generation():
    print("\n" + "="*60)
    print("TEST: Maze generation")
    print("="*60)

    grid = place_endpoints(create_grid(7, 7), (1, 1), (5, 5))
    maze = generate_maze(grid, 42)
    again = generate_maze(grid, 42)
    print(f"  Walls: {len(maze.walls)}, reachable: {validate_path(maze)}")

    # 49 cells, 2 endpoints, at most floor(0.3 * 49) = 14 openings
    assert maze.walls == again.walls
    assert 33 <= len(maze.walls) <= 47
    assert not maze.is_wall((1, 1)) and not maze.is_wall((5, 5))

    print("  [PASS] Maze tests")


def test_generate_obstacles_modes():
    grid = toggle_wall(make_grid(), (2, 2))

    assert generate_obstacles(grid, ObstacleMode.MANUAL).walls == []
    assert clear_obstacles(grid).walls == []
    assert generate_obstacles(grid, ObstacleMode.RANDOM, 0.3, 7) == generate_random_obstacles(grid, 0.3, 7)
    assert generate_obstacles(grid, ObstacleMode.MAZE, seed=7) == generate_maze(grid, 7)

    assert ObstacleMode.parse("Maze") is ObstacleMode.MAZE
    assert ObstacleMode.parse("spiral") is ObstacleMode.MANUAL
    assert ObstacleMode.parse(ObstacleMode.MAZE) is ObstacleMode.MAZE
    assert ObstacleMode.parse(ObstacleMode.RANDOM) is ObstacleMode.RANDOM


def test_validate_path():
    """Flood fill agrees with obvious layouts."""
    print("\n" + "="*60)
    print("TEST: validate_path")
    print("="*60)

    grid = make_grid()
    assert validate_path(grid)

    blocked = grid
    for col in range(5):
        blocked = toggle_wall(blocked, (2, col))
    print(f"  Row 2 walled: reachable={validate_path(blocked)}")
    assert not validate_path(blocked)

    gap = toggle_wall(blocked, (2, 4))
    assert validate_path(gap)

    assert not validate_path(create_grid(5, 5)), "no endpoints, nothing to reach"
    assert validate_path(blocked, (3, 0), (4, 4))

    print("  [PASS] validate_path tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# GRID MODEL TESTS")
    print("#"*60)

    tests = [
        ("Grid creation", test_create_grid),
        ("Neighbors", test_neighbors_order),
        ("Role edits", test_role_edits),
        ("Reset/clone", test_reset_and_clone),
        ("Clamping", test_clamping_and_defaults),
        ("SeededRandom", test_seeded_random),
        ("Random obstacles", test_random_obstacles_deterministic),
        ("Maze", test_maze_generation),
        ("Obstacle modes", test_generate_obstacles_modes),
        ("validate_path", test_validate_path),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {name}: {e}")
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)

    all_passed = True
    for name, passed in results:
        status = "PASS" if passed else "FAIL"
        print(f"  {name}: [{status}]")
        if not passed:
            all_passed = False

    print()
    if all_passed:
        print("All tests PASSED!")
        return 0
    else:
        print("Some tests FAILED!")
        return 1


if __name__ == "__main__":
    sys.exit(main())
