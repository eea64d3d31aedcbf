"""
Test script for the session, settings and snapshot export

Covers:
1. VisualizerSession grid edits and obstacle generation
2. RunStats numbers and status messages
3. Settings load/save with defaults
4. PNG rendering and snapshot cleanup

Usage:
    python tests/test_session.py
    pytest tests/test_session.py
"""

import json
import logging
import sys
import tempfile
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pathviz import snapshot
from pathviz.animation import AnimationState
from pathviz.grid import (
    ObstacleMode,
    clone_grid,
    create_grid,
    default_endpoints,
    generate_random_obstacles,
    place_endpoints,
    validate_path,
)
from pathviz.session import (
    STATUS_FOUND,
    STATUS_NOT_FOUND,
    STATUS_READY,
    STATUS_RUNNING,
    VisualizerSession,
)
from pathviz.settings import (
    DEFAULT_SETTINGS,
    apply_log_level,
    is_debug_enabled,
    load_settings,
    save_settings,
)
from pathviz.timers import ManualTimer


def hex_to_rgb(color):
    color = color.lstrip("#")
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))


def test_session_defaults():
    print("\n" + "="*60)
    print("TEST: Session defaults")
    print("="*60)

    session = VisualizerSession(ManualTimer())
    print(f"  Grid: {session.grid}")

    assert session.grid_size == 7
    assert session.start == (1, 1)
    assert session.goal == (5, 5)
    assert session.grid.walls == []
    assert session.obstacle_mode is ObstacleMode.MANUAL
    assert session.scheduler.state == AnimationState.IDLE
    assert session.scheduler.grid == session.grid

    print("  [PASS] Session defaults")


def test_set_grid_size():
    session = VisualizerSession(ManualTimer())
    session.toggle_wall((0, 0))

    assert session.set_grid_size(3) == 5
    assert (session.grid.rows, session.grid.cols) == (5, 5)
    assert (session.start, session.goal) == default_endpoints(5)
    assert session.grid.walls == []

    assert session.set_grid_size(40) == 20
    assert session.goal == (18, 18)

    # Resizing mid-run resets the scheduler
    session.scheduler.play()
    session.set_grid_size(9)
    assert session.scheduler.state == AnimationState.IDLE
    assert session.scheduler.display_grid.rows == 9


def test_session_edits():
    print("\n" + "="*60)
    print("TEST: Session edits")
    print("="*60)

    timer = ManualTimer()
    session = VisualizerSession(timer, grid_size=5)

    assert session.move_start((0, 0))
    assert session.start == (0, 0)
    assert not session.move_start(session.goal)
    assert session.move_goal((4, 4))
    assert session.goal == (4, 4)
    assert not session.move_goal((0, 0))

    assert session.toggle_wall((2, 2))
    assert session.grid.is_wall((2, 2))
    assert not session.toggle_wall((0, 0))
    assert session.scheduler.display_grid.cell(2, 2).is_wall

    # Edits during a run reset it first
    session.scheduler.play()
    timer.fire()
    assert session.toggle_wall((2, 3))
    assert session.scheduler.state == AnimationState.IDLE
    assert not timer.is_active

    # Even a refused edit stops the run
    session.scheduler.play()
    assert not session.toggle_wall((0, 0))
    assert session.scheduler.state == AnimationState.IDLE

    print("  [PASS] Session edits")


def test_session_obstacles():
    print("\n" + "="*60)
    print("TEST: Session obstacles")
    print("="*60)

    session = VisualizerSession(ManualTimer())
    base = place_endpoints(create_grid(7, 7), (1, 1), (5, 5))

    reachable = session.generate_obstacles(ObstacleMode.RANDOM, 0.3, 42)
    expected = generate_random_obstacles(base, 0.3, 42)
    print(f"  Random walls: {len(session.grid.walls)}, reachable={reachable}")

    assert session.grid.walls == expected.walls
    assert reachable == validate_path(expected)
    assert session.obstacle_mode is ObstacleMode.RANDOM
    assert session.obstacle_seed == 42

    # Omitted arguments keep the current settings
    session.generate_obstacles()
    assert session.grid.walls == expected.walls

    # Full density walls in everything but the endpoints
    assert not session.generate_obstacles("random", 1.0, 1)
    assert len(session.grid.walls) == 47
    assert not session.grid.is_wall(session.start)

    assert session.generate_obstacles("manual")
    assert session.grid.walls == []

    # Density is clamped
    session.generate_obstacles("random", 7.5, 3)
    assert session.obstacle_density == 1.0

    print("  [PASS] Session obstacles")


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__(logging.WARNING)
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_session_obstacle_mode_enum():
    """Enum members are accepted as-is, without the unknown-mode fallback."""
    obstacle_logger = logging.getLogger("pathviz.grid.obstacles")
    handler = RecordingHandler()
    obstacle_logger.addHandler(handler)
    try:
        session = VisualizerSession(ManualTimer(), obstacle_mode=ObstacleMode.RANDOM, obstacle_seed=42)
        assert session.obstacle_mode is ObstacleMode.RANDOM
        assert session.grid.walls

        session.generate_obstacles(ObstacleMode.MAZE, seed=5)
        assert session.obstacle_mode is ObstacleMode.MAZE

        VisualizerSession(ManualTimer())
    finally:
        obstacle_logger.removeHandler(handler)

    assert handler.records == []


def test_run_stats():
    print("\n" + "="*60)
    print("TEST: Run statistics")
    print("="*60)

    timer = ManualTimer()
    session = VisualizerSession(timer, grid_size=5, algorithm="bfs")

    stats = session.stats()
    assert stats.status_message == STATUS_READY
    assert stats.path_found is None
    assert stats.efficiency_percent == 0.0
    assert stats.heuristic_name is None

    session.scheduler.play()
    timer.fire()
    stats = session.stats()
    assert stats.status_message == STATUS_RUNNING
    assert stats.current_step == 1
    assert 0 < stats.progress_percent < 100

    timer.run_until_idle()
    stats = session.stats()
    result = session.scheduler.result
    print(f"  {stats}")

    assert stats.status_message == STATUS_FOUND
    assert stats.path_found
    assert stats.is_complete
    assert stats.progress_percent == 100.0
    assert stats.nodes_visited == result.nodes_visited
    assert stats.path_length == result.path_length == 5
    assert abs(stats.efficiency_percent - 5 / result.nodes_visited * 100) < 1e-9
    assert stats.algorithm_name == "BFS"
    assert stats.status_color == "#28a745"

    # Paused is not complete, so it reads as ready
    session.scheduler.step_backward()
    assert session.stats().status_message == STATUS_READY

    session.generate_obstacles("random", 1.0, 1)
    session.scheduler.play()
    timer.run_until_idle()
    stats = session.stats()
    assert stats.status_message == STATUS_NOT_FOUND
    assert stats.path_found is False
    assert stats.path_length == 0
    assert stats.efficiency_percent == 0.0

    session.scheduler.set_algorithm("astar")
    assert session.stats().heuristic_name == "manhattan"

    print("  [PASS] Run statistics")


def test_session_from_settings():
    settings = DEFAULT_SETTINGS.copy()
    session = VisualizerSession.from_settings(settings, ManualTimer())
    assert session.grid_size == 7
    assert session.scheduler.speed_ms == 100
    assert session.to_settings() == {
        key: value for key, value in DEFAULT_SETTINGS.items() if key != "debug_enabled"
    }

    settings.update({"grid_size": 10, "algorithm": "greedy", "obstacle_mode": "random",
                     "obstacle_seed": 5, "animation_speed_ms": 2})
    session = VisualizerSession.from_settings(settings, ManualTimer())
    assert session.grid_size == 10
    assert session.scheduler.speed_ms == 10
    assert session.to_settings()["algorithm"] == "greedy"
    assert session.grid.walls, "random mode generates walls on start-up"


def test_settings_roundtrip():
    print("\n" + "="*60)
    print("TEST: Settings")
    print("="*60)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"

        # Missing file
        assert load_settings(path) == DEFAULT_SETTINGS
        assert load_settings(path) is not DEFAULT_SETTINGS

        # Partial file merges over defaults
        path.write_text(json.dumps({"grid_size": 12, "algorithm": "astar"}), encoding="utf-8")
        loaded = load_settings(path)
        assert loaded["grid_size"] == 12
        assert loaded["algorithm"] == "astar"
        assert loaded["heuristic"] == "manhattan"

        # Save and load back
        loaded["obstacle_seed"] = 99
        save_settings(loaded, path)
        assert load_settings(path) == loaded

        # Broken files fall back to defaults
        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

        # Unwritable location is logged, not raised
        save_settings(loaded, Path(tmp) / "missing" / "config.json")

    print("  [PASS] Settings")


def test_debug_setting():
    """Saved debug_enabled drives the log level; the CLI flag wins when set."""
    assert not is_debug_enabled(DEFAULT_SETTINGS)
    assert is_debug_enabled(DEFAULT_SETTINGS, cli_debug=True)
    assert is_debug_enabled({"debug_enabled": True})
    assert is_debug_enabled({}) is False

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"
        settings = load_settings(path)
        settings["debug_enabled"] = True
        save_settings(settings, path)
        assert is_debug_enabled(load_settings(path))

    root = logging.getLogger()
    level = root.level
    try:
        apply_log_level(True)
        assert root.level == logging.DEBUG
        apply_log_level(False)
        assert root.level == logging.INFO
    finally:
        root.setLevel(level)


def test_render_grid():
    print("\n" + "="*60)
    print("TEST: Snapshot rendering")
    print("="*60)

    grid = place_endpoints(create_grid(5, 6), (0, 0), (4, 5))
    display = clone_grid(grid)
    display.cells["is_wall"][display.index((2, 2))] = True
    display.cells["is_visited"][display.index((1, 0))] = True
    display.cells["is_path"][display.index((0, 1))] = True

    image = snapshot.render_grid(display, cell_size=10)
    print(f"  Image size: {image.size}")
    assert image.size == (60, 50)

    def pixel(row, col):
        return image.getpixel((col * 10 + 5, row * 10 + 5))

    assert pixel(0, 0) == hex_to_rgb("#4CAF50")
    assert pixel(4, 5) == hex_to_rgb("#f44336")
    assert pixel(2, 2) == hex_to_rgb("#000000")
    assert pixel(1, 0) == hex_to_rgb("#81C784")
    assert pixel(0, 1) == hex_to_rgb("#FFEB3B")
    assert pixel(3, 3) == hex_to_rgb("#FFFFFF")

    print("  [PASS] Snapshot rendering")


def test_save_snapshot_cleanup():
    timer = ManualTimer()
    session = VisualizerSession(timer, grid_size=5, algorithm="astar")
    session.scheduler.play()
    timer.run_until_idle()

    original_dir, original_max = snapshot.SNAPSHOT_DIR, snapshot.MAX_SNAPSHOTS
    with tempfile.TemporaryDirectory() as tmp:
        snapshot.SNAPSHOT_DIR = Path(tmp) / "snapshots"
        snapshot.MAX_SNAPSHOTS = 2
        try:
            grid = session.scheduler.display_grid
            saved = snapshot.save_snapshot(grid, stats=session.stats())
            assert saved.exists()
            assert saved.parent == snapshot.SNAPSHOT_DIR

            for i in range(3):
                snapshot.save_snapshot(grid, snapshot.SNAPSHOT_DIR / f"snapshot_{i}.png")
            remaining = list(snapshot.SNAPSHOT_DIR.glob("snapshot_*.png"))
            assert len(remaining) == 2
        finally:
            snapshot.SNAPSHOT_DIR, snapshot.MAX_SNAPSHOTS = original_dir, original_max


def test_snapshot_with_stats_caption():
    from PIL import Image

    timer = ManualTimer()
    session = VisualizerSession(timer, grid_size=5)
    with tempfile.TemporaryDirectory() as tmp:
        original_dir = snapshot.SNAPSHOT_DIR
        snapshot.SNAPSHOT_DIR = Path(tmp)
        try:
            path = snapshot.save_snapshot(session.scheduler.display_grid,
                                          Path(tmp) / "snapshot_caption.png",
                                          stats=session.stats())
            with Image.open(path) as image:
                assert image.size == (5 * snapshot.DEFAULT_CELL_SIZE,
                                      5 * snapshot.DEFAULT_CELL_SIZE + snapshot.HEADER_HEIGHT)
        finally:
            snapshot.SNAPSHOT_DIR = original_dir


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# SESSION / SETTINGS / SNAPSHOT TESTS")
    print("#"*60)

    tests = [
        ("Session defaults", test_session_defaults),
        ("Grid size", test_set_grid_size),
        ("Session edits", test_session_edits),
        ("Session obstacles", test_session_obstacles),
        ("Obstacle mode enum", test_session_obstacle_mode_enum),
        ("Run stats", test_run_stats),
        ("From settings", test_session_from_settings),
        ("Settings", test_settings_roundtrip),
        ("Debug setting", test_debug_setting),
        ("Render grid", test_render_grid),
        ("Snapshot cleanup", test_save_snapshot_cleanup),
        ("Snapshot caption", test_snapshot_with_stats_caption),
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
