"""
Pathfinding Visualizer - Entry Point

Launches the Control UI window and drives the animation scheduler from
the Qt event loop.

Example:
    python main.py
    python main.py --size 12 --algorithm astar
    python main.py --debug  # Verbose logging, per-tick messages
"""

import sys
import logging
import argparse
from typing import Optional

from PyQt5.QtWidgets import QApplication

from pathviz.animation import AnimationScheduler
from pathviz.control_ui import ControlWindow, EDIT_GOAL, EDIT_START
from pathviz.qt_timer import QtAnimationTimer
from pathviz.search import get_algorithm_names
from pathviz.session import VisualizerSession
from pathviz.settings import apply_log_level, is_debug_enabled, load_settings, save_settings
from pathviz.snapshot import save_snapshot


logger = logging.getLogger(__name__)


def setup_logging(debug: bool):
    """Configure logging - output to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("pathviz.log", mode='w', encoding='utf-8')  # File output
        ]
    )


class Application:
    """
    Main application controller.

    Owns the session and the window, connecting UI signals to session
    operations and scheduler updates back to the UI.
    """

    def __init__(self, grid_size: Optional[int] = None, algorithm: Optional[str] = None,
                 debug_mode: bool = False):
        """
        Initialize the application.

        Args:
            grid_size: Grid side length from the CLI (overrides saved setting)
            algorithm: Algorithm name from the CLI (overrides saved setting)
            debug_mode: Enable debug mode via CLI (overrides saved setting)
        """
        self.cli_debug_override = debug_mode
        self.window: Optional[ControlWindow] = None
        self.session: Optional[VisualizerSession] = None

        # Load persistent settings
        self.settings = load_settings()
        if grid_size is not None:
            self.settings["grid_size"] = grid_size
        if algorithm is not None:
            self.settings["algorithm"] = algorithm

        self.debug_mode = is_debug_enabled(self.settings, self.cli_debug_override)

    def setup(self):
        """Set up the UI, the session and connect signals."""
        self.window = ControlWindow()
        self.session = VisualizerSession.from_settings(
            self.settings, QtAnimationTimer(self.window)
        )
        self.session.scheduler.add_listener(self._on_scheduler_update)

        # Initialize UI state from settings
        self.window.set_preferences(self._current_settings())
        self.window.set_debug_enabled(self.debug_mode)

        # Connect UI signals to handlers
        self.window.play_requested.connect(self.session.scheduler.play)
        self.window.pause_requested.connect(self.session.scheduler.pause)
        self.window.step_forward_requested.connect(self.session.scheduler.step_forward)
        self.window.step_backward_requested.connect(self.session.scheduler.step_backward)
        self.window.reset_requested.connect(self.session.scheduler.reset)
        self.window.algorithm_changed.connect(self._on_algorithm_changed)
        self.window.heuristic_changed.connect(self._on_heuristic_changed)
        self.window.speed_changed.connect(self._on_speed_changed)
        self.window.grid_size_changed.connect(self._on_grid_size_changed)
        self.window.cell_edit_requested.connect(self._on_cell_edit)
        self.window.obstacles_requested.connect(self._on_obstacles_requested)
        self.window.snapshot_requested.connect(self._on_snapshot_requested)
        self.window.debug_toggled.connect(self._on_debug_toggled)
        self.window.shutdown_requested.connect(self._on_shutdown)

        self._on_scheduler_update(self.session.scheduler)

        logger.info(f"Application initialized: {self.session.grid_size}x{self.session.grid_size} grid")

    def _current_settings(self) -> dict:
        settings = dict(self.settings)
        settings.update(self.session.to_settings())
        return settings

    def _save(self):
        """Save current preferences to persistent settings."""
        self.settings = self._current_settings()
        save_settings(self.settings)

    def _on_scheduler_update(self, scheduler: AnimationScheduler):
        """Redraw grid and stats after every display change."""
        self.window.set_grid_states(scheduler.display_states())
        self.window.set_stats(self.session.stats())
        self.window.set_state(scheduler.state)

    def _on_algorithm_changed(self, name: str):
        """Handle algorithm selection change from UI."""
        self.session.scheduler.set_algorithm(name)
        self._save()

    def _on_heuristic_changed(self, name: str):
        self.session.scheduler.set_heuristic(name)
        self._save()

    def _on_speed_changed(self, speed_ms: int):
        self.session.scheduler.set_speed(speed_ms)
        self._save()

    def _on_grid_size_changed(self, size: int):
        self.session.set_grid_size(size)
        self._save()

    def _on_cell_edit(self, row: int, col: int, mode: str):
        """Handle a click on the grid."""
        coord = (row, col)
        if mode == EDIT_START:
            applied = self.session.move_start(coord)
        elif mode == EDIT_GOAL:
            applied = self.session.move_goal(coord)
        else:
            applied = self.session.toggle_wall(coord)
        if not applied:
            logger.debug(f"Edit '{mode}' at {coord} refused")

    def _on_obstacles_requested(self, mode: str, density: float, seed: int):
        """Handle obstacle generation request."""
        reachable = self.session.generate_obstacles(mode, density, seed)
        if not reachable:
            self.window.set_status("Goal is blocked by obstacles", "#dc3545")
        self._save()

    def _on_debug_toggled(self, enabled: bool):
        """Handle debug checkbox toggle from UI."""
        logger.info(f"Debug mode toggled: {enabled}")
        self.debug_mode = enabled
        apply_log_level(enabled)

        # Save to persistent settings (only if not CLI override)
        if not self.cli_debug_override:
            self.settings["debug_enabled"] = enabled
            self._save()

    def _on_snapshot_requested(self):
        """Handle snapshot save request."""
        grid = self.session.scheduler.display_grid
        if grid is None:
            logger.warning("Nothing to snapshot")
            return
        try:
            path = save_snapshot(grid, stats=self.session.stats())
            self.window.set_status(f"Snapshot saved: {path.name}")
        except OSError as e:
            logger.error(f"Failed to save snapshot: {e}")
            self.window.set_status("Failed to save snapshot", "#dc3545")

    def _on_shutdown(self):
        """Handle window close."""
        logger.info("Shutdown requested")
        self.session.scheduler.reset()
        self._save()

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code
        """
        self.window.show()
        return 0


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Pathfinding Visualizer - Animated grid search algorithms"
    )
    parser.add_argument(
        "--size", "-s",
        type=int,
        default=None,
        help="Grid side length, 5-20 (default: saved setting)"
    )
    parser.add_argument(
        "--algorithm", "-a",
        choices=get_algorithm_names(),
        default=None,
        help="Search algorithm (default: saved setting)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args()


def main():
    """Initialize and run the Pathfinding Visualizer application."""
    args = parse_args()
    setup_logging(is_debug_enabled(load_settings(), args.debug))

    app = QApplication(sys.argv)

    application = Application(grid_size=args.size, algorithm=args.algorithm,
                              debug_mode=args.debug)
    application.setup()
    application.run()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
