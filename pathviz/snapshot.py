"""
Grid Snapshot Utilities

Functions for rendering the display grid to a PNG and managing saved
snapshots.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from .animation import CellDisplay, display_state
from .grid import Grid

logger = logging.getLogger(__name__)


# Snapshot settings
SNAPSHOT_DIR = Path("./snapshots")
MAX_SNAPSHOTS = 10

DEFAULT_CELL_SIZE = 30
BORDER_COLOR = "#dddddd"
HEADER_HEIGHT = 20

DISPLAY_COLORS = {
    CellDisplay.START: "#4CAF50",
    CellDisplay.GOAL: "#f44336",
    CellDisplay.WALL: "#000000",
    CellDisplay.PATH: "#FFEB3B",
    CellDisplay.VISITED: "#81C784",
    CellDisplay.EMPTY: "#FFFFFF",
}


def get_display_color(state: CellDisplay) -> str:
    """
    Get color code for a display state.

    Args:
        state: Cell display state

    Returns:
        Hex color code string
    """
    return DISPLAY_COLORS.get(state, DISPLAY_COLORS[CellDisplay.EMPTY])


def render_grid(grid: Grid, cell_size: int = DEFAULT_CELL_SIZE) -> Image.Image:
    """
    Draw a grid as colored squares, one per cell.

    Args:
        grid: Display grid (roles, walls, visited and path flags)
        cell_size: Side length of one cell in pixels

    Returns:
        RGB PIL Image of size (cols * cell_size, rows * cell_size)
    """
    image = Image.new("RGB", (grid.cols * cell_size, grid.rows * cell_size), "white")
    draw = ImageDraw.Draw(image)

    for cell in grid.iter_cells():
        x = cell.col * cell_size
        y = cell.row * cell_size
        draw.rectangle(
            [x, y, x + cell_size - 1, y + cell_size - 1],
            fill=get_display_color(display_state(cell)),
            outline=BORDER_COLOR,
        )

    return image


def save_snapshot(grid: Grid, path: Optional[Path] = None, stats=None) -> Path:
    """
    Save a rendered grid as PNG, with an optional stats caption.

    Args:
        grid: Display grid to render
        path: Output file path (defaults to a timestamped file in SNAPSHOT_DIR)
        stats: RunStats to print above the grid (can be None)

    Returns:
        Path of the written file
    """
    # Ensure snapshot directory exists
    SNAPSHOT_DIR.mkdir(parents=True, exist_ok=True)
    if path is None:
        path = SNAPSHOT_DIR / f"snapshot_{int(time.time() * 1000)}.png"
    path = Path(path)

    grid_image = render_grid(grid)
    if stats is None:
        image = grid_image
    else:
        image = Image.new("RGB", (grid_image.width, grid_image.height + HEADER_HEIGHT), "white")
        image.paste(grid_image, (0, HEADER_HEIGHT))
        draw = ImageDraw.Draw(image)
        summary = f"{stats.algorithm_name}: {stats.nodes_visited} visited, " \
                  f"path {stats.path_length}, {stats.execution_time_ms:.1f}ms"
        draw.text((4, 4), summary, fill="black", font=ImageFont.load_default())

    image.save(path, "PNG")
    logger.info(f"Snapshot saved: {path}")

    # Cleanup old snapshots
    _cleanup_snapshots()
    return path


def _cleanup_snapshots() -> None:
    """Remove old snapshots, keeping only the most recent MAX_SNAPSHOTS."""
    if not SNAPSHOT_DIR.exists():
        return

    # Get all snapshots sorted by modification time
    snapshot_files = sorted(
        SNAPSHOT_DIR.glob("snapshot_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    # Remove old files
    for old_file in snapshot_files[MAX_SNAPSHOTS:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.warning(f"Failed to remove old snapshot {old_file}: {e}")
