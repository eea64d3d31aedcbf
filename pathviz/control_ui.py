"""
Control UI Module for the Pathfinding Visualizer

Provides a PyQt5-based window with the grid view, algorithm and obstacle
controls, playback buttons and a stats panel. The window only emits
signals; the application wires them to the VisualizerSession.
"""

from typing import List, Optional

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QPushButton, QHBoxLayout,
    QComboBox, QSpinBox, QDoubleSpinBox, QSlider, QGroupBox, QFormLayout,
    QProgressBar, QCheckBox
)
from PyQt5.QtCore import Qt, QRectF, pyqtSignal
from PyQt5.QtGui import QColor, QFont, QPainter, QPen

from pathviz.animation import MAX_SPEED_MS, MIN_SPEED_MS, AnimationState, CellDisplay
from pathviz.grid import MAX_GRID_SIZE, MIN_GRID_SIZE, ObstacleMode
from pathviz.search import Heuristic, get_algorithm_info
from pathviz.session import RunStats
from pathviz.snapshot import get_display_color


# What a left click on the grid does
EDIT_WALL = "wall"
EDIT_START = "start"
EDIT_GOAL = "goal"


class GridWidget(QWidget):
    """
    Paints the display grid and reports clicked cells.
    """

    cell_clicked = pyqtSignal(int, int)  # row, col

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._states: List[List[CellDisplay]] = []
        self.setMinimumSize(400, 400)

    def set_states(self, states: List[List[CellDisplay]]):
        """
        Replace the cell states to draw.

        Args:
            states: Display state per cell, [row][col]
        """
        self._states = states
        self.update()

    def _cell_size(self) -> float:
        if not self._states:
            return 0.0
        rows = len(self._states)
        cols = len(self._states[0])
        return min(self.width() / cols, self.height() / rows)

    def paintEvent(self, event):
        painter = QPainter(self)
        size = self._cell_size()
        painter.setPen(QPen(QColor("#dddddd"), 1))

        for row, states in enumerate(self._states):
            for col, state in enumerate(states):
                rect = QRectF(col * size, row * size, size, size)
                painter.fillRect(rect, QColor(get_display_color(state)))
                painter.drawRect(rect)

        painter.end()

    def mousePressEvent(self, event):
        size = self._cell_size()
        if size <= 0:
            return
        row = int(event.y() // size)
        col = int(event.x() // size)
        if 0 <= row < len(self._states) and 0 <= col < len(self._states[0]):
            self.cell_clicked.emit(row, col)


class ControlWindow(QMainWindow):
    """
    Main window for the Pathfinding Visualizer application.

    Provides controls for choosing an algorithm and heuristic, editing
    the grid, generating obstacles and stepping through the animation,
    and displays statistics about the current run.
    """

    # Playback
    play_requested = pyqtSignal()
    pause_requested = pyqtSignal()
    step_forward_requested = pyqtSignal()
    step_backward_requested = pyqtSignal()
    reset_requested = pyqtSignal()

    # Preferences
    algorithm_changed = pyqtSignal(str)
    heuristic_changed = pyqtSignal(str)
    speed_changed = pyqtSignal(int)
    grid_size_changed = pyqtSignal(int)

    # Grid edits
    cell_edit_requested = pyqtSignal(int, int, str)  # row, col, edit mode
    obstacles_requested = pyqtSignal(str, float, int)  # mode, density, seed

    snapshot_requested = pyqtSignal()
    debug_toggled = pyqtSignal(bool)  # Debug logging on/off
    shutdown_requested = pyqtSignal()

    def __init__(self):
        super().__init__()
        self._state = AnimationState.IDLE
        self._init_ui()

    def _init_ui(self):
        """Initialize the user interface components."""
        self.setWindowTitle("Pathfinding Visualizer")
        self.resize(900, 560)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        root_layout = QHBoxLayout()
        root_layout.setSpacing(15)
        root_layout.setContentsMargins(15, 15, 15, 15)
        central_widget.setLayout(root_layout)

        # Grid view
        self.grid_widget = GridWidget()
        self.grid_widget.cell_clicked.connect(self._on_cell_clicked)
        root_layout.addWidget(self.grid_widget, 1)

        # Side panel
        side_layout = QVBoxLayout()
        side_layout.setSpacing(10)
        root_layout.addLayout(side_layout)

        # Status label
        self.status_label = QLabel("Ready to start pathfinding")
        self.status_label.setAlignment(Qt.AlignCenter)
        status_font = QFont()
        status_font.setPointSize(10)
        status_font.setBold(True)
        self.status_label.setFont(status_font)
        side_layout.addWidget(self.status_label)

        side_layout.addWidget(self._build_algorithm_group())
        side_layout.addWidget(self._build_grid_group())
        side_layout.addLayout(self._build_playback_buttons())
        side_layout.addWidget(self._build_stats_group())

        # Snapshot button
        self.snapshot_button = QPushButton("Save Snapshot")
        self.snapshot_button.setMinimumHeight(30)
        self.snapshot_button.clicked.connect(self.snapshot_requested.emit)
        side_layout.addWidget(self.snapshot_button)

        # Debug logging toggle
        self.debug_checkbox = QCheckBox("Debug logging")
        self.debug_checkbox.toggled.connect(self.debug_toggled.emit)
        side_layout.addWidget(self.debug_checkbox)

        side_layout.addStretch()

        self._apply_styles()

    def _build_algorithm_group(self) -> QGroupBox:
        group = QGroupBox("Algorithm")
        form = QFormLayout()
        group.setLayout(form)

        self.algorithm_combo = QComboBox()
        for info in get_algorithm_info():
            self.algorithm_combo.addItem(info["label"], info["name"])
            self.algorithm_combo.setItemData(
                self.algorithm_combo.count() - 1, info["description"], Qt.ToolTipRole
            )
        self.algorithm_combo.currentIndexChanged.connect(self._on_algorithm_changed)
        form.addRow("Algorithm:", self.algorithm_combo)

        self.heuristic_combo = QComboBox()
        for heuristic in Heuristic:
            self.heuristic_combo.addItem(heuristic.value.capitalize(), heuristic.value)
        self.heuristic_combo.currentIndexChanged.connect(self._on_heuristic_changed)
        form.addRow("Heuristic:", self.heuristic_combo)

        self.speed_slider = QSlider(Qt.Horizontal)
        self.speed_slider.setRange(MIN_SPEED_MS, MAX_SPEED_MS)
        self.speed_slider.valueChanged.connect(self._on_speed_changed)
        self.speed_label = QLabel()
        speed_layout = QHBoxLayout()
        speed_layout.addWidget(self.speed_slider, 1)
        speed_layout.addWidget(self.speed_label)
        form.addRow("Speed:", speed_layout)

        return group

    def _build_grid_group(self) -> QGroupBox:
        group = QGroupBox("Grid")
        form = QFormLayout()
        group.setLayout(form)

        self.size_spin = QSpinBox()
        self.size_spin.setRange(MIN_GRID_SIZE, MAX_GRID_SIZE)
        self.size_spin.valueChanged.connect(self.grid_size_changed.emit)
        form.addRow("Size:", self.size_spin)

        self.edit_combo = QComboBox()
        self.edit_combo.addItem("Toggle wall", EDIT_WALL)
        self.edit_combo.addItem("Move start", EDIT_START)
        self.edit_combo.addItem("Move goal", EDIT_GOAL)
        form.addRow("Click:", self.edit_combo)

        self.obstacle_combo = QComboBox()
        for mode in ObstacleMode:
            self.obstacle_combo.addItem(mode.value.capitalize(), mode.value)
        form.addRow("Obstacles:", self.obstacle_combo)

        self.density_spin = QDoubleSpinBox()
        self.density_spin.setRange(0.0, 1.0)
        self.density_spin.setSingleStep(0.05)
        form.addRow("Density:", self.density_spin)

        self.seed_spin = QSpinBox()
        self.seed_spin.setRange(0, 2147483646)
        form.addRow("Seed:", self.seed_spin)

        self.generate_button = QPushButton("Generate")
        self.generate_button.clicked.connect(self._on_generate_clicked)
        form.addRow(self.generate_button)

        return group

    def _build_playback_buttons(self) -> QHBoxLayout:
        layout = QHBoxLayout()

        self.step_back_button = QPushButton("<")
        self.step_back_button.clicked.connect(self.step_backward_requested.emit)
        layout.addWidget(self.step_back_button)

        self.play_button = QPushButton("Play")
        self.play_button.setMinimumHeight(40)
        button_font = QFont()
        button_font.setPointSize(11)
        button_font.setBold(True)
        self.play_button.setFont(button_font)
        self.play_button.clicked.connect(self._on_play_clicked)
        layout.addWidget(self.play_button, 1)

        self.step_forward_button = QPushButton(">")
        self.step_forward_button.clicked.connect(self.step_forward_requested.emit)
        layout.addWidget(self.step_forward_button)

        self.reset_button = QPushButton("Reset")
        self.reset_button.clicked.connect(self.reset_requested.emit)
        layout.addWidget(self.reset_button)

        return layout

    def _build_stats_group(self) -> QGroupBox:
        group = QGroupBox("Statistics")
        layout = QVBoxLayout()
        group.setLayout(layout)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 1000)
        self.progress_bar.setTextVisible(False)
        layout.addWidget(self.progress_bar)

        self.step_label = QLabel("Step:       --")
        self.visited_label = QLabel("Visited:    --")
        self.path_label = QLabel("Path:       --")
        self.time_label = QLabel("Time:       --")
        self.efficiency_label = QLabel("Efficiency: --")

        info_font = QFont()
        info_font.setPointSize(9)

        for label in [self.step_label, self.visited_label, self.path_label,
                      self.time_label, self.efficiency_label]:
            label.setFont(info_font)
            layout.addWidget(label)

        return group

    def _apply_styles(self):
        """Apply clean, minimal styling to the window."""
        style = """
            QMainWindow {
                background-color: #f5f5f5;
            }
            QPushButton {
                background-color: #4CAF50;
                color: white;
                border: none;
                border-radius: 5px;
                padding: 6px 10px;
            }
            QPushButton:hover {
                background-color: #45a049;
            }
            QPushButton:pressed {
                background-color: #3d8b40;
            }
            QPushButton:disabled {
                background-color: #cccccc;
                color: #666666;
            }
            QLabel {
                color: #333333;
            }
        """
        self.setStyleSheet(style)

    # -------------------- signal handlers --------------------

    def _on_cell_clicked(self, row: int, col: int):
        self.cell_edit_requested.emit(row, col, self.edit_combo.currentData())

    def _on_play_clicked(self):
        """Handle Play/Pause button click."""
        if self._state == AnimationState.RUNNING:
            self.pause_requested.emit()
        else:
            self.play_requested.emit()

    def _on_algorithm_changed(self, index: int):
        """Handle algorithm dropdown selection change."""
        name = self.algorithm_combo.itemData(index)
        if name:
            self._update_heuristic_enabled()
            self.algorithm_changed.emit(name)

    def _on_heuristic_changed(self, index: int):
        name = self.heuristic_combo.itemData(index)
        if name:
            self.heuristic_changed.emit(name)

    def _on_speed_changed(self, value: int):
        self.speed_label.setText(f"{value} ms")
        self.speed_changed.emit(value)

    def _on_generate_clicked(self):
        self.obstacles_requested.emit(
            self.obstacle_combo.currentData(),
            self.density_spin.value(),
            self.seed_spin.value(),
        )

    def _update_heuristic_enabled(self):
        name = self.algorithm_combo.currentData()
        uses_heuristic = any(
            info["uses_heuristic"] for info in get_algorithm_info() if info["name"] == name
        )
        self.heuristic_combo.setEnabled(uses_heuristic)

    # -------------------- setters --------------------

    def select_data(self, combo: QComboBox, value: str) -> bool:
        """
        Select the combo entry whose data equals value, without emitting.

        Returns:
            True if the value was found
        """
        for i in range(combo.count()):
            if combo.itemData(i) == value:
                combo.blockSignals(True)
                combo.setCurrentIndex(i)
                combo.blockSignals(False)
                self._update_heuristic_enabled()
                return True
        return False

    def set_preferences(self, settings: dict):
        """
        Initialize controls from a settings dictionary without emitting.

        Args:
            settings: Settings as returned by pathviz.settings.load_settings
        """
        self.select_data(self.algorithm_combo, settings.get("algorithm"))
        self.select_data(self.heuristic_combo, settings.get("heuristic"))
        self.select_data(self.obstacle_combo, settings.get("obstacle_mode"))

        for widget, key in [(self.speed_slider, "animation_speed_ms"),
                            (self.size_spin, "grid_size"),
                            (self.density_spin, "obstacle_density"),
                            (self.seed_spin, "obstacle_seed")]:
            widget.blockSignals(True)
            widget.setValue(settings[key])
            widget.blockSignals(False)
        self.speed_label.setText(f"{self.speed_slider.value()} ms")

    def set_debug_enabled(self, enabled: bool):
        """Set debug checkbox state without emitting signal."""
        self.debug_checkbox.blockSignals(True)
        self.debug_checkbox.setChecked(enabled)
        self.debug_checkbox.blockSignals(False)

    def set_grid_states(self, states: List[List[CellDisplay]]):
        """Redraw the grid view."""
        self.grid_widget.set_states(states)

    def set_status(self, status: str, color: str = "#333333"):
        """
        Update the status label.

        Args:
            status: Status text to display
            color: Text color
        """
        self.status_label.setText(status)
        self.status_label.setStyleSheet(f"color: {color};")

    def set_stats(self, stats: RunStats):
        """
        Update the stats panel.

        Args:
            stats: Numbers for the current run
        """
        self.set_status(stats.status_message, stats.status_color)
        self.progress_bar.setValue(int(stats.progress_percent * 10))

        if stats.total_steps == 0:
            self.step_label.setText("Step:       --")
            self.visited_label.setText("Visited:    --")
            self.path_label.setText("Path:       --")
            self.time_label.setText("Time:       --")
            self.efficiency_label.setText("Efficiency: --")
            return

        self.step_label.setText(
            f"Step:       {stats.current_step} / {stats.total_steps} ({stats.progress_percent:.1f}%)"
        )
        self.visited_label.setText(f"Visited:    {stats.nodes_visited}")
        self.path_label.setText(f"Path:       {stats.path_length if stats.path_found else 'none'}")
        self.time_label.setText(f"Time:       {stats.execution_time_ms:.2f} ms")
        self.efficiency_label.setText(f"Efficiency: {stats.efficiency_percent:.1f}%")

    def set_state(self, state: AnimationState):
        """
        Enable or disable controls for an animation state.

        Args:
            state: Current scheduler state
        """
        self._state = state
        is_running = state == AnimationState.RUNNING

        self.play_button.setText("Pause" if is_running else "Play")
        self.step_back_button.setEnabled(not is_running)
        self.step_forward_button.setEnabled(
            not is_running and state != AnimationState.COMPLETE
        )

    def closeEvent(self, event):
        """
        Handle window close event.

        Emits shutdown_requested so the pending timer can be cancelled
        and preferences saved.

        Args:
            event: QCloseEvent object
        """
        self.shutdown_requested.emit()
        event.accept()
