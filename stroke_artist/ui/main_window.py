"""Main application window for the stroke artist."""

from typing import Optional

from PyQt6.QtCore import Qt, QThread, pyqtSignal
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QDockWidget,
    QFileDialog,
    QLabel,
    QMainWindow,
    QToolBar,
)

from stroke_artist.command_executor import CommandExecutor
from stroke_artist.config_manager import ConfigManager
from stroke_artist.image_processing import Artist
from stroke_artist.models import ArtistConfig, DrawingResult, ExecutorState
from stroke_artist.ui.canvas import CanvasSurface, CanvasWidget
from stroke_artist.ui.console_panel import ConsolePanel
from stroke_artist.ui.toolbar import Toolbar


class CompileThread(QThread):
    """Background thread for command generation to avoid blocking UI."""

    finished = pyqtSignal(object)  # DrawingResult
    error = pyqtSignal(str)  # Error message
    log_message = pyqtSignal(str)

    def __init__(self, artist: Artist, file_path: str):
        super().__init__()
        self.artist = artist
        self.file_path = file_path

    def run(self):
        """Load the image and compile commands in background."""
        try:
            self.artist.log = self.log_message.emit
            result = self.artist.draw_file(self.file_path)
            self.finished.emit(result)
        except Exception as e:
            self.error.emit(str(e))


class ArtistWindow(QMainWindow):
    """Window with the canvas, a console and open/draw/stop actions."""

    def __init__(self, config: Optional[ArtistConfig] = None):
        super().__init__()
        self.setWindowTitle("Stroke Artist")
        self.setMinimumSize(900, 700)

        self.config_manager = ConfigManager()
        self.config = config or self.config_manager.load()

        self.toolbar_device = Toolbar(self.config.palette, self.config.pen_diameters)
        self.surface = CanvasSurface(
            self.toolbar_device, self.config.canvas_width, self.config.canvas_height
        )
        self.executor = CommandExecutor(self.surface, self.toolbar_device, parent=self)

        self.image_path: Optional[str] = None
        self.result: Optional[DrawingResult] = None
        self.compile_thread: Optional[CompileThread] = None

        self._setup_ui()
        self._connect_signals()
        self._update_actions()

    def _setup_ui(self):
        """Initialize the user interface."""
        self.canvas_widget = CanvasWidget(self.surface)
        self.setCentralWidget(self.canvas_widget)

        toolbar = QToolBar("Main")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.open_action = QAction("Open Image...", self)
        self.draw_action = QAction("Draw", self)
        self.stop_action = QAction("Stop", self)
        for action in (self.open_action, self.draw_action, self.stop_action):
            toolbar.addAction(action)

        toolbar.addSeparator()
        self.status_label = QLabel("No image loaded")
        toolbar.addWidget(self.status_label)

        self.console_panel = ConsolePanel()
        self.console_dock = QDockWidget("Console", self)
        self.console_dock.setWidget(self.console_panel)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, self.console_dock)

    def _connect_signals(self):
        self.open_action.triggered.connect(self._on_open_clicked)
        self.draw_action.triggered.connect(self._on_draw_clicked)
        self.stop_action.triggered.connect(self.executor.stop)

        self.executor.log_message.connect(self.console_panel.append)
        self.executor.progress.connect(self.console_panel.show_progress)
        self.executor.state_changed.connect(self._on_executor_state_changed)

    # === Actions ===

    def _on_open_clicked(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Open Image",
            "",
            "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp);;All files (*.*)",
        )
        if file_path:
            self.image_path = file_path
            self.status_label.setText(file_path)
            self._update_actions()

    def _on_draw_clicked(self):
        """Compile the loaded image in the background, then execute it."""
        if not self.image_path or self.executor.is_running():
            return

        artist = Artist(self.toolbar_device, self.surface.size)
        self.compile_thread = CompileThread(artist, self.image_path)
        self.compile_thread.log_message.connect(self.console_panel.append)
        self.compile_thread.finished.connect(self._on_compile_finished)
        self.compile_thread.error.connect(self._on_compile_error)

        self.status_label.setText("Generating commands...")
        self.draw_action.setEnabled(False)
        self.open_action.setEnabled(False)
        self.compile_thread.start()

    def _on_compile_finished(self, result: DrawingResult):
        self.result = result
        self.status_label.setText(
            f"{len(result.commands)} commands, {result.stroke_count} strokes"
        )
        self.console_panel.reset_progress()
        self.surface.clear()
        self.executor.run(result.commands)

    def _on_compile_error(self, error_msg: str):
        pretty_msg = error_msg.replace("\n", " ").strip()
        self.status_label.setText(f"Error: {pretty_msg}")
        self.console_panel.append(f"Error: {pretty_msg}")
        self._update_actions()

    def _on_executor_state_changed(self, state: ExecutorState):
        if state is ExecutorState.DRAINED:
            self.console_panel.show_progress(100.0, 0, 0.0)
        self._update_actions()

    def _update_actions(self):
        running = self.executor.is_running()
        self.open_action.setEnabled(not running)
        self.draw_action.setEnabled(bool(self.image_path) and not running)
        self.stop_action.setEnabled(running)

    def closeEvent(self, event):
        self.executor.stop()
        if self.compile_thread is not None and self.compile_thread.isRunning():
            self.compile_thread.wait()
        super().closeEvent(event)
