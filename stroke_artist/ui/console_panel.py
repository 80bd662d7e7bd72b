"""Console panel: log output and drawing progress."""

import time

from PyQt6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
)

from stroke_artist.ui.styles import FONTS, SIZES


class ConsolePanel(QGroupBox):
    """Shows pipeline/executor messages and the executor's progress estimate."""

    def __init__(self, parent=None):
        super().__init__("Console", parent)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout()

        self.console = QTextEdit()
        self.console.setReadOnly(True)
        self.console.setMinimumHeight(SIZES.CONSOLE_MIN_HEIGHT)
        self.console.setFont(FONTS.CONSOLE)
        layout.addWidget(self.console)

        progress_layout = QHBoxLayout()
        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        progress_layout.addWidget(self.progress_bar)

        self.eta_label = QLabel("")
        progress_layout.addWidget(self.eta_label)

        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self.clear)
        progress_layout.addWidget(clear_btn)

        layout.addLayout(progress_layout)
        self.setLayout(layout)

    def append(self, message: str):
        """Add a timestamped message and keep the view scrolled to the end."""
        self.console.append(f"[{time.strftime('%H:%M:%S')}] {message}")
        scrollbar = self.console.verticalScrollBar()
        if scrollbar:
            scrollbar.setValue(scrollbar.maximum())

    def show_progress(self, percent: float, remaining: int, eta_seconds: float):
        self.progress_bar.setValue(int(percent))
        self.eta_label.setText(f"{remaining} left, ~{eta_seconds:.1f}s")

    def reset_progress(self):
        self.progress_bar.setValue(0)
        self.eta_label.setText("")

    def clear(self):
        self.console.clear()
        self.reset_progress()
