"""Cooperative execution of draw commands on the GUI thread."""

import time
from collections import deque
from typing import Callable, Iterable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from stroke_artist.models import (
    PROGRESS_EVERY,
    PROGRESS_INTERVAL,
    Device,
    DrawCommand,
    DrawPath,
    ExecutionState,
    ExecutorState,
    FillCanvas,
    SetColor,
    SetDiameter,
    SetTool,
    Surface,
    Tool,
)

# Zero-area path the surface treats as "flood with the current color"
FILL_PATH = ((0.0, 0.0), (0.0, 0.0))


class CommandExecutor(QObject):
    """Drains a command queue one command per event-loop turn.

    AIDEV-NOTE: Each turn either finishes (queue empty), stops (cancellation
    requested) or executes exactly one command, then yields back to Qt via a
    zero-delay single-shot timer. Cancellation is polled once per turn.
    """

    log_message = pyqtSignal(str)
    progress = pyqtSignal(float, int, float)  # percent, remaining, eta seconds
    finished = pyqtSignal(float)  # elapsed seconds
    stopped = pyqtSignal()
    state_changed = pyqtSignal(ExecutorState)

    def __init__(
        self,
        surface: Surface,
        device: Device,
        clock: Callable[[], float] = time.perf_counter,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.surface = surface
        self.device = device
        self.clock = clock

        self.state = ExecutorState.READY
        self.execution = ExecutionState()
        self.command_queue: "deque[DrawCommand]" = deque()
        self.should_stop: Optional[Callable[[], bool]] = None
        self._stop_requested = False
        # Bumped per run; scheduled turns of an older run are ignored
        self._generation = 0

    # -------------------------------------------------------------
    # API methods
    # -------------------------------------------------------------

    def run(
        self,
        commands: "Iterable[DrawCommand]",
        should_stop: Optional[Callable[[], bool]] = None,
    ):
        """Start executing commands, yielding to the event loop between them."""
        self.begin(commands, should_stop)
        self._turn(self._generation)

    def begin(
        self,
        commands: "Iterable[DrawCommand]",
        should_stop: Optional[Callable[[], bool]] = None,
    ):
        """Load a command sequence without executing anything yet.

        A run still in progress is stopped first.
        """
        if self.state is ExecutorState.RUNNING:
            self._finish_stopped()

        self._generation += 1
        self.command_queue = deque(commands)
        self.should_stop = should_stop
        self._stop_requested = False

        now = self.clock()
        total = len(self.command_queue)
        self.execution = ExecutionState(
            total=total,
            remaining=total,
            start_time=now,
            last_progress_time=now,
        )

        self._set_state(ExecutorState.RUNNING)
        self.log_message.emit(f"Processing {total} commands...")

    def step(self) -> bool:
        """Run one scheduling turn.

        Returns:
            True if another turn is needed, False once drained or stopped
        """
        if self.state is not ExecutorState.RUNNING:
            return False

        if not self.command_queue:
            elapsed = self.clock() - self.execution.start_time
            self._set_state(ExecutorState.DRAINED)
            self.log_message.emit(f"Processing finished in {elapsed * 1000:.2f}ms.")
            self.finished.emit(elapsed)
            return False

        if self._stop_requested or (self.should_stop and self.should_stop()):
            self._finish_stopped()
            return False

        command = self.command_queue.popleft()
        try:
            self.execute(command)
        except Exception as e:
            self.command_queue.clear()
            self._set_state(ExecutorState.STOPPED)
            self.log_message.emit(f"Processing failed: {e}")
            raise
        self.execution.remaining = len(self.command_queue)
        self._report_progress()

        return True

    def stop(self):
        """Request cancellation; honored at the start of the next turn."""
        self._stop_requested = True

    def is_running(self) -> bool:
        return self.state is ExecutorState.RUNNING

    # -------------------------------------------------------------
    # Command dispatch
    # -------------------------------------------------------------

    def execute(self, command: DrawCommand):
        """Apply a single command to the device and surface."""
        if isinstance(command, DrawPath):
            self.surface.draw(list(command.points))
        elif isinstance(command, SetDiameter):
            self.device.set_pen_diameter(command.diameter)
        elif isinstance(command, SetColor):
            self.device.set_color(command.color)
        elif isinstance(command, SetTool):
            if command.tool is Tool.FILL:
                self.device.set_fill_tool()
            else:
                self.device.set_pen_tool()
        elif isinstance(command, FillCanvas):
            self.device.set_fill_tool()
            self.device.set_color(command.color)
            self.surface.draw(list(FILL_PATH))
        else:
            raise TypeError(f"Unknown draw command: {command!r}")

    # -------------------------------------------------------------
    # Scheduling & progress
    # -------------------------------------------------------------

    def _turn(self, generation: int):
        if generation != self._generation:
            return
        if self.step():
            QTimer.singleShot(0, lambda: self._turn(generation))

    def _finish_stopped(self):
        self._set_state(ExecutorState.STOPPED)
        self.log_message.emit("Processing stopped.")
        self.stopped.emit()

    def _report_progress(self):
        """Emit a progress estimate every 50 commands, at most every 2s."""
        execution = self.execution
        remaining = execution.remaining
        if remaining == 0 or remaining % PROGRESS_EVERY != 0:
            return

        now = self.clock()
        if now - execution.last_progress_time <= PROGRESS_INTERVAL:
            return

        completed = execution.completed
        percent = completed / execution.total * 100
        elapsed = now - execution.start_time
        estimated_total = elapsed * (execution.total / completed)
        estimated_remaining = estimated_total - elapsed

        self.log_message.emit(
            f"{percent:.1f}% complete ({remaining} commands remaining, "
            f"~{estimated_remaining:.1f}s left)"
        )
        self.progress.emit(percent, remaining, estimated_remaining)
        execution.last_progress_time = now

    def _set_state(self, state: ExecutorState):
        self.state = state
        self.state_changed.emit(state)
