import pytest

from conftest import BLACK, RED, FakeClock, FakeDevice, FakeSurface
from stroke_artist.command_executor import CommandExecutor
from stroke_artist.models import (
    DrawPath,
    ExecutorState,
    FillCanvas,
    SetColor,
    SetDiameter,
    SetTool,
    Tool,
)


def paths(count):
    return [DrawPath(((float(i), 0.0), (float(i) + 1, 0.0))) for i in range(count)]


def drain(executor):
    turns = 0
    while executor.step():
        turns += 1
    return turns


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def executor(qapp, surface, device, clock):
    return CommandExecutor(surface, device, clock=clock)


@pytest.fixture
def messages(executor):
    received = []
    executor.log_message.connect(received.append)
    return received


def test_dispatches_each_command_kind(executor, calls):
    executor.begin([
        FillCanvas(RED),
        SetTool(Tool.PEN),
        SetColor(BLACK),
        SetDiameter(8),
        DrawPath(((1.0, 2.0), (3.0, 4.0))),
        SetTool(Tool.FILL),
    ])
    drain(executor)

    assert calls == [
        ("fill_tool",),
        ("color", RED),
        ("draw", ((0.0, 0.0), (0.0, 0.0))),
        ("pen_tool",),
        ("color", BLACK),
        ("diameter", 8),
        ("draw", ((1.0, 2.0), (3.0, 4.0))),
        ("fill_tool",),
    ]


def test_executes_all_commands_in_order(executor, surface, messages):
    finished = []
    executor.finished.connect(finished.append)
    commands = paths(7)

    executor.begin(commands)
    drain(executor)

    assert surface.draws == [list(c.points) for c in commands]
    assert executor.state is ExecutorState.DRAINED
    assert executor.execution.remaining == 0
    assert len(finished) == 1
    assert messages[0] == "Processing 7 commands..."
    assert messages[-1].startswith("Processing finished in")


@pytest.mark.parametrize("k", [0, 1, 3, 5])
def test_cancellation_after_k_turns(executor, surface, k):
    polls = []

    def should_stop():
        polls.append(1)
        return len(polls) > k

    executor.begin(paths(5), should_stop)
    drain(executor)

    assert len(surface.draws) == k
    expected = ExecutorState.DRAINED if k == 5 else ExecutorState.STOPPED
    assert executor.state is expected


def test_stopped_run_emits_stopped(executor, messages):
    stopped = []
    executor.stopped.connect(lambda: stopped.append(True))

    executor.begin(paths(3), lambda: True)
    drain(executor)

    assert stopped == [True]
    assert messages[-1] == "Processing stopped."


def test_stop_request_honored_on_next_turn(executor, surface):
    executor.begin(paths(4))
    executor.step()
    executor.stop()

    assert executor.step() is False
    assert len(surface.draws) == 1
    assert executor.state is ExecutorState.STOPPED


def test_empty_queue_drains_immediately(executor, surface):
    executor.begin([])

    assert executor.step() is False
    assert executor.state is ExecutorState.DRAINED
    assert surface.draws == []


def test_step_before_begin_does_nothing(executor):
    assert executor.state is ExecutorState.READY
    assert executor.step() is False


def test_unknown_command_raises(executor):
    executor.begin(["not a command"])

    with pytest.raises(TypeError):
        executor.step()


def test_progress_estimates_shrink_for_constant_cost(qapp, clock, device):
    surface = FakeSurface(on_draw=lambda: clock.advance(0.125))
    executor = CommandExecutor(surface, device, clock=clock)
    reports = []
    executor.progress.connect(lambda *args: reports.append(args))

    executor.begin(paths(200))
    drain(executor)

    assert reports == [
        (25.0, 150, pytest.approx(18.75)),
        (50.0, 100, pytest.approx(12.5)),
        (75.0, 50, pytest.approx(6.25)),
    ]
    etas = [eta for _, _, eta in reports]
    assert etas == sorted(etas, reverse=True)


def test_progress_rate_limited_by_wall_clock(qapp, clock, device):
    surface = FakeSurface(on_draw=lambda: clock.advance(0.01))
    executor = CommandExecutor(surface, device, clock=clock)
    reports = []
    executor.progress.connect(lambda *args: reports.append(args))

    executor.begin(paths(200))
    drain(executor)

    assert reports == []


def test_run_yields_to_event_loop_between_commands(qtbot):
    surface = FakeSurface()
    executor = CommandExecutor(surface, FakeDevice())

    with qtbot.waitSignal(executor.finished, timeout=5000):
        executor.run(paths(3))
        # only the first turn runs synchronously
        assert len(surface.draws) == 1

    assert len(surface.draws) == 3
    assert executor.state is ExecutorState.DRAINED


def test_run_can_be_stopped_from_the_event_loop(qtbot):
    surface = FakeSurface()
    executor = CommandExecutor(surface, FakeDevice())
    surface.on_draw = lambda: len(surface.draws) == 2 and executor.stop()

    with qtbot.waitSignal(executor.stopped, timeout=5000):
        executor.run(paths(10))

    assert len(surface.draws) == 2


def test_failing_command_ends_the_run(executor, surface, messages):
    executor.begin([DrawPath(((0.0, 0.0), (1.0, 0.0))), "not a command", *paths(3)])
    executor.step()

    with pytest.raises(TypeError):
        executor.step()

    assert executor.state is ExecutorState.STOPPED
    assert not executor.is_running()
    assert messages[-1].startswith("Processing failed:")
    assert executor.step() is False
    assert len(surface.draws) == 1


def test_begin_stops_the_active_run(executor, messages):
    stopped = []
    executor.stopped.connect(lambda: stopped.append(True))

    executor.begin(paths(4))
    executor.step()
    executor.begin(paths(2))

    assert stopped == [True]
    assert "Processing stopped." in messages
    assert executor.state is ExecutorState.RUNNING
    assert executor.execution.total == 2


def test_restarting_run_abandons_the_previous_one(qtbot):
    surface = FakeSurface()
    executor = CommandExecutor(surface, FakeDevice())
    states = []
    stopped = []
    executor.state_changed.connect(states.append)
    executor.stopped.connect(lambda: stopped.append(True))
    first = [DrawPath(((float(i), 1.0), (float(i) + 1, 1.0))) for i in range(10)]
    second = [DrawPath(((float(i), 2.0), (float(i) + 1, 2.0))) for i in range(10)]

    with qtbot.waitSignal(executor.finished, timeout=5000):
        executor.run(first)
        executor.run(second)

    # let any turn still queued for the first run come due
    qtbot.wait(50)

    assert stopped == [True]
    assert states == [
        ExecutorState.RUNNING,
        ExecutorState.STOPPED,
        ExecutorState.RUNNING,
        ExecutorState.DRAINED,
    ]
    assert surface.draws == [list(first[0].points)] + [list(c.points) for c in second]
