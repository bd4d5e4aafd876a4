from __future__ import annotations

import pytest

from pycgcountdown.scheduler import CountdownScheduler, next_tick_delay


class _Recorder:
    def __init__(self) -> None:
        self.ticks: list[int] = []
        self.completions = 0

    def on_tick(self, remaining_ms: int) -> None:
        self.ticks.append(remaining_ms)

    def on_complete(self) -> None:
        self.completions += 1


def _scheduler(loop, recorder: _Recorder, interval_ms: int = 1000) -> CountdownScheduler:
    return CountdownScheduler(
        interval_ms=interval_ms,
        loop=loop,
        on_tick=recorder.on_tick,
        on_complete=recorder.on_complete,
    )


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [(0, 1000), (1000, 1000), (1030, 970), (1499, 501), (1500, 500), (1600, 1400), (999, 1001), (2990, 1010)],
)
def test_next_tick_delay(elapsed, expected) -> None:
    assert next_tick_delay(elapsed, 1000) == expected


def test_invalid_interval_rejected() -> None:
    with pytest.raises(ValueError):
        CountdownScheduler(interval_ms=0)


def test_arm_paused_schedules_nothing() -> None:
    recorder = _Recorder()
    # No loop at all: a paused arm must not need one.
    scheduler = CountdownScheduler(on_tick=recorder.on_tick, on_complete=recorder.on_complete)

    scheduler.arm("1:30", running=False)

    assert scheduler.remaining_ms == 90_000
    assert scheduler.running is False
    assert scheduler.state.pending is None
    assert scheduler.duration.show_minutes is True
    assert recorder.ticks == []


def test_arm_running_without_loop_keeps_previous_run() -> None:
    recorder = _Recorder()
    scheduler = CountdownScheduler(on_tick=recorder.on_tick, on_complete=recorder.on_complete)
    scheduler.arm("1:30", running=False)

    with pytest.raises(RuntimeError):
        scheduler.arm("5", running=True)

    assert scheduler.remaining_ms == 90_000
    assert scheduler.running is False
    assert scheduler.state.pending is None
    assert recorder.ticks == []


def test_arm_running_ticks_immediately(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder)

    scheduler.arm("5", running=True)

    assert recorder.ticks == [5_000]
    assert scheduler.running is True
    assert len(fake_loop.pending) == 1
    assert fake_loop.pending[0] is scheduler.state.pending
    assert fake_loop.pending[0].when == pytest.approx(fake_loop.now + 1.0)


def test_double_arm_leaves_one_pending_tick(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder)

    scheduler.arm("10", running=True)
    scheduler.arm("10", running=True)

    assert len(fake_loop.pending) == 1
    assert scheduler.state.pending is fake_loop.pending[0]


def test_two_second_run_completes_exactly_once(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder)

    scheduler.arm("2", running=True)
    fake_loop.advance(10.0)

    assert recorder.completions == 1
    assert recorder.ticks == [2_000, 1_000]
    assert [tick for tick in recorder.ticks if 0 < tick <= 1_000] == [1_000]
    assert scheduler.remaining_ms == 0
    assert scheduler.running is False
    assert scheduler.state.pending is None
    assert fake_loop.pending == []


def test_zero_duration_completes_on_first_real_tick(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder)

    scheduler.arm("0", running=True)

    assert recorder.completions == 0
    assert recorder.ticks == [0]
    assert scheduler.state.pending is not None

    fake_loop.advance(1.0)

    assert recorder.completions == 1
    assert fake_loop.pending == []


def test_late_tick_is_drift_corrected(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder)
    scheduler.arm("5", running=True)

    # The deferred tick fires 30 ms late.
    fake_loop.now += 1.030
    scheduler._tick()  # noqa: SLF001

    assert recorder.ticks == [5_000, 3_970]
    assert len(fake_loop.pending) == 1
    assert fake_loop.pending[0].when == pytest.approx(fake_loop.now + 0.970)


def test_very_late_tick_skips_a_short_wait(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder)
    scheduler.arm("5", running=True)

    fake_loop.now += 1.600
    scheduler._tick()  # noqa: SLF001

    assert recorder.ticks[-1] == 3_400
    assert fake_loop.pending[0].when == pytest.approx(fake_loop.now + 1.400)


def test_rearm_mid_run_restarts(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder)
    scheduler.arm("10", running=True)
    fake_loop.advance(3.0)
    assert scheduler.remaining_ms == 7_000
    old_handle = scheduler.state.pending

    scheduler.arm("3", running=True)

    assert old_handle is not None and old_handle.cancelled
    assert scheduler.remaining_ms == 3_000
    fake_loop.advance(10.0)
    assert recorder.completions == 1


def test_arm_paused_cancels_running_countdown(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder)
    scheduler.arm("10", running=True)
    fake_loop.advance(2.0)

    scheduler.arm("10", running=False)

    assert fake_loop.pending == []
    assert scheduler.remaining_ms == 10_000
    fake_loop.advance(20.0)
    assert recorder.completions == 0


def test_teardown_cancels_pending_tick(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder)
    scheduler.arm("3", running=True)

    scheduler.teardown()

    assert fake_loop.pending == []
    assert scheduler.running is False
    fake_loop.advance(10.0)
    assert recorder.ticks == [3_000]
    assert recorder.completions == 0


def test_each_run_completes_once(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder)

    scheduler.arm("1", running=True)
    fake_loop.advance(5.0)
    scheduler.arm("1", running=True)
    fake_loop.advance(5.0)

    assert recorder.completions == 2


def test_custom_interval(fake_loop) -> None:
    recorder = _Recorder()
    scheduler = _scheduler(fake_loop, recorder, interval_ms=250)

    scheduler.arm("1", running=True)
    fake_loop.advance(5.0)

    assert recorder.ticks == [1_000, 750, 500, 250]
    assert recorder.completions == 1
