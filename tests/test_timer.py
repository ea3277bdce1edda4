import threading

from quizdesk.session import QuizTimer


def test_timer_stops_when_tick_returns_false() -> None:
    done = threading.Event()
    ticks = []

    def on_tick() -> bool:
        ticks.append(1)
        if len(ticks) == 3:
            done.set()
            return False
        return True

    timer = QuizTimer(on_tick, interval=0.01)
    timer.start()
    assert done.wait(2)
    timer.stop()
    assert len(ticks) == 3
    assert not timer.running


def test_stop_halts_ticking() -> None:
    ticked = threading.Event()
    ticks = []

    def on_tick() -> bool:
        ticks.append(1)
        ticked.set()
        return True

    timer = QuizTimer(on_tick, interval=0.01)
    timer.start()
    assert ticked.wait(2)
    timer.stop()
    count = len(ticks)
    assert not timer.running
    threading.Event().wait(0.05)
    assert len(ticks) == count


def test_failing_tick_stops_the_timer(caplog) -> None:
    calls = []

    def on_tick() -> bool:
        calls.append(1)
        raise RuntimeError("boom")

    timer = QuizTimer(on_tick, interval=0.01, name="failing_timer")
    with caplog.at_level("ERROR"):
        timer.start()
        timer._thread.join(2)
    assert calls == [1]
    assert "failing_timer" in caplog.text
