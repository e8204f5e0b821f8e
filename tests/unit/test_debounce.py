from safe_lib.binding.debounce import Debouncer
from tests.helpers import ManualScheduler


def test_burst_collapses_into_one_trailing_call():
    clock = ManualScheduler()
    calls = []
    d = Debouncer(clock, 0.1, lambda: calls.append(clock.now))
    for _ in range(5):
        d("payload")
        clock.advance(0.05)
    assert calls == []
    clock.advance(0.1)
    assert len(calls) == 1
    assert not d.pending


def test_flush_runs_pending_call_now():
    clock = ManualScheduler()
    calls = []
    d = Debouncer(clock, 0.1, lambda: calls.append(1))
    d.flush()
    assert calls == []
    d()
    d.flush()
    assert calls == [1]
    clock.advance(1)
    assert calls == [1]


def test_cancel_drops_pending_call():
    clock = ManualScheduler()
    calls = []
    d = Debouncer(clock, 0.1, lambda: calls.append(1))
    d()
    d.cancel()
    clock.advance(1)
    assert calls == []
