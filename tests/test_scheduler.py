"""
Tests for the debounced scan scheduler.
"""

import pytest

from myanseg.scheduler import ScanScheduler


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def calls():
    return []


@pytest.fixture
def scheduler(clock, calls):
    def scan_fn(lines):
        calls.append(lines)
        return [f"result-{len(calls)}"]
    return ScanScheduler(scan_fn=scan_fn, delay=0.3, clock=clock)


def test_scan_waits_for_delay(scheduler, clock, calls):
    """Test nothing runs before the delay has elapsed."""
    scheduler.request(["a"])
    assert scheduler.pending
    assert scheduler.poll() is None

    clock.now = 0.3
    assert scheduler.poll() == ["result-1"]
    assert calls == [["a"]]
    assert not scheduler.pending
    assert scheduler.poll() is None


def test_rapid_requests_coalesce(scheduler, clock, calls):
    """Test later requests supersede earlier ones."""
    scheduler.request(["first"])
    clock.now = 0.2
    ticket = scheduler.request(["second"])

    clock.now = 0.35
    assert scheduler.poll() is None

    clock.now = 0.6
    scheduler.poll()
    assert calls == [["second"]]
    assert scheduler.last_ticket == ticket == 2


def test_cancel(scheduler, clock, calls):
    """Test a cancelled request never runs."""
    scheduler.request(["a"])
    scheduler.cancel()
    clock.now = 1.0
    assert scheduler.poll() is None
    assert calls == []


def test_flush_runs_immediately(scheduler, calls):
    """Test flush ignores the delay."""
    assert scheduler.flush() is None
    scheduler.request(["a"])
    assert scheduler.flush() == ["result-1"]
    assert scheduler.last_result == ["result-1"]


def test_on_result_callback(clock):
    """Test results are handed to the callback."""
    received = []
    scheduler = ScanScheduler(
        scan_fn=lambda lines: [len(lines)], delay=0.0, clock=clock, on_result=received.append
    )
    scheduler.request(["a", "b"])
    scheduler.poll()
    assert received == [[2]]


def test_default_scan_function(make_lines, clock):
    """Test the default scheduler runs the conflict scanner."""
    scheduler = ScanScheduler(clock=clock)
    scheduler.request(make_lines(["a", "b"], ["ab"]))
    clock.now = 1.0
    assert [c.word for c in scheduler.poll()] == ["ab"]


def test_from_config(make_lines, clock):
    """Test window size and delay come from the conflict configuration."""
    from myanseg.config import ConflictConfig

    scheduler = ScanScheduler.from_config(ConflictConfig(max_window=2, debounce_seconds=1.0), clock=clock)
    assert scheduler.delay == 1.0

    scheduler.request(make_lines(["a", "b", "c"], ["abc"]))
    clock.now = 1.0
    assert scheduler.poll() == []
