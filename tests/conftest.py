import pytest

from tapbpm.core.clock import ManualClock
from tapbpm.core.session import TapSession


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start=100.0)


@pytest.fixture
def session(clock: ManualClock) -> TapSession:
    return TapSession(clock=clock)


@pytest.fixture
def tap_at(session: TapSession, clock: ManualClock):
    """Register taps at the given elapsed times since the first tap."""

    def _tap_at(*elapsed: float):
        stats = None
        for t in elapsed:
            clock.set(100.0 + t)
            stats = session.register_tap()
        return stats

    return _tap_at
