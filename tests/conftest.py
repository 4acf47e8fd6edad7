"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Simulated Time:
    Every component takes a clock callable. Tests pass the `clock`
    fixture instead of the real utc_now so time only moves when the
    test advances it:

        def test_wake(store, clock):
            clock.advance(minutes=30)
"""

from datetime import datetime, timedelta

import pytest


# =============================================================================
# Clock Fixtures
# =============================================================================


START_TIME = datetime(2026, 10, 18, 9, 0, 0)


class FakeClock:
    """Callable clock returning a controllable naive UTC time."""

    def __init__(self, now: datetime = START_TIME) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fake clock starting at START_TIME."""
    return FakeClock()

