import matplotlib

matplotlib.use("Agg")

import pytest

from feedrag.finance import InvestmentConfig


class FakeScheduler:
    """Records delayed callbacks instead of running a real event loop."""

    def __init__(self):
        self.pending = {}
        self.cancelled = []
        self._next = 0

    def schedule(self, delay_ms, callback):
        self._next += 1
        self.pending[self._next] = (delay_ms, callback)
        return self._next

    def cancel(self, handle):
        self.pending.pop(handle, None)
        self.cancelled.append(handle)

    def fire_all(self):
        for handle, (_delay, callback) in list(self.pending.items()):
            del self.pending[handle]
            callback()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def default_config():
    return InvestmentConfig(
        starting_capital=100000, gross_return_pct=7, horizon_years=30, base_fee_pct=3
    )
