"""Tests for the periodic accrual ticker."""

import asyncio
import threading
import time
from datetime import date
from decimal import Decimal

import pytest

from earnly.ledger import Ledger, LedgerRepository
from earnly.services.storage import InMemoryStateStorage
from earnly.ticker import AccrualTicker
from tests.conftest import DEVELOPER_RATE, MONDAY, TUESDAY, at, make_developer_job


class SlowStorage(InMemoryStateStorage):
    """In-memory backend whose writes take a while."""

    def save_all(self, values):
        time.sleep(0.2)
        super().save_all(values)


@pytest.fixture
def ledger() -> Ledger:
    """Developer job, reconciled through Friday 4 July."""
    job = make_developer_job()
    storage = InMemoryStateStorage({
        "jobs": [job.model_dump(mode="json", by_alias=True)],
        "activeJobId": str(job.id),
        "lastReconciledDate": "2025-07-04",
    })
    return Ledger(LedgerRepository(storage, seed_sample_jobs=False), clock=lambda: MONDAY)


class TestAccrualTicker:
    """Tests for AccrualTicker."""

    def test_tick_recomputes_today(self, ledger):
        ticker = AccrualTicker(ledger)

        ticker.tick(at(MONDAY, 10))
        assert ledger.todays_earnings == Decimal("2") * DEVELOPER_RATE

        ticker.tick(at(MONDAY, 12))
        assert ledger.todays_earnings == Decimal("4") * DEVELOPER_RATE
        # The first tick of the day does not reconcile
        assert ledger.last_reconciled_date == date(2025, 7, 4)

    def test_day_change_reconciles(self, ledger):
        ticker = AccrualTicker(ledger)
        ticker.tick(at(MONDAY, 17))

        ticker.tick(at(TUESDAY, 9))

        # Monday is closed as a full shift, Tuesday starts accruing
        assert [s.session_date for s in ledger.work_sessions] == [date(2025, 7, 7)]
        assert ledger.last_reconciled_date == date(2025, 7, 7)
        assert ledger.todays_earnings == DEVELOPER_RATE

    def test_run_until_stopped(self, ledger):
        """Test that run() keeps ticking until the stop event is set."""
        ticks = []

        def clock():
            ticks.append(threading.get_ident())
            return at(MONDAY, 12)

        async def scenario():
            stop = asyncio.Event()
            ticker = AccrualTicker(ledger, interval_seconds=0.01, clock=clock)
            task = asyncio.create_task(ticker.run(stop))
            while len(ticks) < 3:
                await asyncio.sleep(0.005)
            stop.set()
            await asyncio.wait_for(task, timeout=5)

        asyncio.run(scenario())

        assert len(ticks) >= 3
        assert ledger.todays_earnings == Decimal("4") * DEVELOPER_RATE

    def test_slow_write_does_not_block_the_loop(self):
        """Test that a tick which persists slowly runs off the event loop."""
        job = make_developer_job()
        storage = SlowStorage({
            "jobs": [job.model_dump(mode="json", by_alias=True)],
            "activeJobId": str(job.id),
            "lastReconciledDate": "2025-07-04",
        })
        ledger = Ledger(LedgerRepository(storage, seed_sample_jobs=False), clock=lambda: MONDAY)
        tick_threads = []

        def clock():
            tick_threads.append(threading.get_ident())
            # First tick is on Monday, the second rolls over to Tuesday and persists
            return at(MONDAY, 12) if len(tick_threads) == 1 else at(TUESDAY, 9)

        async def scenario():
            loop_thread = threading.get_ident()
            heartbeats = 0
            stop = asyncio.Event()
            ticker = AccrualTicker(ledger, interval_seconds=0.01, clock=clock)
            task = asyncio.create_task(ticker.run(stop))
            while storage.write_count == 0:
                heartbeats += 1
                await asyncio.sleep(0.01)
            stop.set()
            await asyncio.wait_for(task, timeout=5)
            return loop_thread, heartbeats

        loop_thread, heartbeats = asyncio.run(scenario())

        assert loop_thread not in tick_threads
        # The loop kept running while the write was sleeping
        assert heartbeats >= 5
        assert ledger.last_reconciled_date == date(2025, 7, 7)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
