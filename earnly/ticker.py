"""
Accrual Ticker

Periodically asks the ledger to re-derive today's figures.

The ticker is only a trigger. It keeps no earnings of its own, so a
skipped, delayed or coalesced tick costs nothing: the next one derives
the same figures from the clock. It also notices when the calendar day
changes while the app stays open and runs a refresh, so the previous
day is reconciled.
"""

import asyncio
from datetime import date, datetime
from typing import Callable, Optional

from earnly.ledger import Ledger
from earnly.logs import get_logger

logger = get_logger(__name__)


class AccrualTicker:
    """Drives Ledger recomputation on a fixed interval."""

    def __init__(
        self,
        ledger: Ledger,
        interval_seconds: float = 60.0,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._ledger = ledger
        self._interval = interval_seconds
        self._clock = clock
        self._last_day: Optional[date] = None

    def tick(self, now: Optional[datetime] = None) -> None:
        """One recomputation; refreshes instead when the day has changed."""
        now = now or self._clock()
        today = now.date()

        if self._last_day is not None and today != self._last_day:
            logger.info("day_changed", previous=self._last_day.isoformat(), today=today.isoformat())
            self._ledger.refresh(now)
        else:
            self._ledger.recalculate_todays_earnings(now)

        self._last_day = today

    async def run(self, stop: asyncio.Event) -> None:
        """
        Tick until `stop` is set.

        Each tick runs in a worker thread. A tick may persist, and a write
        that retries sleeps between attempts, so the loop must not run it
        inline. The Ledger's lock makes this safe.
        """
        while not stop.is_set():
            await asyncio.to_thread(self.tick)
            try:
                await asyncio.wait_for(stop.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                continue
