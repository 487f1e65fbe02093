"""
Session Reconciler

Closes the gap between the last reconciled day and today so that no
workday is lost while the app was not running.

POLICY: A missed weekday is credited as a full scheduled shift of the
active job. This is a deliberate rule, not an estimate.

The reconciler only PLANS. It returns the sessions, history records and
total to fold in; the Ledger applies the plan in one atomic update.
Today itself is never part of a plan. It stays open for the accrual
engine until the day is ended or a later reconciliation closes it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from earnly.display import date_label
from earnly.engine.schedule import daily_working_hours, hourly_rate, is_workday
from earnly.logs import get_logger
from earnly.models import DailyEarningRecord, Job, SessionOrigin, WorkSession

logger = get_logger(__name__)

DEFAULT_LOOKBACK_DAYS = 7


@dataclass
class ReconciliationPlan:
    """Everything a reconciliation wants to add to the ledger."""
    sessions: list[WorkSession] = field(default_factory=list)
    records: list[DailyEarningRecord] = field(default_factory=list)  # newest first
    total_missed_earnings: Decimal = Decimal("0")
    reconciled_through: Optional[date] = None

    @property
    def session_count(self) -> int:
        return len(self.sessions)


def days_between(start: date, end: date) -> list[date]:
    """Calendar days strictly between start and end, ascending."""
    days = []
    day = start + timedelta(days=1)
    while day < end:
        days.append(day)
        day += timedelta(days=1)
    return days


class SessionReconciler:
    """
    Builds full-day sessions for weekdays missed while the app was closed.

    A fresh install (no last reconciled date) looks back a bounded number
    of days instead of backfilling indefinitely.
    """

    def __init__(self, lookback_days: int = DEFAULT_LOOKBACK_DAYS):
        self._lookback_days = lookback_days

    def plan(
        self,
        job: Optional[Job],
        last_reconciled_date: Optional[date],
        now: datetime,
    ) -> Optional[ReconciliationPlan]:
        """
        Plan the reconciliation for `now`.

        Args:
            job: The active job; None means nothing to reconcile
            last_reconciled_date: Last day already folded into the totals
            now: Current local time

        Returns:
            A plan (possibly with zero sessions, e.g. only weekend days
            were missed), or None if everything through yesterday is
            already closed or the clock moved backwards.
        """
        today = now.date()

        if job is None:
            return None

        last_date = last_reconciled_date or today - timedelta(days=self._lookback_days)
        yesterday = today - timedelta(days=1)

        # Already closed through yesterday (or today, if the day was ended)
        if yesterday <= last_date <= today:
            return None

        if last_date > today:
            logger.warning(
                "clock_moved_backwards",
                last_reconciled_date=last_date.isoformat(),
                today=today.isoformat(),
            )
            return None

        hours = daily_working_hours(job)
        if hours < 0:
            hours = Decimal("0")
        earnings = hourly_rate(job) * hours

        plan = ReconciliationPlan(reconciled_through=yesterday)
        missed_days = []

        for day in days_between(last_date, today):
            if not is_workday(day):
                continue
            plan.sessions.append(WorkSession(
                session_date=day,
                hours_worked=hours,
                earnings=earnings,
                job_id=job.id,
                origin=SessionOrigin.RECONCILED,
            ))
            plan.total_missed_earnings += earnings
            missed_days.append(day)

        for day in sorted(missed_days, reverse=True):
            plan.records.append(DailyEarningRecord(date_label=date_label(day), amount=earnings))

        return plan
