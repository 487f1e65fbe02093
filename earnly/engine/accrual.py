"""
Accrual Engine

Computes what has been earned so far today for a job.

DESIGN DECISION: Accrual is re-derived from (schedule, now) on every
call. There is no running per-minute accumulator, so a missed or
delayed tick can never lose or double-count money.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from earnly.engine.schedule import (
    MINUTES_PER_HOUR,
    clock_minutes,
    daily_working_minutes,
    hourly_rate,
    is_workday,
    minutes_since_midnight,
)
from earnly.models import Job


@dataclass(frozen=True)
class Accrual:
    """Today's figures for one job at one instant."""
    minutes_worked: int
    earnings: Decimal

    @property
    def hours_worked(self) -> Decimal:
        return Decimal(self.minutes_worked) / MINUTES_PER_HOUR


ZERO_ACCRUAL = Accrual(minutes_worked=0, earnings=Decimal("0"))


def minutes_worked_today(job: Job, now: datetime) -> int:
    """
    Minutes of paid work elapsed today, net of lunch.

    Zero on weekends and before the shift starts. During lunch only the
    elapsed part of the break is deducted; after lunch the full break is.
    """
    if not is_workday(now.date()):
        return 0

    current = clock_minutes(now)
    work_start = minutes_since_midnight(job.work_start)
    work_end = minutes_since_midnight(job.work_end)
    lunch_start = minutes_since_midnight(job.lunch_start)
    lunch_end = minutes_since_midnight(job.lunch_end)

    if current <= work_start:
        return 0

    worked = min(current, work_end) - work_start

    if current > lunch_end:
        worked -= lunch_end - lunch_start
    elif current > lunch_start:
        worked -= current - lunch_start

    return max(0, worked)


def compute_todays_accrual(job: Job, now: datetime) -> Accrual:
    """
    Minutes worked and money earned today.

    A job whose schedule has no working minutes earns nothing.
    """
    if daily_working_minutes(job) <= 0:
        return ZERO_ACCRUAL

    minutes = minutes_worked_today(job, now)
    if minutes == 0:
        return ZERO_ACCRUAL

    earnings = Decimal(minutes) / MINUTES_PER_HOUR * hourly_rate(job)
    return Accrual(minutes_worked=minutes, earnings=earnings)


def compute_work_progress(job: Job, now: datetime) -> float:
    """Fraction of today's scheduled minutes already worked, in [0, 1]."""
    total = daily_working_minutes(job)
    if total <= 0:
        return 0.0

    worked = minutes_worked_today(job, now)
    return min(worked / total, 1.0)
