"""
Schedule Calculator

Pure functions that turn a job's salary and time-of-day schedule into
rates, and decide whether an instant falls inside paid working time.

All times are local wall-clock times at minute resolution. Nothing in
this module raises on bad input:
- a malformed "HH:mm" string counts as midnight (0 minutes)
- a degenerate schedule (no working minutes) yields a rate of 0

LUNCH BOUNDARY POLICY:
    minute <= lunch_start                -> working
    lunch_start < minute <= lunch_end    -> lunch (unpaid)
    minute > lunch_end                   -> working
"""

import re
from datetime import date, datetime
from decimal import Decimal

from earnly.models import Job

_TIME_OF_DAY = re.compile(r"(\d{1,2}):(\d{1,2})")

MINUTES_PER_HOUR = Decimal(60)


def minutes_since_midnight(time_of_day: str) -> int:
    """
    Parse "HH:mm" into minutes since midnight.

    Returns 0 for anything that is not two colon-separated integers.
    """
    match = _TIME_OF_DAY.fullmatch(time_of_day or "")
    if match is None:
        return 0
    hours, minutes = match.groups()
    return int(hours) * 60 + int(minutes)


def clock_minutes(instant: datetime) -> int:
    """Minutes since local midnight for an instant."""
    return instant.hour * 60 + instant.minute


def is_workday(day: date) -> bool:
    """Monday to Friday."""
    return day.weekday() < 5


def lunch_minutes(job: Job) -> int:
    return minutes_since_midnight(job.lunch_end) - minutes_since_midnight(job.lunch_start)


def daily_working_minutes(job: Job) -> int:
    """
    Scheduled shift length net of lunch.

    Can be zero or negative for a misconfigured job; callers treat
    that as "no defined working day".
    """
    shift = minutes_since_midnight(job.work_end) - minutes_since_midnight(job.work_start)
    return shift - lunch_minutes(job)


def daily_working_hours(job: Job) -> Decimal:
    return Decimal(daily_working_minutes(job)) / MINUTES_PER_HOUR


def hourly_rate(job: Job) -> Decimal:
    """
    Effective hourly rate.

    The custom rate wins when set. Otherwise the monthly salary is spread
    over (daily hours x working days); a non-positive denominator gives 0.
    """
    if job.custom_hourly_rate is not None:
        return job.custom_hourly_rate

    monthly_hours = daily_working_hours(job) * job.working_days_per_month
    if monthly_hours <= 0:
        return Decimal("0")
    return job.monthly_salary / monthly_hours


def earnings_per_minute(job: Job) -> Decimal:
    return hourly_rate(job) / MINUTES_PER_HOUR


def is_within_paid_window(job: Job, instant: datetime) -> bool:
    """
    True when the instant is paid working time for the job.

    The instant must be on a weekday, inside [work_start, work_end],
    and outside (lunch_start, lunch_end].
    """
    if not is_workday(instant.date()):
        return False

    now = clock_minutes(instant)
    work_start = minutes_since_midnight(job.work_start)
    work_end = minutes_since_midnight(job.work_end)
    lunch_start = minutes_since_midnight(job.lunch_start)
    lunch_end = minutes_since_midnight(job.lunch_end)

    within_shift = work_start <= now <= work_end
    at_lunch = lunch_start < now <= lunch_end
    return within_shift and not at_lunch
