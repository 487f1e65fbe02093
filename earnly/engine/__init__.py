"""Earnings engine: schedule math, today's accrual and missed-day reconciliation."""

from earnly.engine.accrual import (
    Accrual,
    ZERO_ACCRUAL,
    compute_todays_accrual,
    compute_work_progress,
    minutes_worked_today,
)
from earnly.engine.reconciler import (
    ReconciliationPlan,
    SessionReconciler,
    days_between,
)
from earnly.engine.schedule import (
    clock_minutes,
    daily_working_hours,
    daily_working_minutes,
    earnings_per_minute,
    hourly_rate,
    is_within_paid_window,
    is_workday,
    minutes_since_midnight,
)

__all__ = [
    # Schedule calculator
    "clock_minutes",
    "daily_working_hours",
    "daily_working_minutes",
    "earnings_per_minute",
    "hourly_rate",
    "is_within_paid_window",
    "is_workday",
    "minutes_since_midnight",
    # Accrual engine
    "Accrual",
    "ZERO_ACCRUAL",
    "compute_todays_accrual",
    "compute_work_progress",
    "minutes_worked_today",
    # Reconciler
    "ReconciliationPlan",
    "SessionReconciler",
    "days_between",
]
