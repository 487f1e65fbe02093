"""
Ledger State

The single state object the Ledger owns. Persisted fields are
serialized under their camelCase aliases, one top-level key each:

    jobs, activeJobId, userName, workSessionEarnings,
    dailyEarningsHistory, workSessions, lastReconciledDate

Today's figures are ephemeral: they are re-derived from the clock and
are never written to storage. Lifetime earnings are never stored at all.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from earnly.models import DailyEarningRecord, Job, WorkSession


class LedgerState(BaseModel):
    """Jobs, history and running totals."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Persisted
    jobs: list[Job] = Field(default_factory=list)
    active_job_id: Optional[UUID] = None
    user_name: str = ""
    work_session_earnings: Decimal = Field(
        default=Decimal("0"),
        description="Sum of all closed work sessions"
    )
    daily_earnings_history: list[DailyEarningRecord] = Field(
        default_factory=list,
        description="Most recent first"
    )
    work_sessions: list[WorkSession] = Field(default_factory=list)
    last_reconciled_date: Optional[date] = Field(
        default=None,
        description="Last day folded into work_session_earnings"
    )

    # Ephemeral: the open day
    todays_earnings: Decimal = Field(default=Decimal("0"), exclude=True)
    hours_worked_today: Decimal = Field(default=Decimal("0"), exclude=True)

    @property
    def lifetime_earnings(self) -> Decimal:
        """Closed sessions plus the open day. Always derived."""
        return self.work_session_earnings + self.todays_earnings

    @property
    def active_job(self) -> Optional[Job]:
        return self.find_job(self.active_job_id)

    def find_job(self, job_id: Optional[UUID]) -> Optional[Job]:
        if job_id is None:
            return None
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None

    def session_total(self) -> Decimal:
        """Exact sum of the stored sessions' earnings."""
        return sum((s.earnings for s in self.work_sessions), Decimal("0"))


def persisted_field_names() -> list[str]:
    """Field names written to storage, in declaration order."""
    return [
        name for name, info in LedgerState.model_fields.items()
        if not info.exclude
    ]


def sample_jobs() -> list[Job]:
    """Jobs shown on a fresh install."""
    return [
        Job(
            title="Software Developer",
            monthly_salary=Decimal("5000"),
            work_start="08:00",
            work_end="18:00",
            lunch_start="12:00",
            lunch_end="13:00",
            working_days_per_month=22,
        ),
        Job(
            title="Freelance Designer",
            monthly_salary=Decimal("3200"),
            work_start="09:00",
            work_end="17:00",
            lunch_start="12:30",
            lunch_end="13:30",
            working_days_per_month=20,
        ),
    ]


def default_state(user_name: str = "", seed_jobs: bool = True) -> LedgerState:
    """Built-in defaults: optional sample jobs, first one active, zero totals."""
    jobs = sample_jobs() if seed_jobs else []
    return LedgerState(
        jobs=jobs,
        active_job_id=jobs[0].id if jobs else None,
        user_name=user_name,
    )
