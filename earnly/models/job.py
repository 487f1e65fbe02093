"""
Core Data Models for Earnly

These models define the schemas for everything the ledger owns:
1. Jobs (salary + schedule profiles)
2. Work sessions (immutable closed-day records)
3. Daily earning records (display-oriented history entries)

DESIGN DECISION: Amounts and hours are Decimal, not float.
Session earnings keep full Decimal precision (e.g. 5000/198), so the
running total is always re-summed from the sessions in one fixed
order rather than adjusted incrementally.

Persisted field names are camelCase (via aliases) so the stored
document keeps the same keys across versions.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS
# =============================================================================

class SessionOrigin(str, Enum):
    """How a work session came to exist."""
    END_OF_DAY = "end_of_day"    # User closed the day explicitly
    RECONCILED = "reconciled"    # Synthesized for a day the app was closed


# =============================================================================
# JOB
# =============================================================================

class Job(BaseModel):
    """
    A compensation + schedule profile.

    Schedule fields are "HH:mm" strings. They are NOT validated here:
    a malformed time degrades to midnight in the schedule math, and
    ScheduleValidator reports it to the user instead of rejecting the job.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Identity
    id: UUID = Field(
        default_factory=uuid4,
        description="Unique job ID, immutable"
    )

    title: str = Field(
        ...,
        max_length=200,
        description="Job title"
    )
    monthly_salary: Decimal = Field(
        ...,
        ge=0,
        description="Gross monthly salary"
    )

    # Schedule
    work_start: str = Field(default="09:00", description="Shift start (HH:mm)")
    work_end: str = Field(default="17:00", description="Shift end (HH:mm)")
    lunch_start: str = Field(default="12:00", description="Lunch start (HH:mm)")
    lunch_end: str = Field(default="13:00", description="Lunch end (HH:mm)")

    working_days_per_month: int = Field(
        default=22,
        ge=0,
        le=31,
        alias="workingDays",
        description="Paid working days per month"
    )
    custom_hourly_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Overrides the computed hourly rate when set"
    )

    # Hours tracking
    hours_worked_today: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Recomputed on every tick; not authoritative"
    )
    lifetime_hours: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Cumulative hours over all closed sessions"
    )


# =============================================================================
# HISTORY
# =============================================================================

class WorkSession(BaseModel):
    """
    One completed work day for one job.

    CRITICAL: Sessions are never mutated after creation. They are only
    removed when their owning job is deleted.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    session_date: date = Field(
        ...,
        alias="date",
        description="Local calendar day the session covers"
    )
    hours_worked: Decimal = Field(..., ge=0)
    earnings: Decimal = Field(..., ge=0)
    job_id: UUID = Field(
        ...,
        description="Job that was active; may dangle after the job is deleted"
    )
    origin: SessionOrigin = Field(
        default=SessionOrigin.END_OF_DAY,
        description="Whether the day was closed by the user or synthesized"
    )


class DailyEarningRecord(BaseModel):
    """
    Display-oriented history entry.

    The date is kept as the formatted label it was created with
    (e.g. "12 May"); earnly.display maps it to Today/Yesterday on read.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    date_label: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
