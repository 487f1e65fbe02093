"""
Shared fixtures.

All clocks are fixed local datetimes in July 2025:
Mon 7 .. Fri 11 are weekdays, Sat 12 / Sun 13 the weekend, Mon 14 a weekday.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from earnly.engine import SessionReconciler
from earnly.ledger import Ledger, LedgerRepository
from earnly.models import Job
from earnly.services.storage import InMemoryStateStorage

MONDAY = datetime(2025, 7, 7, 12, 0)
TUESDAY = datetime(2025, 7, 8, 12, 0)
WEDNESDAY = datetime(2025, 7, 9, 12, 0)
FRIDAY = datetime(2025, 7, 11, 12, 0)
SATURDAY = datetime(2025, 7, 12, 12, 0)
SUNDAY = datetime(2025, 7, 13, 12, 0)
NEXT_MONDAY = datetime(2025, 7, 14, 12, 0)

# 5000 / (9h x 22 days)
DEVELOPER_RATE = Decimal("5000") / Decimal("198")
# 3200 / (7h x 20 days)
DESIGNER_RATE = Decimal("3200") / Decimal("140")


def at(day: datetime, hour: int, minute: int = 0) -> datetime:
    """Same calendar day, different clock time."""
    return day.replace(hour=hour, minute=minute)


def make_developer_job(**overrides) -> Job:
    fields = dict(
        title="Software Developer",
        monthly_salary=Decimal("5000"),
        work_start="08:00",
        work_end="18:00",
        lunch_start="12:00",
        lunch_end="13:00",
        working_days_per_month=22,
    )
    fields.update(overrides)
    return Job(**fields)


def make_designer_job(**overrides) -> Job:
    fields = dict(
        title="Freelance Designer",
        monthly_salary=Decimal("3200"),
        work_start="09:00",
        work_end="17:00",
        lunch_start="12:30",
        lunch_end="13:30",
        working_days_per_month=20,
    )
    fields.update(overrides)
    return Job(**fields)


@pytest.fixture
def developer_job() -> Job:
    return make_developer_job()


@pytest.fixture
def designer_job() -> Job:
    return make_designer_job()


@pytest.fixture
def storage() -> InMemoryStateStorage:
    return InMemoryStateStorage()


@pytest.fixture
def repository(storage) -> LedgerRepository:
    return LedgerRepository(storage, seed_sample_jobs=False, default_user_name="Tester")


@pytest.fixture
def ledger(repository) -> Ledger:
    """An empty ledger whose clock reads Monday noon."""
    return Ledger(
        repository,
        reconciler=SessionReconciler(lookback_days=7),
        clock=lambda: MONDAY,
    )
