"""
Ledger

Owns the ledger state and every operation that changes it.

GUARANTEES:
- lifetime_earnings == work_session_earnings + todays_earnings, always
- work_session_earnings == sum of stored session earnings; it is
  re-summed in session order after every change, never adjusted by
  adding or subtracting, so Decimal rounding cannot make it drift
- active_job_id refers to an existing job or is None
- each operation is atomic (re-entrant lock) and ends with one
  explicit persist call

Today's figures are recomputed from (active job, now) and never
accumulated. Once today is closed (ended by the user) they stay at
zero until the calendar day changes.
"""

import asyncio
import threading
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional
from uuid import UUID

from earnly.display import date_label, history_view
from earnly.engine import (
    ZERO_ACCRUAL,
    Accrual,
    ReconciliationPlan,
    SessionReconciler,
    compute_todays_accrual,
    compute_work_progress,
    is_within_paid_window,
)
from earnly.ledger.repository import LedgerRepository
from earnly.ledger.state import LedgerState
from earnly.logs import get_logger
from earnly.models import (
    DailyEarningRecord,
    Job,
    SessionOrigin,
    ValidationResult,
    WorkSession,
)
from earnly.validation import ScheduleValidator

logger = get_logger(__name__)


class Ledger:
    """
    The engine's single point of mutation.

    The presentation layer reads figures from the properties below and
    calls the operations on user action. A periodic timer (see
    earnly.ticker) only triggers recomputation; it holds no state.
    """

    def __init__(
        self,
        repository: LedgerRepository,
        reconciler: Optional[SessionReconciler] = None,
        validator: Optional[ScheduleValidator] = None,
        clock: Callable[[], datetime] = datetime.now,
        history_preview_size: int = 3,
        refresh_delay_seconds: float = 0.5,
    ):
        """
        Load persisted state and repair any inconsistencies in it.

        Call refresh() once afterwards so missed days are reconciled
        before today's figures are shown.

        Args:
            repository: Loads and saves the state
            reconciler: Missed-day planner (7-day first-run look-back if None)
            validator: Schedule checker used on add/update
            clock: Returns the current local time
            history_preview_size: Entries in the collapsed history view
            refresh_delay_seconds: Advisory pause used by refresh_async
        """
        self._repository = repository
        self._reconciler = reconciler or SessionReconciler()
        self._validator = validator or ScheduleValidator()
        self._clock = clock
        self._history_preview_size = history_preview_size
        self._refresh_delay_seconds = refresh_delay_seconds
        self._lock = threading.RLock()

        self._state = repository.load()
        self._repair_loaded_state()

    # ============ READ ============
    # Jobs and the state are handed out as copies; change them through
    # the operations below.

    @property
    def state(self) -> LedgerState:
        """Snapshot of the whole state. Mutating it does not affect the ledger."""
        with self._lock:
            return self._state.model_copy(deep=True)

    @property
    def jobs(self) -> list[Job]:
        return [job.model_copy(deep=True) for job in self._state.jobs]

    @property
    def active_job(self) -> Optional[Job]:
        job = self._state.active_job
        return job.model_copy(deep=True) if job is not None else None

    @property
    def user_name(self) -> str:
        return self._state.user_name

    @property
    def todays_earnings(self) -> Decimal:
        return self._state.todays_earnings

    @property
    def hours_worked_today(self) -> Decimal:
        return self._state.hours_worked_today

    @property
    def work_session_earnings(self) -> Decimal:
        return self._state.work_session_earnings

    @property
    def lifetime_earnings(self) -> Decimal:
        return self._state.lifetime_earnings

    @property
    def last_reconciled_date(self) -> Optional[date]:
        return self._state.last_reconciled_date

    @property
    def work_sessions(self) -> list[WorkSession]:
        return list(self._state.work_sessions)

    @property
    def daily_earnings_history(self) -> list[DailyEarningRecord]:
        return list(self._state.daily_earnings_history)

    @property
    def history_preview(self) -> list[DailyEarningRecord]:
        """The most recent entries shown before the user expands the list."""
        return history_view(
            self._state.daily_earnings_history,
            preview_size=self._history_preview_size,
        )

    def job_by_id(self, job_id: UUID) -> Optional[Job]:
        job = self._state.find_job(job_id)
        return job.model_copy(deep=True) if job is not None else None

    def sessions_for_job(self, job_id: UUID) -> list[WorkSession]:
        return [s for s in self._state.work_sessions if s.job_id == job_id]

    def work_progress(self, now: Optional[datetime] = None) -> float:
        """Fraction of the active job's day worked so far, in [0, 1]."""
        now = self._now(now)
        job = self._state.active_job
        if job is None or self._is_day_closed(now.date()):
            return 0.0
        return compute_work_progress(job, now)

    def is_working(self, now: Optional[datetime] = None) -> bool:
        """Live on-the-clock indicator for the active job."""
        job = self._state.active_job
        if job is None:
            return False
        return is_within_paid_window(job, self._now(now))

    def validate_job(self, job: Job) -> ValidationResult:
        return self._validator.validate(job)

    # ============ JOBS ============

    def add_job(self, job: Job, now: Optional[datetime] = None) -> Optional[Job]:
        """
        Append a job. The first job added becomes the active job.

        Returns:
            The stored job, or None if a job with the same id exists
        """
        with self._lock:
            if self._state.find_job(job.id) is not None:
                logger.warning("job_add_rejected", job_id=str(job.id), reason="duplicate_id")
                return None

            stored = job.model_copy(deep=True)
            self._state.jobs.append(stored)
            self._log_schedule_issues(stored)
            logger.info("job_added", job_id=str(stored.id), title=stored.title)

            if self._state.active_job_id is None:
                self._state.active_job_id = stored.id
                self._recalculate(now)

            self._persist()
            return stored.model_copy(deep=True)

    def update_job(self, updated: Job, now: Optional[datetime] = None) -> bool:
        """Replace the job with the same id; recompute today if it is active."""
        with self._lock:
            index = self._job_index(updated.id)
            if index is None:
                logger.warning("job_update_rejected", job_id=str(updated.id), reason="not_found")
                return False

            stored = updated.model_copy(deep=True)
            self._state.jobs[index] = stored
            self._log_schedule_issues(stored)
            logger.info("job_updated", job_id=str(stored.id), title=stored.title)

            if self._state.active_job_id == stored.id:
                self._recalculate(now)

            self._persist()
            return True

    def delete_job(self, job_id: UUID, now: Optional[datetime] = None) -> bool:
        """
        Delete a job and its work sessions.

        The running session total is re-summed from the remaining
        sessions. If the job was active, the first remaining job (or
        none) becomes active.
        """
        with self._lock:
            index = self._job_index(job_id)
            if index is None:
                logger.warning("job_delete_rejected", job_id=str(job_id), reason="not_found")
                return False

            self._state.jobs.pop(index)

            remaining = [s for s in self._state.work_sessions if s.job_id != job_id]
            removed_count = len(self._state.work_sessions) - len(remaining)
            self._state.work_sessions = remaining
            self._state.work_session_earnings = self._state.session_total()

            if self._state.active_job_id == job_id:
                jobs = self._state.jobs
                self._state.active_job_id = jobs[0].id if jobs else None
                self._recalculate(now)

            logger.info(
                "job_deleted",
                job_id=str(job_id),
                sessions_removed=removed_count,
                work_session_earnings=str(self._state.work_session_earnings),
            )
            self._persist()
            return True

    def set_active_job(self, job_id: UUID, now: Optional[datetime] = None) -> bool:
        """
        Make a job active and recompute today under its schedule.

        Today's earnings under the previous job are discarded, not
        transferred. End the day first to keep them.
        """
        with self._lock:
            if self._state.find_job(job_id) is None:
                logger.warning("active_job_rejected", job_id=str(job_id), reason="not_found")
                return False

            previous_id = self._state.active_job_id
            if previous_id != job_id and self._state.todays_earnings > 0:
                logger.warning(
                    "todays_earnings_discarded",
                    previous_job_id=str(previous_id),
                    amount=str(self._state.todays_earnings),
                )

            self._state.active_job_id = job_id
            self._recalculate(now)
            logger.info("active_job_changed", job_id=str(job_id))

            self._persist()
            return True

    def set_user_name(self, name: str) -> None:
        with self._lock:
            self._state.user_name = name.strip()
            self._persist()

    # ============ DAY LIFECYCLE ============

    def recalculate_todays_earnings(self, now: Optional[datetime] = None) -> Accrual:
        """Re-derive today's figures for the active job. Safe to call on every tick."""
        with self._lock:
            return self._recalculate(now)

    def end_work_day(self, now: Optional[datetime] = None) -> Optional[WorkSession]:
        """
        Close today into an immutable work session.

        No-op without an active job or when nothing was earned today
        (including when today is already closed).

        Returns:
            The new session, or None if nothing was closed
        """
        with self._lock:
            now = self._now(now)
            job = self._state.active_job
            if job is None:
                return None

            self._recalculate(now)
            if self._state.todays_earnings == 0:
                return None

            today = now.date()
            session = WorkSession(
                session_date=today,
                hours_worked=self._state.hours_worked_today,
                earnings=self._state.todays_earnings,
                job_id=job.id,
                origin=SessionOrigin.END_OF_DAY,
            )

            self._state.work_sessions.append(session)
            self._state.work_session_earnings = self._state.session_total()
            self._state.daily_earnings_history.insert(
                0, DailyEarningRecord(date_label=date_label(today), amount=session.earnings)
            )
            job.lifetime_hours += session.hours_worked

            self._state.todays_earnings = Decimal("0")
            self._state.hours_worked_today = Decimal("0")
            job.hours_worked_today = Decimal("0")
            self._state.last_reconciled_date = today

            logger.info(
                "work_day_ended",
                job_id=str(job.id),
                date=today.isoformat(),
                hours=str(session.hours_worked),
                earnings=str(session.earnings),
            )
            self._persist()
            return session

    def reconcile_missed_sessions(self, now: Optional[datetime] = None) -> Optional[ReconciliationPlan]:
        """Backfill full-day sessions for weekdays missed since the last reconciliation."""
        with self._lock:
            plan = self._reconcile(now)
            if plan is not None:
                self._persist()
            return plan

    def refresh(self, now: Optional[datetime] = None) -> Optional[ReconciliationPlan]:
        """
        Reconcile missed days, then recompute today.

        Run once at startup and whenever the user pulls to refresh.
        Calling it again on the same day changes nothing.
        """
        with self._lock:
            now = self._now(now)
            plan = self._reconcile(now)
            self._recalculate(now)
            if plan is not None:
                self._persist()
            return plan

    async def refresh_async(
        self,
        now: Optional[datetime] = None,
        delay: Optional[float] = None,
    ) -> Optional[ReconciliationPlan]:
        """refresh() after a short UI-feedback pause. Always runs to completion."""
        await asyncio.sleep(self._refresh_delay_seconds if delay is None else delay)
        return self.refresh(now)

    # ============ INTERNAL ============

    def _now(self, now: Optional[datetime]) -> datetime:
        return now if now is not None else self._clock()

    def _job_index(self, job_id: UUID) -> Optional[int]:
        for i, job in enumerate(self._state.jobs):
            if job.id == job_id:
                return i
        return None

    def _is_day_closed(self, day: date) -> bool:
        last = self._state.last_reconciled_date
        return last is not None and last >= day

    def _recalculate(self, now: Optional[datetime]) -> Accrual:
        now = self._now(now)
        job = self._state.active_job

        if job is None or self._is_day_closed(now.date()):
            accrual = ZERO_ACCRUAL
        else:
            accrual = compute_todays_accrual(job, now)

        self._state.todays_earnings = accrual.earnings
        self._state.hours_worked_today = accrual.hours_worked
        if job is not None:
            job.hours_worked_today = accrual.hours_worked
        return accrual

    def _reconcile(self, now: Optional[datetime]) -> Optional[ReconciliationPlan]:
        now = self._now(now)
        plan = self._reconciler.plan(
            self._state.active_job,
            self._state.last_reconciled_date,
            now,
        )
        if plan is None:
            return None

        job = self._state.active_job
        self._state.work_sessions.extend(plan.sessions)
        self._state.daily_earnings_history[:0] = plan.records
        self._state.work_session_earnings = self._state.session_total()
        job.lifetime_hours += sum((s.hours_worked for s in plan.sessions), Decimal("0"))
        self._state.last_reconciled_date = plan.reconciled_through

        logger.info(
            "missed_sessions_reconciled",
            job_id=str(job.id),
            sessions_added=plan.session_count,
            missed_earnings=str(plan.total_missed_earnings),
            reconciled_through=plan.reconciled_through.isoformat(),
        )
        return plan

    def _repair_loaded_state(self) -> None:
        state = self._state

        if state.active_job_id is not None and state.active_job is None:
            replacement = state.jobs[0].id if state.jobs else None
            logger.warning(
                "active_job_dangling",
                job_id=str(state.active_job_id),
                replacement=str(replacement) if replacement else None,
            )
            state.active_job_id = replacement
        elif state.active_job_id is None and state.jobs:
            state.active_job_id = state.jobs[0].id

        total = state.session_total()
        if total != state.work_session_earnings:
            logger.warning(
                "session_total_drift_corrected",
                stored=str(state.work_session_earnings),
                recomputed=str(total),
            )
            state.work_session_earnings = total

    def _log_schedule_issues(self, job: Job) -> None:
        result = self._validator.validate(job)
        for issue in result.issues:
            logger.warning(
                "job_schedule_issue",
                job_id=str(job.id),
                field=issue.field,
                issue_type=issue.issue_type,
                severity=issue.severity,
                message=issue.message,
            )

    def _persist(self) -> None:
        self._repository.save(self._state)
