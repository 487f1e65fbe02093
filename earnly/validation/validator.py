"""
Schedule Validation

DESIGN DECISION: A misconfigured schedule is REPORTED, never rejected
and never silently fixed.

The schedule math degrades gracefully (malformed times count as
midnight, a shift with no working minutes earns 0), so a bad job cannot
crash the engine. It can, however, produce wrong or zero figures. The
validator tells the user why, so they can edit the job.

Checks:
- time strings are "HH:mm" with a real time of day
- the shift ends after it starts
- lunch does not end before it starts
- lunch lies inside the shift
- the day has working minutes left after lunch
- working days per month is in the usual 15-30 range (warning only)
"""

import re

from earnly.engine.schedule import daily_working_minutes, minutes_since_midnight
from earnly.models import Job, ValidationIssue, ValidationResult

_STRICT_TIME = re.compile(r"([01]?\d|2[0-3]):([0-5]\d)")

TIME_FIELDS = ("work_start", "work_end", "lunch_start", "lunch_end")

USUAL_WORKING_DAYS = range(15, 31)


class ScheduleValidator:
    """Validates a job's schedule and returns every issue found."""

    def validate(self, job: Job) -> ValidationResult:
        issues = self._validate_time_formats(job)

        # Interval checks are meaningless if a time could not be read
        if not issues:
            issues.extend(self._validate_intervals(job))

        issues.extend(self._validate_working_days(job))

        return ValidationResult(job_id=job.id, issues=issues)

    def _validate_time_formats(self, job: Job) -> list[ValidationIssue]:
        issues = []
        for field_name in TIME_FIELDS:
            value = getattr(job, field_name)
            if _STRICT_TIME.fullmatch(value) is None:
                issues.append(ValidationIssue(
                    field=field_name,
                    issue_type="invalid_format",
                    message=f"'{value}' is not a time of day in HH:mm format",
                    severity="error",
                    suggested_fix="Enter the time as HH:mm, e.g. 09:00",
                ))
        return issues

    def _validate_intervals(self, job: Job) -> list[ValidationIssue]:
        issues = []
        work_start = minutes_since_midnight(job.work_start)
        work_end = minutes_since_midnight(job.work_end)
        lunch_start = minutes_since_midnight(job.lunch_start)
        lunch_end = minutes_since_midnight(job.lunch_end)

        if work_end <= work_start:
            issues.append(ValidationIssue(
                field="work_end",
                issue_type="inverted_interval",
                message=f"Shift ends ({job.work_end}) before it starts ({job.work_start})",
                severity="error",
                suggested_fix="Shifts crossing midnight are not supported",
            ))

        if lunch_end < lunch_start:
            issues.append(ValidationIssue(
                field="lunch_end",
                issue_type="inverted_interval",
                message=f"Lunch ends ({job.lunch_end}) before it starts ({job.lunch_start})",
                severity="error",
            ))
        elif lunch_start < work_start or lunch_end > work_end:
            issues.append(ValidationIssue(
                field="lunch_start",
                issue_type="outside_shift",
                message="Lunch break is not inside the working hours",
                severity="warning",
                suggested_fix="Move the lunch break inside the shift",
            ))

        if work_end > work_start and daily_working_minutes(job) <= 0:
            issues.append(ValidationIssue(
                field="lunch_end",
                issue_type="no_working_time",
                message="Lunch break is as long as the whole shift",
                severity="error",
                suggested_fix="Shorten the lunch break",
            ))

        return issues

    def _validate_working_days(self, job: Job) -> list[ValidationIssue]:
        if job.working_days_per_month == 0:
            return [ValidationIssue(
                field="working_days_per_month",
                issue_type="no_working_time",
                message="Working days per month is 0, so no hourly rate can be derived",
                severity="error" if job.custom_hourly_rate is None else "warning",
                suggested_fix="Set the number of paid days per month or a custom hourly rate",
            )]
        if job.working_days_per_month not in USUAL_WORKING_DAYS:
            return [ValidationIssue(
                field="working_days_per_month",
                issue_type="suspicious_value",
                message=f"{job.working_days_per_month} working days per month is unusual",
                severity="warning",
            )]
        return []
