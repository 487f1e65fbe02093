"""Tests for the schedule calculator."""

from decimal import Decimal

import pytest

from earnly.engine.schedule import (
    daily_working_hours,
    daily_working_minutes,
    earnings_per_minute,
    hourly_rate,
    is_within_paid_window,
    minutes_since_midnight,
)
from tests.conftest import MONDAY, SATURDAY, SUNDAY, DEVELOPER_RATE, at, make_developer_job


class TestMinutesSinceMidnight:
    """Tests for HH:mm parsing."""

    def test_parses_time_of_day(self):
        assert minutes_since_midnight("08:00") == 480
        assert minutes_since_midnight("13:30") == 810
        assert minutes_since_midnight("00:00") == 0

    @pytest.mark.parametrize("value", ["", "abc", "8", "12:xx", "1:2:3", "-1:00", "12-30"])
    def test_malformed_input_counts_as_midnight(self, value):
        """Malformed strings degrade to 0 instead of raising."""
        assert minutes_since_midnight(value) == 0


class TestRates:
    """Tests for daily hours and hourly rate derivation."""

    def test_reference_job_rate(self, developer_job):
        """5000/month, 08-18 with a 1h lunch, 22 days -> 540 min, ~25.2525/h."""
        assert daily_working_minutes(developer_job) == 540
        assert daily_working_hours(developer_job) == Decimal("9")
        assert hourly_rate(developer_job) == DEVELOPER_RATE
        assert hourly_rate(developer_job).quantize(Decimal("0.0001")) == Decimal("25.2525")

    def test_earnings_per_minute(self, developer_job):
        assert earnings_per_minute(developer_job) == DEVELOPER_RATE / 60

    def test_custom_rate_overrides_salary(self):
        job = make_developer_job(custom_hourly_rate=Decimal("40"))
        assert hourly_rate(job) == Decimal("40")

    def test_lunch_longer_than_shift_gives_zero_rate(self):
        """A degenerate schedule yields 0, not a division error."""
        job = make_developer_job(work_start="09:00", work_end="10:00",
                                 lunch_start="08:00", lunch_end="12:00")
        assert daily_working_minutes(job) < 0
        assert hourly_rate(job) == Decimal("0")

    def test_zero_working_days_gives_zero_rate(self):
        job = make_developer_job(working_days_per_month=0)
        assert hourly_rate(job) == Decimal("0")

    def test_malformed_times_do_not_raise(self):
        job = make_developer_job(work_start="soon", work_end="later")
        # Both parse as midnight: shift of 0 minus a 60 minute lunch
        assert daily_working_minutes(job) == -60
        assert hourly_rate(job) == Decimal("0")


class TestPaidWindow:
    """Tests for the on-the-clock predicate and its lunch tie-break."""

    @pytest.mark.parametrize("hour,minute,expected", [
        (7, 59, False),
        (8, 0, True),     # shift start is inclusive
        (11, 59, True),
        (12, 0, True),    # lunch start still counts as work
        (12, 1, False),
        (13, 0, False),   # lunch end counts as lunch
        (13, 1, True),
        (18, 0, True),    # shift end is inclusive
        (18, 1, False),
    ])
    def test_weekday_boundaries(self, developer_job, hour, minute, expected):
        assert is_within_paid_window(developer_job, at(MONDAY, hour, minute)) is expected

    def test_weekend_is_never_paid(self, developer_job):
        assert is_within_paid_window(developer_job, at(SATURDAY, 10)) is False
        assert is_within_paid_window(developer_job, at(SUNDAY, 10)) is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
