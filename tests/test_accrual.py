"""Tests for today's accrual and work progress."""

from decimal import Decimal

import pytest

from earnly.engine import (
    ZERO_ACCRUAL,
    compute_todays_accrual,
    compute_work_progress,
    minutes_worked_today,
)
from tests.conftest import DEVELOPER_RATE, MONDAY, SATURDAY, SUNDAY, at, make_developer_job


class TestMinutesWorkedToday:
    """Tests for elapsed paid minutes on the reference 08:00-18:00 job."""

    @pytest.mark.parametrize("hour,minute,expected", [
        (7, 0, 0),
        (8, 0, 0),        # not started yet at the first minute
        (8, 30, 30),
        (12, 0, 240),
        (12, 1, 240),     # lunch minutes are not counted
        (12, 30, 240),
        (13, 0, 240),
        (13, 1, 241),
        (18, 0, 540),
        (18, 30, 540),    # capped at the shift end
        (23, 59, 540),
    ])
    def test_weekday_minutes(self, developer_job, hour, minute, expected):
        assert minutes_worked_today(developer_job, at(MONDAY, hour, minute)) == expected

    def test_weekend_is_zero(self, developer_job):
        assert minutes_worked_today(developer_job, at(SATURDAY, 15)) == 0
        assert minutes_worked_today(developer_job, at(SUNDAY, 15)) == 0

    def test_lunch_outside_shift_never_goes_negative(self):
        job = make_developer_job(lunch_start="06:00", lunch_end="07:30")
        assert minutes_worked_today(job, at(MONDAY, 8, 10)) == 0


class TestComputeTodaysAccrual:
    """Tests for earnings accrued so far today."""

    def test_earnings_at_noon(self, developer_job):
        accrual = compute_todays_accrual(developer_job, at(MONDAY, 12))
        assert accrual.minutes_worked == 240
        assert accrual.hours_worked == Decimal("4")
        assert accrual.earnings == Decimal("4") * DEVELOPER_RATE

    def test_full_day_equals_daily_pay(self, developer_job):
        accrual = compute_todays_accrual(developer_job, at(MONDAY, 18, 30))
        assert accrual.hours_worked == Decimal("9")
        assert accrual.earnings.quantize(Decimal("0.01")) == Decimal("227.27")

    def test_before_start_is_zero(self, developer_job):
        assert compute_todays_accrual(developer_job, at(MONDAY, 7, 45)) == ZERO_ACCRUAL

    def test_weekend_is_zero(self, developer_job):
        assert compute_todays_accrual(developer_job, at(SATURDAY, 12)) == ZERO_ACCRUAL

    def test_degenerate_schedule_earns_nothing(self):
        job = make_developer_job(work_start="09:00", work_end="10:00",
                                 lunch_start="09:00", lunch_end="10:00")
        assert compute_todays_accrual(job, at(MONDAY, 9, 30)) == ZERO_ACCRUAL

    def test_custom_rate(self):
        job = make_developer_job(custom_hourly_rate=Decimal("30"))
        accrual = compute_todays_accrual(job, at(MONDAY, 10))
        assert accrual.earnings == Decimal("60")

    def test_same_instant_gives_same_result(self, developer_job):
        """Accrual is a pure function of the schedule and the clock."""
        now = at(MONDAY, 15, 17)
        assert compute_todays_accrual(developer_job, now) == compute_todays_accrual(developer_job, now)

    def test_accrual_never_decreases_during_the_day(self, developer_job):
        previous = Decimal("0")
        for hour in range(0, 24):
            for minute in (0, 15, 30, 45):
                earnings = compute_todays_accrual(developer_job, at(MONDAY, hour, minute)).earnings
                assert earnings >= previous
                previous = earnings


class TestWorkProgress:
    """Tests for the fraction of the day worked."""

    def test_progress_at_noon(self, developer_job):
        assert compute_work_progress(developer_job, at(MONDAY, 12)) == pytest.approx(240 / 540)

    def test_progress_is_capped(self, developer_job):
        assert compute_work_progress(developer_job, at(MONDAY, 20)) == 1.0

    def test_progress_before_start(self, developer_job):
        assert compute_work_progress(developer_job, at(MONDAY, 6)) == 0.0

    def test_progress_for_degenerate_schedule(self):
        job = make_developer_job(work_start="10:00", work_end="09:00")
        assert compute_work_progress(job, at(MONDAY, 12)) == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
