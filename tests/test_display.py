"""Tests for display formatting helpers."""

from datetime import date
from decimal import Decimal

from earnly.display import (
    date_label,
    format_currency,
    format_date_for_display,
    format_earning,
    format_hours,
    history_view,
)
from earnly.models import DailyEarningRecord


class TestDateLabels:
    """Tests for stored history labels and their display form."""

    def test_date_label(self):
        assert date_label(date(2025, 5, 12)) == "12 May"
        assert date_label(date(2025, 7, 8)) == "8 Jul"

    def test_today_and_yesterday(self):
        today = date(2025, 7, 8)
        assert format_date_for_display("8 Jul", today) == "Today"
        assert format_date_for_display("7 Jul", today) == "Yesterday"
        assert format_date_for_display("6 Jul", today) == "6 Jul"

    def test_yesterday_across_year_end(self):
        assert format_date_for_display("31 Dec", date(2026, 1, 1)) == "Yesterday"


class TestAmounts:
    """Tests for money and hour formatting."""

    def test_currency(self):
        assert format_currency(Decimal("1234.5")) == "$1,234.50"
        assert format_currency(Decimal("0")) == "$0.00"

    def test_earning(self):
        assert format_earning(Decimal("227.3")) == "+$227.30"

    def test_hours(self):
        assert format_hours(Decimal("9")) == "9.0 hrs"
        assert format_hours(Decimal("4.5")) == "4.5 hrs"


class TestHistoryView:
    """Tests for the collapsed/expanded history list."""

    records = [
        DailyEarningRecord(date_label=label, amount=Decimal("100"))
        for label in ("10 Jul", "9 Jul", "8 Jul", "7 Jul")
    ]

    def test_preview(self):
        assert [r.date_label for r in history_view(self.records)] == ["10 Jul", "9 Jul", "8 Jul"]

    def test_show_all(self):
        assert len(history_view(self.records, show_all=True)) == 4

    def test_short_history(self):
        assert history_view(self.records[:1], preview_size=3) == self.records[:1]
