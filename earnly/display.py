"""
Read-side formatting helpers for the presentation layer.

Nothing here mutates ledger state. History labels are stored as they
were created ("12 May") and only translated to "Today"/"Yesterday"
when displayed.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Sequence

from earnly.models import DailyEarningRecord

_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def date_label(day: date) -> str:
    """Storage label for a history entry, e.g. date(2025, 5, 12) -> '12 May'."""
    return f"{day.day} {_MONTH_ABBREVIATIONS[day.month - 1]}"


def format_date_for_display(label: str, today: date) -> str:
    """
    Map a stored label to what the user sees.

    Args:
        label: Label stored on a DailyEarningRecord
        today: The current local calendar day

    Returns:
        "Today", "Yesterday" or the label unchanged
    """
    if label == date_label(today):
        return "Today"
    if label == date_label(today - timedelta(days=1)):
        return "Yesterday"
    return label


def format_currency(amount: Decimal) -> str:
    """Format an amount as dollars with two decimals: '$1,234.56'."""
    return f"${amount:,.2f}"


def format_earning(amount: Decimal) -> str:
    """Format a history amount: '+$12.34'."""
    return f"+{format_currency(amount)}"


def format_hours(hours: Decimal) -> str:
    return f"{hours:.1f} hrs"


def history_view(
    records: Sequence[DailyEarningRecord],
    show_all: bool = False,
    preview_size: int = 3,
) -> list[DailyEarningRecord]:
    """Full history, or only the most recent `preview_size` entries."""
    if show_all:
        return list(records)
    return list(records[:preview_size])
