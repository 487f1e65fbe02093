"""
Data Models Package

This package contains all Pydantic models used in Earnly.
All data the ledger owns or persists conforms to these schemas.
"""

from earnly.models.job import (
    DailyEarningRecord,
    Job,
    SessionOrigin,
    WorkSession,
)
from earnly.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Ledger models
    "DailyEarningRecord",
    "Job",
    "SessionOrigin",
    "WorkSession",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
