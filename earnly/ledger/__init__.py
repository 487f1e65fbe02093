"""Ledger package: state, persistence and the mutation entry points."""

from earnly.ledger.ledger import Ledger
from earnly.ledger.repository import LedgerRepository
from earnly.ledger.state import LedgerState, default_state, sample_jobs

__all__ = [
    "Ledger",
    "LedgerRepository",
    "LedgerState",
    "default_state",
    "sample_jobs",
]
