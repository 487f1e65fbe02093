"""
Application wiring.

create_ledger() builds a ready-to-use Ledger from settings: storage
backend, repository, reconciler, and the startup refresh that folds in
any days missed while the app was closed. The ledger is an explicitly
owned object; pass it to whatever presentation layer consumes it.
"""

from datetime import datetime
from typing import Optional

from earnly.config import Settings, get_settings
from earnly.engine import SessionReconciler
from earnly.ledger import Ledger, LedgerRepository
from earnly.logs import configure_logging, get_logger
from earnly.services.storage import (
    InMemoryStateStorage,
    JsonFileStateStorage,
    StateStorageInterface,
)
from earnly.ticker import AccrualTicker

logger = get_logger(__name__)


def create_storage(settings: Optional[Settings] = None) -> StateStorageInterface:
    """Storage backend selected by EARNLY_STORAGE_BACKEND."""
    storage_settings = (settings or get_settings()).storage
    if storage_settings.backend == "memory":
        return InMemoryStateStorage()
    return JsonFileStateStorage(
        storage_settings.state_path,
        write_attempts=storage_settings.write_attempts,
    )


def create_ledger(
    settings: Optional[Settings] = None,
    storage: Optional[StateStorageInterface] = None,
    now: Optional[datetime] = None,
    configure_logs: bool = True,
) -> Ledger:
    """
    Build the ledger and run the startup refresh.

    Args:
        settings: Application settings (loaded from the environment if None)
        storage: Storage backend override; built from settings if None
        now: Startup time override
        configure_logs: Apply the logging settings first
    """
    settings = settings or get_settings()
    if configure_logs:
        configure_logging(settings.logging)

    engine = settings.engine
    repository = LedgerRepository(
        storage or create_storage(settings),
        seed_sample_jobs=engine.seed_sample_jobs,
        default_user_name=engine.default_user_name,
    )
    ledger = Ledger(
        repository,
        reconciler=SessionReconciler(lookback_days=engine.reconcile_lookback_days),
        history_preview_size=engine.history_preview_size,
        refresh_delay_seconds=engine.refresh_delay_seconds,
    )
    ledger.refresh(now)

    logger.info(
        "ledger_started",
        job_count=len(ledger.jobs),
        lifetime_earnings=str(ledger.lifetime_earnings),
    )
    return ledger


def create_ticker(ledger: Ledger, settings: Optional[Settings] = None) -> AccrualTicker:
    interval = (settings or get_settings()).engine.tick_interval_seconds
    return AccrualTicker(ledger, interval_seconds=interval)
