"""
Ledger Repository

Translates between LedgerState and the key-value storage backend.

FAILURE POLICY (best-effort persistence):
- Nothing stored yet          -> built-in defaults
- Whole document unreadable   -> built-in defaults, logged
- One key unreadable          -> default for that key only, logged
- Write fails                 -> logged; in-memory state stays authoritative

Nothing in this module raises into the ledger.
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from earnly.ledger.state import LedgerState, default_state, persisted_field_names
from earnly.logs import get_logger
from earnly.services.storage import StateStorageInterface, StorageError

logger = get_logger(__name__)

# Stored by older versions; lifetime earnings are always derived now
LEGACY_KEYS = ("lifetimeEarnings",)


def _storage_key(field_name: str) -> str:
    return LedgerState.model_fields[field_name].alias or field_name


_ADAPTERS: dict[str, TypeAdapter] = {
    name: TypeAdapter(LedgerState.model_fields[name].annotation)
    for name in persisted_field_names()
}


class LedgerRepository:
    """Loads and saves the ledger state through a storage backend."""

    def __init__(
        self,
        storage: StateStorageInterface,
        seed_sample_jobs: bool = True,
        default_user_name: str = "",
    ):
        """
        Args:
            storage: Backend holding the persisted keys
            seed_sample_jobs: Use sample jobs when no jobs are stored
            default_user_name: Display name when none is stored
        """
        self._storage = storage
        self._seed_sample_jobs = seed_sample_jobs
        self._default_user_name = default_user_name

    @property
    def storage(self) -> StateStorageInterface:
        return self._storage

    def load(self) -> LedgerState:
        """Load the state, falling back to defaults key by key."""
        state = default_state(
            user_name=self._default_user_name,
            seed_jobs=self._seed_sample_jobs,
        )

        try:
            raw = self._storage.load_all()
        except StorageError as e:
            logger.warning("state_load_failed", error=str(e), fallback="defaults")
            return state

        if not raw:
            logger.info("state_defaults_used", job_count=len(state.jobs))
            return state

        for key in LEGACY_KEYS:
            if key in raw:
                logger.info("legacy_key_ignored", key=key)

        for name in persisted_field_names():
            key = _storage_key(name)
            if key not in raw:
                continue
            try:
                value = self._decode(name, raw[key])
            except ValidationError as e:
                logger.warning(
                    "state_key_invalid",
                    key=key,
                    error_count=e.error_count(),
                    fallback="default",
                )
                continue
            setattr(state, name, value)

        logger.info(
            "state_loaded",
            job_count=len(state.jobs),
            session_count=len(state.work_sessions),
        )
        return state

    def save(self, state: LedgerState) -> bool:
        """
        Persist the state.

        Returns:
            True if the write succeeded. A failure is logged, never raised.
        """
        values = self._encode(state)
        try:
            self._storage.save_all(values)
        except StorageError as e:
            logger.error("state_write_failed", error=str(e))
            return False
        return True

    def _decode(self, field_name: str, value: Any) -> Any:
        return _ADAPTERS[field_name].validate_python(value)

    def _encode(self, state: LedgerState) -> dict[str, Any]:
        return state.model_dump(mode="json", by_alias=True)
