"""
Shared Services

Thread-safe lazy-initialized services shared across all HTTP endpoints.
Uses singleton pattern with double-checked locking for thread safety.
"""

from threading import RLock
from typing import Optional

from cms.configs.runtime import get_full_config
from cms.exceptions import MissingConfigError
from cms.storage import Database, RecordLocks, StorageClient, SupabaseStorageClient


class ServiceManager:
    """
    Thread-safe singleton manager for all shared services.

    Provides lazy initialization of the runtime config, SQLite database,
    object storage client and per-record sync locks - ensuring each is
    created only once even under concurrent access.
    """

    _instance: Optional["ServiceManager"] = None
    _lock = RLock()

    def __new__(cls) -> "ServiceManager":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return

        self._config: Optional[dict] = None
        self._database: Optional[Database] = None
        self._storage: Optional[StorageClient] = None
        self._record_locks: Optional[RecordLocks] = None
        self._resource_lock = RLock()
        self._initialized = True

    @property
    def config(self) -> dict:
        """Merged runtime configuration (read once)."""
        if self._config is None:
            with self._resource_lock:
                if self._config is None:
                    self._config = get_full_config()
        return self._config

    @property
    def database(self) -> Database:
        """Get or open the SQLite database."""
        if self._database is None:
            with self._resource_lock:
                if self._database is None:
                    self._database = Database(self.config["database_path"])
        return self._database

    @property
    def storage(self) -> StorageClient:
        """Get or create the object storage client."""
        if self._storage is None:
            with self._resource_lock:
                if self._storage is None:
                    config = self.config
                    if not config.get("supabase_url") or not config.get("supabase_service_key"):
                        raise MissingConfigError(
                            "Missing SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY environment variables"
                        )
                    self._storage = SupabaseStorageClient(
                        config["supabase_url"],
                        config["supabase_service_key"],
                        config["storage_bucket"],
                    )
        return self._storage

    @property
    def record_locks(self) -> RecordLocks:
        """Per-record sync locks (no-ops unless serialize_syncs is on)."""
        if self._record_locks is None:
            with self._resource_lock:
                if self._record_locks is None:
                    self._record_locks = RecordLocks(enabled=bool(self.config.get("serialize_syncs")))
        return self._record_locks

    def reset(self) -> None:
        """Reset all services (for testing)."""
        with self._resource_lock:
            if self._database is not None:
                self._database.close()
            self._config = None
            self._database = None
            self._storage = None
            self._record_locks = None

    def set_config(self, config: dict) -> None:
        """Set configuration directly (for testing)."""
        with self._resource_lock:
            self._config = config
            self._record_locks = None

    def set_database(self, database: Database) -> None:
        """Set database directly (for testing)."""
        with self._resource_lock:
            self._database = database

    def set_storage(self, storage: StorageClient) -> None:
        """Set storage client directly (for testing)."""
        with self._resource_lock:
            self._storage = storage


# Module-level singleton instance
_services = ServiceManager()


# --- Public API ---


def get_config() -> dict:
    """Get the merged runtime configuration."""
    return _services.config


def get_database() -> Database:
    """Get the SQLite database."""
    return _services.database


def get_storage() -> StorageClient:
    """Get the object storage client."""
    return _services.storage


def get_record_locks() -> RecordLocks:
    """Get the per-record sync locks."""
    return _services.record_locks


def reset_services() -> None:
    """Reset all lazy-initialized services (for testing)."""
    _services.reset()


def set_config(config: dict) -> None:
    """Set the configuration directly (for testing)."""
    _services.set_config(config)


def set_database(database: Database) -> None:
    """Set the database directly (for testing)."""
    _services.set_database(database)


def set_storage(storage: StorageClient) -> None:
    """Set the storage client directly (for testing)."""
    _services.set_storage(storage)
