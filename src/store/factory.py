"""Factory for document store backends."""

from src.config.settings import Settings, get_settings
from src.store.base import Store


def create_store(settings: Settings | None = None) -> Store:
    """Build (but do not connect) the store selected by STORE_BACKEND."""
    settings = settings or get_settings()
    backend = settings.store_backend

    if backend == "mongodb":
        from src.store.mongo_store import MongoStore
        return MongoStore(
            uri=settings.mongodb_uri,
            database_name=settings.mongodb_database,
            unique_emails=settings.unique_emails,
        )

    if backend == "memory":
        from src.store.memory_store import MemoryStore
        return MemoryStore()

    raise ValueError(f"Unknown store backend: {backend!r}")
