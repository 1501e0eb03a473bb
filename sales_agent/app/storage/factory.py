"""Pick and build the storage backend named in the settings."""

import logging

from sqlalchemy.engine import make_url

from sales_agent.app.core.errors import ConfigurationError
from sales_agent.app.core.settings import Settings
from sales_agent.app.storage.base import SalesStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> SalesStore:
    """Return an uninitialized store; call ``initialize()`` before use."""
    backend = settings.storage_backend

    if backend == "memory":
        from sales_agent.app.storage.memory import MemoryStore

        store = MemoryStore()
    elif backend == "json":
        from sales_agent.app.storage.json_file import JsonFileStore

        store = JsonFileStore(settings.json_path)
    elif backend in ("sqlite", "postgres"):
        from sales_agent.app.storage.sql import SqlStore

        url_backend = make_url(settings.database_url).get_backend_name()
        if backend == "postgres" and url_backend == "sqlite":
            raise ConfigurationError("STORAGE_BACKEND=postgres requires a PostgreSQL DATABASE_URL")
        if backend == "sqlite" and url_backend != "sqlite":
            raise ConfigurationError("STORAGE_BACKEND=sqlite requires a sqlite:// DATABASE_URL")
        store = SqlStore(settings.database_url)
    else:
        raise ConfigurationError(f"Unknown storage backend: {backend}")

    logger.info("Using %s storage backend", store.backend_name)
    return store
