"""Store dependency shared by the HTTP surfaces."""

from sales_agent.app.core.settings import get_settings
from sales_agent.app.storage.base import SalesStore
from sales_agent.app.storage.factory import build_store

_store_instance = None


def get_store() -> SalesStore:
    """Return the process-wide store, building and initializing it on first use."""
    global _store_instance
    if _store_instance is None:
        store = build_store(get_settings())
        store.initialize()
        _store_instance = store
    return _store_instance


def reset_store() -> None:
    """Close and forget the current store."""
    global _store_instance
    if _store_instance is not None:
        _store_instance.close()
    _store_instance = None
