"""
Ledgerman Adapters.

Implementations of the store protocols, and the loader that picks the
configured ones.

Usage:
    from ledgerman.adapters import get_ledger_store

    store = get_ledger_store()
    store.sum_quantity(org.pk, product.pk)

If a configured path cannot be imported, the getters raise ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from ledgerman.conf import ledgerman_settings
from ledgerman.protocols.store import LedgerStore, ProductStore

logger = logging.getLogger(__name__)


# Cached store instances
_lock = threading.Lock()
_ledger_store: LedgerStore | None = None
_product_store: ProductStore | None = None


def _load(setting_name: str):
    path = getattr(ledgerman_settings, setting_name)
    if not path:
        raise ImproperlyConfigured(
            f"LEDGERMAN['{setting_name}'] must be configured. "
            "Example: 'ledgerman.adapters.orm.OrmLedgerStore'"
        )
    try:
        store_class = import_string(path)
    except ImportError as e:
        raise ImproperlyConfigured(
            f"Failed to import {setting_name} '{path}': {e}"
        ) from e
    logger.debug("Loaded %s: %s", setting_name, path)
    return store_class()


def get_ledger_store() -> LedgerStore:
    """
    Return the configured ledger store.

    Raises:
        ImproperlyConfigured: If LEDGER_STORE is empty or import fails
    """
    global _ledger_store

    if _ledger_store is None:
        with _lock:
            if _ledger_store is None:  # double-checked
                _ledger_store = _load('LEDGER_STORE')

    return _ledger_store


def get_product_store() -> ProductStore:
    """
    Return the configured product store.

    Raises:
        ImproperlyConfigured: If PRODUCT_STORE is empty or import fails
    """
    global _product_store

    if _product_store is None:
        with _lock:
            if _product_store is None:  # double-checked
                _product_store = _load('PRODUCT_STORE')

    return _product_store


def reset_stores() -> None:
    """Reset the cached stores. Useful for testing."""
    global _ledger_store, _product_store
    _ledger_store = None
    _product_store = None


__all__ = [
    "get_ledger_store",
    "get_product_store",
    "reset_stores",
]
