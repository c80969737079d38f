"""SQLite storage implementations."""

from outletstock.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    set_pool,
)
from outletstock.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from outletstock.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore
from outletstock.infrastructure.storage.sqlite.notification_store import SQLiteNotificationStore
from outletstock.infrastructure.storage.sqlite.transfer_store import SQLiteTransferStore

# Singleton instances
_material_store: SQLiteMaterialStore | None = None
_inventory_store: SQLiteInventoryStore | None = None
_transfer_store: SQLiteTransferStore | None = None
_notification_store: SQLiteNotificationStore | None = None


async def get_material_store() -> SQLiteMaterialStore:
    """Get singleton material store instance."""
    global _material_store
    if _material_store is None:
        _material_store = SQLiteMaterialStore()
    return _material_store


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_transfer_store() -> SQLiteTransferStore:
    """Get singleton transfer store instance."""
    global _transfer_store
    if _transfer_store is None:
        _transfer_store = SQLiteTransferStore()
    return _transfer_store


async def get_notification_store() -> SQLiteNotificationStore:
    """Get singleton notification store instance."""
    global _notification_store
    if _notification_store is None:
        _notification_store = SQLiteNotificationStore()
    return _notification_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "set_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteMaterialStore",
    "SQLiteInventoryStore",
    "SQLiteTransferStore",
    "SQLiteNotificationStore",
    # Factory functions
    "get_material_store",
    "get_inventory_store",
    "get_transfer_store",
    "get_notification_store",
]
