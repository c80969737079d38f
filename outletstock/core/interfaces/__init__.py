"""Core interfaces (ports) for dependency injection."""

from outletstock.core.interfaces.inventory_store import IInventoryStore
from outletstock.core.interfaces.item_source import (
    ExternalItem,
    ExternalLocationQuantity,
    IExternalItemSource,
)
from outletstock.core.interfaces.material_store import IMaterialStore
from outletstock.core.interfaces.notification_store import INotificationStore
from outletstock.core.interfaces.notifier import INotifier
from outletstock.core.interfaces.transfer_store import ITransferStore

__all__ = [
    "IMaterialStore",
    "IInventoryStore",
    "ITransferStore",
    "INotificationStore",
    "INotifier",
    "IExternalItemSource",
    "ExternalItem",
    "ExternalLocationQuantity",
]
