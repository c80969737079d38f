"""Core domain entities."""

from outletstock.core.entities.inventory import (
    InventoryRecord,
    LocationSummary,
    MovementType,
    StockMovement,
    compute_available,
    compute_total_value,
)
from outletstock.core.entities.material import Material, SyncStatus, canonical_code
from outletstock.core.entities.notification import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from outletstock.core.entities.stock import (
    ItemType,
    StockStatus,
    UnitOfMeasure,
    derive_stock_status,
)
from outletstock.core.entities.transfer import (
    ALLOWED_TRANSITIONS,
    TransferLine,
    TransferOrder,
    TransferPriority,
    TransferStatus,
    generate_transfer_number,
)

__all__ = [
    # Stock
    "StockStatus",
    "UnitOfMeasure",
    "ItemType",
    "derive_stock_status",
    # Material
    "Material",
    "SyncStatus",
    "canonical_code",
    # Inventory
    "InventoryRecord",
    "LocationSummary",
    "MovementType",
    "StockMovement",
    "compute_available",
    "compute_total_value",
    # Transfer
    "TransferOrder",
    "TransferLine",
    "TransferStatus",
    "TransferPriority",
    "ALLOWED_TRANSITIONS",
    "generate_transfer_number",
    # Notification
    "Notification",
    "NotificationType",
    "NotificationPriority",
]
