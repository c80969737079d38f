"""Core domain services."""

from outletstock.core.services.inventory_aggregation import (
    InventoryService,
    summarize_location,
)
from outletstock.core.services.material_service import MaterialService
from outletstock.core.services.normalizer import UNIT_ALIASES, LocationMapper, normalize_unit
from outletstock.core.services.notification_service import NotificationService, emit_safely
from outletstock.core.services.reconciliation import (
    ItemOutcome,
    MappedMaterial,
    OutcomeAction,
    ReconciliationReport,
    StockReconciler,
)
from outletstock.core.services.sync_orchestrator import (
    SyncOrchestrator,
    SyncRunResult,
    SyncState,
)
from outletstock.core.services.transfer_service import TransferService

__all__ = [
    "normalize_unit",
    "UNIT_ALIASES",
    "LocationMapper",
    "StockReconciler",
    "MappedMaterial",
    "ItemOutcome",
    "OutcomeAction",
    "ReconciliationReport",
    "InventoryService",
    "summarize_location",
    "NotificationService",
    "emit_safely",
    "SyncOrchestrator",
    "SyncRunResult",
    "SyncState",
    "TransferService",
    "MaterialService",
]
