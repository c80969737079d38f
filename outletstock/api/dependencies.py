"""
Dependency injection container for FastAPI.

Provides service instances to route handlers. Tests replace these
through ``app.dependency_overrides``.
"""

from functools import lru_cache

from outletstock.application import services
from outletstock.application.use_cases import (
    AdjustStockUseCase,
    CreateMaterialUseCase,
    CreateTransferUseCase,
    ReconcileBatchUseCase,
    SyncMaterialsUseCase,
)
from outletstock.config import Settings, get_settings
from outletstock.core.services import (
    InventoryService,
    MaterialService,
    NotificationService,
    TransferService,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Service dependencies
async def get_material_svc() -> MaterialService:
    return await services.get_material_service()


async def get_inventory_svc() -> InventoryService:
    return await services.get_inventory_service()


async def get_transfer_svc() -> TransferService:
    return await services.get_transfer_service()


async def get_notification_svc() -> NotificationService:
    return await services.get_notification_service()


# Use case dependencies
def get_create_material_use_case() -> CreateMaterialUseCase:
    return CreateMaterialUseCase()


def get_reconcile_batch_use_case() -> ReconcileBatchUseCase:
    return ReconcileBatchUseCase()


def get_sync_materials_use_case() -> SyncMaterialsUseCase:
    return SyncMaterialsUseCase()


def get_adjust_stock_use_case() -> AdjustStockUseCase:
    return AdjustStockUseCase()


def get_create_transfer_use_case() -> CreateTransferUseCase:
    return CreateTransferUseCase()
