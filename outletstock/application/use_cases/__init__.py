"""Application use cases."""

from outletstock.application.use_cases.adjust_stock import AdjustStockResult, AdjustStockUseCase
from outletstock.application.use_cases.create_material import CreateMaterialUseCase
from outletstock.application.use_cases.create_transfer import CreateTransferUseCase
from outletstock.application.use_cases.reconcile_batch import ReconcileBatchUseCase
from outletstock.application.use_cases.sync_materials import SyncMaterialsUseCase

__all__ = [
    "AdjustStockUseCase",
    "AdjustStockResult",
    "CreateMaterialUseCase",
    "CreateTransferUseCase",
    "ReconcileBatchUseCase",
    "SyncMaterialsUseCase",
]
