"""Adjust Stock Use Case: signed stock change with a movement record."""

from dataclasses import dataclass

from outletstock.application.dto.requests import AdjustStockRequest
from outletstock.application.dto.responses import (
    AdjustStockResponse,
    InventoryRecordResponse,
    StockMovementResponse,
)
from outletstock.core.entities.inventory import InventoryRecord, StockMovement
from outletstock.core.services import InventoryService


@dataclass
class AdjustStockResult:
    """Result of a stock adjustment."""

    record: InventoryRecord
    movement: StockMovement


class AdjustStockUseCase:
    """Apply a stock adjustment to one inventory record."""

    def __init__(self, inventory_service: InventoryService | None = None):
        self._inventory_service = inventory_service

    async def _get_inventory_service(self) -> InventoryService:
        if self._inventory_service is None:
            from outletstock.application.services import get_inventory_service

            self._inventory_service = await get_inventory_service()
        return self._inventory_service

    async def execute(self, record_id: str, request: AdjustStockRequest) -> AdjustStockResult:
        service = await self._get_inventory_service()
        record, movement = await service.adjust_stock(
            record_id,
            delta=request.delta,
            reason=request.reason,
            reference=request.reference,
        )
        return AdjustStockResult(record=record, movement=movement)

    def to_response(self, result: AdjustStockResult) -> AdjustStockResponse:
        return AdjustStockResponse(
            record=InventoryRecordResponse.model_validate(result.record, from_attributes=True),
            movement=StockMovementResponse.model_validate(result.movement, from_attributes=True),
        )
