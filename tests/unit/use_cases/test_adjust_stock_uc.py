"""Unit tests for AdjustStockUseCase."""

from unittest.mock import AsyncMock

import pytest

from outletstock.application.dto.requests import AdjustStockRequest
from outletstock.application.use_cases.adjust_stock import AdjustStockUseCase
from outletstock.core.entities import InventoryRecord, MovementType, StockStatus
from outletstock.core.exceptions import InsufficientStockError
from outletstock.core.services import InventoryService


@pytest.fixture
async def inventory(inventory_store: AsyncMock) -> InventoryService:
    service = InventoryService(inventory_store)
    await service.create_record(
        InventoryRecord(
            location_id="vibe-complex",
            item_code="A1",
            item_name="Flour",
            current_stock=8.0,
            minimum_stock=5.0,
            maximum_stock=50.0,
            unit_price=1.5,
        )
    )
    return service


class TestAdjustStockUseCase:
    async def test_adjusts_and_builds_response(self, inventory: InventoryService):
        use_case = AdjustStockUseCase(inventory_service=inventory)

        result = await use_case.execute(
            "rec-1", AdjustStockRequest(delta=-4.0, reason="Wastage", reference="W-1")
        )
        response = use_case.to_response(result)

        assert response.record.current_stock == 4.0
        assert response.record.status == StockStatus.LOW_STOCK
        assert response.record.total_value == 6.0
        assert response.movement.movement_type == MovementType.OUT
        assert response.movement.reference == "W-1"

    async def test_insufficient_stock(self, inventory: InventoryService):
        use_case = AdjustStockUseCase(inventory_service=inventory)

        with pytest.raises(InsufficientStockError):
            await use_case.execute("rec-1", AdjustStockRequest(delta=-9.0, reason="Wastage"))
