"""Unit tests for CreateMaterialUseCase."""

from unittest.mock import AsyncMock

import pytest

from outletstock.application.dto.requests import CreateMaterialRequest
from outletstock.application.use_cases.create_material import CreateMaterialUseCase
from outletstock.core.entities import Material, StockStatus, UnitOfMeasure


@pytest.fixture
def mock_material_service():
    """Material service that echoes the material it is given."""
    service = AsyncMock()

    async def create(material: Material, opening_stock=None) -> Material:
        material.id = "mat-1"
        return material

    service.create.side_effect = create
    return service


class TestCreateMaterialUseCase:
    async def test_applies_defaults(self, mock_material_service):
        use_case = CreateMaterialUseCase(material_service=mock_material_service)

        material = await use_case.execute(CreateMaterialRequest(code="flr-001", name="Flour"))

        assert material.code == "FLR-001"
        assert material.category == "General"
        assert material.unit == UnitOfMeasure.KG
        assert material.minimum_stock == 10.0
        assert material.maximum_stock == 1000.0
        assert material.reorder_point == 20.0

    async def test_normalizes_free_text_unit(self, mock_material_service):
        use_case = CreateMaterialUseCase(material_service=mock_material_service)

        material = await use_case.execute(
            CreateMaterialRequest(code="OIL", name="Oil", unit="Litres")
        )

        assert material.unit == UnitOfMeasure.LTR

    async def test_passes_opening_stock(self, mock_material_service):
        use_case = CreateMaterialUseCase(material_service=mock_material_service)

        await use_case.execute(
            CreateMaterialRequest(code="FLR", name="Flour", opening_stock=12.0, minimum_stock=2.0)
        )

        material = mock_material_service.create.call_args.args[0]
        assert material.minimum_stock == 2.0
        assert mock_material_service.create.call_args.kwargs["opening_stock"] == 12.0

    async def test_to_response(self, mock_material_service):
        use_case = CreateMaterialUseCase(material_service=mock_material_service)
        material = await use_case.execute(
            CreateMaterialRequest(code="FLR", name="Flour", location_stocks={"mall-360": 4.0})
        )

        response = use_case.to_response(material)

        assert response.id == "mat-1"
        assert response.current_stock == 4.0
        assert response.status == StockStatus.LOW_STOCK
