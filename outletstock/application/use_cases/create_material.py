"""Create Material Use Case: manual catalog entry with an opening stock."""

from outletstock.application.dto.requests import CreateMaterialRequest
from outletstock.application.dto.responses import MaterialResponse
from outletstock.config import get_logger, get_settings
from outletstock.core.entities.material import Material
from outletstock.core.services import MaterialService
from outletstock.core.services.normalizer import normalize_unit

logger = get_logger(__name__)


class CreateMaterialUseCase:
    """Create a material outside of external sync."""

    def __init__(self, material_service: MaterialService | None = None):
        self._material_service = material_service

    async def _get_material_service(self) -> MaterialService:
        if self._material_service is None:
            from outletstock.application.services import get_material_service

            self._material_service = await get_material_service()
        return self._material_service

    async def execute(self, request: CreateMaterialRequest) -> Material:
        sync = get_settings().sync
        material = Material(
            code=request.code,
            name=request.name,
            category=request.category or sync.default_category,
            description=request.description,
            unit=normalize_unit(request.unit, sync.default_unit),
            unit_price=request.unit_price,
            location_stocks=request.location_stocks,
            minimum_stock=(
                request.minimum_stock if request.minimum_stock is not None else sync.minimum_stock
            ),
            maximum_stock=(
                request.maximum_stock if request.maximum_stock is not None else sync.maximum_stock
            ),
            reorder_point=(
                request.reorder_point if request.reorder_point is not None else sync.reorder_point
            ),
            supplier_id=request.supplier_id,
            supplier_name=request.supplier_name,
        )

        service = await self._get_material_service()
        return await service.create(material, opening_stock=request.opening_stock)

    def to_response(self, material: Material) -> MaterialResponse:
        return MaterialResponse.model_validate(material, from_attributes=True)
