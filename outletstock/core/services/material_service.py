"""Material catalog management outside of external sync."""

from outletstock.config import SyncSettings, get_logger
from outletstock.core.entities.material import Material, SyncStatus, canonical_code
from outletstock.core.exceptions import (
    DuplicateMaterialError,
    MaterialNotFoundError,
    ValidationError,
)
from outletstock.core.interfaces.material_store import IMaterialStore
from outletstock.core.services.normalizer import LocationMapper

logger = get_logger(__name__)


class MaterialService:
    """Manual material creation, lookup and deactivation."""

    def __init__(
        self,
        material_store: IMaterialStore,
        location_mapper: LocationMapper,
        sync_settings: SyncSettings,
    ):
        self._store = material_store
        self._mapper = location_mapper
        self._settings = sync_settings

    async def create(
        self,
        material: Material,
        opening_stock: float | None = None,
    ) -> Material:
        """
        Create a material by hand.

        Supplied location keys are resolved to canonical keys; an
        ``opening_stock`` without a breakdown goes to the fallback location.

        Raises:
            DuplicateMaterialError: if the code already exists
        """
        if await self._store.get_by_code(material.code) is not None:
            raise DuplicateMaterialError(material.code)

        stocks = self._mapper.empty_stock_map()
        for key, qty in self._mapper.fold(material.location_stocks.items()).items():
            stocks[key] += qty
        if opening_stock:
            if opening_stock < 0:
                raise ValidationError("opening_stock", "must be >= 0", opening_stock)
            stocks[self._mapper.fallback] += opening_stock

        material.location_stocks = stocks
        material.sync_status = SyncStatus.UNSYNCED
        material.recompute()
        material = await self._store.create_material(material)
        logger.info("material_created", code=material.code, current_stock=material.current_stock)
        return material

    async def get_by_code(self, code: str) -> Material:
        material = await self._store.get_by_code(canonical_code(code))
        if material is None:
            raise MaterialNotFoundError(code)
        return material

    async def list_materials(
        self,
        category: str | None = None,
        active_only: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Material]:
        return await self._store.list_materials(
            limit=limit, offset=offset, category=category, active_only=active_only
        )

    async def deactivate(self, code: str) -> Material:
        """Soft-deactivate a material; it is never hard deleted."""
        material = await self.get_by_code(code)
        if material.is_active:
            material.is_active = False
            material = await self._store.update_material(material)
            logger.info("material_deactivated", code=material.code)
        return material
