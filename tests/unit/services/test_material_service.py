"""Tests for manual material management."""

from unittest.mock import AsyncMock

import pytest

from outletstock.config import SyncSettings
from outletstock.core.entities import Material, StockStatus, SyncStatus
from outletstock.core.exceptions import (
    DuplicateMaterialError,
    MaterialNotFoundError,
    ValidationError,
)
from outletstock.core.services import LocationMapper, MaterialService


@pytest.fixture
def service(
    material_store: AsyncMock, location_mapper: LocationMapper, sync_settings: SyncSettings
) -> MaterialService:
    return MaterialService(material_store, location_mapper, sync_settings)


class TestCreate:
    async def test_resolves_location_names(self, service: MaterialService):
        material = await service.create(
            Material(code="b2", name="Sugar", location_stocks={"360 Mall": 4.0, "kuwait-city": 6.0})
        )

        assert material.code == "B2"
        assert material.location_stocks["mall-360"] == 4.0
        assert material.location_stocks["kuwait-city"] == 6.0
        assert material.location_stocks["central-kitchen"] == 0.0
        assert material.current_stock == 10.0
        assert material.sync_status == SyncStatus.UNSYNCED

    async def test_opening_stock_goes_to_fallback(self, service: MaterialService):
        material = await service.create(Material(code="B2", name="Sugar"), opening_stock=25.0)

        assert material.location_stocks["central-kitchen"] == 25.0
        assert material.current_stock == 25.0
        assert material.status == StockStatus.IN_STOCK

    async def test_without_stock_is_out_of_stock(self, service: MaterialService):
        material = await service.create(Material(code="B2", name="Sugar"))

        assert material.current_stock == 0.0
        assert material.status == StockStatus.OUT_OF_STOCK

    async def test_negative_opening_stock_rejected(self, service: MaterialService):
        with pytest.raises(ValidationError):
            await service.create(Material(code="B2", name="Sugar"), opening_stock=-1.0)

    async def test_duplicate_code_rejected(
        self, service: MaterialService, material_store: AsyncMock
    ):
        await service.create(Material(code="B2", name="Sugar"))

        with pytest.raises(DuplicateMaterialError):
            await service.create(Material(code=" b2 ", name="Sugar again"))

        assert material_store.create_material.await_count == 1


class TestLookup:
    async def test_get_by_code_is_canonical(self, service: MaterialService):
        await service.create(Material(code="B2", name="Sugar"))

        assert (await service.get_by_code(" b2")).name == "Sugar"

    async def test_get_unknown(self, service: MaterialService):
        with pytest.raises(MaterialNotFoundError):
            await service.get_by_code("ZZ")

    async def test_list_filters_inactive(self, service: MaterialService):
        await service.create(Material(code="B2", name="Sugar"))
        await service.create(Material(code="C3", name="Salt"))
        await service.deactivate("C3")

        active = await service.list_materials(active_only=True)

        assert [m.code for m in active] == ["B2"]


class TestDeactivate:
    async def test_soft_deactivates(self, service: MaterialService, material_store: AsyncMock):
        await service.create(Material(code="B2", name="Sugar"), opening_stock=5.0)

        material = await service.deactivate("B2")

        assert material.is_active is False
        assert material_store.materials["B2"].is_active is False
        assert material_store.materials["B2"].current_stock == 5.0

    async def test_deactivate_twice_writes_once(
        self, service: MaterialService, material_store: AsyncMock
    ):
        await service.create(Material(code="B2", name="Sugar"))

        await service.deactivate("B2")
        await service.deactivate("B2")

        assert material_store.update_material.await_count == 1
