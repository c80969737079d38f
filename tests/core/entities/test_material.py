"""Tests for the Material entity."""

import pytest
from pydantic import ValidationError

from outletstock.core.entities.material import Material, SyncStatus, canonical_code
from outletstock.core.entities.stock import StockStatus, UnitOfMeasure


class TestCanonicalCode:
    def test_trims_and_uppercases(self):
        assert canonical_code("  flr-001 ") == "FLR-001"

    def test_none_is_empty(self):
        assert canonical_code(None) == ""


class TestMaterial:
    def test_defaults(self):
        material = Material(code="a1", name="Flour")

        assert material.code == "A1"
        assert material.unit == UnitOfMeasure.KG
        assert material.current_stock == 0.0
        assert material.status == StockStatus.OUT_OF_STOCK
        assert material.sync_status == SyncStatus.UNSYNCED
        assert material.is_active is True

    def test_current_stock_is_sum_of_locations(self):
        material = Material(
            code="A1",
            name="Flour",
            location_stocks={"central-kitchen": 10.0, "mall-360": 5.0},
        )

        assert material.current_stock == 15.0
        assert material.status == StockStatus.IN_STOCK

    def test_caller_supplied_total_is_ignored(self):
        material = Material(
            code="A1",
            name="Flour",
            current_stock=999.0,
            status=StockStatus.OVERSTOCK,
            location_stocks={"central-kitchen": 10.0},
        )

        assert material.current_stock == 10.0
        assert material.status == StockStatus.LOW_STOCK

    def test_blank_code_rejected(self):
        with pytest.raises(ValidationError):
            Material(code="   ", name="Flour")

    def test_negative_location_stock_rejected(self):
        with pytest.raises(ValidationError):
            Material(code="A1", name="Flour", location_stocks={"mall-360": -1.0})

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Material(code="A1", name="Flour", unit_price=-0.5)

    def test_add_location_stock_recomputes(self):
        material = Material(code="A1", name="Flour", location_stocks={"central-kitchen": 10.0})

        material.add_location_stock("kuwait-city", 20.0)

        assert material.location_stocks["kuwait-city"] == 20.0
        assert material.current_stock == 30.0
        assert material.status == StockStatus.IN_STOCK

    def test_add_location_stock_cannot_go_negative(self):
        material = Material(code="A1", name="Flour", location_stocks={"central-kitchen": 1.0})

        with pytest.raises(ValueError):
            material.add_location_stock("central-kitchen", -2.0)

        assert material.location_stocks["central-kitchen"] == 1.0
