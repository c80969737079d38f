"""
Material domain entity.

A material is the organisation-wide record of one stocked item, keyed by
its canonical code, with stock broken down per location.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from outletstock.core.entities.stock import StockStatus, UnitOfMeasure, derive_stock_status


class SyncStatus(str, Enum):
    """State of a material relative to the external inventory system."""

    UNSYNCED = "unsynced"
    SYNCED = "synced"
    UPDATED = "updated"
    FAILED = "failed"


def canonical_code(raw: str | None) -> str:
    """Canonical form of an item code: trimmed and uppercased."""
    return (raw or "").strip().upper()


class Material(BaseModel):
    """
    A stocked material.

    ``current_stock`` and ``status`` are derived from ``location_stocks`` and
    the thresholds; values passed in for them are overwritten.
    """

    id: str | None = None
    code: str
    name: str
    category: str = "General"
    sub_category: str | None = None
    description: str | None = None
    unit: UnitOfMeasure = UnitOfMeasure.KG
    unit_price: float = Field(default=0.0, ge=0)
    current_stock: float = 0.0
    location_stocks: dict[str, float] = Field(default_factory=dict)
    minimum_stock: float = Field(default=10.0, ge=0)
    maximum_stock: float = Field(default=1000.0, ge=0)
    reorder_point: float = Field(default=20.0, ge=0)
    status: StockStatus = StockStatus.OUT_OF_STOCK
    is_active: bool = True
    supplier_id: str | None = None
    supplier_name: str | None = None
    external_id: str | None = None
    last_synced_at: datetime | None = None
    sync_status: SyncStatus = SyncStatus.UNSYNCED
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        code = canonical_code(v)
        if not code:
            raise ValueError("code must not be empty")
        return code

    @field_validator("location_stocks")
    @classmethod
    def check_location_stocks(cls, v: dict[str, float]) -> dict[str, float]:
        for location, qty in v.items():
            if qty < 0:
                raise ValueError(f"stock at '{location}' must be >= 0")
        return v

    @model_validator(mode="after")
    def derive_totals(self) -> "Material":
        self.recompute()
        return self

    def recompute(self) -> None:
        """Recompute total stock and status from the per-location map."""
        self.current_stock = float(sum(self.location_stocks.values()))
        self.status = derive_stock_status(
            self.current_stock, self.minimum_stock, self.maximum_stock
        )

    def add_location_stock(self, location: str, quantity: float) -> None:
        """Add quantity to one location and refresh derived fields."""
        new_qty = self.location_stocks.get(location, 0.0) + quantity
        if new_qty < 0:
            raise ValueError(f"stock at '{location}' would become negative")
        self.location_stocks[location] = new_qty
        self.recompute()
