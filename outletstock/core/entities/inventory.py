"""Inventory domain entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from outletstock.core.entities.stock import (
    ItemType,
    StockStatus,
    UnitOfMeasure,
    derive_stock_status,
)


class MovementType(str, Enum):
    """Types of stock movements."""

    IN = "in"
    OUT = "out"


def compute_available(current: float, reserved: float) -> float:
    """Available stock, floored at zero."""
    return max(0.0, current - reserved)


def compute_total_value(current: float, unit_price: float) -> float:
    return current * unit_price


class InventoryRecord(BaseModel):
    """
    Stock of one item at one location.

    ``available_stock``, ``total_value`` and ``status`` are derived on
    construction and on every field assignment; supplied values are overwritten.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str | None = None
    location_id: str
    item_code: str
    item_name: str
    item_type: ItemType = ItemType.RAW_MATERIAL
    unit: UnitOfMeasure = UnitOfMeasure.KG
    current_stock: float = Field(default=0.0, ge=0)
    reserved_stock: float = Field(default=0.0, ge=0)
    available_stock: float = 0.0
    minimum_stock: float = Field(default=0.0, ge=0)
    maximum_stock: float = Field(default=1000.0, ge=0)
    reorder_point: float = Field(default=0.0, ge=0)
    unit_price: float = Field(default=0.0, ge=0)
    total_value: float = 0.0
    status: StockStatus = StockStatus.OUT_OF_STOCK
    is_active: bool = True
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def derive_fields(self) -> "InventoryRecord":
        self.recompute()
        return self

    def recompute(self) -> None:
        """Refresh available stock, total value and status."""
        # Written through __dict__ so assignment validation does not re-enter this validator
        self.__dict__.update(
            available_stock=compute_available(self.current_stock, self.reserved_stock),
            total_value=compute_total_value(self.current_stock, self.unit_price),
            status=derive_stock_status(
                self.current_stock, self.minimum_stock, self.maximum_stock
            ),
        )


class StockMovement(BaseModel):
    """Records a single stock movement into or out of a record."""

    id: str | None = None
    record_id: str  # FK -> inventory_records.id
    movement_type: MovementType
    quantity: float = Field(gt=0)  # always positive
    reason: str
    reference: str | None = None  # e.g. transfer number
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class LocationSummary(BaseModel):
    """Aggregate view of the inventory held at one location."""

    location_id: str
    total_items: int = 0
    total_value: float = 0.0
    status_counts: dict[StockStatus, int] = Field(
        default_factory=lambda: {s: 0 for s in StockStatus}
    )
