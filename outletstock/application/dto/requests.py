"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from pydantic import BaseModel, Field, model_validator

from outletstock.core.entities.stock import ItemType, UnitOfMeasure
from outletstock.core.entities.transfer import TransferPriority
from outletstock.core.interfaces.item_source import ExternalItem


class CreateMaterialRequest(BaseModel):
    """Manual material creation."""

    code: str = Field(..., min_length=1, description="Item code", examples=["FLR-001"])
    name: str = Field(..., min_length=1, description="Material name", examples=["Flour"])
    category: str | None = Field(default=None, description="Category (defaults to General)")
    description: str | None = None
    unit: str | None = Field(
        default=None,
        description="Unit of measure, free text is normalized",
        examples=["kg", "Kilograms", "pcs"],
    )
    unit_price: float = Field(default=0.0, ge=0)
    location_stocks: dict[str, float] = Field(
        default_factory=dict,
        description="Per-location quantities; names are mapped to canonical keys",
    )
    opening_stock: float | None = Field(
        default=None,
        ge=0,
        description="Aggregate quantity placed on the fallback location",
    )
    minimum_stock: float | None = Field(default=None, ge=0)
    maximum_stock: float | None = Field(default=None, ge=0)
    reorder_point: float | None = Field(default=None, ge=0)
    supplier_id: str | None = None
    supplier_name: str | None = None


class ReconcileBatchRequest(BaseModel):
    """A batch of external items posted for reconciliation."""

    items: list[ExternalItem] = Field(..., description="External items to reconcile")
    dry_run: bool = Field(default=False, description="Compute outcomes without writing")


class CreateInventoryRecordRequest(BaseModel):
    """Open an inventory record for an item at a location."""

    location_id: str = Field(..., min_length=1, examples=["kuwait-city"])
    item_code: str = Field(..., min_length=1, examples=["FLR-001"])
    item_name: str = Field(..., min_length=1)
    item_type: ItemType = ItemType.RAW_MATERIAL
    unit: UnitOfMeasure = UnitOfMeasure.KG
    current_stock: float = Field(default=0.0, ge=0)
    reserved_stock: float = Field(default=0.0, ge=0)
    minimum_stock: float = Field(default=0.0, ge=0)
    maximum_stock: float = Field(default=1000.0, ge=0)
    reorder_point: float = Field(default=0.0, ge=0)
    unit_price: float = Field(default=0.0, ge=0)


class AdjustStockRequest(BaseModel):
    """Signed stock adjustment for one record."""

    delta: float = Field(..., description="Positive adds stock, negative removes it")
    reason: str = Field(..., min_length=1, examples=["Stock count correction"])
    reference: str | None = Field(default=None, description="External reference")


class SetReservedRequest(BaseModel):
    """Replace the reserved quantity of a record."""

    reserved_stock: float = Field(..., ge=0)


class TransferLineRequest(BaseModel):
    """One line of a transfer request."""

    item_code: str = Field(..., min_length=1)
    item_name: str = Field(..., min_length=1)
    item_type: ItemType = ItemType.RAW_MATERIAL
    unit: UnitOfMeasure = UnitOfMeasure.KG
    quantity: float = Field(..., gt=0)
    unit_price: float = Field(default=0.0, ge=0)


class CreateTransferRequest(BaseModel):
    """Request to move stock between two locations."""

    from_location: str = Field(..., min_length=1, examples=["central-kitchen"])
    to_location: str = Field(..., min_length=1, examples=["mall-360"])
    lines: list[TransferLineRequest] = Field(..., min_length=1)
    priority: TransferPriority = TransferPriority.NORMAL
    requested_by: str | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def check_locations(self) -> "CreateTransferRequest":
        if self.from_location == self.to_location:
            raise ValueError("from_location and to_location must differ")
        return self


class ApproveTransferRequest(BaseModel):
    """Accept a pending transfer, optionally editing quantities."""

    approved_by: str = Field(..., min_length=1)
    edited_quantities: dict[str, float] | None = Field(
        default=None,
        description="Item code to replacement quantity",
    )


class CancelTransferRequest(BaseModel):
    """Cancel or reject a transfer."""

    reason: str | None = None
    cancelled_by: str | None = None


class CreateNotificationRequest(BaseModel):
    """Raw notification creation.

    Fields are checked by the notification service so that missing values
    are reported as domain validation errors.
    """

    title: str | None = None
    message: str | None = None
    type: str | None = Field(default=None, examples=["info", "transfer_request"])
    target_location: str | None = None
    source_location: str | None = None
    transfer_order_id: str | None = None
    item_type: str | None = None
    priority: str | None = Field(default=None, examples=["normal", "urgent"])
