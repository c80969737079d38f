"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from outletstock.core.entities.inventory import MovementType
from outletstock.core.entities.material import SyncStatus
from outletstock.core.entities.notification import NotificationPriority, NotificationType
from outletstock.core.entities.stock import ItemType, StockStatus, UnitOfMeasure
from outletstock.core.entities.transfer import TransferPriority, TransferStatus
from outletstock.core.services.reconciliation import OutcomeAction
from outletstock.core.services.sync_orchestrator import SyncState


class MaterialResponse(BaseModel):
    """Material catalog entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    name: str
    category: str
    sub_category: str | None = None
    description: str | None = None
    unit: UnitOfMeasure
    unit_price: float
    current_stock: float = Field(..., description="Sum of location_stocks")
    location_stocks: dict[str, float]
    minimum_stock: float
    maximum_stock: float
    reorder_point: float
    status: StockStatus
    is_active: bool
    supplier_id: str | None = None
    supplier_name: str | None = None
    external_id: str | None = None
    last_synced_at: datetime | None = None
    sync_status: SyncStatus
    created_at: datetime
    updated_at: datetime


class MaterialListResponse(BaseModel):
    """Page of materials."""

    materials: list[MaterialResponse]
    count: int


class ItemOutcomeResponse(BaseModel):
    """Outcome for one external item."""

    model_config = ConfigDict(from_attributes=True)

    code: str | None = None
    name: str
    action: OutcomeAction
    current_stock: float | None = None
    location_stocks: dict[str, float] | None = None
    error: str | None = None


class ReconciliationResponse(BaseModel):
    """Tally and per-item outcomes of a reconciliation batch."""

    dry_run: bool
    summary: dict[str, int] = Field(
        ...,
        description="total_from_external, with_key, without_key, added, updated, errors",
    )
    details: list[ItemOutcomeResponse] = Field(default_factory=list)


class SyncRunResponse(BaseModel):
    """Result of a completed sync run."""

    state: SyncState
    dry_run: bool
    started_at: datetime
    finished_at: datetime
    summary: dict[str, int]
    details: list[ItemOutcomeResponse] = Field(default_factory=list)


class InventoryRecordResponse(BaseModel):
    """Per-location inventory record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    location_id: str
    item_code: str
    item_name: str
    item_type: ItemType
    unit: UnitOfMeasure
    current_stock: float
    reserved_stock: float
    available_stock: float
    minimum_stock: float
    maximum_stock: float
    reorder_point: float
    unit_price: float
    total_value: float
    status: StockStatus
    is_active: bool
    last_updated: datetime
    created_at: datetime


class InventoryListResponse(BaseModel):
    """Page of inventory records."""

    records: list[InventoryRecordResponse]
    count: int


class StockMovementResponse(BaseModel):
    """Stock movement log entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    record_id: str
    movement_type: MovementType
    quantity: float
    reason: str
    reference: str | None = None
    created_at: datetime


class AdjustStockResponse(BaseModel):
    """Record after an adjustment together with the movement written."""

    record: InventoryRecordResponse
    movement: StockMovementResponse


class LocationSummaryResponse(BaseModel):
    """Per-location totals."""

    location_id: str
    total_items: int
    total_value: float
    status_counts: dict[str, int]


class TransferLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    item_code: str
    item_name: str
    item_type: ItemType
    unit: UnitOfMeasure
    quantity: float
    unit_price: float
    line_total: float


class TransferOrderResponse(BaseModel):
    """Transfer order with its lines."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    transfer_number: str
    from_location: str
    to_location: str
    lines: list[TransferLineResponse]
    total_value: float
    status: TransferStatus
    priority: TransferPriority
    requested_by: str
    approved_by: str | None = None
    notes: str | None = None
    cancel_reason: str | None = None
    transfer_date: datetime
    approved_at: datetime | None = None
    dispatched_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class TransferListResponse(BaseModel):
    transfers: list[TransferOrderResponse]
    count: int


class TransferStatusTotals(BaseModel):
    count: int
    total_value: float


class TransferStatsResponse(BaseModel):
    """Order counts and values, overall and per status."""

    total_orders: int
    total_value: float
    by_status: dict[str, TransferStatusTotals]


class NotificationResponse(BaseModel):
    """Notification addressed to a location."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    message: str
    type: NotificationType
    target_location: str
    source_location: str
    transfer_order_id: str | None = None
    item_type: str | None = None
    priority: NotificationPriority
    read: bool
    created_at: datetime


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    count: int


class CountResponse(BaseModel):
    """Number of rows affected by a bulk operation."""

    count: int


class ComponentHealthResponse(BaseModel):
    """Health of a single dependency."""

    status: str
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. MATERIAL_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
