"""
Transfer order entities.

A transfer order moves stock from one location to another and walks a
linear status lifecycle with a Cancelled escape from any non-terminal state.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from outletstock.core.entities.stock import ItemType, UnitOfMeasure


class TransferStatus(str, Enum):
    """Transfer order lifecycle states."""

    PENDING = "Pending"
    APPROVED = "Approved"
    IN_TRANSIT = "In Transit"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class TransferPriority(str, Enum):
    """Transfer urgency."""

    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"
    URGENT = "Urgent"


ALLOWED_TRANSITIONS: dict[TransferStatus, frozenset[TransferStatus]] = {
    TransferStatus.PENDING: frozenset({TransferStatus.APPROVED, TransferStatus.CANCELLED}),
    TransferStatus.APPROVED: frozenset({TransferStatus.IN_TRANSIT, TransferStatus.CANCELLED}),
    TransferStatus.IN_TRANSIT: frozenset({TransferStatus.DELIVERED, TransferStatus.CANCELLED}),
    TransferStatus.DELIVERED: frozenset(),
    TransferStatus.CANCELLED: frozenset(),
}


def generate_transfer_number(now: datetime | None = None) -> str:
    """Build a transfer number of the form TR-YYYYMMDD-NNNNNN."""
    now = now or datetime.now(UTC)
    millis = str(int(now.timestamp() * 1000))
    return f"TR-{now:%Y%m%d}-{millis[-6:]}"


class TransferLine(BaseModel):
    """One item line on a transfer order."""

    item_code: str
    item_name: str
    item_type: ItemType = ItemType.RAW_MATERIAL
    unit: UnitOfMeasure = UnitOfMeasure.KG
    quantity: float = Field(gt=0)
    unit_price: float = Field(default=0.0, ge=0)
    line_total: float = 0.0

    @model_validator(mode="after")
    def compute_line_total(self) -> "TransferLine":
        self.line_total = self.quantity * self.unit_price
        return self


class TransferOrder(BaseModel):
    """A request to move stock between two locations."""

    id: str | None = None
    transfer_number: str = Field(default_factory=generate_transfer_number)
    from_location: str
    to_location: str
    lines: list[TransferLine] = Field(min_length=1)
    total_value: float = 0.0
    status: TransferStatus = TransferStatus.PENDING
    priority: TransferPriority = TransferPriority.NORMAL
    requested_by: str = "System"
    approved_by: str | None = None
    notes: str | None = None
    cancel_reason: str | None = None
    transfer_date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    approved_at: datetime | None = None
    dispatched_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def check_order(self) -> "TransferOrder":
        if self.from_location == self.to_location:
            raise ValueError("from_location and to_location must differ")
        self.recompute_total()
        return self

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self.status]

    def can_transition_to(self, target: TransferStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def quantities_by_item(self) -> dict[str, float]:
        """Total quantity per item code; an item may appear on several lines."""
        totals: dict[str, float] = {}
        for line in self.lines:
            totals[line.item_code] = totals.get(line.item_code, 0.0) + line.quantity
        return totals

    def recompute_total(self) -> None:
        """Refresh line totals and the aggregate total."""
        for line in self.lines:
            line.line_total = line.quantity * line.unit_price
        self.total_value = sum(line.line_total for line in self.lines)
