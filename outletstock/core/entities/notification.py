"""Notification domain entity."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class NotificationType(str, Enum):
    """Notification categories."""

    TRANSFER_REQUEST = "transfer_request"
    TRANSFER_ACCEPTANCE = "transfer_acceptance"
    TRANSFER_REJECTION = "transfer_rejection"
    TRANSFER_COMPLETED = "transfer_completed"
    STOCK_SYNC = "stock_sync"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class NotificationPriority(str, Enum):
    """Notification urgency."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class Notification(BaseModel):
    """An event record addressed to one location."""

    id: str | None = None
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    type: NotificationType
    target_location: str = Field(min_length=1)
    source_location: str = "System"
    transfer_order_id: str | None = None
    item_type: str | None = None
    priority: NotificationPriority = NotificationPriority.NORMAL
    read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
