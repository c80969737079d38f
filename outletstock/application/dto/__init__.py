"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.
"""

from outletstock.application.dto.requests import (
    AdjustStockRequest,
    ApproveTransferRequest,
    CancelTransferRequest,
    CreateInventoryRecordRequest,
    CreateMaterialRequest,
    CreateNotificationRequest,
    CreateTransferRequest,
    ReconcileBatchRequest,
    SetReservedRequest,
    TransferLineRequest,
)
from outletstock.application.dto.responses import (
    AdjustStockResponse,
    ComponentHealthResponse,
    CountResponse,
    ErrorResponse,
    HealthResponse,
    InventoryListResponse,
    InventoryRecordResponse,
    ItemOutcomeResponse,
    LocationSummaryResponse,
    MaterialListResponse,
    MaterialResponse,
    NotificationListResponse,
    NotificationResponse,
    ReconciliationResponse,
    StockMovementResponse,
    SyncRunResponse,
    TransferLineResponse,
    TransferListResponse,
    TransferOrderResponse,
    TransferStatsResponse,
    TransferStatusTotals,
)

__all__ = [
    # Requests
    "CreateMaterialRequest",
    "ReconcileBatchRequest",
    "CreateInventoryRecordRequest",
    "AdjustStockRequest",
    "SetReservedRequest",
    "TransferLineRequest",
    "CreateTransferRequest",
    "ApproveTransferRequest",
    "CancelTransferRequest",
    "CreateNotificationRequest",
    # Responses
    "MaterialResponse",
    "MaterialListResponse",
    "ItemOutcomeResponse",
    "ReconciliationResponse",
    "SyncRunResponse",
    "InventoryRecordResponse",
    "InventoryListResponse",
    "StockMovementResponse",
    "AdjustStockResponse",
    "LocationSummaryResponse",
    "TransferLineResponse",
    "TransferOrderResponse",
    "TransferListResponse",
    "TransferStatusTotals",
    "TransferStatsResponse",
    "NotificationResponse",
    "NotificationListResponse",
    "CountResponse",
    "ComponentHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
