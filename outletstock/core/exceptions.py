"""
Domain exceptions for the outlet stock service.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class OutletStockError(Exception):
    """Base exception for all outlet stock errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(OutletStockError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InsufficientStockError(ValidationError):
    """A stock change would drive the quantity below zero."""

    def __init__(self, item_code: str, location_id: str, available: float, requested: float):
        super().__init__(
            field="quantity",
            message=(
                f"Insufficient stock of '{item_code}' at '{location_id}' "
                f"(available {available}, requested {requested})"
            ),
            value=requested,
        )
        self.code = "INSUFFICIENT_STOCK"
        self.details.update(
            {
                "item_code": item_code,
                "location_id": location_id,
                "available": available,
                "requested": requested,
            }
        )


# Not Found Exceptions
class NotFoundError(OutletStockError):
    """Base exception for missing records."""

    pass


class MaterialNotFoundError(NotFoundError):
    """Material not found by code."""

    def __init__(self, code: str):
        super().__init__(
            f"Material not found: {code}",
            code="MATERIAL_NOT_FOUND",
            details={"code": code},
        )


class InventoryRecordNotFoundError(NotFoundError):
    """Inventory record not found."""

    def __init__(self, record_id: str):
        super().__init__(
            f"Inventory record not found: {record_id}",
            code="INVENTORY_RECORD_NOT_FOUND",
            details={"record_id": record_id},
        )


class TransferOrderNotFoundError(NotFoundError):
    """Transfer order not found."""

    def __init__(self, transfer_id: str):
        super().__init__(
            f"Transfer order not found: {transfer_id}",
            code="TRANSFER_ORDER_NOT_FOUND",
            details={"transfer_id": transfer_id},
        )


class NotificationNotFoundError(NotFoundError):
    """Notification not found."""

    def __init__(self, notification_id: str):
        super().__init__(
            f"Notification not found: {notification_id}",
            code="NOTIFICATION_NOT_FOUND",
            details={"notification_id": notification_id},
        )


# Conflict Exceptions
class ConflictError(OutletStockError):
    """Operation conflicts with the current state."""

    pass


class DuplicateMaterialError(ConflictError):
    """A material with the same code already exists."""

    def __init__(self, code: str):
        super().__init__(
            f"Material already exists with code: {code}",
            code="DUPLICATE_MATERIAL",
            details={"code": code},
        )


class DuplicateInventoryRecordError(ConflictError):
    """An inventory record already exists for the location and item."""

    def __init__(self, location_id: str, item_code: str):
        super().__init__(
            f"Inventory record already exists for '{item_code}' at '{location_id}'",
            code="DUPLICATE_INVENTORY_RECORD",
            details={"location_id": location_id, "item_code": item_code},
        )


class InvalidTransferTransitionError(ConflictError):
    """Transfer order cannot move from its current status to the requested one."""

    def __init__(self, transfer_id: str, current: str, target: str):
        super().__init__(
            f"Transfer {transfer_id} cannot move from '{current}' to '{target}'",
            code="INVALID_TRANSFER_TRANSITION",
            details={"transfer_id": transfer_id, "current": current, "target": target},
        )


class SyncInProgressError(ConflictError):
    """A sync run is already in progress."""

    def __init__(self):
        super().__init__(
            "A sync run is already in progress",
            code="SYNC_IN_PROGRESS",
        )


# External Source Exceptions
class ExternalSourceError(OutletStockError):
    """The external inventory source could not be reached or read."""

    def __init__(self, step: str, reason: str, status_code: int | None = None):
        super().__init__(
            f"External source failed during {step}: {reason}",
            code="EXTERNAL_SOURCE_ERROR",
            details={"step": step, "reason": reason, "status_code": status_code},
        )
        self.step = step


# Storage Exceptions
class StorageError(OutletStockError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(OutletStockError):
    """Configuration error."""

    pass
