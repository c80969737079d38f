"""
Notification fan-out.

Persists notifications addressed to a location and serves the per-location
inbox queries. Core operations emit through ``emit_safely`` so a failed
notification never aborts the operation that triggered it.
"""

from typing import Any

from outletstock.config import get_logger
from outletstock.core.entities.notification import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from outletstock.core.exceptions import NotificationNotFoundError, ValidationError
from outletstock.core.interfaces.notification_store import INotificationStore
from outletstock.core.interfaces.notifier import INotifier

logger = get_logger(__name__)

DEFAULT_SOURCE = "System"
DEFAULT_LIMIT = 50


def _require(field: str, value: str | None) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(field, "is required", value)
    return str(value).strip()


class NotificationService(INotifier):
    """Creates and queries notifications."""

    def __init__(self, notification_store: INotificationStore):
        self._store = notification_store

    async def notify(
        self,
        title: str | None,
        message: str | None,
        type: str | None,
        target_location: str | None,
        source_location: str | None = None,
        transfer_order_id: str | None = None,
        item_type: str | None = None,
        priority: str | None = None,
    ) -> Notification:
        """
        Create a notification.

        Raises:
            ValidationError: if title, message, type or target is missing,
                or type/priority is not a known value. Nothing is persisted.
        """
        title = _require("title", title)
        message = _require("message", message)
        type_value = _require("type", type)
        target = _require("target_location", target_location)

        try:
            notification_type = NotificationType(type_value)
        except ValueError:
            raise ValidationError("type", "unknown notification type", type_value) from None

        try:
            notification_priority = NotificationPriority(
                (priority or NotificationPriority.NORMAL.value).lower()
            )
        except ValueError:
            raise ValidationError("priority", "unknown priority", priority) from None

        notification = Notification(
            title=title,
            message=message,
            type=notification_type,
            target_location=target,
            source_location=(source_location or "").strip() or DEFAULT_SOURCE,
            transfer_order_id=transfer_order_id,
            item_type=item_type,
            priority=notification_priority,
        )
        notification = await self._store.create_notification(notification)
        logger.info(
            "notification_created",
            notification_id=notification.id,
            type=notification.type.value,
            target=notification.target_location,
        )
        return notification

    async def list_for_location(
        self,
        location: str,
        type: NotificationType | str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[Notification]:
        """Newest-first notifications for a location (case-insensitive match)."""
        location = _require("location", location)
        if limit < 1:
            raise ValidationError("limit", "must be >= 1", limit)

        type_filter = None
        if type:
            try:
                type_filter = NotificationType(type)
            except ValueError:
                raise ValidationError("type", "unknown notification type", type) from None

        return await self._store.list_for_target(location, type=type_filter, limit=limit)

    async def mark_read(self, notification_id: str) -> Notification:
        """Mark one notification as read. Already-read notifications are returned unchanged."""
        notification = await self._store.get_notification(notification_id)
        if notification is None:
            raise NotificationNotFoundError(notification_id)
        if not notification.read:
            await self._store.mark_read(notification_id)
            notification.read = True
        return notification

    async def mark_all_read(self, location: str) -> int:
        count = await self._store.mark_all_read(_require("location", location))
        logger.info("notifications_marked_read", location=location, count=count)
        return count

    async def clear_all(self, location: str) -> int:
        count = await self._store.delete_for_target(_require("location", location))
        logger.info("notifications_cleared", location=location, count=count)
        return count

    async def mark_read_for_transfer(self, transfer_order_id: str) -> int:
        return await self._store.mark_read_for_transfer(transfer_order_id)


async def emit_safely(notifier: INotifier | None, **kwargs: Any) -> Notification | None:
    """Emit a notification, logging and discarding any failure."""
    if notifier is None:
        return None
    try:
        return await notifier.notify(**kwargs)
    except Exception as e:
        logger.warning(
            "notification_emit_failed",
            error_type=e.__class__.__name__,
            error=str(e),
            target=kwargs.get("target_location"),
            type=kwargs.get("type"),
        )
        return None
