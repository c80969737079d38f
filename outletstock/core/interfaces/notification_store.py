"""Abstract interface for notification storage."""

from abc import ABC, abstractmethod

from outletstock.core.entities.notification import Notification, NotificationType


class INotificationStore(ABC):
    """Interface for notification persistence."""

    @abstractmethod
    async def create_notification(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def get_notification(self, notification_id: str) -> Notification | None:
        pass

    @abstractmethod
    async def list_for_target(
        self,
        target_location: str,
        type: NotificationType | None = None,
        limit: int = 50,
    ) -> list[Notification]:
        """Notifications for a target (case-insensitive), newest first."""
        pass

    @abstractmethod
    async def mark_read(self, notification_id: str) -> bool:
        """Set read=true. Returns False when the id does not exist."""
        pass

    @abstractmethod
    async def mark_all_read(self, target_location: str) -> int:
        """Mark unread notifications for a target as read; returns the count changed."""
        pass

    @abstractmethod
    async def delete_for_target(self, target_location: str) -> int:
        """Hard delete every notification for a target; returns the count deleted."""
        pass

    @abstractmethod
    async def mark_read_for_transfer(self, transfer_order_id: str) -> int:
        """Mark unread notifications tied to a transfer order as read."""
        pass
