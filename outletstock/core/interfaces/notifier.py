"""Abstract interface for emitting notifications from core operations."""

from abc import ABC, abstractmethod

from outletstock.core.entities.notification import Notification


class INotifier(ABC):
    """Port the core calls to announce state changes."""

    @abstractmethod
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
        """Persist a notification. Raises ValidationError on missing fields."""
        pass

    @abstractmethod
    async def mark_read_for_transfer(self, transfer_order_id: str) -> int:
        """Mark notifications tied to a transfer order as read."""
        pass
