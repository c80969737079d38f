"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod

from outletstock.core.entities.inventory import InventoryRecord, StockMovement
from outletstock.core.entities.stock import StockStatus


class IInventoryStore(ABC):
    """Interface for inventory record and stock movement persistence."""

    @abstractmethod
    async def create_record(self, record: InventoryRecord) -> InventoryRecord:
        """Create a record. Raises DuplicateInventoryRecordError on (location, item) clash."""
        pass

    @abstractmethod
    async def get_record(self, record_id: str) -> InventoryRecord | None:
        """Get inventory record by ID."""
        pass

    @abstractmethod
    async def get_record_by_item(
        self, location_id: str, item_code: str
    ) -> InventoryRecord | None:
        """Get the record for one item at one location."""
        pass

    @abstractmethod
    async def update_record(self, record: InventoryRecord) -> InventoryRecord:
        """Update inventory record."""
        pass

    @abstractmethod
    async def list_records(
        self,
        location_id: str | None = None,
        status: StockStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryRecord]:
        """List inventory records with optional filters."""
        pass

    @abstractmethod
    async def list_location_records(self, location_id: str) -> list[InventoryRecord]:
        """All active records held at a location."""
        pass

    @abstractmethod
    async def add_movement(self, movement: StockMovement) -> StockMovement:
        """Record a stock movement."""
        pass

    @abstractmethod
    async def get_movements(
        self, record_id: str, limit: int = 100
    ) -> list[StockMovement]:
        """Get movements for a record, newest first."""
        pass
