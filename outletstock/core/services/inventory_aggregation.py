"""
Inventory aggregation service.

Maintains per-location inventory records: every stock change goes through
this service so derived fields are recomputed and a movement is logged.
"""

from collections.abc import Iterable
from datetime import UTC, datetime

from outletstock.config import get_logger
from outletstock.core.entities.inventory import (
    InventoryRecord,
    LocationSummary,
    MovementType,
    StockMovement,
    compute_total_value,
)
from outletstock.core.entities.stock import ItemType, StockStatus, UnitOfMeasure
from outletstock.core.exceptions import (
    DuplicateInventoryRecordError,
    InsufficientStockError,
    InventoryRecordNotFoundError,
    ValidationError,
)
from outletstock.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


def summarize_location(
    location_id: str, records: Iterable[InventoryRecord]
) -> LocationSummary:
    """Reduce the active records of one location to totals and status counts."""
    summary = LocationSummary(location_id=location_id)
    for record in records:
        if record.location_id != location_id or not record.is_active:
            continue
        summary.total_items += 1
        summary.total_value += compute_total_value(record.current_stock, record.unit_price)
        summary.status_counts[record.status] += 1
    return summary


class InventoryService:
    """Stock mutations and read-side summaries for inventory records."""

    def __init__(self, inventory_store: IInventoryStore):
        self._store = inventory_store

    async def create_record(self, record: InventoryRecord) -> InventoryRecord:
        """Create a record; one record per (location, item) pair."""
        existing = await self._store.get_record_by_item(record.location_id, record.item_code)
        if existing is not None:
            raise DuplicateInventoryRecordError(record.location_id, record.item_code)
        record.recompute()
        return await self._store.create_record(record)

    async def get_record(self, record_id: str) -> InventoryRecord:
        record = await self._store.get_record(record_id)
        if record is None:
            raise InventoryRecordNotFoundError(record_id)
        return record

    async def find_record(self, location_id: str, item_code: str) -> InventoryRecord | None:
        return await self._store.get_record_by_item(location_id, item_code)

    async def list_records(
        self,
        location_id: str | None = None,
        status: StockStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryRecord]:
        return await self._store.list_records(
            location_id=location_id, status=status, limit=limit, offset=offset
        )

    async def get_movements(self, record_id: str, limit: int = 100) -> list[StockMovement]:
        await self.get_record(record_id)
        return await self._store.get_movements(record_id, limit=limit)

    async def adjust_stock(
        self,
        record_id: str,
        delta: float,
        reason: str,
        reference: str | None = None,
    ) -> tuple[InventoryRecord, StockMovement]:
        """
        Apply a signed stock change to a record.

        Raises:
            ValidationError: if delta is zero or reason is blank
            InsufficientStockError: if the result would be negative
            InventoryRecordNotFoundError: if the record does not exist
        """
        if delta == 0:
            raise ValidationError("delta", "must not be zero", delta)
        if not reason or not reason.strip():
            raise ValidationError("reason", "is required", reason)

        record = await self.get_record(record_id)
        return await self._apply(record, delta, reason.strip(), reference)

    async def set_reserved(self, record_id: str, reserved: float) -> InventoryRecord:
        """Replace the reserved quantity of a record."""
        if reserved < 0:
            raise ValidationError("reserved_stock", "must be >= 0", reserved)
        record = await self.get_record(record_id)
        record.reserved_stock = reserved
        return await self._save(record)

    async def reserve(
        self, location_id: str, item_code: str, quantity: float
    ) -> InventoryRecord | None:
        """Hold stock for an outgoing transfer; None when the location has no record."""
        record = await self._store.get_record_by_item(location_id, item_code)
        if record is None:
            logger.warning("reserve_skipped_no_record", location_id=location_id, item_code=item_code)
            return None
        record.reserved_stock += quantity
        return await self._save(record)

    async def release(
        self, location_id: str, item_code: str, quantity: float
    ) -> InventoryRecord | None:
        """Drop a reservation made by ``reserve``."""
        record = await self._store.get_record_by_item(location_id, item_code)
        if record is None:
            return None
        record.reserved_stock = max(0.0, record.reserved_stock - quantity)
        return await self._save(record)

    async def deduct(
        self,
        location_id: str,
        item_code: str,
        quantity: float,
        reason: str,
        reference: str | None = None,
    ) -> InventoryRecord | None:
        """Take reserved stock out of a location; None when the location has no record."""
        record = await self._store.get_record_by_item(location_id, item_code)
        if record is None:
            logger.warning("deduct_skipped_no_record", location_id=location_id, item_code=item_code)
            return None
        record.reserved_stock = max(0.0, record.reserved_stock - quantity)
        record, _ = await self._apply(record, -quantity, reason, reference)
        return record

    async def receive(
        self,
        location_id: str,
        item_code: str,
        item_name: str,
        quantity: float,
        reason: str,
        *,
        item_type: ItemType = ItemType.RAW_MATERIAL,
        unit: UnitOfMeasure = UnitOfMeasure.KG,
        unit_price: float = 0.0,
        reference: str | None = None,
    ) -> InventoryRecord:
        """Add stock to a location, creating its record on first receipt."""
        record = await self._store.get_record_by_item(location_id, item_code)
        if record is None:
            record = await self._store.create_record(
                InventoryRecord(
                    location_id=location_id,
                    item_code=item_code,
                    item_name=item_name,
                    item_type=item_type,
                    unit=unit,
                    unit_price=unit_price,
                )
            )
            logger.info("inventory_record_opened", location_id=location_id, item_code=item_code)
        record, _ = await self._apply(record, quantity, reason, reference)
        return record

    async def get_summary(self, location_id: str) -> LocationSummary:
        """Totals and status counts for one location. Read only."""
        records = await self._store.list_location_records(location_id)
        return summarize_location(location_id, records)

    async def _apply(
        self,
        record: InventoryRecord,
        delta: float,
        reason: str,
        reference: str | None,
    ) -> tuple[InventoryRecord, StockMovement]:
        new_stock = record.current_stock + delta
        if new_stock < 0:
            raise InsufficientStockError(
                record.item_code, record.location_id, record.current_stock, -delta
            )

        record.current_stock = new_stock
        record = await self._save(record)

        movement = await self._store.add_movement(
            StockMovement(
                record_id=record.id,  # type: ignore[arg-type]
                movement_type=MovementType.IN if delta > 0 else MovementType.OUT,
                quantity=abs(delta),
                reason=reason,
                reference=reference,
            )
        )
        logger.info(
            "stock_adjusted",
            record_id=record.id,
            location_id=record.location_id,
            item_code=record.item_code,
            delta=delta,
            current_stock=record.current_stock,
            status=record.status.value,
        )
        return record, movement

    async def _save(self, record: InventoryRecord) -> InventoryRecord:
        record.last_updated = datetime.now(UTC)
        record.recompute()
        return await self._store.update_record(record)
