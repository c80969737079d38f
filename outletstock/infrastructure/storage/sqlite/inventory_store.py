"""SQLite implementation of inventory storage."""

import aiosqlite

from outletstock.config import get_logger
from outletstock.core.entities.inventory import InventoryRecord, MovementType, StockMovement
from outletstock.core.entities.stock import ItemType, StockStatus, UnitOfMeasure
from outletstock.core.exceptions import DatabaseError, DuplicateInventoryRecordError
from outletstock.core.interfaces.inventory_store import IInventoryStore
from outletstock.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from outletstock.infrastructure.storage.sqlite.utils import generate_id, parse_datetime

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory record and stock movement storage."""

    async def create_record(self, record: InventoryRecord) -> InventoryRecord:
        """Create a new inventory record."""
        if not record.id:
            record.id = generate_id()
        record.recompute()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO inventory_records (
                        id, location_id, item_code, item_name, item_type, unit,
                        current_stock, reserved_stock, available_stock,
                        minimum_stock, maximum_stock, reorder_point,
                        unit_price, total_value, status, is_active,
                        last_updated, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.id,
                        record.location_id,
                        record.item_code,
                        record.item_name,
                        record.item_type.value,
                        record.unit.value,
                        record.current_stock,
                        record.reserved_stock,
                        record.available_stock,
                        record.minimum_stock,
                        record.maximum_stock,
                        record.reorder_point,
                        record.unit_price,
                        record.total_value,
                        record.status.value,
                        int(record.is_active),
                        record.last_updated.isoformat(),
                        record.created_at.isoformat(),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            if "UNIQUE" in str(e):
                raise DuplicateInventoryRecordError(record.location_id, record.item_code) from e
            raise DatabaseError("create_record", str(e)) from e
        except aiosqlite.Error as e:
            raise DatabaseError("create_record", str(e)) from e

        logger.info(
            "inventory_record_created",
            record_id=record.id,
            location_id=record.location_id,
            item_code=record.item_code,
        )
        return record

    async def get_record(self, record_id: str) -> InventoryRecord | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_records WHERE id = ?", (record_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_record(row) if row else None

    async def get_record_by_item(
        self, location_id: str, item_code: str
    ) -> InventoryRecord | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_records WHERE location_id = ? AND item_code = ?",
                (location_id, item_code),
            )
            row = await cursor.fetchone()
            return self._row_to_record(row) if row else None

    async def update_record(self, record: InventoryRecord) -> InventoryRecord:
        """Persist stock levels and the derived fields."""
        record.recompute()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE inventory_records SET
                        item_name = ?, item_type = ?, unit = ?,
                        current_stock = ?, reserved_stock = ?, available_stock = ?,
                        minimum_stock = ?, maximum_stock = ?, reorder_point = ?,
                        unit_price = ?, total_value = ?, status = ?,
                        is_active = ?, last_updated = ?
                    WHERE id = ?
                    """,
                    (
                        record.item_name,
                        record.item_type.value,
                        record.unit.value,
                        record.current_stock,
                        record.reserved_stock,
                        record.available_stock,
                        record.minimum_stock,
                        record.maximum_stock,
                        record.reorder_point,
                        record.unit_price,
                        record.total_value,
                        record.status.value,
                        int(record.is_active),
                        record.last_updated.isoformat(),
                        record.id,
                    ),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("update_record", str(e)) from e

        logger.info("inventory_record_updated", record_id=record.id)
        return record

    async def list_records(
        self,
        location_id: str | None = None,
        status: StockStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryRecord]:
        clauses = []
        params: list = []
        if location_id:
            clauses.append("location_id = ?")
            params.append(location_id)
        if status:
            clauses.append("status = ?")
            params.append(status.value)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM inventory_records {where}
                ORDER BY location_id, item_code
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def list_location_records(self, location_id: str) -> list[InventoryRecord]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_records
                WHERE location_id = ? AND is_active = 1
                ORDER BY item_code
                """,
                (location_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def add_movement(self, movement: StockMovement) -> StockMovement:
        """Record a stock movement."""
        if not movement.id:
            movement.id = generate_id()
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO stock_movements (
                    id, record_id, movement_type, quantity, reason, reference, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    movement.id,
                    movement.record_id,
                    movement.movement_type.value,
                    movement.quantity,
                    movement.reason,
                    movement.reference,
                    movement.created_at.isoformat(),
                ),
            )
        logger.info(
            "stock_movement_recorded",
            movement_id=movement.id,
            type=movement.movement_type.value,
            qty=movement.quantity,
        )
        return movement

    async def get_movements(self, record_id: str, limit: int = 100) -> list[StockMovement]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_movements
                WHERE record_id = ?
                ORDER BY created_at DESC, rowid DESC
                LIMIT ?
                """,
                (record_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> InventoryRecord:
        """Convert a database row to an InventoryRecord; derived columns are recomputed."""
        return InventoryRecord(
            id=row["id"],
            location_id=row["location_id"],
            item_code=row["item_code"],
            item_name=row["item_name"],
            item_type=ItemType(row["item_type"]),
            unit=UnitOfMeasure(row["unit"]),
            current_stock=float(row["current_stock"]),
            reserved_stock=float(row["reserved_stock"]),
            minimum_stock=float(row["minimum_stock"]),
            maximum_stock=float(row["maximum_stock"]),
            reorder_point=float(row["reorder_point"]),
            unit_price=float(row["unit_price"]),
            is_active=bool(row["is_active"]),
            last_updated=parse_datetime(row["last_updated"], default_now=True),
            created_at=parse_datetime(row["created_at"], default_now=True),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> StockMovement:
        return StockMovement(
            id=row["id"],
            record_id=row["record_id"],
            movement_type=MovementType(row["movement_type"]),
            quantity=float(row["quantity"]),
            reason=row["reason"],
            reference=row["reference"],
            created_at=parse_datetime(row["created_at"], default_now=True),
        )
