"""SQLite implementation of transfer order storage."""

from datetime import UTC, datetime

import aiosqlite

from outletstock.config import get_logger
from outletstock.core.entities.stock import ItemType, UnitOfMeasure
from outletstock.core.entities.transfer import (
    TransferLine,
    TransferOrder,
    TransferPriority,
    TransferStatus,
)
from outletstock.core.exceptions import DatabaseError
from outletstock.core.interfaces.transfer_store import ITransferStore
from outletstock.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from outletstock.infrastructure.storage.sqlite.utils import generate_id, parse_datetime, to_iso

logger = get_logger(__name__)


class SQLiteTransferStore(ITransferStore):
    """Transfer orders with their lines in a child table."""

    async def create_transfer(self, order: TransferOrder) -> TransferOrder:
        if not order.id:
            order.id = generate_id()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO transfer_orders (
                        id, transfer_number, from_location, to_location, total_value,
                        status, priority, requested_by, approved_by, notes, cancel_reason,
                        transfer_date, approved_at, dispatched_at, delivered_at,
                        cancelled_at, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        order.id,
                        order.transfer_number,
                        order.from_location,
                        order.to_location,
                        order.total_value,
                        order.status.value,
                        order.priority.value,
                        order.requested_by,
                        order.approved_by,
                        order.notes,
                        order.cancel_reason,
                        order.transfer_date.isoformat(),
                        to_iso(order.approved_at),
                        to_iso(order.dispatched_at),
                        to_iso(order.delivered_at),
                        to_iso(order.cancelled_at),
                        order.created_at.isoformat(),
                        order.updated_at.isoformat(),
                    ),
                )
                await self._insert_lines(conn, order)
        except aiosqlite.Error as e:
            raise DatabaseError("create_transfer", str(e)) from e

        logger.info("transfer_order_stored", transfer_id=order.id, lines=len(order.lines))
        return order

    async def get_transfer(self, transfer_id: str) -> TransferOrder | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM transfer_orders WHERE id = ?", (transfer_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_order(row, await self._load_lines(conn, transfer_id))

    async def update_transfer(self, order: TransferOrder) -> TransferOrder:
        """Update the order row and replace its lines."""
        order.updated_at = datetime.now(UTC)
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE transfer_orders SET
                        total_value = ?, status = ?, priority = ?, approved_by = ?,
                        notes = ?, cancel_reason = ?, approved_at = ?, dispatched_at = ?,
                        delivered_at = ?, cancelled_at = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        order.total_value,
                        order.status.value,
                        order.priority.value,
                        order.approved_by,
                        order.notes,
                        order.cancel_reason,
                        to_iso(order.approved_at),
                        to_iso(order.dispatched_at),
                        to_iso(order.delivered_at),
                        to_iso(order.cancelled_at),
                        order.updated_at.isoformat(),
                        order.id,
                    ),
                )
                await conn.execute("DELETE FROM transfer_lines WHERE transfer_id = ?", (order.id,))
                await self._insert_lines(conn, order)
        except aiosqlite.Error as e:
            raise DatabaseError("update_transfer", str(e)) from e

        logger.info("transfer_order_updated", transfer_id=order.id, status=order.status.value)
        return order

    async def list_transfers(
        self,
        status: TransferStatus | None = None,
        location: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[TransferOrder]:
        clauses = []
        params: list = []
        if status:
            clauses.append("status = ?")
            params.append(status.value)
        if location:
            clauses.append("(from_location = ? OR to_location = ?)")
            params.extend([location, location])
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM transfer_orders {where}
                ORDER BY created_at DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [
                self._row_to_order(row, await self._load_lines(conn, row["id"]))
                for row in rows
            ]

    async def status_totals(self) -> dict[TransferStatus, tuple[int, float]]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT status, COUNT(*) AS orders, COALESCE(SUM(total_value), 0) AS value
                FROM transfer_orders
                GROUP BY status
                """
            )
            rows = await cursor.fetchall()
            return {
                TransferStatus(row["status"]): (int(row["orders"]), float(row["value"]))
                for row in rows
            }

    @staticmethod
    async def _insert_lines(conn: aiosqlite.Connection, order: TransferOrder) -> None:
        await conn.executemany(
            """
            INSERT INTO transfer_lines (
                transfer_id, line_no, item_code, item_name, item_type,
                unit, quantity, unit_price, line_total
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    order.id,
                    line_no,
                    line.item_code,
                    line.item_name,
                    line.item_type.value,
                    line.unit.value,
                    line.quantity,
                    line.unit_price,
                    line.line_total,
                )
                for line_no, line in enumerate(order.lines, start=1)
            ],
        )

    @staticmethod
    async def _load_lines(conn: aiosqlite.Connection, transfer_id: str) -> list[TransferLine]:
        cursor = await conn.execute(
            "SELECT * FROM transfer_lines WHERE transfer_id = ? ORDER BY line_no",
            (transfer_id,),
        )
        rows = await cursor.fetchall()
        return [
            TransferLine(
                item_code=row["item_code"],
                item_name=row["item_name"],
                item_type=ItemType(row["item_type"]),
                unit=UnitOfMeasure(row["unit"]),
                quantity=float(row["quantity"]),
                unit_price=float(row["unit_price"]),
            )
            for row in rows
        ]

    @staticmethod
    def _row_to_order(row: aiosqlite.Row, lines: list[TransferLine]) -> TransferOrder:
        return TransferOrder(
            id=row["id"],
            transfer_number=row["transfer_number"],
            from_location=row["from_location"],
            to_location=row["to_location"],
            lines=lines,
            status=TransferStatus(row["status"]),
            priority=TransferPriority(row["priority"]),
            requested_by=row["requested_by"],
            approved_by=row["approved_by"],
            notes=row["notes"],
            cancel_reason=row["cancel_reason"],
            transfer_date=parse_datetime(row["transfer_date"], default_now=True),
            approved_at=parse_datetime(row["approved_at"]),
            dispatched_at=parse_datetime(row["dispatched_at"]),
            delivered_at=parse_datetime(row["delivered_at"]),
            cancelled_at=parse_datetime(row["cancelled_at"]),
            created_at=parse_datetime(row["created_at"], default_now=True),
            updated_at=parse_datetime(row["updated_at"], default_now=True),
        )
