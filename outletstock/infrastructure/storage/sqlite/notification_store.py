"""SQLite implementation of notification storage."""

import aiosqlite

from outletstock.config import get_logger
from outletstock.core.entities.notification import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from outletstock.core.exceptions import DatabaseError
from outletstock.core.interfaces.notification_store import INotificationStore
from outletstock.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from outletstock.infrastructure.storage.sqlite.utils import generate_id, parse_datetime

logger = get_logger(__name__)


class SQLiteNotificationStore(INotificationStore):
    """Notifications keyed by target location; matching on target ignores case."""

    async def create_notification(self, notification: Notification) -> Notification:
        if not notification.id:
            notification.id = generate_id()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO notifications (
                        id, title, message, type, target_location, source_location,
                        transfer_order_id, item_type, priority, read, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        notification.id,
                        notification.title,
                        notification.message,
                        notification.type.value,
                        notification.target_location,
                        notification.source_location,
                        notification.transfer_order_id,
                        notification.item_type,
                        notification.priority.value,
                        int(notification.read),
                        notification.created_at.isoformat(),
                    ),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("create_notification", str(e)) from e
        return notification

    async def get_notification(self, notification_id: str) -> Notification | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM notifications WHERE id = ?", (notification_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_notification(row) if row else None

    async def list_for_target(
        self,
        target_location: str,
        type: NotificationType | None = None,
        limit: int = 50,
    ) -> list[Notification]:
        query = "SELECT * FROM notifications WHERE target_location = ? COLLATE NOCASE"
        params: list = [target_location]
        if type:
            query += " AND type = ?"
            params.append(type.value)
        query += " ORDER BY created_at DESC, rowid DESC LIMIT ?"
        params.append(limit)

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_notification(row) for row in rows]

    async def mark_read(self, notification_id: str) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE notifications SET read = 1 WHERE id = ?", (notification_id,)
            )
            return cursor.rowcount > 0

    async def mark_all_read(self, target_location: str) -> int:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE notifications SET read = 1
                WHERE target_location = ? COLLATE NOCASE AND read = 0
                """,
                (target_location,),
            )
            return cursor.rowcount

    async def delete_for_target(self, target_location: str) -> int:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM notifications WHERE target_location = ? COLLATE NOCASE",
                (target_location,),
            )
            return cursor.rowcount

    async def mark_read_for_transfer(self, transfer_order_id: str) -> int:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE notifications SET read = 1 WHERE transfer_order_id = ? AND read = 0",
                (transfer_order_id,),
            )
            count = cursor.rowcount
        logger.info("transfer_notifications_read", transfer_order_id=transfer_order_id, count=count)
        return count

    @staticmethod
    def _row_to_notification(row: aiosqlite.Row) -> Notification:
        return Notification(
            id=row["id"],
            title=row["title"],
            message=row["message"],
            type=NotificationType(row["type"]),
            target_location=row["target_location"],
            source_location=row["source_location"],
            transfer_order_id=row["transfer_order_id"],
            item_type=row["item_type"],
            priority=NotificationPriority(row["priority"]),
            read=bool(row["read"]),
            created_at=parse_datetime(row["created_at"], default_now=True),
        )
