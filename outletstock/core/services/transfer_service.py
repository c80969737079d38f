"""
Transfer order workflow.

Moves stock between locations through Pending -> Approved -> In Transit ->
Delivered, with cancellation allowed from any non-terminal state. Stock
is reserved at the source on approval, deducted on dispatch and received
at the destination on delivery. Notifications are best effort.
"""

from datetime import UTC, datetime

from outletstock.config import get_logger
from outletstock.core.entities.notification import NotificationPriority, NotificationType
from outletstock.core.entities.transfer import TransferOrder, TransferPriority, TransferStatus
from outletstock.core.exceptions import (
    InsufficientStockError,
    InvalidTransferTransitionError,
    TransferOrderNotFoundError,
    ValidationError,
)
from outletstock.core.interfaces.notifier import INotifier
from outletstock.core.interfaces.transfer_store import ITransferStore
from outletstock.core.services.inventory_aggregation import InventoryService
from outletstock.core.services.notification_service import emit_safely

logger = get_logger(__name__)

_NOTIFICATION_PRIORITY = {
    TransferPriority.LOW: NotificationPriority.LOW,
    TransferPriority.NORMAL: NotificationPriority.NORMAL,
    TransferPriority.HIGH: NotificationPriority.HIGH,
    TransferPriority.URGENT: NotificationPriority.HIGH,
}


class TransferService:
    """Creates transfer orders and drives their status transitions."""

    def __init__(
        self,
        transfer_store: ITransferStore,
        inventory_service: InventoryService,
        notifier: INotifier | None = None,
    ):
        self._store = transfer_store
        self._inventory = inventory_service
        self._notifier = notifier

    async def create(self, order: TransferOrder) -> TransferOrder:
        """Persist a new Pending order and notify the destination."""
        order.status = TransferStatus.PENDING
        order.recompute_total()
        order = await self._store.create_transfer(order)
        logger.info(
            "transfer_created",
            transfer_id=order.id,
            transfer_number=order.transfer_number,
            from_location=order.from_location,
            to_location=order.to_location,
            total_value=order.total_value,
        )

        await emit_safely(
            self._notifier,
            title="New Transfer Request",
            message=(
                f"Transfer {order.transfer_number} from {order.from_location}: "
                f"{len(order.lines)} item(s), total {order.total_value:.2f}"
            ),
            type=NotificationType.TRANSFER_REQUEST.value,
            target_location=order.to_location,
            source_location=order.from_location,
            transfer_order_id=order.id,
            item_type=order.lines[0].item_type.value,
            priority=_NOTIFICATION_PRIORITY[order.priority].value,
        )
        return order

    async def get(self, transfer_id: str) -> TransferOrder:
        order = await self._store.get_transfer(transfer_id)
        if order is None:
            raise TransferOrderNotFoundError(transfer_id)
        return order

    async def list_transfers(
        self,
        status: TransferStatus | None = None,
        location: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[TransferOrder]:
        return await self._store.list_transfers(
            status=status, location=location, limit=limit, offset=offset
        )

    async def approve(
        self,
        transfer_id: str,
        approved_by: str,
        edited_quantities: dict[str, float] | None = None,
    ) -> TransferOrder:
        """
        Accept a Pending order, optionally with edited line quantities.

        Raises:
            ValidationError: if an edited quantity is not positive or names an unknown item
        """
        order = await self.get(transfer_id)
        self._check_transition(order, TransferStatus.APPROVED)

        if edited_quantities:
            self._apply_edits(order, edited_quantities)

        for line in order.lines:
            await self._inventory.reserve(order.from_location, line.item_code, line.quantity)

        now = datetime.now(UTC)
        order.status = TransferStatus.APPROVED
        order.approved_by = approved_by
        order.approved_at = now
        order.updated_at = now
        order = await self._store.update_transfer(order)
        logger.info("transfer_approved", transfer_id=order.id, approved_by=approved_by)

        await self._close_request_notifications(order)
        await emit_safely(
            self._notifier,
            title="Transfer Accepted",
            message=(
                f"Transfer {order.transfer_number} was accepted by {order.to_location}"
                + (" with edited quantities" if edited_quantities else "")
            ),
            type=NotificationType.TRANSFER_ACCEPTANCE.value,
            target_location=order.from_location,
            source_location=order.to_location,
            transfer_order_id=order.id,
        )
        return order

    async def dispatch(self, transfer_id: str) -> TransferOrder:
        """
        Ship an Approved order: deduct its lines from the source location.

        Every item must be held at the source in the summed quantity of its
        lines; nothing is deducted unless all of them are.

        Raises:
            InsufficientStockError: if an item is short or has no source record
        """
        order = await self.get(transfer_id)
        self._check_transition(order, TransferStatus.IN_TRANSIT)

        for item_code, needed in order.quantities_by_item().items():
            record = await self._inventory.find_record(order.from_location, item_code)
            held = record.current_stock if record is not None else 0.0
            if held < needed:
                raise InsufficientStockError(item_code, order.from_location, held, needed)

        for line in order.lines:
            await self._inventory.deduct(
                order.from_location,
                line.item_code,
                line.quantity,
                reason=f"Transfer {order.transfer_number} dispatched",
                reference=order.transfer_number,
            )

        now = datetime.now(UTC)
        order.status = TransferStatus.IN_TRANSIT
        order.dispatched_at = now
        order.updated_at = now
        order = await self._store.update_transfer(order)
        logger.info("transfer_dispatched", transfer_id=order.id)
        return order

    async def deliver(self, transfer_id: str) -> TransferOrder:
        """Complete an In Transit order: receive its lines at the destination."""
        order = await self.get(transfer_id)
        self._check_transition(order, TransferStatus.DELIVERED)

        for line in order.lines:
            await self._inventory.receive(
                order.to_location,
                line.item_code,
                line.item_name,
                line.quantity,
                reason=f"Transfer {order.transfer_number} delivered",
                item_type=line.item_type,
                unit=line.unit,
                unit_price=line.unit_price,
                reference=order.transfer_number,
            )

        now = datetime.now(UTC)
        order.status = TransferStatus.DELIVERED
        order.delivered_at = now
        order.updated_at = now
        order = await self._store.update_transfer(order)
        logger.info("transfer_delivered", transfer_id=order.id)

        await emit_safely(
            self._notifier,
            title="Transfer Completed",
            message=f"Transfer {order.transfer_number} was delivered to {order.to_location}",
            type=NotificationType.TRANSFER_COMPLETED.value,
            target_location=order.from_location,
            source_location=order.to_location,
            transfer_order_id=order.id,
        )
        return order

    async def cancel(
        self,
        transfer_id: str,
        reason: str | None = None,
        cancelled_by: str | None = None,
    ) -> TransferOrder:
        """
        Cancel (or reject) a non-terminal order.

        Reservations are released; stock already dispatched goes back to the source.
        """
        order = await self.get(transfer_id)
        self._check_transition(order, TransferStatus.CANCELLED)
        previous = order.status

        for line in order.lines:
            if previous == TransferStatus.APPROVED:
                await self._inventory.release(order.from_location, line.item_code, line.quantity)
            elif previous == TransferStatus.IN_TRANSIT:
                await self._inventory.receive(
                    order.from_location,
                    line.item_code,
                    line.item_name,
                    line.quantity,
                    reason=f"Transfer {order.transfer_number} cancelled in transit",
                    item_type=line.item_type,
                    unit=line.unit,
                    unit_price=line.unit_price,
                    reference=order.transfer_number,
                )

        now = datetime.now(UTC)
        order.status = TransferStatus.CANCELLED
        order.cancel_reason = reason
        order.cancelled_at = now
        order.updated_at = now
        order = await self._store.update_transfer(order)
        logger.info(
            "transfer_cancelled",
            transfer_id=order.id,
            previous_status=previous.value,
            cancelled_by=cancelled_by,
        )

        await self._close_request_notifications(order)
        await emit_safely(
            self._notifier,
            title="Transfer Rejected" if previous == TransferStatus.PENDING else "Transfer Cancelled",
            message=(
                f"Transfer {order.transfer_number} was "
                f"{'rejected' if previous == TransferStatus.PENDING else 'cancelled'}"
                + (f": {reason}" if reason else "")
            ),
            type=NotificationType.TRANSFER_REJECTION.value,
            target_location=order.from_location,
            source_location=order.to_location,
            transfer_order_id=order.id,
        )
        return order

    async def stats(self) -> dict:
        """Order count and value overall and per status."""
        totals = await self._store.status_totals()
        by_status = {
            status.value: {
                "count": totals.get(status, (0, 0.0))[0],
                "total_value": totals.get(status, (0, 0.0))[1],
            }
            for status in TransferStatus
        }
        return {
            "total_orders": sum(s["count"] for s in by_status.values()),
            "total_value": sum(s["total_value"] for s in by_status.values()),
            "by_status": by_status,
        }

    def _check_transition(self, order: TransferOrder, target: TransferStatus) -> None:
        if not order.can_transition_to(target):
            raise InvalidTransferTransitionError(
                order.id or order.transfer_number, order.status.value, target.value
            )

    @staticmethod
    def _apply_edits(order: TransferOrder, edited_quantities: dict[str, float]) -> None:
        codes = {line.item_code for line in order.lines}
        unknown = set(edited_quantities) - codes
        if unknown:
            raise ValidationError("edited_quantities", "unknown item codes", sorted(unknown))

        for line in order.lines:
            if line.item_code in edited_quantities:
                qty = edited_quantities[line.item_code]
                if qty <= 0:
                    raise ValidationError(f"edited_quantities.{line.item_code}", "must be > 0", qty)
                line.quantity = qty
        order.recompute_total()

    async def _close_request_notifications(self, order: TransferOrder) -> None:
        if self._notifier is None or order.id is None:
            return
        try:
            await self._notifier.mark_read_for_transfer(order.id)
        except Exception as e:
            logger.warning("transfer_notifications_not_closed", transfer_id=order.id, error=str(e))
