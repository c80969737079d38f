"""Create Transfer Use Case: open a Pending transfer order."""

from outletstock.application.dto.requests import CreateTransferRequest
from outletstock.application.dto.responses import TransferOrderResponse
from outletstock.config import get_logger
from outletstock.core.entities.transfer import TransferLine, TransferOrder
from outletstock.core.services import TransferService

logger = get_logger(__name__)


class CreateTransferUseCase:
    """Build a transfer order from a request and hand it to the transfer service."""

    def __init__(self, transfer_service: TransferService | None = None):
        self._transfer_service = transfer_service

    async def _get_transfer_service(self) -> TransferService:
        if self._transfer_service is None:
            from outletstock.application.services import get_transfer_service

            self._transfer_service = await get_transfer_service()
        return self._transfer_service

    async def execute(self, request: CreateTransferRequest) -> TransferOrder:
        order = TransferOrder(
            from_location=request.from_location,
            to_location=request.to_location,
            lines=[TransferLine(**line.model_dump()) for line in request.lines],
            priority=request.priority,
            requested_by=request.requested_by or "System",
            notes=request.notes,
        )
        logger.info(
            "create_transfer_started",
            from_location=order.from_location,
            to_location=order.to_location,
            lines=len(order.lines),
        )
        service = await self._get_transfer_service()
        return await service.create(order)

    def to_response(self, order: TransferOrder) -> TransferOrderResponse:
        return TransferOrderResponse.model_validate(order, from_attributes=True)
