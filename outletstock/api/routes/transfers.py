"""Transfer order endpoints."""

from fastapi import APIRouter, Body, Depends, Query, status

from outletstock.api.dependencies import get_create_transfer_use_case, get_transfer_svc
from outletstock.application.dto.requests import (
    ApproveTransferRequest,
    CancelTransferRequest,
    CreateTransferRequest,
)
from outletstock.application.dto.responses import (
    ErrorResponse,
    TransferListResponse,
    TransferOrderResponse,
    TransferStatsResponse,
)
from outletstock.application.use_cases import CreateTransferUseCase
from outletstock.core.entities.transfer import TransferOrder, TransferStatus
from outletstock.core.services import TransferService

router = APIRouter(prefix="/api/transfers", tags=["transfers"])

_TRANSITION_ERRORS = {404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}


def _order_response(order: TransferOrder) -> TransferOrderResponse:
    return TransferOrderResponse.model_validate(order, from_attributes=True)


@router.post(
    "",
    response_model=TransferOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_transfer(
    request: CreateTransferRequest,
    use_case: CreateTransferUseCase = Depends(get_create_transfer_use_case),
) -> TransferOrderResponse:
    """Open a Pending transfer and notify the destination."""
    order = await use_case.execute(request)
    return use_case.to_response(order)


@router.get("", response_model=TransferListResponse)
async def list_transfers(
    status: TransferStatus | None = None,
    location: str | None = Query(default=None, description="Matches source or destination"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    service: TransferService = Depends(get_transfer_svc),
) -> TransferListResponse:
    orders = await service.list_transfers(
        status=status, location=location, limit=limit, offset=offset
    )
    return TransferListResponse(
        transfers=[_order_response(o) for o in orders],
        count=len(orders),
    )


@router.get("/stats", response_model=TransferStatsResponse)
async def transfer_stats(
    service: TransferService = Depends(get_transfer_svc),
) -> TransferStatsResponse:
    """Order count and value, overall and per status."""
    return TransferStatsResponse.model_validate(await service.stats())


@router.get(
    "/{transfer_id}",
    response_model=TransferOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_transfer(
    transfer_id: str,
    service: TransferService = Depends(get_transfer_svc),
) -> TransferOrderResponse:
    return _order_response(await service.get(transfer_id))


@router.put(
    "/{transfer_id}/approve",
    response_model=TransferOrderResponse,
    responses=_TRANSITION_ERRORS,
)
async def approve_transfer(
    transfer_id: str,
    request: ApproveTransferRequest,
    service: TransferService = Depends(get_transfer_svc),
) -> TransferOrderResponse:
    """Accept a Pending transfer, optionally with edited quantities."""
    order = await service.approve(
        transfer_id,
        approved_by=request.approved_by,
        edited_quantities=request.edited_quantities,
    )
    return _order_response(order)


@router.put(
    "/{transfer_id}/dispatch",
    response_model=TransferOrderResponse,
    responses=_TRANSITION_ERRORS,
)
async def dispatch_transfer(
    transfer_id: str,
    service: TransferService = Depends(get_transfer_svc),
) -> TransferOrderResponse:
    return _order_response(await service.dispatch(transfer_id))


@router.put(
    "/{transfer_id}/deliver",
    response_model=TransferOrderResponse,
    responses=_TRANSITION_ERRORS,
)
async def deliver_transfer(
    transfer_id: str,
    service: TransferService = Depends(get_transfer_svc),
) -> TransferOrderResponse:
    return _order_response(await service.deliver(transfer_id))


@router.put(
    "/{transfer_id}/cancel",
    response_model=TransferOrderResponse,
    responses=_TRANSITION_ERRORS,
)
async def cancel_transfer(
    transfer_id: str,
    request: CancelTransferRequest | None = Body(default=None),
    service: TransferService = Depends(get_transfer_svc),
) -> TransferOrderResponse:
    """Cancel a transfer; from Pending this is a rejection."""
    request = request or CancelTransferRequest()
    order = await service.cancel(
        transfer_id,
        reason=request.reason,
        cancelled_by=request.cancelled_by,
    )
    return _order_response(order)
