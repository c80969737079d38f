"""Per-location inventory endpoints."""

from fastapi import APIRouter, Depends, Query, status

from outletstock.api.dependencies import get_adjust_stock_use_case, get_inventory_svc
from outletstock.application.dto.requests import (
    AdjustStockRequest,
    CreateInventoryRecordRequest,
    SetReservedRequest,
)
from outletstock.application.dto.responses import (
    AdjustStockResponse,
    ErrorResponse,
    InventoryListResponse,
    InventoryRecordResponse,
    LocationSummaryResponse,
    StockMovementResponse,
)
from outletstock.application.use_cases import AdjustStockUseCase
from outletstock.core.entities.inventory import InventoryRecord
from outletstock.core.entities.stock import StockStatus
from outletstock.core.services import InventoryService

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


def _record_response(record: InventoryRecord) -> InventoryRecordResponse:
    return InventoryRecordResponse.model_validate(record, from_attributes=True)


@router.post(
    "/records",
    response_model=InventoryRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_record(
    request: CreateInventoryRecordRequest,
    service: InventoryService = Depends(get_inventory_svc),
) -> InventoryRecordResponse:
    """Open an inventory record for an item at a location."""
    record = await service.create_record(InventoryRecord(**request.model_dump()))
    return _record_response(record)


@router.get("/records", response_model=InventoryListResponse)
async def list_records(
    location_id: str | None = None,
    status: StockStatus | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    service: InventoryService = Depends(get_inventory_svc),
) -> InventoryListResponse:
    records = await service.list_records(
        location_id=location_id, status=status, limit=limit, offset=offset
    )
    return InventoryListResponse(
        records=[_record_response(r) for r in records],
        count=len(records),
    )


@router.get(
    "/records/{record_id}",
    response_model=InventoryRecordResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_record(
    record_id: str,
    service: InventoryService = Depends(get_inventory_svc),
) -> InventoryRecordResponse:
    return _record_response(await service.get_record(record_id))


@router.post(
    "/records/{record_id}/adjust",
    response_model=AdjustStockResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def adjust_stock(
    record_id: str,
    request: AdjustStockRequest,
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> AdjustStockResponse:
    """Apply a signed stock change and log the movement."""
    result = await use_case.execute(record_id, request)
    return use_case.to_response(result)


@router.put(
    "/records/{record_id}/reserved",
    response_model=InventoryRecordResponse,
    responses={404: {"model": ErrorResponse}},
)
async def set_reserved(
    record_id: str,
    request: SetReservedRequest,
    service: InventoryService = Depends(get_inventory_svc),
) -> InventoryRecordResponse:
    record = await service.set_reserved(record_id, request.reserved_stock)
    return _record_response(record)


@router.get(
    "/records/{record_id}/movements",
    response_model=list[StockMovementResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_movements(
    record_id: str,
    limit: int = Query(default=100, ge=1, le=1000),
    service: InventoryService = Depends(get_inventory_svc),
) -> list[StockMovementResponse]:
    """Movements for a record, newest first."""
    movements = await service.get_movements(record_id, limit=limit)
    return [StockMovementResponse.model_validate(m, from_attributes=True) for m in movements]


@router.get("/locations/{location_id}/summary", response_model=LocationSummaryResponse)
async def get_location_summary(
    location_id: str,
    service: InventoryService = Depends(get_inventory_svc),
) -> LocationSummaryResponse:
    """Item count, value and status counts for one location."""
    summary = await service.get_summary(location_id)
    return LocationSummaryResponse(
        location_id=summary.location_id,
        total_items=summary.total_items,
        total_value=summary.total_value,
        status_counts={s.value: n for s, n in summary.status_counts.items()},
    )
