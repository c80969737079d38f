"""Material catalog and stock sync endpoints."""

from fastapi import APIRouter, Depends, Query, status

from outletstock.api.dependencies import (
    get_create_material_use_case,
    get_material_svc,
    get_reconcile_batch_use_case,
    get_sync_materials_use_case,
)
from outletstock.application.dto.requests import CreateMaterialRequest, ReconcileBatchRequest
from outletstock.application.dto.responses import (
    ErrorResponse,
    MaterialListResponse,
    MaterialResponse,
    ReconciliationResponse,
    SyncRunResponse,
)
from outletstock.application.use_cases import (
    CreateMaterialUseCase,
    ReconcileBatchUseCase,
    SyncMaterialsUseCase,
)
from outletstock.core.services import MaterialService

router = APIRouter(prefix="/api/materials", tags=["materials"])


@router.post(
    "",
    response_model=MaterialResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_material(
    request: CreateMaterialRequest,
    use_case: CreateMaterialUseCase = Depends(get_create_material_use_case),
) -> MaterialResponse:
    """Create a material by hand."""
    material = await use_case.execute(request)
    return use_case.to_response(material)


@router.get("", response_model=MaterialListResponse)
async def list_materials(
    category: str | None = None,
    active_only: bool = False,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    service: MaterialService = Depends(get_material_svc),
) -> MaterialListResponse:
    materials = await service.list_materials(
        category=category, active_only=active_only, limit=limit, offset=offset
    )
    return MaterialListResponse(
        materials=[MaterialResponse.model_validate(m, from_attributes=True) for m in materials],
        count=len(materials),
    )


@router.post(
    "/sync",
    response_model=SyncRunResponse,
    responses={409: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def sync_materials(
    dry_run: bool = False,
    use_case: SyncMaterialsUseCase = Depends(get_sync_materials_use_case),
) -> SyncRunResponse:
    """
    Pull the external catalogue and reconcile it into local materials.

    With ``dry_run`` the outcomes are computed but nothing is written.
    """
    result = await use_case.execute(dry_run=dry_run)
    return use_case.to_response(result)


@router.post("/reconcile", response_model=ReconciliationResponse)
async def reconcile_batch(
    request: ReconcileBatchRequest,
    use_case: ReconcileBatchUseCase = Depends(get_reconcile_batch_use_case),
) -> ReconciliationResponse:
    """Reconcile a posted batch of external items."""
    report = await use_case.execute(request)
    return use_case.to_response(report, dry_run=request.dry_run)


@router.get(
    "/{code}",
    response_model=MaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_material(
    code: str,
    service: MaterialService = Depends(get_material_svc),
) -> MaterialResponse:
    material = await service.get_by_code(code)
    return MaterialResponse.model_validate(material, from_attributes=True)


@router.delete(
    "/{code}",
    response_model=MaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def deactivate_material(
    code: str,
    service: MaterialService = Depends(get_material_svc),
) -> MaterialResponse:
    """Soft-deactivate a material."""
    material = await service.deactivate(code)
    return MaterialResponse.model_validate(material, from_attributes=True)
