"""Reconcile Batch Use Case: reconcile a posted batch of external items."""

from outletstock.application.dto.requests import ReconcileBatchRequest
from outletstock.application.dto.responses import ItemOutcomeResponse, ReconciliationResponse
from outletstock.config import get_logger
from outletstock.core.services import ReconciliationReport, StockReconciler

logger = get_logger(__name__)


class ReconcileBatchUseCase:
    """Run stock reconciliation over items supplied by the caller."""

    def __init__(self, reconciler: StockReconciler | None = None):
        self._reconciler = reconciler

    async def _get_reconciler(self) -> StockReconciler:
        if self._reconciler is None:
            from outletstock.application.services import get_stock_reconciler

            self._reconciler = await get_stock_reconciler()
        return self._reconciler

    async def execute(self, request: ReconcileBatchRequest) -> ReconciliationReport:
        logger.info("reconcile_batch_started", items=len(request.items), dry_run=request.dry_run)
        reconciler = await self._get_reconciler()
        return await reconciler.reconcile(request.items, dry_run=request.dry_run)

    def to_response(self, report: ReconciliationReport, dry_run: bool) -> ReconciliationResponse:
        return ReconciliationResponse(
            dry_run=dry_run,
            summary=report.tally(),
            details=[
                ItemOutcomeResponse.model_validate(outcome, from_attributes=True)
                for outcome in report.details
            ],
        )
