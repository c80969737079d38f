"""Sync Materials Use Case: pull the external catalogue and reconcile it."""

from pathlib import Path

from outletstock.application.dto.responses import ItemOutcomeResponse, SyncRunResponse
from outletstock.config import get_logger
from outletstock.core.services import SyncOrchestrator, SyncRunResult, SyncState

logger = get_logger(__name__)


class SyncMaterialsUseCase:
    """
    Run one sync pass against the external source.

    A failed fetch is raised as the ExternalSourceError the orchestrator
    captured, after the orchestrator has recorded the failed state.
    """

    def __init__(
        self,
        orchestrator: SyncOrchestrator | None = None,
        from_file: Path | None = None,
    ):
        self._orchestrator = orchestrator
        self._from_file = from_file

    async def _get_orchestrator(self) -> SyncOrchestrator:
        if self._orchestrator is None:
            from outletstock.application.services import get_sync_orchestrator

            self._orchestrator = await get_sync_orchestrator(from_file=self._from_file)
        return self._orchestrator

    async def execute(self, dry_run: bool = False) -> SyncRunResult:
        """
        Execute a sync run.

        Raises:
            ExternalSourceError: if the external fetch failed (nothing written)
            SyncInProgressError: if a run is already in progress
        """
        orchestrator = await self._get_orchestrator()
        result = await orchestrator.run(dry_run=dry_run)

        if result.state == SyncState.FAILED and result.error is not None:
            raise result.error
        return result

    def to_response(self, result: SyncRunResult) -> SyncRunResponse:
        details = result.report.details if result.report else []
        return SyncRunResponse(
            state=result.state,
            dry_run=result.dry_run,
            started_at=result.started_at,
            finished_at=result.finished_at,
            summary=result.tally(),
            details=[
                ItemOutcomeResponse.model_validate(outcome, from_attributes=True)
                for outcome in details
            ],
        )
