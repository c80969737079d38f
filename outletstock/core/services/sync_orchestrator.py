"""
Sync orchestrator.

Drives one pull of the external item batch through reconciliation:

    Idle -> Fetching -> Processing -> Completed
                 \\-> Failed

A fetch failure fails the run before anything is written. Per-item errors
are tallied by the reconciler and never fail the run.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from outletstock.config import get_logger
from outletstock.core.entities.notification import NotificationType
from outletstock.core.exceptions import ExternalSourceError, SyncInProgressError
from outletstock.core.interfaces.item_source import IExternalItemSource
from outletstock.core.interfaces.notifier import INotifier
from outletstock.core.services.notification_service import emit_safely
from outletstock.core.services.reconciliation import ReconciliationReport, StockReconciler

logger = get_logger(__name__)


class SyncState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class SyncRunResult:
    """Outcome of one sync run."""

    state: SyncState
    dry_run: bool
    started_at: datetime
    finished_at: datetime
    report: ReconciliationReport | None = None
    error: ExternalSourceError | None = None

    def tally(self) -> dict[str, int]:
        return (self.report or ReconciliationReport()).tally()


class SyncOrchestrator:
    """Runs external-source sync passes. One run at a time per instance."""

    def __init__(
        self,
        source: IExternalItemSource,
        reconciler: StockReconciler,
        notifier: INotifier | None = None,
        notify_location: str | None = None,
    ):
        self._source = source
        self._reconciler = reconciler
        self._notifier = notifier
        self._notify_location = notify_location
        self._state = SyncState.IDLE

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state in (SyncState.FETCHING, SyncState.PROCESSING)

    async def run(self, dry_run: bool = False) -> SyncRunResult:
        """
        Fetch the external batch and reconcile it.

        Raises:
            SyncInProgressError: if this orchestrator is already running
        """
        if self.is_running:
            raise SyncInProgressError()

        started_at = datetime.now(UTC)
        self._state = SyncState.FETCHING
        logger.info("sync_started", dry_run=dry_run)

        try:
            items = await self._source.fetch_items()
        except ExternalSourceError as e:
            self._state = SyncState.FAILED
            logger.error("sync_fetch_failed", step=e.step, error=e.message)
            return SyncRunResult(
                state=self._state,
                dry_run=dry_run,
                started_at=started_at,
                finished_at=datetime.now(UTC),
                error=e,
            )
        except BaseException:
            self._state = SyncState.FAILED
            raise

        self._state = SyncState.PROCESSING
        logger.info("sync_processing", items=len(items))
        try:
            report = await self._reconciler.reconcile(items, dry_run=dry_run)
        except BaseException:
            self._state = SyncState.FAILED
            raise

        self._state = SyncState.COMPLETED
        logger.info("sync_completed", dry_run=dry_run, **report.tally())

        if not dry_run and (report.added or report.updated) and self._notify_location:
            await emit_safely(
                self._notifier,
                title="Stock sync completed",
                message=(
                    f"{report.added} materials added, {report.updated} updated, "
                    f"{report.errors} errors"
                ),
                type=NotificationType.STOCK_SYNC.value,
                target_location=self._notify_location,
            )

        return SyncRunResult(
            state=self._state,
            dry_run=dry_run,
            started_at=started_at,
            finished_at=datetime.now(UTC),
            report=report,
        )
