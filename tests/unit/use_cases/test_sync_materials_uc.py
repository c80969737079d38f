"""Unit tests for SyncMaterialsUseCase."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from outletstock.application.use_cases.sync_materials import SyncMaterialsUseCase
from outletstock.core.exceptions import ExternalSourceError
from outletstock.core.services import (
    ItemOutcome,
    OutcomeAction,
    ReconciliationReport,
    SyncRunResult,
    SyncState,
)


def _result(state: SyncState, **kwargs) -> SyncRunResult:
    now = datetime.now(UTC)
    return SyncRunResult(state=state, dry_run=False, started_at=now, finished_at=now, **kwargs)


@pytest.fixture
def mock_orchestrator():
    return AsyncMock()


class TestSyncMaterialsUseCase:
    async def test_returns_completed_result(self, mock_orchestrator):
        report = ReconciliationReport(total=1, with_key=1, added=1)
        report.details.append(
            ItemOutcome(code="A1", name="Flour", action=OutcomeAction.ADDED, current_stock=3.0)
        )
        mock_orchestrator.run.return_value = _result(SyncState.COMPLETED, report=report)
        use_case = SyncMaterialsUseCase(orchestrator=mock_orchestrator)

        result = await use_case.execute(dry_run=True)
        response = use_case.to_response(result)

        mock_orchestrator.run.assert_awaited_once_with(dry_run=True)
        assert response.state == SyncState.COMPLETED
        assert response.summary["added"] == 1
        assert response.details[0].code == "A1"

    async def test_raises_fetch_failure(self, mock_orchestrator):
        error = ExternalSourceError("auth", "invalid_code", status_code=401)
        mock_orchestrator.run.return_value = _result(SyncState.FAILED, error=error)
        use_case = SyncMaterialsUseCase(orchestrator=mock_orchestrator)

        with pytest.raises(ExternalSourceError) as exc_info:
            await use_case.execute()

        assert exc_info.value.step == "auth"

    async def test_response_without_report(self, mock_orchestrator):
        use_case = SyncMaterialsUseCase(orchestrator=mock_orchestrator)

        response = use_case.to_response(_result(SyncState.FAILED))

        assert response.details == []
        assert response.summary["total_from_external"] == 0
