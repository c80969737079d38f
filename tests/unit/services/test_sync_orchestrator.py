"""Tests for the sync orchestrator state machine."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from outletstock.config import SyncSettings
from outletstock.core.exceptions import ExternalSourceError, SyncInProgressError
from outletstock.core.interfaces import (
    ExternalItem,
    ExternalLocationQuantity,
    IExternalItemSource,
)
from outletstock.core.services import (
    LocationMapper,
    StockReconciler,
    SyncOrchestrator,
    SyncState,
)


def _items() -> list[ExternalItem]:
    return [
        ExternalItem(
            sku="A1",
            name="Flour",
            locations=[ExternalLocationQuantity(location="Central", quantity=10)],
        ),
        ExternalItem(sku=None, name="Mystery"),
    ]


@pytest.fixture
def source() -> AsyncMock:
    mock = AsyncMock(spec=IExternalItemSource)
    mock.fetch_items.return_value = _items()
    return mock


@pytest.fixture
def orchestrator(
    source: AsyncMock,
    material_store: AsyncMock,
    location_mapper: LocationMapper,
    sync_settings: SyncSettings,
    notifier: AsyncMock,
) -> SyncOrchestrator:
    reconciler = StockReconciler(material_store, location_mapper, sync_settings)
    return SyncOrchestrator(
        source, reconciler, notifier=notifier, notify_location="central-kitchen"
    )


class TestSyncOrchestrator:
    async def test_starts_idle(self, orchestrator: SyncOrchestrator):
        assert orchestrator.state == SyncState.IDLE
        assert orchestrator.is_running is False

    async def test_completed_run_reports_tally(
        self, orchestrator: SyncOrchestrator, material_store: AsyncMock
    ):
        result = await orchestrator.run()

        assert result.state == SyncState.COMPLETED
        assert orchestrator.state == SyncState.COMPLETED
        assert result.error is None
        assert result.tally() == {
            "total_from_external": 2,
            "with_key": 1,
            "without_key": 1,
            "added": 1,
            "updated": 0,
            "errors": 0,
        }
        assert "A1" in material_store.materials

    async def test_fetch_failure_writes_nothing(
        self, orchestrator: SyncOrchestrator, source: AsyncMock, material_store: AsyncMock
    ):
        source.fetch_items.side_effect = ExternalSourceError("auth", "invalid refresh token")

        result = await orchestrator.run()

        assert result.state == SyncState.FAILED
        assert result.error.step == "auth"
        assert result.report is None
        assert result.tally()["total_from_external"] == 0
        material_store.create_material.assert_not_called()
        material_store.update_material.assert_not_called()

    async def test_can_run_again_after_failure(
        self, orchestrator: SyncOrchestrator, source: AsyncMock
    ):
        source.fetch_items.side_effect = [ExternalSourceError("list_items", "timeout"), _items()]

        first = await orchestrator.run()
        second = await orchestrator.run()

        assert first.state == SyncState.FAILED
        assert second.state == SyncState.COMPLETED

    async def test_real_run_with_changes_notifies(
        self, orchestrator: SyncOrchestrator, notifier: AsyncMock
    ):
        await orchestrator.run()

        notifier.notify.assert_awaited_once()
        kwargs = notifier.notify.call_args.kwargs
        assert kwargs["type"] == "stock_sync"
        assert kwargs["target_location"] == "central-kitchen"

    async def test_dry_run_does_not_notify_or_write(
        self, orchestrator: SyncOrchestrator, notifier: AsyncMock, material_store: AsyncMock
    ):
        result = await orchestrator.run(dry_run=True)

        assert result.dry_run is True
        assert result.tally()["added"] == 1
        assert material_store.materials == {}
        notifier.notify.assert_not_called()

    async def test_notifier_failure_does_not_fail_run(
        self, orchestrator: SyncOrchestrator, notifier: AsyncMock
    ):
        notifier.notify.side_effect = RuntimeError("notifications table missing")

        result = await orchestrator.run()

        assert result.state == SyncState.COMPLETED

    async def test_concurrent_run_rejected(
        self, orchestrator: SyncOrchestrator, source: AsyncMock
    ):
        release = asyncio.Event()

        async def slow_fetch():
            await release.wait()
            return _items()

        source.fetch_items.side_effect = slow_fetch

        first = asyncio.create_task(orchestrator.run())
        await asyncio.sleep(0)
        assert orchestrator.state == SyncState.FETCHING

        with pytest.raises(SyncInProgressError):
            await orchestrator.run()

        release.set()
        result = await first
        assert result.state == SyncState.COMPLETED
