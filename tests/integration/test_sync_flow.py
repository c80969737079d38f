"""Integration tests: external items reconciled into a real database."""

import json
from pathlib import Path

import pytest

from outletstock.application.services import get_sync_orchestrator, reset_services
from outletstock.application.use_cases import SyncMaterialsUseCase
from outletstock.core.entities import NotificationType, StockStatus
from outletstock.core.exceptions import ExternalSourceError
from outletstock.core.services import SyncState
from outletstock.infrastructure.storage.sqlite import (
    SQLiteMaterialStore,
    SQLiteNotificationStore,
)


@pytest.fixture(autouse=True)
def _fresh_services():
    reset_services()
    yield
    reset_services()


def _dump(tmp_path: Path, items: list[dict], name: str = "items.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps({"items": items}), encoding="utf-8")
    return path


def _zoho_item(item_id: str, sku: str | None, locations: list[tuple[str, float]]) -> dict:
    return {
        "item_id": item_id,
        "sku": sku,
        "name": f"Item {sku or item_id}",
        "unit": "pcs",
        "rate": 0.5,
        "locations": [
            {"location_name": name, "location_stock_on_hand": qty} for name, qty in locations
        ],
    }


class TestSyncFlow:
    async def test_two_runs_accumulate_stock(self, migrated_pool, tmp_path: Path):
        first = _dump(tmp_path, [_zoho_item("1", "A1", [("TLB central kitchen", 10)])], "one.json")
        second = _dump(tmp_path, [_zoho_item("1", "A1", [("TLB City", 15)])], "two.json")

        await SyncMaterialsUseCase(from_file=first).execute()
        result = await SyncMaterialsUseCase(from_file=second).execute()

        assert result.tally()["updated"] == 1
        material = await SQLiteMaterialStore().get_by_code("A1")
        assert material.location_stocks["central-kitchen"] == 10.0
        assert material.location_stocks["kuwait-city"] == 15.0
        assert material.current_stock == 25.0
        assert material.status == StockStatus.IN_STOCK
        assert sum(material.location_stocks.values()) == material.current_stock

    async def test_unkeyed_items_are_skipped(self, migrated_pool, tmp_path: Path):
        path = _dump(
            tmp_path,
            [
                _zoho_item("1", "A1", [("360 Mall", 2)]),
                _zoho_item("2", None, [("360 Mall", 9)]),
            ],
        )

        result = await SyncMaterialsUseCase(from_file=path).execute()

        assert result.tally() == {
            "total_from_external": 2,
            "with_key": 1,
            "without_key": 1,
            "added": 1,
            "updated": 0,
            "errors": 0,
        }
        assert len(await SQLiteMaterialStore().list_materials()) == 1

    async def test_dry_run_leaves_database_untouched(self, migrated_pool, tmp_path: Path):
        path = _dump(tmp_path, [_zoho_item("1", "A1", [("clinic", 4)])])

        result = await SyncMaterialsUseCase(from_file=path).execute(dry_run=True)

        assert result.tally()["added"] == 1
        assert await SQLiteMaterialStore().list_materials() == []
        assert await SQLiteNotificationStore().list_for_target("central-kitchen") == []

    async def test_real_run_posts_sync_notification(self, migrated_pool, tmp_path: Path):
        path = _dump(tmp_path, [_zoho_item("1", "A1", [("clinic", 4)])])

        await SyncMaterialsUseCase(from_file=path).execute()

        notifications = await SQLiteNotificationStore().list_for_target("central-kitchen")
        assert [n.type for n in notifications] == [NotificationType.STOCK_SYNC]

    async def test_unreadable_source_fails_without_writes(self, migrated_pool, tmp_path: Path):
        orchestrator = await get_sync_orchestrator(from_file=tmp_path / "missing.json")

        with pytest.raises(ExternalSourceError):
            await SyncMaterialsUseCase(orchestrator=orchestrator).execute()

        assert orchestrator.state == SyncState.FAILED
        assert await SQLiteMaterialStore().list_materials() == []
