"""Fixtures for service tests: AsyncMock stores backed by plain dicts."""

from unittest.mock import AsyncMock

import pytest

from outletstock.core.entities import InventoryRecord, Material, Notification, StockMovement
from outletstock.core.exceptions import DuplicateMaterialError
from outletstock.core.interfaces import (
    IInventoryStore,
    IMaterialStore,
    INotificationStore,
    INotifier,
)


@pytest.fixture
def material_store() -> AsyncMock:
    """Material store keeping copies of saved materials in ``store.materials``."""
    materials: dict[str, Material] = {}
    store = AsyncMock(spec=IMaterialStore)

    async def create_material(material: Material) -> Material:
        if material.code in materials:
            raise DuplicateMaterialError(material.code)
        material.id = material.id or f"mat-{len(materials) + 1}"
        materials[material.code] = material.model_copy(deep=True)
        return material

    async def get_by_code(code: str) -> Material | None:
        found = materials.get(code)
        return found.model_copy(deep=True) if found else None

    async def update_material(material: Material) -> Material:
        materials[material.code] = material.model_copy(deep=True)
        return material

    async def list_materials(limit=100, offset=0, category=None, active_only=False):
        found = [
            m
            for m in materials.values()
            if (category is None or m.category == category) and (m.is_active or not active_only)
        ]
        return found[offset : offset + limit]

    store.create_material.side_effect = create_material
    store.get_by_code.side_effect = get_by_code
    store.update_material.side_effect = update_material
    store.list_materials.side_effect = list_materials
    store.materials = materials
    return store


@pytest.fixture
def inventory_store() -> AsyncMock:
    """Inventory store keeping records in ``store.records`` and movements in ``store.movements``."""
    records: dict[str, InventoryRecord] = {}
    movements: list[StockMovement] = []
    store = AsyncMock(spec=IInventoryStore)

    async def create_record(record: InventoryRecord) -> InventoryRecord:
        record.id = record.id or f"rec-{len(records) + 1}"
        records[record.id] = record.model_copy(deep=True)
        return record

    async def get_record(record_id: str) -> InventoryRecord | None:
        found = records.get(record_id)
        return found.model_copy(deep=True) if found else None

    async def get_record_by_item(location_id: str, item_code: str) -> InventoryRecord | None:
        for record in records.values():
            if record.location_id == location_id and record.item_code == item_code:
                return record.model_copy(deep=True)
        return None

    async def update_record(record: InventoryRecord) -> InventoryRecord:
        records[record.id] = record.model_copy(deep=True)
        return record

    async def list_location_records(location_id: str) -> list[InventoryRecord]:
        return [r.model_copy(deep=True) for r in records.values() if r.location_id == location_id]

    async def add_movement(movement: StockMovement) -> StockMovement:
        movement.id = f"mov-{len(movements) + 1}"
        movements.append(movement)
        return movement

    async def get_movements(record_id: str, limit: int = 100) -> list[StockMovement]:
        return [m for m in reversed(movements) if m.record_id == record_id][:limit]

    store.create_record.side_effect = create_record
    store.get_record.side_effect = get_record
    store.get_record_by_item.side_effect = get_record_by_item
    store.update_record.side_effect = update_record
    store.list_location_records.side_effect = list_location_records
    store.add_movement.side_effect = add_movement
    store.get_movements.side_effect = get_movements
    store.records = records
    store.movements = movements
    return store


@pytest.fixture
def notification_store() -> AsyncMock:
    """Notification store keeping notifications in ``store.notifications``."""
    notifications: dict[str, Notification] = {}
    store = AsyncMock(spec=INotificationStore)

    async def create_notification(notification: Notification) -> Notification:
        notification.id = f"ntf-{len(notifications) + 1}"
        notifications[notification.id] = notification.model_copy()
        return notification

    async def get_notification(notification_id: str) -> Notification | None:
        found = notifications.get(notification_id)
        return found.model_copy() if found else None

    async def mark_read(notification_id: str) -> bool:
        if notification_id not in notifications:
            return False
        notifications[notification_id].read = True
        return True

    store.create_notification.side_effect = create_notification
    store.get_notification.side_effect = get_notification
    store.mark_read.side_effect = mark_read
    store.notifications = notifications
    return store


@pytest.fixture
def notifier() -> AsyncMock:
    """A notifier that records calls without persisting anything."""
    mock = AsyncMock(spec=INotifier)
    mock.mark_read_for_transfer.return_value = 0
    return mock
