"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from outletstock.config import SyncSettings
from outletstock.core.services import LocationMapper
from outletstock.infrastructure.storage.sqlite import ConnectionPool, set_pool
from outletstock.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def sync_settings() -> SyncSettings:
    """Default reconciliation rules."""
    return SyncSettings()


@pytest.fixture
def location_mapper(sync_settings: SyncSettings) -> LocationMapper:
    return LocationMapper(
        locations=sync_settings.locations,
        aliases=sync_settings.location_aliases,
        fallback=sync_settings.fallback_location,
    )


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_pool(temp_db_path: Path) -> AsyncGenerator[ConnectionPool, None]:
    """A fully migrated temporary database installed as the process pool."""
    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert all(r.success for r in results)

    pool = ConnectionPool(temp_db_path, pool_size=2)
    await pool.initialize()
    set_pool(pool)
    yield pool
    await pool.close()
    set_pool(None)
