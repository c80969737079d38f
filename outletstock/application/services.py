"""
Service factory functions for dependency injection.

This module wires infrastructure implementations to core services.
Use cases and the API import from here.
"""

from pathlib import Path

from outletstock.config import get_settings
from outletstock.core.interfaces import IExternalItemSource
from outletstock.core.services import (
    InventoryService,
    LocationMapper,
    MaterialService,
    NotificationService,
    StockReconciler,
    SyncOrchestrator,
    TransferService,
)

# Singleton service instances
_location_mapper: LocationMapper | None = None
_sync_orchestrator: SyncOrchestrator | None = None


def get_location_mapper() -> LocationMapper:
    """Get the location mapper built from sync settings."""
    global _location_mapper

    if _location_mapper is None:
        sync = get_settings().sync
        _location_mapper = LocationMapper(
            locations=sync.locations,
            aliases=sync.location_aliases,
            fallback=sync.fallback_location,
        )
    return _location_mapper


async def get_notification_service() -> NotificationService:
    from outletstock.infrastructure.storage.sqlite import get_notification_store

    return NotificationService(await get_notification_store())


async def get_inventory_service() -> InventoryService:
    from outletstock.infrastructure.storage.sqlite import get_inventory_store

    return InventoryService(await get_inventory_store())


async def get_material_service() -> MaterialService:
    from outletstock.infrastructure.storage.sqlite import get_material_store

    return MaterialService(
        material_store=await get_material_store(),
        location_mapper=get_location_mapper(),
        sync_settings=get_settings().sync,
    )


async def get_stock_reconciler() -> StockReconciler:
    from outletstock.infrastructure.storage.sqlite import get_material_store

    return StockReconciler(
        material_store=await get_material_store(),
        location_mapper=get_location_mapper(),
        sync_settings=get_settings().sync,
    )


async def get_transfer_service() -> TransferService:
    from outletstock.infrastructure.storage.sqlite import get_transfer_store

    return TransferService(
        transfer_store=await get_transfer_store(),
        inventory_service=await get_inventory_service(),
        notifier=await get_notification_service(),
    )


async def get_sync_orchestrator(
    source: IExternalItemSource | None = None,
    from_file: Path | None = None,
) -> SyncOrchestrator:
    """
    Get or create the sync orchestrator.

    The default orchestrator (Zoho source) is a singleton so that its
    in-progress guard covers every caller in the process. Passing a
    source or file builds a one-off orchestrator.

    Args:
        source: Optional item source override
        from_file: Read items from a saved JSON dump instead of Zoho

    Returns:
        Configured SyncOrchestrator
    """
    global _sync_orchestrator

    if source is None and from_file is None and _sync_orchestrator is not None:
        return _sync_orchestrator

    from outletstock.infrastructure.external import get_item_source

    orchestrator = SyncOrchestrator(
        source=source or get_item_source(from_file),
        reconciler=await get_stock_reconciler(),
        notifier=await get_notification_service(),
        notify_location=get_settings().sync.fallback_location,
    )

    if source is None and from_file is None:
        _sync_orchestrator = orchestrator
    return orchestrator


def reset_services() -> None:
    """Drop cached singletons (tests and settings reloads)."""
    global _location_mapper, _sync_orchestrator
    _location_mapper = None
    _sync_orchestrator = None
