"""
Stock reconciliation engine.

Merges externally reported items into persisted materials. Descriptive
fields from the external record overwrite the stored ones; per-location
stock is added to what is already held. Total stock is always the sum
of the per-location map.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from outletstock.config import SyncSettings, get_logger
from outletstock.core.entities.material import Material, SyncStatus, canonical_code
from outletstock.core.entities.stock import UnitOfMeasure
from outletstock.core.exceptions import DuplicateMaterialError, ValidationError
from outletstock.core.interfaces.item_source import ExternalItem
from outletstock.core.interfaces.material_store import IMaterialStore
from outletstock.core.services.normalizer import LocationMapper, normalize_unit

logger = get_logger(__name__)


class OutcomeAction(str, Enum):
    ADDED = "added"
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class MappedMaterial:
    """An external item translated into canonical terms."""

    code: str
    name: str
    category: str
    unit: UnitOfMeasure
    unit_price: float
    location_stocks: dict[str, float]
    description: str | None = None
    supplier_id: str | None = None
    supplier_name: str | None = None
    external_id: str | None = None
    is_active: bool = True


@dataclass
class ItemOutcome:
    """What happened to one external item."""

    code: str | None
    name: str
    action: OutcomeAction
    current_stock: float | None = None
    location_stocks: dict[str, float] | None = None
    error: str | None = None


@dataclass
class ReconciliationReport:
    """Summary of a reconciliation batch."""

    total: int = 0
    with_key: int = 0
    without_key: int = 0
    added: int = 0
    updated: int = 0
    errors: int = 0
    details: list[ItemOutcome] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return self.without_key

    def tally(self) -> dict[str, int]:
        return {
            "total_from_external": self.total,
            "with_key": self.with_key,
            "without_key": self.without_key,
            "added": self.added,
            "updated": self.updated,
            "errors": self.errors,
        }


class StockReconciler:
    """
    Reconciles external items against the material store.

    Pure service: all dependencies injected via constructor.
    """

    def __init__(
        self,
        material_store: IMaterialStore,
        location_mapper: LocationMapper,
        sync_settings: SyncSettings,
    ):
        self._material_store = material_store
        self._mapper = location_mapper
        self._settings = sync_settings

    def map_item(self, item: ExternalItem) -> MappedMaterial:
        """
        Translate an external item into canonical code, unit and location stock.

        An item with no per-location breakdown puts its aggregate quantity
        on the fallback location.

        Raises:
            ValidationError: if the item has no correlation key
        """
        code = canonical_code(item.sku)
        if not code:
            raise ValidationError("sku", "external item has no correlation key", item.name)

        if item.locations:
            stocks = self._mapper.fold((loc.location, loc.quantity) for loc in item.locations)
        else:
            stocks = {self._mapper.fallback: item.quantity or 0.0}

        return MappedMaterial(
            code=code,
            name=item.name.strip() or code,
            category=item.category or self._settings.default_category,
            unit=normalize_unit(item.unit, self._settings.default_unit),
            unit_price=item.unit_price,
            location_stocks=stocks,
            description=item.description,
            supplier_id=item.supplier_id,
            supplier_name=item.supplier_name,
            external_id=item.external_id,
            is_active=item.is_active,
        )

    def build_new(self, mapped: MappedMaterial) -> Material:
        """A fresh material holding the mapped stock on top of an all-zero map."""
        stocks = self._mapper.empty_stock_map()
        for key, qty in mapped.location_stocks.items():
            stocks[key] = stocks.get(key, 0.0) + qty

        return Material(
            code=mapped.code,
            name=mapped.name,
            category=mapped.category,
            sub_category=self._settings.parent_category,
            description=mapped.description,
            unit=mapped.unit,
            unit_price=mapped.unit_price,
            location_stocks=stocks,
            minimum_stock=self._settings.minimum_stock,
            maximum_stock=self._settings.maximum_stock,
            reorder_point=self._settings.reorder_point,
            is_active=mapped.is_active,
            supplier_id=mapped.supplier_id,
            supplier_name=mapped.supplier_name,
            external_id=mapped.external_id,
            last_synced_at=datetime.now(UTC),
            sync_status=SyncStatus.SYNCED,
        )

    def merge(self, existing: Material, mapped: MappedMaterial) -> Material:
        """Additively merge mapped stock into ``existing``; descriptive fields are replaced."""
        stocks = dict(existing.location_stocks)
        for key, qty in mapped.location_stocks.items():
            stocks[key] = stocks.get(key, 0.0) + qty

        data = existing.model_dump()
        data.update(
            name=mapped.name,
            category=mapped.category,
            description=mapped.description or existing.description,
            unit=mapped.unit,
            unit_price=mapped.unit_price,
            supplier_id=mapped.supplier_id,
            supplier_name=mapped.supplier_name,
            external_id=mapped.external_id or existing.external_id,
            is_active=mapped.is_active,
            location_stocks=stocks,
            last_synced_at=datetime.now(UTC),
            sync_status=SyncStatus.UPDATED,
        )
        return Material.model_validate(data)

    async def reconcile_item(
        self,
        item: ExternalItem,
        dry_run: bool = False,
        preview: dict[str, Material] | None = None,
    ) -> ItemOutcome:
        """
        Reconcile one keyed external item.

        In dry-run mode nothing is written; ``preview`` carries the simulated
        state of materials already touched earlier in the same batch.
        """
        mapped = self.map_item(item)

        existing = preview.get(mapped.code) if preview is not None else None
        if existing is None:
            existing = await self._material_store.get_by_code(mapped.code)

        if existing is None:
            material = self.build_new(mapped)
            action = OutcomeAction.ADDED
            if not dry_run:
                try:
                    material = await self._material_store.create_material(material)
                except DuplicateMaterialError:
                    # Another writer created it between lookup and insert
                    logger.info("material_create_conflict", code=mapped.code)
                    existing = await self._material_store.get_by_code(mapped.code)
                    if existing is None:
                        raise
                    material = await self._material_store.update_material(
                        self.merge(existing, mapped)
                    )
                    action = OutcomeAction.UPDATED
        else:
            material = self.merge(existing, mapped)
            action = OutcomeAction.UPDATED
            if not dry_run:
                material = await self._material_store.update_material(material)

        if preview is not None:
            preview[material.code] = material

        logger.info(
            "material_reconciled",
            code=material.code,
            action=action.value,
            current_stock=material.current_stock,
            dry_run=dry_run,
        )
        return ItemOutcome(
            code=material.code,
            name=material.name,
            action=action,
            current_stock=material.current_stock,
            location_stocks=dict(material.location_stocks),
        )

    async def reconcile(
        self, items: list[ExternalItem], dry_run: bool = False
    ) -> ReconciliationReport:
        """
        Reconcile a batch of external items.

        Items without a correlation key are skipped. A failure on one item
        is recorded in the report and the batch continues.
        """
        report = ReconciliationReport(total=len(items))
        preview: dict[str, Material] | None = {} if dry_run else None

        for item in items:
            if not item.has_key:
                report.without_key += 1
                report.details.append(
                    ItemOutcome(code=None, name=item.name, action=OutcomeAction.SKIPPED)
                )
                logger.info(
                    "item_skipped_no_key", name=item.name, external_id=item.external_id
                )
                continue

            report.with_key += 1
            try:
                outcome = await self.reconcile_item(item, dry_run=dry_run, preview=preview)
            except Exception as e:
                report.errors += 1
                report.details.append(
                    ItemOutcome(
                        code=canonical_code(item.sku),
                        name=item.name,
                        action=OutcomeAction.ERROR,
                        error=str(e),
                    )
                )
                logger.warning(
                    "material_reconcile_failed",
                    sku=item.sku,
                    error_type=e.__class__.__name__,
                    error=str(e),
                )
                continue

            if outcome.action == OutcomeAction.ADDED:
                report.added += 1
            else:
                report.updated += 1
            report.details.append(outcome)

        logger.info("reconciliation_complete", dry_run=dry_run, **report.tally())
        return report
