"""SQLite implementation of material storage."""

import json
from datetime import UTC, datetime

import aiosqlite

from outletstock.config import get_logger
from outletstock.core.entities.material import Material, SyncStatus
from outletstock.core.entities.stock import UnitOfMeasure
from outletstock.core.exceptions import DatabaseError, DuplicateMaterialError
from outletstock.core.interfaces.material_store import IMaterialStore
from outletstock.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from outletstock.infrastructure.storage.sqlite.utils import generate_id, parse_datetime, to_iso

logger = get_logger(__name__)


class SQLiteMaterialStore(IMaterialStore):
    """SQLite implementation of material storage."""

    async def create_material(self, material: Material) -> Material:
        """Insert a material. The code column is unique."""
        if not material.id:
            material.id = generate_id()
        material.updated_at = datetime.now(UTC)
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO materials (
                        id, code, name, category, sub_category, description,
                        unit, unit_price, current_stock, location_stocks,
                        minimum_stock, maximum_stock, reorder_point, status,
                        is_active, supplier_id, supplier_name, external_id,
                        last_synced_at, sync_status, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        material.id,
                        material.code,
                        material.name,
                        material.category,
                        material.sub_category,
                        material.description,
                        material.unit.value,
                        material.unit_price,
                        material.current_stock,
                        json.dumps(material.location_stocks),
                        material.minimum_stock,
                        material.maximum_stock,
                        material.reorder_point,
                        material.status.value,
                        int(material.is_active),
                        material.supplier_id,
                        material.supplier_name,
                        material.external_id,
                        to_iso(material.last_synced_at),
                        material.sync_status.value,
                        material.created_at.isoformat(),
                        material.updated_at.isoformat(),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            if "materials.code" in str(e):
                raise DuplicateMaterialError(material.code) from e
            raise DatabaseError("create_material", str(e)) from e
        except aiosqlite.Error as e:
            raise DatabaseError("create_material", str(e)) from e

        logger.info("material_created", material_id=material.id, code=material.code)
        return material

    async def get_material(self, material_id: str) -> Material | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM materials WHERE id = ?", (material_id,))
            row = await cursor.fetchone()
            return self._row_to_material(row) if row else None

    async def get_by_code(self, code: str) -> Material | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM materials WHERE code = ?", (code.strip().upper(),)
            )
            row = await cursor.fetchone()
            return self._row_to_material(row) if row else None

    async def update_material(self, material: Material) -> Material:
        """Update an existing material."""
        material.updated_at = datetime.now(UTC)
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE materials SET
                        name = ?, category = ?, sub_category = ?, description = ?,
                        unit = ?, unit_price = ?, current_stock = ?, location_stocks = ?,
                        minimum_stock = ?, maximum_stock = ?, reorder_point = ?,
                        status = ?, is_active = ?, supplier_id = ?, supplier_name = ?,
                        external_id = ?, last_synced_at = ?, sync_status = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        material.name,
                        material.category,
                        material.sub_category,
                        material.description,
                        material.unit.value,
                        material.unit_price,
                        material.current_stock,
                        json.dumps(material.location_stocks),
                        material.minimum_stock,
                        material.maximum_stock,
                        material.reorder_point,
                        material.status.value,
                        int(material.is_active),
                        material.supplier_id,
                        material.supplier_name,
                        material.external_id,
                        to_iso(material.last_synced_at),
                        material.sync_status.value,
                        material.updated_at.isoformat(),
                        material.id,
                    ),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("update_material", str(e)) from e

        logger.info("material_updated", material_id=material.id, code=material.code)
        return material

    async def list_materials(
        self,
        limit: int = 100,
        offset: int = 0,
        category: str | None = None,
        active_only: bool = False,
    ) -> list[Material]:
        """List materials ordered by code."""
        clauses = []
        params: list = []
        if category:
            clauses.append("category = ?")
            params.append(category)
        if active_only:
            clauses.append("is_active = 1")
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM materials {where} ORDER BY code LIMIT ? OFFSET ?",
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_material(row) for row in rows]

    @staticmethod
    def _row_to_material(row: aiosqlite.Row) -> Material:
        """Convert a database row to a Material entity."""
        return Material(
            id=row["id"],
            code=row["code"],
            name=row["name"],
            category=row["category"],
            sub_category=row["sub_category"],
            description=row["description"],
            unit=UnitOfMeasure(row["unit"]),
            unit_price=float(row["unit_price"]),
            location_stocks=json.loads(row["location_stocks"] or "{}"),
            minimum_stock=float(row["minimum_stock"]),
            maximum_stock=float(row["maximum_stock"]),
            reorder_point=float(row["reorder_point"]),
            is_active=bool(row["is_active"]),
            supplier_id=row["supplier_id"],
            supplier_name=row["supplier_name"],
            external_id=row["external_id"],
            last_synced_at=parse_datetime(row["last_synced_at"]),
            sync_status=SyncStatus(row["sync_status"]),
            created_at=parse_datetime(row["created_at"], default_now=True),
            updated_at=parse_datetime(row["updated_at"], default_now=True),
        )
