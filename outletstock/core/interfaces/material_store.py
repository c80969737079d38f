"""Abstract interface for material storage."""

from abc import ABC, abstractmethod

from outletstock.core.entities.material import Material


class IMaterialStore(ABC):
    """Interface for material persistence."""

    @abstractmethod
    async def create_material(self, material: Material) -> Material:
        """Create a new material. Raises DuplicateMaterialError on code clash."""
        pass

    @abstractmethod
    async def get_material(self, material_id: str) -> Material | None:
        """Get material by ID."""
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Material | None:
        """Get material by canonical code."""
        pass

    @abstractmethod
    async def update_material(self, material: Material) -> Material:
        """Update an existing material."""
        pass

    @abstractmethod
    async def list_materials(
        self,
        limit: int = 100,
        offset: int = 0,
        category: str | None = None,
        active_only: bool = False,
    ) -> list[Material]:
        """List materials with pagination and optional filters."""
        pass
