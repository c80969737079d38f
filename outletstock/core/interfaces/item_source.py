"""
Abstract interface for the external inventory system.

A source yields the external item batch consumed by stock reconciliation.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class ExternalLocationQuantity(BaseModel):
    """Stock reported by the external system for one of its locations."""

    location: str
    quantity: float = Field(default=0.0, ge=0)


class ExternalItem(BaseModel):
    """One item as reported by the external inventory system."""

    external_id: str | None = Field(default=None, description="External system item id")
    sku: str | None = Field(default=None, description="Correlation key")
    name: str = Field(default="", description="Item name")
    category: str | None = None
    description: str | None = None
    unit: str | None = Field(default=None, description="Free-text unit")
    unit_price: float = Field(default=0.0, ge=0)
    quantity: float | None = Field(
        default=None, ge=0, description="Aggregate quantity when no breakdown is given"
    )
    locations: list[ExternalLocationQuantity] = Field(default_factory=list)
    supplier_id: str | None = None
    supplier_name: str | None = None
    is_active: bool = True

    @property
    def has_key(self) -> bool:
        return bool(self.sku and self.sku.strip())


class IExternalItemSource(ABC):
    """Interface for fetching the external item batch."""

    @abstractmethod
    async def fetch_items(self) -> list[ExternalItem]:
        """
        Fetch every item from the external system.

        Raises:
            ExternalSourceError: when authentication or any fetch step fails
        """
        pass
