"""Abstract interface for transfer order storage."""

from abc import ABC, abstractmethod

from outletstock.core.entities.transfer import TransferOrder, TransferStatus


class ITransferStore(ABC):
    """Interface for transfer order persistence."""

    @abstractmethod
    async def create_transfer(self, order: TransferOrder) -> TransferOrder:
        pass

    @abstractmethod
    async def get_transfer(self, transfer_id: str) -> TransferOrder | None:
        pass

    @abstractmethod
    async def update_transfer(self, order: TransferOrder) -> TransferOrder:
        pass

    @abstractmethod
    async def list_transfers(
        self,
        status: TransferStatus | None = None,
        location: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[TransferOrder]:
        """List transfers, newest first; ``location`` matches either side."""
        pass

    @abstractmethod
    async def status_totals(self) -> dict[TransferStatus, tuple[int, float]]:
        """Order count and summed total value per status."""
        pass
