"""Abstract backend interface (port) for master-data collections."""

from abc import ABC, abstractmethod
from typing import Any

from mfg_console.domain.entities import MasterRecord


class MasterDataBackend(ABC):
    """Port for collection-scoped CRUD — implemented in the infrastructure layer.

    Record shapes are collection-specific and opaque here; validation is the
    caller's responsibility.
    """

    @abstractmethod
    async def get_all(self, collection: str) -> list[MasterRecord]:
        """Return every record of the collection."""
        ...

    @abstractmethod
    async def get_by_id(self, collection: str, record_id: str) -> MasterRecord:
        """Return one record. Raises EntityNotFoundError if absent."""
        ...

    @abstractmethod
    async def create(self, collection: str, record: MasterRecord) -> MasterRecord:
        """Persist a new record and return it as stored."""
        ...

    @abstractmethod
    async def update(
        self, collection: str, record_id: str, record: MasterRecord
    ) -> MasterRecord:
        """Replace a record. Raises EntityNotFoundError if absent."""
        ...

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> None:
        """Remove a record."""
        ...

    @abstractmethod
    async def get_options(self, relation: str) -> Any:
        """Return option records for a relation; the shape is not guaranteed."""
        ...
