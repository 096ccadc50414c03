"""Domain entity for cached master-data collections."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .master_record import MasterRecord


class CacheStatus(str, Enum):
    """Lifecycle states of a cached collection."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class CacheEntry:
    """Last-fetched records of one collection plus loading/error state.

    ``generation`` is bumped on every invalidation so a fetch that started
    before an invalidation can tell its result is already outdated.
    """

    collection: str
    data: list[MasterRecord] = field(default_factory=list)
    status: CacheStatus = CacheStatus.IDLE
    error: Exception | None = None
    fetched_at: datetime | None = None
    stale: bool = True
    generation: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status == CacheStatus.LOADING

    @property
    def has_error(self) -> bool:
        return self.status == CacheStatus.ERROR

    def is_fresh(self, stale_after: float) -> bool:
        """True when the data can be served without refetching."""
        if self.stale or self.fetched_at is None:
            return False
        age = (datetime.now(timezone.utc) - self.fetched_at).total_seconds()
        return age < stale_after

    def mark_loading(self) -> None:
        self.status = CacheStatus.LOADING

    def mark_success(self, data: list[MasterRecord], generation: int) -> None:
        """Store fetched data; stays stale if invalidated while fetching."""
        self.data = data
        self.status = CacheStatus.SUCCESS
        self.error = None
        self.fetched_at = datetime.now(timezone.utc)
        self.stale = generation != self.generation

    def mark_failed(self, error: Exception) -> None:
        """Keep the last-known data and expose the error."""
        self.status = CacheStatus.ERROR
        self.error = error

    def invalidate(self) -> None:
        self.stale = True
        self.generation += 1
