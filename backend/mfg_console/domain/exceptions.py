"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class MasterDataBackendError(Exception):
    """Raised when the master-data backend fails or is unreachable.

    ``status_code`` is 0 for transport-level failures (connection refused,
    timeouts) where no HTTP response was received.
    """

    def __init__(self, collection: str, status_code: int, message: str):
        self.collection = collection
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{collection}] {status_code}: {message}")


class StorageParseError(Exception):
    """Raised when persisted content under a storage key cannot be decoded."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Could not parse stored data for '{key}': {reason}")
