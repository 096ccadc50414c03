"""Abstract key-value storage interface (port) for locally persisted records."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """String-valued storage keyed by name; writes fully overwrite a key."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete the key; absent keys are ignored."""
        ...
