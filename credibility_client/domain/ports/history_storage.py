"""Port interface for durable key-value storage of local state."""

from abc import ABC, abstractmethod
from typing import Optional


class HistoryStorage(ABC):
    """Durable string storage addressed by key.

    Implementations raise ``PersistenceError`` when the medium fails.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""
        pass
