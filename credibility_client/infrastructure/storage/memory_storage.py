"""In-memory implementation of the history storage port."""

from typing import Dict, Optional

from ...domain.ports.history_storage import HistoryStorage


class InMemoryStorage(HistoryStorage):
    """Keeps values for the lifetime of the process only."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value
