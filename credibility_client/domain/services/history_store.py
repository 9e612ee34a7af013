"""Bounded, write-through evaluation history."""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ..errors import PersistenceError
from ..models.evaluation_result import EvaluationResult
from ..models.history_entry import HistoryEntry
from ..models.submission import Submission
from ..ports.history_storage import HistoryStorage

logger = logging.getLogger(__name__)

HISTORY_KEY = "evaluation_history"
MAX_HISTORY_ENTRIES = 50

_entries_adapter = TypeAdapter(List[HistoryEntry])


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class HistoryStore:
    """Most-recent-first log of past evaluations, capped and persisted.

    The store is the only writer of its persisted key. Every mutation is
    written to storage immediately; storage failures are logged and never
    raised to the caller.
    """

    def __init__(
        self,
        storage: HistoryStorage,
        max_entries: int = MAX_HISTORY_ENTRIES,
        key: str = HISTORY_KEY,
    ):
        """Initialize the store and load any persisted history.

        Args:
            storage: Durable storage port implementation
            max_entries: Number of entries kept before the oldest are evicted
            key: Storage key holding the serialized history
        """
        self._storage = storage
        self._max_entries = max_entries
        self._key = key
        self._entries: List[HistoryEntry] = self._load()

    def _load(self) -> List[HistoryEntry]:
        try:
            raw = self._storage.read(self._key)
        except PersistenceError as e:
            logger.warning(f"⚠️ Could not read saved history, starting empty: {e}")
            return []

        if raw is None:
            return []

        try:
            entries = _entries_adapter.validate_json(raw)
        except (ValidationError, ValueError, TypeError, OverflowError) as e:
            logger.error(f"❌ Error parsing saved history, starting empty: {e}")
            return []

        logger.info(f"📂 Loaded {len(entries)} history entries")
        return entries[: self._max_entries]

    def _persist(self) -> None:
        payload = json.dumps(
            [entry.model_dump(mode="json", by_alias=True, exclude_none=True) for entry in self._entries]
        )
        try:
            self._storage.write(self._key, payload)
        except PersistenceError as e:
            logger.warning(f"⚠️ Could not save history: {e}")

    def append(
        self,
        input: Submission,
        result: Optional[EvaluationResult] = None,
    ) -> HistoryEntry:
        """Record an evaluation as the newest entry.

        Args:
            input: Submission that was sent
            result: Scorer result, or None if the evaluation failed

        Returns:
            The new entry
        """
        entry = HistoryEntry(
            id=str(uuid.uuid4()),
            input=input,
            result=result,
            timestamp=utc_timestamp(),
        )
        self._entries = [entry, *self._entries][: self._max_entries]
        self._persist()
        return entry

    def list(self) -> List[HistoryEntry]:
        """Get all entries, most recent first."""
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        """Get an entry by id."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def clear(self) -> None:
        """Remove every entry and persist the empty history."""
        self._entries = []
        self._persist()
        logger.info("🗑️ History cleared")

    def __len__(self) -> int:
        return len(self._entries)
