"""Entry store for MoodGarden.

Holds the authoritative, ordered collection of mood entries and keeps it
consistent with a persisted snapshot in a key-value blob store.
"""

import json
import logging
import threading
import time
from typing import Optional

from pydantic import ValidationError

from moodgarden.db.backends import BaseBackend
from moodgarden.db.migrations import migrate
from moodgarden.errors import SnapshotError, StoreNotReadyError
from moodgarden.models import GardenSnapshot, MoodEntry
from moodgarden.models.snapshot import TabName

logger = logging.getLogger(__name__)

# Permanent key. Changing it loses every existing garden; evolve the
# snapshot through migrations instead.
STORAGE_KEY = "mood-garden-vault-v1"


def _newest_first(entries: list[MoodEntry]) -> list[MoodEntry]:
    return sorted(entries, key=lambda e: (e.timestamp, e.id), reverse=True)


class GardenStore:
    """In-memory entry collection backed by a snapshot blob store.

    Entries are kept newest first (ties broken by id) after every
    mutation, and every mutation ends with a write of the full snapshot.
    The collection must not be read until ``ready`` is True.
    """

    def __init__(self, backend: BaseBackend, key: str = STORAGE_KEY):
        """Initialize the store.

        Args:
            backend: Blob store used for load/save.
            key: Snapshot key. Defaults to the permanent garden key.
        """
        self.backend = backend
        self.key = key
        self._entries: list[MoodEntry] = []
        self._active_tab: TabName = "garden"
        self._is_adding_entry = False
        self._is_chat_open = False
        self._ready = False
        self._version = 0
        self._lock = threading.RLock()

    # ==================== Lifecycle ====================

    @property
    def ready(self) -> bool:
        """Whether the persisted snapshot has been restored."""
        return self._ready

    @property
    def version(self) -> int:
        """Monotonic counter bumped by every mutation."""
        return self._version

    def initialize(self) -> None:
        """Restore the persisted snapshot and mark the store ready.

        Missing, corrupt or incompatible snapshots leave the store empty.
        Calling this more than once has no effect.
        """
        with self._lock:
            if self._ready:
                return
            try:
                snapshot = self._load_snapshot()
                if snapshot is not None:
                    self._restore(snapshot)
            finally:
                self._ready = True

    def _load_snapshot(self) -> Optional[GardenSnapshot]:
        try:
            blob = self.backend.load(self.key)
        except SnapshotError as e:
            logger.warning("Could not load garden snapshot: %s", e)
            return None

        if blob is None or not blob.strip():
            return None

        try:
            return GardenSnapshot.model_validate(migrate(json.loads(blob)))
        except (ValueError, RecursionError, ValidationError, SnapshotError) as e:
            logger.warning("Discarding unreadable garden snapshot '%s': %s", self.key, e)
            self._backup_blob(blob)
            return None

    def _backup_blob(self, blob: str) -> None:
        backup_key = f"{self.key}.corrupt-{int(time.time())}"
        try:
            self.backend.save(backup_key, blob)
            logger.warning("Saved unreadable snapshot as '%s'", backup_key)
        except SnapshotError as e:
            logger.error("Could not back up unreadable snapshot: %s", e)

    def _restore(self, snapshot: GardenSnapshot) -> None:
        seen: set[str] = set()
        entries: list[MoodEntry] = []
        for entry in snapshot.entries:
            if entry.id in seen:
                logger.warning("Dropping duplicate entry id %s from snapshot", entry.id)
                continue
            seen.add(entry.id)
            entries.append(entry)

        self._entries = _newest_first(entries)
        self._active_tab = snapshot.active_tab
        self._is_adding_entry = snapshot.is_adding_entry
        self._is_chat_open = snapshot.is_chat_open

    # ==================== Persistence ====================

    def snapshot(self) -> GardenSnapshot:
        """Build the snapshot of the current state."""
        with self._lock:
            return GardenSnapshot(
                entries=list(self._entries),
                active_tab=self._active_tab,
                is_adding_entry=self._is_adding_entry,
                is_chat_open=self._is_chat_open,
            )

    def _commit(self) -> None:
        """Bump the version and durably write the full snapshot.

        Callers hold the lock, so writes are applied in mutation order.
        """
        self._version += 1
        blob = self.snapshot().model_dump_json(by_alias=True)
        try:
            self.backend.save(self.key, blob)
        except SnapshotError as e:
            logger.error("Could not persist garden snapshot: %s", e)

    # ==================== Entries ====================

    def list(self) -> tuple[MoodEntry, ...]:
        """Get all entries, newest first.

        Raises:
            StoreNotReadyError: If called before ``initialize()``.
        """
        if not self._ready:
            raise StoreNotReadyError("Garden store read before initialize() completed")
        return tuple(self._entries)

    def get(self, entry_id: str) -> Optional[MoodEntry]:
        """Get an entry by ID.

        Args:
            entry_id: Entry ID.

        Returns:
            The entry if found, None otherwise.
        """
        for entry in self.list():
            if entry.id == entry_id:
                return entry
        return None

    def add(self, entry: MoodEntry) -> bool:
        """Insert an entry and persist the snapshot.

        An entry whose id is already present is rejected: the existing
        entry is kept and nothing is written.

        Args:
            entry: Entry to insert.

        Returns:
            True if the entry was inserted, False if its id was a duplicate.
        """
        with self._lock:
            if any(e.id == entry.id for e in self._entries):
                logger.warning("Ignoring entry with duplicate id %s", entry.id)
                return False
            self._entries = _newest_first([entry, *self._entries])
            self._commit()
            return True

    def delete(self, entry_id: str) -> None:
        """Remove an entry if present and persist the snapshot.

        Args:
            entry_id: ID of the entry to remove.
        """
        with self._lock:
            self._entries = [e for e in self._entries if e.id != entry_id]
            self._commit()

    def attach_insight(self, entry_id: str, text: str) -> bool:
        """Attach an insight to an entry, at most once.

        Unknown ids (e.g. entries deleted while the insight was being
        generated) and entries that already carry an insight are left
        untouched.

        Args:
            entry_id: Entry ID.
            text: Insight text.

        Returns:
            True if the insight was attached.
        """
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.id != entry_id:
                    continue
                if entry.insight is not None:
                    return False
                self._entries[index] = entry.with_insight(text)
                self._commit()
                return True
            return False

    # ==================== UI preferences ====================

    @property
    def active_tab(self) -> TabName:
        return self._active_tab

    @property
    def is_adding_entry(self) -> bool:
        return self._is_adding_entry

    @property
    def is_chat_open(self) -> bool:
        return self._is_chat_open

    def set_active_tab(self, tab: TabName) -> None:
        """Set the active view and persist the snapshot."""
        if tab not in ("garden", "stats", "history"):
            raise ValueError(f"Unknown tab: {tab}")
        with self._lock:
            self._active_tab = tab
            self._commit()

    def set_adding_entry(self, is_open: bool) -> None:
        with self._lock:
            self._is_adding_entry = is_open
            self._commit()

    def set_chat_open(self, is_open: bool) -> None:
        with self._lock:
            self._is_chat_open = is_open
            self._commit()
