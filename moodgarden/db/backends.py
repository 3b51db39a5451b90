"""Key-value blob stores that hold garden snapshots.

The entry store only needs ``load(key)`` and ``save(key, blob)``, so the
underlying storage technology is swappable.
"""

import os
import sqlite3
import time
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from moodgarden.errors import SnapshotError


class BaseBackend(ABC):
    """Abstract base class for snapshot blob stores."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Load the blob stored under a key.

        Args:
            key: Snapshot key.

        Returns:
            The stored text, or None if nothing is stored under ``key``.

        Raises:
            SnapshotError: If the underlying storage cannot be read.
        """
        pass

    @abstractmethod
    def save(self, key: str, blob: str) -> None:
        """Durably replace the blob stored under a key.

        Args:
            key: Snapshot key.
            blob: Serialized snapshot.

        Raises:
            SnapshotError: If the underlying storage cannot be written.
        """
        pass


class MemoryBackend(BaseBackend):
    """In-process blob store, mainly for tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.blobs: dict[str, str] = dict(initial or {})
        self.save_count = 0

    def load(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        self.blobs[key] = blob
        self.save_count += 1


class SqliteBackend(BaseBackend):
    """SQLite-based blob store with a single key-value table."""

    def __init__(self, db_path: Path):
        """Initialize the blob store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._schema_ready = False
        self._ensure_db_dir()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self, conn: sqlite3.Connection) -> None:
        """Initialize database schema on first use.

        Deferred until the first load or save so that an unreadable
        database file surfaces as a SnapshotError there.
        """
        if self._schema_ready:
            return
        conn.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        conn.commit()
        self._schema_ready = True

    def load(self, key: str) -> Optional[str]:
        try:
            conn = self._get_connection()
            try:
                self._init_schema(conn)
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
                return row["value"] if row else None
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise SnapshotError(f"Could not read '{key}' from {self.db_path}: {e}") from e

    def save(self, key: str, blob: str) -> None:
        try:
            conn = self._get_connection()
            try:
                self._init_schema(conn)
                conn.execute(
                    "INSERT OR REPLACE INTO kv (key, value, updated_at) VALUES (?, ?, ?)",
                    (key, blob, datetime.now().isoformat()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise SnapshotError(f"Could not write '{key}' to {self.db_path}: {e}") from e


class JsonFileBackend(BaseBackend):
    """Blob store keeping one ``<key>.json`` file per key in a directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise SnapshotError(f"Could not read {path}: {e}") from e

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            # undecodable bytes cannot be handed back as a blob, so keep the
            # file itself out of the way of the next save
            backup = self._set_aside(path)
            raise SnapshotError(f"{path} is not valid UTF-8 (kept as {backup}): {e}") from e

    def _set_aside(self, path: Path) -> Optional[Path]:
        backup = path.with_name(f"{path.stem}.corrupt-{int(time.time())}.json")
        try:
            os.replace(path, backup)
        except OSError:
            return None
        return backup

    def save(self, key: str, blob: str) -> None:
        """Atomic save: temp file in the same directory, fsync, then replace."""
        path = self._path_for(key)
        tmp = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(blob)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            raise SnapshotError(f"Could not write {path}: {e}") from e

        try:
            os.chmod(path, 0o600)
        except OSError:
            pass
