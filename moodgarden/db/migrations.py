"""Schema migrations for persisted garden snapshots.

The storage key never changes between releases. Older snapshot layouts
are upgraded here, step by step, based on the ``schemaVersion`` field.
"""

from typing import Any, Callable

from moodgarden.errors import SnapshotError
from moodgarden.models.snapshot import SCHEMA_VERSION


def _v0_to_v1(raw: dict[str, Any]) -> dict[str, Any]:
    """Version 0 snapshots were written by the web client without a version.

    They carry the same field names plus transient client flags
    (``_hasHydrated``), which are dropped.
    """
    data = {k: v for k, v in raw.items() if not k.startswith("_")}
    data["schemaVersion"] = 1
    return data


MIGRATIONS: dict[int, Callable[[dict[str, Any]], dict[str, Any]]] = {
    0: _v0_to_v1,
}


def _unwrap(raw: dict[str, Any]) -> dict[str, Any]:
    # The web client persisted {"state": {...}, "version": 0}.
    if "schemaVersion" not in raw and isinstance(raw.get("state"), dict):
        return dict(raw["state"])
    return raw


def migrate(raw: Any) -> dict[str, Any]:
    """Upgrade a decoded snapshot to the current schema version.

    Args:
        raw: Decoded snapshot document.

    Returns:
        The document in the current schema layout.

    Raises:
        SnapshotError: If the document is not an object, or its version is
            unknown or newer than this release supports.
    """
    if not isinstance(raw, dict):
        raise SnapshotError(f"Snapshot must be an object, got {type(raw).__name__}")

    data = _unwrap(raw)
    version = data.get("schemaVersion", 0)
    if not isinstance(version, int) or isinstance(version, bool) or version < 0:
        raise SnapshotError(f"Invalid snapshot schema version: {version!r}")
    if version > SCHEMA_VERSION:
        raise SnapshotError(
            f"Snapshot schema version {version} is newer than supported ({SCHEMA_VERSION})"
        )

    while version < SCHEMA_VERSION:
        data = MIGRATIONS[version](data)
        version += 1
    return data
