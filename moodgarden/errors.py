"""Exceptions raised by MoodGarden."""


class GardenError(Exception):
    """Base class for MoodGarden errors."""


class StoreNotReadyError(GardenError):
    """Raised when the entry store is read before its snapshot was restored."""


class SnapshotError(GardenError):
    """Raised when a persisted snapshot cannot be read, written or migrated."""
