"""Configuration loading for MoodGarden.

Settings live in ``~/.config/moodgarden/config.toml``. A missing or
unreadable file falls back to the defaults below.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Optional

import toml

from moodgarden.db.backends import BaseBackend, JsonFileBackend, SqliteBackend
from moodgarden.db.store import GardenStore

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "moodgarden"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "moodgarden.db"
DEFAULT_JSON_DIR = CONFIG_DIR / "vault"

DEFAULTS: dict[str, Any] = {
    "storage": {
        "backend": "sqlite",
        "path": None,
    },
    "openai": {
        "model": None,
    },
    "garden": {
        "display_limit": 20,
    },
}


def get_config_path() -> Path:
    """Get the config file path, honouring MOODGARDEN_CONFIG."""
    env = os.environ.get("MOODGARDEN_CONFIG")
    if env:
        return Path(env).expanduser()
    return DEFAULT_CONFIG_PATH


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    Args:
        path: Optional config file path. Uses ``get_config_path()`` if None.

    Returns:
        Configuration dictionary.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return copy.deepcopy(DEFAULTS)

    try:
        return _merge(DEFAULTS, toml.load(config_path))
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULTS)


def get_storage_path(config: dict[str, Any]) -> Path:
    """Resolve where garden data is stored.

    MOODGARDEN_DATA wins over ``[storage] path``; otherwise the default
    location for the configured backend is used.
    """
    env = os.environ.get("MOODGARDEN_DATA")
    if env:
        return Path(env).expanduser()

    configured = config.get("storage", {}).get("path")
    if configured:
        return Path(configured).expanduser()

    if config.get("storage", {}).get("backend") == "json":
        return DEFAULT_JSON_DIR
    return DEFAULT_DB_PATH


def create_backend(config: dict[str, Any]) -> BaseBackend:
    """Create the blob store named by ``[storage] backend``.

    Raises:
        ValueError: If the backend name is unknown.
    """
    backend = config.get("storage", {}).get("backend", "sqlite")
    path = get_storage_path(config)

    if backend == "sqlite":
        return SqliteBackend(path)
    if backend == "json":
        return JsonFileBackend(path)
    raise ValueError(f"Unknown storage backend: {backend!r} (expected 'sqlite' or 'json')")


def open_store(config: Optional[dict[str, Any]] = None) -> GardenStore:
    """Create the garden store for a config and restore its snapshot.

    Args:
        config: Optional configuration. Loaded from disk if None.

    Returns:
        An initialized GardenStore.
    """
    store = GardenStore(create_backend(config or load_config()))
    store.initialize()
    return store
