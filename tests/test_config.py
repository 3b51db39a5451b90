"""Tests for configuration loading."""

from pathlib import Path

import pytest

from moodgarden.config import (
    DEFAULT_DB_PATH,
    create_backend,
    get_storage_path,
    load_config,
    open_store,
)
from moodgarden.db.backends import JsonFileBackend, SqliteBackend


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("MOODGARDEN_DATA", raising=False)
    monkeypatch.delenv("MOODGARDEN_CONFIG", raising=False)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "missing.toml")

        assert config["storage"]["backend"] == "sqlite"
        assert config["garden"]["display_limit"] == 20

    def test_file_overrides_defaults(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('[garden]\ndisplay_limit = 5\n\n[openai]\nmodel = "o4-mini"\n', encoding="utf-8")

        config = load_config(path)

        assert config["garden"]["display_limit"] == 5
        assert config["openai"]["model"] == "o4-mini"
        assert config["storage"]["backend"] == "sqlite"

    def test_invalid_toml_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("[garden\ndisplay_limit = ", encoding="utf-8")

        assert load_config(path)["garden"]["display_limit"] == 20

    def test_env_selects_config_file(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "alt.toml"
        path.write_text('[storage]\nbackend = "json"\n', encoding="utf-8")
        monkeypatch.setenv("MOODGARDEN_CONFIG", str(path))

        assert load_config()["storage"]["backend"] == "json"

    def test_defaults_not_shared_between_loads(self, tmp_path: Path):
        first = load_config(tmp_path / "missing.toml")
        first["garden"]["display_limit"] = 1

        assert load_config(tmp_path / "missing.toml")["garden"]["display_limit"] == 20


class TestStorage:
    def test_default_path(self):
        assert get_storage_path(load_config(Path("/nonexistent/config.toml"))) == DEFAULT_DB_PATH

    def test_env_overrides_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MOODGARDEN_DATA", str(tmp_path / "env.db"))
        config = {"storage": {"backend": "sqlite", "path": str(tmp_path / "cfg.db")}}

        assert get_storage_path(config) == tmp_path / "env.db"

    def test_sqlite_backend(self, tmp_path: Path):
        config = {"storage": {"backend": "sqlite", "path": str(tmp_path / "g.db")}}
        assert isinstance(create_backend(config), SqliteBackend)

    def test_json_backend(self, tmp_path: Path):
        config = {"storage": {"backend": "json", "path": str(tmp_path / "vault")}}
        assert isinstance(create_backend(config), JsonFileBackend)

    def test_unknown_backend(self, tmp_path: Path):
        with pytest.raises(ValueError):
            create_backend({"storage": {"backend": "redis", "path": str(tmp_path)}})

    def test_open_store_is_ready(self, tmp_path: Path):
        store = open_store({"storage": {"backend": "json", "path": str(tmp_path / "vault")}})

        assert store.ready is True
        assert store.list() == ()
