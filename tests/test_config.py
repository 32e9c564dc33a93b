"""Tests for configuration loading."""

import json

import pytest

from schemats.config import Settings, load_settings, read_config_file
from schemats.errors import ConfigError
from schemats.options import Options


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove SCHEMATS_* variables inherited from the test runner."""
    for name in (
        "CONN", "SCHEMA_NAME", "TABLES", "OUTPUT", "CAMEL_CASE", "SINGULAR",
        "META", "NO_HEADER", "MAX_CONCURRENCY", "LOG_LEVEL",
    ):
        monkeypatch.delenv(f"SCHEMATS_{name}", raising=False)


@pytest.fixture
def config_file(tmp_path):
    def write(values):
        path = tmp_path / "schemats.json"
        path.write_text(json.dumps(values))
        return str(path)
    return write


class TestSettings:
    """Test environment-backed settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.conn is None
        assert settings.tables == []
        assert settings.max_concurrency == 4
        assert settings.log_level == "WARNING"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SCHEMATS_CONN", "postgres://env/db")
        monkeypatch.setenv("SCHEMATS_CAMEL_CASE", "true")
        monkeypatch.setenv("SCHEMATS_TABLES", '["users", "orders"]')

        settings = Settings(_env_file=None)
        assert settings.conn == "postgres://env/db"
        assert settings.camel_case is True
        assert settings.tables == ["users", "orders"]

    def test_invalid_concurrency(self, monkeypatch):
        monkeypatch.setenv("SCHEMATS_MAX_CONCURRENCY", "0")
        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_to_options(self):
        settings = Settings(_env_file=None, camel_case=True, singular=True, meta=True, no_header=True)
        assert settings.to_options() == Options(
            camel_case=True,
            write_header=False,
            singular_table_names=True,
            meta=True,
        )

    def test_to_options_defaults(self):
        assert Settings(_env_file=None).to_options() == Options()


class TestReadConfigFile:
    """Test the JSON config file reader."""

    def test_missing_file(self, tmp_path):
        assert read_config_file(str(tmp_path / "absent.json")) == {}

    def test_aliases(self, config_file):
        path = config_file({
            "conn": "mysql://localhost/db",
            "table": "users",
            "schema": "shop",
            "camelCase": True,
            "noHeader": True,
            "unknownKey": 1,
        })
        assert read_config_file(path) == {
            "conn": "mysql://localhost/db",
            "tables": ["users"],
            "schema_name": "shop",
            "camel_case": True,
            "no_header": True,
        }

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "schemats.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="must contain a JSON object"):
            read_config_file(str(path))

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "schemats.json"
        path.write_text("{\"conn\": ")
        with pytest.raises(ConfigError, match="Invalid JSON") as exc_info:
            read_config_file(str(path))
        assert exc_info.value.code == "CONFIG_ERROR"


class TestLoadSettings:
    """Test precedence between environment and config file."""

    def test_file_values(self, config_file):
        settings = load_settings(config_file({"conn": "postgres://file/db", "tables": ["a", "b"], "meta": True}))
        assert settings.conn == "postgres://file/db"
        assert settings.tables == ["a", "b"]
        assert settings.meta is True

    def test_environment_overrides_file(self, config_file, monkeypatch):
        monkeypatch.setenv("SCHEMATS_CONN", "postgres://env/db")
        settings = load_settings(config_file({"conn": "postgres://file/db", "singular": True}))

        assert settings.conn == "postgres://env/db"
        assert settings.singular is True

    def test_no_config_path(self, monkeypatch):
        monkeypatch.setenv("SCHEMATS_SCHEMA_NAME", "sales")
        assert load_settings(None).schema_name == "sales"

    def test_invalid_file_value(self, config_file):
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(config_file({"maxConcurrency": 0}))
