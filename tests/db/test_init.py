"""Tests for wasteflow.db.init."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from wasteflow.db.init import (
    _SCHEMA_PATH,
    _settings_to_config,
    apply_schema,
    init_database,
    schema_status,
)


def _settings(auto_setup=False):
    return SimpleNamespace(
        host="db.local",
        port=5433,
        database="wasteflow",
        user="wf",
        password="pw",
        sslmode="require",
        min_connections=1,
        max_connections=5,
        connection_timeout=10.0,
        auto_setup=auto_setup,
    )


class TestSettingsToConfig:
    @patch("wasteflow.db.init.DatabaseConfig")
    def test_maps_all_fields(self, mock_config):
        _settings_to_config(_settings())
        mock_config.assert_called_once_with(
            host="db.local",
            port=5433,
            database="wasteflow",
            user="wf",
            password="pw",
            sslmode="require",
            min_connections=1,
            max_connections=5,
            connection_timeout=10.0,
        )


class TestInitDatabase:
    @patch("wasteflow.db.init.Database")
    def test_returns_existing_instance(self, mock_db):
        mock_db.is_initialized.return_value = True
        assert init_database(_settings()) is mock_db.get_instance.return_value
        mock_db.init.assert_not_called()

    @patch("wasteflow.db.init.DatabaseConfig")
    @patch("wasteflow.db.init.Database")
    def test_without_auto_setup(self, mock_db, mock_config):
        mock_db.is_initialized.return_value = False
        db = init_database(_settings())
        assert db is mock_db.init.return_value
        mock_db.init.assert_called_once_with(
            config=mock_config.return_value,
            schema_path=None,
            auto_setup=False,
            interactive=False,
        )

    @patch("wasteflow.db.init.DatabaseConfig")
    @patch("wasteflow.db.init.Database")
    def test_with_auto_setup(self, mock_db, mock_config):
        mock_db.is_initialized.return_value = False
        init_database(_settings(auto_setup=True))
        kwargs = mock_db.init.call_args.kwargs
        assert kwargs["schema_path"] == _SCHEMA_PATH
        assert kwargs["auto_setup"] is True


class TestSchema:
    def test_bundled_schema_defines_tables(self):
        sql = _SCHEMA_PATH.read_text(encoding="utf-8")
        assert "CREATE TABLE IF NOT EXISTS orders" in sql
        assert "CREATE TABLE IF NOT EXISTS distributors" in sql
        assert "quantity >= 1" in sql
        assert "'not completed'" in sql

    def test_schema_status(self):
        db = MagicMock()
        db.fetch_all.return_value = [{"table_name": "orders"}]
        assert schema_status(db) == {"distributors": False, "orders": True}
        assert db.fetch_all.call_args[0][1] == (["distributors", "orders"],)

    @patch("wasteflow.db.init.SchemaManager")
    def test_apply_schema(self, mock_manager):
        db = MagicMock()
        assert apply_schema(db) == _SCHEMA_PATH
        mock_manager.assert_called_once_with(db)
        mock_manager.return_value.execute_sql_file.assert_called_once_with(_SCHEMA_PATH)
