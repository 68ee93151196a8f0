"""Tests for configuration and engine bootstrap."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

import config
from config import Settings
from db_engine import create_db_engine, get_session, init_db
from errors import IoError
from models import Customer
from services import TransactionService


def test_settings_read_from_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(config, "_settings", None)
    url = f"sqlite:///{tmp_path / 'env.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("DB_BUSY_TIMEOUT_MS", "1234")

    settings = config.reload_settings()

    assert settings.database_url == url
    assert settings.db_busy_timeout_ms == 1234
    assert config.get_settings() is settings


def test_engine_enables_foreign_keys_and_busy_timeout(tmp_path: Path):
    settings = Settings(_env_file=None, database_url=f"sqlite:///{tmp_path / 'p.db'}", db_busy_timeout_ms=2500)
    engine = create_db_engine(settings)
    try:
        with engine.connect() as conn:
            assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
            assert conn.exec_driver_sql("PRAGMA busy_timeout").scalar() == 2500
            assert conn.exec_driver_sql("PRAGMA journal_mode").scalar() == "wal"
    finally:
        engine.dispose()


def test_engine_creates_missing_database_directory(tmp_path: Path):
    target = tmp_path / "nested" / "dir" / "ledger.db"
    engine = create_db_engine(Settings(_env_file=None, database_url=f"sqlite:///{target}"))
    try:
        init_db(engine)
    finally:
        engine.dispose()

    assert target.exists()


def test_unwritable_database_location_raises_io_error(tmp_path: Path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("occupied")

    with pytest.raises(IoError) as excinfo:
        create_db_engine(Settings(_env_file=None, database_url=f"sqlite:///{blocker / 'sub' / 'ledger.db'}"))

    assert excinfo.value.code == "IO_ERROR"


def test_init_db_creates_all_tables(engine):
    with engine.connect() as conn:
        names = {
            row[0]
            for row in conn.exec_driver_sql("SELECT name FROM sqlite_master WHERE type='table'")
        }

    assert {"customers", "products", "tax_invoices", "transactions", "transaction_items"} <= names


def test_get_session_binds_to_the_given_engine(engine):
    with get_session(engine) as session:
        session.add(Customer(name="Session Check"))
        session.commit()
        assert session.get_bind() is engine

    with get_session(engine) as session:
        assert session.get(Customer, 1).name == "Session Check"


def test_configure_logging_uses_level_from_settings(monkeypatch):
    captured = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    config.configure_logging(Settings(_env_file=None, log_level="debug"))

    assert captured["level"] == logging.DEBUG
    assert "%(levelname)s" in captured["format"]


def test_service_from_settings_configures_logging_and_creates_tables(monkeypatch, tmp_path: Path):
    levels = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: levels.append(kwargs["level"]))
    settings = Settings(_env_file=None, database_url=f"sqlite:///{tmp_path / 'boot' / 'app.db'}", log_level="WARNING")

    service = TransactionService.from_settings(settings)
    try:
        assert levels == [logging.WARNING]
        assert (tmp_path / "boot" / "app.db").exists()
        assert service.list_transactions() == []
        assert service.get_summary().count == 0
    finally:
        service.engine.dispose()
