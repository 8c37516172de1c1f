import mysql.connector
import pytest

from attendance_rollup.core.exceptions import StorageError
from attendance_rollup.database.bootstrap import SCHEMA_STATEMENTS, apply_schema
from attendance_rollup.database.connection import DBConfig, SettingsDatabase
from attendance_rollup.monthly_settings.mysql_monthly_settings_repository import MySQLMonthlySettingsRepository


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn

    def execute(self, sql, params=None):
        if self._conn.error:
            raise self._conn.error
        self._conn.executed.append((" ".join(sql.split()), params))

    def fetchone(self):
        return self._conn.row

    def close(self):
        pass


class FakeConnection:
    def __init__(self, row=None, error=None):
        self.row = row
        self.error = error
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        assert dictionary
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


def _db(monkeypatch, conn):
    db = SettingsDatabase(DBConfig.from_settings({"database": "attendance_test"}))
    monkeypatch.setattr(db, "connect", lambda: conn)
    return db


def test_get_reads_row(monkeypatch):
    conn = FakeConnection(row={"month": 4, "year": 2026, "total_days": 22})

    setting = MySQLMonthlySettingsRepository(_db(monkeypatch, conn)).get(month=4, year=2026)

    assert setting.total_days == 22
    assert conn.executed[0][1] == (4, 2026)
    assert conn.committed and conn.closed


def test_get_missing_row_is_none(monkeypatch):
    repo = MySQLMonthlySettingsRepository(_db(monkeypatch, FakeConnection(row=None)))

    assert repo.get(month=4, year=2026) is None


def test_upsert_uses_on_duplicate_key(monkeypatch):
    conn = FakeConnection()

    MySQLMonthlySettingsRepository(_db(monkeypatch, conn)).upsert(month=4, year=2026, total_days=21)

    sql, params = conn.executed[0]
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert params == (4, 2026, 21)


def test_connector_error_becomes_storage_error(monkeypatch):
    conn = FakeConnection(error=mysql.connector.Error("table missing"))

    with pytest.raises(StorageError):
        MySQLMonthlySettingsRepository(_db(monkeypatch, conn)).get(month=4, year=2026)

    assert conn.rolled_back and conn.closed


def test_connect_failure_becomes_storage_error(monkeypatch):
    db = SettingsDatabase(DBConfig())

    def refuse():
        raise mysql.connector.Error("connection refused")

    monkeypatch.setattr(db, "connect", refuse)

    with pytest.raises(StorageError):
        MySQLMonthlySettingsRepository(db).upsert(month=4, year=2026, total_days=21)


def test_apply_schema_runs_every_statement(monkeypatch):
    conn = FakeConnection()

    apply_schema(_db(monkeypatch, conn))

    assert len(conn.executed) == len(SCHEMA_STATEMENTS)
    assert "CREATE TABLE IF NOT EXISTS monthly_settings" in conn.executed[0][0]
