from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

import mysql.connector

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "attendance_db"

    @classmethod
    def from_settings(cls, db_config: Optional[Dict[str, Any]]) -> "DBConfig":
        db_config = db_config or {}
        defaults = cls()
        return cls(
            host=str(db_config.get("host", defaults.host)),
            port=int(db_config.get("port", defaults.port)),
            user=str(db_config.get("user", defaults.user)),
            password=str(db_config.get("password", defaults.password)),
            database=str(db_config.get("database", defaults.database)),
        )


class SettingsDatabase:
    """MySQL store for the monthly settings.

    One short-lived connection per operation; connector errors surface as
    ``StorageError`` so callers never import mysql.connector themselves.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def name(self) -> str:
        return f"{self._config.host}:{self._config.port}/{self._config.database}"

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    @contextmanager
    def cursor(self, action: str) -> Iterator[Any]:
        """Dictionary cursor committed on success, rolled back on error."""

        try:
            conn = self.connect()
        except mysql.connector.Error as e:
            raise StorageError(f"{action} failed, cannot connect to {self.name}: {e}") from e

        try:
            cur = conn.cursor(dictionary=True)
            try:
                yield cur
                conn.commit()
            finally:
                cur.close()
        except mysql.connector.Error as e:
            conn.rollback()
            logger.error("%s failed on %s: %s", action, self.name, e)
            raise StorageError(f"{action} failed: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
