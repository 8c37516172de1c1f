from __future__ import annotations

import logging

from .connection import SettingsDatabase

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS monthly_settings (
        setting_id INT AUTO_INCREMENT PRIMARY KEY,
        month TINYINT NOT NULL,
        year SMALLINT NOT NULL,
        total_days TINYINT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
        UNIQUE KEY uq_monthly_settings_month_year (month, year)
    )
    """,
)


def apply_schema(db: SettingsDatabase) -> None:
    """Create missing tables (idempotent: CREATE IF NOT EXISTS)."""

    with db.cursor("Schema setup") as cur:
        for stmt in SCHEMA_STATEMENTS:
            cur.execute(stmt)
    logger.info("Schema ready on %s (%d statements)", db.name, len(SCHEMA_STATEMENTS))
