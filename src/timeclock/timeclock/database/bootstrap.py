"""Schema installation and demo seed for local/dev databases."""
from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator

import mysql.connector

from ..common.security import hash_secret, lookup_digest
from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor, fetchone

logger = logging.getLogger(__name__)

DEMO_COMPANY = "Demo Company"
DEMO_SECTOR = "Operations"
DEMO_CPF = "52998224725"
DEMO_PIN = "123456"

# schema.sql names its own database; the configured one wins.
_DATABASE_DIRECTIVE = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def read_schema_statements(schema_path: str | Path) -> Iterator[str]:
    """Yield the statements of a schema file.

    Expects one statement per `;`-terminated block, no `;` inside literals.
    `--` comment lines and database directives are skipped.
    """
    lines = []
    for line in Path(schema_path).read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("--"):
            continue
        if not lines and _DATABASE_DIRECTIVE.match(stripped):
            continue
        lines.append(line)
        if stripped.endswith(";"):
            yield "\n".join(lines).rstrip().rstrip(";")
            lines = []
    if lines:
        yield "\n".join(lines)


def _server_connection(target: DBConfig):
    return mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        connection_timeout=target.connect_timeout,
    )


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    with closing(_server_connection(target)) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
                "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    with db_cursor(conn, dictionary=False) as cur:
        count = 0
        for statement in read_schema_statements(schema_path):
            cur.execute(statement)
            count += 1
    logger.info("Applied %s schema statements from %s", count, schema_path)


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    with db_cursor(conn, dictionary=False) as cur:
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())


def _get_or_create(cur, select_sql: str, insert_sql: str, params: tuple, key: str) -> int:
    cur.execute(select_sql, params)
    row = fetchone(cur)
    if row:
        return int(row[key])
    cur.execute(insert_sql, params)
    return int(cur.lastrowid)


def ensure_demo_data(db_config: dict) -> None:
    """Seed a company, a sector with an 08:00-17:00 schedule and one kiosk employee.

    Safe to re-run: the demo employee gets its PIN reset and its lockout cleared.
    """
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    with db_cursor(conn) as cur:
        company_id = _get_or_create(
            cur,
            "SELECT company_id FROM companies WHERE company_name=%s",
            "INSERT INTO companies(company_name) VALUES(%s)",
            (DEMO_COMPANY,),
            "company_id",
        )
        sector_id = _get_or_create(
            cur,
            "SELECT sector_id FROM sectors WHERE company_id=%s AND sector_name=%s",
            "INSERT INTO sectors(company_id, sector_name) VALUES(%s, %s)",
            (company_id, DEMO_SECTOR),
            "sector_id",
        )
        cur.execute(
            """
            INSERT INTO sector_schedules(sector_id, expected_start, expected_end, break_minutes)
            VALUES(%s, '08:00:00', '17:00:00', 60)
            ON DUPLICATE KEY UPDATE sector_id=sector_id
            """,
            (sector_id,),
        )
        cur.execute(
            """
            INSERT INTO employees(company_id, sector_id, full_name, cpf_hash, pin_hash, is_active)
            VALUES(%s, %s, %s, %s, %s, 1)
            ON DUPLICATE KEY UPDATE pin_hash=VALUES(pin_hash), is_active=1, failed_attempts=0, locked_until=NULL
            """,
            (company_id, sector_id, "Demo Employee", lookup_digest(DEMO_CPF), hash_secret(DEMO_PIN)),
        )
    logger.info("Demo data ready (company=%s sector=%s)", company_id, sector_id)
