"""One-time provisioning: schema creation and default data.

Run explicitly (``scripts/init_db.py``, ``scripts/seed_db.py`` or the
``AUTO_INIT_DB`` / ``AUTO_SEED_DB`` settings). Seeding only inserts rows that
are missing; it never rewrites existing employees or business hours.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Sequence

from ..employees.model import Employee
from ..events.model import BusinessHours
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().with_name("schema.sql")

DEFAULT_EMPLOYEES: tuple[Employee, ...] = (
    Employee("1", "John Smith", "EMP001", "john.smith@company.com", "Engineering", "Software Developer"),
    Employee("2", "Sarah Johnson", "EMP002", "sarah.johnson@company.com", "Marketing", "Marketing Manager"),
    Employee("3", "Michael Brown", "EMP003", "michael.brown@company.com", "Sales", "Sales Representative"),
    Employee("4", "Roshan Alex Raj", "EMP004", "roshanalexraj@gmail.com", "Engineering", "Senior Developer"),
    Employee("5", "Emily Davis", "EMP005", "emily.davis@company.com", "Human Resources", "HR Manager"),
    Employee("6", "David Wilson", "EMP006", "david.wilson@company.com", "Finance", "Financial Analyst"),
    Employee("7", "Lisa Chen", "EMP007", "lisa.chen@company.com", "Design", "UX Designer"),
    Employee("8", "Robert Taylor", "EMP008", "robert.taylor@company.com", "Operations", "Operations Manager"),
    Employee("9", "Jennifer Martinez", "EMP009", "jennifer.martinez@company.com", "Marketing", "Content Specialist"),
    Employee("10", "Alex Thompson", "EMP010", "alex.thompson@company.com", "Engineering", "DevOps Engineer"),
)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # schema.sql holds DDL only: no ';' inside literals, '--' comments allowed.
    # CREATE DATABASE / USE lines are dropped so the configured database wins.
    lines = []
    for line in sql.splitlines():
        line = line.split("--", 1)[0].rstrip()
        if re.match(r"(?i)\s*(CREATE\s+DATABASE|USE)\b", line):
            continue
        lines.append(line)

    for stmt in "\n".join(lines).split(";"):
        if stmt.strip():
            yield stmt.strip()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(target).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    sql = Path(schema_path).read_text(encoding="utf-8")

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied from %s", schema_path)


def seed_defaults(
    db_config: dict,
    *,
    hours: BusinessHours,
    employees: Sequence[Employee] = DEFAULT_EMPLOYEES,
) -> int:
    """Insert missing default employees and, if none exist, business hours.

    Returns the number of employees inserted.
    """
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        inserted = 0
        for emp in employees:
            cur.execute(
                """
                INSERT IGNORE INTO employees
                    (employee_id, name, employee_code, email, department, position, is_active)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    emp.employee_id,
                    emp.name,
                    emp.employee_code,
                    emp.email,
                    emp.department,
                    emp.position,
                    int(emp.is_active),
                ),
            )
            inserted += cur.rowcount

        cur.execute("SELECT COUNT(*) FROM business_hours")
        (count,) = cur.fetchone()
        if not count:
            cur.execute(
                """
                INSERT INTO business_hours (start_time, end_time, break_duration, late_threshold)
                VALUES (%s, %s, %s, %s)
                """,
                (hours.start_time, hours.end_time, hours.break_duration, hours.late_threshold),
            )

        conn.commit()
    finally:
        conn.close()

    logger.info("Seeded %d default employees", inserted)
    return inserted


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
