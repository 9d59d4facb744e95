"""
Schema bootstrap, run once from the FastAPI lifespan after the pool is ready.

Statements run in dependency order: businesses before the tables that
reference it, tables before indexes, indexes before foreign keys. Every step
is safe to repeat on restart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from . import db

logger = logging.getLogger(__name__)


TABLES: tuple[tuple[str, str], ...] = (
    (
        "businesses",
        """
        CREATE TABLE IF NOT EXISTS businesses (
          id SERIAL PRIMARY KEY,
          ownerid INTEGER NOT NULL,
          name VARCHAR(255) NOT NULL,
          address VARCHAR(255) NOT NULL,
          city VARCHAR(255) NOT NULL,
          state VARCHAR(255) NOT NULL,
          zip VARCHAR(255) NOT NULL,
          phone VARCHAR(255) NOT NULL,
          category VARCHAR(255) NOT NULL,
          subcategory VARCHAR(255) NOT NULL,
          website VARCHAR(255),
          email VARCHAR(255)
        )
        """,
    ),
    (
        "reviews",
        """
        CREATE TABLE IF NOT EXISTS reviews (
          id SERIAL PRIMARY KEY,
          userid INTEGER NOT NULL,
          businessid INTEGER NOT NULL,
          dollars INTEGER NOT NULL,
          stars INTEGER NOT NULL,
          review VARCHAR(255)
        )
        """,
    ),
    (
        "photos",
        """
        CREATE TABLE IF NOT EXISTS photos (
          id SERIAL PRIMARY KEY,
          userid INTEGER NOT NULL,
          businessid INTEGER NOT NULL,
          caption VARCHAR(255)
        )
        """,
    ),
)

INDEXES: tuple[str, ...] = (
    "CREATE INDEX IF NOT EXISTS idx_businesses_ownerid ON businesses (ownerid)",
    "CREATE INDEX IF NOT EXISTS idx_reviews_userid ON reviews (userid)",
    # Backstop for the pre-insert duplicate check under concurrent submissions.
    "CREATE UNIQUE INDEX IF NOT EXISTS uq_reviews_userid_businessid ON reviews (userid, businessid)",
    "CREATE INDEX IF NOT EXISTS idx_photos_userid ON photos (userid)",
)

# (constraint name, table, column, referenced table)
FOREIGN_KEYS: tuple[tuple[str, str, str, str], ...] = (
    ("fk_reviews_businessid", "reviews", "businessid", "businesses"),
    ("fk_photos_businessid", "photos", "businessid", "businesses"),
)

# Tables other code refers to but this service does not own.
EXTERNAL_TABLES: tuple[str, ...] = ("users",)


@dataclass
class SchemaReport:
    created_constraints: list[str] = field(default_factory=list)
    missing_tables: list[str] = field(default_factory=list)


async def constraint_exists(name: str) -> bool:
    row = await db.fetch_one(
        """
        SELECT 1 AS ok
        FROM pg_constraint
        WHERE conname = $1
        LIMIT 1
        """,
        name,
    )
    return row is not None


async def table_exists(name: str) -> bool:
    regclass = await db.fetch_value("SELECT to_regclass($1)::text", f"public.{name}")
    return regclass is not None


async def ensure_schema() -> SchemaReport:
    report = SchemaReport()

    for table, ddl in TABLES:
        await db.execute(ddl)
        logger.info("schema_table_ready table=%s", table)

    for ddl in INDEXES:
        await db.execute(ddl)

    for name, table, column, referenced in FOREIGN_KEYS:
        if await constraint_exists(name):
            continue
        await db.execute(
            f"""
            ALTER TABLE {table}
            ADD CONSTRAINT {name}
            FOREIGN KEY ({column}) REFERENCES {referenced} (id) ON DELETE CASCADE
            """
        )
        report.created_constraints.append(name)
        logger.info("schema_constraint_created name=%s", name)

    for table in EXTERNAL_TABLES:
        if not await table_exists(table):
            report.missing_tables.append(table)
            logger.warning(
                "schema_missing_table table=%s ownerid/userid values are not referentially checked",
                table,
            )

    return report
