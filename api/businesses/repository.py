"""
Business persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db

_COLUMNS = """
  id, ownerid, name, address, city, state, zip, phone,
  category, subcategory, website, email
"""


async def count_businesses() -> int:
    return int(await db.fetch_value("SELECT count(*) FROM businesses"))


async def list_businesses(*, limit: int, offset: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM businesses
        ORDER BY id
        LIMIT $1
        OFFSET $2
        """,
        limit,
        offset,
    )


async def insert_business(values: dict[str, Any]) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO businesses (
          ownerid, name, address, city, state, zip, phone,
          category, subcategory, website, email
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
        RETURNING id
        """,
        values["ownerid"],
        values["name"],
        values["address"],
        values["city"],
        values["state"],
        values["zip"],
        values["phone"],
        values["category"],
        values["subcategory"],
        values.get("website"),
        values.get("email"),
    )
    if row is None:
        raise RuntimeError("Failed to insert business.")
    return int(row["id"])


async def get_business(business_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM businesses
        WHERE id = $1
        """,
        business_id,
    )


_WRITABLE = (
    "ownerid", "name", "address", "city", "state", "zip", "phone",
    "category", "subcategory", "website", "email",
)


async def update_business(business_id: int, values: dict[str, Any]) -> bool:
    """
    Write the supplied columns of a business. Returns False when no row matched.
    """
    columns = [column for column in _WRITABLE if column in values]
    row = await db.fetch_one(
        f"""
        UPDATE businesses
        SET {db.assignments(columns, start=2)}
        WHERE id = $1
        RETURNING id
        """,
        business_id,
        *(values[column] for column in columns),
    )
    return row is not None


async def delete_business(business_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM businesses
        WHERE id = $1
        RETURNING id
        """,
        business_id,
    )
    return row is not None


async def list_businesses_by_owner(owner_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM businesses
        WHERE ownerid = $1
        ORDER BY id
        """,
        owner_id,
    )
