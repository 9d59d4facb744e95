"""
Photo persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db


async def count_photos() -> int:
    return int(await db.fetch_value("SELECT count(*) FROM photos"))


async def list_photos(*, limit: int, offset: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, userid, businessid, caption
        FROM photos
        ORDER BY id
        LIMIT $1
        OFFSET $2
        """,
        limit,
        offset,
    )


async def insert_photo(values: dict[str, Any]) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO photos (userid, businessid, caption)
        VALUES ($1, $2, $3)
        RETURNING id
        """,
        values["userid"],
        values["businessid"],
        values.get("caption"),
    )
    if row is None:
        raise RuntimeError("Failed to insert photo.")
    return int(row["id"])


async def get_photo(photo_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, userid, businessid, caption
        FROM photos
        WHERE id = $1
        """,
        photo_id,
    )


_WRITABLE = ("userid", "businessid", "caption")


async def update_photo(photo_id: int, values: dict[str, Any]) -> bool:
    columns = [column for column in _WRITABLE if column in values]
    row = await db.fetch_one(
        f"""
        UPDATE photos
        SET {db.assignments(columns, start=2)}
        WHERE id = $1
        RETURNING id
        """,
        photo_id,
        *(values[column] for column in columns),
    )
    return row is not None


async def delete_photo(photo_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM photos
        WHERE id = $1
        RETURNING id
        """,
        photo_id,
    )
    return row is not None


async def list_photos_for_business(business_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, userid, businessid, caption
        FROM photos
        WHERE businessid = $1
        ORDER BY id
        """,
        business_id,
    )


async def list_photos_for_user(user_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, userid, businessid, caption
        FROM photos
        WHERE userid = $1
        ORDER BY id
        """,
        user_id,
    )
