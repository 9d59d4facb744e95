"""
Review persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db


async def count_reviews() -> int:
    return int(await db.fetch_value("SELECT count(*) FROM reviews"))


async def list_reviews(*, limit: int, offset: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, userid, businessid, dollars, stars, review
        FROM reviews
        ORDER BY id
        LIMIT $1
        OFFSET $2
        """,
        limit,
        offset,
    )


async def count_reviews_for_pair(*, user_id: int, business_id: int) -> int:
    return int(
        await db.fetch_value(
            """
            SELECT count(*)
            FROM reviews
            WHERE userid = $1
              AND businessid = $2
            """,
            user_id,
            business_id,
        )
    )


async def insert_review(values: dict[str, Any]) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO reviews (userid, businessid, dollars, stars, review)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING id
        """,
        values["userid"],
        values["businessid"],
        values["dollars"],
        values["stars"],
        values.get("review"),
    )
    if row is None:
        raise RuntimeError("Failed to insert review.")
    return int(row["id"])


async def get_review(review_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, userid, businessid, dollars, stars, review
        FROM reviews
        WHERE id = $1
        """,
        review_id,
    )


_MUTABLE = ("dollars", "stars", "review")


async def update_review(review_id: int, values: dict[str, Any]) -> bool:
    """
    Write the supplied mutable columns of a review. userid/businessid are
    matched, not written, so a row whose ownership differs is not touched.
    """
    columns = [column for column in _MUTABLE if column in values]
    row = await db.fetch_one(
        f"""
        UPDATE reviews
        SET {db.assignments(columns, start=4)}
        WHERE id = $1
          AND userid = $2
          AND businessid = $3
        RETURNING id
        """,
        review_id,
        values["userid"],
        values["businessid"],
        *(values[column] for column in columns),
    )
    return row is not None


async def delete_review(review_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM reviews
        WHERE id = $1
        RETURNING id
        """,
        review_id,
    )
    return row is not None


async def list_reviews_for_business(business_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, userid, businessid, dollars, stars, review
        FROM reviews
        WHERE businessid = $1
        ORDER BY id
        """,
        business_id,
    )


async def list_reviews_for_user(user_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, userid, businessid, dollars, stars, review
        FROM reviews
        WHERE userid = $1
        ORDER BY id
        """,
        user_id,
    )
