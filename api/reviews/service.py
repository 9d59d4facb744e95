"""
Business logic for the review resource.

Rules on top of plain CRUD:
- a user may review a given business at most once
- an update may not move a review to another user or business
"""

from __future__ import annotations

from typing import Any

import asyncpg
from fastapi import HTTPException, status

from core import errors, pagination, params, validation

from . import repository, schemas

DUPLICATE_REVIEW_DETAIL = "User has already posted a review of this business"
OWNERSHIP_CHANGE_DETAIL = "Updated review cannot modify businessid or userid"


def _clean_body(payload: Any, *, invalid_detail: str) -> dict[str, Any]:
    try:
        return validation.clean(payload, schemas.REVIEW_SCHEMA, schemas.ReviewFields)
    except validation.ValidationError as exc:
        raise errors.invalid_body(invalid_detail) from exc


def _review_id(raw_id: str) -> int:
    review_id = params.parse_id(raw_id)
    if review_id is None:
        raise errors.not_found("Review")
    return review_id


def _duplicate_review() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=DUPLICATE_REVIEW_DETAIL)


async def has_reviewed(*, user_id: int, business_id: int) -> bool:
    count = await repository.count_reviews_for_pair(user_id=user_id, business_id=business_id)
    return count >= 1


def changes_ownership(stored: dict[str, Any], values: dict[str, Any]) -> bool:
    return (
        int(stored["userid"]) != values["userid"]
        or int(stored["businessid"]) != values["businessid"]
    )


async def list_page(raw_page: str | None) -> schemas.ReviewPage:
    try:
        count = await repository.count_reviews()
        page = pagination.paginate(count, pagination.parse_page(raw_page))
        rows = await repository.list_reviews(limit=page.limit, offset=page.offset)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Error fetching reviews list. Try again later.", exc) from exc

    return schemas.ReviewPage(
        reviews=[schemas.Review(**row) for row in rows],
        **page.metadata(),
    )


async def create(payload: Any) -> int:
    values = _clean_body(payload, invalid_detail="Request body is not a valid review object")
    try:
        if await has_reviewed(user_id=values["userid"], business_id=values["businessid"]):
            raise _duplicate_review()
        return await repository.insert_review(values)
    except asyncpg.UniqueViolationError as exc:
        # Lost a race with a concurrent submission for the same pair.
        raise _duplicate_review() from exc
    except asyncpg.ForeignKeyViolationError as exc:
        raise errors.missing_business() from exc
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Error inserting review into DB.", exc) from exc


async def get(raw_id: str) -> schemas.Review:
    review_id = _review_id(raw_id)
    try:
        row = await repository.get_review(review_id)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to fetch review.", exc) from exc
    if row is None:
        raise errors.not_found("Review")
    return schemas.Review(**row)


async def update(raw_id: str, payload: Any) -> None:
    values = _clean_body(payload, invalid_detail="Request body does not contain a valid review.")
    review_id = _review_id(raw_id)
    try:
        stored = await repository.get_review(review_id)
        if stored is None:
            raise errors.not_found("Review")
        if changes_ownership(stored, values):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=OWNERSHIP_CHANGE_DETAIL)
        updated = await repository.update_review(review_id, values)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to update review.", exc) from exc
    if not updated:
        raise errors.not_found("Review")


async def delete(raw_id: str) -> None:
    review_id = _review_id(raw_id)
    try:
        deleted = await repository.delete_review(review_id)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to delete review.", exc) from exc
    if not deleted:
        raise errors.not_found("Review")
