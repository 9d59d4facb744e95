"""
Read-only views of what a user owns or has posted.

There is no users table; a user is only an id referenced by other rows, so an
unknown (or unparseable) user simply has nothing.
"""

from __future__ import annotations

from businesses import repository as business_repository
from businesses import schemas as business_schemas
from core import errors, params
from photos import repository as photo_repository
from photos import schemas as photo_schemas
from reviews import repository as review_repository
from reviews import schemas as review_schemas


async def businesses_for(raw_user_id: str) -> list[business_schemas.Business]:
    user_id = params.parse_int32(raw_user_id)
    if user_id is None:
        return []
    try:
        rows = await business_repository.list_businesses_by_owner(user_id)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to fetch businesses.", exc) from exc
    return [business_schemas.Business(**row) for row in rows]


async def reviews_for(raw_user_id: str) -> list[review_schemas.Review]:
    user_id = params.parse_int32(raw_user_id)
    if user_id is None:
        return []
    try:
        rows = await review_repository.list_reviews_for_user(user_id)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to fetch reviews.", exc) from exc
    return [review_schemas.Review(**row) for row in rows]


async def photos_for(raw_user_id: str) -> list[photo_schemas.Photo]:
    user_id = params.parse_int32(raw_user_id)
    if user_id is None:
        return []
    try:
        rows = await photo_repository.list_photos_for_user(user_id)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to fetch photos.", exc) from exc
    return [photo_schemas.Photo(**row) for row in rows]
