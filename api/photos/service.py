"""
Business logic for the photo resource.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import errors, pagination, params, validation

from . import repository, schemas


def _clean_body(payload: Any, *, invalid_detail: str) -> dict[str, Any]:
    try:
        return validation.clean(payload, schemas.PHOTO_SCHEMA, schemas.PhotoFields)
    except validation.ValidationError as exc:
        raise errors.invalid_body(invalid_detail) from exc


def _photo_id(raw_id: str) -> int:
    photo_id = params.parse_id(raw_id)
    if photo_id is None:
        raise errors.not_found("Photo")
    return photo_id


async def list_page(raw_page: str | None) -> schemas.PhotoPage:
    try:
        count = await repository.count_photos()
        page = pagination.paginate(count, pagination.parse_page(raw_page))
        rows = await repository.list_photos(limit=page.limit, offset=page.offset)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Error fetching photos list. Try again later.", exc) from exc

    return schemas.PhotoPage(
        photos=[schemas.Photo(**row) for row in rows],
        **page.metadata(),
    )


async def create(payload: Any) -> int:
    values = _clean_body(payload, invalid_detail="Request body is not a valid photo object")
    try:
        return await repository.insert_photo(values)
    except asyncpg.ForeignKeyViolationError as exc:
        raise errors.missing_business() from exc
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Error inserting photo into DB.", exc) from exc


async def get(raw_id: str) -> schemas.Photo:
    photo_id = _photo_id(raw_id)
    try:
        row = await repository.get_photo(photo_id)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to fetch photo.", exc) from exc
    if row is None:
        raise errors.not_found("Photo")
    return schemas.Photo(**row)


async def update(raw_id: str, payload: Any) -> None:
    values = _clean_body(payload, invalid_detail="Request body does not contain a valid photo.")
    photo_id = _photo_id(raw_id)
    try:
        updated = await repository.update_photo(photo_id, values)
    except asyncpg.ForeignKeyViolationError as exc:
        raise errors.missing_business() from exc
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to update photo.", exc) from exc
    if not updated:
        raise errors.not_found("Photo")


async def delete(raw_id: str) -> None:
    photo_id = _photo_id(raw_id)
    try:
        deleted = await repository.delete_photo(photo_id)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to delete photo.", exc) from exc
    if not deleted:
        raise errors.not_found("Photo")
