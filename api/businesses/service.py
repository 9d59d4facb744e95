"""
Business logic for the business resource.
"""

from __future__ import annotations

from typing import Any

from core import errors, pagination, params, validation
from photos import repository as photo_repository
from reviews import repository as review_repository

from . import repository, schemas


def _clean_body(payload: Any, *, invalid_detail: str) -> dict[str, Any]:
    try:
        return validation.clean(payload, schemas.BUSINESS_SCHEMA, schemas.BusinessFields)
    except validation.ValidationError as exc:
        raise errors.invalid_body(invalid_detail) from exc


def _business_id(raw_id: str) -> int:
    business_id = params.parse_id(raw_id)
    if business_id is None:
        raise errors.not_found("Business")
    return business_id


async def list_page(raw_page: str | None) -> schemas.BusinessPage:
    try:
        count = await repository.count_businesses()
        page = pagination.paginate(count, pagination.parse_page(raw_page))
        rows = await repository.list_businesses(limit=page.limit, offset=page.offset)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Error fetching businesses list. Try again later.", exc) from exc

    return schemas.BusinessPage(
        businesses=[schemas.Business(**row) for row in rows],
        **page.metadata(),
    )


async def create(payload: Any) -> int:
    values = _clean_body(payload, invalid_detail="Request body is not a valid business object")
    try:
        return await repository.insert_business(values)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Error inserting business into DB.", exc) from exc


async def get_detail(raw_id: str) -> schemas.BusinessDetail:
    """
    A business together with its reviews and photos.
    """
    business_id = _business_id(raw_id)
    try:
        row = await repository.get_business(business_id)
        if row is None:
            raise errors.not_found("Business")
        reviews = await review_repository.list_reviews_for_business(business_id)
        photos = await photo_repository.list_photos_for_business(business_id)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to fetch business.", exc) from exc

    return schemas.BusinessDetail(**row, reviews=reviews, photos=photos)


async def update(raw_id: str, payload: Any) -> None:
    values = _clean_body(payload, invalid_detail="Request body does not contain a valid business.")
    business_id = _business_id(raw_id)
    try:
        updated = await repository.update_business(business_id, values)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to update business.", exc) from exc
    if not updated:
        raise errors.not_found("Business")


async def delete(raw_id: str) -> None:
    business_id = _business_id(raw_id)
    try:
        deleted = await repository.delete_business(business_id)
    except errors.DB_ERRORS as exc:
        raise errors.database_error("Unable to delete business.", exc) from exc
    if not deleted:
        raise errors.not_found("Business")
