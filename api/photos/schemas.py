"""
Photo field schema and response models.
"""

from __future__ import annotations

from pydantic import BaseModel

from core.validation import FieldSpec, coercion_model

PHOTO_SCHEMA: dict[str, FieldSpec] = {
    "userid": FieldSpec(required=True, kind=int),
    "businessid": FieldSpec(required=True, kind=int),
    "caption": FieldSpec(required=False),
}

PhotoFields = coercion_model("PhotoFields", PHOTO_SCHEMA)


class Photo(BaseModel):
    id: int
    userid: int
    businessid: int
    caption: str | None = None


class PhotoPage(BaseModel):
    photos: list[Photo]
    page: int
    totalPages: int
    pageSize: int
    count: int
